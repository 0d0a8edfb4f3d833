import json
from datetime import timedelta
from unittest import mock

import jwt
from django.conf import settings
from django.db import IntegrityError, transaction
from django.test import TestCase, Client
from django.utils import timezone

from apps.core.exceptions import AuthError, ConflictError, ValidationError
from . import services
from .dtos import RegisterIn
from .jwt_auth import create_access_token, decode_token, get_user_from_token
from .models import User, PasswordResetToken


def register_payload(**overrides):
    data = {
        'username': 'alice',
        'email': 'alice@example.com',
        'password': 'secret1',
    }
    data.update(overrides)
    return data


def expired_token(user):
    issued = timezone.now() - timedelta(days=8)
    payload = {
        'sub': str(user.id),
        'username': user.username,
        'email': user.email,
        'iat': issued,
        'exp': issued + timedelta(days=7),
        'type': 'access',
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm='HS256')


class RegistrationTest(TestCase):
    def test_register_creates_user_with_zero_balance(self):
        result = services.register_user(RegisterIn(**register_payload(name='Alice A', age=30)))

        user = User.objects.get(email='alice@example.com')
        self.assertEqual(result.user.id, user.id)
        self.assertEqual(user.balance, 0)
        self.assertEqual(user.name, 'Alice A')
        self.assertTrue(user.check_password('secret1'))
        self.assertEqual(get_user_from_token(result.token), user)

    def test_register_lowercases_email(self):
        services.register_user(RegisterIn(**register_payload(email='Alice@Example.COM')))
        self.assertTrue(User.objects.filter(email='alice@example.com').exists())

    def test_register_requires_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            services.register_user(RegisterIn(**register_payload(password=None)))
        self.assertEqual(ctx.exception.message, "Username, email, and password are required.")

    def test_register_password_length(self):
        """Five characters are rejected, six are accepted."""
        with self.assertRaises(ValidationError) as ctx:
            services.register_user(RegisterIn(**register_payload(password='12345')))
        self.assertEqual(ctx.exception.message, "Password must be at least 6 characters.")

        services.register_user(RegisterIn(**register_payload(password='123456')))
        self.assertEqual(User.objects.count(), 1)

    def test_register_duplicate_email_or_username(self):
        services.register_user(RegisterIn(**register_payload()))

        with self.assertRaises(ConflictError):
            services.register_user(RegisterIn(**register_payload(username='other')))
        with self.assertRaises(ConflictError):
            services.register_user(RegisterIn(**register_payload(email='other@example.com')))
        with self.assertRaises(ConflictError):
            services.register_user(RegisterIn(**register_payload(email='ALICE@example.com', username='x')))

        self.assertEqual(User.objects.count(), 1)

    def test_register_username_differing_only_in_case(self):
        services.register_user(RegisterIn(**register_payload()))

        with self.assertRaises(ConflictError) as ctx:
            services.register_user(RegisterIn(**register_payload(username='Alice', email='other@example.com')))

        self.assertEqual(ctx.exception.message, "Username or email already exists.")
        self.assertEqual(User.objects.count(), 1)

    def test_username_unique_ignoring_case_in_database(self):
        User.objects.create_user(username='bob', email='bob@example.com', password='secret1')

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                User.objects.create_user(username='BOB', email='bob2@example.com', password='secret1')

    def test_register_case_duplicate_stopped_by_constraint(self):
        services.register_user(RegisterIn(**register_payload()))

        # A concurrent registration that passed the lookup.
        with mock.patch('django.db.models.query.QuerySet.exists', return_value=False):
            with self.assertRaises(ConflictError):
                services.register_user(RegisterIn(**register_payload(username='ALICE', email='a2@example.com')))

        self.assertEqual(User.objects.count(), 1)

    def test_register_rejects_bad_avatar(self):
        with self.assertRaises(ValidationError):
            services.register_user(RegisterIn(**register_payload(avatar='not-an-image')))

    def test_register_rejects_bad_age(self):
        with self.assertRaises(ValidationError):
            services.register_user(RegisterIn(**register_payload(age=0)))


class LoginTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='bob', email='bob@example.com', password='secret1'
        )

    def test_login_returns_token(self):
        result = services.login_user('BOB@example.com', 'secret1')
        self.assertEqual(result.user.email, 'bob@example.com')
        self.assertEqual(decode_token(result.token)['sub'], str(self.user.id))

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_login_failures_share_one_message(self):
        for email, password in (('bob@example.com', 'wrong'), ('nobody@example.com', 'secret1')):
            with self.assertRaises(AuthError) as ctx:
                services.login_user(email, password)
            self.assertEqual(ctx.exception.message, "Invalid email or password.")

    def test_login_inactive_user(self):
        self.user.is_active = False
        self.user.save()
        with self.assertRaises(AuthError):
            services.login_user('bob@example.com', 'secret1')


class TokenTest(TestCase):
    def test_invalid_tokens_resolve_to_nobody(self):
        self.assertIsNone(get_user_from_token('garbage'))
        self.assertIsNone(decode_token('a.b.c'))

    def test_token_of_deleted_user(self):
        user = User.objects.create_user(username='gone', email='gone@example.com', password='secret1')
        token = create_access_token(user)
        user.delete()
        self.assertIsNone(get_user_from_token(token))

    def test_expired_token_resolves_to_nobody(self):
        user = User.objects.create_user(username='late', email='late@example.com', password='secret1')
        token = expired_token(user)
        self.assertIsNone(decode_token(token))
        self.assertIsNone(get_user_from_token(token))


class PasswordTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='carol', email='carol@example.com', password='secret1'
        )

    def test_change_password(self):
        services.change_password(self.user, 'secret1', 'newsecret')
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('newsecret'))

    def test_change_password_wrong_current(self):
        with self.assertRaises(AuthError):
            services.change_password(self.user, 'nope', 'newsecret')

    def test_reset_flow(self):
        message = services.request_password_reset('carol@example.com')
        self.assertEqual(message, services.PASSWORD_RESET_SENT)

        reset = PasswordResetToken.objects.get(user=self.user)
        services.confirm_password_reset(reset.token, 'resetpass')

        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('resetpass'))

        # Tokens are single-use
        with self.assertRaises(ValidationError):
            services.confirm_password_reset(reset.token, 'another1')

    def test_reset_unknown_email_gives_same_answer(self):
        message = services.request_password_reset('nobody@example.com')
        self.assertEqual(message, services.PASSWORD_RESET_SENT)
        self.assertFalse(PasswordResetToken.objects.exists())

    def test_reset_expired_token(self):
        reset = PasswordResetToken.objects.create(
            user=self.user,
            token='expired-token',
            expires_at=timezone.now() - timedelta(minutes=1),
        )
        with self.assertRaises(ValidationError):
            services.confirm_password_reset(reset.token, 'resetpass')


class AuthAPITest(TestCase):
    def setUp(self):
        self.client = Client()

    def post_json(self, url, data, **extra):
        return self.client.post(url, json.dumps(data), content_type='application/json', **extra)

    def test_register_and_me(self):
        response = self.post_json('/api/auth/register', register_payload(name='Alice'))
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertIn('token', data)
        self.assertNotIn('password', data['user'])
        self.assertEqual(data['user']['email'], 'alice@example.com')

        response = self.client.get('/api/auth/me', HTTP_AUTHORIZATION=f"Bearer {data['token']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['username'], 'alice')

    def test_register_duplicate_returns_error(self):
        self.post_json('/api/auth/register', register_payload())
        response = self.post_json('/api/auth/register', register_payload())
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], "Username or email already exists.")

    def test_login_bad_credentials(self):
        response = self.post_json('/api/auth/login', {'email': 'x@example.com', 'password': 'secret1'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], "Invalid email or password.")

    def test_me_requires_token(self):
        self.assertEqual(self.client.get('/api/auth/me').status_code, 401)
        response = self.client.get('/api/auth/me', HTTP_AUTHORIZATION='Bearer nonsense')
        self.assertEqual(response.status_code, 401)

    def test_me_rejects_expired_token(self):
        user = User.objects.create_user(username='late', email='late@example.com', password='secret1')
        response = self.client.get('/api/auth/me', HTTP_AUTHORIZATION=f"Bearer {expired_token(user)}")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['error'], "Unauthorized")

    def test_password_reset_endpoint(self):
        response = self.post_json('/api/auth/password-reset', {'email': 'nobody@example.com'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], services.PASSWORD_RESET_SENT)


class UsersAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.staff = User.objects.create_user(
            username='admin', email='admin@example.com', password='secret1', is_staff=True
        )
        self.member = User.objects.create_user(
            username='member', email='member@example.com', password='secret1'
        )

    def auth(self, user):
        return {'HTTP_AUTHORIZATION': f'Bearer {create_access_token(user)}'}

    def test_staff_can_list_users(self):
        response = self.client.get('/api/users', **self.auth(self.staff))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 2)

    def test_member_cannot_list_users(self):
        response = self.client.get('/api/users', **self.auth(self.member))
        self.assertEqual(response.status_code, 403)

    def test_staff_can_delete_user(self):
        response = self.client.delete(f'/api/users/{self.member.id}', **self.auth(self.staff))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(User.objects.filter(id=self.member.id).exists())

    def test_delete_unknown_user(self):
        response = self.client.delete(
            '/api/users/00000000-0000-0000-0000-000000000000', **self.auth(self.staff)
        )
        self.assertEqual(response.status_code, 404)
