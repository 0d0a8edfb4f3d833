"""
Integration tests for post API endpoints.
"""
import json
from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.identity.jwt_auth import create_access_token
from apps.feed.models import Post


User = get_user_model()


class PostAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.alice = User.objects.create_user(
            username='alice', email='alice@example.com', password='secret1'
        )
        self.bob = User.objects.create_user(
            username='bob', email='bob@example.com', password='secret1'
        )

    def auth(self, user):
        return {'HTTP_AUTHORIZATION': f'Bearer {create_access_token(user)}'}

    def post_json(self, url, data, user):
        return self.client.post(url, json.dumps(data), content_type='application/json', **self.auth(user))

    def test_create_and_list(self):
        response = self.post_json('/api/posts', {'content': 'Need a mover', 'category': 'Moving'}, self.alice)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['category'], 'Moving')

        response = self.client.get('/api/posts')
        self.assertEqual(response.status_code, 200)
        posts = response.json()
        self.assertEqual(len(posts), 1)
        self.assertFalse(posts[0]['can_delete'])

        response = self.client.get('/api/posts', **self.auth(self.alice))
        self.assertTrue(response.json()[0]['can_delete'])

    def test_create_requires_auth(self):
        response = self.client.post('/api/posts', json.dumps({'content': 'x'}), content_type='application/json')
        self.assertEqual(response.status_code, 401)

    def test_create_empty_content(self):
        response = self.post_json('/api/posts', {'content': '  '}, self.alice)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], "Post content is required")

    def test_like_and_comment(self):
        post_id = self.post_json('/api/posts', {'content': 'hello'}, self.alice).json()['id']

        response = self.client.patch(f'/api/posts/{post_id}/like', **self.auth(self.bob))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'liked': True, 'likes_count': 1})

        response = self.post_json(f'/api/posts/{post_id}/comments', {'text': 'hi'}, self.bob)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['author'], 'bob')

    def test_delete_by_non_owner(self):
        post_id = self.post_json('/api/posts', {'content': 'hello'}, self.alice).json()['id']

        response = self.client.delete(f'/api/posts/{post_id}', **self.auth(self.bob))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['error'], "Not authorized.")

        response = self.client.delete(f'/api/posts/{post_id}', **self.auth(self.alice))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], "Post deleted.")
        self.assertFalse(Post.objects.exists())

    def test_delete_unknown_post(self):
        response = self.client.delete(
            '/api/posts/00000000-0000-0000-0000-000000000000', **self.auth(self.alice)
        )
        self.assertEqual(response.status_code, 404)
