"""Services for Identity app."""
import logging
import secrets
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from apps.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from apps.core.validators import clean_image_reference
from .models import User, PasswordResetToken
from .dtos import UserDTO, AuthResultDTO, RegisterIn
from .jwt_auth import create_access_token
from .signals import user_registered, user_logged_in_via_api, password_reset_requested

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."
PASSWORD_RESET_SENT = "If an account exists for that email, a reset link has been sent."


def to_user_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        username=user.username,
        name=user.name,
        email=user.email,
        balance=user.balance,
        age=user.age,
        avatar=user.avatar,
        is_staff=user.is_staff,
        date_joined=user.date_joined,
    )


def get_user_dto(user_id) -> UserDTO | None:
    try:
        return to_user_dto(User.objects.get(id=user_id))
    except User.DoesNotExist:
        return None


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def validate_new_password(password: Optional[str]) -> str:
    if not password or len(password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters."
        )
    return password


def _send_signal(signal, **kwargs):
    try:
        signal.send(sender=User, **kwargs)
    except Exception as e:
        logger.error(f"Error handling identity signal: {e}")


# =============================================================================
# Registration & Login
# =============================================================================

def register_user(payload: RegisterIn) -> AuthResultDTO:
    """
    Create an account and issue its first session token.

    Username and email must both be unused (compared case-insensitively).
    """
    username = (payload.username or payload.name or "").strip()
    name = (payload.name or "").strip()
    email = normalize_email(payload.email)

    if not username or not email or not payload.password:
        raise ValidationError("Username, email, and password are required.")

    try:
        validate_email(email)
    except DjangoValidationError:
        raise ValidationError("Please provide a valid email address.")

    validate_new_password(payload.password)

    if payload.age is not None and not 1 <= payload.age <= 150:
        raise ValidationError("Age must be between 1 and 150.")

    avatar = clean_image_reference(payload.avatar, field_label="Avatar")

    if User.objects.filter(Q(email__iexact=email) | Q(username__iexact=username)).exists():
        raise ConflictError("Username or email already exists.")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                email=email,
                password=payload.password,
                name=name,
                age=payload.age,
                avatar=avatar,
            )
    except IntegrityError:
        raise ConflictError("Username or email already exists.")

    logger.info(f"Registered user {user.id} ({user.email})")
    _send_signal(user_registered, user=user)

    return AuthResultDTO(token=create_access_token(user), user=to_user_dto(user))


def login_user(email: Optional[str], password: Optional[str]) -> AuthResultDTO:
    """
    Verify credentials and issue a fresh token.

    Every failure returns the same message so the response never reveals
    whether the email is registered.
    """
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError("Email and password are required.")

    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.is_active or not user.check_password(password):
        raise AuthError(INVALID_CREDENTIALS)

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    _send_signal(user_logged_in_via_api, user=user)

    return AuthResultDTO(token=create_access_token(user), user=to_user_dto(user))


# =============================================================================
# Password Management
# =============================================================================

def change_password(user: User, current_password: str, new_password: str) -> None:
    """Change the password of an authenticated user who knows the current one."""
    if not user.check_password(current_password or ""):
        raise AuthError("Current password is incorrect.")

    validate_new_password(new_password)
    user.set_password(new_password)
    user.save(update_fields=['password'])
    logger.info(f"Password changed for user {user.id}")


def request_password_reset(email: str) -> str:
    """
    Issue a single-use reset token and email it to the account owner.

    The returned message is identical whether or not the account exists.
    """
    user = User.objects.filter(email__iexact=normalize_email(email), is_active=True).first()
    if user is None:
        logger.info("Password reset requested for unknown email")
        return PASSWORD_RESET_SENT

    reset = PasswordResetToken.objects.create(
        user=user,
        token=secrets.token_urlsafe(32),
        expires_at=timezone.now() + timedelta(minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES),
    )
    logger.info(f"Password reset token issued for user {user.id}")
    _send_signal(password_reset_requested, user=user, token=reset.token)

    return PASSWORD_RESET_SENT


@transaction.atomic
def confirm_password_reset(token: str, new_password: str) -> None:
    """Consume a reset token and set the new password."""
    try:
        reset = PasswordResetToken.objects.select_for_update().select_related('user').get(token=token)
    except PasswordResetToken.DoesNotExist:
        raise ValidationError("Invalid or expired reset token.")

    if reset.used_at is not None or reset.expires_at < timezone.now():
        raise ValidationError("Invalid or expired reset token.")

    validate_new_password(new_password)

    user = reset.user
    user.set_password(new_password)
    user.save(update_fields=['password'])

    reset.used_at = timezone.now()
    reset.save(update_fields=['used_at'])
    logger.info(f"Password reset completed for user {user.id}")


# =============================================================================
# Staff User Management
# =============================================================================

def list_users() -> List[UserDTO]:
    return [to_user_dto(u) for u in User.objects.order_by('-date_joined')]


def get_user(user_id: UUID) -> UserDTO:
    dto = get_user_dto(user_id)
    if dto is None:
        raise NotFoundError("User not found.")
    return dto


def delete_user(user_id: UUID) -> None:
    """Hard delete a user. Their hires, posts and ledger entries cascade."""
    deleted, _ = User.objects.filter(id=user_id).delete()
    if not deleted:
        raise NotFoundError("User not found.")
    logger.info(f"Deleted user {user_id}")
