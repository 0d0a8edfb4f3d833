"""
JWT Authentication utilities for HireWork.

Provides token generation and validation, plus the django-ninja bearer
authenticator that turns an ``Authorization: Bearer <token>`` header into
the requesting User.
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from django.conf import settings
from django.http import HttpRequest
from ninja.security import HttpBearer

from .models import User


JWT_ALGORITHM = 'HS256'


def _secret() -> str:
    return settings.JWT_SECRET


def create_access_token(user: User) -> str:
    """
    Create a session token for a user.

    Contains user id, username and email. Expires after JWT_EXPIRE_DAYS
    (7 days by default).
    """
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user.id),
        'username': user.username,
        'email': user.email,
        'iat': now,
        'exp': now + timedelta(days=settings.JWT_EXPIRE_DAYS),
        'type': 'access',
    }
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[UUID]:
    """
    Extract user_id from a valid access token.

    Returns:
        UUID of user if token valid, None otherwise.
    """
    payload = decode_token(token)
    if payload and payload.get('type') == 'access' and 'sub' in payload:
        try:
            return UUID(payload['sub'])
        except ValueError:
            return None
    return None


def get_user_from_token(token: str) -> Optional[User]:
    user_id = get_user_id_from_token(token)
    if not user_id:
        return None
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        return None


def get_bearer_token(request: HttpRequest) -> Optional[str]:
    """Read the raw token from an ``Authorization: Bearer`` header, if any."""
    header = request.headers.get('Authorization', '')
    parts = header.split(' ')
    if len(parts) != 2 or parts[0].lower() != 'bearer' or not parts[1]:
        return None
    return parts[1]


class JWTAuth(HttpBearer):
    """
    Bearer authenticator for django-ninja routers.

    The authenticated User is available as ``request.auth``.
    A missing or invalid token makes ninja answer 401.
    """

    def authenticate(self, request: HttpRequest, token: str) -> Optional[User]:
        return get_user_from_token(token)
