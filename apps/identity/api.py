"""
Identity API endpoints with JWT bearer authentication.

Provides registration, login, password management, and staff user
management endpoints. Tokens are returned in the response body and sent
back by clients in the ``Authorization: Bearer`` header.
"""
from typing import List, Optional
from uuid import UUID
from ninja import Router
from django.http import HttpRequest

from apps.core.exceptions import ForbiddenError
from .models import User
from .dtos import (
    RegisterIn, LoginIn, ChangePasswordIn, PasswordResetRequestIn, PasswordResetConfirmIn,
    AuthOut, UserOut, AdminUserOut, MessageOut,
)
from . import services
from .jwt_auth import JWTAuth, get_bearer_token, get_user_from_token

router = Router(tags=["Auth"], auth=JWTAuth())
users_router = Router(tags=["Users"], auth=JWTAuth())


# =============================================================================
# Helper Functions
# =============================================================================

def get_current_user(request: HttpRequest) -> Optional[User]:
    """
    Resolve the user behind an optional bearer token.

    Used by public endpoints whose output depends on who is asking.
    Returns None for anonymous or invalid tokens.
    """
    token = get_bearer_token(request)
    if not token:
        return None
    return get_user_from_token(token)


def require_auth(request: HttpRequest) -> User:
    """Return the user authenticated by the router's JWTAuth."""
    return request.auth


def require_staff(request: HttpRequest) -> User:
    user = require_auth(request)
    if not user.is_staff:
        raise ForbiddenError("Staff access required.")
    return user


# =============================================================================
# Auth Endpoints
# =============================================================================

@router.post("/register", response=AuthOut, auth=None)
def register(request: HttpRequest, payload: RegisterIn):
    """Create an account. Returns a session token and the public user profile."""
    return services.register_user(payload)


@router.post("/login", response=AuthOut, auth=None)
def login(request: HttpRequest, payload: LoginIn):
    """Authenticate with email and password. Returns a fresh session token."""
    return services.login_user(payload.email, payload.password)


@router.get("/me", response=UserOut)
def get_me(request: HttpRequest):
    """Get current authenticated user's profile."""
    return services.get_user(require_auth(request).id)


@router.post("/change-password", response=MessageOut)
def change_password(request: HttpRequest, payload: ChangePasswordIn):
    """Change password. Requires the current password."""
    services.change_password(require_auth(request), payload.current_password, payload.new_password)
    return {"message": "Password changed successfully!"}


@router.post("/password-reset", response=MessageOut, auth=None)
def request_password_reset(request: HttpRequest, payload: PasswordResetRequestIn):
    """Email a single-use reset token. The response never reveals whether the account exists."""
    return {"message": services.request_password_reset(payload.email)}


@router.post("/password-reset/confirm", response=MessageOut, auth=None)
def confirm_password_reset(request: HttpRequest, payload: PasswordResetConfirmIn):
    services.confirm_password_reset(payload.token, payload.new_password)
    return {"message": "Password changed successfully!"}


# =============================================================================
# Staff User Management Endpoints
# =============================================================================

@users_router.get("", response=List[AdminUserOut])
def list_users(request: HttpRequest):
    """List all users. Staff only."""
    require_staff(request)
    return services.list_users()


@users_router.get("/{user_id}", response=AdminUserOut)
def get_user(request: HttpRequest, user_id: UUID):
    require_staff(request)
    return services.get_user(user_id)


@users_router.delete("/{user_id}", response=MessageOut)
def delete_user(request: HttpRequest, user_id: UUID):
    """Hard delete a user. Staff only."""
    require_staff(request)
    services.delete_user(user_id)
    return {"message": "User deleted successfully"}
