"""DTOs for Identity app."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import Optional


@dataclass(frozen=True)
class UserDTO:
    """Public projection of a user. Never carries the password hash."""
    id: UUID
    username: str
    name: str
    email: str
    balance: Decimal
    age: Optional[int]
    avatar: str
    is_staff: bool
    date_joined: datetime


@dataclass(frozen=True)
class AuthResultDTO:
    token: str
    user: UserDTO


from ninja import Schema


class RegisterIn(Schema):
    username: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    age: Optional[int] = None
    avatar: Optional[str] = None


class LoginIn(Schema):
    email: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordIn(Schema):
    current_password: str
    new_password: str


class PasswordResetRequestIn(Schema):
    email: str


class PasswordResetConfirmIn(Schema):
    token: str
    new_password: str


class UserOut(Schema):
    id: UUID
    username: str
    name: str
    email: str
    balance: Decimal
    age: Optional[int] = None
    avatar: str = ""


class AuthOut(Schema):
    token: str
    user: UserOut


class AdminUserOut(UserOut):
    is_staff: bool
    date_joined: datetime


class MessageOut(Schema):
    message: str
