"""
Email content builders.
Each returns (subject, html). Interpolated values are HTML-escaped.
"""
from decimal import Decimal
from typing import Tuple

from django.conf import settings
from django.utils import timezone
from django.utils.html import escape

_WRAPPER = (
    '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">'
    '{body}'
    '</div>'
)
_SIGNATURE = '<br><p>Best regards,<br><strong>HireWork Team</strong></p>'


def _greeting_name(name: str) -> str:
    return escape(name or 'there')


def welcome_email(name: str) -> Tuple[str, str]:
    body = (
        f'<h2>Welcome to HireWork, {_greeting_name(name)}!</h2>'
        '<p>Your account was created successfully.</p>'
        '<p>You can now log in and hire workers from the platform.</p>'
        f'{_SIGNATURE}'
    )
    return 'Welcome to HireWork', _WRAPPER.format(body=body)


def login_email(name: str) -> Tuple[str, str]:
    when = timezone.now().strftime('%a, %d %b %Y %H:%M:%S UTC')
    body = (
        f'<h2>Hi {_greeting_name(name)},</h2>'
        '<p>We noticed a login to your account.</p>'
        f'<p>Time: {when}</p>'
        '<p>If this was not you, please change your password immediately.</p>'
        f'{_SIGNATURE}'
    )
    return 'New login to your HireWork account', _WRAPPER.format(body=body)


def hire_confirmation_email(name: str, worker_name: str, amount: Decimal, balance: Decimal, hire_id) -> Tuple[str, str]:
    body = (
        f'<h2>Hi {_greeting_name(name)},</h2>'
        '<p>Your hire request was completed successfully.</p>'
        f'<p><strong>Worker:</strong> {escape(worker_name)}</p>'
        f'<p><strong>Amount charged:</strong> ${amount:.2f}</p>'
        f'<p><strong>Remaining balance:</strong> ${balance:.2f}</p>'
        f'<p><strong>Hire ID:</strong> {escape(str(hire_id))}</p>'
        '<br><p>Thank you for using HireWork.</p>'
    )
    return f'Hire confirmed: {worker_name}', _WRAPPER.format(body=body)


def password_reset_email(name: str, token: str) -> Tuple[str, str]:
    link = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"
    body = (
        f'<h2>Hi {_greeting_name(name)},</h2>'
        '<p>We received a request to reset your password.</p>'
        f'<p><a href="{escape(link)}">Reset your password</a></p>'
        f'<p>This link expires in {settings.PASSWORD_RESET_TOKEN_TTL_MINUTES} minutes. '
        'If you did not ask for it, you can ignore this email.</p>'
        f'{_SIGNATURE}'
    )
    return 'Reset your HireWork password', _WRAPPER.format(body=body)
