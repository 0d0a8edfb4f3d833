"""
Signal receivers that turn account and hire events into emails.

Emails are dispatched once the surrounding transaction commits, through
TaskService. Dispatch errors are logged and never reach the request.
"""
import logging

from django.db import transaction
from django.dispatch import receiver

from apps.core.task_service import TaskService
from apps.identity.signals import user_registered, user_logged_in_via_api, password_reset_requested
from apps.hiring.signals import worker_hired
from . import emails

logger = logging.getLogger(__name__)


def _dispatch(to: str, subject: str, html: str):
    try:
        TaskService.send_email(to=to, subject=subject, html=html)
    except Exception:
        logger.exception(f"Failed to dispatch email to {to}: {subject}")


def queue_email(to: str, subject: str, html: str):
    if not to:
        return
    transaction.on_commit(lambda: _dispatch(to, subject, html))


@receiver(user_registered)
def send_welcome_email(sender, user, **kwargs):
    subject, html = emails.welcome_email(user.display_name)
    queue_email(user.email, subject, html)


@receiver(user_logged_in_via_api)
def send_login_email(sender, user, **kwargs):
    subject, html = emails.login_email(user.display_name)
    queue_email(user.email, subject, html)


@receiver(password_reset_requested)
def send_password_reset_email(sender, user, token, **kwargs):
    subject, html = emails.password_reset_email(user.display_name, token)
    queue_email(user.email, subject, html)


@receiver(worker_hired)
def send_hire_confirmation_email(sender, hire, worker, balance, **kwargs):
    user = hire.user
    subject, html = emails.hire_confirmation_email(
        user.display_name,
        worker.name,
        hire.amount,
        balance,
        hire.id,
    )
    queue_email(user.email, subject, html)
