"""
Celery tasks for Notifications app.
"""
import logging
from celery import shared_task

from .mailer import send_email

logger = logging.getLogger(__name__)


@shared_task(name='apps.notifications.tasks.send_email_task')
def send_email_task(to: str, subject: str, html: str):
    """Deliver a notification email from a Celery worker."""
    sent = send_email(to=to, subject=subject, html=html)
    return f"Email to {to} {'sent' if sent else 'not sent'}"
