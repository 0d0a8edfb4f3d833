"""
Outbound email delivery.

With the SMTP backend, delivery walks an ordered list of connection
attempts: the configured host and port first, then (for Gmail on
465/SSL) port 587 with STARTTLS. It moves on only after a connection-level
failure; any other error ends delivery. Failures are logged and never
raised to the caller.
"""
import errno
import logging
import re
import smtplib
import socket
from dataclasses import dataclass
from typing import List, Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)

SMTP_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
GMAIL_HOST_PATTERN = re.compile(r'(^|\.)gmail\.com$', re.IGNORECASE)

RETRYABLE_ERRNOS = {
    errno.ETIMEDOUT,
    errno.ECONNREFUSED,
    errno.ECONNRESET,
    errno.ENETUNREACH,
    errno.EHOSTUNREACH,
}


@dataclass(frozen=True)
class SmtpAttempt:
    label: str
    host: str
    port: int
    use_ssl: bool
    use_tls: bool


def is_gmail_host(host: str) -> bool:
    return bool(GMAIL_HOST_PATTERN.search(host or ""))


def is_retryable_error(error: Exception) -> bool:
    """True for connection-level failures worth retrying on another endpoint."""
    if isinstance(error, (TimeoutError, smtplib.SMTPServerDisconnected, smtplib.SMTPConnectError)):
        return True
    if isinstance(error, socket.gaierror):
        return error.errno == socket.EAI_AGAIN
    if isinstance(error, OSError) and error.errno in RETRYABLE_ERRNOS:
        return True

    message = str(error).lower()
    return 'timed out' in message or 'timeout' in message or 'unreachable' in message


def get_smtp_attempts() -> List[SmtpAttempt]:
    host = settings.EMAIL_HOST
    port = settings.EMAIL_PORT
    use_ssl = settings.EMAIL_USE_SSL

    attempts = [
        SmtpAttempt(
            label=f"{host}:{port} ({'SSL/TLS' if use_ssl else 'STARTTLS'})",
            host=host,
            port=port,
            use_ssl=use_ssl,
            use_tls=settings.EMAIL_USE_TLS and not use_ssl,
        )
    ]

    if (
        settings.SMTP_ENABLE_GMAIL_PORT_FALLBACK
        and is_gmail_host(host)
        and port == 465
        and use_ssl
    ):
        attempts.append(
            SmtpAttempt(
                label=f"{host}:587 (STARTTLS fallback)",
                host=host,
                port=587,
                use_ssl=False,
                use_tls=True,
            )
        )

    return attempts


def _connection_for(attempt: Optional[SmtpAttempt]):
    if attempt is None:
        return get_connection(fail_silently=False)

    return get_connection(
        backend=SMTP_BACKEND,
        fail_silently=False,
        host=attempt.host,
        port=attempt.port,
        username=settings.EMAIL_HOST_USER,
        password=settings.EMAIL_HOST_PASSWORD,
        use_ssl=attempt.use_ssl,
        use_tls=attempt.use_tls,
        timeout=settings.EMAIL_TIMEOUT,
    )


def send_email(to: str, subject: str, html: str) -> bool:
    """
    Send an HTML email with a plain-text alternative.

    Returns True when the message was handed to the transport. Never raises.
    """
    uses_smtp = settings.EMAIL_BACKEND == SMTP_BACKEND

    if uses_smtp and not (settings.EMAIL_HOST_USER and settings.EMAIL_HOST_PASSWORD):
        logger.warning("Email skipped: SMTP_USER and SMTP_PASS must be configured.")
        return False

    # Non-SMTP backends (console, locmem) get one attempt with their own settings.
    attempts = get_smtp_attempts() if uses_smtp else [None]
    last_error = None

    for index, attempt in enumerate(attempts, start=1):
        label = attempt.label if attempt else settings.EMAIL_BACKEND
        try:
            message = EmailMultiAlternatives(
                subject=subject,
                body=strip_tags(html).strip(),
                from_email=settings.DEFAULT_FROM_EMAIL,
                to=[to],
                connection=_connection_for(attempt),
            )
            message.attach_alternative(html, "text/html")
            message.send()
            logger.info(f"Email sent to {to}: {subject} via {label}")
            return True
        except Exception as e:
            last_error = e
            logger.warning(f"SMTP attempt {index}/{len(attempts)} failed for {to} via {label}: {e}")
            if not is_retryable_error(e):
                break

    logger.error(f"Failed to send email to {to}: {last_error}")
    return False
