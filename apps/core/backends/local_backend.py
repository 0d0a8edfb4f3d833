"""
Local Task Backend - In-process execution for development and tests.

Tasks run on a small background thread pool so they never hold up the
request that queued them. With TASK_LOCAL_EAGER=True they run inline
instead, which tests use to assert on their effects.
No Redis or other external services required.

Usage:
    Set TASK_BACKEND=local in your environment.
"""

import uuid
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from django.conf import settings
from django.db import connections

from apps.core.task_service import TaskServiceInterface

logger = logging.getLogger(__name__)


# Task handler registry - maps task names to handler functions
TASK_HANDLERS = {}

_executor: Optional[ThreadPoolExecutor] = None


def register_handler(task_name: str):
    """Decorator to register a task handler."""
    def decorator(func):
        TASK_HANDLERS[task_name] = func
        return func
    return decorator


def get_executor() -> ThreadPoolExecutor:
    """Shared worker pool, created on first use."""
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(
            max_workers=getattr(settings, 'TASK_LOCAL_WORKERS', 4),
            thread_name_prefix='local-task',
        )
    return _executor


def _run_in_background(task_name: str, task_id: str, handler: Callable, payload: Dict[str, Any]):
    try:
        result = handler(**payload)
        logger.info(f"[LOCAL] Task {task_name} (id={task_id}) completed: {result}")
    except Exception as e:
        logger.exception(f"[LOCAL] Task {task_name} (id={task_id}) failed: {e}")
    finally:
        # Worker threads own their DB connections.
        connections.close_all()


class LocalTaskService(TaskServiceInterface):
    """
    Execute tasks in the same process.

    This is ideal for:
    - Local development without Redis
    - Unit testing (with TASK_LOCAL_EAGER=True for immediate execution)

    Background failures are logged; eager failures are raised to the caller.
    """

    def send_task(
        self,
        task_name: str,
        payload: Dict[str, Any],
        delay_seconds: int = 0,
    ) -> str:
        task_id = str(uuid.uuid4())

        if delay_seconds > 0:
            logger.warning(
                f"[LOCAL] delay_seconds={delay_seconds} ignored in local backend"
            )

        handler = TASK_HANDLERS.get(task_name)
        if not handler:
            logger.warning(f"[LOCAL] No handler registered for task: {task_name}")
            return task_id

        if not getattr(settings, 'TASK_LOCAL_EAGER', False):
            logger.info(f"[LOCAL] Submitting task {task_name} (id={task_id})")
            get_executor().submit(_run_in_background, task_name, task_id, handler, payload)
            return task_id

        logger.info(f"[LOCAL] Executing task {task_name} (id={task_id})")
        try:
            result = handler(**payload)
            logger.info(f"[LOCAL] Task {task_name} completed: {result}")
        except Exception as e:
            logger.exception(f"[LOCAL] Task {task_name} failed: {e}")
            raise

        return task_id


# =============================================================================
# Task Handlers - Import and register actual task implementations
# =============================================================================

@register_handler("send_email")
def handle_send_email(to: str, subject: str, html: str):
    """Send a notification email."""
    from apps.notifications.mailer import send_email

    sent = send_email(to=to, subject=subject, html=html)
    return f"Email to {to} {'sent' if sent else 'not sent'}"
