"""
TaskService - Abstraction layer for background task execution.

This module provides a platform-agnostic interface for fire-and-forget work
(notification emails) that must never hold up or fail a request.
The actual backend is determined by the TASK_BACKEND setting.

Usage:
    from apps.core.task_service import TaskService

    TaskService.send_email(to="user@example.com", subject="Hi", html="<p>Hi</p>")

Environment Configuration:
    TASK_BACKEND=local   # In-process execution (development, tests)
    TASK_BACKEND=celery  # Celery + Redis (production)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

from django.conf import settings

logger = logging.getLogger(__name__)


class TaskServiceInterface(ABC):
    """
    Abstract interface for background task execution.

    Implementations:
    - LocalTaskService: In-process execution for development/testing
    - CeleryTaskService: Celery + Redis for production
    """

    @abstractmethod
    def send_task(
        self,
        task_name: str,
        payload: Dict[str, Any],
        delay_seconds: int = 0,
    ) -> str:
        """
        Queue a task for execution.

        Args:
            task_name: Identifier for the task handler
            payload: Data to pass to the task
            delay_seconds: Delay before execution (0 = immediate)

        Returns:
            Task ID for tracking
        """
        pass


def _get_backend() -> TaskServiceInterface:
    """Get the configured task backend based on the TASK_BACKEND setting."""
    backend = getattr(settings, 'TASK_BACKEND', 'local')

    if backend == 'local':
        from apps.core.backends.local_backend import LocalTaskService
        return LocalTaskService()
    elif backend == 'celery':
        from apps.core.backends.celery_backend import CeleryTaskService
        return CeleryTaskService()
    else:
        raise ValueError(f"Unknown TASK_BACKEND: {backend}")


class TaskService:
    """
    Facade for sending background tasks.

    This class provides static methods for each task type,
    delegating to the configured backend.
    """

    @staticmethod
    def send_email(to: str, subject: str, html: str) -> str:
        """
        Queue a notification email.

        Used by: Notifications app (welcome, login notice, hire confirmation,
        password reset).
        """
        logger.info(f"Queueing send_email task to {to}: {subject}")
        return _get_backend().send_task(
            task_name="send_email",
            payload={"to": to, "subject": subject, "html": html},
        )
