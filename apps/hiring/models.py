import uuid
from django.conf import settings
from django.db import models


class HireStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


class Hire(models.Model):
    """
    A user's engagement of a worker.

    ``amount`` is the worker's hourly rate at hire time and does not follow
    later rate changes. A user can hold at most one active hire per worker.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='hires',
    )
    worker = models.ForeignKey(
        'catalog.Worker',
        on_delete=models.CASCADE,
        related_name='hires',
    )

    status = models.CharField(
        max_length=20,
        choices=HireStatus.choices,
        default=HireStatus.ACTIVE,
        db_index=True,
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)
    ended_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'worker'],
                condition=models.Q(status='active'),
                name='hiring_one_active_hire_per_worker',
            ),
        ]

    def __str__(self):
        return f"{self.user} -> {self.worker} ({self.status})"

    @property
    def is_terminal(self) -> bool:
        return self.status != HireStatus.ACTIVE
