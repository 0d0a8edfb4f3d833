import uuid
from decimal import Decimal
from django.db import models


class Availability(models.TextChoices):
    AVAILABLE = 'available', 'Available'
    BUSY = 'busy', 'Busy'
    UNAVAILABLE = 'unavailable', 'Unavailable'


class Worker(models.Model):
    """
    A hireable professional listed in the catalog.
    Catalog rows are system-owned; end users can only read them.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    title = models.CharField(max_length=150, blank=True)
    category = models.CharField(max_length=50, db_index=True)
    description = models.TextField(blank=True)

    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2)
    rating = models.DecimalField(max_digits=2, decimal_places=1, default=Decimal('4.5'))

    skills = models.JSONField(default=list, blank=True)
    availability = models.CharField(
        max_length=20,
        choices=Availability.choices,
        default=Availability.AVAILABLE,
    )
    location = models.CharField(max_length=150, default='Available Nationwide')
    avatar = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-rating', 'name']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(hourly_rate__gt=0),
                name='catalog_worker_hourly_rate_positive',
            ),
            models.CheckConstraint(
                condition=models.Q(rating__gte=0) & models.Q(rating__lte=5),
                name='catalog_worker_rating_range',
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.category})"
