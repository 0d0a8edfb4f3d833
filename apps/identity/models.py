import uuid
from decimal import Decimal
from django.db import models
from django.db.models.functions import Lower
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    Marketplace account. Carries the spendable balance used to hire workers.

    The balance is only ever changed through apps.ledger.services, which
    applies single-statement F() updates.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=100, blank=True)
    age = models.PositiveSmallIntegerField(null=True, blank=True)
    avatar = models.TextField(blank=True)
    balance = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
    )

    class Meta:
        ordering = ['username']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name='identity_user_balance_non_negative',
            ),
            models.UniqueConstraint(
                Lower('username'),
                name='identity_user_username_ci_unique',
            ),
        ]

    def __str__(self):
        return self.email or self.username

    @property
    def display_name(self) -> str:
        return self.name or self.username


class PasswordResetToken(models.Model):
    """
    Single-use token emailed to the account owner to reset a password.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='password_reset_tokens')

    token = models.CharField(max_length=255, unique=True, db_index=True)
    expires_at = models.DateTimeField()
    used_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        state = "used" if self.used_at else "pending"
        return f"Password reset for {self.user} ({state})"
