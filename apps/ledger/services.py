"""
Core services for Ledger app.
Handles balance reads and every balance mutation.

All mutations are single-statement F() updates so that two concurrent
requests can never read the same balance and both write on top of it.
Charges are conditional on the balance covering the amount, which keeps
the balance non-negative without a read-then-write round trip.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F

from apps.core.exceptions import InsufficientFundsError, NotFoundError, ValidationError
from .models import BalanceEntry, BalanceEntryType
from .dtos import BalanceEntryDTO, FundsResultDTO

logger = logging.getLogger(__name__)

User = get_user_model()

CENT = Decimal('0.01')


def _to_dto(entry: BalanceEntry) -> BalanceEntryDTO:
    return BalanceEntryDTO(
        id=entry.id,
        entry_type=entry.entry_type,
        amount=entry.amount,
        balance_after=entry.balance_after,
        description=entry.description,
        hire_id=entry.hire_id,
        created_at=entry.created_at,
    )


def _current_balance(user_id: UUID) -> Optional[Decimal]:
    return User.objects.filter(id=user_id).values_list('balance', flat=True).first()


def _record_entry(
    user_id: UUID,
    entry_type: str,
    amount: Decimal,
    description: str,
    hire_id: Optional[UUID] = None,
) -> BalanceEntry:
    # Called inside the transaction that just updated the row, so the
    # balance read here is the one this mutation produced.
    return BalanceEntry.objects.create(
        user_id=user_id,
        hire_id=hire_id,
        entry_type=entry_type,
        amount=amount,
        balance_after=_current_balance(user_id),
        description=description,
    )


# =============================================================================
# Balance Reads
# =============================================================================

def get_balance(user_id: UUID) -> Decimal:
    """Get the current balance for a user."""
    balance = _current_balance(user_id)
    if balance is None:
        raise NotFoundError("User not found.")
    return balance


def get_history(user_id: UUID, limit: int = 50) -> List[BalanceEntryDTO]:
    """Get balance entries for a user, newest first."""
    entries = BalanceEntry.objects.filter(user_id=user_id).order_by('-created_at')[:limit]
    return [_to_dto(entry) for entry in entries]


# =============================================================================
# Balance Mutations
# =============================================================================

def credit(
    user_id: UUID,
    amount: Decimal,
    entry_type: str = BalanceEntryType.DEPOSIT,
    hire_id: Optional[UUID] = None,
    description: str = "",
) -> BalanceEntryDTO:
    """
    Atomically increase a user's balance and log the entry.
    """
    with transaction.atomic():
        updated = User.objects.filter(id=user_id).update(balance=F('balance') + amount)
        if not updated:
            raise NotFoundError("User not found.")

        entry = _record_entry(user_id, entry_type, amount, description, hire_id)

    return _to_dto(entry)


def charge(
    user_id: UUID,
    amount: Decimal,
    hire_id: Optional[UUID] = None,
    description: str = "",
) -> BalanceEntryDTO:
    """
    Atomically deduct from a user's balance and log the entry.

    The deduction only happens when balance >= amount. Otherwise raises
    InsufficientFundsError and the balance is left untouched.
    """
    with transaction.atomic():
        updated = User.objects.filter(
            id=user_id,
            balance__gte=amount,
        ).update(balance=F('balance') - amount)

        if not updated:
            available = _current_balance(user_id)
            if available is None:
                raise NotFoundError("User not found.")
            raise InsufficientFundsError(required=amount, available=available)

        entry = _record_entry(
            user_id,
            BalanceEntryType.HIRE_CHARGE,
            -amount,  # Negative for deductions
            description or "Hire charge",
            hire_id,
        )

    return _to_dto(entry)


def refund(
    user_id: UUID,
    amount: Decimal,
    hire_id: Optional[UUID] = None,
    description: str = "",
) -> BalanceEntryDTO:
    """Return a previously charged amount to the user's balance."""
    return credit(
        user_id,
        amount,
        entry_type=BalanceEntryType.REFUND,
        hire_id=hire_id,
        description=description or "Hire refund",
    )


def add_funds(user_id: UUID, amount) -> FundsResultDTO:
    """
    Deposit funds into a user's balance.

    Rejects non-positive amounts and amounts above LEDGER_MAX_DEPOSIT.
    """
    try:
        amount = Decimal(str(amount).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Please enter a valid amount.")

    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Please enter a valid amount.")

    max_deposit = settings.LEDGER_MAX_DEPOSIT
    if amount > max_deposit:
        raise ValidationError(f"Maximum deposit is ${max_deposit.normalize():,f} at a time.")

    amount = amount.quantize(CENT)
    if amount <= 0:
        raise ValidationError("Please enter a valid amount.")

    entry = credit(user_id, amount, description="Funds added")
    logger.info(f"Added {amount} to user {user_id}; balance {entry.balance_after}")

    return FundsResultDTO(
        message=f"${amount:.2f} added to your account!",
        balance=entry.balance_after,
    )
