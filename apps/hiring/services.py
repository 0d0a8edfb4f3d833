"""
Services for Hiring app.

The hire flow runs in one transaction: duplicate check, conditional balance
charge, then the insert. A concurrent duplicate that passes the check is
stopped by the partial unique constraint and the whole transaction,
charge included, rolls back.
"""
import logging
import uuid
from typing import List
from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.core.exceptions import ConflictError, NotFoundError
from apps.catalog import services as catalog_services
from apps.ledger import services as ledger_services
from .models import Hire, HireStatus
from .dtos import HireDTO, HireResultDTO, HireStatusDTO
from .signals import worker_hired

logger = logging.getLogger(__name__)

ALREADY_HIRED = "You have already hired this worker."


def to_hire_dto(hire: Hire) -> HireDTO:
    worker = hire.worker
    return HireDTO(
        id=hire.id,
        worker_id=worker.id,
        name=worker.name,
        category=worker.category,
        hourly_rate=worker.hourly_rate,
        rating=worker.rating,
        location=worker.location,
        status=hire.status,
        amount=hire.amount,
        created_at=hire.created_at,
        ended_at=hire.ended_at,
    )


def _get_owned_hire_for_update(user_id: UUID, hire_id: UUID) -> Hire:
    # Hires of other users are reported as missing.
    try:
        return Hire.objects.select_for_update().get(id=hire_id, user_id=user_id)
    except Hire.DoesNotExist:
        raise NotFoundError("Hire not found.")


# =============================================================================
# Hire Lifecycle
# =============================================================================

def hire_worker(user_id: UUID, worker_id: UUID) -> HireResultDTO:
    """
    Hire a worker, charging their hourly rate to the user's balance.

    Raises NotFoundError for an unknown worker, ConflictError when an active
    hire already exists and InsufficientFundsError when the balance does not
    cover the rate. The balance is untouched on every failure.
    """
    worker = catalog_services.get_worker(worker_id)

    try:
        with transaction.atomic():
            if Hire.objects.filter(
                user_id=user_id, worker_id=worker.id, status=HireStatus.ACTIVE
            ).exists():
                raise ConflictError(ALREADY_HIRED)

            hire_id = uuid.uuid4()
            entry = ledger_services.charge(
                user_id,
                worker.hourly_rate,
                hire_id=hire_id,
                description=f"Hired {worker.name}",
            )
            hire = Hire.objects.create(
                id=hire_id,
                user_id=user_id,
                worker_id=worker.id,
                amount=worker.hourly_rate,
            )
    except IntegrityError:
        # Only a concurrent active hire for the same pair is a conflict.
        active = Hire.objects.filter(
            user_id=user_id, worker_id=worker.id, status=HireStatus.ACTIVE
        ).values_list('id', flat=True).first()
        if active is not None:
            raise ConflictError(ALREADY_HIRED)
        if not catalog_services.worker_exists(worker.id):
            raise NotFoundError("Worker not found.")
        raise

    logger.info(f"User {user_id} hired worker {worker.id} for {worker.hourly_rate}")

    try:
        worker_hired.send(sender=Hire, hire=hire, worker=worker, balance=entry.balance_after)
    except Exception as e:
        logger.error(f"Error handling worker_hired signal: {e}")

    return HireResultDTO(
        message=f"Successfully hired {worker.name}! ${worker.hourly_rate:.2f} deducted.",
        hire_id=hire.id,
        balance=entry.balance_after,
    )


@transaction.atomic
def end_hire(user_id: UUID, hire_id: UUID) -> HireStatusDTO:
    """
    Mark an active hire as completed.
    Ending a hire that is already completed or cancelled changes nothing.
    """
    hire = _get_owned_hire_for_update(user_id, hire_id)

    if hire.is_terminal:
        return HireStatusDTO(message=f"Hire is already {hire.status}.", status=hire.status)

    hire.status = HireStatus.COMPLETED
    hire.ended_at = timezone.now()
    hire.save(update_fields=['status', 'ended_at'])
    logger.info(f"Hire {hire.id} completed")

    return HireStatusDTO(message="Hire ended successfully.", status=hire.status)


@transaction.atomic
def cancel_hire(user_id: UUID, hire_id: UUID) -> HireStatusDTO:
    """
    Cancel an active hire and refund the amount charged for it.

    Cancelling an already cancelled hire changes nothing. Completed hires
    cannot be cancelled.
    """
    hire = _get_owned_hire_for_update(user_id, hire_id)

    if hire.status == HireStatus.CANCELLED:
        return HireStatusDTO(
            message="Hire is already cancelled.",
            status=hire.status,
            balance=ledger_services.get_balance(user_id),
        )
    if hire.status == HireStatus.COMPLETED:
        raise ConflictError("Completed hires cannot be cancelled.")

    hire.status = HireStatus.CANCELLED
    hire.ended_at = timezone.now()
    hire.save(update_fields=['status', 'ended_at'])

    entry = ledger_services.refund(
        user_id,
        hire.amount,
        hire_id=hire.id,
        description="Hire cancelled",
    )
    logger.info(f"Hire {hire.id} cancelled; refunded {hire.amount}")

    return HireStatusDTO(
        message=f"Hire cancelled. ${hire.amount:.2f} refunded.",
        status=hire.status,
        balance=entry.balance_after,
    )


def list_hires(user_id: UUID) -> List[HireDTO]:
    """All hires of a user, newest first."""
    hires = Hire.objects.filter(user_id=user_id).select_related('worker').order_by('-created_at')
    return [to_hire_dto(h) for h in hires]
