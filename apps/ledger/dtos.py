"""DTOs for Ledger app - Data Transfer Objects for cross-app communication."""
from dataclasses import dataclass
from typing import Optional
from uuid import UUID
from decimal import Decimal
from datetime import datetime


@dataclass(frozen=True)
class BalanceEntryDTO:
    """A single balance change."""
    id: UUID
    entry_type: str
    amount: Decimal
    balance_after: Decimal
    description: str
    hire_id: Optional[UUID]
    created_at: datetime


@dataclass(frozen=True)
class FundsResultDTO:
    """Result of an add-funds request."""
    message: str
    balance: Decimal
