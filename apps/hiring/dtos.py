"""DTOs for Hiring app."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class HireResultDTO:
    message: str
    hire_id: UUID
    balance: Decimal


@dataclass(frozen=True)
class HireStatusDTO:
    """Outcome of ending or cancelling a hire."""
    message: str
    status: str
    balance: Optional[Decimal] = None


@dataclass(frozen=True)
class HireDTO:
    """A hire joined with the fields of its worker."""
    id: UUID
    worker_id: UUID
    name: str
    category: str
    hourly_rate: Decimal
    rating: Decimal
    location: str
    status: str
    amount: Decimal
    created_at: datetime
    ended_at: Optional[datetime]
