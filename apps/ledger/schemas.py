"""
API Schemas for Ledger app.
Pydantic/Ninja schemas for request/response validation.
"""
from typing import Any, Optional
from uuid import UUID
from decimal import Decimal
from datetime import datetime
from ninja import Schema


# =============================================================================
# Request Schemas
# =============================================================================

class AddFundsIn(Schema):
    """Amount is parsed by the service so malformed input gets a friendly message."""
    amount: Any = None


# =============================================================================
# Response Schemas
# =============================================================================

class BalanceOut(Schema):
    balance: Decimal


class AddFundsOut(Schema):
    message: str
    balance: Decimal


class BalanceEntryOut(Schema):
    id: UUID
    entry_type: str
    amount: Decimal
    balance_after: Decimal
    description: str
    hire_id: Optional[UUID] = None
    created_at: datetime
