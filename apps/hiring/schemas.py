"""API Schemas for Hiring app."""
from typing import Optional
from uuid import UUID
from decimal import Decimal
from datetime import datetime
from ninja import Schema


class HireIn(Schema):
    worker_id: UUID


class HireResultOut(Schema):
    message: str
    hire_id: UUID
    balance: Decimal


class HireStatusOut(Schema):
    message: str
    status: str
    balance: Optional[Decimal] = None


class HireOut(Schema):
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
    ended_at: Optional[datetime] = None
