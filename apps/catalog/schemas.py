"""API Schemas for Catalog app."""
from typing import List
from uuid import UUID
from decimal import Decimal
from datetime import datetime
from ninja import Schema


class WorkerOut(Schema):
    id: UUID
    name: str
    title: str
    category: str
    description: str
    hourly_rate: Decimal
    rating: Decimal
    skills: List[str] = []
    availability: str
    location: str
    avatar: str
    created_at: datetime
