"""DTOs for Catalog app."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID


@dataclass(frozen=True)
class WorkerDTO:
    id: UUID
    name: str
    title: str
    category: str
    description: str
    hourly_rate: Decimal
    rating: Decimal
    availability: str
    location: str
    avatar: str
    created_at: datetime
    skills: List[str] = field(default_factory=list)
