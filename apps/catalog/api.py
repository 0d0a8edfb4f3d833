"""
API Router for Catalog app.
Public, read-only worker listing.
"""
from typing import List, Optional
from uuid import UUID
from ninja import Router
from django.http import HttpRequest

from .schemas import WorkerOut
from . import services

router = Router(tags=["Workers"])


@router.get("", response=List[WorkerOut])
def list_workers(request: HttpRequest, category: Optional[str] = None, search: Optional[str] = None):
    """
    List workers ordered by rating.
    Filter by exact category and/or a case-insensitive search term.
    """
    return services.list_workers(category=category, search=search)


@router.get("/categories", response=List[str])
def list_categories(request: HttpRequest):
    return services.list_categories()


@router.get("/{worker_id}", response=WorkerOut)
def get_worker(request: HttpRequest, worker_id: UUID):
    return services.get_worker(worker_id)
