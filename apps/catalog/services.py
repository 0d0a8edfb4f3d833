"""
Services for Catalog app.
Read-only access to the worker catalog plus the default seed loader.
"""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q

from apps.core.exceptions import NotFoundError
from .models import Worker
from .dtos import WorkerDTO
from .defaults import DEFAULT_WORKERS

logger = logging.getLogger(__name__)

ALL_CATEGORIES = 'All'


def to_worker_dto(worker: Worker) -> WorkerDTO:
    return WorkerDTO(
        id=worker.id,
        name=worker.name,
        title=worker.title,
        category=worker.category,
        description=worker.description,
        hourly_rate=worker.hourly_rate,
        rating=worker.rating,
        skills=list(worker.skills or []),
        availability=worker.availability,
        location=worker.location,
        avatar=worker.avatar,
        created_at=worker.created_at,
    )


def list_workers(category: Optional[str] = None, search: Optional[str] = None) -> List[WorkerDTO]:
    """
    List workers, best rated first.

    category is an exact match ("All" or empty means no filter). search is a
    case-insensitive substring match on name, description or category.
    """
    queryset = Worker.objects.all()

    if category and category != ALL_CATEGORIES:
        queryset = queryset.filter(category=category)

    search = (search or "").strip()
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search)
            | Q(description__icontains=search)
            | Q(category__icontains=search)
        )

    return [to_worker_dto(w) for w in queryset.order_by('-rating', 'name')]


def list_categories() -> List[str]:
    return list(
        Worker.objects.order_by('category').values_list('category', flat=True).distinct()
    )


def get_worker(worker_id: UUID) -> WorkerDTO:
    try:
        return to_worker_dto(Worker.objects.get(id=worker_id))
    except Worker.DoesNotExist:
        raise NotFoundError("Worker not found.")


def worker_exists(worker_id: UUID) -> bool:
    return Worker.objects.filter(id=worker_id).exists()


@transaction.atomic
def seed_workers(force: bool = False) -> int:
    """
    Load the default catalog.

    Does nothing when workers already exist unless force is set, in which
    case the catalog is replaced. Returns the number of workers created.
    """
    if Worker.objects.exists():
        if not force:
            return 0
        # Hires reference workers, so reseeding also removes existing hires.
        Worker.objects.all().delete()

    Worker.objects.bulk_create([Worker(**data) for data in DEFAULT_WORKERS])
    logger.info(f"Seeded {len(DEFAULT_WORKERS)} workers")
    return len(DEFAULT_WORKERS)
