"""
API Router for Hiring app.
All endpoints act on the authenticated user's own hires.
"""
from typing import List
from uuid import UUID
from ninja import Router
from django.http import HttpRequest

from apps.identity.api import require_auth
from apps.identity.jwt_auth import JWTAuth
from .schemas import HireIn, HireResultOut, HireStatusOut, HireOut
from . import services

router = Router(tags=["Hires"], auth=JWTAuth())


@router.post("", response=HireResultOut)
def hire_worker(request: HttpRequest, payload: HireIn):
    """
    Hire a worker. The worker's hourly rate is deducted from the balance.
    """
    user = require_auth(request)
    return services.hire_worker(user.id, payload.worker_id)


@router.get("", response=List[HireOut])
def list_hires(request: HttpRequest):
    user = require_auth(request)
    return services.list_hires(user.id)


@router.patch("/{hire_id}/end", response=HireStatusOut)
def end_hire(request: HttpRequest, hire_id: UUID):
    """Mark a hire as completed."""
    user = require_auth(request)
    return services.end_hire(user.id, hire_id)


@router.patch("/{hire_id}/cancel", response=HireStatusOut)
def cancel_hire(request: HttpRequest, hire_id: UUID):
    """Cancel an active hire and refund its amount."""
    user = require_auth(request)
    return services.cancel_hire(user.id, hire_id)
