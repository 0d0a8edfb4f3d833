"""
API Router for Ledger app.
Balance endpoints for the authenticated user. Mounted under /auth/.
"""
from typing import List
from ninja import Router
from django.http import HttpRequest

from apps.identity.api import require_auth
from apps.identity.jwt_auth import JWTAuth
from .schemas import AddFundsIn, AddFundsOut, BalanceOut, BalanceEntryOut
from . import services

router = Router(tags=["Balance"], auth=JWTAuth())


@router.get("/balance", response=BalanceOut)
def get_balance(request: HttpRequest):
    """Get the current user's balance."""
    user = require_auth(request)
    return {"balance": services.get_balance(user.id)}


@router.post("/add-funds", response=AddFundsOut)
def add_funds(request: HttpRequest, payload: AddFundsIn):
    """
    Deposit funds into the current user's balance.
    A single deposit must be positive and at most LEDGER_MAX_DEPOSIT.
    """
    user = require_auth(request)
    return services.add_funds(user.id, payload.amount)


@router.get("/balance/history", response=List[BalanceEntryOut])
def get_balance_history(request: HttpRequest, limit: int = 50):
    """List the current user's balance changes, newest first."""
    user = require_auth(request)
    return services.get_history(user.id, limit=min(max(limit, 1), 200))
