"""GET /v1/ledger and GET /v1/savings - dashboard snapshots"""

from fastapi import APIRouter, Depends, Request

from finance_tracker.api.dependencies import get_request_id, get_store
from finance_tracker.api.v1.errors import ledger_errors
from finance_tracker.api.v1.schemas import (
    CardSchema,
    InitialDataResponse,
    SavingsResponse,
    SavingsSchema,
    TransactionSchema,
)
from finance_tracker.infrastructure.database.store import LedgerStore

router = APIRouter()


@router.get("/ledger", response_model=InitialDataResponse)
def get_initial_data(request: Request, store: LedgerStore = Depends(get_store)):
    """
    Everything the dashboard loads on startup.

    Returns:
        Cards by name, transactions most recent first, savings history
    """
    with ledger_errors("initial_data", get_request_id(request)):
        snapshot = store.initial_data()

    return InitialDataResponse(
        cards=[CardSchema.from_domain(c) for c in snapshot.cards],
        transactions=[TransactionSchema.from_domain(t) for t in snapshot.transactions],
        savings=SavingsSchema.from_domain(snapshot.savings),
    )


@router.get("/savings", response_model=SavingsResponse)
def get_savings_history(request: Request, store: LedgerStore = Depends(get_store)):
    """Monthly income, expense and savings, most recent month first"""
    with ledger_errors("savings_history", get_request_id(request)):
        savings = store.savings_history()

    return SavingsResponse(savings=SavingsSchema.from_domain(savings))
