"""/v1/transactions - income and expense entries"""

import time
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Request

from finance_tracker.api.dependencies import get_request_id, get_store
from finance_tracker.api.v1.errors import ledger_errors
from finance_tracker.api.v1.schemas import (
    LedgerChangeResponse,
    SavingsSchema,
    TransactionCreateRequest,
    TransactionSchema,
    TransactionsResponse,
    TransactionUpdateRequest,
)
from finance_tracker.domain.models import Transaction, TransactionDraft, TransactionUpdate
from finance_tracker.domain.money import to_cents
from finance_tracker.domain.savings import aggregate_savings
from finance_tracker.infrastructure.database.store import LedgerStore
from finance_tracker.infrastructure.observability.logging import log_ledger_change
from finance_tracker.infrastructure.observability.metrics import record_operation

router = APIRouter()


def _change_response(transactions: List[Transaction]) -> LedgerChangeResponse:
    # Savings are derived from the same snapshot the caller receives
    return LedgerChangeResponse(
        transactions=[TransactionSchema.from_domain(t) for t in transactions],
        savings=SavingsSchema.from_domain(aggregate_savings(transactions)),
    )


@router.get("/transactions", response_model=TransactionsResponse)
def list_transactions(request: Request, store: LedgerStore = Depends(get_store)):
    """All transactions, most recent date first"""
    with ledger_errors("list_transactions", get_request_id(request)):
        transactions = store.all_transactions()

    return TransactionsResponse(transactions=[TransactionSchema.from_domain(t) for t in transactions])


@router.get("/transactions/by-month", response_model=TransactionsResponse)
def list_transactions_by_month(
    request: Request,
    year: int = Query(..., ge=1, le=9999, description="Calendar year"),
    month: int = Query(..., ge=1, le=12, description="Calendar month (1-12)"),
    store: LedgerStore = Depends(get_store),
):
    """
    Transactions dated within one calendar month.

    Returns:
        Entries ordered by date, then installment number
    """
    with ledger_errors("transactions_by_month", get_request_id(request)):
        transactions = store.transactions_by_month(year, month)

    return TransactionsResponse(transactions=[TransactionSchema.from_domain(t) for t in transactions])


@router.post("/transactions", response_model=LedgerChangeResponse, status_code=201)
def add_transaction(
    request_body: TransactionCreateRequest,
    request: Request,
    store: LedgerStore = Depends(get_store),
):
    """
    Record an income or an expense.

    Flow:
    1. Convert the amount to cents
    2. Expand expenses into one row per monthly installment
    3. Write the whole group atomically
    4. Return the refreshed ledger and savings
    """
    start_time = time.time()
    request_id = get_request_id(request)

    with ledger_errors("add_transaction", request_id):
        transactions = store.add_transaction(
            TransactionDraft(
                type=request_body.type,
                description=request_body.description,
                category=request_body.category,
                amount_cents=to_cents(request_body.amount),
                transaction_date=request_body.transaction_date or date.today(),
                installments=request_body.installments,
                card_id=request_body.card_id,
            )
        )

    record_operation("add_transaction")
    log_ledger_change(
        request_id,
        "add_transaction",
        len(transactions),
        (time.time() - start_time) * 1000,
        installments_requested=request_body.installments,
    )

    return _change_response(transactions)


@router.put("/transactions/{transaction_id}", response_model=LedgerChangeResponse)
def update_transaction(
    transaction_id: int,
    request_body: TransactionUpdateRequest,
    request: Request,
    store: LedgerStore = Depends(get_store),
):
    """
    Rewrite a single transaction row.

    Sibling installments of the same purchase are left untouched.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    with ledger_errors("update_transaction", request_id):
        transactions = store.update_transaction(
            TransactionUpdate(
                id=transaction_id,
                type=request_body.type,
                description=request_body.description,
                category=request_body.category,
                amount_cents=to_cents(request_body.amount),
                transaction_date=request_body.transaction_date,
                installments=request_body.installments,
                installment_number=request_body.installment_number,
                card_id=request_body.card_id,
            )
        )

    record_operation("update_transaction")
    log_ledger_change(
        request_id,
        "update_transaction",
        len(transactions),
        (time.time() - start_time) * 1000,
        transaction_id=transaction_id,
    )

    return _change_response(transactions)


@router.delete("/transactions/{transaction_id}", response_model=LedgerChangeResponse)
def remove_transaction(transaction_id: int, request: Request, store: LedgerStore = Depends(get_store)):
    """Delete a single transaction row"""
    start_time = time.time()
    request_id = get_request_id(request)

    with ledger_errors("remove_transaction", request_id):
        transactions = store.remove_transaction(transaction_id)

    record_operation("remove_transaction")
    log_ledger_change(
        request_id,
        "remove_transaction",
        len(transactions),
        (time.time() - start_time) * 1000,
        transaction_id=transaction_id,
    )

    return _change_response(transactions)
