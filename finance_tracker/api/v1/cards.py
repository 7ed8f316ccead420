"""/v1/cards - credit card registry"""

import time

from fastapi import APIRouter, Depends, Request

from finance_tracker.api.dependencies import get_request_id, get_store
from finance_tracker.api.v1.errors import ledger_errors
from finance_tracker.api.v1.schemas import CardCreateRequest, CardSchema, CardsResponse
from finance_tracker.domain.models import CardDraft
from finance_tracker.domain.money import to_cents
from finance_tracker.infrastructure.database.store import LedgerStore
from finance_tracker.infrastructure.observability.logging import log_ledger_change
from finance_tracker.infrastructure.observability.metrics import record_operation

router = APIRouter()


@router.get("/cards", response_model=CardsResponse)
def list_cards(request: Request, store: LedgerStore = Depends(get_store)):
    """All cards, ordered by name"""
    with ledger_errors("list_cards", get_request_id(request)):
        cards = store.all_cards()

    return CardsResponse(cards=[CardSchema.from_domain(c) for c in cards])


@router.post("/cards", response_model=CardsResponse, status_code=201)
def add_card(
    request_body: CardCreateRequest,
    request: Request,
    store: LedgerStore = Depends(get_store),
):
    """
    Register a new credit card.

    Closing day defaults to 1 and due day to 10 when not given.

    Returns:
        Every card, ordered by name
    """
    start_time = time.time()
    request_id = get_request_id(request)

    with ledger_errors("add_card", request_id):
        cards = store.add_card(
            CardDraft(
                name=request_body.name,
                limit_cents=to_cents(request_body.limit_value),
                closing_day=request_body.closing_day,
                due_day=request_body.due_day,
                brand=request_body.brand,
            )
        )

    record_operation("add_card")
    log_ledger_change(request_id, "add_card", 1, (time.time() - start_time) * 1000)

    return CardsResponse(cards=[CardSchema.from_domain(c) for c in cards])


@router.delete("/cards/{card_id}", response_model=CardsResponse)
def remove_card(card_id: int, request: Request, store: LedgerStore = Depends(get_store)):
    """
    Delete a card.

    Transactions charged to it are kept; their card reference is cleared.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    with ledger_errors("remove_card", request_id):
        cards = store.remove_card(card_id)

    record_operation("remove_card")
    log_ledger_change(request_id, "remove_card", 1, (time.time() - start_time) * 1000, card_id=card_id)

    return CardsResponse(cards=[CardSchema.from_domain(c) for c in cards])
