"""Normalization and validation of ledger write requests"""

from dataclasses import replace
from typing import Optional

from finance_tracker.domain.exceptions import InvalidAmountError, LedgerValidationError
from finance_tracker.domain.installments import effective_installments
from finance_tracker.domain.models import (
    INCOME,
    TRANSACTION_TYPES,
    CardDraft,
    TransactionDraft,
    TransactionUpdate,
)
from finance_tracker.domain.money import MAX_CENTS

DEFAULT_CLOSING_DAY = 1
DEFAULT_DUE_DAY = 10


def _require_text(value: Optional[str], field_name: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise LedgerValidationError(f"{field_name} must not be empty")
    return cleaned


def _require_day(value: Optional[int], default: int, field_name: str) -> int:
    # 0 and None both mean "not set"
    if not value:
        return default
    if not 1 <= value <= 31:
        raise LedgerValidationError(f"{field_name} must be between 1 and 31, got {value}")
    return value


def _require_type(value: str) -> str:
    if value not in TRANSACTION_TYPES:
        raise LedgerValidationError(f"type must be one of {TRANSACTION_TYPES}, got {value!r}")
    return value


def _require_positive_cents(value: int, field_name: str) -> int:
    if value <= 0:
        raise InvalidAmountError(f"{field_name} must be positive")
    if value > MAX_CENTS:
        raise InvalidAmountError(f"{field_name} is too large")
    return value


def _require_installments(requested: int, transaction_type: str, max_installments: int) -> int:
    count = effective_installments(transaction_type, requested)
    if count > max_installments:
        raise LedgerValidationError(
            f"installments must not exceed {max_installments}, got {requested}"
        )
    return count


def normalize_card(draft: CardDraft) -> CardDraft:
    """Trim text fields, apply day defaults, reject empty names and non-positive limits"""
    brand = (draft.brand or "").strip() or None
    return CardDraft(
        name=_require_text(draft.name, "name"),
        limit_cents=_require_positive_cents(draft.limit_cents, "limit"),
        closing_day=_require_day(draft.closing_day, DEFAULT_CLOSING_DAY, "closing_day"),
        due_day=_require_day(draft.due_day, DEFAULT_DUE_DAY, "due_day"),
        brand=brand,
    )


def normalize_transaction(draft: TransactionDraft, max_installments: int) -> TransactionDraft:
    """
    Validate a new transaction request.

    Income is forced to a single installment with no card; expense
    installment counts below 1 are clamped to 1.
    """
    transaction_type = _require_type(draft.type)
    return replace(
        draft,
        type=transaction_type,
        description=_require_text(draft.description, "description"),
        category=_require_text(draft.category, "category"),
        amount_cents=_require_positive_cents(draft.amount_cents, "amount"),
        installments=_require_installments(draft.installments, transaction_type, max_installments),
        card_id=None if transaction_type == INCOME else draft.card_id,
    )


def normalize_update(update: TransactionUpdate, max_installments: int) -> TransactionUpdate:
    """
    Validate a single-row rewrite.

    Same rules as creation, plus installment_number is clamped into
    [1, installments].
    """
    transaction_type = _require_type(update.type)
    installments = _require_installments(update.installments, transaction_type, max_installments)
    return replace(
        update,
        type=transaction_type,
        description=_require_text(update.description, "description"),
        category=_require_text(update.category, "category"),
        amount_cents=_require_positive_cents(update.amount_cents, "amount"),
        installments=installments,
        installment_number=min(max(1, update.installment_number), installments),
        card_id=None if transaction_type == INCOME else update.card_id,
    )
