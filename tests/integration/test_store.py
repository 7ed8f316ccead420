"""Integration tests for LedgerStore against SQLite"""

import pytest
from datetime import date
from unittest.mock import patch
from sqlalchemy.exc import OperationalError
from finance_tracker.domain.exceptions import (
    CardNotFoundError,
    LedgerValidationError,
    StoreUnavailableError,
    TransactionNotFoundError,
)
from finance_tracker.domain.models import CardDraft, TransactionUpdate
from finance_tracker.infrastructure.database.models import Base
from finance_tracker.infrastructure.database.repositories import TransactionRepository

pytestmark = pytest.mark.integration


def _add_card(store, name="Visa", limit_cents=500000):
    cards = store.add_card(CardDraft(name=name, limit_cents=limit_cents))
    return next(c for c in cards if c.name == name)


def test_installment_round_trip_by_month(store, expense_draft):
    """Test 3x $100.00 from 2024-05-15 lands one row per month"""
    store.add_transaction(expense_draft(amount_cents=10000, installments=3))

    months = [store.transactions_by_month(2024, m) for m in (5, 6, 7)]

    assert [len(rows) for rows in months] == [1, 1, 1]
    assert [rows[0].amount_cents for rows in months] == [3334, 3333, 3333]
    assert [rows[0].installment_number for rows in months] == [1, 2, 3]
    assert [rows[0].transaction_date for rows in months] == [
        date(2024, 5, 15),
        date(2024, 6, 15),
        date(2024, 7, 15),
    ]
    assert all(rows[0].installments == 3 for rows in months)
    assert store.transactions_by_month(2024, 8) == []


def test_group_rows_share_purchase_fields(store, expense_draft):
    card = _add_card(store)
    rows = store.add_transaction(expense_draft(installments=4, card_id=card.id, description=" TV "))

    assert len(rows) == 4
    assert {(r.type, r.description, r.category, r.installments, r.card_id) for r in rows} == {
        ("expense", "TV", "Education", 4, card.id)
    }
    assert sum(r.amount_cents for r in rows) == 10000


def test_add_transaction_is_atomic(store, expense_draft):
    """Test a fault after 2 of 4 rows leaves none of the group behind"""
    real_create_entry = TransactionRepository.create_entry
    written = []

    def flaky_create_entry(self, draft, installment):
        if len(written) == 2:
            raise OperationalError("INSERT INTO transactions", {}, Exception("disk I/O error"))
        written.append(installment)
        return real_create_entry(self, draft, installment)

    with patch.object(TransactionRepository, "create_entry", flaky_create_entry):
        with pytest.raises(StoreUnavailableError):
            store.add_transaction(expense_draft(installments=4))

    assert len(written) == 2
    assert store.all_transactions() == []

    # Store keeps working once the fault is gone
    assert len(store.add_transaction(expense_draft(installments=4))) == 4


def test_all_transactions_ordering(store, expense_draft):
    """Test date descending, then most recent insert first"""
    store.add_transaction(expense_draft(description="first", transaction_date=date(2024, 5, 1)))
    store.add_transaction(expense_draft(description="older", transaction_date=date(2024, 4, 1)))
    store.add_transaction(expense_draft(description="second", transaction_date=date(2024, 5, 1)))

    rows = store.all_transactions()

    assert [r.description for r in rows] == ["second", "first", "older"]


def test_transactions_by_month_ordering(store, expense_draft):
    """Test date ascending, then installment number ascending"""
    store.add_transaction(expense_draft(description="late", transaction_date=date(2024, 6, 20)))
    # Group starting in April: its 3rd installment lands on 2024-06-10
    store.add_transaction(expense_draft(description="group", transaction_date=date(2024, 4, 10), installments=3))
    # Same day as the 3rd installment above, but installment 1
    store.add_transaction(expense_draft(description="same-day", transaction_date=date(2024, 6, 10)))

    rows = store.transactions_by_month(2024, 6)

    assert [(r.description, r.installment_number) for r in rows] == [
        ("same-day", 1),
        ("group", 3),
        ("late", 1),
    ]


def test_income_is_single_row_without_card(store, expense_draft):
    card = _add_card(store)

    rows = store.add_transaction(expense_draft(type="income", installments=5, card_id=card.id))

    assert len(rows) == 1
    assert rows[0].card_id is None
    assert rows[0].installments == 1
    assert rows[0].installment_number == 1


def test_add_transaction_unknown_card_rejected(store, expense_draft):
    with pytest.raises(LedgerValidationError):
        store.add_transaction(expense_draft(card_id=999, installments=2))

    assert store.all_transactions() == []


def test_add_transaction_invalid_request_writes_nothing(store, expense_draft):
    with pytest.raises(LedgerValidationError):
        store.add_transaction(expense_draft(description="   "))

    assert store.all_transactions() == []


def test_cards_ordered_by_name_with_defaults(store):
    store.add_card(CardDraft(name="Visa", limit_cents=100000))
    cards = store.add_card(CardDraft(name="Amex", limit_cents=200000, closing_day=5, due_day=15, brand="amex"))

    assert [c.name for c in cards] == ["Amex", "Visa"]
    assert (cards[1].closing_day, cards[1].due_day, cards[1].brand) == (1, 10, None)
    assert (cards[0].closing_day, cards[0].due_day, cards[0].brand) == (5, 15, "amex")


def test_add_card_validation_writes_nothing(store):
    with pytest.raises(LedgerValidationError):
        store.add_card(CardDraft(name="  ", limit_cents=100000))

    assert store.all_cards() == []


def test_remove_card_clears_references(store, expense_draft):
    """Test removing a card keeps its 5 transactions with no card"""
    card = _add_card(store)
    store.add_transaction(expense_draft(card_id=card.id, installments=3))
    store.add_transaction(expense_draft(card_id=card.id, installments=2))

    cards = store.remove_card(card.id)

    assert cards == []
    rows = store.all_transactions()
    assert len(rows) == 5
    assert all(r.card_id is None for r in rows)


def test_remove_unknown_card(store):
    with pytest.raises(CardNotFoundError):
        store.remove_card(42)


def test_update_rewrites_only_target_row(store, expense_draft):
    rows = store.add_transaction(expense_draft(installments=3))
    target = next(r for r in rows if r.installment_number == 2)
    siblings_before = sorted((r.id, r.amount_cents, r.transaction_date) for r in rows if r.id != target.id)

    updated = store.update_transaction(
        TransactionUpdate(
            id=target.id,
            type="expense",
            description="Notebook (refund adjusted)",
            category="Education",
            amount_cents=2000,
            transaction_date=date(2024, 6, 20),
            installments=3,
            installment_number=9,
        )
    )

    assert len(updated) == 3
    row = next(r for r in updated if r.id == target.id)
    assert row.amount_cents == 2000
    assert row.installment_number == 3  # clamped
    assert row.description == "Notebook (refund adjusted)"
    siblings_after = sorted((r.id, r.amount_cents, r.transaction_date) for r in updated if r.id != target.id)
    assert siblings_after == siblings_before


def test_update_to_income_clears_card(store, expense_draft):
    card = _add_card(store)
    rows = store.add_transaction(expense_draft(card_id=card.id))

    updated = store.update_transaction(
        TransactionUpdate(
            id=rows[0].id,
            type="income",
            description="Refund",
            category="Other",
            amount_cents=10000,
            transaction_date=date(2024, 5, 15),
            installments=4,
            installment_number=2,
            card_id=card.id,
        )
    )

    assert (updated[0].type, updated[0].card_id, updated[0].installments, updated[0].installment_number) == (
        "income",
        None,
        1,
        1,
    )


def test_update_unknown_transaction(store):
    with pytest.raises(TransactionNotFoundError):
        store.update_transaction(
            TransactionUpdate(
                id=404,
                type="expense",
                description="x",
                category="y",
                amount_cents=100,
                transaction_date=date(2024, 1, 1),
            )
        )


def test_remove_transaction_keeps_siblings(store, expense_draft):
    rows = store.add_transaction(expense_draft(installments=3))
    first = next(r for r in rows if r.installment_number == 1)

    remaining = store.remove_transaction(first.id)

    assert sorted(r.installment_number for r in remaining) == [2, 3]

    with pytest.raises(TransactionNotFoundError):
        store.remove_transaction(first.id)


def test_savings_history_and_snapshot(store, expense_draft):
    store.add_transaction(expense_draft(type="income", amount_cents=50000, transaction_date=date(2024, 3, 1)))
    store.add_transaction(expense_draft(amount_cents=80000, transaction_date=date(2024, 3, 2)))
    store.add_transaction(expense_draft(type="income", amount_cents=20000, transaction_date=date(2024, 4, 1)))

    savings = store.savings_history()

    assert [(m.month, m.income_cents, m.expense_cents, m.savings_cents) for m in savings.history] == [
        (4, 20000, 0, 20000),
        (3, 50000, 80000, 0),
    ]
    assert savings.total_saved_cents == 20000

    snapshot = store.initial_data()
    assert len(snapshot.transactions) == 3
    assert snapshot.cards == []
    assert snapshot.savings == savings


def test_monthly_report(store, expense_draft):
    card = _add_card(store, limit_cents=30000)
    store.add_transaction(expense_draft(type="income", amount_cents=100000, transaction_date=date(2024, 5, 1)))
    store.add_transaction(expense_draft(amount_cents=90000, installments=3, card_id=card.id, category="Housing"))
    store.add_transaction(expense_draft(amount_cents=5000, category="Food"))

    report = store.monthly_report(2024, 5)

    assert report.summary.income_cents == 100000
    assert report.summary.expense_cents == 35000
    assert report.summary.balance_cents == 65000
    assert [(c.category, c.total_cents) for c in report.categories] == [("Housing", 30000), ("Food", 5000)]
    assert [(u.card_id, u.spent_cents, u.available_cents) for u in report.cards] == [(card.id, 30000, 0)]


def test_storage_failure_surfaces_and_recovers(store, engine):
    """Test a missing schema fails the call, and the store works once it is back"""
    Base.metadata.drop_all(bind=engine)

    with pytest.raises(StoreUnavailableError):
        store.all_transactions()

    store.create_schema()
    assert store.all_transactions() == []


def test_add_transaction_past_year_9999_writes_nothing(store, expense_draft):
    """Test a group whose 2nd month lands in year 10000 is rejected up front"""
    with pytest.raises(LedgerValidationError):
        store.add_transaction(expense_draft(transaction_date=date(9999, 12, 1), installments=2))

    assert store.all_transactions() == []
    assert len(store.add_transaction(expense_draft(transaction_date=date(9999, 12, 1)))) == 1
