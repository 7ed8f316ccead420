"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime
from typing import Callable, Generator, Optional
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from finance_tracker.api.main import create_app
from finance_tracker.config import Settings
from finance_tracker.domain.models import Card, Transaction, TransactionDraft
from finance_tracker.infrastructure.database.session import create_db_engine
from finance_tracker.infrastructure.database.store import LedgerStore


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """SQLite engine on a throwaway file"""
    test_engine = create_db_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def store(engine: Engine) -> LedgerStore:
    """Ledger store with an empty schema"""
    ledger = LedgerStore(engine, max_installments=120)
    ledger.create_schema()
    return ledger


@pytest.fixture
def client(tmp_path) -> Generator[TestClient, None, None]:
    """FastAPI test client backed by its own database file"""
    app = create_app(Settings(database_url=f"sqlite:///{tmp_path / 'api.db'}"))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def expense_draft() -> Callable[..., TransactionDraft]:
    """Build an expense request; override any field by keyword"""

    def build(**overrides) -> TransactionDraft:
        fields = dict(
            type="expense",
            description="Notebook",
            category="Education",
            amount_cents=10000,
            transaction_date=date(2024, 5, 15),
            installments=1,
            card_id=None,
        )
        fields.update(overrides)
        return TransactionDraft(**fields)

    return build


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Build a persisted-looking transaction for pure domain tests"""
    counter = {"next_id": 1}

    def build(
        type: str,
        amount_cents: int,
        transaction_date: date,
        category: str = "Other",
        card_id: Optional[int] = None,
    ) -> Transaction:
        txn = Transaction(
            id=counter["next_id"],
            type=type,
            description=f"{type} {counter['next_id']}",
            category=category,
            amount_cents=amount_cents,
            transaction_date=transaction_date,
            card_id=card_id,
            installments=1,
            installment_number=1,
            created_at=datetime(2024, 1, 1, 12, 0, 0),
        )
        counter["next_id"] += 1
        return txn

    return build


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Build a card for pure domain tests"""

    def build(card_id: int, name: str, limit_cents: int) -> Card:
        return Card(
            id=card_id,
            name=name,
            limit_cents=limit_cents,
            closing_day=1,
            due_day=10,
            brand=None,
            created_at=None,
        )

    return build
