"""LedgerStore - single source of truth for cards and transactions"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finance_tracker.config import Settings
from finance_tracker.domain.exceptions import (
    CardNotFoundError,
    LedgerValidationError,
    StoreUnavailableError,
    TransactionNotFoundError,
)
from finance_tracker.domain.installments import plan_installments
from finance_tracker.domain.models import (
    Card,
    CardDraft,
    LedgerSnapshot,
    MonthlyReport,
    SavingsHistory,
    Transaction,
    TransactionDraft,
    TransactionUpdate,
)
from finance_tracker.domain.reports import card_usage, category_breakdown, summarize_month
from finance_tracker.domain.savings import aggregate_savings
from finance_tracker.domain.validation import normalize_card, normalize_transaction, normalize_update
from finance_tracker.infrastructure.database.models import Base, CardRecord, TransactionRecord
from finance_tracker.infrastructure.database.repositories import CardRepository, TransactionRepository
from finance_tracker.infrastructure.database.session import create_db_engine, create_session_factory
from finance_tracker.infrastructure.observability.metrics import installment_group_size_histogram
from finance_tracker.utils.date_utils import month_range

logger = logging.getLogger(__name__)


def _to_card(row: CardRecord) -> Card:
    return Card(
        id=row.id,
        name=row.name,
        limit_cents=row.limit_cents,
        closing_day=row.closing_day,
        due_day=row.due_day,
        brand=row.brand,
        created_at=row.created_at,
    )


def _to_transaction(row: TransactionRecord) -> Transaction:
    return Transaction(
        id=row.id,
        type=row.type,
        description=row.description,
        category=row.category,
        amount_cents=row.amount_cents,
        transaction_date=row.transaction_date,
        card_id=row.card_id,
        installments=row.installments,
        installment_number=row.installment_number,
        created_at=row.created_at,
    )


class LedgerStore:
    """
    Owns the database engine and every read and write of the ledger.

    Each public call runs in its own session and database transaction:
    it either commits completely or leaves no trace. Writes are serialized
    by an internal lock. Storage errors surface as StoreUnavailableError;
    the store stays usable for the next call.
    """

    def __init__(self, engine: Engine, max_installments: int = 120):
        self._engine = engine
        self._session_factory = create_session_factory(engine)
        self.max_installments = max_installments
        self._write_lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "LedgerStore":
        """Build a store with its own engine from application settings"""
        engine = create_db_engine(settings.database_url, echo=settings.sql_echo)
        return cls(engine, max_installments=settings.max_installments)

    def create_schema(self) -> None:
        """Create tables if they do not exist yet"""
        try:
            Base.metadata.create_all(bind=self._engine)
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"Could not initialize schema: {e}") from e

    def dispose(self) -> None:
        """Release pooled connections"""
        self._engine.dispose()

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around one store operation"""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("Ledger store rolled back", extra={"error": str(e)})
            raise StoreUnavailableError(f"Ledger store unavailable: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # Cards

    def all_cards(self) -> List[Card]:
        with self._session_scope() as db:
            return [_to_card(row) for row in CardRepository(db).list_cards()]

    def add_card(self, draft: CardDraft) -> List[Card]:
        """Validate and insert a card; returns all cards ordered by name"""
        card = normalize_card(draft)

        with self._write_lock, self._session_scope() as db:
            repo = CardRepository(db)
            repo.create_card(card)
            return [_to_card(row) for row in repo.list_cards()]

    def remove_card(self, card_id: int) -> List[Card]:
        """Delete a card; its transactions stay, with the card reference cleared"""
        with self._write_lock, self._session_scope() as db:
            repo = CardRepository(db)
            db_card = repo.get_card_by_id(card_id)
            if db_card is None:
                raise CardNotFoundError(f"Card {card_id} not found")

            detached = repo.delete_card(db_card)
            logger.debug("Card removed", extra={"card_id": card_id, "detached_transactions": detached})
            return [_to_card(row) for row in repo.list_cards()]

    # Transactions

    def all_transactions(self) -> List[Transaction]:
        with self._session_scope() as db:
            return [_to_transaction(row) for row in TransactionRepository(db).list_entries()]

    def add_transaction(self, draft: TransactionDraft) -> List[Transaction]:
        """
        Expand a request into its installment group and insert it atomically.

        Flow:
        1. Validate and normalize (income → 1 installment, no card)
        2. Check the card reference against the current card set
        3. Plan dates and cent-exact amounts
        4. Insert every row in one database transaction
        """
        txn = normalize_transaction(draft, self.max_installments)
        planned = plan_installments(txn.type, txn.amount_cents, txn.transaction_date, txn.installments)

        with self._write_lock, self._session_scope() as db:
            if txn.card_id is not None and CardRepository(db).get_card_by_id(txn.card_id) is None:
                raise LedgerValidationError(f"Card {txn.card_id} does not exist")

            repo = TransactionRepository(db)
            repo.create_group(txn, planned)
            result = [_to_transaction(row) for row in repo.list_entries()]

        installment_group_size_histogram.observe(len(planned))
        return result

    def update_transaction(self, update: TransactionUpdate) -> List[Transaction]:
        """Rewrite exactly one row; never touches its installment siblings"""
        normalized = normalize_update(update, self.max_installments)

        with self._write_lock, self._session_scope() as db:
            repo = TransactionRepository(db)
            db_entry = repo.get_entry_by_id(normalized.id)
            if db_entry is None:
                raise TransactionNotFoundError(f"Transaction {normalized.id} not found")
            if normalized.card_id is not None and CardRepository(db).get_card_by_id(normalized.card_id) is None:
                raise LedgerValidationError(f"Card {normalized.card_id} does not exist")

            repo.update_entry(db_entry, normalized)
            return [_to_transaction(row) for row in repo.list_entries()]

    def remove_transaction(self, transaction_id: int) -> List[Transaction]:
        """Delete one row; other installments of the same purchase are kept"""
        with self._write_lock, self._session_scope() as db:
            repo = TransactionRepository(db)
            db_entry = repo.get_entry_by_id(transaction_id)
            if db_entry is None:
                raise TransactionNotFoundError(f"Transaction {transaction_id} not found")

            repo.delete_entry(db_entry)
            return [_to_transaction(row) for row in repo.list_entries()]

    def transactions_by_month(self, year: int, month: int) -> List[Transaction]:
        """Transactions dated within the month, chronological"""
        start, end = month_range(year, month)
        with self._session_scope() as db:
            rows = TransactionRepository(db).list_entries_between(start, end)
            return [_to_transaction(row) for row in rows]

    # Derived views

    def savings_history(self) -> SavingsHistory:
        return aggregate_savings(self.all_transactions())

    def initial_data(self) -> LedgerSnapshot:
        """Cards, transactions and savings read from one consistent session"""
        with self._session_scope() as db:
            cards = [_to_card(row) for row in CardRepository(db).list_cards()]
            transactions = [_to_transaction(row) for row in TransactionRepository(db).list_entries()]

        return LedgerSnapshot(
            cards=cards,
            transactions=transactions,
            savings=aggregate_savings(transactions),
        )

    def monthly_report(self, year: int, month: int) -> MonthlyReport:
        """Summary, category breakdown and card usage for one month"""
        start, end = month_range(year, month)
        with self._session_scope() as db:
            cards = [_to_card(row) for row in CardRepository(db).list_cards()]
            rows = TransactionRepository(db).list_entries_between(start, end)
            transactions = [_to_transaction(row) for row in rows]

        return MonthlyReport(
            summary=summarize_month(year, month, transactions),
            categories=category_breakdown(transactions),
            cards=card_usage(cards, transactions),
        )
