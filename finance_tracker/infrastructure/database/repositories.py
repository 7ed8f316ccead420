"""Data access layer for cards and ledger transactions"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from finance_tracker.domain.models import CardDraft, PlannedInstallment, TransactionDraft, TransactionUpdate
from finance_tracker.infrastructure.database.models import CardRecord, TransactionRecord


class CardRepository:
    """Repository for credit cards"""

    def __init__(self, db: Session):
        self.db = db

    def create_card(self, draft: CardDraft) -> CardRecord:
        """Persist a validated card"""
        db_card = CardRecord(
            name=draft.name,
            limit_cents=draft.limit_cents,
            closing_day=draft.closing_day,
            due_day=draft.due_day,
            brand=draft.brand,
        )
        self.db.add(db_card)
        self.db.flush()  # Get ID without committing
        return db_card

    def get_card_by_id(self, card_id: int) -> Optional[CardRecord]:
        return self.db.get(CardRecord, card_id)

    def delete_card(self, db_card: CardRecord) -> int:
        """
        Delete a card, detaching its transactions first.

        Returns:
            Number of transactions whose card reference was cleared
        """
        detached = (
            self.db.query(TransactionRecord)
            .filter(TransactionRecord.card_id == db_card.id)
            .update({TransactionRecord.card_id: None}, synchronize_session=False)
        )
        self.db.delete(db_card)
        self.db.flush()
        return detached

    def list_cards(self) -> List[CardRecord]:
        """All cards, alphabetical"""
        return self.db.query(CardRecord).order_by(CardRecord.name.asc(), CardRecord.id.asc()).all()


class TransactionRepository:
    """Repository for ledger transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create_entry(self, draft: TransactionDraft, installment: PlannedInstallment) -> TransactionRecord:
        """Write one row of an installment group"""
        db_entry = TransactionRecord(
            type=draft.type,
            description=draft.description,
            category=draft.category,
            amount_cents=installment.amount_cents,
            transaction_date=installment.transaction_date,
            card_id=draft.card_id,
            installments=draft.installments,
            installment_number=installment.installment_number,
        )
        self.db.add(db_entry)
        self.db.flush()
        return db_entry

    def create_group(
        self,
        draft: TransactionDraft,
        installments: List[PlannedInstallment],
    ) -> List[TransactionRecord]:
        """Write every row of a group; the caller owns commit/rollback"""
        return [self.create_entry(draft, inst) for inst in installments]

    def get_entry_by_id(self, transaction_id: int) -> Optional[TransactionRecord]:
        return self.db.get(TransactionRecord, transaction_id)

    def update_entry(self, db_entry: TransactionRecord, update: TransactionUpdate) -> TransactionRecord:
        """Overwrite every editable field of a single row"""
        db_entry.type = update.type
        db_entry.description = update.description
        db_entry.category = update.category
        db_entry.amount_cents = update.amount_cents
        db_entry.transaction_date = update.transaction_date
        db_entry.card_id = update.card_id
        db_entry.installments = update.installments
        db_entry.installment_number = update.installment_number
        self.db.flush()
        return db_entry

    def delete_entry(self, db_entry: TransactionRecord) -> None:
        self.db.delete(db_entry)
        self.db.flush()

    def list_entries(self) -> List[TransactionRecord]:
        """Most recent activity first; same-day rows newest insert first"""
        return (
            self.db.query(TransactionRecord)
            .order_by(
                TransactionRecord.transaction_date.desc(),
                TransactionRecord.created_at.desc(),
                TransactionRecord.id.desc(),
            )
            .all()
        )

    def list_entries_between(self, start: date, end: date) -> List[TransactionRecord]:
        """Rows dated within [start, end], chronological, earlier installments first"""
        return (
            self.db.query(TransactionRecord)
            .filter(TransactionRecord.transaction_date.between(start, end))
            .order_by(
                TransactionRecord.transaction_date.asc(),
                TransactionRecord.installment_number.asc(),
                TransactionRecord.id.asc(),
            )
            .all()
        )
