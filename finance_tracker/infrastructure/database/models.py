"""SQLAlchemy ORM models for cards and ledger transactions"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Text,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CardRecord(Base):
    """Credit card a purchase can be charged to"""

    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    limit_cents = Column(BigInteger, nullable=False)
    closing_day = Column(Integer, nullable=False, default=1, server_default="1")
    due_day = Column(Integer, nullable=False, default=10, server_default="10")
    brand = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class TransactionRecord(Base):
    """One ledger line; installment groups are several rows sharing a purchase"""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("type IN ('income', 'expense')", name="ck_transactions_type"),
        CheckConstraint("amount_cents >= 0", name="ck_transactions_amount"),
        CheckConstraint(
            "installment_number BETWEEN 1 AND installments", name="ck_transactions_installment"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    transaction_date = Column(Date, nullable=False, index=True)
    card_id = Column(Integer, ForeignKey("cards.id", ondelete="SET NULL"), nullable=True, index=True)
    installments = Column(Integer, nullable=False, default=1, server_default="1")
    installment_number = Column(Integer, nullable=False, default=1, server_default="1")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
