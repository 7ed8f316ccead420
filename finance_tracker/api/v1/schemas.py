"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from finance_tracker.domain import models
from finance_tracker.domain.money import from_cents

# Up to 999,999,999,999,999.99: always fits a 64-bit cents column
MAX_DIGITS = 17


class CamelRequest(BaseModel):
    """Request bodies accept camelCase keys as well as snake_case"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CardCreateRequest(CamelRequest):
    """Request body for POST /v1/cards"""

    name: str = Field(..., min_length=1, description="Card name")
    limit_value: Decimal = Field(..., gt=0, max_digits=MAX_DIGITS, decimal_places=2, description="Credit limit")
    closing_day: Optional[int] = Field(None, ge=1, le=31, description="Billing cycle closing day")
    due_day: Optional[int] = Field(None, ge=1, le=31, description="Payment due day")
    brand: Optional[str] = None


class TransactionCreateRequest(CamelRequest):
    """Request body for POST /v1/transactions"""

    type: Literal["income", "expense"]
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    amount: Decimal = Field(
        ..., gt=0, max_digits=MAX_DIGITS, decimal_places=2, description="Total amount of the purchase"
    )
    transaction_date: Optional[date] = Field(None, description="Date of the first installment; defaults to today")
    installments: int = Field(1, description="Months to split an expense over; ignored for income")
    card_id: Optional[int] = None


class TransactionUpdateRequest(CamelRequest):
    """Request body for PUT /v1/transactions/{transaction_id}"""

    type: Literal["income", "expense"]
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    amount: Decimal = Field(
        ..., gt=0, max_digits=MAX_DIGITS, decimal_places=2, description="Amount of this single row"
    )
    transaction_date: date
    installments: int = 1
    installment_number: int = 1
    card_id: Optional[int] = None


class CardSchema(BaseModel):
    """Persisted card"""

    id: int
    name: str
    limit_value: Decimal
    closing_day: int
    due_day: int
    brand: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, card: models.Card) -> "CardSchema":
        return cls(
            id=card.id,
            name=card.name,
            limit_value=from_cents(card.limit_cents),
            closing_day=card.closing_day,
            due_day=card.due_day,
            brand=card.brand,
            created_at=card.created_at,
        )


class TransactionSchema(BaseModel):
    """Persisted ledger line"""

    id: int
    type: str
    description: str
    category: str
    amount: Decimal
    transaction_date: date
    card_id: Optional[int] = None
    installments: int
    installment_number: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, txn: models.Transaction) -> "TransactionSchema":
        return cls(
            id=txn.id,
            type=txn.type,
            description=txn.description,
            category=txn.category,
            amount=from_cents(txn.amount_cents),
            transaction_date=txn.transaction_date,
            card_id=txn.card_id,
            installments=txn.installments,
            installment_number=txn.installment_number,
            created_at=txn.created_at,
        )


class MonthlySavingsSchema(BaseModel):
    """Savings figures of one month"""

    year: int
    month: int
    income: Decimal
    expense: Decimal
    savings: Decimal


class SavingsSchema(BaseModel):
    """Savings history, most recent month first"""

    history: List[MonthlySavingsSchema]
    total_saved: Decimal

    @classmethod
    def from_domain(cls, savings: models.SavingsHistory) -> "SavingsSchema":
        return cls(
            history=[
                MonthlySavingsSchema(
                    year=entry.year,
                    month=entry.month,
                    income=from_cents(entry.income_cents),
                    expense=from_cents(entry.expense_cents),
                    savings=from_cents(entry.savings_cents),
                )
                for entry in savings.history
            ],
            total_saved=from_cents(savings.total_saved_cents),
        )


class CardsResponse(BaseModel):
    """Response for card endpoints"""

    cards: List[CardSchema]


class TransactionsResponse(BaseModel):
    """Response for transaction listings"""

    transactions: List[TransactionSchema]


class LedgerChangeResponse(BaseModel):
    """Response for transaction mutations: refreshed list plus savings"""

    transactions: List[TransactionSchema]
    savings: SavingsSchema


class SavingsResponse(BaseModel):
    """Response for GET /v1/savings"""

    savings: SavingsSchema


class InitialDataResponse(BaseModel):
    """Response for GET /v1/ledger"""

    cards: List[CardSchema]
    transactions: List[TransactionSchema]
    savings: SavingsSchema


class MonthlySummarySchema(BaseModel):
    """Totals of one month; balance may be negative"""

    year: int
    month: int
    income: Decimal
    expense: Decimal
    balance: Decimal
    savings: Decimal


class CategoryTotalSchema(BaseModel):
    """Expense total of one category"""

    category: str
    total: Decimal


class CardUsageSchema(BaseModel):
    """Month spending on one card"""

    card_id: int
    name: str
    limit_value: Decimal
    spent: Decimal
    available: Decimal


class MonthlyReportResponse(BaseModel):
    """Response for GET /v1/reports/monthly"""

    summary: MonthlySummarySchema
    categories: List[CategoryTotalSchema]
    cards: List[CardUsageSchema]

    @classmethod
    def from_domain(cls, report: models.MonthlyReport) -> "MonthlyReportResponse":
        summary = report.summary
        return cls(
            summary=MonthlySummarySchema(
                year=summary.year,
                month=summary.month,
                income=from_cents(summary.income_cents),
                expense=from_cents(summary.expense_cents),
                balance=from_cents(summary.balance_cents),
                savings=from_cents(summary.savings_cents),
            ),
            categories=[
                CategoryTotalSchema(category=c.category, total=from_cents(c.total_cents))
                for c in report.categories
            ],
            cards=[
                CardUsageSchema(
                    card_id=u.card_id,
                    name=u.name,
                    limit_value=from_cents(u.limit_cents),
                    spent=from_cents(u.spent_cents),
                    available=from_cents(u.available_cents),
                )
                for u in report.cards
            ],
        )
