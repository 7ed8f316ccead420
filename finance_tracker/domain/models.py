"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)


@dataclass
class Card:
    """Credit line that expenses can be charged to"""

    id: int
    name: str
    limit_cents: int
    closing_day: int
    due_day: int
    brand: Optional[str]
    created_at: Optional[datetime]


@dataclass
class Transaction:
    """Single persisted ledger line"""

    id: int
    type: str  # "income" or "expense"
    description: str
    category: str
    amount_cents: int
    transaction_date: date
    card_id: Optional[int]
    installments: int
    installment_number: int
    created_at: Optional[datetime]


@dataclass
class CardDraft:
    """Card as submitted by the caller, before validation"""

    name: str
    limit_cents: int
    closing_day: Optional[int] = None
    due_day: Optional[int] = None
    brand: Optional[str] = None


@dataclass
class TransactionDraft:
    """Purchase or income as submitted; may expand into an installment group"""

    type: str
    description: str
    category: str
    amount_cents: int
    transaction_date: date
    installments: int = 1
    card_id: Optional[int] = None


@dataclass
class TransactionUpdate:
    """Full rewrite of one existing row"""

    id: int
    type: str
    description: str
    category: str
    amount_cents: int
    transaction_date: date
    installments: int = 1
    installment_number: int = 1
    card_id: Optional[int] = None


@dataclass
class PlannedInstallment:
    """One row of an installment group, before it is persisted"""

    transaction_date: date
    amount_cents: int
    installment_number: int


@dataclass
class MonthlySavings:
    """Income, expense and clamped savings for one calendar month"""

    year: int
    month: int
    income_cents: int
    expense_cents: int
    savings_cents: int


@dataclass
class SavingsHistory:
    """Per-month savings, most recent first, plus their sum"""

    history: List[MonthlySavings] = field(default_factory=list)
    total_saved_cents: int = 0


@dataclass
class LedgerSnapshot:
    """Everything the dashboard needs on startup"""

    cards: List[Card]
    transactions: List[Transaction]
    savings: SavingsHistory


@dataclass
class MonthlySummary:
    """Totals for a single month; balance may go negative, savings never does"""

    year: int
    month: int
    income_cents: int
    expense_cents: int
    balance_cents: int
    savings_cents: int


@dataclass
class CategoryTotal:
    """Expense total for one category"""

    category: str
    total_cents: int


@dataclass
class CardUsage:
    """How much of a card's limit was spent in a month"""

    card_id: int
    name: str
    limit_cents: int
    spent_cents: int
    available_cents: int


@dataclass
class MonthlyReport:
    """Dashboard view of one month"""

    summary: MonthlySummary
    categories: List[CategoryTotal]
    cards: List[CardUsage]
