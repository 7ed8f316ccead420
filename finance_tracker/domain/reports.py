"""Dashboard figures for a single month"""

from typing import Dict, Iterable, List

from finance_tracker.domain.models import (
    EXPENSE,
    INCOME,
    Card,
    CardUsage,
    CategoryTotal,
    MonthlySummary,
    Transaction,
)


def summarize_month(year: int, month: int, transactions: Iterable[Transaction]) -> MonthlySummary:
    """Income, expense, signed balance and clamped savings of one month's entries"""
    income = 0
    expense = 0
    for txn in transactions:
        if txn.type == INCOME:
            income += txn.amount_cents
        else:
            expense += txn.amount_cents

    balance = income - expense
    return MonthlySummary(
        year=year,
        month=month,
        income_cents=income,
        expense_cents=expense,
        balance_cents=balance,
        savings_cents=max(balance, 0),
    )


def category_breakdown(transactions: Iterable[Transaction]) -> List[CategoryTotal]:
    """Expense totals per category, largest first"""
    grouped: Dict[str, int] = {}
    for txn in transactions:
        if txn.type != EXPENSE:
            continue
        grouped[txn.category] = grouped.get(txn.category, 0) + txn.amount_cents

    return [
        CategoryTotal(category=category, total_cents=total)
        for category, total in sorted(grouped.items(), key=lambda item: (-item[1], item[0]))
    ]


def card_usage(cards: Iterable[Card], transactions: Iterable[Transaction]) -> List[CardUsage]:
    """
    Spending charged to each card, and what is left of its limit.

    Available can go negative when a card is over its limit.
    """
    spent_by_card: Dict[int, int] = {}
    for txn in transactions:
        if txn.type == EXPENSE and txn.card_id is not None:
            spent_by_card[txn.card_id] = spent_by_card.get(txn.card_id, 0) + txn.amount_cents

    usage = []
    for card in cards:
        spent = spent_by_card.get(card.id, 0)
        usage.append(
            CardUsage(
                card_id=card.id,
                name=card.name,
                limit_cents=card.limit_cents,
                spent_cents=spent,
                available_cents=card.limit_cents - spent,
            )
        )
    return usage
