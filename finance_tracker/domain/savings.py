"""Monthly savings aggregation over the transaction log"""

from typing import Dict, Iterable, Tuple

from finance_tracker.domain.models import INCOME, MonthlySavings, SavingsHistory, Transaction


def aggregate_savings(transactions: Iterable[Transaction]) -> SavingsHistory:
    """
    Group transactions by calendar month and derive savings per month.

    Requirements:
    - savings = max(0, income - expense) for each month
    - Months ordered most recent first
    - total_saved is the sum of the clamped monthly figures, so an
      overspent month never eats into earlier savings
    """
    totals: Dict[Tuple[int, int], list] = {}
    for txn in transactions:
        key = (txn.transaction_date.year, txn.transaction_date.month)
        bucket = totals.setdefault(key, [0, 0])
        if txn.type == INCOME:
            bucket[0] += txn.amount_cents
        else:
            bucket[1] += txn.amount_cents

    history = [
        MonthlySavings(
            year=year,
            month=month,
            income_cents=income,
            expense_cents=expense,
            savings_cents=max(income - expense, 0),
        )
        for (year, month), (income, expense) in sorted(totals.items(), reverse=True)
    ]

    return SavingsHistory(
        history=history,
        total_saved_cents=sum(entry.savings_cents for entry in history),
    )
