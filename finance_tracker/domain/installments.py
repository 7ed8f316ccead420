"""Installment plan generation for purchases split across months"""

from datetime import date
from typing import List

from finance_tracker.domain.models import INCOME, PlannedInstallment
from finance_tracker.domain.money import split_cents
from finance_tracker.utils.date_utils import add_months


def effective_installments(transaction_type: str, requested: int) -> int:
    """Income is never split; anything else gets at least one installment"""
    if transaction_type == INCOME:
        return 1
    return max(1, requested)


def plan_installments(
    transaction_type: str,
    total_cents: int,
    start_date: date,
    requested_installments: int = 1,
) -> List[PlannedInstallment]:
    """
    Generate the monthly installments of one purchase.

    Requirements:
    - Income always produces a single entry
    - One entry per calendar month starting at start_date
    - Earliest installments absorb the rounding remainder (cent-exact total)

    Args:
        transaction_type: "income" or "expense"
        total_cents: Total amount to split
        start_date: Date of the first installment
        requested_installments: Number of months requested by the user

    Returns:
        List of PlannedInstallment ordered by installment_number

    Example:
        10000 cents x 3 from 2024-01-31 →
        [(2024-01-31, 3334, 1), (2024-02-29, 3333, 2), (2024-03-31, 3333, 3)]
    """
    count = effective_installments(transaction_type, requested_installments)
    amounts = split_cents(total_cents, count)

    return [
        PlannedInstallment(
            transaction_date=add_months(start_date, i),
            amount_cents=amount,
            installment_number=i + 1,
        )
        for i, amount in enumerate(amounts)
    ]
