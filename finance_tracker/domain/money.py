"""Integer-cent money arithmetic and cent-exact splitting"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Union

from finance_tracker.domain.exceptions import InvalidAmountError

CENT = Decimal("0.01")

# Largest value a signed 64-bit cents column can hold
MAX_CENTS = 2**63 - 1

AmountLike = Union[Decimal, int, float, str]


def to_cents(amount: AmountLike) -> int:
    """
    Convert a decimal amount to whole cents, rounding half away from zero.

    Floats are converted through their shortest string form so that 0.285
    becomes 29 cents rather than 28.

    Raises:
        InvalidAmountError: If the value is not a finite number, or does
            not fit in a 64-bit cents column
    """
    if isinstance(amount, float):
        amount = str(amount)
    try:
        value = Decimal(amount)
        if not value.is_finite():
            raise InvalidAmountError(f"Amount must be finite, got {amount!r}")
        cents = int((value * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmountError(f"Not a monetary amount: {amount!r}") from e

    if abs(cents) > MAX_CENTS:
        raise InvalidAmountError(f"Amount out of range: {amount!r}")
    return cents


def from_cents(cents: int) -> Decimal:
    """Convert whole cents back to a 2-decimal amount"""
    return (Decimal(cents) / 100).quantize(CENT)


def split_cents(total_cents: int, parts: int) -> List[int]:
    """
    Split a total into `parts` integer amounts that sum exactly to it.

    The remainder goes one cent at a time to the earliest parts, so odd
    cents are front-loaded.

    Example:
        10000 cents / 3 → [3334, 3333, 3333]
        base = 3333, remainder = 1 → first part gets +1

    Raises:
        ValueError: If parts < 1 (callers clamp before calling)
        InvalidAmountError: If the total is negative
    """
    if parts < 1:
        raise ValueError(f"parts must be >= 1, got {parts}")
    if total_cents < 0:
        raise InvalidAmountError(f"Amount must not be negative, got {total_cents} cents")

    base = total_cents // parts
    remainder = total_cents - base * parts

    return [base + (1 if i < remainder else 0) for i in range(parts)]


def distribute_amount(total: AmountLike, parts: int) -> List[Decimal]:
    """Split a decimal total into `parts` 2-decimal amounts summing exactly to it"""
    return [from_cents(c) for c in split_cents(to_cents(total), parts)]
