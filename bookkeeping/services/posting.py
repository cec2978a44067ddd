"""
Double-entry balancing rules.

These functions work on anything with ``debit`` and ``credit``
attributes, so the same rule checks request lines before they
are stored and stored lines before a draft is posted.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

from bookkeeping.services.errors import UnbalancedEntryError

CENT = Decimal("0.01")


class HasAmounts(Protocol):
    debit: Decimal
    credit: Decimal


def to_money(value) -> Decimal:
    """Round to fils (2 places), half-up."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_totals(lines: Iterable[HasAmounts]) -> tuple[Decimal, Decimal]:
    """Return (total debits, total credits)."""
    total_debit = Decimal("0.00")
    total_credit = Decimal("0.00")
    for line in lines:
        total_debit += to_money(line.debit or 0)
        total_credit += to_money(line.credit or 0)
    return total_debit, total_credit


def is_balanced(lines: Iterable[HasAmounts]) -> bool:
    total_debit, total_credit = line_totals(lines)
    return total_debit == total_credit


def ensure_balanced(lines: list[HasAmounts]) -> None:
    """
    Raise UnbalancedEntryError unless the lines can be posted.

    A postable entry has at least one debit, at least one credit,
    and total debits equal to total credits.
    """
    total_debit, total_credit = line_totals(lines)
    if total_debit == 0 or total_credit == 0:
        raise UnbalancedEntryError(
            "Entry must have at least one debit and one credit"
        )
    if total_debit != total_credit:
        raise UnbalancedEntryError(
            f"Debits ({total_debit}) must equal credits ({total_credit})"
        )


def mirror_amounts(line: HasAmounts) -> tuple[Decimal, Decimal]:
    """Return the (debit, credit) pair that cancels a line."""
    return to_money(line.credit or 0), to_money(line.debit or 0)
