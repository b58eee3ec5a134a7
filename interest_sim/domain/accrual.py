"""Monthly compound-interest accrual over a set of deposits."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, List, Tuple

from interest_sim.domain.ledger import Deposit

MONTHS_PER_YEAR = 12
DEFAULT_ANNUAL_RATE = 0.05

CENT = Decimal("0.01")
WHOLE = Decimal("1")


class BalanceOverflow(ArithmeticError):
    """The balance at the requested month does not fit in a float."""


def monthly_rate_from_annual(annual_rate: float) -> float:
    """Nominal annual rate split evenly across months (no effective-annual conversion)."""
    return annual_rate / MONTHS_PER_YEAR


DEFAULT_MONTHLY_RATE = monthly_rate_from_annual(DEFAULT_ANNUAL_RATE)


def _quantize(value: Decimal, exponent: Decimal) -> Decimal:
    # precision must cover every digit from the leading one down to `exponent`
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def round_cents(value: float) -> float:
    return float(_quantize(Decimal(repr(value)), CENT))


def round_whole(value: float) -> int:
    return int(_quantize(Decimal(repr(value)), WHOLE))


def score_percent(interest: float, principal: float) -> int:
    """interest / principal as a whole percent, rounded half-up."""
    numerator = Decimal(repr(interest)) * 100
    denominator = Decimal(repr(principal))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, numerator.adjusted() - denominator.adjusted() + 30)
        ratio = numerator / denominator
    return int(_quantize(ratio, WHOLE))


def accrued_balance(
    month: int,
    deposits: Iterable[Deposit],
    monthly_rate: float = DEFAULT_MONTHLY_RATE,
) -> float:
    """
    Sum of every deposit grown for the months it has been in the bank.

    Each deposit compounds independently. Elapsed months are floored at
    zero, so a deposit dated after `month` counts at face value.

    Raises BalanceOverflow when the result is not a finite float.
    """
    balance = 0.0
    for deposit in deposits:
        elapsed = max(0, month - deposit.month)
        try:
            balance += deposit.amount * (1.0 + monthly_rate) ** elapsed
        except OverflowError as exc:
            raise BalanceOverflow(f"balance at month {month} overflows") from exc
    if not math.isfinite(balance):
        raise BalanceOverflow(f"balance at month {month} overflows")
    return balance


def balance_at(
    month: int,
    deposits: Iterable[Deposit],
    monthly_rate: float = DEFAULT_MONTHLY_RATE,
) -> float:
    """Balance at `month`, rounded to cents."""
    return round_cents(accrued_balance(month, deposits, monthly_rate))


def growth_schedule(
    deposits: Iterable[Deposit],
    max_months: int,
    monthly_rate: float = DEFAULT_MONTHLY_RATE,
) -> List[Tuple[int, float]]:
    """[(month, balance), ...] for months 0..max_months inclusive."""
    deposits = list(deposits)
    return [
        (month, balance_at(month, deposits, monthly_rate))
        for month in range(0, max_months + 1)
    ]
