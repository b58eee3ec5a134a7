"""Deposit ledger: ordered, append-only record of money paid in."""

from __future__ import annotations

import logging
import math
from typing import Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from interest_sim.domain.outcome import DepositError, Outcome

logger = logging.getLogger(__name__)


class Deposit(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int = Field(ge=0)
    amount: float = Field(gt=0)


class Ledger:
    """Deposits in insertion order. Nothing is ever removed or edited."""

    def __init__(self) -> None:
        self._deposits: List[Deposit] = []

    def add_deposit(self, month: int, amount: float) -> Outcome[Deposit]:
        if not math.isfinite(amount) or amount <= 0:
            logger.debug("rejected deposit amount=%s month=%s", amount, month)
            return Outcome.failure(DepositError.NON_POSITIVE_AMOUNT)
        if month < 0:
            logger.debug("rejected deposit month=%s", month)
            return Outcome.failure(DepositError.INVALID_MONTH)
        if not math.isfinite(self.total_deposited() + amount):
            logger.debug("rejected deposit amount=%s: total would overflow", amount)
            return Outcome.failure(DepositError.AMOUNT_TOO_LARGE)

        deposit = Deposit(month=month, amount=amount)
        self._deposits.append(deposit)
        return Outcome.success(deposit)

    def total_deposited(self) -> float:
        return sum(deposit.amount for deposit in self._deposits)

    @property
    def deposits(self) -> Tuple[Deposit, ...]:
        return tuple(self._deposits)

    def __len__(self) -> int:
        return len(self._deposits)

    def __iter__(self) -> Iterator[Deposit]:
        return iter(tuple(self._deposits))
