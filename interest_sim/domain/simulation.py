"""Three-phase deposit / grow / withdraw game engine."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from interest_sim.domain.accrual import (
    DEFAULT_MONTHLY_RATE,
    BalanceOverflow,
    balance_at,
    round_cents,
    score_percent,
)
from interest_sim.domain.ledger import Deposit, Ledger
from interest_sim.domain.outcome import DepositError, Outcome, TransitionError

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    DEPOSITING = "depositing"
    GROWING = "growing"
    RESULTS = "results"


class Withdrawal(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int
    balance: float


class WithdrawalOutcome(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int
    total_deposited: float
    balance: float
    interest_earned: float
    score_percent: int


class SimulationSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    phase: Phase
    current_month: int
    deposits: List[Deposit]
    total_deposited: float
    balance: float
    withdrawal: Optional[Withdrawal] = None
    outcome: Optional[WithdrawalOutcome] = None
    completed: bool = False


class Simulator:
    """
    One play-through of the interest game.

    Phases only move forward: depositing -> growing -> results. Every
    operation returns an Outcome; a call made in the wrong phase is reported
    as WRONG_PHASE rather than ignored.
    """

    def __init__(
        self,
        monthly_rate: float = DEFAULT_MONTHLY_RATE,
        on_complete: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.monthly_rate = monthly_rate
        self.on_complete = on_complete
        self.ledger = Ledger()
        self.phase = Phase.DEPOSITING
        self.current_month = 0
        self.withdrawal: Optional[Withdrawal] = None
        self.outcome: Optional[WithdrawalOutcome] = None
        self.completed = False

    def add_deposit(
        self, amount: float, *, month: Optional[int] = None
    ) -> Outcome[Deposit]:
        if self.phase is not Phase.DEPOSITING:
            logger.warning("deposit rejected in phase %s", self.phase.value)
            return Outcome.failure(DepositError.WRONG_PHASE)
        month = self.current_month if month is None else month
        if month > self.current_month:
            return Outcome.failure(DepositError.INVALID_MONTH)

        result = self.ledger.add_deposit(month, amount)
        if result.ok:
            logger.info("deposited %.2f at month %d", amount, month)
        return result

    def start_growing(self) -> Outcome[None]:
        if self.phase is not Phase.DEPOSITING:
            return Outcome.failure(TransitionError.WRONG_PHASE)
        if len(self.ledger) == 0:
            logger.debug("start_growing rejected: empty ledger")
            return Outcome.failure(TransitionError.NO_DEPOSITS)

        self.phase = Phase.GROWING
        self.current_month = 0
        logger.info("growing phase started with %d deposit(s)", len(self.ledger))
        return Outcome.success()

    def set_month(self, month: int) -> Outcome[int]:
        # The playable horizon is enforced by the caller, not here.
        if self.phase is not Phase.GROWING:
            return Outcome.failure(TransitionError.WRONG_PHASE)
        if month < 0:
            return Outcome.failure(TransitionError.INVALID_MONTH)
        if not self._balance_fits(month):
            logger.warning("set_month rejected: balance overflows at month %d", month)
            return Outcome.failure(TransitionError.INVALID_MONTH)

        self.current_month = month
        return Outcome.success(month)

    def withdraw(self, month: Optional[int] = None) -> Outcome[WithdrawalOutcome]:
        if self.phase is not Phase.GROWING:
            logger.warning("withdraw rejected in phase %s", self.phase.value)
            return Outcome.failure(TransitionError.WRONG_PHASE)
        month = self.current_month if month is None else month
        if month < 0:
            return Outcome.failure(TransitionError.INVALID_MONTH)

        try:
            balance = balance_at(month, self.ledger, self.monthly_rate)
        except BalanceOverflow:
            logger.warning("withdraw rejected: balance overflows at month %d", month)
            return Outcome.failure(TransitionError.INVALID_MONTH)
        # start_growing guarantees a non-empty ledger, so total > 0
        total = self.ledger.total_deposited()
        interest = round_cents(balance - total)

        self.withdrawal = Withdrawal(month=month, balance=balance)
        self.outcome = WithdrawalOutcome(
            month=month,
            total_deposited=total,
            balance=balance,
            interest_earned=interest,
            score_percent=score_percent(interest, total),
        )
        self.current_month = month
        self.phase = Phase.RESULTS
        logger.info(
            "withdrew %.2f at month %d (score %d%%)",
            balance,
            month,
            self.outcome.score_percent,
        )
        return Outcome.success(self.outcome)

    def finish(self) -> Outcome[int]:
        """Hand the score to the completion sink, once."""
        if self.phase is not Phase.RESULTS or self.outcome is None:
            return Outcome.failure(TransitionError.WRONG_PHASE)
        if self.completed:
            return Outcome.failure(TransitionError.ALREADY_COMPLETED)

        self.completed = True
        score = self.outcome.score_percent
        if self.on_complete is not None:
            self.on_complete(score)
        return Outcome.success(score)

    def _balance_fits(self, month: int) -> bool:
        try:
            balance_at(month, self.ledger, self.monthly_rate)
        except BalanceOverflow:
            return False
        return True

    def total_deposited(self) -> float:
        return self.ledger.total_deposited()

    def balance(self) -> float:
        return balance_at(self.current_month, self.ledger, self.monthly_rate)

    def snapshot(self) -> SimulationSnapshot:
        return SimulationSnapshot(
            phase=self.phase,
            current_month=self.current_month,
            deposits=list(self.ledger.deposits),
            total_deposited=self.total_deposited(),
            balance=self.balance(),
            withdrawal=self.withdrawal,
            outcome=self.outcome,
            completed=self.completed,
        )
