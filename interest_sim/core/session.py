"""
Host-side game session.

Holds the ephemeral state a front end needs around a Simulator: the
pending deposit input, the chosen preset and a transient message that the
host clears after a delay through its own scheduler.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Protocol

from interest_sim.core.config import SimulatorSettings, get_settings
from interest_sim.core.messages import (
    deposit_message,
    error_message,
    growth_hint,
    results_summary,
)
from interest_sim.domain.accrual import round_whole
from interest_sim.domain.outcome import Outcome
from interest_sim.domain.simulation import Phase, Simulator

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        ...


class GameSession:
    def __init__(
        self,
        scheduler: Scheduler,
        settings: Optional[SimulatorSettings] = None,
        on_complete: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.scheduler = scheduler
        self.simulator = Simulator(
            monthly_rate=self.settings.monthly_rate,
            on_complete=on_complete,
        )
        self.deposit_input: float = self.settings.default_deposit
        self.message = ""
        self._message_token = 0

    # -- transient messages --

    def _flash(self, text: str) -> None:
        self._message_token += 1
        token = self._message_token
        self.message = text

        def clear() -> None:
            # a newer message owns the slot now
            if self._message_token == token:
                self.message = ""

        self.scheduler.schedule(self.settings.message_seconds, clear)

    def _report(self, outcome: Outcome) -> Outcome:
        if not outcome.ok:
            self._flash(error_message(outcome.error))
        return outcome

    # -- actions --

    def choose_preset(self, amount: int) -> None:
        if amount not in self.settings.deposit_presets:
            raise ValueError(f"{amount} is not a deposit preset")
        self.deposit_input = amount

    def set_deposit_input(self, amount: float) -> None:
        self.deposit_input = amount

    def deposit(self) -> Outcome:
        amount = self.deposit_input
        outcome = self._report(self.simulator.add_deposit(amount))
        if outcome.ok:
            self._flash(deposit_message(amount))
            self.deposit_input = self.settings.default_deposit
        return outcome

    def start_growing(self) -> Outcome:
        return self._report(self.simulator.start_growing())

    def scrub(self, month: int) -> Outcome:
        month = max(0, min(month, self.settings.max_months))
        return self._report(self.simulator.set_month(month))

    def withdraw(self) -> Outcome:
        return self._report(self.simulator.withdraw())

    def finish(self) -> Outcome:
        outcome = self._report(self.simulator.finish())
        if outcome.ok:
            logger.info("game finished with score %d", outcome.value)
        return outcome

    # -- rendering --

    def view(self) -> Dict[str, Any]:
        snapshot = self.simulator.snapshot()
        view: Dict[str, Any] = {
            "phase": snapshot.phase.value,
            "month": snapshot.current_month,
            "deposits": [deposit.amount for deposit in snapshot.deposits],
            "totalDeposited": snapshot.total_deposited,
            "balance": snapshot.balance,
            "depositInput": self.deposit_input,
            "presets": list(self.settings.deposit_presets),
            "message": self.message,
        }
        if snapshot.phase is Phase.GROWING:
            view["interestSoFar"] = round_whole(snapshot.balance - snapshot.total_deposited)
            view["hint"] = growth_hint(snapshot.current_month)
            view["maxMonths"] = self.settings.max_months
            view["ticks"] = self.settings.slider_ticks
        if snapshot.outcome is not None:
            view["interestEarned"] = snapshot.outcome.interest_earned
            view["score"] = snapshot.outcome.score_percent
            view["summary"] = results_summary(
                snapshot.outcome.month, snapshot.outcome.score_percent
            )
        return view
