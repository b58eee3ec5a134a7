"""Compound-interest teaching game: deposit, watch it grow, withdraw."""

from interest_sim.domain.accrual import balance_at, growth_schedule
from interest_sim.domain.ledger import Deposit, Ledger
from interest_sim.domain.outcome import DepositError, Outcome, TransitionError
from interest_sim.domain.simulation import (
    Phase,
    SimulationSnapshot,
    Simulator,
    Withdrawal,
    WithdrawalOutcome,
)

__all__ = [
    "balance_at",
    "growth_schedule",
    "Deposit",
    "Ledger",
    "DepositError",
    "Outcome",
    "TransitionError",
    "Phase",
    "SimulationSnapshot",
    "Simulator",
    "Withdrawal",
    "WithdrawalOutcome",
]
