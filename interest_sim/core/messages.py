"""User-facing text for engine results."""

from __future__ import annotations

from enum import Enum

from interest_sim.domain.outcome import DepositError, TransitionError

ERROR_MESSAGES = {
    DepositError.NON_POSITIVE_AMOUNT: "Enter an amount greater than 0",
    DepositError.INVALID_MONTH: "Deposits can only be made at the current month",
    DepositError.WRONG_PHASE: "Deposits are closed once your money starts growing",
    DepositError.AMOUNT_TOO_LARGE: "That amount is too large",
    TransitionError.NO_DEPOSITS: "Make at least one deposit first!",
    TransitionError.WRONG_PHASE: "That action is not available right now",
    TransitionError.INVALID_MONTH: "That month is out of range",
    TransitionError.ALREADY_COMPLETED: "This game is already finished",
}


def error_message(error: Enum) -> str:
    return ERROR_MESSAGES.get(error, "Something went wrong")


def format_amount(amount: float) -> str:
    return f"{amount:.0f}" if float(amount).is_integer() else f"{amount:.2f}"


def deposit_message(amount: float) -> str:
    return f"Deposited ₹{format_amount(amount)}"


def growth_hint(month: int) -> str:
    """Nudge shown under the time slider."""
    if month == 0:
        return "Start at month 0. Slide to see your money grow!"
    if month < 6:
        return "Early months show slow growth, but don't withdraw yet!"
    if month < 12:
        return "Interest starts to add up! More time = more growth."
    return "The longer you wait, the more you earn!"


def results_summary(month: int, score_percent: int) -> str:
    return f"You waited {month} months and earned {score_percent}% extra through interest!"
