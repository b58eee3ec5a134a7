"""Typed results returned by engine operations instead of raising."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class DepositError(str, Enum):
    NON_POSITIVE_AMOUNT = "non_positive_amount"
    INVALID_MONTH = "invalid_month"
    WRONG_PHASE = "wrong_phase"
    AMOUNT_TOO_LARGE = "amount_too_large"


class TransitionError(str, Enum):
    NO_DEPOSITS = "no_deposits"
    WRONG_PHASE = "wrong_phase"
    INVALID_MONTH = "invalid_month"
    ALREADY_COMPLETED = "already_completed"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or an error, never both."""

    value: Optional[T] = None
    error: Optional[Enum] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Enum) -> "Outcome[T]":
        return cls(error=error)
