"""Data contracts for the game and balance endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DepositIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    month: int = Field(..., ge=0, description="Simulated month the deposit was made.")
    amount: float = Field(..., description="Deposited amount; must be positive.")


class DepositRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: float
    month: Optional[int] = Field(None, ge=0, description="Defaults to the current month.")


class MonthRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    month: int = Field(..., ge=0)


class WithdrawRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    month: Optional[int] = Field(None, ge=0, description="Defaults to the current month.")


class BalanceRequest(BaseModel):
    """Stateless balance query over an explicit list of deposits."""

    model_config = ConfigDict(extra="forbid")

    deposits: List[DepositIn]
    month: int = Field(..., ge=0)


class BalanceResponse(BaseModel):
    month: int
    balance: float
    totalDeposited: float
    interestEarned: float


class WithdrawalOut(BaseModel):
    month: int
    balance: float


class OutcomeOut(BaseModel):
    totalDeposited: float
    balance: float
    interestEarned: float
    scorePercent: int


class GameResponse(BaseModel):
    id: str
    phase: str
    currentMonth: int
    deposits: List[DepositIn]
    totalDeposited: float
    balance: float
    withdrawal: Optional[WithdrawalOut] = None
    outcome: Optional[OutcomeOut] = None
    completed: bool = False
    score: Optional[int] = None


class ScoreResponse(BaseModel):
    score: int


class ErrorResponse(BaseModel):
    error: str
    message: str


class ConfigResponse(BaseModel):
    annualRate: float
    monthlyRate: float
    maxMonths: int
    depositPresets: List[int]
    defaultDeposit: float
    sliderTicks: List[int]
