"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from interest_sim.app.store import GameEntry, GameNotFound, GameStore
from interest_sim.core.config import SimulatorSettings
from interest_sim.core.messages import error_message
from interest_sim.core.ping import get_ping_message
from interest_sim.domain.accrual import BalanceOverflow, balance_at, round_cents
from interest_sim.domain.ledger import Deposit
from interest_sim.domain.outcome import DepositError, Outcome, TransitionError
from interest_sim.schemas.game import (
    BalanceRequest,
    BalanceResponse,
    ConfigResponse,
    DepositRequest,
    ErrorResponse,
    GameResponse,
    MonthRequest,
    ScoreResponse,
    WithdrawRequest,
)
from interest_sim.schemas.ping import PingResponse

api_bp = Blueprint("api", __name__)

ERROR_STATUS = {
    DepositError.NON_POSITIVE_AMOUNT: HTTPStatus.BAD_REQUEST,
    DepositError.INVALID_MONTH: HTTPStatus.BAD_REQUEST,
    DepositError.WRONG_PHASE: HTTPStatus.CONFLICT,
    DepositError.AMOUNT_TOO_LARGE: HTTPStatus.BAD_REQUEST,
    TransitionError.NO_DEPOSITS: HTTPStatus.BAD_REQUEST,
    TransitionError.INVALID_MONTH: HTTPStatus.BAD_REQUEST,
    TransitionError.WRONG_PHASE: HTTPStatus.CONFLICT,
    TransitionError.ALREADY_COMPLETED: HTTPStatus.CONFLICT,
}


def _settings() -> SimulatorSettings:
    return current_app.extensions["interest_sim.settings"]


def _games() -> GameStore:
    return current_app.extensions["interest_sim.games"]


def _payload() -> Dict[str, Any]:
    # an empty body means "all defaults"; a malformed one is a 400
    if not request.get_data():
        return {}
    return request.get_json(force=True, silent=False) or {}


def _outside_horizon(month: Optional[int]):
    max_months = _settings().max_months
    if month is None or month <= max_months:
        return None
    detail = [{"loc": ["month"], "msg": f"month must be between 0 and {max_months}"}]
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


def _game_response(entry: GameEntry) -> GameResponse:
    snapshot = entry.simulator.snapshot()
    outcome = snapshot.outcome
    return GameResponse(
        id=entry.id,
        phase=snapshot.phase.value,
        currentMonth=snapshot.current_month,
        deposits=[deposit.model_dump() for deposit in snapshot.deposits],
        totalDeposited=snapshot.total_deposited,
        balance=snapshot.balance,
        withdrawal=snapshot.withdrawal.model_dump() if snapshot.withdrawal else None,
        outcome=(
            {
                "totalDeposited": outcome.total_deposited,
                "balance": outcome.balance,
                "interestEarned": outcome.interest_earned,
                "scorePercent": outcome.score_percent,
            }
            if outcome
            else None
        ),
        completed=snapshot.completed,
        score=entry.score,
    )


def _respond(entry: GameEntry, outcome: Outcome, status: HTTPStatus = HTTPStatus.OK):
    if not outcome.ok:
        body = ErrorResponse(error=outcome.error.value, message=error_message(outcome.error))
        return jsonify(body.model_dump()), ERROR_STATUS.get(outcome.error, HTTPStatus.BAD_REQUEST)
    return jsonify(_game_response(entry).model_dump()), status


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(BadRequest)
def _handle_bad_request(exc: BadRequest):
    return jsonify({"error": "bad_request", "message": exc.description}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(BalanceOverflow)
def _handle_balance_overflow(exc: BalanceOverflow):
    return jsonify({"error": "balance_overflow", "message": str(exc)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(GameNotFound)
def _handle_game_not_found(exc: GameNotFound):
    return jsonify({"error": "not_found", "message": str(exc)}), HTTPStatus.NOT_FOUND


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message())
    return jsonify(response.model_dump())


@api_bp.get("/config")
def config() -> Any:
    """Tunables the front end needs to lay out its controls."""
    settings = _settings()
    response = ConfigResponse(
        annualRate=settings.annual_rate,
        monthlyRate=settings.monthly_rate,
        maxMonths=settings.max_months,
        depositPresets=settings.deposit_presets,
        defaultDeposit=settings.default_deposit,
        sliderTicks=settings.slider_ticks,
    )
    return jsonify(response.model_dump())


@api_bp.post("/calc/balance")
def balance() -> Any:
    """Balance of an ad-hoc deposit list at a given month."""
    payload = BalanceRequest.model_validate(_payload())
    # Deposit rejects non-positive amounts with a ValidationError -> 422
    deposits = [Deposit(month=row.month, amount=row.amount) for row in payload.deposits]
    value = balance_at(payload.month, deposits, _settings().monthly_rate)
    total = sum(deposit.amount for deposit in deposits)
    response = BalanceResponse(
        month=payload.month,
        balance=value,
        totalDeposited=total,
        interestEarned=round_cents(value - total),
    )
    return jsonify(response.model_dump())


@api_bp.post("/games")
def create_game() -> Any:
    entry = _games().create()
    return jsonify(_game_response(entry).model_dump()), HTTPStatus.CREATED


@api_bp.get("/games/<game_id>")
def get_game(game_id: str) -> Any:
    entry = _games().get(game_id)
    return jsonify(_game_response(entry).model_dump())


@api_bp.post("/games/<game_id>/deposits")
def add_deposit(game_id: str) -> Any:
    entry = _games().get(game_id)
    payload = DepositRequest.model_validate(_payload())
    with entry.lock:
        outcome = entry.simulator.add_deposit(payload.amount, month=payload.month)
        return _respond(entry, outcome, HTTPStatus.CREATED)


@api_bp.post("/games/<game_id>/start")
def start_growing(game_id: str) -> Any:
    entry = _games().get(game_id)
    with entry.lock:
        return _respond(entry, entry.simulator.start_growing())


@api_bp.put("/games/<game_id>/month")
def set_month(game_id: str) -> Any:
    entry = _games().get(game_id)
    payload = MonthRequest.model_validate(_payload())
    rejected = _outside_horizon(payload.month)
    if rejected:
        return rejected
    with entry.lock:
        return _respond(entry, entry.simulator.set_month(payload.month))


@api_bp.post("/games/<game_id>/withdraw")
def withdraw(game_id: str) -> Any:
    entry = _games().get(game_id)
    payload = WithdrawRequest.model_validate(_payload())
    rejected = _outside_horizon(payload.month)
    if rejected:
        return rejected
    with entry.lock:
        return _respond(entry, entry.simulator.withdraw(payload.month))


@api_bp.post("/games/<game_id>/finish")
def finish(game_id: str) -> Any:
    entry = _games().get(game_id)
    with entry.lock:
        outcome: Outcome[Optional[int]] = entry.simulator.finish()
        if not outcome.ok:
            return _respond(entry, outcome)
    return jsonify(ScoreResponse(score=outcome.value).model_dump())


@api_bp.delete("/games/<game_id>")
def delete_game(game_id: str) -> Any:
    _games().remove(game_id)
    return "", HTTPStatus.NO_CONTENT
