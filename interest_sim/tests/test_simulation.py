from __future__ import annotations

from math import isclose

import pytest

from interest_sim.domain.outcome import DepositError, TransitionError
from interest_sim.domain.simulation import Phase, Simulator


def growing_simulator(*amounts: float) -> Simulator:
    sim = Simulator()
    for amount in amounts or (1000.0,):
        assert sim.add_deposit(amount).ok
    assert sim.start_growing().ok
    return sim


def test_new_simulator_starts_depositing_at_month_zero():
    sim = Simulator()
    snapshot = sim.snapshot()
    assert snapshot.phase is Phase.DEPOSITING
    assert snapshot.current_month == 0
    assert snapshot.deposits == []
    assert snapshot.withdrawal is None


def test_start_growing_requires_a_deposit():
    sim = Simulator()
    result = sim.start_growing()
    assert result.error is TransitionError.NO_DEPOSITS
    assert sim.phase is Phase.DEPOSITING


def test_start_growing_moves_to_growing_at_month_zero():
    sim = growing_simulator(500.0)
    assert sim.phase is Phase.GROWING
    assert sim.current_month == 0


def test_start_growing_twice_is_wrong_phase():
    sim = growing_simulator()
    assert sim.start_growing().error is TransitionError.WRONG_PHASE


def test_rejected_deposit_leaves_state_unchanged():
    sim = Simulator()
    result = sim.add_deposit(month=0, amount=-5)
    assert result.error is DepositError.NON_POSITIVE_AMOUNT
    assert len(sim.ledger) == 0


def test_deposit_after_depositing_phase_is_wrong_phase():
    sim = growing_simulator()
    assert sim.add_deposit(100.0).error is DepositError.WRONG_PHASE
    assert len(sim.ledger) == 1


def test_deposit_in_the_future_is_rejected():
    sim = Simulator()
    assert sim.add_deposit(100.0, month=3).error is DepositError.INVALID_MONTH


def test_set_month_only_while_growing():
    sim = Simulator()
    sim.add_deposit(1000.0)
    assert sim.set_month(5).error is TransitionError.WRONG_PHASE
    assert sim.current_month == 0

    sim.start_growing()
    assert sim.set_month(5).ok
    assert sim.current_month == 5


def test_set_month_accepts_months_beyond_playable_horizon():
    sim = growing_simulator()
    assert sim.set_month(120).ok
    assert sim.set_month(-1).error is TransitionError.INVALID_MONTH
    assert sim.current_month == 120


def test_set_month_does_not_touch_ledger():
    sim = growing_simulator(500.0, 500.0)
    before = sim.ledger.deposits
    sim.set_month(12)
    sim.set_month(3)
    assert sim.ledger.deposits == before


def test_balance_follows_current_month():
    sim = growing_simulator()
    sim.set_month(12)
    assert sim.balance() == 1051.16
    assert sim.snapshot().balance == 1051.16


def test_withdraw_at_month_zero_scores_zero():
    sim = growing_simulator(500.0, 500.0)
    result = sim.withdraw(0)

    assert result.ok
    outcome = result.value
    assert outcome.total_deposited == 1000.0
    assert outcome.balance == 1000.0
    assert outcome.interest_earned == 0
    assert outcome.score_percent == 0
    assert sim.phase is Phase.RESULTS


def test_withdraw_after_two_years():
    sim = growing_simulator(1000.0)
    sim.set_month(24)
    outcome = sim.withdraw().value

    assert outcome.month == 24
    assert outcome.balance == 1104.94
    assert isclose(outcome.interest_earned, 104.94)
    assert outcome.score_percent == 10
    assert sim.withdrawal.month == 24
    assert sim.withdrawal.balance == 1104.94


@pytest.mark.parametrize("phase", ["depositing", "results"])
def test_withdraw_outside_growing_is_wrong_phase(phase):
    sim = Simulator()
    sim.add_deposit(1000.0)
    if phase == "results":
        sim.start_growing()
        sim.withdraw(6)
    first_withdrawal = sim.withdrawal

    result = sim.withdraw(12)

    assert result.error is TransitionError.WRONG_PHASE
    assert sim.withdrawal == first_withdrawal


def test_results_phase_is_terminal():
    sim = growing_simulator()
    sim.withdraw(3)
    assert sim.start_growing().error is TransitionError.WRONG_PHASE
    assert sim.set_month(10).error is TransitionError.WRONG_PHASE
    assert sim.add_deposit(10.0).error is DepositError.WRONG_PHASE
    assert sim.phase is Phase.RESULTS


def test_finish_delivers_score_once():
    scores = []
    sim = Simulator(on_complete=scores.append)
    sim.add_deposit(1000.0)
    sim.start_growing()
    sim.withdraw(24)

    assert sim.finish().value == 10
    assert sim.finish().error is TransitionError.ALREADY_COMPLETED
    assert scores == [10]
    assert sim.snapshot().completed


def test_finish_before_results_is_wrong_phase():
    scores = []
    sim = Simulator(on_complete=scores.append)
    sim.add_deposit(1000.0)
    assert sim.finish().error is TransitionError.WRONG_PHASE
    assert scores == []


def test_simulators_are_independent():
    first = growing_simulator(1000.0)
    second = Simulator()
    first.set_month(6)
    assert second.snapshot().deposits == []
    assert second.current_month == 0


def test_custom_rate():
    sim = Simulator(monthly_rate=0.01)
    sim.add_deposit(100.0)
    sim.start_growing()
    assert sim.withdraw(1).value.balance == 101.0


def test_deposit_month_is_keyword_only():
    sim = Simulator()
    with pytest.raises(TypeError):
        sim.add_deposit(100.0, 0)


def test_huge_deposit_keeps_engine_usable():
    sim = Simulator()
    assert sim.add_deposit(1e30).ok
    assert sim.snapshot().balance == 1e30

    sim.start_growing()
    assert sim.set_month(12).ok
    assert sim.snapshot().balance > 1e30
    outcome = sim.withdraw().value
    assert outcome.total_deposited == 1e30
    assert outcome.score_percent == 5


def test_deposit_that_overflows_total_is_rejected():
    sim = Simulator()
    assert sim.add_deposit(1e308).ok
    assert sim.add_deposit(1e308).error is DepositError.AMOUNT_TOO_LARGE
    assert len(sim.ledger) == 1
    assert sim.snapshot().total_deposited == 1e308


def test_month_with_unrepresentable_balance_is_rejected():
    sim = growing_simulator(1000.0)
    sim.set_month(6)

    assert sim.set_month(200000).error is TransitionError.INVALID_MONTH
    assert sim.current_month == 6
    assert sim.snapshot().current_month == 6

    assert sim.withdraw(200000).error is TransitionError.INVALID_MONTH
    assert sim.phase is Phase.GROWING
    assert sim.withdrawal is None


def test_overflow_from_large_principal_is_rejected():
    sim = growing_simulator(1e308)
    assert sim.set_month(1000).error is TransitionError.INVALID_MONTH
    assert sim.withdraw(1000).error is TransitionError.INVALID_MONTH
    assert sim.withdraw(0).ok


def test_large_month_within_range_is_accepted():
    sim = Simulator(monthly_rate=0.0)
    sim.add_deposit(100.0)
    sim.start_growing()
    assert sim.set_month(200000).ok
    assert sim.balance() == 100.0
