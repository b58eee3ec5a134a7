import pytest

from interest_sim.core.messages import deposit_message, error_message, growth_hint
from interest_sim.domain.outcome import DepositError, TransitionError


@pytest.mark.parametrize(
    "month, fragment",
    [(0, "Start at month 0"), (3, "slow growth"), (6, "add up"), (11, "add up"), (12, "longer you wait")],
)
def test_growth_hint_by_month(month, fragment):
    assert fragment in growth_hint(month)


def test_every_error_has_a_message():
    for error in list(DepositError) + list(TransitionError):
        assert error_message(error) != "Something went wrong"


def test_deposit_message_formats_amount():
    assert deposit_message(1000.0) == "Deposited ₹1000"
    assert deposit_message(12.5) == "Deposited ₹12.50"
