from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from interest_sim.app import create_app
from interest_sim.core.config import SimulatorSettings


@pytest.fixture()
def settings() -> SimulatorSettings:
    return SimulatorSettings()


@pytest.fixture()
def client(settings: SimulatorSettings) -> FlaskClient:
    flask_app = create_app(settings)
    with flask_app.test_client() as test_client:
        yield test_client
