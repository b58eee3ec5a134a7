"""Application factory and app-wide configuration."""

from typing import Optional

from flask import Flask
from flask_cors import CORS

from interest_sim.app.api.routes import api_bp
from interest_sim.app.store import GameStore
from interest_sim.core.config import SimulatorSettings, get_settings
from interest_sim.core.logging_config import setup_logging


def create_app(settings: Optional[SimulatorSettings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.extensions["interest_sim.settings"] = settings
    app.extensions["interest_sim.games"] = GameStore(
        monthly_rate=settings.monthly_rate, max_games=settings.max_games
    )

    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
