"""MedCase: clinical case practice with shuffled multiple-choice answers."""

from __future__ import annotations

from typing import Any

from flask import Flask

from .config import Config
from .core import bootstrap
from .extensions import db

__all__ = ["create_app", "db"]


def create_app(config_class: type[Config] = Config, **overrides: Any) -> Flask:
    """Build the app from ``config_class``; keyword overrides win over it."""

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)
    config_class.init_app(app)

    bootstrap.configure_logging(app)
    bootstrap.register_extensions(app)
    bootstrap.register_error_handlers(app)
    bootstrap.register_blueprints(app)

    with app.app_context():
        bootstrap.initialize_database(app)

    app.logger.info("MedCase app created (%s)", config_class.__name__)
    return app
