"""Steps run by ``create_app`` to wire the Flask application."""

from __future__ import annotations

import logging

from flask import Flask
from flask.logging import default_handler

from ..extensions import db
from .error_handlers import register_error_handlers
from .logging_config import setup_logging
from .module_registry import register_modules


def configure_logging(app: Flask) -> None:
    """Give ``app.logger`` a formatted stream handler, unless the host set one."""

    if any(h is not default_handler for h in app.logger.handlers):
        return
    app.logger.removeHandler(default_handler)

    level_name = str(app.config.get("LOG_LEVEL", "DEBUG")).upper()
    app.logger.setLevel(getattr(logging, level_name, logging.DEBUG))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    app.logger.addHandler(handler)
    app.logger.propagate = False

    if app.config.get("LOG_DIR"):
        setup_logging(app, log_level=level_name, log_dir=app.config["LOG_DIR"],
                      json_format=bool(app.config.get("LOG_JSON")))


def register_extensions(app: Flask) -> None:
    db.init_app(app)


def register_blueprints(app: Flask) -> None:
    register_modules(app)


def initialize_database(app: Flask) -> None:
    """Create missing tables; existing ones are left untouched."""

    from .. import models  # noqa: F401  (registers the tables)

    db.create_all()
    app.logger.debug("Tables ready on %s", app.config.get("SQLALCHEMY_DATABASE_URI"))


__all__ = [
    "configure_logging",
    "initialize_database",
    "register_blueprints",
    "register_error_handlers",
    "register_extensions",
]
