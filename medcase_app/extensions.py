"""Shared Flask extensions.

``db`` is created unbound here and attached in the factory, so models and
services import it without pulling in the app.
"""

import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()

# Applied to every new SQLite connection: concurrent readers while one request
# writes an attempt, and a long wait instead of an immediate "database is locked".
SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA busy_timeout=30000",
    "PRAGMA foreign_keys=ON",
)


@event.listens_for(Engine, "connect")
def _on_connect(dbapi_connection, _connection_record):
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


__all__ = ["db", "SQLITE_PRAGMAS"]
