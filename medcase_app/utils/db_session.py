"""Commit helpers for SQLite-backed deployments.

SQLite holds a write lock for the whole transaction, so two requests
recording answers at the same moment can see ``database is locked``.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.session import Session

from ..core.logging_config import get_logger

logger = get_logger('medcase.db')

LOCKED_MESSAGES = {"database is locked", "database is busy"}


def is_lock_error(error: OperationalError) -> bool:
    message = str(error).lower()
    return any(token in message for token in LOCKED_MESSAGES)


def safe_commit(session: Session, stage: Optional[Callable[[], None]] = None,
                retries: int = 5, initial_delay: float = 0.1) -> None:
    """Commit ``session``, backing off and retrying while SQLite is locked.

    A rollback discards whatever was pending, so writes that must survive a
    retry go in ``stage``: it runs before every attempt and re-adds them.
    The delay doubles after each failed attempt. Errors that are not lock
    errors, and the last lock error, are re-raised after a rollback.
    """

    delay = initial_delay
    for attempt in range(1, retries + 1):
        try:
            if stage is not None:
                stage()
            session.commit()
            return
        except OperationalError as exc:
            session.rollback()
            if attempt == retries or not is_lock_error(exc):
                raise
            logger.warning("Commit attempt %d/%d hit a lock, retrying in %.2fs", attempt, retries, delay)
            time.sleep(delay)
            delay *= 2
