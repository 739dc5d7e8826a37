"""Runtime settings stored in the database."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.sql import func

from ..extensions import db


class AppSettings(db.Model):
    """One JSON value per key; a stored value overrides the code default."""

    __tablename__ = 'app_settings'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.JSON, nullable=False)
    category = db.Column(db.String(50), nullable=False, default='system')
    description = db.Column(db.Text)
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        row = db.session.get(cls, key)
        return default if row is None or row.value is None else row.value

    @classmethod
    def set(cls, key: str, value: Any, category: Optional[str] = None,
            description: Optional[str] = None) -> 'AppSettings':
        """Upsert ``key``; committing is left to the caller."""
        row = db.session.get(cls, key)
        if row is None:
            row = cls(key=key, category=category or 'system')
            db.session.add(row)
        elif category:
            row.category = category
        row.value = value
        if description is not None:
            row.description = description
        return row

    def __repr__(self):
        return f"<AppSettings {self.key}={self.value!r}>"
