"""Medical case and answer history models."""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from ..extensions import db


class MedicalCase(db.Model):
    """A single multiple-choice medical case.

    Answer arrays are stored in authoring order; ``correct_answer_index``
    points into that order and is never rewritten by the presentation layer.
    """

    __tablename__ = 'medical_cases'

    case_id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    specialty = db.Column(db.String(100))
    difficulty_level = db.Column(db.Integer, default=1)
    points = db.Column(db.Integer, nullable=True)
    explanation = db.Column(db.Text)

    answer_options = db.Column(JSON, nullable=True)
    answer_feedbacks = db.Column(JSON, nullable=True)
    answer_short_tips = db.Column(JSON, nullable=True)
    correct_answer_index = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), onupdate=func.now())

    history = db.relationship(
        'UserCaseHistory',
        backref='case',
        lazy=True,
        cascade='all, delete-orphan',
    )

    def to_record(self) -> Dict[str, Any]:
        """Return the answer fields in the shape the case engine consumes."""
        return {
            'case_id': self.case_id,
            'answer_options': self.answer_options,
            'answer_feedbacks': self.answer_feedbacks,
            'answer_short_tips': self.answer_short_tips,
            'correct_answer_index': self.correct_answer_index,
        }

    def __repr__(self):
        return f"<MedicalCase {self.case_id}: {self.title}>"


class UserCaseHistory(db.Model):
    """One submitted attempt at a case, correct or not."""

    __tablename__ = 'user_case_history'

    history_id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=True, index=True)
    case_id = db.Column(db.Integer, db.ForeignKey('medical_cases.case_id'), nullable=False, index=True)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    points = db.Column(db.Integer, nullable=False, default=0)
    details = db.Column(JSON, nullable=True)
    answered_at = db.Column(db.DateTime(timezone=True), server_default=func.now())

    def to_dict(self):
        return {
            'history_id': self.history_id,
            'user_id': self.user_id,
            'case_id': self.case_id,
            'is_correct': self.is_correct,
            'points': self.points,
            'details': self.details or {},
            'answered_at': self.answered_at.isoformat() if self.answered_at else None,
        }
