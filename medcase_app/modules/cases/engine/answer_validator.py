"""
Answer Validator.
Pure logic, no database access.

Index comparison is authoritative. Text comparison is only a fallback for
older records whose correct answer was stored as a string.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

from ..schemas import ValidationInput, ValidationOutcome

_NON_WORD_RE = re.compile(r'[^\w\s]')
_WHITESPACE_RE = re.compile(r'\s+')


def normalize_text(text: Optional[str]) -> str:
    """
    Canonical form for free-text answer comparison.

    Lowercases, trims, strips diacritics, drops punctuation and symbols, and
    collapses whitespace. ``normalize_text(normalize_text(x)) == normalize_text(x)``.
    """
    if not text:
        return ''
    lowered = str(text).lower().strip()
    decomposed = unicodedata.normalize('NFD', lowered)
    without_marks = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    without_punct = _NON_WORD_RE.sub('', without_marks)
    return _WHITESPACE_RE.sub(' ', without_punct).strip()


class AnswerValidator:

    @staticmethod
    def match(selected_index: Optional[int], selected_text: Optional[str],
              correct_index: Optional[int], correct_text: Optional[str]) -> ValidationOutcome:
        """Decide correctness and report which rule decided it."""
        if correct_index is not None and selected_index == correct_index:
            return ValidationOutcome(True, 'index')

        # An empty normalized form (blank or symbols only) carries no signal.
        selected_norm = normalize_text(selected_text)
        if selected_norm and selected_norm == normalize_text(correct_text):
            return ValidationOutcome(True, 'text')

        return ValidationOutcome(False, 'none')

    @classmethod
    def is_correct(cls, selected_index: Optional[int], selected_text: Optional[str],
                   correct_index: Optional[int], correct_text: Optional[str]) -> bool:
        return cls.match(selected_index, selected_text, correct_index, correct_text).is_correct

    @classmethod
    def validate(cls, request: ValidationInput) -> ValidationOutcome:
        return cls.match(
            request.selected_index,
            request.selected_text,
            request.correct_index,
            request.correct_text,
        )
