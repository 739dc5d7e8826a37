"""
Answer Shuffle Engine.
Pure logic, no database access.

Each choice is carried through the permutation together with a marker flag
saying whether it is the correct one; the new correct position is found by
scanning for the flag afterwards instead of following swap arithmetic.
"""

from __future__ import annotations

import hashlib
import json
import random
from collections.abc import Mapping, Sequence
from typing import Any, List, NamedTuple, Optional, Tuple

from medcase_app.core.logging_config import get_logger

from ..schemas import AnswerChoice, CaseAnswerSet, ShuffleResult

logger = get_logger('medcase.cases.shuffle')


class _ChoiceRecord(NamedTuple):
    original_index: int
    option: str
    feedback: str
    short_tip: str
    is_correct: bool


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _coerce_text(value: Any) -> str:
    return '' if value is None else str(value)


def _coerce_index(value: Any) -> Optional[int]:
    """Whole numbers only; anything else (2.7, "abc", True) means no known index."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        digits = value.strip()
        if digits.isascii() and digits.isdigit():
            return int(digits)
    return None


def _pad(values: Any, length: int) -> List[str]:
    """Return exactly ``length`` strings, padding missing entries with ''."""
    items = list(values) if _is_sequence(values) else []
    padded = [_coerce_text(v) for v in items[:length]]
    padded.extend([''] * (length - len(padded)))
    return padded


def answer_fingerprint(options, feedbacks, short_tips, correct_index) -> str:
    """Stable hash of a case's answer fields."""
    payload = {
        'options': list(options),
        'feedbacks': list(feedbacks),
        'short_tips': list(short_tips),
        'correct_index': correct_index,
    }
    blob = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    return hashlib.sha1(blob.encode('utf-8')).hexdigest()


class ShuffleEngine:

    @staticmethod
    def prepare(options, feedbacks=None, short_tips=None, correct_index=None
                ) -> Optional[Tuple[List[str], List[str], List[str], Optional[int]]]:
        """Coerce raw answer fields into aligned lists.

        Returns ``None`` when there is nothing to present.
        """
        if not _is_sequence(options) or len(options) == 0:
            return None
        option_texts = [_coerce_text(o) for o in options]
        n = len(option_texts)
        return option_texts, _pad(feedbacks, n), _pad(short_tips, n), _coerce_index(correct_index)

    @classmethod
    def fingerprint(cls, options, feedbacks=None, short_tips=None, correct_index=None) -> Optional[str]:
        prepared = cls.prepare(options, feedbacks, short_tips, correct_index)
        if prepared is None:
            return None
        return answer_fingerprint(*prepared)

    @classmethod
    def shuffle(cls, options, feedbacks=None, short_tips=None, correct_index=None,
                rng: Optional[random.Random] = None) -> Optional[ShuffleResult]:
        """
        Produce a uniformly random presentation order.

        Args:
            options: Answer texts in authoring order.
            feedbacks: Per-choice feedback; short or missing lists are padded.
            short_tips: Per-choice tips; short or missing lists are padded.
            correct_index: Authoring index of the correct choice.
            rng: Optional ``random.Random``; the module-level generator otherwise.

        Returns:
            A ShuffleResult, or ``None`` if there are no options.
        """
        prepared = cls.prepare(options, feedbacks, short_tips, correct_index)
        if prepared is None:
            return None
        option_texts, feedback_texts, tip_texts, correct = prepared

        records = [
            _ChoiceRecord(i, option_texts[i], feedback_texts[i], tip_texts[i], i == correct)
            for i in range(len(option_texts))
        ]

        # Fisher-Yates
        rand = rng or random
        for i in range(len(records) - 1, 0, -1):
            j = rand.randint(0, i)
            records[i], records[j] = records[j], records[i]

        new_correct = next((pos for pos, rec in enumerate(records) if rec.is_correct), None)
        if new_correct is None:
            logger.warning(
                "Correct index %r is outside %d options, case left ungraded",
                correct_index, len(records),
            )

        return ShuffleResult(
            options=tuple(r.option for r in records),
            feedbacks=tuple(r.feedback for r in records),
            short_tips=tuple(r.short_tip for r in records),
            correct_index=new_correct,
            original_indices=tuple(r.original_index for r in records),
            fingerprint=answer_fingerprint(option_texts, feedback_texts, tip_texts, correct),
        )

    @classmethod
    def shuffle_case(cls, record: Mapping, rng: Optional[random.Random] = None) -> Optional[ShuffleResult]:
        """Shuffle a case record exposing the ``answer_*`` fields."""
        if not isinstance(record, Mapping):
            return None
        return cls.shuffle(
            record.get('answer_options'),
            record.get('answer_feedbacks'),
            record.get('answer_short_tips'),
            record.get('correct_answer_index'),
            rng=rng,
        )

    @classmethod
    def fingerprint_case(cls, record: Mapping) -> Optional[str]:
        if not isinstance(record, Mapping):
            return None
        return cls.fingerprint(
            record.get('answer_options'),
            record.get('answer_feedbacks'),
            record.get('answer_short_tips'),
            record.get('correct_answer_index'),
        )

    @classmethod
    def answer_set(cls, record: Mapping) -> Optional[CaseAnswerSet]:
        """Build the authoring-order answer set, or ``None`` if not ready."""
        if not isinstance(record, Mapping):
            return None
        prepared = cls.prepare(
            record.get('answer_options'),
            record.get('answer_feedbacks'),
            record.get('answer_short_tips'),
            record.get('correct_answer_index'),
        )
        if prepared is None:
            return None
        options, feedbacks, tips, correct = prepared
        choices = tuple(AnswerChoice(o, f, t) for o, f, t in zip(options, feedbacks, tips))
        return CaseAnswerSet(choices=choices, correct_index=correct)
