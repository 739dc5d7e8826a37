from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class AnswerChoice:
    text: str
    feedback: str = ''
    short_tip: str = ''


@dataclass(frozen=True)
class CaseAnswerSet:
    """Answer choices in authoring order plus the authoring correct index."""

    choices: Tuple[AnswerChoice, ...]
    correct_index: Optional[int]

    @property
    def options(self) -> Tuple[str, ...]:
        return tuple(c.text for c in self.choices)

    @property
    def feedbacks(self) -> Tuple[str, ...]:
        return tuple(c.feedback for c in self.choices)

    @property
    def short_tips(self) -> Tuple[str, ...]:
        return tuple(c.short_tip for c in self.choices)

    @property
    def correct_text(self) -> Optional[str]:
        if self.correct_index is None or not 0 <= self.correct_index < len(self.choices):
            return None
        return self.choices[self.correct_index].text


@dataclass(frozen=True)
class ShuffleResult:
    """One presentation order for a case.

    ``options``, ``feedbacks``, ``short_tips`` and ``original_indices`` are
    parallel: position ``i`` of each refers to the same authoring choice.
    ``correct_index`` is ``None`` when the authoring index was out of range.
    """

    options: Tuple[str, ...]
    feedbacks: Tuple[str, ...]
    short_tips: Tuple[str, ...]
    correct_index: Optional[int]
    original_indices: Tuple[int, ...] = field(default_factory=tuple)
    fingerprint: str = ''

    @property
    def is_gradable(self) -> bool:
        return self.correct_index is not None

    def original_index_of(self, position: int) -> Optional[int]:
        """Map a shuffled position back to the authoring order."""
        if 0 <= position < len(self.original_indices):
            return self.original_indices[position]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'options': list(self.options),
            'feedbacks': list(self.feedbacks),
            'short_tips': list(self.short_tips),
            'correct_index': self.correct_index,
            'original_indices': list(self.original_indices),
            'fingerprint': self.fingerprint,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ShuffleResult':
        return cls(
            options=tuple(data.get('options') or ()),
            feedbacks=tuple(data.get('feedbacks') or ()),
            short_tips=tuple(data.get('short_tips') or ()),
            correct_index=data.get('correct_index'),
            original_indices=tuple(data.get('original_indices') or ()),
            fingerprint=data.get('fingerprint') or '',
        )


@dataclass(frozen=True)
class ValidationInput:
    selected_index: Optional[int]
    selected_text: Optional[str]
    correct_index: Optional[int]
    correct_text: Optional[str]


@dataclass(frozen=True)
class ValidationOutcome:
    is_correct: bool
    matched_by: str  # 'index', 'text' or 'none'
