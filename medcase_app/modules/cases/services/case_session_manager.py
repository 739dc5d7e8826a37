# File: medcase_app/modules/cases/services/case_session_manager.py
# Case viewing session: one presentation order, help usage and the answer.

import random
import time
from typing import Any, Dict, List, Optional

from flask import current_app, session

from medcase_app.core.error_handlers import SessionStateError, ValidationError
from medcase_app.core.signals import case_answered
from ..config import CaseLearningConfig
from ..engine import AnswerValidator, ShuffleCache, ShuffleEngine
from ..logics.elimination_logic import eliminable_positions, pick_elimination
from ..logics.scoring_logic import calculate_points
from ..schemas import ShuffleResult
from .case_config_service import CaseConfigService
from .history_service import CaseHistoryRecorder


class CaseSessionManager:
    """
    Tracks the case a viewer is looking at.
    Persisted in the Flask session under SESSION_KEY.
    """
    SESSION_KEY = 'case_session'

    def __init__(self, case_id=None, shuffle_cache=None, help_used=None,
                 eliminated=None, start_time=None, answered=False, last_result=None):
        self.case_id = case_id
        self.shuffle_cache = shuffle_cache or ShuffleCache()
        self.help_used: List[str] = list(help_used or [])
        self.eliminated: List[int] = list(eliminated or [])
        self.start_time = start_time
        self.answered = answered
        self.last_result = last_result

    def to_dict(self) -> Dict[str, Any]:
        return {
            'case_id': self.case_id,
            'shuffle_cache': self.shuffle_cache.to_dict(),
            'help_used': self.help_used,
            'eliminated': self.eliminated,
            'start_time': self.start_time,
            'answered': self.answered,
            'last_result': self.last_result,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'CaseSessionManager':
        data = data or {}
        return cls(
            case_id=data.get('case_id'),
            shuffle_cache=ShuffleCache.from_dict(data.get('shuffle_cache')),
            help_used=data.get('help_used'),
            eliminated=data.get('eliminated'),
            start_time=data.get('start_time'),
            answered=bool(data.get('answered')),
            last_result=data.get('last_result'),
        )

    @classmethod
    def load(cls) -> 'CaseSessionManager':
        return cls.from_dict(session.get(cls.SESSION_KEY))

    def save(self) -> None:
        session[self.SESSION_KEY] = self.to_dict()
        session.modified = True

    # ------------------------------------------------------------------ #
    #  Presentation                                                        #
    # ------------------------------------------------------------------ #

    def _reset_viewing_state(self) -> None:
        self.help_used = []
        self.eliminated = []
        self.start_time = time.time()
        self.answered = False
        self.last_result = None

    def start_viewing(self, case, rng: Optional[random.Random] = None) -> Optional[ShuffleResult]:
        """Begin a fresh view of ``case`` with a new presentation order."""
        self.shuffle_cache.clear()
        self.case_id = case.case_id
        self._reset_viewing_state()
        current_app.logger.debug(f"CaseSessionManager: new viewing of case {case.case_id}")
        return self.current_result(case, rng=rng)

    def current_result(self, case, rng: Optional[random.Random] = None) -> Optional[ShuffleResult]:
        """
        The live order for ``case``.

        Repeated calls with unchanged case data return the same order. If the
        answer fields changed since the order was built, a new one replaces it
        and the positions eliminated on the old order are dropped.
        """
        if self.case_id != case.case_id:
            return self.start_viewing(case, rng=rng)

        previous = self.shuffle_cache.get(case.case_id)
        result = self.shuffle_cache.get_or_shuffle(case.case_id, case.to_record(), rng=rng)
        if previous is not None and result is not previous:
            current_app.logger.info(f"Answers of case {case.case_id} changed during viewing, order rebuilt")
            self.eliminated = []
        return result

    def max_eliminations(self) -> int:
        return CaseConfigService.get_config('CASE_MAX_ELIMINATIONS')

    def can_eliminate(self, result: Optional[ShuffleResult]) -> bool:
        if result is None or self.answered:
            return False
        if len(self.eliminated) >= self.max_eliminations():
            return False
        return bool(eliminable_positions(len(result.options), result.correct_index, self.eliminated))

    def presentation(self, case, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        """Payload for rendering; never reveals the correct position."""
        result = self.current_result(case, rng=rng)
        payload = {
            'case_id': case.case_id,
            'title': case.title,
            'ready': result is not None,
            'options': list(result.options) if result else [],
            'short_tips': list(result.short_tips) if result else [],
            'eliminated': list(self.eliminated),
            'can_eliminate': self.can_eliminate(result),
            'answered': self.answered,
        }
        if self.answered and self.last_result:
            payload['result'] = self.last_result
        return payload

    # ------------------------------------------------------------------ #
    #  Help                                                                #
    # ------------------------------------------------------------------ #

    def _require_viewing(self, case) -> ShuffleResult:
        if self.case_id != case.case_id:
            raise SessionStateError(f"Case {case.case_id} is not being viewed.")
        result = self.current_result(case)
        if result is None:
            raise SessionStateError(f"Case {case.case_id} has no answer options.")
        return result

    def eliminate_option(self, case, rng: Optional[random.Random] = None) -> Dict[str, Any]:
        """Remove one random incorrect option from the presentation."""
        result = self._require_viewing(case)
        if self.answered:
            raise SessionStateError("Case already answered.")

        limit = self.max_eliminations()
        if len(self.eliminated) >= limit:
            raise SessionStateError(f"At most {limit} options can be eliminated per case.")

        position = pick_elimination(len(result.options), result.correct_index, self.eliminated, rng=rng)
        if position is None:
            raise SessionStateError("No incorrect options left to eliminate.")

        self.eliminated.append(position)
        self.help_used.append(CaseLearningConfig.HELP_ELIMINATION)
        return {
            'eliminated_index': position,
            'eliminated': list(self.eliminated),
            'remaining_eliminations': max(0, limit - len(self.eliminated)),
            'can_eliminate': self.can_eliminate(result),
        }

    def register_help(self, case, kind: str) -> Dict[str, Any]:
        """Record a help that only affects scoring (skip, AI hint)."""
        self._require_viewing(case)
        if self.answered:
            raise SessionStateError("Case already answered.")
        allowed = (CaseLearningConfig.HELP_SKIP, CaseLearningConfig.HELP_AI_HINT)
        if kind not in allowed:
            raise ValidationError(f"Unknown help type '{kind}'.", errors={'kind': list(allowed)})
        self.help_used.append(kind)
        return {'help_used': list(self.help_used)}

    # ------------------------------------------------------------------ #
    #  Answer                                                              #
    # ------------------------------------------------------------------ #

    def submit_answer(self, case, selected_index, user_id=None) -> Dict[str, Any]:
        """
        Grade the option shown at ``selected_index`` and record the attempt.

        The index refers to the shuffled order. It is compared with the
        shuffled correct position first; the option text is compared with the
        authoring correct text only when the positions differ.
        """
        result = self._require_viewing(case)
        if self.answered:
            raise SessionStateError("Case already answered.")

        if isinstance(selected_index, bool) or not isinstance(selected_index, int):
            raise ValidationError("selected_index must be an integer.")
        if not 0 <= selected_index < len(result.options):
            raise ValidationError(
                f"selected_index {selected_index} out of range.",
                errors={'selected_index': f"0..{len(result.options) - 1}"},
            )

        answer_set = ShuffleEngine.answer_set(case.to_record())
        correct_text = answer_set.correct_text if answer_set else None
        selected_text = result.options[selected_index]

        outcome = AnswerValidator.match(selected_index, selected_text, result.correct_index, correct_text)
        graded = result.is_gradable
        if not graded:
            current_app.logger.warning(
                f"Case {case.case_id} has correct_answer_index={case.correct_answer_index!r} "
                f"outside its {len(result.options)} options; attempt left ungraded"
            )

        base_points = case.points or CaseConfigService.get_config('CASE_DEFAULT_POINTS')
        points, breakdown = calculate_points(
            base_points, outcome.is_correct, self.help_used, CaseConfigService.penalty_percentages()
        )
        time_spent = int(time.time() - self.start_time) if self.start_time else 0

        if outcome.matched_by == 'text':
            current_app.logger.info(
                f"Case {case.case_id}: answer accepted by text comparison "
                f"(selected={selected_text!r}, correct={correct_text!r})"
            )

        details = {
            'time_spent': time_spent,
            'help_used': list(self.help_used),
            'penalties': breakdown['penalties'],
            'base_points': base_points,
            'selected_index': selected_index,
            'selected_original_index': result.original_index_of(selected_index),
            'selected_text': selected_text,
            'correct_text': correct_text,
            'matched_by': outcome.matched_by,
            'graded': graded,
            'eliminated_options': list(self.eliminated),
        }
        CaseHistoryRecorder.record_attempt(user_id, case.case_id, outcome.is_correct, points, details)

        case_answered.send(
            self,
            user_id=user_id,
            case_id=case.case_id,
            is_correct=outcome.is_correct,
            points=points,
            matched_by=outcome.matched_by,
        )

        self.answered = True
        self.last_result = {
            'is_correct': outcome.is_correct,
            'graded': graded,
            'matched_by': outcome.matched_by,
            'points': points,
            'points_breakdown': breakdown,
            'selected_index': selected_index,
            'correct_index': result.correct_index,
            'selected_feedback': result.feedbacks[selected_index],
            'feedbacks': list(result.feedbacks),
            'explanation': case.explanation,
            'time_spent': time_spent,
        }
        return self.last_result
