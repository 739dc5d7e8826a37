# File: medcase_app/modules/cases/services/history_service.py

from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from medcase_app.models import UserCaseHistory, db
from medcase_app.utils.db_session import safe_commit


class CaseHistoryRecorder:
    """Persists every graded attempt, correct or not."""

    @staticmethod
    def record_attempt(user_id: Optional[int], case_id: int, is_correct: bool,
                       points: int, details: Dict[str, Any]) -> Optional[UserCaseHistory]:
        """
        Insert one ``user_case_history`` row.

        A failed write is logged and rolled back; the caller still gets to
        show the graded result, so ``None`` is returned instead of raising.
        """
        entry = UserCaseHistory(
            user_id=user_id,
            case_id=case_id,
            is_correct=is_correct,
            points=points,
            details=details,
        )
        try:
            safe_commit(db.session, stage=lambda: db.session.add(entry))
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Could not save attempt for case {case_id} (user {user_id}): {e}")
            return None
        return entry

    @staticmethod
    def get_history(case_id: int, user_id: Optional[int] = None) -> List[UserCaseHistory]:
        query = UserCaseHistory.query.filter_by(case_id=case_id)
        if user_id is not None:
            query = query.filter_by(user_id=user_id)
        return query.order_by(UserCaseHistory.history_id.desc()).all()
