from typing import Optional

from medcase_app.core.error_handlers import NotFoundError
from medcase_app.models import MedicalCase, db
from .engine import AnswerValidator, ShuffleEngine
from .schemas import ShuffleResult


class CaseInterface:
    """
    Public entry points of the cases module for other modules.
    """

    @staticmethod
    def get_case(case_id: int) -> MedicalCase:
        case = db.session.get(MedicalCase, case_id)
        if case is None:
            raise NotFoundError(f"Case {case_id} not found.", resource='medical_case')
        return case

    @staticmethod
    def shuffle_case(case: MedicalCase) -> Optional[ShuffleResult]:
        """One-off presentation order, outside any viewing session."""
        return ShuffleEngine.shuffle_case(case.to_record())

    @staticmethod
    def is_correct(selected_index, selected_text, correct_index, correct_text) -> bool:
        return AnswerValidator.is_correct(selected_index, selected_text, correct_index, correct_text)
