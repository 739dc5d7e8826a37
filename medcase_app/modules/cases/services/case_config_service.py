# modules/cases/services/case_config_service.py
from typing import Dict

from medcase_app.models import AppSettings
from ..config import CaseLearningConfig

CONFIG_KEYS = (
    'CASE_DEFAULT_POINTS',
    'CASE_MAX_ELIMINATIONS',
    'CASE_PENALTY_ELIMINATION_PCT',
    'CASE_PENALTY_SKIP_PCT',
    'CASE_PENALTY_AI_HINT_PCT',
)


class CaseConfigService:
    """
    Reads case settings, falling back from the database to CaseLearningConfig.
    """

    @staticmethod
    def get_config(key: str) -> int:
        default = getattr(CaseLearningConfig, key, 0)
        value = AppSettings.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    @classmethod
    def get_all(cls) -> Dict[str, int]:
        return {key: cls.get_config(key) for key in CONFIG_KEYS}

    @classmethod
    def penalty_percentages(cls) -> Dict[str, int]:
        """Map help kinds to their configured penalty percentage."""
        return {
            kind: cls.get_config(key)
            for kind, key in CaseLearningConfig.HELP_PENALTY_KEYS.items()
        }
