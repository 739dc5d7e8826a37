# File: medcase_app/modules/cases/config.py

class CaseLearningConfig:
    """
    Default configuration for the cases module.
    Used when the app_settings table has no override.
    """

    CASE_DEFAULT_POINTS = 10
    CASE_MAX_ELIMINATIONS = 2

    # Help penalties, percent of the case's base points
    CASE_PENALTY_ELIMINATION_PCT = 20
    CASE_PENALTY_SKIP_PCT = 50
    CASE_PENALTY_AI_HINT_PCT = 10

    HELP_ELIMINATION = 'elimination'
    HELP_SKIP = 'skip'
    HELP_AI_HINT = 'ai_hint'

    HELP_PENALTY_KEYS = {
        HELP_ELIMINATION: 'CASE_PENALTY_ELIMINATION_PCT',
        HELP_SKIP: 'CASE_PENALTY_SKIP_PCT',
        HELP_AI_HINT: 'CASE_PENALTY_AI_HINT_PCT',
    }
