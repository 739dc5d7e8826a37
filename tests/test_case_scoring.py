"""
Tests for help penalties, elimination choice and case settings.
"""

import random

import pytest

from medcase_app import db
from medcase_app.models import AppSettings
from medcase_app.modules.cases.config import CaseLearningConfig
from medcase_app.modules.cases.logics.elimination_logic import eliminable_positions, pick_elimination
from medcase_app.modules.cases.logics.scoring_logic import calculate_penalties, calculate_points
from medcase_app.modules.cases.services.case_config_service import CaseConfigService


PCT = {'elimination': 20, 'skip': 50, 'ai_hint': 10}


class TestScoring:

    def test_no_help_full_points(self):
        total, breakdown = calculate_points(10, True, [], PCT)

        assert total == 10
        assert breakdown == {'base': 10, 'penalties': 0, 'help_used': [], 'total': 10}

    def test_each_help_entry_is_charged(self):
        assert calculate_penalties(10, ['elimination', 'elimination'], PCT) == 4
        assert calculate_penalties(10, ['elimination', 'ai_hint'], PCT) == 3

    def test_penalty_is_floored_per_entry(self):
        # 7 * 20 / 100 = 1.4 -> 1 each
        assert calculate_penalties(7, ['elimination', 'elimination'], PCT) == 2

    def test_unknown_help_costs_nothing(self):
        assert calculate_penalties(10, ['mystery'], PCT) == 0

    def test_points_never_negative(self):
        total, breakdown = calculate_points(10, True, ['skip', 'skip', 'skip'], PCT)

        assert total == 0
        assert breakdown['penalties'] == 15

    def test_wrong_answer_scores_zero(self):
        total, breakdown = calculate_points(10, False, ['elimination'], PCT)

        assert total == 0
        assert breakdown['penalties'] == 2


class TestElimination:

    def test_correct_position_is_never_eliminable(self):
        assert eliminable_positions(4, 2, []) == [0, 1, 3]
        assert eliminable_positions(4, 2, [0, 3]) == [1]

    def test_ungraded_case_has_nothing_to_eliminate(self):
        assert eliminable_positions(4, None, []) == []
        assert pick_elimination(4, None, []) is None

    @pytest.mark.parametrize("seed", range(20))
    def test_pick_elimination_never_picks_correct(self, seed):
        picked = pick_elimination(5, 1, [3], rng=random.Random(seed))

        assert picked in (0, 2, 4)

    def test_nothing_left(self):
        assert pick_elimination(2, 0, [1]) is None


class TestCaseConfigService:

    def test_defaults_without_overrides(self, app):
        assert CaseConfigService.get_config('CASE_DEFAULT_POINTS') == CaseLearningConfig.CASE_DEFAULT_POINTS
        assert CaseConfigService.penalty_percentages() == PCT

    def test_database_override_wins(self, app):
        AppSettings.set('CASE_MAX_ELIMINATIONS', 3, category='cases')
        db.session.commit()

        assert CaseConfigService.get_config('CASE_MAX_ELIMINATIONS') == 3
        assert CaseConfigService.get_all()['CASE_MAX_ELIMINATIONS'] == 3

    def test_bad_override_falls_back_to_default(self, app):
        AppSettings.set('CASE_PENALTY_SKIP_PCT', 'lots', category='cases')
        db.session.commit()

        assert CaseConfigService.get_config('CASE_PENALTY_SKIP_PCT') == 50
