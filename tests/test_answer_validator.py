"""
Tests for answer normalization and the two-tier answer check.
"""

import pytest

from medcase_app.modules.cases.engine import AnswerValidator, normalize_text
from medcase_app.modules.cases.schemas import ValidationInput


SAMPLES = [
    "NÃ£o!",
    "  Derrame   Pleural  ",
    "PneumotÃ³rax hipertensivo.",
    "SÃ­ndrome de Guillain-BarrÃ©",
    "ÃÃÃ ÃÃ ÃÃ",
    "Tab\tand\nnewline",
    "!!!",
    "",
    "xÂ² + yÂ² = 1",
    "Ä°stanbul",
    "C'est dÃ©jÃ  l'Ã©tÃ©",
]


class TestNormalize:

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once

    def test_diacritics_case_and_punctuation(self):
        assert normalize_text("NÃ£o!") == normalize_text("nao")
        assert normalize_text("NÃ£o!") == "nao"

    def test_collapses_and_trims_whitespace(self):
        assert normalize_text("  Derrame \t  Pleural \n") == "derrame pleural"

    def test_removes_punctuation_inside_words(self):
        assert normalize_text("Guillain-BarrÃ©") == "guillainbarre"

    def test_only_punctuation_normalizes_to_empty(self):
        assert normalize_text("?!...") == ""

    def test_none_and_empty(self):
        assert normalize_text(None) == ""
        assert normalize_text("") == ""


class TestAnswerValidator:

    def test_index_match_wins_even_if_text_differs(self):
        assert AnswerValidator.is_correct(2, "x", 2, "y") is True

    def test_text_fallback_when_indices_differ(self):
        assert AnswerValidator.is_correct(1, "Derrame Pleural", 0, "derrame pleural") is True

    def test_no_signal_is_incorrect(self):
        assert AnswerValidator.is_correct(1, "", 0, "") is False

    def test_missing_text_is_incorrect(self):
        assert AnswerValidator.is_correct(1, None, 0, "Derrame pleural") is False
        assert AnswerValidator.is_correct(1, "Derrame pleural", 0, None) is False

    @pytest.mark.parametrize("selected, correct", [
        ("(-)", "(+)"),
        ("—", "..."),
        ("?", "!"),
    ])
    def test_symbol_only_texts_never_match(self, selected, correct):
        outcome = AnswerValidator.match(1, selected, 0, correct)

        assert outcome.is_correct is False
        assert outcome.matched_by == 'none'

    def test_different_texts_and_indices(self):
        assert AnswerValidator.is_correct(0, "Pneumonia", 3, "Edema") is False

    def test_matched_by_reports_rule(self):
        assert AnswerValidator.match(2, "x", 2, "y").matched_by == 'index'
        assert AnswerValidator.match(1, "NÃ£o", 0, "nao").matched_by == 'text'
        assert AnswerValidator.match(1, "A", 0, "B").matched_by == 'none'

    def test_ungraded_correct_index_never_matches_by_index(self):
        outcome = AnswerValidator.match(None, "A", None, None)

        assert outcome.is_correct is False
        assert outcome.matched_by == 'none'

    def test_ungraded_correct_index_still_allows_text_match(self):
        assert AnswerValidator.is_correct(1, "Derrame pleural", None, "derrame pleural") is True

    def test_validate_accepts_validation_input(self):
        request = ValidationInput(selected_index=1, selected_text="PneumotÃ³rax",
                                  correct_index=0, correct_text="pneumotorax")

        outcome = AnswerValidator.validate(request)

        assert outcome.is_correct is True
        assert outcome.matched_by == 'text'
