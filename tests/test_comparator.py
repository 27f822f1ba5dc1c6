"""Tests for the tiered answer comparator."""

import logging

import pytest
from pydantic import ValidationError

from flavorquiz.config.settings import ComparisonOptions
from flavorquiz.engine.comparator import MatchStatus, compare


class TestEmptyAnswers:
    @pytest.mark.parametrize("answer", ["", "   ", "\t\n", None])
    def test_empty(self, answer):
        result = compare(answer, "Mango")
        assert result.status == MatchStatus.EMPTY
        assert result.award == 0
        assert result.similarity == 0.0

    def test_empty_regardless_of_options(self):
        options = ComparisonOptions(strict_flavors=False, perfect_threshold=0.0,
                                    close_threshold=0.0, accept_threshold=0.0)
        assert compare("", "Mango", options).status == MatchStatus.EMPTY


class TestExactMatch:
    def test_exact(self):
        result = compare("Mango", "Mango")
        assert result.status == MatchStatus.PERFECT
        assert result.award == 100
        assert result.similarity == 1.0
        assert "Exact match" in result.feedback

    def test_case_and_whitespace_ignored(self):
        result = compare("  mango ", "MANGO")
        assert result.status == MatchStatus.PERFECT
        assert result.award == 100

    def test_plain_result_has_no_match_payload(self):
        result = compare("Mango", "Mango")
        assert result.match is None
        assert result.match_type is None
        assert result.xp_multiplier is None


class TestForbiddenConfusion:
    def test_blueberry_is_not_blue_raspberry(self):
        result = compare("Blueberry", "Blue Raspberry")
        assert result.status == MatchStatus.FORBIDDEN
        assert result.award == 0
        assert result.similarity == 0.0
        assert result.feedback.startswith("🚫")
        assert '"Blueberry" and "Blue Raspberry"' in result.feedback

    def test_forbidden_beats_close_fuzzy_score(self):
        # lexically close, but a declared confusion
        assert compare("Blueberries", "Blueberry").status == MatchStatus.FORBIDDEN

    def test_lenient_falls_through_to_fuzzy(self):
        result = compare("Blueberry", "Blue Raspberry", ComparisonOptions(strict_flavors=False))
        assert result.status != MatchStatus.FORBIDDEN
        assert result.status == MatchStatus.INCORRECT
        assert result.similarity == pytest.approx(1 - 5 / 14)

    def test_rules_are_one_directional(self):
        # blueberry forbids "blueberries"; no rule is declared under "blueberries"
        assert compare("Blueberries", "Blueberry").status == MatchStatus.FORBIDDEN
        assert compare("Blueberry", "Blueberries").status != MatchStatus.FORBIDDEN


class TestSpellingVariation:
    def test_registered_variant(self):
        result = compare("rasberry", "Raspberry")
        assert result.status == MatchStatus.CLOSE_SPELLING
        assert result.award == 75
        assert result.similarity == 0.95

    def test_multiword_variant(self):
        assert compare("Water Melon", "Watermelon").status == MatchStatus.CLOSE_SPELLING


class TestFuzzyThresholds:
    def test_below_accept_threshold(self):
        result = compare("Mangooo", "Mango")
        assert result.status == MatchStatus.INCORRECT
        assert result.award == 0
        assert result.similarity == pytest.approx(1 - 2 / 7)
        assert result.similarity == pytest.approx(0.7142857, abs=1e-6)

    def test_close(self):
        result = compare("Strawbery", "Strawberry")
        assert result.status == MatchStatus.CLOSE
        assert result.award == 75
        assert "90% match" in result.feedback

    def test_acceptable(self):
        result = compare("Eldrflowr", "Elderflower")
        assert result.status == MatchStatus.ACCEPTABLE
        assert result.award == 50
        assert result.similarity == pytest.approx(1 - 2 / 11)
        assert "82% match" in result.feedback

    def test_lower_perfect_threshold(self):
        options = ComparisonOptions(perfect_threshold=0.85)
        result = compare("Strawbery", "Strawberry", options)
        assert result.status == MatchStatus.PERFECT
        assert result.award == 100
        assert result.feedback == "✓ Perfect!"

    def test_completely_wrong(self):
        result = compare("Peach", "Tamarind")
        assert result.status == MatchStatus.INCORRECT
        assert not result.passed


class TestOptions:
    def test_defaults(self):
        options = ComparisonOptions()
        assert options.perfect_threshold == 1.0
        assert options.close_threshold == 0.85
        assert options.accept_threshold == 0.80
        assert options.strict_flavors is True
        assert options.log_details is False

    def test_thresholds_must_descend(self):
        with pytest.raises(ValidationError):
            ComparisonOptions(close_threshold=0.7, accept_threshold=0.9)

    def test_thresholds_bounded(self):
        with pytest.raises(ValidationError):
            ComparisonOptions(perfect_threshold=1.5)

    def test_frozen(self):
        options = ComparisonOptions()
        with pytest.raises(ValidationError):
            options.strict_flavors = False

    def test_log_details_has_no_behavioral_effect(self, caplog):
        caplog.set_level(logging.INFO, logger="flavorquiz.engine.comparator")
        quiet = compare("Blueberry", "Blue Raspberry")
        loud = compare("Blueberry", "Blue Raspberry", ComparisonOptions(log_details=True))
        assert quiet == loud
        assert "FORBIDDEN" in caplog.text

    def test_no_logging_by_default(self, caplog):
        caplog.set_level(logging.INFO, logger="flavorquiz.engine.comparator")
        compare("Mangooo", "Mango")
        assert caplog.text == ""
