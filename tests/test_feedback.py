"""Tests for plain-text feedback formatting."""

from flavorquiz.engine.comparator import ComparisonResult, MatchStatus, compare
from flavorquiz.engine.feedback import FEEDBACK_STYLES, format_feedback


def test_every_status_has_a_style():
    assert set(FEEDBACK_STYLES) == set(MatchStatus)


def test_forbidden_is_error():
    message = format_feedback(compare("Blueberry", "Blue Raspberry"))
    assert message.severity == "error"
    assert message.icon == "🚫"
    assert "different flavors" in message.message


def test_render_does_not_repeat_icon():
    rendered = format_feedback(compare("Mango", "Mango")).render()
    assert rendered == "✓ Perfect! Exact match."


def test_render_adds_icon_when_missing():
    result = ComparisonResult(status=MatchStatus.ACCEPTABLE, similarity=0.8,
                              feedback="check spelling", award=50)
    assert format_feedback(result).render() == "≈ check spelling"


def test_unknown_status_treated_as_incorrect():
    result = ComparisonResult(status="mystery", similarity=0.0, feedback="?", award=0)
    message = format_feedback(result)
    assert message.severity == "error"
    assert message.icon == "✗"


def test_output_is_not_markup():
    rendered = format_feedback(compare("rasberry", "Raspberry")).render()
    assert "<" not in rendered


def test_render_empty_shows_a_single_icon():
    rendered = format_feedback(compare("", "Mango")).render()
    assert rendered == "⚠️ No answer provided"


def test_render_replaces_forbidden_icon_once():
    rendered = format_feedback(compare("Blueberry", "Blue Raspberry")).render()
    assert rendered.startswith("🚫 \"Blueberry\"")
    assert rendered.count("🚫") == 1
