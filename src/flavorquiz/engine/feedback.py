"""Plain-text presentation of comparison results."""

from __future__ import annotations

from dataclasses import dataclass

from flavorquiz.engine.comparator import ComparisonResult, MatchStatus


@dataclass(frozen=True)
class FeedbackMessage:
    icon: str
    severity: str  # "success", "warning", "error", "info"
    message: str
    detail: str

    def render(self) -> str:
        """Detail text under this message's icon, replacing any icon it already carries."""
        head, _, rest = self.detail.partition(" ")
        body = rest if head in DETAIL_ICONS else self.detail
        return f"{self.icon} {body}"


# status -> (icon, severity, user-facing summary)
FEEDBACK_STYLES: dict[MatchStatus, tuple[str, str, str]] = {
    MatchStatus.PERFECT: ("✓", "success", "Perfect! You got it exactly right."),
    MatchStatus.CLOSE: ("~", "warning", "Close! You're very close with minor spelling differences."),
    MatchStatus.CLOSE_SPELLING: ("~", "warning", "Accepted! Spelling variation of correct answer."),
    MatchStatus.ACCEPTABLE: ("≈", "warning", "Acceptable match, but double-check your spelling."),
    MatchStatus.INCORRECT: ("✗", "error", "Not quite right. Study this one more carefully."),
    MatchStatus.FORBIDDEN: ("🚫", "error", "Critical! These are different flavors."),
    MatchStatus.EMPTY: ("⚠️", "info", "Please enter an answer."),
    MatchStatus.CATEGORY_MATCH: ("✓", "success", "Correct! Same product category."),
}


def format_feedback(result: ComparisonResult) -> FeedbackMessage:
    """Map a result to its display style; unknown statuses render as incorrect."""
    try:
        status = MatchStatus(result.status)
    except ValueError:
        status = MatchStatus.INCORRECT
    icon, severity, message = FEEDBACK_STYLES[status]
    return FeedbackMessage(icon=icon, severity=severity, message=message, detail=result.feedback)

# icons that result details may already start with
DETAIL_ICONS = frozenset(icon for icon, _, _ in FEEDBACK_STYLES.values()) | {"❌"}
