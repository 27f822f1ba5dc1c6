"""Answer normalization and flavor confusion checks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flavorquiz.engine.tables import FLAVOR_DISTINCTIONS, SPELLING_PATTERNS
from flavorquiz.engine.tokenizer import replace_sequence, tokenize


@dataclass(frozen=True)
class ConfusionCheck:
    is_forbidden: bool
    reason: Optional[str] = None


def normalize_answer(text: str) -> str:
    """Normalize an answer for direct comparison: strip and lowercase."""
    return text.strip().lower()


def normalize_spelling(text: str) -> str:
    """Rewrite known spelling variants to their canonical flavor names."""
    tokens = tokenize(normalize_answer(text))
    for variant, canonical in SPELLING_PATTERNS:
        tokens = replace_sequence(tokens, variant, canonical)
    return "".join(tokens)


def matches_with_variation(user: str, correct: str) -> bool:
    """Check if two answers agree once spelling variants are canonicalized."""
    return normalize_spelling(user) == normalize_spelling(correct)


def check_forbidden_confusion(user: str, correct: str) -> ConfusionCheck:
    """Check whether the answer is a declared confusion for the correct flavor.

    Containment is tested both ways so truncated ("blue") and expanded
    ("blueberry pie") answers are both caught.
    """
    rule = FLAVOR_DISTINCTIONS.get(normalize_answer(correct))
    if rule is None:
        return ConfusionCheck(is_forbidden=False)

    user_norm = normalize_answer(user)
    for forbidden in rule.forbidden:
        if forbidden in user_norm or user_norm in forbidden:
            return ConfusionCheck(
                is_forbidden=True,
                reason=f'"{user}" and "{correct}" are DIFFERENT flavors - store training critical!',
            )
    return ConfusionCheck(is_forbidden=False)
