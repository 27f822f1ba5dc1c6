"""Tiered answer comparison.

Tiers run in order and the first one that decides returns:

0. empty answer
1. exact match (case and surrounding whitespace ignored)
2. forbidden flavor confusion (only with ``strict_flavors``)
3. registered spelling variant
4. edit-distance similarity against the configured thresholds

Reverse questions add a taxonomy fallback when tiers 0-4 fail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from flavorquiz.config.settings import ComparisonOptions
from flavorquiz.engine.distance import similarity as similarity_ratio
from flavorquiz.engine.normalizer import (
    check_forbidden_confusion,
    matches_with_variation,
    normalize_answer,
)
from flavorquiz.engine.taxonomy import (
    ProductCategoryEntry,
    SpecificityLevel,
    check_match,
    detect_level,
    resolve,
)

logger = logging.getLogger(__name__)

SPELLING_VARIATION_SIMILARITY = 0.95


class MatchStatus(str, Enum):
    PERFECT = "perfect"
    CLOSE = "close"
    CLOSE_SPELLING = "close_spelling"
    ACCEPTABLE = "acceptable"
    INCORRECT = "incorrect"
    FORBIDDEN = "forbidden"
    EMPTY = "empty"
    CATEGORY_MATCH = "category_match"


FAILURE_STATUSES = frozenset({MatchStatus.INCORRECT, MatchStatus.FORBIDDEN, MatchStatus.EMPTY})


class MatchType(str, Enum):
    EXACT = "exact"
    CATEGORY = "category"
    NONE = "none"


@dataclass(frozen=True)
class ExactMatchInfo:
    xp_multiplier: float = 1.0

    @property
    def match_type(self) -> MatchType:
        return MatchType.EXACT


@dataclass(frozen=True)
class CategoryMatchInfo:
    matched_level: SpecificityLevel
    shared_categories: tuple[str, ...]
    xp_multiplier: float = 1.0

    @property
    def match_type(self) -> MatchType:
        return MatchType.CATEGORY


@dataclass(frozen=True)
class NoMatchInfo:
    xp_multiplier: float = 0.0

    @property
    def match_type(self) -> MatchType:
        return MatchType.NONE


MatchInfo = Union[ExactMatchInfo, CategoryMatchInfo, NoMatchInfo]


@dataclass(frozen=True)
class ComparisonResult:
    status: MatchStatus
    similarity: float
    feedback: str
    award: int
    match: Optional[MatchInfo] = None  # set on the reverse-question path only

    @property
    def passed(self) -> bool:
        return self.status not in FAILURE_STATUSES

    @property
    def match_type(self) -> Optional[MatchType]:
        return self.match.match_type if self.match else None

    @property
    def xp_multiplier(self) -> Optional[float]:
        return self.match.xp_multiplier if self.match else None

    @property
    def matched_level(self) -> Optional[SpecificityLevel]:
        return self.match.matched_level if isinstance(self.match, CategoryMatchInfo) else None

    @property
    def shared_categories(self) -> tuple[str, ...]:
        return self.match.shared_categories if isinstance(self.match, CategoryMatchInfo) else ()

    def with_match(self, match: MatchInfo) -> "ComparisonResult":
        return ComparisonResult(
            status=self.status,
            similarity=self.similarity,
            feedback=self.feedback,
            award=self.award,
            match=match,
        )


def _percent(value: float) -> str:
    return f"{value * 100:.0f}"


def compare(
    user_answer: Optional[str],
    correct_answer: Optional[str],
    options: Optional[ComparisonOptions] = None,
) -> ComparisonResult:
    """Grade a typed answer against the correct flavor name."""
    options = options or ComparisonOptions()
    correct_answer = correct_answer or ""

    if not user_answer or not user_answer.strip():
        return ComparisonResult(
            status=MatchStatus.EMPTY,
            similarity=0.0,
            feedback="❌ No answer provided",
            award=0,
        )

    user_norm = normalize_answer(user_answer)
    correct_norm = normalize_answer(correct_answer)

    if options.log_details:
        logger.info("Answer validation: user=%r correct=%r", user_answer, correct_answer)

    if user_norm == correct_norm:
        if options.log_details:
            logger.info("Result: PERFECT (exact match)")
        return ComparisonResult(
            status=MatchStatus.PERFECT,
            similarity=1.0,
            feedback="✓ Perfect! Exact match.",
            award=100,
        )

    if options.strict_flavors:
        confusion = check_forbidden_confusion(user_answer, correct_answer)
        if confusion.is_forbidden:
            if options.log_details:
                logger.info("Result: FORBIDDEN CONFUSION")
            return ComparisonResult(
                status=MatchStatus.FORBIDDEN,
                similarity=0.0,
                feedback=f"🚫 {confusion.reason}",
                award=0,
            )

    if matches_with_variation(user_answer, correct_answer):
        if options.log_details:
            logger.info("Result: CLOSE (spelling variation)")
        return ComparisonResult(
            status=MatchStatus.CLOSE_SPELLING,
            similarity=SPELLING_VARIATION_SIMILARITY,
            feedback="~ Close! Spelling variation accepted.",
            award=75,
        )

    score = similarity_ratio(user_norm, correct_norm)

    if score >= options.perfect_threshold:
        status, award, feedback = MatchStatus.PERFECT, 100, "✓ Perfect!"
    elif score >= options.close_threshold:
        status, award = MatchStatus.CLOSE, 75
        feedback = f"~ Close! Minor differences ({_percent(score)}% match)."
    elif score >= options.accept_threshold:
        status, award = MatchStatus.ACCEPTABLE, 50
        feedback = f"≈ Acceptable ({_percent(score)}% match), but check spelling."
    else:
        status, award, feedback = MatchStatus.INCORRECT, 0, "✗ Not quite. Try again!"

    if options.log_details:
        logger.info("Result: %s (fuzzy match at %s%%)", status.value.upper(), _percent(score))
    return ComparisonResult(status=status, similarity=score, feedback=feedback, award=award)


def _no_match(tier_result: ComparisonResult, expected_answer: str) -> ComparisonResult:
    return ComparisonResult(
        status=MatchStatus.INCORRECT,
        similarity=tier_result.similarity,
        feedback=f"✗ Not quite. The correct answer is: {expected_answer}",
        award=0,
        match=NoMatchInfo(),
    )


def compare_with_hierarchical_category(
    user_answer: Optional[str],
    expected_answer: Optional[str],
    question: Optional[str],
    product_database: Optional[Sequence[ProductCategoryEntry]],
    options: Optional[ComparisonOptions] = None,
) -> ComparisonResult:
    """Grade a reverse-question answer, accepting same-category products."""
    options = options or ComparisonOptions()
    expected_answer = expected_answer or ""

    result = compare(user_answer, expected_answer, options)
    if result.status not in FAILURE_STATUSES:
        return result.with_match(ExactMatchInfo())

    if product_database is None:
        return result.with_match(NoMatchInfo())

    level = detect_level(question)
    user_entry = resolve(user_answer.strip() if user_answer else None, product_database)
    expected_entry = resolve(expected_answer.strip(), product_database)

    if user_entry is None or expected_entry is None:
        if options.log_details:
            logger.info(
                "Category fallback: lookup miss (user=%s, expected=%s)",
                user_entry is not None, expected_entry is not None,
            )
        return _no_match(result, expected_answer)

    category = check_match(user_entry, expected_entry, level)
    if options.log_details:
        logger.info("Category fallback: level=%s matched=%s shared=%s",
                    level.value, category.matched, category.shared)
    if not category.matched:
        return _no_match(result, expected_answer)

    return ComparisonResult(
        status=MatchStatus.CATEGORY_MATCH,
        similarity=result.similarity,
        feedback=(
            f"✓ Correct! {user_entry.name} matches the {level.value} category "
            f"of {expected_entry.name} ({' > '.join(category.shared)})."
        ),
        award=100,
        match=CategoryMatchInfo(matched_level=level, shared_categories=category.shared),
    )
