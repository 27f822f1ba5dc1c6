"""Four-level product taxonomy: specificity detection and category agreement.

Reverse questions ("Which flavor is a tropical citrus blend?") can have
more than one acceptable product. When the typed answer does not match
the expected product directly, both products are looked up in the
taxonomy and accepted if they agree down to the level the question asks
about.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence


class SpecificityLevel(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"


TERTIARY_KEYWORDS: tuple[str, ...] = (
    "specific",
    "exact",
    "precise",
    "particular",
    "variety",
    "distinct",
)

SECONDARY_KEYWORDS: tuple[str, ...] = (
    "family",
    "group",
    "type of",
    "kind of",
    "style",
    "profile",
    "category",
)

# Declared for taxonomy authors; detect_level does not consult it.
QUATERNARY_KEYWORDS: tuple[str, ...] = (
    "note",
    "undertone",
    "finish",
    "hint of",
    "accent",
)

_FIELD_ALIASES: dict[str, str] = {
    "name": "name",
    "product": "name",
    "product name": "name",
    "product_name": "name",
    "edition": "edition",
    "primary": "primary",
    "primary category": "primary",
    "primary_category": "primary",
    "secondary": "secondary",
    "secondary category": "secondary",
    "secondary_category": "secondary",
    "tertiary": "tertiary",
    "tertiary category": "tertiary",
    "tertiary_category": "tertiary",
    "quaternary": "quaternary",
    "quaternary category": "quaternary",
    "quaternary_category": "quaternary",
    "notes": "notes",
}


def canonical_field(header: str) -> Optional[str]:
    """Map a column header or dict key to a ProductCategoryEntry field name."""
    return _FIELD_ALIASES.get(" ".join(header.strip().lower().split()))


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class ProductCategoryEntry:
    name: str
    primary: Optional[str] = None
    secondary: Optional[str] = None
    tertiary: Optional[str] = None
    quaternary: Optional[str] = None
    edition: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductCategoryEntry":
        fields: dict[str, Optional[str]] = {}
        for key, value in data.items():
            name = canonical_field(str(key))
            if name is not None and name not in fields:
                fields[name] = _clean(value)
        if not fields.get("name"):
            raise ValueError(f"Taxonomy entry has no product name: {dict(data)}")
        return cls(**fields)


@dataclass(frozen=True)
class CategoryMatch:
    matched: bool
    shared: tuple[str, ...] = ()


def _count_hits(text: str, keywords: Iterable[str]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def detect_level(question: Optional[str]) -> SpecificityLevel:
    """Infer how specific a question is from its wording."""
    if not question:
        return SpecificityLevel.PRIMARY

    text = question.lower()
    tertiary = _count_hits(text, TERTIARY_KEYWORDS)
    secondary = _count_hits(text, SECONDARY_KEYWORDS)

    if tertiary >= 2:
        return SpecificityLevel.TERTIARY
    if tertiary == 1 or secondary >= 2:
        return SpecificityLevel.SECONDARY
    return SpecificityLevel.PRIMARY


def resolve(
    name: Optional[str], database: Sequence[ProductCategoryEntry]
) -> Optional[ProductCategoryEntry]:
    """Find a product by case-insensitive exact name; first match wins."""
    if name is None:
        return None
    wanted = name.lower()
    for entry in database:
        if entry.name.lower() == wanted:
            return entry
    return None


def _agree(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and b is not None and a == b


def check_match(
    user_entry: ProductCategoryEntry,
    expected_entry: ProductCategoryEntry,
    level: SpecificityLevel,
) -> CategoryMatch:
    """Check whether two products agree at the requested specificity level.

    Secondary and tertiary both require primary and secondary agreement;
    at tertiary a shared third level is reported but not required.
    """
    if not _agree(user_entry.primary, expected_entry.primary):
        return CategoryMatch(matched=False)

    if level is SpecificityLevel.PRIMARY:
        return CategoryMatch(matched=True, shared=(expected_entry.primary,))

    if not _agree(user_entry.secondary, expected_entry.secondary):
        return CategoryMatch(matched=False)

    shared = (expected_entry.primary, expected_entry.secondary)
    if level is SpecificityLevel.TERTIARY and _agree(user_entry.tertiary, expected_entry.tertiary):
        shared += (expected_entry.tertiary,)
    return CategoryMatch(matched=True, shared=shared)
