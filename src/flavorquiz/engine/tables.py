"""Static flavor tables: forbidden confusions and spelling variants.

Both tables are built and validated once at import and exposed as
read-only mappings. Use the ``get_*`` accessors for mutable copies.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from flavorquiz.engine.tokenizer import is_word, tokenize


class ConfigurationError(ValueError):
    """Raised when static table data is malformed."""


@dataclass(frozen=True)
class FlavorDistinctionRule:
    forbidden: tuple[str, ...]
    aliases: tuple[str, ...] = ()  # informational only, never matched


# A rule only blocks confusions in the direction it is declared.
_RAW_FLAVOR_DISTINCTIONS: dict[str, dict[str, list[str]]] = {
    "blueberry": {
        "forbidden": ["blue raspberry", "blueberries"],
        "aliases": ["blue berry"],
    },
    "blue raspberry": {
        "forbidden": ["blueberry", "blueberries"],
        "aliases": ["blue razz", "blue rasp"],
    },
    "strawberry": {
        "forbidden": ["strawberry jam"],
        "aliases": ["straw berry"],
    },
    "strawberry jam": {
        "forbidden": ["strawberry"],
        "aliases": ["strawb jam", "strawberry preserve"],
    },
}

# canonical -> variants, applied in declaration order
_RAW_SPELLING_VARIATIONS: dict[str, list[str]] = {
    "raspberry": ["rasberry", "rapsberry", "razberry"],
    "orange": ["orang", "orrange"],
    "pineapple": ["pineapple", "pine apple"],
    "watermelon": ["water melon", "watermellon"],
    "blueberry": ["blue berry", "blueberrie"],
    "strawberry": ["straw berry", "strawberrie"],
    "blackberry": ["black berry", "blackberrie"],
    "cranberry": ["cran berry", "cranberrie"],
    "lemonade": ["lemon ade", "lemonde"],
    "limeade": ["lime ade", "limade"],
    "tamarind": ["tamarin", "tamarindo"],
    "hibiscus": ["hibiscus", "hibiscus"],
    "guava": ["guava", "guwa"],
    "mango": ["mango", "mangoes"],
    "coconut": ["cocnut", "coco nut"],
    "kiwi": ["kiwi", "kiwifruit"],
    "peach": ["peach", "peachy"],
    "apricot": ["apricot", "apricots"],
    "cherry": ["cherry", "cherries"],
    "custard": ["custerd", "custurd"],
    "caramel": ["carmel", "caramell"],
    "toffee": ["tofee", "toffy"],
    "vanilla": ["vanila", "vanille"],
    "cinnamon": ["cinamon", "cinniman"],
    "menthol": ["menthel", "menthol"],
    "peppermint": ["peper mint", "pepermint"],
    "spearmint": ["spear mint", "spearmint"],
}


def _check_term(term: str, where: str) -> str:
    if not isinstance(term, str) or not term.strip():
        raise ConfigurationError(f"{where}: empty term")
    if term != term.strip().lower():
        raise ConfigurationError(f"{where}: '{term}' must be lowercase and trimmed")
    return term


def _word_pattern(term: str, where: str) -> tuple[str, ...]:
    """Tokenize a table term, requiring it to begin and end on a word."""
    tokens = tokenize(_check_term(term, where))
    if not (is_word(tokens[0]) and is_word(tokens[-1])):
        raise ConfigurationError(
            f"{where}: '{term}' must start and end with a word character"
        )
    return tokens


def build_flavor_distinctions(
    raw: Mapping[str, Mapping[str, list[str]]],
) -> Mapping[str, FlavorDistinctionRule]:
    rules: dict[str, FlavorDistinctionRule] = {}
    for key, entry in raw.items():
        _check_term(key, "flavor distinction key")
        forbidden = tuple(
            _check_term(f, f"forbidden term for '{key}'") for f in entry.get("forbidden", [])
        )
        aliases = tuple(entry.get("aliases", []))
        rules[key] = FlavorDistinctionRule(forbidden=forbidden, aliases=aliases)
    return MappingProxyType(rules)


def build_spelling_variations(
    raw: Mapping[str, list[str]],
) -> tuple[Mapping[str, tuple[str, ...]], tuple[tuple[tuple[str, ...], tuple[str, ...]], ...]]:
    """Validate the variant table.

    Returns the read-only table and the ordered (variant tokens,
    canonical tokens) substitution patterns used by the normalizer.
    """
    table: dict[str, tuple[str, ...]] = {}
    patterns: list[tuple[tuple[str, ...], tuple[str, ...]]] = []
    for canonical, variants in raw.items():
        canonical_tokens = _word_pattern(canonical, "spelling canonical")
        table[canonical] = tuple(variants)
        for variant in variants:
            variant_tokens = _word_pattern(variant, f"variant of '{canonical}'")
            patterns.append((variant_tokens, canonical_tokens))
    return MappingProxyType(table), tuple(patterns)


FLAVOR_DISTINCTIONS = build_flavor_distinctions(_RAW_FLAVOR_DISTINCTIONS)
SPELLING_VARIATIONS, SPELLING_PATTERNS = build_spelling_variations(_RAW_SPELLING_VARIATIONS)


def get_flavor_distinctions() -> dict[str, FlavorDistinctionRule]:
    """Copy of the flavor distinction rules."""
    return dict(FLAVOR_DISTINCTIONS)


def get_spelling_variations() -> dict[str, list[str]]:
    """Copy of the spelling variation table."""
    return {canonical: list(variants) for canonical, variants in SPELLING_VARIATIONS.items()}
