"""Word tokenizer used for whole-word spelling substitution.

Text is split into alternating word and separator tokens, so a word
boundary is simply a token boundary. Word characters are ASCII letters,
digits and underscore, independent of locale.
"""

from __future__ import annotations

import re

_SEPARATOR = re.compile(r"(\W+)", re.ASCII)
_WORD = re.compile(r"\w+", re.ASCII)


def tokenize(text: str) -> tuple[str, ...]:
    """Split text into tokens; even indices are words, odd are separators.

    A leading or trailing separator yields an empty word token at that
    end, which keeps the word/separator alternation intact.
    """
    return tuple(_SEPARATOR.split(text))


def is_word(token: str) -> bool:
    return bool(_WORD.fullmatch(token))


def replace_sequence(
    tokens: tuple[str, ...],
    target: tuple[str, ...],
    replacement: tuple[str, ...],
) -> tuple[str, ...]:
    """Replace every non-overlapping occurrence of ``target`` left to right.

    ``target`` must start and end on a word token; matches are only tried
    at word positions. Replaced text is not rescanned.
    """
    out: list[str] = []
    i = 0
    n = len(target)
    while i < len(tokens):
        if i % 2 == 0 and tokens[i : i + n] == target:
            out.extend(replacement)
            i += n
        else:
            out.append(tokens[i])
            i += 1
    return tuple(out)
