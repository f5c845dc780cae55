"""Token-list normalisation shared by extraction, editing and migration.

A *token list* is an ordered, case-insensitively unique list of short strings
such as business categories, offered services, or served cities.  Editors
send these either as free text (``"Austin, Round Rock\\nCedar Park"``) or as
lists whose items may themselves contain delimiters.
"""

import re
from typing import Iterable, List, Optional, Union

# Commas and newlines both delimit; a run of them counts as one split point
_DELIMITER_RE = re.compile(r"[\n,]+")

TokenInput = Optional[Union[str, Iterable[str]]]


def _split(value: str) -> List[str]:
    return _DELIMITER_RE.split(value)


def normalize_tokens(value: TokenInput) -> List[str]:
    """Return a deduplicated token list from *value*.

    Strings are split on commas and newlines; list items are split the same
    way and flattened.  Fragments are trimmed and empty ones dropped.
    Deduplication ignores case but keeps the casing and position of the
    first occurrence.  Anything else (``None``, numbers, ...) yields ``[]``.
    """
    if isinstance(value, str):
        fragments = _split(value)
    elif isinstance(value, (list, tuple)):
        fragments = [part for item in value if isinstance(item, str) for part in _split(item)]
    else:
        fragments = []

    seen: set = set()
    tokens: List[str] = []
    for fragment in fragments:
        token = fragment.strip()
        if not token:
            continue
        key = token.lower()
        if key in seen:
            continue
        seen.add(key)
        tokens.append(token)
    return tokens


def add_token(tokens: List[str], token: str) -> List[str]:
    return normalize_tokens([*tokens, token])


def remove_token(tokens: List[str], token: str) -> List[str]:
    """Drop every entry matching *token* case-insensitively; others are untouched."""
    target = token.strip().lower()
    return [item for item in tokens if item.strip().lower() != target]
