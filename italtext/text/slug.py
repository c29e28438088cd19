"""Deterministic anchor ids for Markdown headings.

Responsibilities:
- Turn free-form Italian heading text into a stable ASCII anchor id.
- Keep slug behavior locale-independent for reproducible output.
"""

from __future__ import annotations

import re

_VOWEL_TRANSLITERATION = str.maketrans(
    {
        **dict.fromkeys("àáâãä", "a"),
        **dict.fromkeys("èéêë", "e"),
        **dict.fromkeys("ìíîï", "i"),
        **dict.fromkeys("òóôõö", "o"),
        **dict.fromkeys("ùúûü", "u"),
    }
)


def heading_anchor_id(text: str) -> str:
    """Return the anchor id for a heading text.

    Lower-cases, transliterates accented vowels, drops characters outside
    `[a-z0-9 -]` and joins whitespace runs with single hyphens.
    """

    lowered = text.lower().translate(_VOWEL_TRANSLITERATION)
    filtered = re.sub(r"[^a-z0-9\s-]", "", lowered)
    return re.sub(r"\s+", "-", filtered.strip())
