"""Unicode punctuation normalization stage.

Responsibilities:
- Canonicalize typographic punctuation variants to plain ASCII forms.
- Stay a pure character substitution so normalization is idempotent.
"""

from __future__ import annotations


class TextNormalizer:
    """Replace curly quotes, long dashes, ellipses, and non-breaking spaces."""

    _TRANSLATION_TABLE = str.maketrans(
        {
            "‘": "'",
            "’": "'",
            "“": '"',
            "”": '"',
            "–": "-",
            "—": "-",
            "…": "...",
            " ": " ",
        }
    )

    def normalize(self, text: str) -> str:
        """Return `text` with punctuation variants replaced by their canonical forms."""

        return text.translate(self._TRANSLATION_TABLE)


def normalize(text: str) -> str:
    """Normalize punctuation variants with the default normalizer."""

    return TextNormalizer().normalize(text)
