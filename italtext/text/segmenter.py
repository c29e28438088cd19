"""Abbreviation-aware sentence and paragraph segmentation.

Responsibilities:
- Split plain text on runs of sentence-terminal punctuation.
- Re-join pieces that were split right after an Italian title abbreviation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from . import lexicons

_TERMINAL_RUN_RE = re.compile(r"[.!?]+")
_TRAILING_WORD_RE = re.compile(r"(\w+)$")
_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")


class SentenceSegmenter:
    """Segment plain text into sentences with one-step abbreviation merging."""

    def __init__(self, abbreviations: Iterable[str] = lexicons.TITLE_ABBREVIATIONS) -> None:
        self._abbreviations = frozenset(item.lower() for item in abbreviations)

    def naive_split(self, text: str) -> list[str]:
        """Split on terminal punctuation runs, dropping empty pieces."""

        pieces = (piece.strip() for piece in _TERMINAL_RUN_RE.split(text))
        return [piece for piece in pieces if piece]

    def segment(self, text: str) -> list[str]:
        """Return sentences, never more than `naive_split` would."""

        pieces = self.naive_split(text)
        sentences: list[str] = []
        index = 0
        while index < len(pieces):
            sentence = pieces[index]
            if index + 1 < len(pieces) and self.ends_with_abbreviation(sentence):
                sentence = f"{sentence}. {pieces[index + 1]}"
                index += 1
            sentences.append(sentence)
            index += 1
        return sentences

    def ends_with_abbreviation(self, piece: str) -> bool:
        """Return whether the trailing word of `piece` is a title abbreviation."""

        match = _TRAILING_WORD_RE.search(piece)
        return match is not None and match.group(1).lower() in self._abbreviations


def split_paragraphs(text: str) -> list[str]:
    """Return blank-line separated paragraphs with surrounding whitespace removed."""

    return [
        paragraph.strip()
        for paragraph in _PARAGRAPH_BREAK_RE.split(text)
        if paragraph.strip()
    ]
