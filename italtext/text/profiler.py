"""Heuristic linguistic profiling of Italian plain text.

Responsibilities:
- Count words and estimate reading time.
- Score how Italian the text looks from function words, accents, and domain terms.
- Classify register and list geographic, cultural, and dialectal references.

Every signal is an independent read-only computation over the same text, so
their evaluation order never changes the result.
"""

from __future__ import annotations

import math
import re

from ..models.datatypes import FormalityLevel, LinguisticProfile
from . import lexicons

_NON_WORD_RE = re.compile(r"[^\w\s']|_")
_NUMERIC_RE = re.compile(r"\d+")
_ACCENTED_RE = re.compile(f"[{lexicons.ACCENTED_VOWELS}]")

_DOMAIN_TERM_RE = lexicons.word_pattern(lexicons.DOMAIN_TERMS)
_FORMAL_RE = lexicons.word_pattern(lexicons.FORMAL_MARKERS)
_INFORMAL_RE = lexicons.word_pattern(lexicons.INFORMAL_MARKERS)
_ACADEMIC_RE = lexicons.word_pattern(lexicons.ACADEMIC_MARKERS)
_GEOGRAPHIC_RES = tuple(
    (term, lexicons.word_pattern((term,))) for term in lexicons.GEOGRAPHIC_TERMS
)
_CULTURAL_RES = tuple(
    (term, lexicons.word_pattern((term,))) for term in lexicons.CULTURAL_TERMS
)
_DIALECTAL_RES = tuple(
    (label, re.compile(pattern, re.IGNORECASE))
    for label, pattern in lexicons.DIALECTAL_PHRASES
)

_FUNCTION_WORD_WEIGHT = 50.0
_ACCENT_WEIGHT = 20.0
_ACCENT_CAP = 15.0
_DOMAIN_TERM_WEIGHT = 2.0
_DOMAIN_TERM_CAP = 10.0


class LinguisticProfiler:
    """Compute a `LinguisticProfile` for plain text."""

    def __init__(self, words_per_minute: int = 180) -> None:
        if words_per_minute <= 0:
            raise ValueError("`words_per_minute` must be a positive integer.")
        self.words_per_minute = words_per_minute

    def profile(self, text: str) -> LinguisticProfile:
        """Return every linguistic signal for `text`."""

        word_count = len(self.words(text))
        return LinguisticProfile(
            language_confidence=self.language_confidence(text),
            formality_level=self.formality_level(text),
            geographic_references=_matching_labels(text, _GEOGRAPHIC_RES),
            cultural_references=_matching_labels(text, _CULTURAL_RES),
            dialectal_indicators=_matching_labels(text, _DIALECTAL_RES),
            word_count=word_count,
            estimated_reading_time_minutes=math.ceil(word_count / self.words_per_minute),
        )

    def words(self, text: str) -> list[str]:
        """Return counted word tokens: longer than one character and not purely numeric."""

        tokens = _NON_WORD_RE.sub(" ", text).split()
        return [
            token
            for token in tokens
            if len(token) > 1 and not _NUMERIC_RE.fullmatch(token)
        ]

    def language_confidence(self, text: str) -> float:
        """Return the Italian-likelihood score in `[0, 100]`.

        Sum of three clamped terms over lower-cased whitespace tokens: the
        function-word ratio times 50, accent density times 20 capped at 15, and
        domain-term hits times 2 capped at 10.
        """

        tokens = text.lower().split()
        if not tokens:
            return 0.0

        function_hits = sum(1 for token in tokens if token in lexicons.FUNCTION_WORDS)
        function_score = function_hits / len(tokens) * _FUNCTION_WORD_WEIGHT

        accent_hits = len(_ACCENTED_RE.findall(text.lower()))
        accent_score = min(accent_hits / len(tokens) * _ACCENT_WEIGHT, _ACCENT_CAP)

        domain_hits = len(_DOMAIN_TERM_RE.findall(text))
        domain_score = min(domain_hits * _DOMAIN_TERM_WEIGHT, _DOMAIN_TERM_CAP)

        return min(max(function_score + accent_score + domain_score, 0.0), 100.0)

    def formality_level(self, text: str) -> FormalityLevel:
        """Classify register; academic wins only with a strict majority, ties are mixed."""

        formal = len(_FORMAL_RE.findall(text))
        informal = len(_INFORMAL_RE.findall(text))
        academic = len(_ACADEMIC_RE.findall(text))

        if academic > formal and academic > informal:
            return FormalityLevel.ACADEMIC
        if formal > informal:
            return FormalityLevel.FORMAL
        if informal > formal:
            return FormalityLevel.INFORMAL
        return FormalityLevel.MIXED


def _matching_labels(
    text: str, patterns: tuple[tuple[str, re.Pattern[str]], ...]
) -> frozenset[str]:
    return frozenset(label for label, pattern in patterns if pattern.search(text))
