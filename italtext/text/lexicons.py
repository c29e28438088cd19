"""Fixed Italian lexicons used by reduction, segmentation, and profiling.

Responsibilities:
- Keep every membership-test word list as immutable module data.
- Provide compiled word-boundary patterns shared by the heuristics.

Lexicons are deliberately small and closed; extending one never requires a
change in the scoring code that consumes it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

ACCENTED_VOWELS = "àèéìíîòóù"

FUNCTION_WORDS = frozenset(
    {
        "il",
        "la",
        "di",
        "che",
        "e",
        "a",
        "un",
        "per",
        "in",
        "con",
        "non",
        "una",
        "su",
        "del",
        "da",
        "al",
        "come",
        "le",
        "si",
        "nella",
        "sono",
        "stato",
        "molto",
        "tutto",
        "anche",
        "ancora",
        "solo",
        "quando",
        "essere",
        "aveva",
    }
)

TITLE_ABBREVIATIONS = frozenset(
    {"dr", "prof", "sig", "dott", "ing", "avv", "on", "sen"}
)

# Place/culture terms counted towards language confidence.
DOMAIN_TERMS = (
    "italia",
    "roma",
    "milano",
    "napoli",
    "firenze",
    "venezia",
    "papa",
    "vaticano",
    "rinascimento",
    "arte",
    "cultura",
    "storia",
    "cucina",
    "pasta",
    "pizza",
)

GEOGRAPHIC_TERMS = (
    "roma",
    "milano",
    "napoli",
    "firenze",
    "venezia",
    "torino",
    "palermo",
    "genova",
    "bologna",
    "bari",
    "lombardia",
    "lazio",
    "campania",
    "toscana",
    "veneto",
    "sicilia",
    "piemonte",
    "puglia",
)

CULTURAL_TERMS = (
    "rinascimento",
    "arte",
    "opera",
    "dante",
    "leonardo",
    "michelangelo",
    "pasta",
    "pizza",
    "calcio",
    "ferrari",
)

# Phrase label -> pattern; whitespace inside a phrase may be any run.
DIALECTAL_PHRASES = (
    ("ciao bello", r"\bciao\s+bello"),
    ("mamma mia", r"\bmamma\s+mia"),
    ("va bene", r"\bva\s+bene"),
)

FORMAL_MARKERS = ("egregio", "spettabile", "cortese", "distinti", "saluti")
INFORMAL_MARKERS = ("ciao", "bello", "roba", "tipo")
ACADEMIC_MARKERS = ("analisi", "ricerca", "studio", "metodologia")

# Image alt text mentioning one of these survives plain-text reduction.
IMAGE_ALT_KEYWORDS = (
    "roma",
    "milano",
    "napoli",
    "firenze",
    "venezia",
    "torino",
    "palermo",
    "genova",
    "bologna",
    "bari",
    "italia",
    "italiano",
    "italiana",
    "italiani",
    "italiane",
    "papa",
    "vaticano",
    "colosseo",
    "duomo",
    "piazza",
    "ponte",
    "castello",
)

ELISION_PREFIXES = ("dell", "nell", "sull", "dall")


def word_pattern(terms: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive whole-word alternation over `terms`."""

    alternation = "|".join(re.escape(term) for term in terms)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
