"""Text reduction, segmentation, and profiling components.

This package provides the deterministic building blocks composed by
`MarkdownPipeline`: normalization, structural extraction, plain-text
reduction, sentence segmentation, linguistic profiling, and highlighting.
"""

from .cleaners import (
    ItalianTextCleanup,
    PlainTextReducer,
    RemoveCode,
    RemoveHorizontalRules,
    ReplaceImages,
    ReplaceLinks,
    StripBlockquotes,
    StripEmphasis,
    StripHeadingMarkers,
    StripListMarkers,
)
from .highlight import highlight_entities
from .normalizer import TextNormalizer
from .profiler import LinguisticProfiler
from .segmenter import SentenceSegmenter
from .structure import StructuralExtractor

__all__ = [
    "ItalianTextCleanup",
    "LinguisticProfiler",
    "PlainTextReducer",
    "RemoveCode",
    "RemoveHorizontalRules",
    "ReplaceImages",
    "ReplaceLinks",
    "SentenceSegmenter",
    "StripBlockquotes",
    "StripEmphasis",
    "StripHeadingMarkers",
    "StripListMarkers",
    "StructuralExtractor",
    "TextNormalizer",
    "highlight_entities",
]
