"""Pipeline orchestration for italtext.

Responsibilities:
- Define the stage order for Markdown parsing: normalize, structure, reduce,
  segment, profile.
- Assemble stage outputs into an immutable `ParsedDocument`.
- Host the offset-stable highlighting transform used by display layers.

Key types:
- `MarkdownPipeline`: orchestration facade.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from .config import ParserConfig
from .models.datatypes import EntitySpan, NlpTextBundle, ParsedDocument
from .telemetry.logger import RunLogger
from .text.cleaners import PlainTextReducer
from .text.highlight import highlight_entities
from .text.normalizer import TextNormalizer
from .text.profiler import LinguisticProfiler
from .text.segmenter import SentenceSegmenter, split_paragraphs
from .text.structure import StructuralExtractor

_StageResult = TypeVar("_StageResult")


class MarkdownPipeline:
    """Coordinate all parsing stages for one document at a time.

    Instances hold only configuration and stateless stage objects, so one
    pipeline may parse any number of documents, concurrently or not.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Build stage objects from `config`; pass `run_logger` to emit stage events."""

        self.config = config or ParserConfig()
        self.config.validate()
        self._run_logger = run_logger
        self._normalizer = TextNormalizer()
        self._extractor = StructuralExtractor()
        self._reducer = PlainTextReducer(
            image_alt_keywords=self.config.image_alt_keywords,
            drop_redundant_headings=self.config.drop_redundant_headings,
        )
        self._segmenter = SentenceSegmenter()
        self._profiler = LinguisticProfiler(words_per_minute=self.config.words_per_minute)

    def parse(self, raw_text: str) -> ParsedDocument:
        """Parse raw Markdown into plain text, structure, sentences, and a profile."""

        normalized = self._run_stage("normalize", lambda: self._normalizer.normalize(raw_text))
        structural = self._run_stage("structure", lambda: self._extractor.extract(normalized))
        plain_text = self._run_stage("reduce", lambda: self._reducer.reduce(normalized))
        sentences = self._run_stage("segment", lambda: self._segmenter.segment(plain_text))
        profile = self._run_stage("profile", lambda: self._profiler.profile(plain_text))
        return ParsedDocument(
            raw_text=raw_text,
            normalized_text=normalized,
            plain_text=plain_text,
            structural=structural,
            sentences=sentences,
            profile=profile,
        )

    def extract_text_for_nlp(self, raw_text: str) -> NlpTextBundle:
        """Return the plain-text views consumed by the entity extraction client."""

        document = self.parse(raw_text)
        return NlpTextBundle(
            full_text=document.plain_text,
            sentences=list(document.sentences),
            paragraphs=split_paragraphs(document.plain_text),
            headers=[heading.text for heading in document.headings],
        )

    @staticmethod
    def highlight(
        raw_text: str, entities: Iterable[EntitySpan | Mapping[str, Any]]
    ) -> str:
        """Wrap entity spans of `raw_text` in typed highlight markup."""

        return highlight_entities(raw_text, entities)

    def _run_stage(self, stage_name: str, action: Callable[[], _StageResult]) -> _StageResult:
        """Run one named stage and emit start/complete/failure events when logging."""

        if self._run_logger is None:
            return action()

        self._run_logger.log_stage_start(stage_name)
        try:
            result = action()
        except Exception as exc:
            self._run_logger.log_stage_failure(stage_name, type(exc).__name__)
            raise
        self._run_logger.log_stage_complete(stage_name, **_stage_context(result))
        return result


def _stage_context(result: object) -> dict[str, object]:
    if isinstance(result, str):
        return {"chars": len(result)}
    if isinstance(result, list):
        return {"items": len(result)}
    return {}


def parse(raw_text: str, config: ParserConfig | None = None) -> ParsedDocument:
    """Parse raw Markdown with a default (or configured) pipeline."""

    return MarkdownPipeline(config=config).parse(raw_text)


def highlight(raw_text: str, entities: Iterable[EntitySpan | Mapping[str, Any]]) -> str:
    """Wrap entity spans of `raw_text` in typed highlight markup."""

    return highlight_entities(raw_text, entities)
