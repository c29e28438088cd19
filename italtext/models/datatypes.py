"""Core datatypes shared across italtext modules.

Responsibilities:
- Represent immutable records exchanged between pipeline stages.
- Provide explicit typing and JSON-ready payloads for CLI output.

Key types:
- `Heading`, `Link`, `Image`, `CodeBlock` (the `StructuralElement` variants),
  `FormalityLevel`, `LinguisticProfile`, `ParsedDocument`, `EntitySpan`,
  and `NlpTextBundle`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


@dataclass(frozen=True, slots=True)
class Heading:
    """An ATX heading found in normalized text.

    Attributes:
        level: Number of leading `#` characters (1-6).
        text: Trimmed heading text.
        id: ASCII anchor id derived from `text`.
        position: Offset of the first `#` in normalized text.
    """

    level: int
    text: str
    id: str
    position: int


@dataclass(frozen=True, slots=True)
class Link:
    """An inline `[text](url "title")` link.

    Attributes:
        text: Link text between the brackets.
        url: Link destination.
        title: Optional quoted title, `None` when omitted.
        position: Offset of the opening `[` in normalized text.
    """

    text: str
    url: str
    title: str | None
    position: int


@dataclass(frozen=True, slots=True)
class Image:
    """An inline `![alt](src "title")` image.

    Attributes:
        alt: Alternative text, possibly empty.
        src: Image source.
        title: Optional quoted title, `None` when omitted.
        position: Offset of the opening `!` in normalized text.
    """

    alt: str
    src: str
    title: str | None
    position: int


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """A terminated triple-backtick fenced block.

    Attributes:
        language: Fence info tag, `"text"` when absent.
        code: Fenced content without leading/trailing blank lines.
        position: Offset of the opening fence in normalized text.
    """

    language: str
    code: str
    position: int


StructuralElement = Union[Heading, Link, Image, CodeBlock]

_ELEMENT_KINDS: dict[type, str] = {
    Heading: "heading",
    Link: "link",
    Image: "image",
    CodeBlock: "code_block",
}


def element_kind(element: StructuralElement) -> str:
    """Return the payload tag for a structural element variant."""

    return _ELEMENT_KINDS[type(element)]


class FormalityLevel(str, Enum):
    """Closed register classification derived from marker lexicon hits."""

    FORMAL = "formal"
    INFORMAL = "informal"
    ACADEMIC = "academic"
    MIXED = "mixed"


@dataclass(frozen=True, slots=True)
class LinguisticProfile:
    """Heuristic signals describing a plain-text rendering.

    Attributes:
        language_confidence: Italian-likelihood score clamped to `[0, 100]`.
        formality_level: Register classification.
        geographic_references: Italian places mentioned (lower-cased).
        cultural_references: Italian cultural terms mentioned (lower-cased).
        dialectal_indicators: Colloquial phrases detected.
        word_count: Number of counted word tokens.
        estimated_reading_time_minutes: `ceil(word_count / words_per_minute)`.
    """

    language_confidence: float
    formality_level: FormalityLevel
    geographic_references: frozenset[str]
    cultural_references: frozenset[str]
    dialectal_indicators: frozenset[str]
    word_count: int
    estimated_reading_time_minutes: int

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping with sets sorted for stable output."""

        return {
            "language_confidence": self.language_confidence,
            "formality_level": self.formality_level.value,
            "geographic_references": sorted(self.geographic_references),
            "cultural_references": sorted(self.cultural_references),
            "dialectal_indicators": sorted(self.dialectal_indicators),
            "word_count": self.word_count,
            "estimated_reading_time_minutes": self.estimated_reading_time_minutes,
        }


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Complete parse result for one Markdown document.

    Attributes:
        raw_text: Input exactly as supplied by the caller.
        normalized_text: Punctuation-normalized text that positions index into.
        plain_text: Markup-free rendering used for language analysis.
        structural: All structural elements ordered by position.
        sentences: Abbreviation-aware sentence segmentation of `plain_text`.
        profile: Linguistic profile of `plain_text`.
    """

    raw_text: str
    normalized_text: str
    plain_text: str
    structural: list[StructuralElement]
    sentences: list[str]
    profile: LinguisticProfile

    @property
    def headings(self) -> list[Heading]:
        return [item for item in self.structural if isinstance(item, Heading)]

    @property
    def links(self) -> list[Link]:
        return [item for item in self.structural if isinstance(item, Link)]

    @property
    def images(self) -> list[Image]:
        return [item for item in self.structural if isinstance(item, Image)]

    @property
    def code_blocks(self) -> list[CodeBlock]:
        return [item for item in self.structural if isinstance(item, CodeBlock)]

    @property
    def title(self) -> str | None:
        """Text of the first level-1 heading, if any."""

        return next((item.text for item in self.headings if item.level == 1), None)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping of the whole parse result."""

        return {
            "raw_text": self.raw_text,
            "normalized_text": self.normalized_text,
            "plain_text": self.plain_text,
            "title": self.title,
            "structural": [
                {"kind": element_kind(item), **asdict(item)} for item in self.structural
            ],
            "sentences": list(self.sentences),
            "profile": self.profile.to_payload(),
        }


@dataclass(frozen=True, slots=True)
class EntitySpan:
    """One extracted entity occurrence to highlight.

    Attributes:
        type: Entity type label, for example `LOC` or `PER`.
        start_offset: Inclusive character offset in the highlighted text.
        end_offset: Exclusive character offset in the highlighted text.
        text: Optional surface form reported by the extraction service.
    """

    type: str
    start_offset: int
    end_offset: int
    text: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> EntitySpan:
        """Build a span from camelCase or snake_case entity JSON objects."""

        start = payload.get("startOffset", payload.get("start_offset"))
        end = payload.get("endOffset", payload.get("end_offset"))
        entity_type = payload.get("type")
        if start is None or end is None or entity_type is None:
            raise ValueError(
                "Entity objects require `type`, `startOffset`, and `endOffset` fields."
            )
        if isinstance(start, bool) or isinstance(end, bool):
            raise ValueError("Entity offsets must be integers.")
        text = payload.get("text")
        return cls(
            type=str(entity_type),
            start_offset=int(start),
            end_offset=int(end),
            text=None if text is None else str(text),
        )


@dataclass(frozen=True, slots=True)
class NlpTextBundle:
    """Plain-text views handed to the entity extraction client."""

    full_text: str
    sentences: list[str] = field(default_factory=list)
    paragraphs: list[str] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return asdict(self)
