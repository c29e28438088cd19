"""Offset-stable entity highlighting.

Responsibilities:
- Wrap entity spans of a text in typed `<span>` markup.
- Validate spans up front so overlapping or out-of-range input is rejected.

Spans are applied from the highest start offset downwards: every insertion
happens after all spans still to be processed, so their offsets stay valid.
"""

from __future__ import annotations

from functools import reduce
from html import escape
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..errors import HighlightSpanError
from ..models.datatypes import EntitySpan

_CLASS_TOKEN_RE = re.compile(r"[^a-z0-9_-]+")


def render_entity_span(entity_type: str, content: str) -> str:
    """Return the markup wrapping one entity occurrence."""

    css_type = _CLASS_TOKEN_RE.sub("-", entity_type.lower()).strip("-") or "unknown"
    label = escape(entity_type, quote=True)
    return (
        f'<span class="entity-highlight entity-{css_type}" '
        f'data-entity-type="{label}" title="{label}">{content}</span>'
    )


def coerce_entities(entities: Iterable[EntitySpan | Mapping[str, Any]]) -> list[EntitySpan]:
    """Accept `EntitySpan` records or raw entity JSON objects."""

    return [
        entity if isinstance(entity, EntitySpan) else EntitySpan.from_mapping(entity)
        for entity in entities
    ]


def ordered_for_insertion(text: str, entities: Iterable[EntitySpan]) -> list[EntitySpan]:
    """Return spans sorted by descending start offset after validating them.

    Raises:
        HighlightSpanError: If a span is empty, inverted, outside `text`, or
            overlaps another span.
    """

    ordered = sorted(entities, key=lambda item: item.start_offset, reverse=True)
    for entity in ordered:
        if not 0 <= entity.start_offset < entity.end_offset <= len(text):
            raise HighlightSpanError(
                f"Entity span [{entity.start_offset}, {entity.end_offset}) of type "
                f"`{entity.type}` is empty or outside the text (length {len(text)})."
            )
    for later, earlier in zip(ordered, ordered[1:]):
        if earlier.end_offset > later.start_offset:
            raise HighlightSpanError(
                f"Entity spans [{earlier.start_offset}, {earlier.end_offset}) and "
                f"[{later.start_offset}, {later.end_offset}) overlap."
            )
    return ordered


def highlight_entities(
    text: str, entities: Iterable[EntitySpan | Mapping[str, Any]]
) -> str:
    """Wrap every entity span of `text` in highlight markup.

    Offsets refer to `text` itself; an empty entity list returns `text` unchanged.
    """

    ordered = ordered_for_insertion(text, coerce_entities(entities))

    def _wrap(current: str, entity: EntitySpan) -> str:
        start, end = entity.start_offset, entity.end_offset
        return current[:start] + render_entity_span(entity.type, current[start:end]) + current[end:]

    return reduce(_wrap, ordered, text)
