"""Structural element extraction from normalized Markdown.

Responsibilities:
- Locate headings, inline links, inline images, and fenced code blocks.
- Report each element with the offset of its opening token.
- Never fail on malformed input; unterminated constructs are skipped.
"""

from __future__ import annotations

import re

from ..models.datatypes import CodeBlock, Heading, Image, Link, StructuralElement
from .slug import heading_anchor_id

# A fence opens at a line start with its language glued to the backticks; a
# triple-backtick run closed on the same line is inline code, not a fence.
CODE_FENCE_RE = re.compile(
    r"^[ \t]*(?P<fence>```)(?P<language>[^\s`]+)?[^\n`]*\n(?P<code>.*?)```"
    r"|```[^\n]*?```",
    re.DOTALL | re.MULTILINE,
)
HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(\S.*)$", re.MULTILINE)
LINK_RE = re.compile(r'(?<!!)\[([^\]]+)\]\(\s*([^)\s]+)(?:\s+"([^"]*)")?\s*\)')
IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(\s*([^)\s]+)(?:\s+"([^"]*)")?\s*\)')

_DEFAULT_CODE_LANGUAGE = "text"


def _trim_blank_lines(content: str) -> str:
    """Drop blank lines at both ends of a fenced block body."""

    lines = content.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


class StructuralExtractor:
    """Scan normalized text for each structural element kind independently."""

    def extract(self, text: str) -> list[StructuralElement]:
        """Return every structural element ordered by position.

        The sort is stable, so elements of one kind keep ascending order.
        """

        elements: list[StructuralElement] = [
            *self.headings(text),
            *self.links(text),
            *self.images(text),
            *self.code_blocks(text),
        ]
        return sorted(elements, key=lambda item: item.position)

    def headings(self, text: str) -> list[Heading]:
        """Return ATX headings outside fenced code blocks."""

        fenced = self._fenced_spans(text)
        headings: list[Heading] = []
        for match in HEADING_RE.finditer(text):
            if self._inside(match.start(), fenced):
                continue
            heading_text = match.group(2).strip()
            headings.append(
                Heading(
                    level=len(match.group(1)),
                    text=heading_text,
                    id=heading_anchor_id(heading_text),
                    position=match.start(),
                )
            )
        return headings

    def links(self, text: str) -> list[Link]:
        """Return inline links, excluding image constructs."""

        fenced = self._fenced_spans(text)
        return [
            Link(
                text=match.group(1),
                url=match.group(2),
                title=match.group(3),
                position=match.start(),
            )
            for match in LINK_RE.finditer(text)
            if not self._inside(match.start(), fenced)
        ]

    def images(self, text: str) -> list[Image]:
        """Return inline images."""

        fenced = self._fenced_spans(text)
        return [
            Image(
                alt=match.group(1),
                src=match.group(2),
                title=match.group(3),
                position=match.start(),
            )
            for match in IMAGE_RE.finditer(text)
            if not self._inside(match.start(), fenced)
        ]

    def code_blocks(self, text: str) -> list[CodeBlock]:
        """Return terminated fenced code blocks; an open fence without a close is ignored."""

        return [
            CodeBlock(
                language=match.group("language") or _DEFAULT_CODE_LANGUAGE,
                code=_trim_blank_lines(match.group("code")),
                position=match.start("fence"),
            )
            for match in CODE_FENCE_RE.finditer(text)
            if match.group("fence") is not None
        ]

    @staticmethod
    def _fenced_spans(text: str) -> list[tuple[int, int]]:
        return [match.span() for match in CODE_FENCE_RE.finditer(text)]

    @staticmethod
    def _inside(position: int, spans: list[tuple[int, int]]) -> bool:
        return any(start <= position < end for start, end in spans)
