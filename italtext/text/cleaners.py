"""Markdown-to-plain-text reduction rules.

Responsibilities:
- Provide composable, order-sensitive rewrite rules that strip Markdown syntax.
- Preserve Italian linguistic content (accents, elisions, sentence punctuation).
- Compose the default rule order into `PlainTextReducer`.

Rule order matters: code is removed first so nothing inside a code block can be
mistaken for another construct, and links are rewritten before images only
because the link pattern refuses to start on an image's `!`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from . import lexicons
from .structure import CODE_FENCE_RE, HEADING_RE

_UPPER = "A-ZÀÈÉÌÒÙ"
_LOWER = "a-zàèéìíîòóù"


class ReductionRule(Protocol):
    """Protocol for plain-text reduction rules."""

    def apply(self, text: str) -> str:
        """Apply a single rewrite."""


class RemoveCode:
    """Replace fenced blocks, then inline code spans, with a single space."""

    _INLINE_RE = re.compile(r"`[^`\n]+`")

    def apply(self, text: str) -> str:
        text = CODE_FENCE_RE.sub(" ", text)
        return self._INLINE_RE.sub(" ", text)


class StripHeadingMarkers:
    """Remove `#` heading markers while keeping heading text.

    With `drop_redundant` enabled a heading whose text opens the next non-empty
    line is dropped entirely, so titles restated by the body are not doubled.
    """

    _MARKER_RE = re.compile(r"^#{1,6}[ \t]+", re.MULTILINE)

    def __init__(self, drop_redundant: bool = True) -> None:
        self.drop_redundant = drop_redundant

    def apply(self, text: str) -> str:
        if self.drop_redundant:
            text = self._drop_redundant_headings(text)
        return self._MARKER_RE.sub("", text)

    def _drop_redundant_headings(self, text: str) -> str:
        lines = text.split("\n")
        kept: list[str] = []
        for index, line in enumerate(lines):
            match = HEADING_RE.fullmatch(line)
            if match is not None and self._restated_below(match.group(2).strip(), lines, index):
                continue
            kept.append(line)
        return "\n".join(kept)

    @staticmethod
    def _restated_below(heading_text: str, lines: list[str], index: int) -> bool:
        following = next((line.strip() for line in lines[index + 1 :] if line.strip()), "")
        if not following.startswith(heading_text):
            return False
        return len(following) == len(heading_text) or not following[len(heading_text)].isalnum()


class ReplaceLinks:
    """Replace `[text](url)` links with their text."""

    _LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\([^)]*\)")

    def apply(self, text: str) -> str:
        return self._LINK_RE.sub(r"\1", text)


class ReplaceImages:
    """Replace images with their alt text when it is culturally relevant, else drop them.

    Alt text is relevant when it names one of `keywords` or carries an accented
    vowel; everything else is discarded.
    """

    _IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")

    def __init__(self, keywords: Iterable[str] = lexicons.IMAGE_ALT_KEYWORDS) -> None:
        terms = tuple(keyword for keyword in keywords if keyword.strip())
        self._keyword_re = lexicons.word_pattern(terms) if terms else None

    def is_relevant(self, alt_text: str) -> bool:
        """Return whether image alt text should survive reduction."""

        if not alt_text:
            return False
        if any(character in lexicons.ACCENTED_VOWELS for character in alt_text.lower()):
            return True
        return self._keyword_re is not None and self._keyword_re.search(alt_text) is not None

    def apply(self, text: str) -> str:
        return self._IMAGE_RE.sub(
            lambda match: match.group(1) if self.is_relevant(match.group(1)) else "",
            text,
        )


class StripEmphasis:
    """Remove strong, emphasis, underline, and strikethrough markers."""

    _PATTERNS = (
        re.compile(r"\*\*(?=[^\s*])(.+?)(?<=[^\s*])\*\*"),
        re.compile(r"(?<!\w)__(?=[^\s_])(.+?)(?<=[^\s_])__(?!\w)"),
        re.compile(r"~~(?=[^\s~])(.+?)(?<=[^\s~])~~"),
        re.compile(r"\*(?=[^\s*])(.+?)(?<=[^\s*])\*"),
        re.compile(r"(?<!\w)_(?=[^\s_])(.+?)(?<=[^\s_])_(?!\w)"),
    )

    def apply(self, text: str) -> str:
        for pattern in self._PATTERNS:
            text = pattern.sub(r"\1", text)
        return text


class StripListMarkers:
    """Remove bullet and ordered-list markers at line starts."""

    # A bullet line made only of markers is a horizontal rule, not a list item.
    _BULLET_RE = re.compile(
        r"^[ \t]*[-*+][ \t]+(?=\S)(?!(?:[-*+][ \t]*){2,}$)", re.MULTILINE
    )
    _ORDERED_RE = re.compile(r"^[ \t]*\d+[.)][ \t]+", re.MULTILINE)

    def apply(self, text: str) -> str:
        text = self._BULLET_RE.sub("", text)
        return self._ORDERED_RE.sub("", text)


class StripBlockquotes:
    """Remove (possibly nested) blockquote markers at line starts."""

    _QUOTE_RE = re.compile(r"^[ \t]*(?:>[ \t]?)+", re.MULTILINE)

    def apply(self, text: str) -> str:
        return self._QUOTE_RE.sub("", text)


class RemoveHorizontalRules:
    """Remove thematic-break lines and setext underlines."""

    _RULE_RE = re.compile(r"^[ \t]*([-*_=])(?:[ \t]*\1){2,}[ \t]*$", re.MULTILINE)

    def apply(self, text: str) -> str:
        return self._RULE_RE.sub("", text)


class ItalianTextCleanup:
    """Final whitespace, punctuation, and elision cleanup."""

    _STEPS = (
        (re.compile(r"\s+"), " "),
        (re.compile(r"\n{3,}"), "\n\n"),
        (re.compile(rf"([.!?])([{_UPPER}])"), r"\1 \2"),
        (re.compile(r"\s+([.!?:;,])"), r"\1"),
        (re.compile(rf"([{_LOWER}])([{_UPPER}])"), r"\1 \2"),
        (re.compile(r"\s+'"), "'"),
        (re.compile(r"'\s+"), "'"),
        (
            re.compile(rf"\b({'|'.join(lexicons.ELISION_PREFIXES)})\s+([aeiouAEIOU])"),
            r"\1'\2",
        ),
    )

    def apply(self, text: str) -> str:
        for pattern, replacement in self._STEPS:
            text = pattern.sub(replacement, text)
        return text.strip()


class PlainTextReducer:
    """Apply the reduction rules in their fixed order."""

    def __init__(
        self,
        rules: list[ReductionRule] | None = None,
        image_alt_keywords: Iterable[str] = lexicons.IMAGE_ALT_KEYWORDS,
        drop_redundant_headings: bool = True,
    ) -> None:
        self.rules = rules or [
            RemoveCode(),
            StripHeadingMarkers(drop_redundant=drop_redundant_headings),
            ReplaceLinks(),
            ReplaceImages(keywords=image_alt_keywords),
            StripEmphasis(),
            StripListMarkers(),
            StripBlockquotes(),
            RemoveHorizontalRules(),
            ItalianTextCleanup(),
        ]

    def reduce(self, text: str) -> str:
        """Return the markup-free plain text for normalized Markdown."""

        current = text
        for rule in self.rules:
            current = rule.apply(current)
        return current.strip()
