"""Unit tests for heading, link, image, and code-block extraction."""

from __future__ import annotations

import random

import pytest

from italtext.models.datatypes import CodeBlock, Heading, Image, Link
from italtext.pipeline import MarkdownPipeline
from italtext.text.cleaners import PlainTextReducer
from italtext.text.structure import StructuralExtractor


def test_heading_extraction_reports_level_text_id_and_position() -> None:
    """A leading `#` run followed by whitespace should yield one heading."""

    text = "# Milano\nMilano è la capitale economica d'Italia.\n\n### Il  Duomo  \n"

    headings = StructuralExtractor().headings(text)

    assert headings == [
        Heading(level=1, text="Milano", id="milano", position=0),
        Heading(level=3, text="Il  Duomo", id="il-duomo", position=text.index("###")),
    ]


def test_heading_extraction_rejects_missing_space_and_seven_hashes() -> None:
    """`#tag` and seven-hash lines are not headings."""

    text = "#hashtag\n####### troppi\nparagrafo # non titolo"

    assert StructuralExtractor().headings(text) == []


def test_link_extraction_parses_optional_title_and_skips_images() -> None:
    """Inline links should expose text, url, optional title, and `[` offset."""

    text = (
        'Vedi [Treccani](https://www.treccani.it "Enciclopedia") e '
        "[Wikipedia](https://it.wikipedia.org) ma non ![foto](img/a.png)."
    )

    links = StructuralExtractor().links(text)

    assert links == [
        Link(
            text="Treccani",
            url="https://www.treccani.it",
            title="Enciclopedia",
            position=text.index("[Treccani"),
        ),
        Link(
            text="Wikipedia",
            url="https://it.wikipedia.org",
            title=None,
            position=text.index("[Wikipedia"),
        ),
    ]
    assert all(text[link.position :].startswith("[") for link in links)


def test_image_extraction_reports_bang_offset_and_title() -> None:
    """Images should be reported from their `!` with alt, src, and title."""

    text = 'Intro\n![Il Colosseo](foto/colosseo.jpg "Roma antica")\n![](vuota.png)'

    images = StructuralExtractor().images(text)

    assert images == [
        Image(
            alt="Il Colosseo",
            src="foto/colosseo.jpg",
            title="Roma antica",
            position=text.index("![Il"),
        ),
        Image(alt="", src="vuota.png", title=None, position=text.index("![]")),
    ]
    assert all(text[image.position :].startswith("![") for image in images)


def test_code_block_extraction_reads_language_and_trims_blank_lines() -> None:
    """Fenced blocks should keep inner indentation but drop blank edge lines."""

    text = "```js\nconsole.log(1)\n```\n# Titolo\n```\n\n  x = 1\n\n```\n"

    blocks = StructuralExtractor().code_blocks(text)

    assert blocks == [
        CodeBlock(language="js", code="console.log(1)", position=0),
        CodeBlock(language="text", code="  x = 1", position=text.index("```\n\n")),
    ]


def test_unterminated_fence_is_not_emitted() -> None:
    """An opening fence without a close should be silently skipped."""

    text = "Prima\n```python\nprint('mai chiuso')\n"

    assert StructuralExtractor().code_blocks(text) == []


def test_markup_inside_fenced_blocks_is_not_extracted() -> None:
    """Headings and links inside a terminated fence are code, not structure."""

    text = "```md\n# non titolo\n[non](link)\n```\n# Vero titolo\n"

    extractor = StructuralExtractor()

    assert [heading.text for heading in extractor.headings(text)] == ["Vero titolo"]
    assert extractor.links(text) == []


def test_extract_orders_all_kinds_by_position() -> None:
    """The combined inventory should be sorted by offset across kinds."""

    text = (
        "[primo](a.html)\n"
        "# Titolo\n"
        "![Firenze](f.png)\n"
        "```\ncodice\n```\n"
        "## Sezione [secondo](b.html)\n"
    )

    elements = StructuralExtractor().extract(text)

    assert [type(item).__name__ for item in elements] == [
        "Link",
        "Heading",
        "Image",
        "CodeBlock",
        "Heading",
        "Link",
    ]
    positions = [item.position for item in elements]
    assert positions == sorted(positions)


def test_extractor_never_fails_on_malformed_markup() -> None:
    """Unmatched brackets and stray fences should produce a partial result."""

    text = "[rotto](senza chiusura\n![anche](rotto\n```\n# Titolo"

    elements = StructuralExtractor().extract(text)

    assert elements == [Heading(level=1, text="Titolo", id="titolo", position=text.index("#"))]


def test_inline_triple_backticks_do_not_open_a_fence() -> None:
    """A triple-backtick span closed on its own line is inline code."""

    text = "Usa ```x``` qui\n```js\ncode\n```"

    blocks = StructuralExtractor().code_blocks(text)

    assert blocks == [CodeBlock(language="js", code="code", position=text.index("```js"))]
    assert PlainTextReducer().reduce(text) == "Usa qui"


def test_fence_info_string_after_language_is_ignored() -> None:
    """Words after the language tag belong to the info string."""

    text = "```python title=a\nprint(1)\n```\nDopo"

    assert StructuralExtractor().code_blocks(text) == [
        CodeBlock(language="python", code="print(1)", position=0)
    ]
    assert PlainTextReducer().reduce(text) == "Dopo"


def test_markup_inside_fence_with_info_string_is_not_extracted() -> None:
    """Blocks with a multi-word info string still hide their markup."""

    text = "```md title=esempio\n# non titolo\n[non](link)\n```\n# Vero titolo\n"

    extractor = StructuralExtractor()

    assert [heading.text for heading in extractor.headings(text)] == ["Vero titolo"]
    assert extractor.links(text) == []


def test_fence_must_open_at_line_start() -> None:
    """Backticks in the middle of prose never pair with a later fence."""

    text = "Scrivi ``` e poi\n```\ncodice\n```"

    assert StructuralExtractor().code_blocks(text) == [
        CodeBlock(language="text", code="codice", position=text.index("```\ncodice"))
    ]


_PROSE_FRAGMENTS = (
    "Roma è bella.",
    "Usa ```x``` qui.",
    "Chiama `f()` ora.",
    "## Sezione",
    "[Dante](d.html) scrive.",
)
_LANGUAGES = ("", "js", "python")
_INFO_STRINGS = ("", " title=a", " {.esempio}")


def _random_document(seed: int) -> tuple[str, list[str], list[str]]:
    """Compose a document mixing prose, inline code, and terminated fences."""

    rng = random.Random(seed)
    fragments: list[str] = []
    tokens: list[str] = []
    languages: list[str] = []
    for index in range(rng.randint(1, 8)):
        if rng.random() < 0.4:
            language = rng.choice(_LANGUAGES)
            token = f"blocco{seed}x{index}"
            fragments.append(
                f"```{language}{rng.choice(_INFO_STRINGS)}\n# finto\n{token}\n```"
            )
            tokens.append(token)
            languages.append(language or "text")
        else:
            fragments.append(rng.choice(_PROSE_FRAGMENTS))
    return "\n\n".join(fragments), tokens, languages


@pytest.mark.parametrize("seed", range(30))
def test_code_regions_agree_between_extractor_and_reducer(seed: int) -> None:
    """Every reported block opens with a fence and is absent from plain text."""

    text, tokens, languages = _random_document(seed)

    document = MarkdownPipeline().parse(text)

    assert [block.language for block in document.code_blocks] == languages
    for block, token in zip(document.code_blocks, tokens):
        assert document.normalized_text[block.position :].startswith("```")
        assert block.code == f"# finto\n{token}"
        assert token not in document.plain_text
    assert "finto" not in document.plain_text
    assert all(heading.text == "Sezione" for heading in document.headings)
