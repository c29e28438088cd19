"""Unit tests for the parsing orchestrator and its end-to-end scenarios."""

from __future__ import annotations

import json

import pytest

from italtext import MarkdownPipeline, highlight, parse
from italtext.config import ParserConfig
from italtext.models.datatypes import CodeBlock, FormalityLevel, Heading, Image, Link

_OPENING_TOKENS = {Heading: "#", Link: "[", Image: "![", CodeBlock: "```"}
_KIND_TYPES = {"heading": Heading, "link": Link, "image": Image, "code_block": CodeBlock}


def test_heading_scenario_yields_body_sentence_and_place() -> None:
    """A title restated by its body is extracted but not duplicated in plain text."""

    document = parse("# Milano\nMilano è la capitale economica d'Italia.")

    assert document.structural == [Heading(level=1, text="Milano", id="milano", position=0)]
    assert document.plain_text == "Milano è la capitale economica d'Italia."
    assert "milano" in document.profile.geographic_references
    assert document.title == "Milano"


def test_abbreviation_scenario_yields_one_sentence() -> None:
    """`dott.` should not split the sentence."""

    document = parse("Il dott. Rossi lavora a Roma.")

    assert document.sentences == ["Il dott. Rossi lavora a Roma"]


def test_code_block_scenario_hides_code_from_plain_text() -> None:
    """Code is inventoried structurally and absent from the plain text."""

    document = parse("```js\nconsole.log(1)\n```\n# Titolo")

    assert document.code_blocks == [CodeBlock(language="js", code="console.log(1)", position=0)]
    assert [(heading.level, heading.text) for heading in document.headings] == [(1, "Titolo")]
    assert "Titolo" in document.plain_text
    assert "console.log" not in document.plain_text


@pytest.mark.parametrize("raw", ["", "   \n\t  "])
def test_blank_input_scenario_yields_empty_document(raw: str) -> None:
    """Blank input produces no structure, no sentences, and a zero profile."""

    document = parse(raw)

    assert document.plain_text == ""
    assert document.structural == []
    assert document.sentences == []
    assert document.profile.word_count == 0
    assert document.profile.language_confidence == 0
    assert document.profile.formality_level is FormalityLevel.MIXED


def test_highlight_scenario_through_package_api() -> None:
    """The package-level `highlight` wraps the given slice with its type."""

    result = highlight(
        "Roma è bella",
        [{"text": "Roma", "type": "LOC", "startOffset": 0, "endOffset": 4}],
    )

    assert result.endswith(">Roma</span> è bella")
    assert 'data-entity-type="LOC"' in result
    assert MarkdownPipeline.highlight("Roma è bella", []) == "Roma è bella"


def test_positions_index_normalized_text() -> None:
    """Offsets account for characters expanded by normalization."""

    document = parse("“A”… [x](u.html)")

    assert document.normalized_text == '"A"... [x](u.html)'
    assert document.links[0].position == 7
    assert document.normalized_text[7] == "["


def test_fixture_document_structure_and_offsets(guida_roma_text: str) -> None:
    """Every element should start with its opening token at its position."""

    document = parse(guida_roma_text)

    assert [(heading.level, heading.id) for heading in document.headings] == [
        (1, "guida-di-roma"),
        (2, "arte-e-cultura"),
    ]
    assert [(link.text, link.title) for link in document.links] == [
        ("Michelangelo", "Biografia")
    ]
    assert [image.alt for image in document.images] == ["Piazza Navona a Roma", "logo"]
    assert [block.language for block in document.code_blocks] == ["python"]
    assert document.code_blocks[0].code == '# non è un titolo\nprint("ciao")'
    for element in document.structural:
        opening = _OPENING_TOKENS[type(element)]
        assert document.normalized_text[element.position :].startswith(opening)


def test_fixture_document_plain_text_and_profile(guida_roma_text: str) -> None:
    """Plain text keeps linguistic content and the profile reflects it."""

    document = parse(guida_roma_text)

    assert "Colosseo" in document.plain_text
    assert "Piazza Navona a Roma" in document.plain_text
    assert "logo" not in document.plain_text
    assert "print" not in document.plain_text
    assert "**" not in document.plain_text
    assert document.sentences[-1] == "Il dott. Bianchi conferma: va bene"
    assert len(document.sentences) == 4

    profile = document.profile
    assert profile.word_count == 40
    assert profile.estimated_reading_time_minutes == 1
    assert profile.geographic_references == {"roma", "firenze"}
    assert profile.cultural_references == {"arte", "michelangelo", "pizza", "rinascimento"}
    assert profile.dialectal_indicators == {"mamma mia", "va bene"}
    assert profile.formality_level is FormalityLevel.MIXED
    assert 20.0 < profile.language_confidence <= 100.0


def test_parse_is_deterministic(guida_roma_text: str) -> None:
    """Parsing the same input twice yields equal results."""

    pipeline = MarkdownPipeline()

    assert pipeline.parse(guida_roma_text) == pipeline.parse(guida_roma_text)


def test_config_is_threaded_into_stages() -> None:
    """Reading speed and heading policy come from `ParserConfig`."""

    pipeline = MarkdownPipeline(
        config=ParserConfig(words_per_minute=3, drop_redundant_headings=False)
    )

    document = pipeline.parse("# Roma\nRoma è eterna e bellissima.")

    assert document.plain_text == "Roma Roma è eterna e bellissima."
    assert document.profile.word_count == 4
    assert document.profile.estimated_reading_time_minutes == 2


def test_invalid_config_is_rejected_at_construction() -> None:
    """The pipeline validates its configuration."""

    with pytest.raises(ValueError, match="words_per_minute"):
        MarkdownPipeline(config=ParserConfig(words_per_minute=-1))


def test_extract_text_for_nlp_bundles_views(guida_roma_text: str) -> None:
    """The NLP bundle carries plain text, sentences, paragraphs, and headers."""

    pipeline = MarkdownPipeline()
    document = pipeline.parse(guida_roma_text)

    bundle = pipeline.extract_text_for_nlp(guida_roma_text)

    assert bundle.full_text == document.plain_text
    assert bundle.sentences == document.sentences
    assert bundle.paragraphs == [document.plain_text]
    assert bundle.headers == ["Guida di Roma", "Arte e cultura"]


def test_document_payload_is_json_serializable(guida_roma_text: str) -> None:
    """The payload tags element kinds and sorts reference sets."""

    payload = parse(guida_roma_text).to_payload()

    encoded = json.loads(json.dumps(payload, ensure_ascii=False))
    assert [item["kind"] for item in encoded["structural"]] == [
        "heading",
        "heading",
        "link",
        "image",
        "image",
        "code_block",
    ]
    assert encoded["profile"]["geographic_references"] == ["firenze", "roma"]
    assert encoded["profile"]["formality_level"] == "mixed"
    assert encoded["title"] == "Guida di Roma"
    assert encoded["normalized_text"] == guida_roma_text
    for item in encoded["structural"]:
        opening = _OPENING_TOKENS[_KIND_TYPES[item["kind"]]]
        assert encoded["normalized_text"][item["position"] :].startswith(opening)


def test_payload_offsets_index_its_normalized_text() -> None:
    """Positions in the payload point into the payload's `normalized_text`."""

    payload = parse("…\n# Roma\n[Dante](d.html) e ```x```\n```js\ncodice\n```").to_payload()

    assert payload["normalized_text"].startswith("...\n# Roma")
    for item in payload["structural"]:
        opening = _OPENING_TOKENS[_KIND_TYPES[item["kind"]]]
        assert payload["normalized_text"][item["position"] :].startswith(opening)
    assert [item["position"] for item in payload["structural"]][0] == 4
