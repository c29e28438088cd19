"""Command-line interface for italtext.

Responsibilities:
- Expose user-facing commands for parsing, segmentation, profiling, and
  highlighting of Markdown documents.
- Convert CLI arguments into `ParserConfig` and map failures to stage errors.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from .cli_rendering import echo_profile_summary, echo_structure_summary, exit_with_command_error
from .config import ConfigLoader, ParserConfig
from .errors import PipelineStageError
from .io.storage import ArtifactStore, dumps_payload, read_document
from .models.datatypes import EntitySpan
from .pipeline import MarkdownPipeline
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="italtext",
    no_args_is_help=True,
    help="Italian Markdown preparation for entity extraction.",
)

InputArgument = Annotated[Path, typer.Argument(help="Path to a UTF-8 Markdown document.")]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Path to YAML config file with parser settings."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Log pipeline stage events to stderr."),
]


def _load_config(config_path: Path | None) -> ParserConfig:
    """Load parser config from YAML when given, else from environment variables."""

    if config_path is None:
        try:
            return ConfigLoader.from_env()
        except ValueError as exc:
            raise PipelineStageError(
                stage="config",
                detail=f"Invalid environment configuration: {exc}",
                hint="Fix or unset the offending `ITALTEXT_*` variable.",
            ) from exc

    try:
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Invalid config file `{config_path}`: {exc}",
            hint="Fix config schema/values and rerun.",
        ) from exc
    except Exception as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Failed to load config file `{config_path}`: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


def _read_input(input_path: Path, config: ParserConfig) -> str:
    """Read the input document and enforce the configured size cap."""

    try:
        text = read_document(input_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="input",
            detail=f"Input document not found: `{input_path}`.",
            hint="Pass an existing Markdown file path.",
        ) from exc
    except UnicodeDecodeError as exc:
        raise PipelineStageError(
            stage="input",
            detail=f"Input document `{input_path}` is not valid UTF-8.",
            hint="Re-encode the document as UTF-8 and rerun.",
        ) from exc

    if config.max_input_chars is not None and len(text) > config.max_input_chars:
        raise PipelineStageError(
            stage="input",
            detail=(
                f"Input document has {len(text)} characters, above the configured "
                f"limit of {config.max_input_chars}."
            ),
            hint="Split the document or raise `max_input_chars`.",
        )
    return text


def _build_pipeline(config: ParserConfig, verbose: bool) -> MarkdownPipeline:
    return MarkdownPipeline(config=config, run_logger=RunLogger() if verbose else None)


def _load_entities(entities_path: Path) -> list[EntitySpan]:
    """Load entity spans from a JSON array (or an object with an `entities` array)."""

    try:
        payload: Any = json.loads(entities_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="entities",
            detail=f"Entities file not found: `{entities_path}`.",
            hint="Provide an existing JSON file via `--entities <path.json>`.",
        ) from exc
    except json.JSONDecodeError as exc:
        raise PipelineStageError(
            stage="entities",
            detail=f"Entities file `{entities_path}` is not valid JSON: {exc}",
        ) from exc

    if isinstance(payload, dict):
        payload = payload.get("entities")
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise PipelineStageError(
            stage="entities",
            detail=f"Entities file `{entities_path}` must contain a list of entity objects.",
            hint="Use objects with `type`, `startOffset`, and `endOffset` fields.",
        )
    try:
        return [EntitySpan.from_mapping(item) for item in payload]
    except (TypeError, ValueError) as exc:
        raise PipelineStageError(stage="entities", detail=str(exc)) from exc


@app.command("parse")
def parse_command(
    input_path: InputArgument,
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Directory for `parsed.json` and `plain.txt`."),
    ] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Parse a document and print (or write) the full result as JSON."""

    try:
        config = _load_config(config_file)
        raw_text = _read_input(input_path, config)
        document = _build_pipeline(config, verbose).parse(raw_text)
        if out is not None:
            store = ArtifactStore(out)
            parsed_path = store.save_json(Path("parsed.json"), document.to_payload())
            plain_path = store.save_text(Path("plain.txt"), document.plain_text)
    except Exception as exc:
        exit_with_command_error("parse", exc)

    if out is None:
        typer.echo(dumps_payload(document.to_payload()))
        return
    typer.echo(f"Parsed document: {parsed_path}")
    typer.echo(f"Plain text: {plain_path}")
    echo_structure_summary(document)


@app.command("sentences")
def sentences_command(
    input_path: InputArgument,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the abbreviation-aware sentences of a document, one per line."""

    try:
        config = _load_config(config_file)
        document = _build_pipeline(config, verbose).parse(_read_input(input_path, config))
    except Exception as exc:
        exit_with_command_error("sentences", exc)

    for sentence in document.sentences:
        typer.echo(sentence)


@app.command("profile")
def profile_command(
    input_path: InputArgument,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the linguistic profile and structure counts of a document."""

    try:
        config = _load_config(config_file)
        document = _build_pipeline(config, verbose).parse(_read_input(input_path, config))
    except Exception as exc:
        exit_with_command_error("profile", exc)

    echo_profile_summary(document)
    echo_structure_summary(document)


@app.command("nlp-text")
def nlp_text_command(
    input_path: InputArgument,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the plain-text bundle handed to entity extraction as JSON."""

    try:
        config = _load_config(config_file)
        bundle = _build_pipeline(config, verbose).extract_text_for_nlp(
            _read_input(input_path, config)
        )
    except Exception as exc:
        exit_with_command_error("nlp-text", exc)

    typer.echo(dumps_payload(bundle.to_payload()))


@app.command("highlight")
def highlight_command(
    input_path: InputArgument,
    entities: Annotated[
        Path,
        typer.Option("--entities", help="JSON file with entity spans over the input text."),
    ],
    config_file: ConfigOption = None,
) -> None:
    """Print the input text with entity spans wrapped in highlight markup."""

    try:
        config = _load_config(config_file)
        raw_text = _read_input(input_path, config)
        highlighted = MarkdownPipeline.highlight(raw_text, _load_entities(entities))
    except Exception as exc:
        exit_with_command_error("highlight", exc)

    typer.echo(highlighted, nl=False)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
