"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
profile summaries, and structural element rows.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import ParsedDocument


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _joined(values: frozenset[str]) -> str:
    return ", ".join(sorted(values)) or "-"


def echo_profile_summary(document: ParsedDocument) -> None:
    """Print the linguistic profile as stable `label: value` rows."""

    profile = document.profile
    typer.echo(f"Title: {document.title or '-'}")
    typer.echo(f"Words: {profile.word_count}")
    typer.echo(f"Reading time (min): {profile.estimated_reading_time_minutes}")
    typer.echo(f"Italian confidence: {profile.language_confidence:.2f}")
    typer.echo(f"Formality: {profile.formality_level.value}")
    typer.echo(f"Geographic references: {_joined(profile.geographic_references)}")
    typer.echo(f"Cultural references: {_joined(profile.cultural_references)}")
    typer.echo(f"Dialectal indicators: {_joined(profile.dialectal_indicators)}")


def echo_structure_summary(document: ParsedDocument) -> None:
    """Print element counts per structural kind."""

    typer.echo(
        "Structure: "
        f"headings={len(document.headings)} "
        f"links={len(document.links)} "
        f"images={len(document.images)} "
        f"code_blocks={len(document.code_blocks)}"
    )
