"""Domain exceptions for highlighting and CLI diagnostics."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """Raised when a CLI stage (config, input, entities) cannot proceed."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class HighlightSpanError(ValueError):
    """Raised when entity spans cannot be highlighted without ambiguity."""
