"""I/O adapters for reading documents and persisting CLI outputs."""

from .storage import ArtifactStore

__all__ = ["ArtifactStore"]
