"""Output storage for parse results.

Responsibilities:
- Read UTF-8 Markdown documents from disk.
- Write text and JSON outputs deterministically under one output directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class ArtifactStore:
    """Filesystem-backed store rooted at a CLI output directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with a root output directory."""

        self.root = root

    def save_text(self, relative_path: Path, content: str) -> Path:
        """Save text content and return final path."""

        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def save_json(self, relative_path: Path, payload: dict[str, Any]) -> Path:
        """Save JSON-serializable payload and return final path."""

        return self.save_text(relative_path, dumps_payload(payload))


def dumps_payload(payload: Any) -> str:
    """Serialize a payload as stable, human-readable UTF-8 JSON."""

    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def read_document(path: Path) -> str:
    """Read a Markdown document as UTF-8 text."""

    return path.read_text(encoding="utf-8")
