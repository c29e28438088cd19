"""Top-level package for italtext.

This package turns Italian Markdown documents into plain text, a structural
inventory, sentences, and heuristic linguistic signals ahead of entity
extraction. The main orchestration entry point is `MarkdownPipeline`.
"""

from .pipeline import MarkdownPipeline, highlight, parse

__all__ = ["MarkdownPipeline", "highlight", "parse", "__version__"]

__version__ = "0.1.0"
