"""Shared typed data models for italtext.

This package contains dataclasses used across pipeline modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import (
    CodeBlock,
    EntitySpan,
    FormalityLevel,
    Heading,
    Image,
    LinguisticProfile,
    Link,
    NlpTextBundle,
    ParsedDocument,
    StructuralElement,
)

__all__ = [
    "CodeBlock",
    "EntitySpan",
    "FormalityLevel",
    "Heading",
    "Image",
    "LinguisticProfile",
    "Link",
    "NlpTextBundle",
    "ParsedDocument",
    "StructuralElement",
]
