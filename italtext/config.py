"""Configuration model and loaders for italtext.

Responsibilities:
- Define parser tunables as a typed, validated dataclass.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `ParserConfig`: normalized parser settings for one pipeline instance.
- `ConfigLoader`: static construction helpers for `ParserConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .text.lexicons import IMAGE_ALT_KEYWORDS

_DEFAULT_WORDS_PER_MINUTE = 180
_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})


def normalize_optional_string(value: object) -> str | None:
    """Return a stripped non-empty string, or `None` for missing/blank values."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value
    normalized = normalize_optional_string(value)
    if normalized is None:
        return None
    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Tunables for the Markdown parsing pipeline.

    Attributes:
        words_per_minute: Reading speed used for the reading-time estimate.
        image_alt_keywords: Keywords that make image alt text worth keeping.
        drop_redundant_headings: Drop headings restated by the next line of body text.
        max_input_chars: Optional input size cap enforced before parsing.
    """

    words_per_minute: int = _DEFAULT_WORDS_PER_MINUTE
    image_alt_keywords: tuple[str, ...] = IMAGE_ALT_KEYWORDS
    drop_redundant_headings: bool = True
    max_input_chars: int | None = None

    def validate(self) -> None:
        """Validate configuration values before pipeline construction."""

        if isinstance(self.words_per_minute, bool) or self.words_per_minute <= 0:
            raise ValueError("`words_per_minute` must be a positive integer.")
        if any(not keyword.strip() for keyword in self.image_alt_keywords):
            raise ValueError("`image_alt_keywords` must not contain blank keywords.")
        if self.max_input_chars is not None and self.max_input_chars <= 0:
            raise ValueError("`max_input_chars` must be a positive integer.")


class ConfigLoader:
    """Factory methods for creating `ParserConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "words_per_minute",
            "image_alt_keywords",
            "drop_redundant_headings",
            "max_input_chars",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> ParserConfig:
        """Create a validated config from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_mapping(payload: Mapping[str, Any], source_label: str = "config") -> ParserConfig:
        """Build a validated config from an already-parsed mapping."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            raise ValueError(f"{source_label} includes unsupported key(s): {', '.join(unknown)}.")

        defaults = ParserConfig()
        config = ParserConfig(
            words_per_minute=ConfigLoader._positive_int(
                payload.get("words_per_minute"), "words_per_minute", source_label
            )
            or defaults.words_per_minute,
            image_alt_keywords=ConfigLoader._keywords(
                payload.get("image_alt_keywords"), "image_alt_keywords", source_label
            )
            or defaults.image_alt_keywords,
            drop_redundant_headings=ConfigLoader._boolean(
                payload.get("drop_redundant_headings"),
                "drop_redundant_headings",
                source_label,
                default=defaults.drop_redundant_headings,
            ),
            max_input_chars=ConfigLoader._positive_int(
                payload.get("max_input_chars"), "max_input_chars", source_label
            ),
        )
        config.validate()
        return config

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ParserConfig:
        """Create a validated config from `ITALTEXT_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload: dict[str, Any] = {}
        for key in ConfigLoader._SUPPORTED_YAML_KEYS:
            value = normalize_optional_string(env_map.get(f"ITALTEXT_{key.upper()}"))
            if value is not None:
                payload[key] = value
        return ConfigLoader.from_mapping(payload, source_label="Environment")

    @staticmethod
    def _positive_int(raw_value: object, key: str, source_label: str) -> int | None:
        """Read an optional positive integer, accepting numeric strings."""

        if raw_value is None:
            return None
        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        if isinstance(raw_value, int):
            parsed = raw_value
        else:
            normalized = normalize_optional_string(raw_value)
            if normalized is None:
                return None
            try:
                parsed = int(normalized)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{key}` must be a positive integer."
                ) from exc
        if parsed <= 0:
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _boolean(raw_value: object, key: str, source_label: str, default: bool) -> bool:
        """Read an optional boolean from canonical textual forms."""

        if raw_value is None:
            return default
        parsed = parse_permissive_boolean(raw_value)
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _keywords(raw_value: object, key: str, source_label: str) -> tuple[str, ...] | None:
        """Read a keyword list from a YAML sequence or a comma-separated string."""

        if raw_value is None:
            return None
        if isinstance(raw_value, str):
            items: list[object] = raw_value.split(",")
        elif isinstance(raw_value, (list, tuple)):
            items = list(raw_value)
        else:
            raise ValueError(
                f"{source_label} field `{key}` must be a list or comma-separated string."
            )
        keywords = tuple(
            keyword.lower()
            for keyword in (normalize_optional_string(item) for item in items)
            if keyword is not None
        )
        if not keywords:
            raise ValueError(f"{source_label} field `{key}` must list at least one keyword.")
        return keywords
