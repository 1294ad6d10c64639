"""Base theme loading: highlight group -> style, from YAML.

Format::

    comment:
      fg: dark-grey
      attr: italic
    string:
      fg: "#a0c080"
    tab-select:
      fg: black
      bg: 214
"""

from __future__ import annotations

from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from .colors import parse_attrs, parse_color
from .exceptions import ThemeError
from .highlights import Highlight, HighlightTable
from .style import StyleProperties

DEFAULT_THEME_RESOURCE = "default_theme.yaml"


class ThemeEntrySchema(BaseModel):
    """Schema for one highlight group in a base theme file."""

    model_config = ConfigDict(extra="forbid")

    fg: str | None = None
    bg: str | None = None
    attr: str | None = None

    @field_validator("fg", "bg", mode="before")
    @classmethod
    def validate_color(cls, v: Any) -> str | None:
        """Accept color literals, including bare YAML integers for ANSI indexes."""
        if v is None:
            return None
        text = str(v)
        parse_color(text)
        return text

    @field_validator("attr", mode="before")
    @classmethod
    def validate_attrs(cls, v: Any) -> str | None:
        """Accept ``a|b`` strings or YAML lists of attribute names."""
        if v is None:
            return None
        text = "|".join(str(item) for item in v) if isinstance(v, list) else str(v)  # type: ignore[misc]
        parse_attrs(text)
        return text

    def to_properties(self) -> StyleProperties:
        """Convert to the engine's partial style."""
        return StyleProperties(
            fg=parse_color(self.fg) if self.fg is not None else None,
            bg=parse_color(self.bg) if self.bg is not None else None,
            attrs=parse_attrs(self.attr) if self.attr is not None else None,
        )


def parse_base_theme(data: Mapping[str, Any]) -> dict[Highlight, StyleProperties]:
    """Validate a loaded base theme mapping.

    Raises:
        ThemeError: On unknown group names or invalid entries
    """
    table: dict[Highlight, StyleProperties] = {}
    for name, entry in data.items():
        try:
            group = Highlight.from_name(str(name))
        except ValueError as e:
            raise ThemeError(f"Invalid base theme: {e}") from e
        try:
            schema = ThemeEntrySchema.model_validate(entry or {})
        except PydanticValidationError as e:
            raise ThemeError(f"Invalid base theme entry {name!r}: {e}") from e
        table[group] = schema.to_properties()
    return table


def _load_yaml(text: str, origin: str) -> HighlightTable:
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ThemeError(f"Failed to parse YAML in {origin}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ThemeError(f"{origin} must contain a mapping at the root level")
    return parse_base_theme(data)  # type: ignore[arg-type]


def load_base_theme(theme_path: Path | str) -> HighlightTable:
    """Load a base theme from a YAML file.

    Raises:
        ThemeError: If the file is missing or invalid
    """
    path = Path(theme_path)
    if not path.exists():
        raise ThemeError(f"Theme file not found: {theme_path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ThemeError(f"Theme file {path} is not valid UTF-8: {e}") from e
    return _load_yaml(text, str(path))


def default_base_theme() -> HighlightTable:
    """Base theme shipped with the package."""
    text = resources.files("tss.builtin").joinpath(DEFAULT_THEME_RESOURCE).read_text("utf-8")
    return _load_yaml(text, DEFAULT_THEME_RESOURCE)
