"""Style values produced by declarations and by the cascade."""

from __future__ import annotations

from dataclasses import dataclass

from .colors import NO_ATTRIBUTES, Attribute, Color, format_attrs


@dataclass(frozen=True, slots=True)
class StyleProperties:
    """A partial style: any field may be left unspecified.

    Used for explicit property declarations and for base theme entries.
    """

    fg: Color | None = None
    bg: Color | None = None
    attrs: Attribute | None = None

    def is_empty(self) -> bool:
        """True when no field is specified."""
        return self.fg is None and self.bg is None and self.attrs is None


@dataclass(frozen=True, slots=True)
class ResolvedStyle:
    """Effective style of one syntax node.

    ``fg``/``bg`` are None when no matching rule specified them, which is
    different from an explicit ``fg-canvas``/``bg-canvas``.
    """

    fg: Color | None = None
    bg: Color | None = None
    attrs: Attribute = NO_ATTRIBUTES

    def __str__(self) -> str:
        parts: list[str] = []
        if self.fg is not None:
            parts.append(f"fg:{self.fg}")
        if self.bg is not None:
            parts.append(f"bg:{self.bg}")
        if self.attrs:
            parts.append(f"attr:{format_attrs(self.attrs)}")
        return ", ".join(parts) if parts else "(unstyled)"


EMPTY_STYLE = ResolvedStyle()


def merge(base: ResolvedStyle, override: StyleProperties) -> ResolvedStyle:
    """Apply a partial style on top of an accumulated style.

    Colors are replaced when the override specifies them; attributes are
    unioned, so a later ``attr: bold`` keeps an earlier ``italic``.
    """
    return ResolvedStyle(
        fg=override.fg if override.fg is not None else base.fg,
        bg=override.bg if override.bg is not None else base.bg,
        attrs=base.attrs | override.attrs if override.attrs is not None else base.attrs,
    )
