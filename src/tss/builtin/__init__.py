"""Stylesheets and base theme shipped with tss."""

from __future__ import annotations

from importlib import resources

from ..models import Stylesheet
from ..parser import parse_stylesheet

STYLESHEET_SUFFIX = ".tss"


def list_builtins() -> list[str]:
    """Names of the built-in stylesheets, sorted."""
    return sorted(
        entry.name.removesuffix(STYLESHEET_SUFFIX)
        for entry in resources.files(__name__).iterdir()
        if entry.name.endswith(STYLESHEET_SUFFIX)
    )


def builtin_source(name: str) -> str:
    """Source text of a built-in stylesheet.

    Raises:
        KeyError: If there is no built-in stylesheet with that name
    """
    if name not in list_builtins():
        raise KeyError(f"No built-in stylesheet named {name!r}")
    return resources.files(__name__).joinpath(f"{name}{STYLESHEET_SUFFIX}").read_text("utf-8")


def load_builtin(name: str) -> Stylesheet:
    """Parse a built-in stylesheet."""
    return parse_stylesheet(builtin_source(name))
