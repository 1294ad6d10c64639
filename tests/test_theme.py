"""Tests for base theme loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tss.colors import AnsiColor, Attribute, ColorName, NamedColor, RgbColor
from tss.exceptions import ThemeError
from tss.highlights import Highlight
from tss.style import StyleProperties
from tss.theme import ThemeEntrySchema, default_base_theme, load_base_theme, parse_base_theme


class TestParseBaseTheme:
    """Validation of loaded theme mappings."""

    def test_valid_entries(self) -> None:
        table = parse_base_theme(
            {
                "comment": {"fg": "dark-grey", "attr": "italic"},
                "string": {"fg": "#a0c080"},
                "tab-select": {"fg": "black", "bg": 214},
                "special-comment": {"attr": ["italic", "bold"]},
            }
        )
        assert table == {
            Highlight.COMMENT: StyleProperties(
                fg=NamedColor(ColorName.DARK_GREY), attrs=Attribute.ITALIC
            ),
            Highlight.STRING: StyleProperties(fg=RgbColor(0xA0, 0xC0, 0x80)),
            Highlight.TAB_SELECT: StyleProperties(
                fg=NamedColor(ColorName.BLACK), bg=AnsiColor(214)
            ),
            Highlight.SPECIAL_COMMENT: StyleProperties(attrs=Attribute.ITALIC | Attribute.BOLD),
        }

    def test_empty_entry(self) -> None:
        """A group with no properties maps to an empty partial style."""
        assert parse_base_theme({"ignore": None}) == {Highlight.IGNORE: StyleProperties()}

    def test_unknown_group(self) -> None:
        with pytest.raises(ThemeError, match="unknown highlight group 'bogus'"):
            parse_base_theme({"bogus": {"fg": "red"}})

    def test_invalid_color(self) -> None:
        with pytest.raises(ThemeError, match="Invalid base theme entry 'string'"):
            parse_base_theme({"string": {"fg": "#12"}})

    def test_invalid_attribute(self) -> None:
        with pytest.raises(ThemeError, match="unknown attribute"):
            parse_base_theme({"string": {"attr": "sparkly"}})

    def test_unknown_key(self) -> None:
        with pytest.raises(ThemeError):
            parse_base_theme({"string": {"foreground": "red"}})


class TestThemeEntrySchema:
    def test_integer_color_kept_as_text(self) -> None:
        entry = ThemeEntrySchema.model_validate({"fg": 244})
        assert entry.fg == "244"
        assert entry.to_properties() == StyleProperties(fg=AnsiColor(244))


class TestLoadBaseTheme:
    """Loading from files and the packaged default."""

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text('comment:\n  fg: "#808080"\n  attr: italic|dim\n', encoding="utf-8")
        assert load_base_theme(path) == {
            Highlight.COMMENT: StyleProperties(
                fg=RgbColor(0x80, 0x80, 0x80), attrs=Attribute.ITALIC | Attribute.DIM
            )
        }

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text("", encoding="utf-8")
        assert load_base_theme(path) == {}

    def test_missing_file(self) -> None:
        with pytest.raises(ThemeError, match="Theme file not found"):
            load_base_theme("nonexistent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text("comment: [unclosed\n", encoding="utf-8")
        with pytest.raises(ThemeError, match="Failed to parse YAML"):
            load_base_theme(path)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_bytes(b"comment:\n  fg: \xff\xfe\n")
        with pytest.raises(ThemeError, match="not valid UTF-8"):
            load_base_theme(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.yaml"
        path.write_text("- comment\n- string\n", encoding="utf-8")
        with pytest.raises(ThemeError, match="mapping at the root level"):
            load_base_theme(path)

    def test_default_theme(self) -> None:
        """The packaged theme loads and covers the common groups."""
        table = default_base_theme()
        assert table[Highlight.TYPE] == StyleProperties(fg=RgbColor(0x5F, 0xAF, 0xD7))
        assert table[Highlight.SPECIAL_COMMENT].attrs == Attribute.ITALIC | Attribute.BOLD
        assert table[Highlight.TAB_SELECT].bg == AnsiColor(0xD7)
        assert table[Highlight.LINE_NR].fg == AnsiColor(244)
        assert Highlight.IGNORE not in table
