"""Unit tests for loading render configuration YAML.

Usage
-----
Run ``pytest tests/test_config.py -v``. Fixtures write YAML into pytest's
``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from harbored_pages.config import RenderConfig, RenderConfigError, load_render_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "hmod-pages.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_defaults() -> None:
    """A bare RenderConfig carries the documented defaults."""
    config = RenderConfig()
    assert config.search_index_path == Path("doc/search.js")
    assert config.markdown.extensions == [
        "fenced_code",
        "codehilite",
        "tables",
        "sane_lists",
    ]
    assert not config.highlight_examples
    assert config.toc_additional is None


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    """An empty YAML document loads as the default configuration."""
    assert load_render_config(_write(tmp_path, "")) == RenderConfig()


def test_full_config(tmp_path: Path) -> None:
    """Every supported key is applied, and macro files merge under inline macros."""
    (tmp_path / "std.ddoc").write_text(
        "B = <strong>$0</strong>\nRED = <em>$0</em>\n", encoding="utf-8"
    )
    (tmp_path / "toc.html").write_text("<p>extra</p>", encoding="utf-8")
    config = load_render_config(
        _write(
            tmp_path,
            """
output_dir: public/api
search_index: index.js
macro_files: [std.ddoc]
macros:
  RED: <span class="red">$0</span>
toc_additional_file: toc.html
markdown:
  extensions: [tables]
  pygments_style: default
highlight_examples: true
code_language: text
            """,
        )
    )
    assert config.search_index_path == Path("public/api/index.js")
    assert config.macros == {
        "B": "<strong>$0</strong>",
        "RED": '<span class="red">$0</span>',
    }
    assert config.macro_files == [tmp_path / "std.ddoc"]
    assert config.toc_additional == "<p>extra</p>"
    assert config.markdown.extensions == ["tables"]
    assert config.markdown.pygments_style == "default"
    assert config.highlight_examples
    assert config.code_language == "text"


def test_missing_file(tmp_path: Path) -> None:
    """Loading a nonexistent file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_render_config(tmp_path / "absent.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    """A YAML list at the top level is rejected."""
    with pytest.raises(TypeError):
        load_render_config(_write(tmp_path, "- a\n- b"))


@pytest.mark.parametrize(
    "text",
    [
        "macros: [a, b]",
        "macro_files: std.ddoc",
        "markdown: tables",
        "highlight_examples: sometimes",
        "toc_additional: x\ntoc_additional_file: toc.html",
    ],
)
def test_invalid_values(tmp_path: Path, text: str) -> None:
    """Badly shaped values raise RenderConfigError."""
    with pytest.raises(RenderConfigError):
        load_render_config(_write(tmp_path, text))
