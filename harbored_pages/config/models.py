"""Typed dataclasses describing harbored_pages render configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from harbored_pages._constants import DEFAULT_MARKDOWN_EXTENSIONS


class RenderConfigError(ValueError):
    """Raised when the render configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class MarkdownConfig:
    """Python-Markdown settings applied to comment prose."""

    extensions: list[str] = dc.field(
        default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS)
    )
    pygments_style: str = "monokai"


@dc.dataclass(slots=True)
class RenderConfig:
    """A fully resolved render configuration sourced from YAML.

    Attributes
    ----------
    output_dir : Path
        Root directory that page paths and the search index are relative to.
    search_index : str
        Search index filename inside ``output_dir``.
    macros : dict[str, str]
        Macro definitions merged from ``macro_files`` and the inline
        ``macros`` mapping (inline entries win).
    macro_files : list[Path]
        ``.ddoc`` macro files that were read, resolved against the config
        file's directory.
    toc_additional : str or None
        Extra HTML shown above the table of contents.
    markdown : MarkdownConfig
        Markdown extension and Pygments style settings.
    highlight_examples : bool
        Whether example code blocks are highlighted with Pygments.
    code_language : str
        Pygments lexer used for highlighted examples.
    """

    output_dir: Path = Path("doc")
    search_index: str = "search.js"
    macros: dict[str, str] = dc.field(default_factory=dict)
    macro_files: list[Path] = dc.field(default_factory=list)
    toc_additional: str | None = None
    markdown: MarkdownConfig = dc.field(default_factory=MarkdownConfig)
    highlight_examples: bool = False
    code_language: str = "d"

    @property
    def search_index_path(self) -> Path:
        """Return the search index location inside ``output_dir``."""
        return self.output_dir / self.search_index


__all__ = ["MarkdownConfig", "RenderConfig", "RenderConfigError"]
