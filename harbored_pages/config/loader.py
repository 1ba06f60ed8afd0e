"""Load render configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from harbored_pages.macros import load_macro_file

from .models import MarkdownConfig, RenderConfig, RenderConfigError


def _resolve(base_dir: Path, value: object) -> Path:
    """Return ``value`` as a path, anchoring relative paths at ``base_dir``."""
    path = Path(str(value))
    return path if path.is_absolute() else base_dir / path


def _string_mapping(value: object, key: str) -> dict[str, str]:
    """Validate a ``str -> str`` mapping, stringifying scalar values."""
    match value:
        case None:
            return {}
        case dict():
            return {str(name): str(body) for name, body in value.items()}
        case _:
            msg = f"'{key}' must be a mapping of names to strings."
            raise RenderConfigError(msg)


def _string_list(value: object, key: str) -> list[str]:
    match value:
        case None:
            return []
        case list():
            return [str(item) for item in value]
        case _:
            msg = f"'{key}' must be a list."
            raise RenderConfigError(msg)


def _build_markdown_config(payload: object) -> MarkdownConfig:
    """Build a MarkdownConfig from the optional ``markdown`` block."""
    base = MarkdownConfig()
    match payload:
        case None:
            return base
        case dict():
            extensions = payload.get("extensions")
            return MarkdownConfig(
                extensions=(
                    base.extensions
                    if extensions is None
                    else _string_list(extensions, "markdown.extensions")
                ),
                pygments_style=str(payload.get("pygments_style", base.pygments_style)),
            )
        case _:
            msg = "'markdown' must be a mapping."
            raise RenderConfigError(msg)


def _resolve_toc_additional(raw: dict[str, typ.Any], base_dir: Path) -> str | None:
    """Return inline or file-sourced TOC sidebar content, if configured."""
    inline = raw.get("toc_additional")
    file_value = raw.get("toc_additional_file")
    if inline is not None and file_value is not None:
        msg = "Set only one of 'toc_additional' and 'toc_additional_file'."
        raise RenderConfigError(msg)
    if file_value is not None:
        path = _resolve(base_dir, file_value)
        if not path.exists():
            msg = f"TOC additional file '{path}' not found."
            raise FileNotFoundError(msg)
        return path.read_text(encoding="utf-8")
    return None if inline is None else str(inline)


def load_render_config(path: Path) -> RenderConfig:
    """Load the YAML configuration describing how comments are rendered.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``hmod-pages.yaml``). Relative ``macro_files`` and
        ``toc_additional_file`` entries are resolved against its directory.

    Returns
    -------
    RenderConfig
        Parsed configuration with macro files already merged into
        ``macros``.

    Raises
    ------
    FileNotFoundError
        If the configuration file, a macro file, or the TOC additional file
        does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    RenderConfigError
        If a field has the wrong shape (for example, ``macros`` is a list).

    Examples
    --------
    >>> from pathlib import Path
    >>> from harbored_pages.config import load_render_config
    >>> config = load_render_config(Path("hmod-pages.yaml"))  # doctest: +SKIP
    >>> config.search_index_path  # doctest: +SKIP
    PosixPath('doc/search.js')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.parent
    defaults = RenderConfig()

    macro_files = [
        _resolve(base_dir, item)
        for item in _string_list(raw.get("macro_files"), "macro_files")
    ]
    macros: dict[str, str] = {}
    for macro_file in macro_files:
        macros.update(load_macro_file(macro_file))
    macros.update(_string_mapping(raw.get("macros"), "macros"))

    highlight = raw.get("highlight_examples", defaults.highlight_examples)
    if not isinstance(highlight, bool):
        msg = "'highlight_examples' must be true or false."
        raise RenderConfigError(msg)

    return RenderConfig(
        output_dir=Path(raw.get("output_dir", defaults.output_dir)),
        search_index=str(raw.get("search_index", defaults.search_index)),
        macros=macros,
        macro_files=macro_files,
        toc_additional=_resolve_toc_additional(raw, base_dir),
        markdown=_build_markdown_config(raw.get("markdown")),
        highlight_examples=highlight,
        code_language=str(raw.get("code_language", defaults.code_language)),
    )


__all__ = ["load_render_config"]
