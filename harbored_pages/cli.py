"""Cyclopts CLI entrypoint for rendering D doc comments into HTML pages.

The ``hmod-pages`` console script wraps the writers for quick, single-page
use: ``hmod-pages render`` turns one comment file into a complete page for a
dotted symbol (optionally appending its search record), and
``hmod-pages stylesheet`` prints the Pygments CSS matching the configured
style.

Examples
--------
Render the page for ``std.io.File`` from a comment file:

>>> from harbored_pages.cli import app
>>> app(
...     [
...         "render",
...         "--comment-file",
...         "File.txt",
...         "--symbol",
...         "std.io.File",
...         "--module-length",
...         "2",
...     ]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_FILENAME
from .config import RenderConfig, load_render_config
from .writer import HTMLWriter

if typ.TYPE_CHECKING:
    from .writer.models import HtmlSink

app = App(name="hmod-pages", config=cyclopts.config.Env("HMOD_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_config(config: Path | None) -> RenderConfig:
    if config is None:
        default = Path(DEFAULT_CONFIG_FILENAME)
        return load_render_config(default) if default.exists() else RenderConfig()
    return load_render_config(config)


def page_depth(module_name_length: int, symbol_stack: list[str]) -> int:
    """Return how many directories deep the symbol's page is written.

    A module's own page sits beside its package directory
    (``std/io.html``); symbol pages live inside the module directory
    (``std/io/File.html``).
    """
    if module_name_length >= len(symbol_stack):
        return max(module_name_length - 1, 0)
    return module_name_length


def render_page(
    writer: HTMLWriter,
    dst: HtmlSink,
    raw_comment: str,
    symbol_stack: list[str],
    module_name_length: int,
    title: str | None = None,
) -> str:
    """Write a complete page for ``symbol_stack`` and return the comment digest."""
    module_name = ".".join(symbol_stack[:module_name_length])
    writer.write_header(
        dst, title or ".".join(symbol_stack), page_depth(module_name_length, symbol_stack)
    )
    writer.write_toc(dst, module_name)
    writer.write_symbol_breadcrumbs(dst, module_name_length, symbol_stack)
    digest = writer.read_and_write_comment(dst, raw_comment)
    writer.write_footer(dst)
    return digest


@app.command(help="Render one doc comment into a complete HTML page.")
def render(
    *,
    comment_file: typ.Annotated[
        Path, Parameter(help="File holding the raw doc comment")
    ],
    symbol: typ.Annotated[
        str, Parameter(help="Dotted symbol name, e.g. std.io.File")
    ],
    module_length: typ.Annotated[
        int, Parameter(help="Number of leading name parts naming the module")
    ],
    config: typ.Annotated[
        Path | None,
        Parameter(
            help="Path to render config; defaults to ./hmod-pages.yaml if present",
            env_var="HMOD_CONFIG",
        ),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the page here instead of stdout")
    ] = None,
    title: typ.Annotated[
        str | None, Parameter(help="Page title; defaults to the symbol name")
    ] = None,
    index: typ.Annotated[
        bool, Parameter(help="Append the symbol to the configured search index")
    ] = False,
) -> None:
    """Render a single symbol page.

    Parameters
    ----------
    comment_file : Path
        File containing the decorated doc comment for the symbol.
    symbol : str
        Fully qualified dotted name; its parts form the symbol stack.
    module_length : int
        How many leading parts of ``symbol`` name the module.
    config : Path or None, optional
        Render configuration YAML; built-in defaults apply when omitted.
    output : Path or None, optional
        Destination file. The page goes to stdout when omitted.
    title : str or None, optional
        HTML title override.
    index : bool, optional
        When set, append the symbol's record to ``search_index`` inside the
        configured ``output_dir``.

    Raises
    ------
    SymbolStackError
        If ``module_length`` exceeds the number of parts in ``symbol``.
    """
    render_config = _load_config(config)
    symbol_stack = symbol.split(".")
    raw_comment = comment_file.read_text(encoding="utf-8")

    search_path = render_config.search_index_path
    if index:
        search_path.parent.mkdir(parents=True, exist_ok=True)
    with (
        search_path.open("a", encoding="utf-8") if index else _NullSink()
    ) as search_stream:
        writer = HTMLWriter(render_config, search_index=search_stream)
        if output is None:
            render_page(
                writer, sys.stdout, raw_comment, symbol_stack, module_length, title
            )
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            with output.open("w", encoding="utf-8") as handle:
                digest = render_page(
                    writer, handle, raw_comment, symbol_stack, module_length, title
                )
            print(f"wrote {_format_path(output)}")
            print(f"summary: {digest}")
        if index:
            module_file_base = "/".join(symbol_stack[:module_length])
            record = writer.add_search_entry(
                module_file_base, module_length, symbol_stack
            )
            if output is not None:
                print(f"indexed {record.symbol} in {_format_path(search_path)}")


@app.command(help="Print the Pygments stylesheet for highlighted code.")
def stylesheet(
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(
            help="Path to render config; defaults to ./hmod-pages.yaml if present",
            env_var="HMOD_CONFIG",
        ),
    ] = None,
) -> None:
    """Print the CSS matching the configured Pygments style."""
    render_config = _load_config(config)
    writer = HTMLWriter(render_config, search_index=_NullSink())
    print(writer.markup.stylesheet)


class _NullSink:
    """Sink that discards writes, used when no search index is requested."""

    def write(self, text: str, /) -> int:
        return len(text)

    def __enter__(self) -> _NullSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


def main() -> None:
    """Invoke the Cyclopts application that powers the `hmod-pages` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
