"""Page chrome: header preamble, table of contents, and breadcrumbs.

The breadcrumb heading for a symbol page is derived from its symbol stack,
for example ``["std", "io", "File"]`` with a module name length of 2 yields
``std.io`` as the module segment (``io`` linking to ``std/io.html``) and
``File`` as the unlinked, highlighted current page.

Example
-------
>>> from harbored_pages.writer.navigation import breadcrumb_heading
>>> breadcrumb_heading(2, ["std", "io"])
'<small>std.io</small>'
"""

from __future__ import annotations

import posixpath
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from harbored_pages._constants import PAGE_EXTENSION

from .models import check_symbol_stack

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import HtmlSink, TocItem

PARENT_DIRECTORY = "../"
HOME_LINK = '<a class="home" href=index.html>⌂</a>'
SEARCH_BOX = (
    '<input type="search" id="search" placeholder="Search" '
    'onkeyup="searchSubmit(this.value, event)"/>'
)


def _put(dst: HtmlSink, text: str) -> None:
    """Write ``text`` followed by a newline."""
    dst.write(text)
    dst.write("\n")


def _symbol_link(symbol_stack: cabc.Sequence[str], index: int) -> str:
    """Return the page path of the symbol at ``index`` in the stack."""
    return posixpath.join(*symbol_stack[: index + 1]) + PAGE_EXTENSION


def breadcrumb_heading(
    module_name_length: int, symbol_stack: cabc.Sequence[str]
) -> str:
    """Build the breadcrumb heading for a symbol's page.

    Parameters
    ----------
    module_name_length : int
        Number of leading stack entries naming the module (2 for
        ``std.stdio``).
    symbol_stack : Sequence[str]
        Name components from the root package down to the current symbol.

    Returns
    -------
    str
        HTML heading. On a module's own page this is only the plain module
        name; otherwise the module's last component links to the module page
        and every parent symbol links to its page, with the current symbol
        left unlinked inside a ``highlight`` span.

    Raises
    ------
    SymbolStackError
        If the stack is empty or shorter than ``module_name_length``.
    """
    check_symbol_stack(module_name_length, symbol_stack)
    heading = ["<small>"]
    i = 0
    while i + 1 < module_name_length:
        heading.append(f"{symbol_stack[i]}.")
        i += 1
    if i + 1 >= len(symbol_stack):
        heading.append(symbol_stack[i])
        heading.append("</small>")
        return "".join(heading)
    heading.append(f"<a href={_symbol_link(symbol_stack, i)}>{symbol_stack[i]}</a>.")
    heading.append("</small>")
    i += 1

    heading.append('<span class="highlight">')
    while i + 1 < len(symbol_stack):
        heading.append(
            f"<a href={_symbol_link(symbol_stack, i)}>{symbol_stack[i]}</a>."
        )
        i += 1
    heading.append(symbol_stack[i])
    heading.append("</span>")
    return "".join(heading)


class PageChrome:
    """Write the parts of a page that surround the documentation content."""

    def __init__(
        self,
        toc_items: cabc.Sequence[TocItem] = (),
        toc_additional: str | None = None,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the chrome writer and its Jinja environment.

        Parameters
        ----------
        toc_items : Sequence[TocItem], optional
            Outermost table-of-contents items written into every sidebar.
        toc_additional : str, optional
            Free-form HTML placed above the TOC list; omitted when ``None``.
        templates_dir : Path, optional
            Directory containing ``header.jinja``. Defaults to the package
            templates.
        """
        self.toc_items = list(toc_items)
        self.toc_additional = toc_additional
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
        )
        self.header_template = self.env.get_template("header.jinja")

    def write_header(self, dst: HtmlSink, title: str, depth: int) -> None:
        """Write the HTML preamble for a page ``depth`` directories deep.

        Stylesheet, script and ``base`` paths are prefixed with ``../`` once
        per level so they resolve from the output root.
        """
        root_path = PARENT_DIRECTORY * depth
        dst.write(self.header_template.render(title=title, root_path=root_path))

    def write_toc(self, dst: HtmlSink, module_name: str = "") -> None:
        """Write the sidebar, asking each TOC item to render against ``module_name``."""
        _put(dst, '<div class="toc">')
        if self.toc_additional is not None:
            _put(dst, '<div class="toc-additional">')
            _put(dst, self.toc_additional)
            _put(dst, "</div>")
        _put(dst, "<ul>")
        for item in self.toc_items:
            item.write(dst, module_name)
        _put(dst, "</ul>")
        _put(dst, "</div>")

    @staticmethod
    def write_breadcrumbs(dst: HtmlSink, heading: str) -> None:
        """Write the breadcrumb bar and open the ``content`` div.

        Call after :meth:`write_toc` and before any page content.
        """
        _put(dst, '<div class="breadcrumbs">')
        _put(dst, '<table id="results"></table>')
        _put(dst, HOME_LINK)
        _put(dst, SEARCH_BOX)
        _put(dst, heading)
        _put(dst, "</div>")
        _put(dst, '<div class="content">')

    def write_symbol_breadcrumbs(
        self,
        dst: HtmlSink,
        module_name_length: int,
        symbol_stack: cabc.Sequence[str],
    ) -> None:
        """Write breadcrumbs whose heading is built from ``symbol_stack``."""
        self.write_breadcrumbs(dst, breadcrumb_heading(module_name_length, symbol_stack))

    @staticmethod
    def write_footer(dst: HtmlSink) -> None:
        """Close the ``content`` and ``main`` divs and the document."""
        _put(dst, "</div>")
        _put(dst, "</div>")
        _put(dst, "</body>")
        _put(dst, "</html>")


__all__ = ["PageChrome", "breadcrumb_heading"]
