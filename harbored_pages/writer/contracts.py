"""Write code blocks and ``in``/``out`` contract sections."""

from __future__ import annotations

import typing as typ

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from harbored_pages._constants import CODE_MARKER, CODE_MARKER_END

if typ.TYPE_CHECKING:
    from .models import HtmlSink, NodeFormatter


class CodeHighlighter:
    """Highlight source snippets into spans that fit inside ``<pre><code>``."""

    def __init__(self, pygments_style: str = "monokai", language: str = "d") -> None:
        self.pygments_style = pygments_style
        try:
            self._lexer = get_lexer_by_name(language)
        except ClassNotFound:
            self._lexer = get_lexer_by_name("text")
        self._formatter = HtmlFormatter(style=pygments_style, nowrap=True)

    def __call__(self, code: str) -> str:
        """Return highlighted, HTML-escaped markup for ``code``."""
        return highlight(code, self._lexer, self._formatter).rstrip("\n")


def write_code_block(dst: HtmlSink, code: str) -> None:
    """Write ``code`` verbatim inside a ``<pre><code>`` block."""
    dst.write(CODE_MARKER)
    dst.write(code)
    dst.write("\n")
    dst.write(CODE_MARKER_END)
    dst.write("\n")


def write_contracts(
    dst: HtmlSink,
    in_statement: object | None,
    out_statement: object | None,
    format_node: NodeFormatter = str,
) -> None:
    """Write a ``Contracts`` section for the given statements.

    Nothing is written when both statements are ``None``. When both are
    present they are separated by a newline inside one code block.
    """
    if in_statement is None and out_statement is None:
        return
    dst.write('<div class="section"><h2>Contracts</h2>')
    parts: list[str] = []
    if in_statement is not None:
        parts.append(format_node(in_statement))
    if out_statement is not None:
        parts.append(format_node(out_statement))
    write_code_block(dst, "\n".join(parts))
    dst.write("</div>\n")


__all__ = ["CodeHighlighter", "write_code_block", "write_contracts"]
