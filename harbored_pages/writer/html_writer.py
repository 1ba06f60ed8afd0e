"""Facade bundling the page writers behind one configured object.

A page driver typically calls, in order, :meth:`HTMLWriter.write_header`,
:meth:`~HTMLWriter.write_toc`, :meth:`~HTMLWriter.write_symbol_breadcrumbs`,
one or more :meth:`~HTMLWriter.read_and_write_comment` calls, and
:meth:`~HTMLWriter.write_footer`, plus :meth:`~HTMLWriter.add_search_entry`
for every documented symbol.

Example
-------
>>> import io
>>> from harbored_pages.config import RenderConfig
>>> from harbored_pages.writer import HTMLWriter
>>> writer = HTMLWriter(RenderConfig(), search_index=io.StringIO())
>>> page = io.StringIO()
>>> writer.read_and_write_comment(page, "/// Opens a file.")
'<p>Opens a file.</p>'
"""

from __future__ import annotations

import typing as typ

from harbored_pages.macros import DEFAULT_MACROS

from .attributes import write_attributes
from .comment_writer import CommentRenderer
from .contracts import CodeHighlighter, write_code_block
from .markup import MarkupFilter
from .navigation import PageChrome
from .search_index import SearchIndexWriter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbored_pages.comment_parser import Comment
    from harbored_pages.config import RenderConfig

    from .models import FunctionBody, HtmlSink, NodeFormatter, SearchRecord, TocItem


class HTMLWriter:
    """Write documentation pages and search records for one generator run."""

    def __init__(
        self,
        config: RenderConfig,
        *,
        search_index: HtmlSink,
        toc_items: cabc.Sequence[TocItem] = (),
        macros: cabc.Mapping[str, str] | None = None,
        format_node: NodeFormatter = str,
    ) -> None:
        """Construct the writer from configuration and shared outputs.

        Parameters
        ----------
        config : RenderConfig
            Render settings, including macros and the TOC sidebar extra.
        search_index : HtmlSink
            Stream that receives one search record per documented symbol.
        toc_items : Sequence[TocItem], optional
            Items of the table of contents written into each page.
        macros : Mapping[str, str], optional
            Additional macro definitions layered over the defaults and the
            configured macros.
        format_node : NodeFormatter, optional
            Formats contract statements and attributes as source text.
        """
        self.config = config
        self.macros = {**DEFAULT_MACROS, **config.macros, **(macros or {})}
        self.format_node = format_node
        self.markup = MarkupFilter(
            config.markdown.pygments_style, config.markdown.extensions
        )
        highlighter = (
            CodeHighlighter(config.markdown.pygments_style, config.code_language)
            if config.highlight_examples
            else None
        )
        self.comments = CommentRenderer(
            self.markup, self.macros, format_node=format_node, highlighter=highlighter
        )
        self.chrome = PageChrome(toc_items, config.toc_additional)
        self.search_index = SearchIndexWriter(search_index)

    def write_header(self, dst: HtmlSink, title: str, depth: int) -> None:
        """Write the HTML preamble for a page ``depth`` directories deep."""
        self.chrome.write_header(dst, title, depth)

    def write_toc(self, dst: HtmlSink, module_name: str = "") -> None:
        """Write the table of contents for ``module_name``'s page."""
        self.chrome.write_toc(dst, module_name)

    def write_breadcrumbs(self, dst: HtmlSink, heading: str) -> None:
        """Write breadcrumbs with a ready-made heading (e.g. ``"Main Page"``)."""
        self.chrome.write_breadcrumbs(dst, heading)

    def write_symbol_breadcrumbs(
        self,
        dst: HtmlSink,
        module_name_length: int,
        symbol_stack: cabc.Sequence[str],
    ) -> None:
        """Write breadcrumbs for the symbol at the top of ``symbol_stack``."""
        self.chrome.write_symbol_breadcrumbs(dst, module_name_length, symbol_stack)

    def write_footer(self, dst: HtmlSink) -> None:
        """Close the page opened by :meth:`write_header`."""
        self.chrome.write_footer(dst)

    def read_and_write_comment(
        self,
        dst: HtmlSink,
        comment: str,
        prev_comments: list[Comment] | None = None,
        function_body: FunctionBody | None = None,
        test_docs: cabc.Sequence[tuple[str, str]] | None = None,
    ) -> str:
        """Write a doc comment and return its listing digest."""
        return self.comments.read_and_write_comment(
            dst, comment, prev_comments, function_body, test_docs
        )

    def write_attributes(self, dst: HtmlSink, attributes: cabc.Sequence[object]) -> None:
        """Write declaration attributes with their resolved protection."""
        write_attributes(dst, attributes, self.format_node)

    @staticmethod
    def write_code_block(dst: HtmlSink, code: str) -> None:
        """Write ``code`` inside a ``<pre><code>`` block."""
        write_code_block(dst, code)

    def add_search_entry(
        self,
        module_file_base: str,
        module_name_length: int,
        symbol_stack: cabc.Sequence[str],
    ) -> SearchRecord:
        """Append a search record for the symbol at the top of ``symbol_stack``."""
        return self.search_index.add_entry(
            module_file_base, module_name_length, symbol_stack
        )


__all__ = ["HTMLWriter"]
