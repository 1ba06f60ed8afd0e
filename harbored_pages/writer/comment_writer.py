"""Render parsed doc comments as HTML section blocks.

:class:`CommentRenderer` is the heart of page generation. For each raw doc
comment it undecorates and parses the text, filters prose through Markdown,
resolves ``ditto`` comments against the previously rendered sibling, and
writes:

* the leading summary/description prose as unlabelled ``section`` divs,
* an optional ``Contracts`` block for the function body,
* every remaining section with its heading (``Params`` as a table, ``Note``
  with its own styling),
* one merged ``See Also`` block, whatever alias spelling each section used,
* an ``Example`` block per documented unittest.

``Macros`` sections are never written. The call returns a one-line digest
(summary text or ``Returns: ...``) for symbol listings.
"""

from __future__ import annotations

import logging
import textwrap
import typing as typ

from harbored_pages.comment_parser import (
    Comment,
    SectionKind,
    parse_comment,
    undecorate_comment,
)

from .contracts import write_code_block, write_contracts

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbored_pages.comment_parser import Section

    from .contracts import CodeHighlighter
    from .markup import MarkupFilter
    from .models import FunctionBody, HtmlSink, NodeFormatter

logger = logging.getLogger(__name__)

HIDDEN_KINDS = (SectionKind.SEE_ALSO, SectionKind.MACROS)


def _put(dst: HtmlSink, text: str) -> None:
    dst.write(text)
    dst.write("\n")


def summary_text(comment: Comment) -> str:
    """Return the listing digest for ``comment``.

    The content of a leading ``Summary`` section wins; otherwise the last
    ``Returns`` section is reported as ``"Returns: <content>"``. A comment
    with neither yields ``""``.
    """
    sections = comment.sections
    if sections and sections[0].kind is SectionKind.SUMMARY:
        return sections[0].content
    digest = ""
    for section in sections:
        if section.kind is SectionKind.RETURNS:
            digest = f"Returns: {section.content}"
    return digest


def write_params_table(dst: HtmlSink, mapping: cabc.Sequence[tuple[str, str]]) -> None:
    """Write parameter names and descriptions as a two-column table."""
    _put(dst, '<table class="params">')
    for name, doc in mapping:
        dst.write('<tr class="param"><td class="paramName">')
        dst.write(name)
        dst.write('</td><td class="paramDoc">')
        dst.write(doc)
        _put(dst, "</td></tr>")
    dst.write("</table>")


def write_section(dst: HtmlSink, section: Section) -> None:
    """Write one non-leading section with its heading and styling."""
    is_note = section.kind is SectionKind.NOTE
    _put(dst, f'<div class="section{" note" if is_note else ""}">')
    if section.has_heading:
        dst.write("<h2>")
        dst.write(section.display_name)
        _put(dst, "</h2>")
    if is_note:
        _put(dst, '<div class="note-content">')
    if section.kind is SectionKind.PARAMS:
        write_params_table(dst, section.mapping)
    else:
        _put(dst, section.content)
    if is_note:
        _put(dst, "</div>")
    _put(dst, "</div>")


def write_see_also(dst: HtmlSink, sections: cabc.Sequence[Section]) -> None:
    """Merge all See Also sections into a single block under one heading."""
    if not sections:
        return
    _put(dst, '<div class="section seealso">')
    dst.write("<h2>")
    dst.write(sections[0].display_name)
    _put(dst, "</h2>")
    _put(dst, '<div class="seealso-content">')
    for section in sections:
        _put(dst, section.content)
    _put(dst, "</div>")
    _put(dst, "</div>")


class CommentRenderer:
    """Parse, filter, and write doc comments to an HTML sink."""

    def __init__(
        self,
        markup: MarkupFilter,
        macros: cabc.Mapping[str, str] | None = None,
        *,
        format_node: NodeFormatter = str,
        highlighter: CodeHighlighter | None = None,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        markup : MarkupFilter
            Filter applied to every section's prose.
        macros : Mapping[str, str], optional
            Macro table passed to the comment parser; ``None`` selects the
            built-in defaults.
        format_node : NodeFormatter, optional
            Formats contract statements as source text.
        highlighter : CodeHighlighter, optional
            Highlights example code; examples are written verbatim when
            ``None``.
        """
        self.markup = markup
        self.macros = macros
        self.format_node = format_node
        self.highlighter = highlighter

    def parse(self, raw_comment: str) -> Comment:
        """Undecorate, parse, and markup-filter a raw doc comment."""
        comment = parse_comment(undecorate_comment(raw_comment), self.macros)
        return self.markup.filter_comment(comment)

    def read_and_write_comment(
        self,
        dst: HtmlSink,
        raw_comment: str,
        prev_comments: list[Comment] | None = None,
        function_body: FunctionBody | None = None,
        test_docs: cabc.Sequence[tuple[str, str]] | None = None,
    ) -> str:
        """Write a doc comment to ``dst`` and return its listing digest.

        Parameters
        ----------
        dst : HtmlSink
            Output to write the comment to.
        raw_comment : str
            Comment text including its ``/** */`` or ``///`` decoration.
        prev_comments : list[Comment], optional
            Comments of the sibling group, used for ``ditto`` resolution.
            When non-empty, a ditto comment is replaced by its last entry and
            any other comment overwrites that entry. The list is mutated in
            place.
        function_body : FunctionBody, optional
            Source of ``in``/``out`` contracts written after the leading prose.
        test_docs : Sequence[tuple[str, str]], optional
            ``(unittest body, unittest doc comment)`` pairs written as
            examples.

        Returns
        -------
        str
            Summary text, ``"Returns: ..."`` text, or ``""``.
        """
        comment = self.parse(raw_comment)
        if prev_comments:
            if comment.is_ditto:
                logger.debug("Replacing ditto comment with previous sibling comment")
                comment = prev_comments[-1]
            else:
                prev_comments[-1] = comment

        self.write_comment(dst, comment, function_body)
        digest = summary_text(comment)
        for body, doc in test_docs or ():
            self.write_example(dst, body, doc)
        return digest

    def write_comment(
        self,
        dst: HtmlSink,
        comment: Comment,
        function_body: FunctionBody | None = None,
    ) -> None:
        """Write the sections of an already parsed comment."""
        sections = comment.sections
        index = 0
        while index < len(sections) and sections[index].is_leading_prose:
            _put(dst, '<div class="section">')
            _put(dst, sections[index].content)
            _put(dst, "</div>")
            index += 1

        if function_body is not None:
            write_contracts(
                dst,
                function_body.in_statement,
                function_body.out_statement,
                self.format_node,
            )

        for section in sections[index:]:
            if section.kind in HIDDEN_KINDS:
                continue
            write_section(dst, section)

        write_see_also(
            dst, [section for section in sections if section.kind is SectionKind.SEE_ALSO]
        )

    def write_example(self, dst: HtmlSink, body: str, doc: str) -> None:
        """Write a documented unittest as an ``Example`` section."""
        _put(dst, '<div class="section"><h2>Example</h2>')
        self.write_comment(dst, self.parse(doc))
        code = textwrap.dedent(body)
        write_code_block(dst, self.highlighter(code) if self.highlighter else code)
        _put(dst, "</div>")


__all__ = [
    "CommentRenderer",
    "summary_text",
    "write_params_table",
    "write_section",
    "write_see_also",
]
