"""Unit tests for undecorating and parsing D doc comments.

These tests cover ``harbored_pages.comment_parser``: stripping comment
delimiters, splitting comment bodies into summary/description/named
sections, collecting ``Params`` mappings, escaping ``---`` code regions, and
expanding ``$(MACRO)`` references.

Usage
-----
Run ``pytest tests/test_comment_parser.py -v``. No fixtures beyond pytest's
built-ins are required.
"""

from __future__ import annotations

import pytest

from harbored_pages.comment_parser import (
    Section,
    SectionKind,
    parse_comment,
    undecorate_comment,
)
from harbored_pages.writer import MarkupFilter


@pytest.mark.parametrize(
    "raw",
    [
        "/**\n * Opens a file.\n *\n * Returns: a handle\n */",
        "/// Opens a file.\n///\n/// Returns: a handle",
        "/++\n + Opens a file.\n +\n + Returns: a handle\n +/",
    ],
)
def test_undecorate_strips_delimiters(raw: str) -> None:
    """Every comment style should reduce to the same undecorated body."""
    assert undecorate_comment(raw) == "Opens a file.\n\nReturns: a handle", (
        f"unexpected undecorated text for {raw!r}"
    )


def test_undecorate_keeps_relative_code_indentation() -> None:
    """Indentation inside code examples should survive undecoration."""
    raw = "/**\n * Example:\n * ---\n * if (x)\n *     y();\n * ---\n */"
    assert undecorate_comment(raw) == "Example:\n---\nif (x)\n    y();\n---"


@pytest.mark.parametrize("body", ["ditto", "  Ditto \n", "DITTO"])
def test_parse_ditto(body: str) -> None:
    """A body of just ``ditto`` should produce an empty ditto comment."""
    comment = parse_comment(body)
    assert comment.is_ditto
    assert comment.sections == []


def test_parse_summary_description_and_named_sections() -> None:
    """Leading paragraphs become Summary/description, headers start sections."""
    comment = parse_comment(
        "Opens a file.\n\nThe file is opened lazily.\n\nReturns: a handle\n"
        "Throws: FileException on failure"
    )
    assert [(s.name, s.content) for s in comment.sections] == [
        ("Summary", "Opens a file."),
        ("description", "The file is opened lazily."),
        ("Returns", "a handle"),
        ("Throws", "FileException on failure"),
    ]
    assert not comment.is_ditto


def test_parse_params_mapping_keeps_order_and_continuations() -> None:
    """Params entries should keep source order and fold continuation lines."""
    comment = parse_comment(
        "Opens a file.\n\nParams:\n    path = the file path\n"
        "    mode = open\n           mode\n"
    )
    params = comment.sections[1]
    assert params.kind is SectionKind.PARAMS
    assert params.mapping == [("path", "the file path"), ("mode", "open\nmode")]


def test_parse_code_region_is_escaped_and_marked() -> None:
    """Code between ``---`` lines should be escaped inside ``<pre><code>``."""
    comment = parse_comment("Compares.\n\n---\nassert(a < b);\n---\n")
    description = comment.sections[1]
    assert description.name == "description"
    assert description.content == "<pre><code>assert(a &lt; b);</code></pre>"


def test_section_headers_are_ignored_inside_code() -> None:
    """A ``Name:`` line inside a code region must not start a section."""
    comment = parse_comment("Example:\n---\nlabel: goto label;\n---\n")
    assert [section.name for section in comment.sections] == ["Example"]
    assert "label: goto label;" in comment.sections[0].content


def test_urls_do_not_start_sections() -> None:
    """A line starting with a URL scheme is prose, not a section header."""
    comment = parse_comment("See the site.\nhttps://dlang.org")
    assert [section.name for section in comment.sections] == ["Summary"]


def test_see_also_spellings_are_recognised() -> None:
    """Both underscore and space spellings of See Also start sections."""
    comment = parse_comment("Sum.\n\nSee_also: foo\nSee Also: bar\nSee also: baz")
    names = [section.name for section in comment.sections[1:]]
    assert names == ["See_also", "See Also", "See also"]
    assert all(s.kind is SectionKind.SEE_ALSO for s in comment.sections[1:])


def test_macros_expand_in_prose_with_comment_overrides() -> None:
    """Macros sections override the supplied table for that comment."""
    comment = parse_comment(
        "Makes $(B text) bold.\n\nMacros:\n    B = <strong>$0</strong>",
        {"B": "<b>$0</b>"},
    )
    assert comment.sections[0].content == "Makes <strong>text</strong> bold."
    macros = comment.sections[-1]
    assert macros.kind is SectionKind.MACROS
    assert macros.mapping == [("B", "<strong>$0</strong>")]


def test_macros_do_not_expand_in_code() -> None:
    """Code regions keep macro syntax literally."""
    comment = parse_comment("Sum.\n\n---\nwriteln(\"$(B x)\");\n---")
    assert "$(B x)" in comment.sections[1].content


@pytest.mark.parametrize(
    ("name", "display"),
    [
        ("See_also", "See Also:"),
        ("See_Also", "See Also:"),
        ("See also", "See Also:"),
        ("See Also", "See Also:"),
        ("Note", "Note:"),
        ("Params", "Parameters"),
        ("Throws", "Throws"),
        ("Returns", "Returns"),
    ],
)
def test_display_names(name: str, display: str) -> None:
    """Section headings should follow the fixed display-name mapping."""
    assert Section(name).display_name == display


def test_unknown_names_classify_as_custom() -> None:
    """Unrecognised section names keep their raw name as a custom kind."""
    section = Section("Bugs", "none known")
    assert section.kind is SectionKind.CUSTOM
    assert section.has_heading
    assert not section.is_leading_prose


def test_indented_section_body_is_dedented() -> None:
    """Indented paragraphs under a header stay prose, not code blocks."""
    raw = (
        "/**\n * Sum.\n *\n * Throws:\n *     FileException if missing.\n"
        " *\n *     ErrnoException otherwise.\n */"
    )
    throws = parse_comment(undecorate_comment(raw)).sections[-1]
    assert throws.name == "Throws"
    assert throws.content == "FileException if missing.\n\nErrnoException otherwise."
    html = MarkupFilter().filter(throws.content)
    assert html == "<p>FileException if missing.</p>\n<p>ErrnoException otherwise.</p>"


def test_header_line_text_aligns_with_indented_continuation() -> None:
    """Text on the header line joins its indented continuation lines."""
    comment = parse_comment(
        "Sum.\n\nBugs: Leaks handles\n    on error.\n\n    Also slow."
    )
    assert comment.sections[-1].content == (
        "Leaks handles\non error.\n\nAlso slow."
    )
