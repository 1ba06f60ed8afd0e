"""Tests for the Markdown filter applied to doc comment prose."""

from __future__ import annotations

from harbored_pages.comment_parser import Comment, Section
from harbored_pages.writer import MarkupFilter

FENCED_EXAMPLE = (
    "Example:\n<pre><code>auto x = a * b * c;\n"
    "writeln(`*not emphasis*`);</code></pre>"
)


def test_text_with_code_marker_is_untouched() -> None:
    """Filtering text that holds a code block must not alter it."""
    markup = MarkupFilter()
    once = markup.filter(FENCED_EXAMPLE)
    assert once == FENCED_EXAMPLE
    assert markup.filter(once) == FENCED_EXAMPLE


def test_prose_is_converted() -> None:
    """Plain prose becomes Markdown HTML."""
    assert MarkupFilter().filter("Use `open` **now**.") == (
        "<p>Use <code>open</code> <strong>now</strong>.</p>"
    )


def test_blank_text_renders_empty() -> None:
    """Whitespace-only input yields an empty string."""
    assert MarkupFilter().markdown("  \n ") == ""


def test_fenced_markdown_code_is_highlighted() -> None:
    """Markdown fences inside prose get Pygments codehilite markup."""
    html = MarkupFilter().filter("Run:\n\n```d\nvoid main() {}\n```\n")
    assert '<div class="codehilite">' in html
    assert "<span" in html


def test_filter_comment_params_use_mapping_values() -> None:
    """Params descriptions are filtered; other sections filter their content."""
    comment = Comment(
        [
            Section("Summary", "A *b*"),
            Section("Params", "x = raw", [("x", "the *x*")]),
        ]
    )
    MarkupFilter().filter_comment(comment)
    assert comment.sections[0].content == "<p>A <em>b</em></p>"
    assert comment.sections[1].mapping == [("x", "<p>the <em>x</em></p>")]
    assert comment.sections[1].content == "x = raw"


def test_stylesheet_targets_codehilite() -> None:
    """The exposed stylesheet scopes rules to ``.codehilite``."""
    assert ".codehilite" in MarkupFilter("default").stylesheet
