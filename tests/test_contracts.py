"""Tests for code blocks, contract sections, and attribute rendering."""

from __future__ import annotations

import io
from types import SimpleNamespace

import pytest

from harbored_pages.writer import CodeHighlighter, write_code_block, write_contracts
from harbored_pages.writer.attributes import resolve_protection, write_attributes


def test_code_block_wraps_verbatim() -> None:
    """Code is written verbatim with a trailing newline inside the block."""
    dst = io.StringIO()
    write_code_block(dst, "int x;")
    assert dst.getvalue() == "<pre><code>int x;\n</code></pre>\n"


def test_no_contracts_writes_nothing() -> None:
    """Absent in and out statements produce no output at all."""
    dst = io.StringIO()
    write_contracts(dst, None, None)
    assert dst.getvalue() == ""


@pytest.mark.parametrize(
    ("in_statement", "out_statement", "code"),
    [
        ("in { assert(a); }", None, "in { assert(a); }"),
        (None, "out (r) { assert(r); }", "out (r) { assert(r); }"),
        ("in {}", "out {}", "in {}\nout {}"),
    ],
)
def test_contract_block(
    in_statement: str | None, out_statement: str | None, code: str
) -> None:
    """Present statements are formatted into one code block, in then out."""
    dst = io.StringIO()
    write_contracts(dst, in_statement, out_statement)
    assert dst.getvalue() == (
        '<div class="section"><h2>Contracts</h2>'
        f"<pre><code>{code}\n</code></pre>\n</div>\n"
    )


def test_contracts_use_node_formatter() -> None:
    """Statement objects are formatted by the supplied formatter."""
    dst = io.StringIO()
    node = SimpleNamespace(source="in { }")
    write_contracts(dst, node, None, lambda n: n.source.upper())
    assert "<pre><code>IN { }\n</code></pre>" in dst.getvalue()


@pytest.mark.parametrize(
    ("attributes", "expected"),
    [
        ([], "public "),
        (["static"], "public static "),
        (["private", "static", "protected", "@safe"], "protected static @safe "),
        (["package", "export"], "public "),
        (["public", "private"], "private "),
    ],
)
def test_write_attributes(attributes: list[str], expected: str) -> None:
    """The last protection wins and other attributes follow in order."""
    dst = io.StringIO()
    write_attributes(dst, attributes)
    assert dst.getvalue() == expected


def test_attribute_objects_with_names() -> None:
    """Attribute objects are recognised by their ``name``."""
    attrs = [SimpleNamespace(name="package"), SimpleNamespace(name="nothrow")]
    assert resolve_protection(attrs) == "package"


def test_highlighter_escapes_code() -> None:
    """Highlighted examples are escaped and carry no wrapping block."""
    html = CodeHighlighter("default")("a < b;")
    assert "&lt;" in html
    assert "<pre" not in html
