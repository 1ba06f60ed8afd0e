"""Shared protocols and records used by the HTML writers."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


class SymbolStackError(AssertionError):
    """Raised when a caller breaks the symbol stack / module length contract."""


class HtmlSink(typ.Protocol):
    """Append-only text output (``io.StringIO``, an open file, ...)."""

    def write(self, text: str, /) -> object:
        """Append ``text`` to the output."""
        ...


class TocItem(typ.Protocol):
    """Table-of-contents node owned by the TOC builder."""

    def write(self, dst: HtmlSink, module_name: str) -> None:
        """Render this item, highlighting it when it matches ``module_name``."""
        ...


class FunctionBody(typ.Protocol):
    """Function body carrying optional ``in``/``out`` contract statements."""

    @property
    def in_statement(self) -> object | None: ...

    @property
    def out_statement(self) -> object | None: ...


NodeFormatter = typ.Callable[[object], str]
"""Formats a declaration node (contract, attribute) as source text."""


@dc.dataclass(frozen=True, slots=True)
class SearchRecord:
    """Fully qualified symbol name and the page it is documented on.

    Attributes
    ----------
    symbol : str
        Dotted name including the module path (``"std.io.File.open"``).
    path : str
        Page path relative to the output root (``"std/io/File.open.html"``).
    """

    symbol: str
    path: str


def check_symbol_stack(module_name_length: int, symbol_stack: typ.Sequence[str]) -> None:
    """Raise :class:`SymbolStackError` if the stack cannot hold the module name."""
    if not symbol_stack or module_name_length > len(symbol_stack):
        msg = (
            f"symbol stack {list(symbol_stack)!r} is shallower than the module "
            f"name length {module_name_length}"
        )
        raise SymbolStackError(msg)


__all__ = [
    "FunctionBody",
    "HtmlSink",
    "NodeFormatter",
    "SearchRecord",
    "SymbolStackError",
    "TocItem",
    "check_symbol_stack",
]
