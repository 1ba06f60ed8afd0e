"""Append client-side search records mapping symbols to their pages.

Each record is a JSON-like fragment on its own line,
``{"std.io.File.open" : "std/io/File.open.html"},``. Records are appended in
the order symbols are encountered; nothing is escaped or deduplicated.
"""

from __future__ import annotations

import logging
import posixpath
import typing as typ

from harbored_pages._constants import PAGE_EXTENSION, SEARCH_RECORD_TEMPLATE

from .models import SearchRecord, check_symbol_stack

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import HtmlSink

logger = logging.getLogger(__name__)

INDEX_PREAMBLE = '"use strict";\nvar items = [\n'
INDEX_EPILOGUE = "];\n"


def build_search_record(
    module_file_base: str,
    module_name_length: int,
    symbol_stack: cabc.Sequence[str],
) -> SearchRecord:
    """Return the search record for the symbol at the top of ``symbol_stack``.

    Parameters
    ----------
    module_file_base : str
        Output path of the module's page group without extension
        (``"std/io"``).
    module_name_length : int
        Number of leading stack entries naming the module.
    symbol_stack : Sequence[str]
        Name components from the root package down to the symbol.

    Returns
    -------
    SearchRecord
        Dotted name of the whole stack and the page path
        ``module_file_base/<in-module name>.html``. A module's own entry
        (nothing after the module name) maps to ``module_file_base.html``.
    """
    check_symbol_stack(module_name_length, symbol_stack)
    symbol = ".".join(symbol_stack)
    symbol_in_module = ".".join(symbol_stack[module_name_length:])
    segments = [part for part in (module_file_base, symbol_in_module) if part]
    return SearchRecord(symbol=symbol, path=posixpath.join(*segments) + PAGE_EXTENSION)


class SearchIndexWriter:
    """Write search records to a shared, append-only stream."""

    def __init__(self, stream: HtmlSink) -> None:
        self.stream = stream

    def begin(self) -> None:
        """Open the ``items`` array consumed by ``search.js``."""
        self.stream.write(INDEX_PREAMBLE)

    def finish(self) -> None:
        """Close the ``items`` array opened by :meth:`begin`."""
        self.stream.write(INDEX_EPILOGUE)

    def add_entry(
        self,
        module_file_base: str,
        module_name_length: int,
        symbol_stack: cabc.Sequence[str],
    ) -> SearchRecord:
        """Append one record for ``symbol_stack`` and return it."""
        record = build_search_record(module_file_base, module_name_length, symbol_stack)
        self.stream.write(
            SEARCH_RECORD_TEMPLATE.format(symbol=record.symbol, path=record.path)
        )
        logger.debug("Indexed %s -> %s", record.symbol, record.path)
        return record


__all__ = ["SearchIndexWriter", "build_search_record"]
