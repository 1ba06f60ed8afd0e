"""Render D documentation comments into cross-linked HTML pages.

This package turns raw doc comments into typed sections, runs their prose
through Markdown, and writes the HTML fragments, navigation and search-index
records that make up a code browser page.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from harbored_pages import main
>>> main()  # doctest: +SKIP
>>> from harbored_pages import app
>>> app.name[0]
'hmod-pages'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
