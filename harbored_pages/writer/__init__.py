"""Writers that turn parsed doc comments into HTML pages and search records."""

from .comment_writer import CommentRenderer, summary_text
from .contracts import CodeHighlighter, write_code_block, write_contracts
from .html_writer import HTMLWriter
from .markup import MarkupFilter
from .models import SearchRecord, SymbolStackError
from .navigation import PageChrome, breadcrumb_heading
from .search_index import SearchIndexWriter, build_search_record

__all__ = [
    "CodeHighlighter",
    "CommentRenderer",
    "HTMLWriter",
    "MarkupFilter",
    "PageChrome",
    "SearchIndexWriter",
    "SearchRecord",
    "SymbolStackError",
    "breadcrumb_heading",
    "build_search_record",
    "summary_text",
    "write_code_block",
    "write_contracts",
]
