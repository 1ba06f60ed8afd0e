"""Common literal values used across harbored_pages.

These constants keep markers and file extensions centralized so the parser,
the writers, and tests can import the same values without drifting. Intended
for internal use within the harbored_pages package.

Examples
--------
>>> from harbored_pages import _constants
>>> _constants.SEARCH_RECORD_TEMPLATE.format(symbol="std.io", path="std/io.html")
'{"std.io" : "std/io.html"},\\n'
>>> "std/io" + _constants.PAGE_EXTENSION
'std/io.html'
"""

PAGE_EXTENSION = ".html"
CODE_MARKER = "<pre><code>"
CODE_MARKER_END = "</code></pre>"
SEARCH_RECORD_TEMPLATE = '{{"{symbol}" : "{path}"}},\n'
SEE_ALSO_NAMES = ("See_also", "See_Also", "See also", "See Also")
DEFAULT_MARKDOWN_EXTENSIONS = ("fenced_code", "codehilite", "tables", "sane_lists")
DEFAULT_CONFIG_FILENAME = "hmod-pages.yaml"
