"""Run doc comment prose through Markdown while leaving code untouched."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from harbored_pages._constants import CODE_MARKER, DEFAULT_MARKDOWN_EXTENSIONS
from harbored_pages.comment_parser import SectionKind

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbored_pages.comment_parser import Comment

logger = logging.getLogger(__name__)


class MarkupFilter:
    """Convert section text to HTML with Python-Markdown.

    Text that already contains a ``<pre><code>`` block produced by the comment
    parser is returned unchanged, so code examples are never processed twice.
    """

    def __init__(
        self,
        pygments_style: str = "monokai",
        extensions: cabc.Sequence[str] = DEFAULT_MARKDOWN_EXTENSIONS,
    ) -> None:
        """Initialize a filter with a Pygments style and Markdown extensions.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used by ``codehilite``. Defaults to
            ``"monokai"``.
        extensions : Sequence[str], optional
            Python-Markdown extension names to enable.
        """
        self.pygments_style = pygments_style
        self.extensions = list(extensions)
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted fenced code."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        if not text.strip():
            return ""
        md = Markdown(
            extensions=self.extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)

    def filter(self, text: str) -> str:
        """Return ``text`` as HTML, or unchanged when it holds a code block."""
        if CODE_MARKER in text:
            logger.debug("Skipping markup for text containing a code block")
            return text
        return self.markdown(text)

    def filter_comment(self, comment: Comment) -> Comment:
        """Filter every section of ``comment`` in place and return it.

        ``Params`` sections have their parameter descriptions filtered instead
        of their content.
        """
        for index, section in enumerate(comment.sections):
            if section.kind is SectionKind.PARAMS:
                mapping = [(name, self.filter(doc)) for name, doc in section.mapping]
                comment.sections[index] = dc.replace(section, mapping=mapping)
            else:
                comment.sections[index] = dc.replace(
                    section, content=self.filter(section.content)
                )
        return comment


__all__ = ["MarkupFilter"]
