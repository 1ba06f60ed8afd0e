r"""Parse undecorated D doc comments into ordered, typed sections.

This module turns the text of a ``/** ... */`` or ``///`` comment into a
:class:`Comment`: a ditto flag plus an ordered list of :class:`Section`
objects (summary, description, ``Params``, ``Returns``, custom sections...).
Code regions delimited by ``---`` lines are escaped and wrapped in
``<pre><code>`` so later stages can recognise and skip them, and
``$(MACRO ...)`` references in prose are expanded.

Example
-------
>>> from harbored_pages.comment_parser import parse_comment
>>> comment = parse_comment("Opens a file.\n\nReturns: a handle")
>>> [section.name for section in comment.sections]
['Summary', 'Returns']
"""

from __future__ import annotations

import dataclasses as dc
import enum
import html
import re
import textwrap
import typing as typ

from ._constants import CODE_MARKER, CODE_MARKER_END, SEE_ALSO_NAMES
from .macros import DEFAULT_MACROS, expand_macros, split_key_values

if typ.TYPE_CHECKING:
    import collections.abc as cabc

CODE_FENCE_PATTERN = re.compile(r"^-{3,}$")
SECTION_HEADER_PATTERN = re.compile(
    r"^\s*([A-Za-z_][A-Za-z0-9_]*|See also|See Also):(?!//)\s*(.*)$"
)
DITTO = "ditto"
UNTITLED_SECTION_NAMES = ("Summary", "Description")
LEADING_PROSE_NAMES = ("Summary", "description")


class SectionKind(enum.Enum):
    """Well-known section names, with ``CUSTOM`` for anything else."""

    SUMMARY = "Summary"
    DESCRIPTION = "description"
    PARAMS = "Params"
    RETURNS = "Returns"
    NOTE = "Note"
    SEE_ALSO = "See Also"
    MACROS = "Macros"
    CUSTOM = "custom"

    @classmethod
    def classify(cls, name: str) -> SectionKind:
        """Return the kind for a raw section name."""
        match name:
            case "Summary":
                return cls.SUMMARY
            case "description" | "Description":
                return cls.DESCRIPTION
            case "Params":
                return cls.PARAMS
            case "Returns":
                return cls.RETURNS
            case "Note":
                return cls.NOTE
            case "Macros":
                return cls.MACROS
            case _ if name in SEE_ALSO_NAMES:
                return cls.SEE_ALSO
            case _:
                return cls.CUSTOM


@dc.dataclass(slots=True)
class Section:
    """Named block of a doc comment.

    Attributes
    ----------
    name : str
        Raw section name as written (``"Params"``, ``"See_also"``, ...).
    content : str
        HTML-safe section text.
    mapping : list[tuple[str, str]]
        Ordered ``(name, description)`` pairs; populated for ``Params`` and
        ``Macros`` sections.
    """

    name: str
    content: str = ""
    mapping: list[tuple[str, str]] = dc.field(default_factory=list)

    @property
    def kind(self) -> SectionKind:
        """Return the classified kind of this section."""
        return SectionKind.classify(self.name)

    @property
    def is_leading_prose(self) -> bool:
        """Whether the section belongs to the opening, unlabelled prose run."""
        return self.name in LEADING_PROSE_NAMES

    @property
    def has_heading(self) -> bool:
        """Whether the section is rendered with an ``<h2>`` heading."""
        return self.name not in UNTITLED_SECTION_NAMES

    @property
    def display_name(self) -> str:
        """Return the heading text shown for this section."""
        match self.kind:
            case SectionKind.SEE_ALSO:
                return "See Also:"
            case SectionKind.NOTE:
                return "Note:"
            case SectionKind.PARAMS:
                return "Parameters"
            case _:
                return self.name


@dc.dataclass(slots=True)
class Comment:
    """Parsed doc comment: ordered sections plus the ditto flag."""

    sections: list[Section] = dc.field(default_factory=list)
    is_ditto: bool = False


@dc.dataclass(slots=True)
class _Part:
    is_code: bool
    lines: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class _Draft:
    """Section under construction, before macro expansion."""

    name: str | None
    parts: list[_Part] = dc.field(default_factory=list)
    inline_header: bool = False

    def add_text(self, line: str) -> None:
        if not self.parts or self.parts[-1].is_code:
            self.parts.append(_Part(is_code=False))
        self.parts[-1].lines.append(line)

    def add_code(self, lines: list[str]) -> None:
        self.parts.append(_Part(is_code=True, lines=list(lines)))

    def is_empty(self) -> bool:
        return not any(
            part.is_code or any(line.strip() for line in part.lines)
            for part in self.parts
        )

    def raw_text(self) -> str:
        return "\n".join(
            "\n".join(part.lines) for part in self.parts if not part.is_code
        )


def undecorate_comment(raw: str) -> str:
    """Strip comment delimiters and per-line decoration from ``raw``.

    Handles ``///`` line comments and ``/** */`` / ``/++ +/`` block comments.
    Text without recognised delimiters is only dedented.
    """
    text = raw.strip()
    if text.startswith("///"):
        lines = [line.strip()[3:] for line in text.splitlines()]
    elif text.startswith(("/**", "/++")):
        marker = text[2]
        body = text[3:]
        if body.endswith(marker + "/"):
            body = body[:-2].rstrip(marker)
        lines = []
        for line in body.splitlines():
            stripped = line.lstrip()
            lines.append(stripped[1:] if stripped.startswith(marker) else line)
    else:
        lines = text.splitlines()

    if not lines:
        return ""
    first, rest = lines[0].strip(), textwrap.dedent("\n".join(lines[1:]))
    return "\n".join([first, rest]).strip("\n") if rest else first


def _split_drafts(text: str) -> list[_Draft]:
    """Group comment lines into section drafts, collecting code regions."""
    drafts = [_Draft(name=None)]
    code_lines: list[str] = []
    in_code = False
    for line in text.splitlines():
        if CODE_FENCE_PATTERN.match(line.strip()):
            if in_code:
                drafts[-1].add_code(code_lines)
                code_lines = []
            in_code = not in_code
            continue
        if in_code:
            code_lines.append(line)
            continue
        header = SECTION_HEADER_PATTERN.match(line)
        if header:
            drafts.append(_Draft(name=header.group(1)))
            if header.group(2):
                drafts[-1].inline_header = True
                drafts[-1].add_text(header.group(2))
            continue
        drafts[-1].add_text(line)
    if in_code:
        drafts[-1].add_code(code_lines)
    return drafts


def _split_preamble(preamble: _Draft) -> list[_Draft]:
    """Split untitled leading text into ``Summary`` and ``description`` drafts."""
    summary = _Draft(name="Summary")
    description = _Draft(name="description")
    parts = list(preamble.parts)
    if parts and not parts[0].is_code:
        lines = parts.pop(0).lines
        while lines and not lines[0].strip():
            lines = lines[1:]
        split = next((i for i, line in enumerate(lines) if not line.strip()), len(lines))
        summary.parts.append(_Part(is_code=False, lines=lines[:split]))
        if lines[split:]:
            parts.insert(0, _Part(is_code=False, lines=lines[split:]))
    description.parts.extend(parts)
    return [draft for draft in (summary, description) if not draft.is_empty()]


def _dedent_prose(lines: list[str], *, inline_header: bool) -> str:
    """Dedent prose lines; text sharing the header line is aligned separately."""
    if not inline_header or not lines:
        return textwrap.dedent("\n".join(lines))
    first, rest = lines[0].strip(), textwrap.dedent("\n".join(lines[1:]))
    return f"{first}\n{rest}" if rest else first


def _render_parts(draft: _Draft, macros: cabc.Mapping[str, str]) -> str:
    rendered: list[str] = []
    for index, part in enumerate(draft.parts):
        if part.is_code:
            code = html.escape(textwrap.dedent("\n".join(part.lines)), quote=False)
            rendered.append(f"{CODE_MARKER}{code}{CODE_MARKER_END}")
        else:
            prose = _dedent_prose(
                part.lines, inline_header=draft.inline_header and index == 0
            )
            rendered.append(expand_macros(prose, macros))
    return "\n".join(rendered).strip()


def parse_comment(
    text: str, macros: cabc.Mapping[str, str] | None = None
) -> Comment:
    """Parse an undecorated doc comment into a :class:`Comment`.

    Parameters
    ----------
    text : str
        Comment body with delimiters already removed (see
        :func:`undecorate_comment`).
    macros : Mapping[str, str], optional
        Macro table used for ``$(NAME ...)`` expansion; defaults to
        :data:`~harbored_pages.macros.DEFAULT_MACROS`. ``Macros`` sections in
        the comment override entries for this comment only.

    Returns
    -------
    Comment
        Sections in source order; a body of just ``ditto`` yields an empty
        comment with ``is_ditto`` set.
    """
    if text.strip().lower() == DITTO:
        return Comment(is_ditto=True)

    drafts = _split_drafts(text)
    preamble, named = drafts[0], drafts[1:]
    drafts = _split_preamble(preamble) + named

    table = dict(DEFAULT_MACROS if macros is None else macros)
    for draft in drafts:
        if draft.name == "Macros":
            table.update(split_key_values(draft.raw_text()))

    sections: list[Section] = []
    for draft in drafts:
        name = typ.cast("str", draft.name)
        match SectionKind.classify(name):
            case SectionKind.PARAMS:
                mapping = [
                    (key, expand_macros(value, table))
                    for key, value in split_key_values(draft.raw_text())
                ]
                sections.append(
                    Section(name, _render_parts(draft, table), mapping)
                )
            case SectionKind.MACROS:
                raw = draft.raw_text()
                sections.append(Section(name, raw.strip(), split_key_values(raw)))
            case _:
                sections.append(Section(name, _render_parts(draft, table)))
    return Comment(sections=sections)


__all__ = [
    "Comment",
    "Section",
    "SectionKind",
    "parse_comment",
    "undecorate_comment",
]
