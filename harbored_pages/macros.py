r"""Expand DDoc ``$(NAME args)`` macros and load macro definition files.

Macros are resolved against a flat name -> body table. Bodies may reference
their arguments with ``$0`` (everything), ``$1`` .. ``$9`` (comma-separated
arguments) and ``$+`` (everything after the first argument). The result of a
substitution is expanded again, up to ``MAX_EXPANSION_DEPTH`` levels.

Example
-------
>>> from harbored_pages.macros import expand_macros
>>> expand_macros("$(B bold) and $(LINK2 https://dlang.org, D)", DEFAULT_MACROS)
'<b>bold</b> and <a href="https://dlang.org">D</a>'
"""

from __future__ import annotations

import logging
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)

MAX_EXPANSION_DEPTH = 16
MACRO_OPEN = "$("
ARGUMENT_PATTERN = re.compile(r"\$([0-9+])")
MACRO_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
KEY_VALUE_PATTERN = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s?(.*)$")

DEFAULT_MACROS: dict[str, str] = {
    "B": "<b>$0</b>",
    "I": "<i>$0</i>",
    "U": "<u>$0</u>",
    "P": "<p>$0</p>",
    "BR": "<br>",
    "D": "<code>$0</code>",
    "DDOC_BACKQUOTED": "<code>$0</code>",
    "LINK": '<a href="$0">$0</a>',
    "LINK2": '<a href="$1">$+</a>',
    "BIG": "<big>$0</big>",
    "SMALL": "<small>$0</small>",
    "DL": "<dl>$0</dl>",
    "DT": "<dt>$0</dt>",
    "DD": "<dd>$0</dd>",
    "OL": "<ol>$0</ol>",
    "UL": "<ul>$0</ul>",
    "LI": "<li>$0</li>",
    "TABLE": "<table>$0</table>",
    "TR": "<tr>$0</tr>",
    "TH": "<th>$0</th>",
    "TD": "<td>$0</td>",
    "RED": '<span style="color:red">$0</span>',
    "BLUE": '<span style="color:blue">$0</span>',
    "GREEN": '<span style="color:green">$0</span>',
    "LPAREN": "(",
    "RPAREN": ")",
    "DOLLAR": "$",
}


def split_key_values(text: str) -> list[tuple[str, str]]:
    """Split ``name = value`` definitions, folding continuation lines.

    Lines that do not start a new definition extend the value of the previous
    one. Text before the first definition is ignored. Order and duplicates are
    preserved so callers can decide how to treat repeated names.
    """
    entries: list[tuple[str, list[str]]] = []
    for line in text.splitlines():
        match = KEY_VALUE_PATTERN.match(line)
        if match:
            entries.append((match.group(1), [match.group(2).strip()]))
        elif entries and line.strip():
            entries[-1][1].append(line.strip())
    return [(name, "\n".join(parts).strip()) for name, parts in entries]


def load_macro_file(path: Path) -> dict[str, str]:
    """Read a ``.ddoc`` macro file into a name -> body mapping.

    Parameters
    ----------
    path : Path
        File containing ``NAME = body`` definitions.

    Returns
    -------
    dict[str, str]
        Macro table; later definitions of the same name win.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    if not path.exists():
        msg = f"Macro file '{path}' not found."
        raise FileNotFoundError(msg)
    macros = dict(split_key_values(path.read_text(encoding="utf-8")))
    logger.debug("Loaded %d macros from %s", len(macros), path)
    return macros


def _find_closing_paren(text: str, start: int) -> int:
    """Return the index of the parenthesis closing the one before ``start``."""
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _split_arguments(args: str) -> list[str]:
    """Split macro arguments on commas that are not nested in parentheses."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in args:
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts]


def _substitute_arguments(body: str, args: str) -> str:
    """Replace ``$0``/``$1``../``$+`` references in ``body`` with ``args``."""
    positional = _split_arguments(args) if args else []

    def _repl(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "0":
            return args
        if token == "+":
            comma = _find_top_level_comma(args)
            return args[comma + 1 :].lstrip() if comma >= 0 else ""
        index = int(token) - 1
        return positional[index] if index < len(positional) else ""

    return ARGUMENT_PATTERN.sub(_repl, body)


def _find_top_level_comma(args: str) -> int:
    depth = 0
    for index, char in enumerate(args):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            return index
    return -1


def expand_macros(
    text: str, macros: cabc.Mapping[str, str], *, depth: int = 0
) -> str:
    """Expand every ``$(NAME args)`` reference in ``text``.

    Unknown macro names expand to the empty string. An unterminated reference
    is left as literal text, as is anything past ``MAX_EXPANSION_DEPTH``
    levels of nested expansion.
    """
    if depth >= MAX_EXPANSION_DEPTH or MACRO_OPEN not in text:
        return text

    out: list[str] = []
    pos = 0
    while True:
        start = text.find(MACRO_OPEN, pos)
        if start < 0:
            out.append(text[pos:])
            break
        out.append(text[pos:start])
        inner_start = start + len(MACRO_OPEN)
        end = _find_closing_paren(text, inner_start)
        if end < 0:
            out.append(text[start:])
            break
        inner = text[inner_start:end]
        name_match = MACRO_NAME_PATTERN.match(inner)
        if name_match is None:
            out.append(text[start : end + 1])
            pos = end + 1
            continue
        name = name_match.group(0)
        args = inner[name_match.end() :].lstrip()
        body = macros.get(name)
        if body is None:
            logger.debug("Unknown macro %s expands to nothing", name)
            body = ""
        expanded_args = expand_macros(args, macros, depth=depth + 1)
        replaced = _substitute_arguments(body, expanded_args)
        out.append(expand_macros(replaced, macros, depth=depth + 1))
        pos = end + 1
    return "".join(out)


__all__ = [
    "DEFAULT_MACROS",
    "MAX_EXPANSION_DEPTH",
    "expand_macros",
    "load_macro_file",
    "split_key_values",
]
