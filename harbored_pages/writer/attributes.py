"""Write declaration attributes with a single resolved protection keyword."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import HtmlSink, NodeFormatter

PROTECTION_KEYWORDS = frozenset({"private", "package", "protected", "public", "export"})
WRITTEN_PROTECTIONS = ("private", "package", "protected")


def _attribute_name(attribute: object) -> str:
    name = getattr(attribute, "name", attribute)
    return str(name)


def is_protection(attribute: object) -> bool:
    """Return whether ``attribute`` is a protection keyword."""
    return _attribute_name(attribute) in PROTECTION_KEYWORDS


def resolve_protection(attributes: cabc.Iterable[object]) -> str:
    """Return the protection keyword to print for ``attributes``.

    The last protection attribute wins. ``private``, ``package`` and
    ``protected`` are printed as-is; anything else, including no protection
    at all, is printed as ``public``.
    """
    protection = ""
    for attribute in attributes:
        if is_protection(attribute):
            protection = _attribute_name(attribute)
    return protection if protection in WRITTEN_PROTECTIONS else "public"


def write_attributes(
    dst: HtmlSink,
    attributes: cabc.Sequence[object],
    format_node: NodeFormatter = _attribute_name,
) -> None:
    """Write the resolved protection, then each other attribute and a space."""
    dst.write(f"{resolve_protection(attributes)} ")
    for attribute in attributes:
        if is_protection(attribute):
            continue
        dst.write(format_node(attribute))
        dst.write(" ")


__all__ = ["is_protection", "resolve_protection", "write_attributes"]
