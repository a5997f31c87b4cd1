"""Read family names out of ``font-family`` and ``font`` values."""

from __future__ import annotations

from collections.abc import Sequence

import tinycss2
from tinycss2.ast import Node

from fontmagician.fonts.utils import normalize_family, safely_quoted, unquote


_SKIPPED = frozenset({"whitespace", "comment"})


def _first_group(tokens: Sequence[Node]) -> list[Node]:
    group: list[Node] = []
    for token in tokens:
        if token.type == "literal" and token.value == ",":
            break
        group.append(token)
    return group


def _significant(tokens: Sequence[Node]) -> list[Node]:
    return [token for token in tokens if token.type not in _SKIPPED]


def _family_from_group(tokens: Sequence[Node]) -> str:
    significant = _significant(tokens)
    if len(significant) == 1 and significant[0].type == "string":
        return significant[0].value
    return normalize_family(tinycss2.serialize(tokens))


def _family_from_shorthand(tokens: Sequence[Node]) -> str:
    significant = _significant(tokens)
    if not significant:
        return ""
    if significant[-1].type == "string":
        return significant[-1].value
    names: list[str] = []
    for token in reversed(significant):
        if token.type != "ident":
            break
        names.append(token.value)
    return " ".join(reversed(names))


def first_font_family(prop: str, value: str | Sequence[Node]) -> str:
    """Return the first family named by a ``font-family`` or ``font`` value.

    For ``font-family`` the whole first comma group is the family. For the
    ``font`` shorthand the family is the trailing quoted string or run of
    identifiers of the first group, after size and line-height.
    """
    tokens = tinycss2.parse_component_value_list(value) if isinstance(value, str) else list(value)
    group = _first_group(tokens)
    if prop.lower() == "font":
        return _family_from_shorthand(group)
    return _family_from_group(group)


__all__ = ["first_font_family", "safely_quoted", "unquote"]
