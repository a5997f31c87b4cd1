"""Shared helpers for font family names."""

from __future__ import annotations

from collections.abc import Iterable
import re


_QUOTED = re.compile(r"""^(['"])(.+)\1$""", re.DOTALL)
_WHITESPACE = re.compile(r"\s")


def unquote(value: str) -> str:
    """Strip one level of matching single or double quotes."""
    value = value.strip()
    match = _QUOTED.match(value)
    return match.group(2) if match else value


def normalize_family(name: str) -> str:
    """Return the lookup identity of a family name.

    ``"Open Sans"`` and ``Open Sans`` designate the same family; inner
    whitespace runs collapse to a single space.
    """
    return " ".join(unquote(name).split())


def safely_quoted(value: str) -> str:
    """Wrap ``value`` in double quotes only when it contains whitespace."""
    return f'"{value}"' if _WHITESPACE.search(value) else value


def dedupe(values: Iterable[str]) -> tuple[str, ...]:
    """Return ``values`` without repeats, keeping the first occurrence."""
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        ordered.append(value)
    return tuple(ordered)


def split_tokens(value: str | Iterable[str] | None) -> list[str]:
    """Split a whitespace separated option into a list of tokens."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if not isinstance(value, Iterable):
        raise ValueError(f"Expected a string or a list of strings, got {type(value).__name__}.")
    tokens: list[str] = []
    for item in value:
        tokens.extend(str(item).split())
    return tokens


__all__ = ["dedupe", "normalize_family", "safely_quoted", "split_tokens", "unquote"]
