"""Translate requested transport formats into ``src`` fragments.

Every format-specific rule lives here: local name quoting, scheme stripping,
the ``?#`` suffix appended to EOT URLs and the ``format()`` hint mapping.
Supporting a new transport format means adding a case to :func:`src_fragments`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re

from fontmagician.fonts.catalog import SourceSet
from fontmagician.fonts.utils import dedupe, safely_quoted


LOCAL = "local"
EOT = "eot"
EOT_SUFFIX = "?#"

# Only network schemes are stripped; ``data:`` URIs must keep their prefix.
_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:(?=//)")


def strip_scheme(url: str) -> str:
    """Return ``url`` as a protocol-relative reference (``https://x`` -> ``//x``)."""
    return _SCHEME.sub("", url.strip(), count=1)


def format_hint(extension: str, hints: Mapping[str, str] | None = None) -> str:
    """Return the ``format()`` hint for ``extension``, defaulting to the extension."""
    return (hints or {}).get(extension, extension)


def local_fragment(name: str) -> str:
    return f"local({safely_quoted(name)})"


def url_fragment(url: str, hint: str) -> str:
    return f'url({url}) format("{hint}")'


def src_fragments(
    sources: SourceSet,
    formats: Iterable[str],
    hints: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the ordered ``src`` entries for the requested formats.

    The output follows the order of ``formats``; formats without a matching
    source are omitted.
    """
    fragments: list[str] = []
    for fmt in dedupe(fmt.lower() for fmt in formats):
        if fmt == LOCAL:
            fragments.extend(local_fragment(name) for name in sources.local)
            continue
        url = sources.url.get(fmt)
        if not url:
            continue
        target = strip_scheme(url)
        if fmt == EOT:
            target += EOT_SUFFIX
        fragments.append(url_fragment(target, format_hint(fmt, hints)))
    return fragments


__all__ = [
    "EOT",
    "EOT_SUFFIX",
    "LOCAL",
    "format_hint",
    "local_fragment",
    "src_fragments",
    "strip_scheme",
    "url_fragment",
]
