"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


RESOLUTION_PANEL = "Resolution"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML or JSON file holding the plugin options.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

FoundryOption = Annotated[
    list[str] | None,
    typer.Option(
        "--foundry",
        "-f",
        help="Foundry to consult, in preference order. Repeat to add more.",
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

FormatOption = Annotated[
    list[str] | None,
    typer.Option(
        "--format",
        help="Font format to reference in src, in preference order (local, eot, woff2, woff...).",
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

AliasOption = Annotated[
    list[str] | None,
    typer.Option(
        "--alias",
        metavar="FROM=TO",
        help="Resolve family FROM as family TO.",
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

HostedOption = Annotated[
    Path | None,
    typer.Option(
        "--hosted",
        help="Directory of self-hosted font files.",
        file_okay=False,
        dir_okay=True,
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

HostedPrefixOption = Annotated[
    str | None,
    typer.Option(
        "--hosted-url",
        help="URL prefix under which the hosted directory is served.",
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

ExceptOption = Annotated[
    list[str] | None,
    typer.Option(
        "--except",
        help="Family to treat as already declared. Repeat to add more.",
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

RemoteCatalogOption = Annotated[
    list[str] | None,
    typer.Option(
        "--remote-catalog",
        metavar="URL",
        help="JSON catalog raced against the foundries (implies --concurrent).",
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

ConcurrentOption = Annotated[
    bool,
    typer.Option(
        "--concurrent",
        help="Resolve families concurrently and remember them in the font cache.",
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

CacheOption = Annotated[
    Path | None,
    typer.Option(
        "--cache",
        help="Font cache file used with --concurrent.",
        dir_okay=False,
        rich_help_panel=RESOLUTION_PANEL,
    ),
]

DisplayOption = Annotated[
    str | None,
    typer.Option(
        "--display",
        help="font-display value added to generated rules (swap, block...).",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the rewritten stylesheet here instead of stdout.",
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

AsyncOutputOption = Annotated[
    Path | None,
    typer.Option(
        "--async-output",
        help="Move face rules into a JavaScript loader written to this path.",
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
