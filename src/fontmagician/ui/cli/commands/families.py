"""List the families known to the configured foundries."""

from __future__ import annotations

import typer

from fontmagician.core.exceptions import FontMagicianError
from fontmagician.plugin import FontMagician

from .._options import ConfigOption, FoundryOption, HostedOption, HostedPrefixOption
from ..state import emit_error, get_cli_state
from ..utils import resolve_config


def families(
    config: ConfigOption = None,
    foundry: FoundryOption = None,
    hosted: HostedOption = None,
    hosted_url: HostedPrefixOption = None,
) -> None:
    """Print a table of the families each foundry declares."""
    from rich import box
    from rich.table import Table

    try:
        options = resolve_config(config, foundries=foundry, hosted=hosted, hosted_url=hosted_url)
        foundries = FontMagician(options).foundries
    except FontMagicianError as exc:
        emit_error(str(exc).splitlines()[0], exception=exc)
        raise typer.Exit(code=1) from exc

    table = Table(
        title="Known Font Families",
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Foundry", style="magenta")
    table.add_column("Family", style="green")
    table.add_column("Variants", justify="right")

    entries = foundries.known_families(options.foundries)
    if not entries:
        table.add_row("-", "-", "0")
    for name, family in entries:
        catalog = foundries.get(name)
        descriptor = catalog.get(family) if catalog is not None else None
        table.add_row(name, family, str(len(descriptor) if descriptor else 0))

    get_cli_state().console.print(table)


__all__ = ["families"]
