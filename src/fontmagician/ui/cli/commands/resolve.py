"""Show the face rules a single family would produce."""

from __future__ import annotations

from typing import Annotated

import typer

from fontmagician.core.exceptions import FontMagicianError
from fontmagician.css.stylesheet import Stylesheet
from fontmagician.plugin import FACE_RULE, FontMagician

from .._options import (
    AliasOption,
    ConfigOption,
    DisplayOption,
    FormatOption,
    FoundryOption,
    HostedOption,
    HostedPrefixOption,
)
from ..state import emit_error, emit_warning
from ..utils import resolve_config


def resolve(
    family: Annotated[str, typer.Argument(help="Font family to resolve.")],
    config: ConfigOption = None,
    foundry: FoundryOption = None,
    format_: FormatOption = None,
    alias: AliasOption = None,
    display: DisplayOption = None,
    hosted: HostedOption = None,
    hosted_url: HostedPrefixOption = None,
) -> None:
    """Print the @font-face rules generated for FAMILY."""
    try:
        options = resolve_config(
            config,
            foundries=foundry,
            formats=format_,
            aliases=alias,
            display=display,
            hosted=hosted,
            hosted_url=hosted_url,
        )
        rules = FontMagician(options).face_rules_for(family)
    except FontMagicianError as exc:
        emit_error(str(exc).splitlines()[0], exception=exc)
        raise typer.Exit(code=1) from exc
    if not rules:
        emit_warning(f"No foundry provides the font family '{family}'.")
        raise typer.Exit(code=1)
    sheet = Stylesheet([])
    sheet.prepend(FACE_RULE, [rule.declarations() for rule in rules])
    typer.echo(sheet.serialize(), nl=False)


__all__ = ["resolve"]
