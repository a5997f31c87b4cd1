"""Rewrite a stylesheet with the face rules it is missing."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from fontmagician.core.exceptions import FontMagicianError
from fontmagician.css.stylesheet import Stylesheet
from fontmagician.fonts.logging import FontPipelineLogger
from fontmagician.plugin import FontMagician, PassReport

from .._options import (
    AliasOption,
    AsyncOutputOption,
    CacheOption,
    ConcurrentOption,
    ConfigOption,
    DisplayOption,
    ExceptOption,
    FormatOption,
    FoundryOption,
    HostedOption,
    HostedPrefixOption,
    OutputOption,
    RemoteCatalogOption,
)
from ..state import emit_error, get_cli_state
from ..utils import resolve_config


def _summarise(report: PassReport, logger: FontPipelineLogger) -> None:
    logger.debug(
        "Scanned %d family(ies), generated %d rule(s).", len(report.families), report.rules
    )
    for family in report.unresolved:
        logger.debug("No source provides '%s'.", family)
    if report.loader is not None:
        logger.notice("Font loader written to %s", report.loader)


def process(
    input_path: Annotated[
        Path,
        typer.Argument(
            metavar="INPUT",
            help="Stylesheet to rewrite.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output: OutputOption = None,
    config: ConfigOption = None,
    foundry: FoundryOption = None,
    format_: FormatOption = None,
    alias: AliasOption = None,
    display: DisplayOption = None,
    async_output: AsyncOutputOption = None,
    hosted: HostedOption = None,
    hosted_url: HostedPrefixOption = None,
    exclude: ExceptOption = None,
    concurrent: ConcurrentOption = False,
    remote_catalog: RemoteCatalogOption = None,
    cache: CacheOption = None,
) -> None:
    """Prepend @font-face rules for every undeclared font family."""
    try:
        options = resolve_config(
            config,
            foundries=foundry,
            formats=format_,
            aliases=alias,
            display=display,
            hosted=hosted,
            hosted_url=hosted_url,
            async_output=async_output,
            exclude=exclude,
            cache=cache,
            remote_catalogs=remote_catalog,
        )
        sheet = Stylesheet.parse(input_path.read_text(encoding="utf-8"))
        logger = FontPipelineLogger()
        magician = FontMagician(options, logger=logger)
        if concurrent or options.remote_catalogs:
            report = asyncio.run(magician.process_async(sheet))
        else:
            report = magician.process(sheet)
    except FontMagicianError as exc:
        emit_error(str(exc).splitlines()[0], exception=exc)
        raise typer.Exit(code=1) from exc
    _summarise(report, logger)

    css = sheet.serialize()
    if output is None:
        typer.echo(css, nl=not css.endswith("\n"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(css, encoding="utf-8")
    if get_cli_state().verbosity >= 1:
        logger.notice("Stylesheet written to %s", output)


__all__ = ["process"]
