"""Stylesheet pass that declares every font family it finds.

The pass reads the families already declared by ``@font-face`` rules (plus the
``except`` option), scans ``font-family`` and ``font`` declarations for the
first family of each value, and prepends generated face rules for every
family that still lacks one. Families are looked up at most once per pass.

Two resolution paths exist:

- :meth:`FontMagician.process` resolves synchronously against the foundry set
  built from the configuration.
- :meth:`FontMagician.process_async` races any number of sources per family
  and remembers the winners in a JSON cache shared between passes.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path
import re
from typing import Any

from fontmagician.core.config import MagicianConfig, build_config
from fontmagician.css.stylesheet import Stylesheet, declaration_value
from fontmagician.css.values import first_font_family
from fontmagician.fonts.cache import CacheStore
from fontmagician.fonts.foundry import resolve_family
from fontmagician.fonts.logging import FontPipelineLogger
from fontmagician.fonts.registry import FoundrySet, build_foundries
from fontmagician.fonts.sources import (
    CatalogSource,
    FontSource,
    MultiSourceResolver,
    RemoteCatalogSource,
)
from fontmagician.fonts.synthesis import FaceRule, build_face_rules
from fontmagician.fonts.utils import dedupe, normalize_family
from fontmagician.loader.emitter import LoaderEmitter


logger = logging.getLogger(__name__)

FONT_PROPERTIES = re.compile(r"font(-family)?")
FACE_RULE = "font-face"


@dataclass(slots=True)
class PassReport:
    """Summary of one stylesheet pass."""

    families: list[str] = field(default_factory=list)
    resolved: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)
    rules: int = 0
    loader: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "families": list(self.families),
            "resolved": list(self.resolved),
            "unresolved": list(self.unresolved),
            "rules": self.rules,
            "loader": str(self.loader) if self.loader else None,
        }


def face_rule_record(sheet: Stylesheet, rule: Any) -> dict[str, str]:
    """Convert an ``@font-face`` node into a loader record."""
    values: dict[str, str] = {}
    for declaration in sheet.rule_declarations(rule):
        values.setdefault(declaration.lower_name, declaration_value(declaration))
    return {
        "family": normalize_family(values.get("font-family", "")),
        "weight": values.get("font-weight", "400"),
        "style": values.get("font-style", "normal"),
        "src": values.get("src", ""),
    }


class FontMagician:
    """Generate missing ``@font-face`` rules for a stylesheet."""

    def __init__(
        self,
        config: MagicianConfig | dict[str, Any] | None = None,
        *,
        foundries: FoundrySet | None = None,
        sources: Sequence[FontSource] | None = None,
        cache: CacheStore | None = None,
        loader: LoaderEmitter | None = None,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.config = build_config(config)
        self._foundries = foundries
        self.sources = list(sources) if sources is not None else None
        self.logger = logger or FontPipelineLogger()
        self.cache = cache or CacheStore(self.config.cache_file, logger=self.logger)
        self.loader = loader

    @property
    def foundries(self) -> FoundrySet:
        if self._foundries is None:
            self._foundries = build_foundries(self.config)
        return self._foundries

    # Scanning -----------------------------------------------------------

    def declared_families(self, sheet: Stylesheet) -> set[str]:
        """Families excluded from generation before the scan starts."""
        declared = set(self.config.except_)
        for rule in sheet.at_rules(FACE_RULE):
            for declaration in sheet.rule_declarations(rule, "font-family"):
                family = normalize_family(declaration_value(declaration))
                if family:
                    declared.add(family)
        return declared

    def referenced_families(self, sheet: Stylesheet) -> list[str]:
        """First family of each font declaration, in first-seen order."""
        families: list[str] = []
        for declaration in sheet.declarations(FONT_PROPERTIES):
            family = normalize_family(first_font_family(declaration.lower_name, declaration.value))
            if family:
                families.append(family)
        return list(dedupe(families))

    def pending_families(self, sheet: Stylesheet, report: PassReport) -> list[str]:
        declared = self.declared_families(sheet)
        pending: list[str] = []
        for family in self.referenced_families(sheet):
            report.families.append(family)
            if family in declared:
                continue
            # Marked before resolution so a family is looked up once.
            declared.add(family)
            pending.append(family)
        return pending

    # Synchronous path ---------------------------------------------------

    def face_rules_for(self, family: str) -> list[FaceRule]:
        """Resolve ``family`` through the foundries and synthesise its rules."""
        resolution = resolve_family(
            family, self.config.aliases, self.config.foundries, self.foundries
        )
        if resolution is None:
            return []
        return build_face_rules(
            family, resolution.descriptor, self.config, resolved_family=resolution.family
        )

    def process(self, sheet: Stylesheet) -> PassReport:
        """Rewrite ``sheet`` in place using the configured foundries."""
        report = PassReport()
        generated: list[FaceRule] = []
        for family in self.pending_families(sheet, report):
            rules = self.face_rules_for(family)
            self._record(report, family, rules)
            generated.extend(rules)
        return self._finish(sheet, generated, report)

    # Asynchronous path --------------------------------------------------

    def default_sources(self) -> list[FontSource]:
        """Foundry set first, then every configured remote catalog."""
        sources: list[FontSource] = [
            CatalogSource(self.foundries, order=self.config.foundries, name="foundries")
        ]
        sources.extend(RemoteCatalogSource(url) for url in self.config.remote_catalogs)
        return sources

    async def process_async(self, sheet: Stylesheet) -> PassReport:
        """Rewrite ``sheet`` resolving families concurrently across sources.

        The cache is loaded before the scan and saved once every family has
        settled, including when no new entry was added.
        """
        report = PassReport()
        self.cache.load()
        sources = self.sources if self.sources is not None else self.default_sources()
        resolver = MultiSourceResolver(sources, self.cache)
        try:
            pending = self.pending_families(sheet, report)
            results = await asyncio.gather(
                *(
                    resolver.resolve(
                        self.config.resolve_alias(family), self.config, declared_as=family
                    )
                    for family in pending
                )
            )
        finally:
            self.cache.save()
        generated: list[FaceRule] = []
        for family, rules in zip(pending, results):
            self._record(report, family, rules)
            generated.extend(rules)
        return self._finish(sheet, generated, report)

    # Shared -------------------------------------------------------------

    def _record(self, report: PassReport, family: str, rules: Iterable[FaceRule]) -> None:
        rules = list(rules)
        if rules:
            report.resolved.append(family)
            logger.debug("Generated %d face rule(s) for %s", len(rules), family)
        else:
            report.unresolved.append(family)
            logger.debug("No face rule generated for %s", family)

    def _finish(self, sheet: Stylesheet, generated: list[FaceRule], report: PassReport) -> PassReport:
        if generated:
            sheet.prepend(FACE_RULE, [rule.declarations() for rule in generated])
        report.rules = len(generated)
        if report.unresolved:
            self.logger.debug("Unresolved font families: %s", ", ".join(report.unresolved))
        if self.config.async_ is not None:
            report.loader = self.extract(sheet, self.config.async_)
        return report

    def extract(self, sheet: Stylesheet, target: Path) -> Path:
        """Move every face rule, nested ones included, into a loader script at ``target``."""
        records = [face_rule_record(sheet, rule) for rule in sheet.pop_at_rules(FACE_RULE)]
        loader = self.loader or LoaderEmitter(logger=self.logger)
        return loader.emit(records, target)


__all__ = ["FACE_RULE", "FONT_PROPERTIES", "FontMagician", "PassReport", "face_rule_record"]
