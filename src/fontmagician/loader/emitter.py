"""Write extracted face rules as a client-side loader script."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template

from fontmagician.fonts.logging import FontPipelineLogger


TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
LOADER_TEMPLATE = "fontface.js.jinja"

_RECORD_KEYS = ("family", "weight", "style", "src")


class LoaderEmitter:
    """Render face records through the CSS Font Loading API template."""

    def __init__(
        self,
        template_dir: Path = TEMPLATE_DIR,
        *,
        logger: FontPipelineLogger | None = None,
    ) -> None:
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.logger = logger or FontPipelineLogger()
        self._template: Template | None = None

    @property
    def template(self) -> Template:
        if self._template is None:
            self._template = self.env.get_template(LOADER_TEMPLATE)
        return self._template

    def render(self, records: Sequence[Mapping[str, str]]) -> str:
        cleaned = [{key: str(record.get(key, "")) for key in _RECORD_KEYS} for record in records]
        return self.template.render(records=cleaned)

    def emit(self, records: Sequence[Mapping[str, str]], target: Path) -> Path:
        """Write the loader for ``records`` to ``target`` and return the path."""
        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.render(records), encoding="utf-8")
        self.logger.debug("Wrote %d font face(s) to %s", len(records), target)
        return target


__all__ = ["LOADER_TEMPLATE", "LoaderEmitter", "TEMPLATE_DIR"]
