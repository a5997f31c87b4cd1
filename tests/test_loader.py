from __future__ import annotations

import json
from pathlib import Path
import re

from fontmagician.loader import LoaderEmitter


RECORDS = [
    {
        "family": "Open Sans",
        "weight": "300",
        "style": "normal",
        "src": 'url(//fonts.example/os.woff2) format("woff2")',
    },
    {"family": "Alice", "weight": "400", "style": "italic", "src": "local(Alice)"},
]


def _embedded_faces(script: str) -> list[dict[str, str]]:
    match = re.search(r"var faces = (\[.*?\]);", script, re.DOTALL)
    assert match is not None
    return json.loads(match.group(1))


def test_render_embeds_records_in_order() -> None:
    script = LoaderEmitter().render(RECORDS)
    assert "document.fonts.add(font)" in script
    assert "new FontFace(face.family, face.src" in script
    assert _embedded_faces(script) == RECORDS


def test_render_ignores_unknown_keys_and_fills_missing_ones() -> None:
    script = LoaderEmitter().render([{"family": "Alice", "extra": "x"}])
    assert _embedded_faces(script) == [{"family": "Alice", "weight": "", "style": "", "src": ""}]


def test_emit_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "assets" / "js" / "fonts.js"
    written = LoaderEmitter().emit(RECORDS, target)
    assert written == target
    assert target.exists()
    assert "Registers 2 font face(s)" in target.read_text(encoding="utf-8")


def test_render_escapes_markup() -> None:
    script = LoaderEmitter().render([{"family": "</script>", "src": "local(x)"}])
    assert "</script>" not in script
