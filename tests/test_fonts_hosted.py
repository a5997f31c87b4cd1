from __future__ import annotations

from pathlib import Path

import pytest

from fontmagician.fonts.hosted import guess_face_from_filename, scan_hosted_directory


@pytest.mark.parametrize(
    ("filename", "family", "style", "weight"),
    [
        ("SourceSansPro-Regular.woff", "Source Sans Pro", "normal", "400"),
        ("Family-BoldItalic.woff2", "Family", "italic", "700"),
        ("Open_Sans-Light.ttf", "Open Sans", "normal", "300"),
        ("Lato-SemiBoldItalic.otf", "Lato", "italic", "600"),
        ("Inter.woff2", "Inter", "normal", "400"),
    ],
)
def test_guess_face_from_filename(filename: str, family: str, style: str, weight: str) -> None:
    info = guess_face_from_filename(Path(filename))
    assert (info.family, info.style, info.weight) == (family, style, weight)
    assert info.local == (Path(filename).stem,)


def test_scan_merges_formats_of_the_same_face(tmp_path: Path) -> None:
    # Empty files cannot be parsed by fontTools, so names come from the file name.
    (tmp_path / "SourceSansPro-Regular.woff").write_bytes(b"")
    (tmp_path / "SourceSansPro-Regular.woff2").write_bytes(b"")
    (tmp_path / "SourceSansPro-BoldItalic.woff").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("not a font", encoding="utf-8")

    catalog = scan_hosted_directory(tmp_path, url_prefix="/fonts/")
    assert catalog.name == "hosted"
    assert list(catalog) == ["Source Sans Pro"]

    descriptor = catalog.get("Source Sans Pro")
    regular = descriptor.get("normal", "400")
    assert regular.local == ("SourceSansPro-Regular",)
    assert dict(regular.url) == {
        "woff": "/fonts/SourceSansPro-Regular.woff",
        "woff2": "/fonts/SourceSansPro-Regular.woff2",
    }
    assert descriptor.get("italic", "700").url["woff"] == "/fonts/SourceSansPro-BoldItalic.woff"


def test_scan_uses_directory_as_default_prefix(tmp_path: Path) -> None:
    nested = tmp_path / "brand"
    nested.mkdir()
    (nested / "Brand-Regular.eot").write_bytes(b"")
    catalog = scan_hosted_directory(tmp_path)
    sources = catalog.get("Brand").get("normal", "400")
    assert sources.url["eot"] == f"{tmp_path.as_posix()}/brand/Brand-Regular.eot"


def test_scan_missing_directory_is_empty(tmp_path: Path) -> None:
    assert len(scan_hosted_directory(tmp_path / "missing")) == 0
