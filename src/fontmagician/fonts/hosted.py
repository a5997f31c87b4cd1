"""Build a catalog from a directory of self-hosted font files."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import re

from fontTools.ttLib import TTFont

from fontmagician.fonts.catalog import FontCatalog, FontDescriptor, SourceSet


logger = logging.getLogger(__name__)

FONT_EXTENSIONS = ("woff2", "woff", "ttf", "otf", "eot", "svg")
_PARSEABLE = {"woff2", "woff", "ttf", "otf"}

_WEIGHT_NAMES = {
    "thin": "100",
    "hairline": "100",
    "extralight": "200",
    "ultralight": "200",
    "light": "300",
    "regular": "400",
    "normal": "400",
    "book": "400",
    "roman": "400",
    "medium": "500",
    "semibold": "600",
    "demibold": "600",
    "bold": "700",
    "extrabold": "800",
    "ultrabold": "800",
    "black": "900",
    "heavy": "900",
}
_CAMEL = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True, slots=True)
class FaceInfo:
    """Family, variant and local names read from one font file."""

    family: str
    style: str
    weight: str
    local: tuple[str, ...] = ()


def _weight_from_label(label: str) -> str:
    compact = label.casefold().replace(" ", "").replace("-", "").replace("italic", "")
    compact = compact.replace("oblique", "")
    for name in sorted(_WEIGHT_NAMES, key=len, reverse=True):
        if name in compact:
            return _WEIGHT_NAMES[name]
    return "400"


def _style_from_label(label: str) -> str:
    lowered = label.casefold()
    return "italic" if "italic" in lowered or "oblique" in lowered else "normal"


def guess_face_from_filename(path: Path) -> FaceInfo:
    """Infer ``Family-BoldItalic.woff`` style names from the file name."""
    stem = path.stem
    family_part, _, style_part = stem.rpartition("-")
    if not family_part:
        family_part, style_part = stem, "Regular"
    family = " ".join(_CAMEL.sub(" ", family_part.replace("_", " ")).split())
    return FaceInfo(
        family=family,
        style=_style_from_label(style_part),
        weight=_weight_from_label(style_part),
        local=(stem,),
    )


def read_face_info(path: Path) -> FaceInfo | None:
    """Read naming and weight metadata with fontTools."""
    try:
        with TTFont(path, lazy=True) as font:
            names = font["name"]
            family = names.getDebugName(16) or names.getDebugName(1)
            if not family:
                return None
            subfamily = names.getDebugName(17) or names.getDebugName(2) or "Regular"
            full_name = names.getDebugName(4)
            postscript = names.getDebugName(6)
            weight = _weight_from_label(subfamily)
            italic = _style_from_label(subfamily) == "italic"
            if "OS/2" in font:
                os2 = font["OS/2"]
                weight = str(os2.usWeightClass or weight)
                italic = italic or bool(os2.fsSelection & 0x01)
    except Exception as exc:  # fontTools raises a wide range of errors on bad files
        logger.debug("Unable to read font metadata from %s: %s", path, exc)
        return None
    local = tuple(name for name in (full_name, postscript) if name)
    return FaceInfo(
        family=family.strip(),
        style="italic" if italic else "normal",
        weight=weight,
        local=local,
    )


def scan_hosted_directory(path: Path, *, url_prefix: str | None = None) -> FontCatalog:
    """Scan ``path`` recursively and return a ``hosted`` catalog.

    Files sharing a family, style and weight are merged into one source set,
    one URL per extension. URLs are built from ``url_prefix`` (the directory
    itself by default) and the path relative to the directory.
    """
    root = Path(path)
    if not root.is_dir():
        logger.debug("Hosted font directory %s does not exist", root)
        return FontCatalog(name="hosted")
    prefix = (url_prefix if url_prefix is not None else root.as_posix()).rstrip("/")

    matrix: dict[str, dict[str, dict[str, dict]]] = {}
    for file_path in sorted(root.rglob("*")):
        extension = file_path.suffix.lower().lstrip(".")
        if extension not in FONT_EXTENSIONS or not file_path.is_file():
            continue
        info = read_face_info(file_path) if extension in _PARSEABLE else None
        if info is None:
            info = guess_face_from_filename(file_path)
        bucket = (
            matrix.setdefault(info.family, {})
            .setdefault(info.style, {})
            .setdefault(info.weight, {"local": [], "url": {}})
        )
        bucket["local"].extend(info.local)
        relative = file_path.relative_to(root).as_posix()
        bucket["url"].setdefault(extension, f"{prefix}/{relative}" if prefix else relative)

    families = {
        family: FontDescriptor(
            variants={
                style: {
                    weight: SourceSet(local=tuple(entry["local"]), url=entry["url"])
                    for weight, entry in weights.items()
                }
                for style, weights in styles.items()
            }
        )
        for family, styles in matrix.items()
    }
    logger.debug("Hosted directory %s provides %d families", root, len(families))
    return FontCatalog(name="hosted", families=families)


__all__ = [
    "FONT_EXTENSIONS",
    "FaceInfo",
    "guess_face_from_filename",
    "read_face_info",
    "scan_hosted_directory",
]
