from __future__ import annotations

from pathlib import Path

import pytest

from fontmagician.core.config import (
    DEFAULT_CACHE_FILE,
    DEFAULT_FORMATS,
    DEFAULT_FOUNDRIES,
    MagicianConfig,
    VariantOverride,
    build_config,
    load_config,
)
from fontmagician.core.exceptions import ConfigurationError


def test_defaults() -> None:
    config = build_config()
    assert config.foundries == DEFAULT_FOUNDRIES
    assert config.formats == DEFAULT_FORMATS
    assert config.format_hints == {"otf": "opentype", "ttf": "truetype"}
    assert config.hosted is None
    assert config.async_ is None
    assert config.display is None
    assert config.except_ == ()
    assert config.cache_file == DEFAULT_CACHE_FILE


def test_space_separated_strings_become_lists() -> None:
    config = build_config({"foundries": "google  bootstrap", "formats": "WOFF2 woff"})
    assert config.foundries == ("google", "bootstrap")
    assert config.formats == ("woff2", "woff")


def test_reserved_names_use_aliases() -> None:
    config = build_config(
        {
            "async": "dist/fonts.js",
            "except": ['"Alice"', "Open  Sans"],
            "formatHints": {"woff2": "woff-2"},
            "remoteCatalogs": "https://a.example/fonts.json",
        }
    )
    assert config.async_ == Path("dist/fonts.js")
    assert config.except_ == ("Alice", "Open Sans")
    assert config.format_hints == {"otf": "opentype", "ttf": "truetype", "woff2": "woff-2"}
    assert config.remote_catalogs == ("https://a.example/fonts.json",)


def test_falsy_options_are_disabled() -> None:
    config = build_config({"async": False, "hosted": "", "display": ""})
    assert config.async_ is None
    assert config.hosted is None
    assert config.display is None


def test_hosted_accepts_path_and_prefix_pair() -> None:
    config = build_config({"hosted": ["./fonts", "/static/fonts/"]})
    assert config.hosted is not None
    assert config.hosted.path == Path("./fonts")
    assert config.hosted.prefix == "/static/fonts"

    assert build_config({"hosted": "./fonts"}).hosted.prefix == "fonts"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (["woff"], VariantOverride(formats=("woff",))),
        (["eot woff"], VariantOverride(formats=("eot", "woff"))),
        ([], VariantOverride()),
        (["", "u+0100-024f"], VariantOverride(unicode_range="u+0100-024f")),
        ("woff2", VariantOverride(formats=("woff2",))),
        ({"formats": ["woff"], "unicodeRange": "U+0000"}, VariantOverride(formats=("woff",), unicode_range="U+0000")),
        (None, VariantOverride()),
    ],
)
def test_variant_override_shapes(raw, expected: VariantOverride) -> None:
    assert VariantOverride.coerce(raw) == expected


def test_variants_are_normalised_once() -> None:
    config = build_config({"variants": {'"Open Sans"': {"400  italic": ["eot woff"]}}})
    overrides = config.overrides_for("Open Sans")
    assert overrides == {"400 italic": VariantOverride(formats=("eot", "woff"))}


def test_aliases_are_normalised_and_not_chained() -> None:
    config = build_config({"aliases": {"body": '"Montserrat"', "Montserrat": "Alice"}})
    assert config.resolve_alias("body") == "Montserrat"
    assert config.resolve_alias("Alice") == "Alice"


def test_unknown_options_are_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_config({"foundry": "google"})
    with pytest.raises(ConfigurationError):
        build_config({"variants": {"Alice": {"400": 12}}})


def test_build_config_merges_overrides_over_existing_config() -> None:
    base = build_config({"display": "swap", "formats": "woff"})
    merged = build_config(base, foundries=["google"], display=None)
    assert merged.display == "swap"
    assert merged.formats == ("woff",)
    assert merged.foundries == ("google",)
    assert build_config(base) is base
    assert isinstance(merged, MagicianConfig)


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "fonts.yml"
    path.write_text(
        "foundries: custom google\n"
        "display: swap\n"
        "variants:\n"
        "  Open Sans:\n"
        "    '300': [woff]\n",
        encoding="utf-8",
    )
    config = load_config(path, display="optional")
    assert config.foundries == ("custom", "google")
    assert config.display == "optional"
    assert config.overrides_for("Open Sans") == {"300": VariantOverride(formats=("woff",))}


def test_load_config_rejects_non_mappings(tmp_path: Path) -> None:
    path = tmp_path / "fonts.yml"
    path.write_text("- google\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yml")


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "fonts.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path).foundries == DEFAULT_FOUNDRIES
