"""Configuration models for the font magician pass.

MagicianConfig

`foundries` (`list[str]`)
: Foundries consulted in order. The first one declaring a family wins. Accepts
  a space separated string (``"custom google"``).

`aliases` (`dict[str, str]`)
: Family substitutions applied once before resolution (``body: Montserrat``).
  The generated rules keep the family name used in the stylesheet.

`variants` (`dict[str, dict[str, VariantOverride]]`)
: Per-family variant overrides keyed by ``"weight[ style[ stretch]]"``. Values
  use the ``[formats?, unicode_range?]`` list shape or an explicit mapping.

`custom` (`dict | str | None`)
: Inline catalog (or path to a JSON/YAML catalog) registered as the ``custom``
  foundry.

`formats` (`list[str]`)
: Default ``src`` formats in preference order.

`format_hints` (`dict[str, str]`)
: Extension -> ``format()`` hint mapping merged over the defaults.

`hosted` (`HostedDirectory | None`)
: Directory scanned for self-hosted fonts, optionally with the URL prefix used
  in ``src`` (``[path, prefix]``).

`async_` (`Path | None`)
: When set, generated face rules are extracted into a loader script written
  at this path instead of being inlined.

`display` (`str | None`)
: ``font-display`` value added to every generated rule.

`except_` (`list[str]`)
: Families treated as already declared.

`cache_file` (`Path`)
: JSON cache used by the asynchronous multi-source pass.

`remote_catalogs` (`list[str]`)
: URLs of JSON catalogs raced by the asynchronous pass.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from fontmagician.core.exceptions import ConfigurationError
from fontmagician.fonts.utils import normalize_family, split_tokens


DEFAULT_FOUNDRIES: tuple[str, ...] = ("custom", "hosted", "bootstrap", "google")
DEFAULT_FORMATS: tuple[str, ...] = ("local", "eot", "woff2", "woff")
DEFAULT_FORMAT_HINTS: Mapping[str, str] = {"otf": "opentype", "ttf": "truetype"}
DEFAULT_CACHE_FILE = Path("font-magician.cache.json")


class VariantOverride(BaseModel):
    """Formats and unicode range requested for one overridden variant."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    formats: tuple[str, ...] | None = None
    unicode_range: str | None = None

    @classmethod
    def coerce(cls, value: Any) -> VariantOverride:
        """Build an override from the ``[formats?, unicode_range?]`` shape."""
        if isinstance(value, VariantOverride):
            return value
        if value is None:
            return cls()
        if isinstance(value, str):
            value = [value]
        if isinstance(value, Mapping):
            formats = value.get("formats")
            unicode_range = value.get("unicode_range", value.get("unicodeRange"))
        elif isinstance(value, Sequence):
            formats = value[0] if len(value) > 0 else None
            unicode_range = value[1] if len(value) > 1 else None
        else:
            raise ConfigurationError(f"Unsupported variant override: {value!r}")
        tokens = tuple(token.lower() for token in split_tokens(formats))
        cleaned_range = str(unicode_range).strip() if unicode_range else ""
        return cls(formats=tokens or None, unicode_range=cleaned_range or None)


class HostedDirectory(BaseModel):
    """Directory of self-hosted font files and the URL prefix serving them."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Path
    url_prefix: str | None = None

    @property
    def prefix(self) -> str:
        return (self.url_prefix or self.path.as_posix()).rstrip("/")


class MagicianConfig(BaseModel):
    """Normalised plugin options."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    foundries: tuple[str, ...] = DEFAULT_FOUNDRIES
    aliases: dict[str, str] = Field(default_factory=dict)
    variants: dict[str, dict[str, VariantOverride]] = Field(default_factory=dict)
    custom: dict[str, Any] | Path | None = None
    formats: tuple[str, ...] = DEFAULT_FORMATS
    format_hints: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_FORMAT_HINTS), alias="formatHints"
    )
    hosted: HostedDirectory | None = None
    async_: Path | None = Field(default=None, alias="async")
    display: str | None = None
    except_: tuple[str, ...] = Field(default=(), alias="except")
    cache_file: Path = Field(default=DEFAULT_CACHE_FILE, alias="cache")
    remote_catalogs: tuple[str, ...] = Field(default=(), alias="remoteCatalogs")

    @field_validator("foundries", "formats", mode="before")
    @classmethod
    def _split_words(cls, value: Any) -> tuple[str, ...]:
        return tuple(token.lower() for token in split_tokens(value))

    @field_validator("except_", mode="before")
    @classmethod
    def _normalise_exceptions(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        return tuple(normalize_family(str(item)) for item in value)

    @field_validator("aliases", mode="before")
    @classmethod
    def _normalise_aliases(cls, value: Any) -> dict[str, str]:
        if not value:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("aliases must be a mapping of family names")
        return {normalize_family(str(k)): normalize_family(str(v)) for k, v in value.items()}

    @field_validator("variants", mode="before")
    @classmethod
    def _normalise_variants(cls, value: Any) -> dict[str, dict[str, VariantOverride]]:
        if not value:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("variants must be a mapping of family names")
        normalised: dict[str, dict[str, VariantOverride]] = {}
        for family, overrides in value.items():
            if not isinstance(overrides, Mapping):
                raise ValueError(f"variants for '{family}' must be a mapping")
            try:
                normalised[normalize_family(str(family))] = {
                    " ".join(str(key).split()): VariantOverride.coerce(entry)
                    for key, entry in overrides.items()
                }
            except ConfigurationError as exc:
                raise ValueError(str(exc)) from exc
        return normalised

    @field_validator("format_hints", mode="before")
    @classmethod
    def _merge_hints(cls, value: Any) -> dict[str, str]:
        hints = dict(DEFAULT_FORMAT_HINTS)
        if value:
            if not isinstance(value, Mapping):
                raise ValueError("formatHints must map extensions to hint strings")
            hints.update({str(k).lower(): str(v) for k, v in value.items()})
        return hints

    @field_validator("hosted", mode="before")
    @classmethod
    def _coerce_hosted(cls, value: Any) -> Any:
        if not value:
            return None
        if isinstance(value, (str, Path)):
            return {"path": value}
        if isinstance(value, Sequence) and not isinstance(value, Mapping):
            items = list(value)
            if not items or len(items) > 2:
                raise ValueError("hosted must be a path or a [path, url_prefix] pair")
            return {"path": items[0], "url_prefix": items[1] if len(items) > 1 else None}
        return value

    @field_validator("async_", "display", mode="before")
    @classmethod
    def _falsy_to_none(cls, value: Any) -> Any:
        return value or None

    @field_validator("remote_catalogs", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> tuple[str, ...]:
        return tuple(split_tokens(value))

    def resolve_alias(self, family: str) -> str:
        """Apply the alias table once (no chaining)."""
        key = normalize_family(family)
        return self.aliases.get(key, key)

    def overrides_for(self, family: str) -> dict[str, VariantOverride] | None:
        return self.variants.get(normalize_family(family))


def build_config(options: Mapping[str, Any] | MagicianConfig | None = None, **extra: Any) -> MagicianConfig:
    """Validate plugin options, raising :class:`ConfigurationError` on failure."""
    if isinstance(options, MagicianConfig) and not extra:
        return options
    payload: dict[str, Any] = {}
    if isinstance(options, MagicianConfig):
        payload.update(options.model_dump(by_alias=True, exclude_unset=True))
    elif options:
        payload.update(options)
    payload.update({key: value for key, value in extra.items() if value is not None})
    try:
        return MagicianConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid font magician options: {exc}") from exc


def load_config(path: Path, **overrides: Any) -> MagicianConfig:
    """Read a YAML (or JSON) options file."""
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read configuration file '{path}'.") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Configuration file '{path}' must contain a mapping.")
    return build_config(payload, **overrides)


__all__ = [
    "DEFAULT_CACHE_FILE",
    "DEFAULT_FORMATS",
    "DEFAULT_FORMAT_HINTS",
    "DEFAULT_FOUNDRIES",
    "HostedDirectory",
    "MagicianConfig",
    "VariantOverride",
    "build_config",
    "load_config",
]
