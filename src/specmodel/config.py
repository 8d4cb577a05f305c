"""Settings for the resolver and the model parser, with precedence resolution.

Every setting has a sensible default, so most callers never touch this
module.  When tuning is needed, :func:`load_settings` merges several sources
into one :class:`Settings` instance.

Precedence (high to low):
    1. Explicit ``overrides`` passed by the caller
    2. Environment variables (``SPECMODEL_MAX_DEPTH`` and friends)
    3. Project config (``./specmodel.json``)
    4. Defaults
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from specmodel.exceptions import ConfigError

_PROJECT_CONFIG_FILENAME = "specmodel.json"

# Environment variable -> (section, field)
_ENV_VARS: dict[str, tuple[str, str]] = {
    "SPECMODEL_CACHE_MAX_MAPPING_SIZE": ("resolver", "cache_max_mapping_size"),
    "SPECMODEL_CACHE_MAX_SEQUENCE_SIZE": ("resolver", "cache_max_sequence_size"),
    "SPECMODEL_MAX_DEPTH": ("resolver", "max_depth"),
}


class ResolverConfig(BaseModel):
    """Limits applied by :func:`~specmodel.parser.resolver.resolve_refs`.

    The cache thresholds bound how much memory a single resolution can pin:
    an expanded ``$ref`` whose result is larger than the threshold is
    recomputed on every use instead of being stored.
    """

    model_config = ConfigDict(frozen=True)

    cache_max_mapping_size: int = Field(
        default=100, ge=0, description="Largest mapping (in keys) eligible for caching"
    )
    cache_max_sequence_size: int = Field(
        default=50, ge=0, description="Largest sequence (in items) eligible for caching"
    )
    max_depth: int = Field(
        default=10_000, ge=1, description="Maximum nesting depth walked before giving up"
    )


class ParserConfig(BaseModel):
    """Options for the model parser and the inline-schema extractor."""

    model_config = ConfigDict(frozen=True)

    json_media_type: str = Field(
        default="application/json",
        description="Media type whose schema the inline extractor inspects",
    )
    extra_reserved_words: list[str] = Field(
        default_factory=list,
        description="Additional names that get a trailing underscore",
    )


class Settings(BaseModel):
    """Top-level settings bundle."""

    model_config = ConfigDict(frozen=True)

    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local settings from ``specmodel.json``.

    Args:
        directory: Where to look.  Defaults to the current working directory.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _env_layer() -> dict[str, dict[str, Any]]:
    layer: dict[str, dict[str, Any]] = {}
    for var, (section, field) in _ENV_VARS.items():
        raw = os.environ.get(var)
        if not raw:
            continue
        try:
            value = int(raw)
        except ValueError as exc:
            raise ConfigError(f"{var} must be an integer, got {raw!r}") from exc
        layer.setdefault(section, {})[field] = value
    return layer


def _merge(base: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in layer.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(
    overrides: Optional[dict[str, Any]] = None,
    directory: Optional[Path] = None,
) -> Settings:
    """Resolve settings from every source in precedence order.

    Args:
        overrides: Nested dict with the same shape as :class:`Settings`
            (e.g. ``{"resolver": {"max_depth": 50}}``).  Highest precedence.
        directory: Directory searched for ``specmodel.json``.

    Returns:
        The merged, validated :class:`Settings`.

    Raises:
        ConfigError: If any layer holds an invalid value.
    """
    data: dict[str, Any] = {}
    project = load_project_config(directory)
    if project is not None:
        data = _merge(data, project)
    data = _merge(data, _env_layer())
    if overrides:
        data = _merge(data, overrides)

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
