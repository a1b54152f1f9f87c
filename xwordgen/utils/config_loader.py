"""Load :class:`GeneratorConfig` values from JSON files or mappings.

Two layouts are accepted. Flat files use the dataclass field names
(``{"grid_size": 15, "seed": 3}``). Sectioned files follow the preferences
document written by the web front end::

    {
      "grid": {"size": 15, "minSize": 5, "maxSize": 21},
      "blackSquares": {"percentage": 18, "avoidCorners": true},
      "words": {"minLength": 3, "targetCount": 30},
      "symmetry": {"enabled": true},
      "placement": {"maxAttempts": 50, "ensureConnectivity": true},
      "files": {"fallbackWords": ["DESK", "CHAIR"]}
    }

Unknown keys are ignored with a warning.
"""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from ..core.exceptions import ConfigError
from ..engine.generator import GeneratorConfig
from .logger import get_logger

LOGGER = get_logger(__name__)

SECTION_KEYS: Dict[str, Dict[str, str]] = {
    "grid": {"size": "grid_size", "minSize": "min_size", "maxSize": "max_size"},
    "blackSquares": {
        "percentage": "black_square_percentage",
        "minPercentage": "min_black_percentage",
        "maxPercentage": "max_black_percentage",
        "avoidCorners": "avoid_corners",
        "avoid2x2Blocks": "avoid_2x2_blocks",
    },
    "words": {
        "minLength": "min_length",
        "maxLength": "max_length",
        "targetCount": "target_count",
        "preferLonger": "prefer_longer",
    },
    "symmetry": {"enabled": "symmetry_enabled"},
    "placement": {
        "maxAttempts": "max_placement_attempts",
        "preferLongerWords": "prefer_longer",
        "ensureConnectivity": "ensure_connectivity",
        "preventIsolatedLetters": "prevent_isolated_letters",
    },
    "files": {"fallbackWords": "fallback_words"},
}


def flatten_config(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Map either layout onto :class:`GeneratorConfig` field names."""

    known = {f.name for f in fields(GeneratorConfig)}
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        if key in SECTION_KEYS and isinstance(value, Mapping):
            aliases = SECTION_KEYS[key]
            for sub_key, sub_value in value.items():
                if sub_key in aliases:
                    flat[aliases[sub_key]] = sub_value
                else:
                    LOGGER.warning("Ignoring unknown config key %s.%s", key, sub_key)
        elif key in known:
            flat[key] = value
        else:
            LOGGER.warning("Ignoring unknown config key %s", key)
    if "fallback_words" in flat:
        flat["fallback_words"] = tuple(str(word) for word in flat["fallback_words"])
    return flat


def config_from_mapping(data: Mapping[str, Any], **overrides: Any) -> GeneratorConfig:
    values = flatten_config(data)
    values.update({key: value for key, value in overrides.items() if value is not None})
    try:
        config = GeneratorConfig(**values)
    except TypeError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    config.validate()
    return config


def load_config(path: Union[str, Path], **overrides: Any) -> GeneratorConfig:
    """Read a JSON config file; ``overrides`` that are not ``None`` win."""

    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {source}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed config file {source}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config file {source} must contain a JSON object")
    LOGGER.info("Loaded configuration from %s", source)
    return config_from_mapping(data, **overrides)


__all__ = ["flatten_config", "config_from_mapping", "load_config"]
