from __future__ import annotations

import json
import re
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_CONFIG, ParserConfig
from ..text.normalize import patterns_for

"""Parser config loader.

Responsibilities:
- Load a YAML parser config (keyword vocabularies, thresholds)
- Validate it against config_schema.json (unknown keys rejected)
- Overlay the given keys on the built-in defaults
- Reject a script_range that does not compile as a character class
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "load_config",
    "config_from_mapping",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the packaged JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the config data
            violates the schema (unknown keys, wrong types, out-of-range ratios).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _coerce(key: str, value: Any) -> Any:
    # YAML gives lists / mappings; ParserConfig keeps hashable tuples
    if key == "section_header_pairs":
        return tuple((str(a), str(b)) for a, b in value)
    if key == "allograph_map":
        return tuple((str(k), str(v)) for k, v in value.items())
    if key == "roster_mark_labels":
        merged = dict(DEFAULT_CONFIG.roster_mark_labels)
        merged.update({k: tuple(v) for k, v in value.items()})
        return merged
    if key == "mark_display_names":
        return dict(value)
    if isinstance(value, list):
        return tuple(value)
    return value


def config_from_mapping(data: dict[str, Any], base: ParserConfig = DEFAULT_CONFIG) -> ParserConfig:
    """Validate ``data`` and overlay it on ``base``."""
    _validate_config_schema(data)
    overrides = {key: _coerce(key, value) for key, value in data.items()}
    cfg = replace(base, **overrides)
    if cfg.min_grade > cfg.max_grade:
        raise ConfigError(f"min_grade {cfg.min_grade} is above max_grade {cfg.max_grade}")
    try:
        patterns_for(cfg.script_range)
    except re.error as e:
        raise ConfigError(f"invalid script_range {cfg.script_range!r}: {e}") from e
    return cfg


def load_config(path: Path | None) -> ParserConfig:
    """Load a parser config; ``None`` means built-in defaults."""
    if path is None:
        return DEFAULT_CONFIG
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return config_from_mapping(data)
