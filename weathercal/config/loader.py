"""YAML config loader with dotted-key get/set overrides."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from weathercal.config.defaults import DEFAULT_LOCATION
from weathercal.config.schema import AppConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. If no location is specified in the
    YAML, injects DEFAULT_LOCATION.
    """
    path = Path(path)
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    else:
        logger.info("Config %s not found, using defaults", path)
        raw = {}

    if not raw.get("location"):
        raw["location"] = DEFAULT_LOCATION.model_dump()

    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'calendar.domain'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, dict):
            obj = obj[part]
        elif part in getattr(type(obj), "model_fields", {}):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: AppConfig, dotted_key: str, value: Any) -> AppConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AppConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if not isinstance(target.get(part), dict):
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return AppConfig(**data)


def apply_overrides(config: AppConfig, overrides: list[str]) -> AppConfig:
    """Apply a list of 'key=value' overrides in order."""
    for kv in overrides:
        if "=" not in kv:
            raise ValueError(f"Override must use key=value format: {kv!r}")
        key, value = kv.split("=", 1)
        config = set_config_value(config, key.strip(), value.strip())
    return config
