"""YAML config loader with hashing and runtime get/set by dotted key."""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from routesuit.config.defaults import default_clothing_messages
from routesuit.config.migrations import migrate_preferences
from routesuit.config.schema import AppConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the defaults. Clothing messages not given
    in the file are taken from the defaults for the configured language.
    Legacy flat preference keys at the top level are migrated.
    """
    path = Path(path)
    if not path.exists():
        logger.info("Config file %s not found, using defaults", path)
        raw: dict[str, Any] = {}
    else:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    legacy = {k: v for k, v in raw.items() if k not in AppConfig.model_fields}
    if legacy:
        raw = {k: v for k, v in raw.items() if k in AppConfig.model_fields}
        language = str(raw.get("language", "en"))
        raw = apply_overrides(raw, migrate_preferences(legacy, language))

    return build_config(raw)


def build_config(raw: dict[str, Any]) -> AppConfig:
    """Validate a raw config dict merged over the defaults.

    Sections may be partial. Clothing messages come from the defaults for
    the configured language unless given.
    """
    data = _deep_merge(AppConfig().model_dump(mode="json"), raw)
    messages = default_clothing_messages(str(data.get("language", "en"))).model_dump()
    messages.update(raw.get("clothing_messages") or {})
    data["clothing_messages"] = messages
    return AppConfig(**data)


def _deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def config_hash(config: AppConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'precipitation.amount_threshold'.

    Keys address model fields only; lists such as ``notification.days`` are
    read and written whole, so ``notification.days.0`` is a KeyError.
    """
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if part in getattr(type(obj), "model_fields", {}):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def apply_overrides(data: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a raw config dict with dotted-key overrides applied."""
    data = json.loads(json.dumps(data))
    for dotted_key, value in overrides.items():
        parts = dotted_key.split(".")
        target = data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    return data


def set_config_value(config: AppConfig, dotted_key: str, value: Any) -> AppConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AppConfig instance.
    """
    return set_config_values(config, {dotted_key: value})


def set_config_values(config: AppConfig, values: dict[str, Any]) -> AppConfig:
    """Set several dotted keys at once; validated together as one config."""
    coerced = {
        key: coerce_value(get_config_value(config, key), value)
        for key, value in values.items()
    }
    data = json.loads(config.model_dump_json())
    return AppConfig(**apply_overrides(data, coerced))


def coerce_value(old_value: Any, value: Any) -> Any:
    """Coerce a string from the command line to the type of the current value."""
    if not isinstance(value, str):
        return value
    if isinstance(old_value, bool):
        return value.lower() in ("1", "true", "yes", "on")
    if isinstance(old_value, int):
        return int(value)
    if isinstance(old_value, float):
        return float(value)
    if isinstance(old_value, list):
        return [int(v) for v in value.split(",") if v.strip()]
    return value
