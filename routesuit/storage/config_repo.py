"""Configuration store: per-field overrides on top of the file config, plus snapshots."""

import json
import logging
import sqlite3
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from routesuit.config.defaults import default_clothing_messages
from routesuit.config.loader import (
    apply_overrides,
    config_hash,
    get_config_value,
    set_config_values,
)
from routesuit.config.migrations import migrate_preferences
from routesuit.config.schema import AppConfig

logger = logging.getLogger(__name__)


def get_overrides(conn: sqlite3.Connection) -> dict[str, Any]:
    rows = conn.execute(
        "SELECT key, value_json FROM config_overrides ORDER BY key"
    ).fetchall()
    return {row["key"]: json.loads(row["value_json"]) for row in rows}


def load_effective_config(conn: sqlite3.Connection, base: AppConfig) -> AppConfig:
    """Apply the stored overrides to ``base`` and validate the result.

    If the language is overridden and the base still uses the default
    clothing messages, the new language's defaults are used instead.
    """
    overrides = get_overrides(conn)
    if not overrides:
        return base

    data = base.model_dump(mode="json")
    language = overrides.get("language")
    if language and base.clothing_messages == default_clothing_messages(base.language):
        data["clothing_messages"] = default_clothing_messages(language).model_dump()
    return AppConfig(**apply_overrides(data, overrides))


def _store(conn: sqlite3.Connection, key: str, value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    conn.execute(
        "INSERT INTO config_overrides (key, value_json, updated_at) "
        "VALUES (?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(key) DO UPDATE SET value_json = excluded.value_json, "
        "updated_at = CURRENT_TIMESTAMP",
        (key, json.dumps(value)),
    )


def set_override(
    conn: sqlite3.Connection, base: AppConfig, dotted_key: str, value: Any
) -> AppConfig:
    """Validate and persist one override. Returns the new effective config."""
    return set_overrides(conn, base, {dotted_key: value})


def set_overrides(
    conn: sqlite3.Connection, base: AppConfig, values: Mapping[str, Any]
) -> AppConfig:
    """Validate a set of overrides together and persist them in one commit.

    Raises KeyError for unknown keys and ValueError (including
    pydantic.ValidationError) for invalid values; nothing is stored then.
    Returns the new effective config.
    """
    current = load_effective_config(conn, base)
    updated = set_config_values(current, dict(values))
    for key in values:
        _store(conn, key, get_config_value(updated, key))
    conn.commit()
    logger.info("Config overrides set: %s", ", ".join(values))
    return load_effective_config(conn, base)


def delete_override(conn: sqlite3.Connection, dotted_key: str) -> bool:
    cursor = conn.execute("DELETE FROM config_overrides WHERE key = ?", (dotted_key,))
    conn.commit()
    return cursor.rowcount > 0


def clear_overrides(conn: sqlite3.Connection) -> int:
    """Reset to defaults by dropping every override. Returns the number removed."""
    cursor = conn.execute("DELETE FROM config_overrides")
    conn.commit()
    logger.info("Cleared %d config overrides", cursor.rowcount)
    return cursor.rowcount


def import_preferences(
    conn: sqlite3.Connection, base: AppConfig, prefs: Mapping[str, Any]
) -> AppConfig:
    """Migrate a legacy flat preference mapping and store it as overrides.

    The whole set is validated before anything is written.
    """
    current = load_effective_config(conn, base)
    language = str(prefs.get("app_language", current.language))
    if language == "auto":
        language = current.language
    overrides = migrate_preferences(prefs, language)

    data = apply_overrides(current.model_dump(mode="json"), overrides)
    updated = AppConfig(**data)
    for key in overrides:
        _store(conn, key, get_config_value(updated, key))
    conn.commit()
    logger.info("Imported %d legacy preferences", len(overrides))
    return updated


def snapshot_config(conn: sqlite3.Connection, config: AppConfig) -> str:
    """Persist a config snapshot if it changed. Returns the hash."""
    h = config_hash(config)
    conn.execute(
        "INSERT OR IGNORE INTO config_snapshots (config_hash, config_json) VALUES (?, ?)",
        (h, config.model_dump_json()),
    )
    conn.commit()
    return h


def get_config_snapshot(conn: sqlite3.Connection, h: str) -> dict | None:
    row = conn.execute(
        "SELECT * FROM config_snapshots WHERE config_hash = ?", (h,)
    ).fetchone()
    if row is None:
        return None
    return dict(row)
