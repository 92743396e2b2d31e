"""Initial schema: config overrides, snapshots, forecasts and notification log."""

import sqlite3

DDL = [
    # Per-field config overrides keyed by dotted path, values JSON-encoded
    """
    CREATE TABLE IF NOT EXISTS config_overrides (
        key TEXT PRIMARY KEY,
        value_json TEXT NOT NULL,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,

    # Effective config snapshots, one row per distinct hash
    """
    CREATE TABLE IF NOT EXISTS config_snapshots (
        config_hash TEXT PRIMARY KEY,
        config_json TEXT NOT NULL,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,

    # Fetched forecasts
    """
    CREATE TABLE IF NOT EXISTS forecast_snapshots (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        longitude REAL NOT NULL,
        latitude REAL NOT NULL,
        created_time TEXT NOT NULL,
        reference_time TEXT NOT NULL,
        fetched_at TEXT NOT NULL,
        points_json TEXT NOT NULL
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_forecast_snapshots_fetched "
        "ON forecast_snapshots(fetched_at)"
    ),

    # Notification runs
    """
    CREATE TABLE IF NOT EXISTS notifications (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        local_date TEXT NOT NULL,
        status TEXT NOT NULL,
        title TEXT NOT NULL DEFAULT '',
        body TEXT NOT NULL DEFAULT '',
        config_hash TEXT,
        error_message TEXT,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_notifications_date ON notifications(local_date)",
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
