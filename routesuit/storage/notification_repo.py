"""Repository for the notification log."""

import sqlite3


def log_notification(
    conn: sqlite3.Connection,
    local_date: str,
    status: str,
    title: str = "",
    body: str = "",
    config_hash: str | None = None,
    error_message: str | None = None,
) -> int:
    cursor = conn.execute(
        "INSERT INTO notifications "
        "(local_date, status, title, body, config_hash, error_message) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        (local_date, status, title, body, config_hash, error_message),
    )
    conn.commit()
    assert cursor.lastrowid is not None
    return cursor.lastrowid


def get_recent_notifications(conn: sqlite3.Connection, limit: int = 20) -> list[dict]:
    rows = conn.execute(
        "SELECT * FROM notifications ORDER BY id DESC LIMIT ?", (limit,)
    ).fetchall()
    return [dict(r) for r in rows]


def was_notified_on(conn: sqlite3.Connection, local_date: str) -> bool:
    """True if a notification was sent for the given local date."""
    row = conn.execute(
        "SELECT 1 FROM notifications WHERE local_date = ? AND status = 'sent' LIMIT 1",
        (local_date,),
    ).fetchone()
    return row is not None
