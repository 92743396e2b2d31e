"""Repository for fetched forecast snapshots."""

import dataclasses
import json
import sqlite3

from routesuit.models.forecast import ForecastPoint, ForecastSnapshot


def save_forecast(conn: sqlite3.Connection, snapshot: ForecastSnapshot) -> int:
    """Persist a forecast snapshot. Returns the row id."""
    cursor = conn.execute(
        "INSERT INTO forecast_snapshots "
        "(longitude, latitude, created_time, reference_time, fetched_at, points_json) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        (
            snapshot.longitude,
            snapshot.latitude,
            snapshot.created_time,
            snapshot.reference_time,
            snapshot.fetched_at,
            json.dumps([dataclasses.asdict(p) for p in snapshot.points]),
        ),
    )
    conn.commit()
    assert cursor.lastrowid is not None
    return cursor.lastrowid


def get_latest_forecast(conn: sqlite3.Connection) -> ForecastSnapshot | None:
    """Most recently fetched snapshot, any location."""
    row = conn.execute(
        "SELECT * FROM forecast_snapshots ORDER BY fetched_at DESC, id DESC LIMIT 1"
    ).fetchone()
    if row is None:
        return None
    return ForecastSnapshot(
        longitude=row["longitude"],
        latitude=row["latitude"],
        created_time=row["created_time"],
        reference_time=row["reference_time"],
        fetched_at=row["fetched_at"],
        points=[ForecastPoint(**p) for p in json.loads(row["points_json"])],
    )
