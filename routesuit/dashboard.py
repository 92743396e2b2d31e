"""RouteSuit API: FastAPI backend serving recommendations and config controls."""

import os
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from routesuit.config.loader import load_config
from routesuit.config.schema import AppConfig, validate_thresholds
from routesuit.ingest.staleness import forecast_age_hours, is_forecast_stale
from routesuit.recommend.orchestrator import analyze_commutes
from routesuit.reporting.formatters import recommendations_to_dict
from routesuit.storage import config_repo, forecast_repo, notification_repo
from routesuit.storage.database import open_db

DB_PATH = Path(os.environ.get("ROUTESUIT_DB", "data/routesuit.db"))
CONFIG_PATH = Path(os.environ.get("ROUTESUIT_CONFIG", "routesuit.yaml"))

app = FastAPI(title="RouteSuit", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_base_config() -> AppConfig:
    return load_config(CONFIG_PATH)


class ConfigUpdate(BaseModel):
    """Partial config update as dotted keys, e.g. {"morning.start_hour": 6}."""
    values: dict[str, Any]


# ── Data endpoints ──────────────────────────────────────────────


@app.get("/api/recommendations")
def get_recommendations(base: AppConfig = Depends(get_base_config)):
    """Analyze the latest stored forecast against the effective config."""
    with open_db(DB_PATH) as conn:
        config = config_repo.load_effective_config(conn, base)
        snapshot = forecast_repo.get_latest_forecast(conn)
    if snapshot is None:
        raise HTTPException(404, "No forecast stored yet")

    recs = analyze_commutes(snapshot.points, config)
    result = recommendations_to_dict(recs, config)
    result["fetched_at"] = snapshot.fetched_at
    result["forecast_age_hours"] = round(forecast_age_hours(snapshot.fetched_at), 2)
    result["stale"] = is_forecast_stale(
        snapshot.fetched_at, config.ops.stale_data_threshold_hours
    )
    return result


@app.get("/api/notifications")
def get_notifications(limit: int = 20):
    with open_db(DB_PATH) as conn:
        return notification_repo.get_recent_notifications(conn, limit)


# ── Config endpoints (read + write) ────────────────────────────


@app.get("/api/config")
def get_config(base: AppConfig = Depends(get_base_config)):
    with open_db(DB_PATH) as conn:
        config = config_repo.load_effective_config(conn, base)
        overrides = config_repo.get_overrides(conn)
    return {
        "config": config.model_dump(mode="json"),
        "overrides": overrides,
        "warnings": validate_thresholds(config),
    }


@app.post("/api/config")
def update_config(update: ConfigUpdate, base: AppConfig = Depends(get_base_config)):
    """Store the dotted keys as overrides; all are applied or none are."""
    if not update.values:
        return {"status": "no_change", "changed": []}

    with open_db(DB_PATH) as conn:
        try:
            config_repo.set_overrides(conn, base, update.values)
        except KeyError as e:
            raise HTTPException(404, f"Unknown config key: {e.args[0]}") from e
        except ValueError as e:
            raise HTTPException(400, f"Invalid config update: {e}") from e

    return {"status": "updated", "changed": list(update.values)}


@app.post("/api/config/reset")
def reset_config():
    with open_db(DB_PATH) as conn:
        removed = config_repo.clear_overrides(conn)
    return {"status": "reset", "removed": removed}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8777)
