"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from routesuit.config.schema import AppConfig
from routesuit.storage.database import connect, run_migrations


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """A migrated temporary SQLite database."""
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "morning": {"start_hour": 6, "end_hour": 8},
        "precipitation": {"probability_threshold": 40.0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def smhi_forecast(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "smhi_forecast.json") as f:
        return json.load(f)
