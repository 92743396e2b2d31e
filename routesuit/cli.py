"""CLI entry point for commute weather recommendations."""

import argparse
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from routesuit.config.loader import get_config_value, load_config
from routesuit.config.schema import AppConfig, validate_thresholds
from routesuit.ingest.forecast_fetcher import ForecastFetcher
from routesuit.ingest.staleness import forecast_age_hours, is_forecast_stale
from routesuit.models.notification import NotifyStatus
from routesuit.pipeline.notify_pipeline import NotifyPipeline, client_from_config
from routesuit.recommend.orchestrator import analyze_commutes
from routesuit.reporting.formatters import (
    format_recommendations_json,
    format_recommendations_text,
)
from routesuit.storage import config_repo, forecast_repo, notification_repo
from routesuit.storage.database import open_db

DEFAULT_CONFIG = "routesuit.yaml"
DEFAULT_DB = "data/routesuit.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="routesuit",
        description="Commute clothing and rain gear recommendations",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config YAML path")
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # recommend
    rec_p = sub.add_parser("recommend", help="Show recommendations for both commutes")
    rec_p.add_argument("--json", action="store_true", help="Output JSON")
    rec_p.add_argument(
        "--cached", action="store_true", help="Use the last stored forecast"
    )

    # notify
    notify_p = sub.add_parser("notify", help="Run one notification cycle")
    notify_p.add_argument(
        "--force", action="store_true", help="Ignore notification days and duplicates"
    )

    # history
    hist_p = sub.add_parser("history", help="Show recent notifications")
    hist_p.add_argument("--limit", type=int, default=10)

    # config show / set / unset / reset / import-prefs / check
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display effective config")
    set_p = config_sub.add_parser("set", help="Override a config value")
    set_p.add_argument("keyvalue", help="key=value to set")
    unset_p = config_sub.add_parser("unset", help="Remove an override")
    unset_p.add_argument("key")
    config_sub.add_parser("reset", help="Remove all overrides")
    import_p = config_sub.add_parser(
        "import-prefs", help="Import legacy preferences from a JSON file"
    )
    import_p.add_argument("path")
    config_sub.add_parser("check", help="Check threshold and window ordering")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        base = load_config(args.config)
    except ValidationError as e:
        print(f"Error: invalid config {args.config}: {e}")
        return 1

    if args.command == "recommend":
        return _cmd_recommend(base, args)
    elif args.command == "notify":
        return _cmd_notify(base, args)
    elif args.command == "history":
        return _cmd_history(args)
    elif args.command == "config":
        return _cmd_config(base, args)
    else:
        parser.print_help()
        return 1


def _effective_config(base: AppConfig, db_path: str) -> AppConfig:
    with open_db(db_path) as conn:
        return config_repo.load_effective_config(conn, base)


def _cmd_recommend(base: AppConfig, args) -> int:
    with open_db(args.db) as conn:
        config = config_repo.load_effective_config(conn, base)
        if args.cached:
            snapshot = forecast_repo.get_latest_forecast(conn)
            if snapshot is None:
                print("Error: no stored forecast, run without --cached first")
                return 1
            max_age = config.ops.stale_data_threshold_hours
            if is_forecast_stale(snapshot.fetched_at, max_age):
                age = forecast_age_hours(snapshot.fetched_at)
                print(f"WARNING: forecast is {age:.1f}h old, data may be stale")
        else:
            snapshot = ForecastFetcher(client_from_config(config)).fetch(config.location)
            if snapshot is None:
                print("Error: failed to fetch forecast")
                return 1
            forecast_repo.save_forecast(conn, snapshot)

    recs = analyze_commutes(snapshot.points, config)
    if args.json:
        print(format_recommendations_json(recs, config))
    else:
        print(format_recommendations_text(recs, config))
    return 0


def _cmd_notify(base: AppConfig, args) -> int:
    config = _effective_config(base, args.db)
    result = NotifyPipeline(config, args.db).run(force=args.force)
    if result.status == NotifyStatus.SENT:
        print(result.title)
        print(result.body)
        return 0
    print(f"Notification {result.status}: {result.reason}")
    return 1 if result.status == NotifyStatus.FAILED else 0


def _cmd_history(args) -> int:
    with open_db(args.db) as conn:
        rows = notification_repo.get_recent_notifications(conn, args.limit)
    if not rows:
        print("No notifications yet")
        return 0
    for r in rows:
        detail = r["title"] or r["error_message"] or ""
        print(f"{r['local_date']} {r['status']:<8} {detail}")
    return 0


def _cmd_config(base: AppConfig, args) -> int:
    with open_db(args.db) as conn:
        if args.config_command == "show":
            config = config_repo.load_effective_config(conn, base)
            print(config.model_dump_json(indent=2))
            return 0
        elif args.config_command == "set":
            kv = args.keyvalue
            if "=" not in kv:
                print("Error: use key=value format")
                return 1
            key, value = (s.strip() for s in kv.split("=", 1))
            try:
                config = config_repo.set_override(conn, base, key, value)
            except (KeyError, ValueError, ValidationError) as e:
                print(f"Error: {e}")
                return 1
            print(f"Set {key} = {get_config_value(config, key)}")
            for problem in validate_thresholds(config):
                print(f"WARNING: {problem}")
            return 0
        elif args.config_command == "unset":
            if config_repo.delete_override(conn, args.key):
                print(f"Removed override {args.key}")
            else:
                print(f"No override for {args.key}")
            return 0
        elif args.config_command == "reset":
            n = config_repo.clear_overrides(conn)
            print(f"Reset to defaults ({n} overrides removed)")
            return 0
        elif args.config_command == "import-prefs":
            try:
                prefs = json.loads(Path(args.path).read_text())
                config_repo.import_preferences(conn, base, prefs)
            except (OSError, json.JSONDecodeError, ValueError, ValidationError) as e:
                print(f"Error: {e}")
                return 1
            print(f"Imported preferences from {args.path}")
            return 0
        elif args.config_command == "check":
            problems = validate_thresholds(config_repo.load_effective_config(conn, base))
            for problem in problems:
                print(f"WARNING: {problem}")
            if not problems:
                print("Config OK")
            return 1 if problems else 0
        else:
            print("Use: config show | set key=value | unset key | reset | import-prefs FILE | check")
            return 1
