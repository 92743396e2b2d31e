"""Migration of legacy flat preference keys to dotted config keys.

Earlier app versions stored settings as flat key/value preferences and went
through two naming schemes for the temperature breakpoints:

    old: temp_very_light > temp_light > temp_moderate > temp_warm > temp_very_warm > temp_cold
    new: temp_hot > temp_warm > temp_mild > temp_cool > temp_cold > temp_very_cold

``temp_warm`` and ``temp_cold`` exist in both schemes with different
meanings (old temp_warm is the 5 °C breakpoint, new temp_warm the 15 °C one),
so the scheme is decided per preference set before mapping.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

_SIMPLE_KEYS: dict[str, str] = {
    "longitude": "location.longitude",
    "latitude": "location.latitude",
    "morning_commute_start": "morning.start_hour",
    "morning_commute_end": "morning.end_hour",
    "evening_commute_start": "evening.start_hour",
    "evening_commute_end": "evening.end_hour",
    "precip_prob_threshold": "precipitation.probability_threshold",
    "precip_amount_threshold": "precipitation.amount_threshold",
}

_OLD_SCHEME: dict[str, str] = {
    "temp_very_light": "temperature.hot",
    "temp_light": "temperature.warm",
    "temp_moderate": "temperature.mild",
    "temp_warm": "temperature.cool",
    "temp_very_warm": "temperature.cold",
    "temp_cold": "temperature.very_cold",
}

_NEW_SCHEME: dict[str, str] = {
    "temp_hot": "temperature.hot",
    "temp_warm": "temperature.warm",
    "temp_mild": "temperature.mild",
    "temp_cool": "temperature.cool",
    "temp_cold": "temperature.cold",
    "temp_very_cold": "temperature.very_cold",
}

_OLD_ONLY = set(_OLD_SCHEME) - set(_NEW_SCHEME)
_NEW_ONLY = set(_NEW_SCHEME) - set(_OLD_SCHEME)

_CLOTHING_KEY = re.compile(r"^clothing_msg_([1-7])(?:_([a-z]{2}))?$")


def is_old_threshold_scheme(prefs: Mapping[str, Any]) -> bool:
    keys = set(prefs)
    return bool(keys & _OLD_ONLY) and not keys & _NEW_ONLY


def calendar_to_iso_weekday(day: int) -> int:
    """Convert a Sunday=1..Saturday=7 weekday to ISO Monday=1..Sunday=7."""
    if not 1 <= day <= 7:
        raise ValueError(f"weekday out of range: {day}")
    return 7 if day == 1 else day - 1


def _parse_days(value: Any) -> list[int]:
    if isinstance(value, str):
        items: Iterable[Any] = [p for p in value.split(",") if p.strip()]
    else:
        items = value
    return sorted({calendar_to_iso_weekday(int(d)) for d in items})


def migrate_preferences(prefs: Mapping[str, Any], language: str = "en") -> dict[str, Any]:
    """Convert a legacy flat preference mapping into dotted override keys.

    Clothing messages are stored per language (``clothing_msg_3_sv``); only
    those for ``language`` (or without a language suffix) are kept.
    """
    overrides: dict[str, Any] = {}
    old_scheme = is_old_threshold_scheme(prefs)
    threshold_map = _OLD_SCHEME if old_scheme else _NEW_SCHEME

    for key, value in prefs.items():
        if key in _SIMPLE_KEYS:
            overrides[_SIMPLE_KEYS[key]] = value
        elif key in threshold_map:
            overrides[threshold_map[key]] = float(value)
        elif key in _OLD_ONLY:
            # mixed preference set; new keys win, old-only keys fill gaps below
            continue
        elif key == "notification_days":
            overrides["notification.days"] = _parse_days(value)
        elif key == "app_language":
            if value != "auto":
                overrides["language"] = value
        elif _CLOTHING_KEY.match(key):
            level, lang = _CLOTHING_KEY.match(key).groups()
            if lang is None or lang == language:
                overrides[f"clothing_messages.level_{level}"] = value
        else:
            logger.warning("Dropping unknown preference key %r during migration", key)

    if not old_scheme:
        for key in _OLD_ONLY & set(prefs):
            target = _OLD_SCHEME[key]
            overrides.setdefault(target, float(prefs[key]))

    if old_scheme:
        logger.info("Migrated legacy temperature threshold keys to current names")
    return overrides
