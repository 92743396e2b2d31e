"""Day and commute labels shown alongside recommendations."""

from datetime import date, timedelta

from routesuit.config.schema import CommuteWindow


def day_label(target: date, today: date) -> str:
    """'Today', 'Tomorrow', or a weekday and date like 'Monday, Oct 20'."""
    if target == today:
        return "Today"
    if target == today + timedelta(days=1):
        return "Tomorrow"
    return f"{target:%A, %b} {target.day}"


def format_hour(hour24: int) -> str:
    if hour24 == 0:
        return "12 AM"
    if hour24 < 12:
        return f"{hour24} AM"
    if hour24 == 12:
        return "12 PM"
    return f"{hour24 - 12} PM"


def commute_label(name: str, window: CommuteWindow) -> str:
    """E.g. 'Morning Commute (7 AM-9 AM)'."""
    return f"{name} Commute ({format_hour(window.start_hour)}-{format_hour(window.end_hour)})"
