"""
Quiet hours: the daily do-not-disturb window during which notifications
are suppressed. The window may cross midnight (e.g. 22:00 -> 08:00) and
both boundary minutes are inclusive.
"""
import re
from datetime import datetime
from typing import Iterable, Optional

from guardian.config import WEEKDAYS
from guardian.errors import ValidationError
from guardian.services.json_fields import decode_list

_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")


def parse_time(value: str) -> int:
    """Convert a zero-padded 24-hour "HH:MM" string to minutes after midnight."""
    match = _TIME_RE.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")
    return hour * 60 + minute


def weekday_name(moment: datetime) -> str:
    return WEEKDAYS[moment.weekday()]


def is_quiet_hours(
    enabled: bool,
    start_time: str,
    end_time: str,
    active_days: Iterable[str],
    now: Optional[datetime] = None,
) -> bool:
    if not enabled:
        return False

    start = parse_time(start_time)
    end = parse_time(end_time)

    now = now or datetime.now()
    if weekday_name(now) not in set(active_days or ()):
        return False

    current = now.hour * 60 + now.minute

    # Overnight window (e.g. 22:00 to 08:00)
    if start > end:
        return current >= start or current <= end
    return start <= current <= end


def settings_in_quiet_hours(settings, now: Optional[datetime] = None) -> bool:
    """Evaluate quiet hours for a stored UserSettings row."""
    return is_quiet_hours(
        settings.quiet_hours_enabled,
        settings.quiet_hours_start,
        settings.quiet_hours_end,
        decode_list(settings.quiet_hours_days, "quiet_hours_days"),
        now=now,
    )
