# ABOUTME: Picks the hourly sample that best represents a requested day and hour.
# ABOUTME: Exact hour first, then midday, then the first hour of the day.

from collections.abc import Sequence
from datetime import date

MIDDAY_HOUR = 12


def hour_timestamp(target_date: date | str, hour: int) -> str:
    """Format an Open-Meteo hourly timestamp such as '2024-01-01T12:00'."""
    day = target_date.isoformat() if isinstance(target_date, date) else target_date
    return f"{day}T{hour:02d}:00"


def first_index_for_date(times: Sequence[str], target_date: date | str) -> int | None:
    """Return the index of the first timestamp that falls on target_date."""
    prefix = target_date.isoformat() if isinstance(target_date, date) else target_date
    for i, t in enumerate(times):
        if t.startswith(prefix):
            return i
    return None


def select_sample_index(
    times: Sequence[str],
    target_date: date | str,
    target_hour: int | None = None,
) -> int | None:
    """Select the index of the hourly sample representing target_date.

    Tries, in order: the exact requested hour, the 12:00 sample, and the first
    sample of the day. Returns None when the day is not in ``times`` at all.
    """
    candidates = []
    if target_hour is not None:
        candidates.append(hour_timestamp(target_date, target_hour))
    candidates.append(hour_timestamp(target_date, MIDDAY_HOUR))

    for wanted in candidates:
        if wanted in times:
            return times.index(wanted)
    return first_index_for_date(times, target_date)
