from datetime import date, datetime, time, timedelta, timezone

from app.core.constants import DAYS_PER_WEEK


def monday_of(d: date) -> date:
    """Return the Monday starting the ISO week that contains `d`.

    Monday = 0, Sunday = 6, so Sunday maps to the Monday six days earlier.
    Datetimes are reduced to their calendar day first.
    Example: 2024-01-07 (Sun) -> 2024-01-01
    """
    if isinstance(d, datetime):
        d = d.date()
    return d - timedelta(days=d.weekday())


def week_range(week_start: date) -> tuple[date, date]:
    """Half-open [monday, next monday) window for the week of `week_start`."""
    start = monday_of(week_start)
    return start, start + timedelta(days=DAYS_PER_WEEK)


def week_days(week_start: date) -> list[date]:
    """The seven calendar days Mon..Sun of the week of `week_start`."""
    start = monday_of(week_start)
    return [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def mondays_between(start_date: date, end_date: date) -> list[date]:
    """Every Monday whose week overlaps [start_date, end_date], oldest first."""
    cur = monday_of(start_date)
    last = monday_of(end_date)
    out = []
    while cur <= last:
        out.append(cur)
        cur += timedelta(days=DAYS_PER_WEEK)
    return out


def to_local_datetime(dt: datetime, tz_name: str | None = None) -> datetime:
    """Convert a datetime (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'Europe/Paris'): use that.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo

        return dt.astimezone(ZoneInfo(tz_name))
    return dt.astimezone()


def calendar_day(value: date | datetime | None, tz_name: str | None = None) -> date | None:
    """Reduce a stored timestamp to the calendar day it falls on in `tz_name`.

    Plain dates pass through untouched; None stays None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local_datetime(value, tz_name).date()
    return value


def local_today(tz_name: str | None = None) -> date:
    return to_local_datetime(datetime.now(timezone.utc), tz_name).date()


def start_of_day(d: date, tz_name: str | None = None) -> datetime:
    """Aware datetime for 00:00 of calendar day `d` in local or given tz."""
    midnight = datetime.combine(d, time.min)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo

        return midnight.replace(tzinfo=ZoneInfo(tz_name))
    return midnight.astimezone()
