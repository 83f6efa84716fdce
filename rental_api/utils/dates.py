"""Date parsing and timestamp helpers."""
from datetime import datetime, date, timezone

import pytz

from rental_api.exceptions import ValidationError
from rental_api.utils.constants import DATE_FMT


def utc_now_iso() -> str:
    """Current UTC time as an ISO string; used for createdAt/updatedAt."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def to_calendar_date(value, tz_name: str = "UTC") -> date:
    """
    Turn a pickup/return value into the calendar date it falls on.
    Supports:
      - date / datetime objects
      - 'YYYY-MM-DD'
      - 'YYYY-MM-DDTHH:MM[:SS]' with an optional 'Z' or '+HH:MM' offset
    Datetimes carrying an offset are converted to `tz_name` first, so a
    front end posting midnight local time as UTC still lands on the right day.
    Naive datetimes are read as already local.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    else:
        s = str(value or "").strip()
        if not s:
            raise ValidationError("Invalid dates")
        if "T" not in s and " " not in s:
            try:
                return datetime.strptime(s, DATE_FMT).date()
            except ValueError:
                raise ValidationError("Invalid dates")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            raise ValidationError("Invalid dates")

    if dt.tzinfo is None:
        return dt.date()
    try:
        zone = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        zone = pytz.utc
    return dt.astimezone(zone).date()


def billable_days(pickup: date, ret: date) -> int:
    """Whole days between pickup and return, never less than one."""
    return max(1, (ret - pickup).days)
