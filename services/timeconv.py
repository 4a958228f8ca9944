"""
Conversions between stored timestamps and the editable form representation.

Stored values are naive datetimes in UTC. The admin forms use the
``datetime-local`` input format (``YYYY-MM-DDTHH:MM``) expressed in the
club's configured timezone. Both directions go through the same zone, so a
value loaded into a form and submitted back lands on the same instant.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

LOCAL_INPUT_FORMAT = "%Y-%m-%dT%H:%M"


def _zone(tz_name):
    if not tz_name or tz_name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(tz_name)


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc(value):
    """Normalize an aware or naive datetime to naive UTC (naive means UTC already)."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_local_input(value, tz_name="UTC"):
    if value is None:
        return ""
    aware = value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value
    return aware.astimezone(_zone(tz_name)).strftime(LOCAL_INPUT_FORMAT)


def from_local_input(raw, tz_name="UTC"):
    """Parse a datetime-local string in the club timezone into naive UTC.

    Empty strings map to None. Seconds are accepted if the browser sends them.
    Raises ValueError on anything else.
    """
    if raw is None or raw == "":
        return None
    raw = raw.strip()
    for fmt in (LOCAL_INPUT_FORMAT, "%Y-%m-%dT%H:%M:%S"):
        try:
            naive = datetime.strptime(raw, fmt)
            break
        except ValueError:
            continue
    else:
        raise ValueError(f"Invalid date/time value: {raw!r}")
    zone = _zone(tz_name)
    stored = to_utc(naive.replace(tzinfo=zone))
    # DST gap (e.g. 02:30 on spring-forward day) ka koi instant nahi hota
    if stored.replace(tzinfo=timezone.utc).astimezone(zone).replace(tzinfo=None) != naive:
        raise ValueError(f"Invalid date/time value: {raw!r} does not exist in {tz_name}")
    return stored


def to_iso(value):
    """Interchange format: ISO-8601 with an explicit UTC offset."""
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).isoformat()


def format_local(value, tz_name="UTC", fmt="%d %b %Y, %H:%M"):
    """Human-readable rendering of a stored timestamp in the club timezone."""
    if value is None:
        return ""
    aware = value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value
    return aware.astimezone(_zone(tz_name)).strftime(fmt)
