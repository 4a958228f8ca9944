"""Small helpers used by the public pages (search, event grouping)."""

from services.timeconv import utcnow


def filter_resources(resources, term):
    """Case-insensitive substring match on title or file type."""
    needle = (term or "").lower()
    if not needle:
        return list(resources)
    matched = []
    for res in resources:
        title = (res.get("title") or "").lower()
        file_type = (res.get("file_type") or "").lower()
        if needle in title or needle in file_type:
            matched.append(res)
    return matched


def registration_state(event, now=None):
    """upcoming / open / closed, or None when the event has no registration window."""
    opens = event.get("registration_open_date")
    closes = event.get("registration_close_date")
    if opens is None and closes is None:
        return None
    now = now or utcnow()
    if opens is not None and now < opens:
        return "upcoming"
    if closes is not None and now > closes:
        return "closed"
    return "open"


def split_events(events, now=None):
    """Split date-ordered events into (upcoming, past), keeping the order."""
    now = now or utcnow()
    upcoming, past = [], []
    for event in events:
        (upcoming if event["event_date"] >= now else past).append(event)
    return upcoming, past
