from datetime import datetime

import pytest

from services.display import filter_resources, registration_state, split_events
from services.timeconv import format_local, from_local_input, to_iso, to_local_input

RESOURCES = [
    {"title": "Python Basics", "file_type": "application/pdf"},
    {"title": "C++ Guide", "file_type": "application/pdf"},
    {"title": "Lab Sheet", "file_type": None},
]


def test_search_is_case_insensitive_substring():
    assert [r["title"] for r in filter_resources(RESOURCES, "py")] == ["Python Basics"]
    assert [r["title"] for r in filter_resources(RESOURCES, "PY")] == ["Python Basics"]


def test_search_matches_file_type_and_empty_term_returns_all():
    assert len(filter_resources(RESOURCES, "pdf")) == 2
    assert filter_resources(RESOURCES, "") == RESOURCES


def test_registration_state():
    now = datetime(2025, 3, 10, 12, 0)
    window = {"registration_open_date": datetime(2025, 3, 1), "registration_close_date": datetime(2025, 3, 20)}

    assert registration_state({"registration_open_date": None, "registration_close_date": None}, now) is None
    assert registration_state(window, now) == "open"
    assert registration_state(window, datetime(2025, 2, 1)) == "upcoming"
    assert registration_state(window, datetime(2025, 4, 1)) == "closed"
    assert registration_state({"registration_open_date": None, "registration_close_date": datetime(2025, 3, 20)}, now) == "open"


def test_split_events_keeps_order():
    now = datetime(2025, 6, 1)
    events = [{"event_date": datetime(2025, m, 1), "title": str(m)} for m in (3, 5, 6, 8)]

    upcoming, past = split_events(events, now)

    assert [e["title"] for e in past] == ["3", "5"]
    assert [e["title"] for e in upcoming] == ["6", "8"]


def test_local_input_conversion_is_symmetric():
    stored = from_local_input("2025-07-01T09:15", "Europe/London")

    assert stored == datetime(2025, 7, 1, 8, 15)
    assert to_local_input(stored, "Europe/London") == "2025-07-01T09:15"
    assert from_local_input("", "UTC") is None
    assert to_local_input(None) == ""


def test_iso_output_carries_utc_offset():
    assert to_iso(datetime(2025, 3, 1, 4, 30)) == "2025-03-01T04:30:00+00:00"


def test_clock_change_gap_is_rejected():
    # New York 2025-03-09: 02:00 -> 03:00
    with pytest.raises(ValueError, match="does not exist in America/New_York"):
        from_local_input("2025-03-09T02:30", "America/New_York")

    assert from_local_input("2025-03-09T03:30", "America/New_York") == datetime(2025, 3, 9, 7, 30)


def test_format_local_uses_club_timezone():
    assert format_local(datetime(2030, 3, 1, 4, 30), "Asia/Kolkata") == "01 Mar 2030, 10:00"
    assert format_local(datetime(2030, 3, 1, 4, 30), "UTC", "%d %b %Y") == "01 Mar 2030"
    assert format_local(None) == ""
