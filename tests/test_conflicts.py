from __future__ import annotations

from domain.models import Assignment, Event, PositionRequirement
from rules.conflicts import check_conflict, default_hours, is_valid_time, parse_minutes


def make_event(event_id: int, start: str, end: str | None, day: str = "2025-06-01") -> Event:
    return Event(
        id=event_id,
        name=f"Event {event_id}",
        date=day,
        time=start,
        end_time=end,
        positions=[PositionRequirement("Dealer", 2)],
    )


def make_assignment(event_id: int, worker_id: int = 7, position: str = "Dealer") -> Assignment:
    return Assignment(id=event_id * 10, event_id=event_id, worker_id=worker_id, position=position)


def test_parse_minutes():
    assert parse_minutes("18:30") == 1110
    assert parse_minutes("00:00") == 0
    assert parse_minutes(None) is None
    assert parse_minutes("") is None
    assert parse_minutes("18:30:00") == 1110


def test_unreadable_times_parse_to_none():
    assert parse_minutes("6pm") is None
    assert parse_minutes("25:00") is None
    assert parse_minutes("18:75") is None
    assert is_valid_time("09:05")
    assert not is_valid_time("6pm")
    assert not is_valid_time(None)


def test_unreadable_time_is_skipped_by_conflict_check():
    bad = make_event(1, "6pm", "10pm")
    good = make_event(2, "18:00", "22:00")
    assert not check_conflict(7, good, [make_assignment(1)], [bad, good]).conflict
    assert default_hours(bad) == 4.0


def test_overlapping_events_conflict():
    a = make_event(1, "18:00", "22:00")
    b = make_event(2, "20:00", "23:00")
    result = check_conflict(7, b, [make_assignment(1)], [a, b])
    assert result.conflict
    assert result.blocking_event is a
    assert result.window == ("18:00", "22:00")
    assert result.position == "Dealer"
    assert result.as_dict()["event_name"] == "Event 1"


def test_back_to_back_events_do_not_conflict():
    a = make_event(1, "18:00", "22:00")
    b = make_event(2, "22:00", "23:00")
    assert not check_conflict(7, b, [make_assignment(1)], [a, b]).conflict


def test_other_dates_and_workers_are_ignored():
    a = make_event(1, "18:00", "22:00", day="2025-06-02")
    b = make_event(2, "20:00", "23:00")
    c = make_event(3, "19:00", "21:00")
    assignments = [make_assignment(1), make_assignment(3, worker_id=8)]
    assert not check_conflict(7, b, assignments, [a, b, c]).conflict


def test_missing_end_time_skips_the_pair():
    a = make_event(1, "18:00", None)
    b = make_event(2, "20:00", "23:00")
    assert not check_conflict(7, b, [make_assignment(1)], [a, b]).conflict


def test_assignment_on_the_same_event_is_not_a_conflict():
    a = make_event(1, "18:00", "22:00")
    assert not check_conflict(7, a, [make_assignment(1)], {1: a}).conflict


def test_default_hours():
    assert default_hours(make_event(1, "18:00", "22:30")) == 4.5
    assert default_hours(make_event(1, "22:00", "02:00")) == 4.0
    assert default_hours(make_event(1, "18:00", None)) == 4.0
