from domain.models import APPLICATION_APPROVED, APPLICATION_PENDING, Assignment, Event, PositionRequirement
from rules.capacity import (
    ALREADY_ASSIGNED,
    FULLY_STAFFED,
    check_capacity,
    fill_status,
    is_position_filled,
)


def make_event() -> Event:
    return Event(
        id=1,
        name="Gala",
        date="2025-06-01",
        time="18:00",
        end_time="22:00",
        positions=[PositionRequirement("Dealer", 2), PositionRequirement("Host", 1)],
    )


def assigned(worker_id: int, position: str, event_id: int = 1) -> Assignment:
    return Assignment(id=worker_id, event_id=event_id, worker_id=worker_id, position=position)


def test_position_filled_when_count_reached():
    event = make_event()
    rows = [assigned(1, "Dealer"), assigned(2, "Dealer")]
    assert is_position_filled(event, "Dealer", rows)
    assert not is_position_filled(event, "Host", rows)


def test_assignments_of_other_events_do_not_count():
    event = make_event()
    rows = [assigned(1, "Dealer"), assigned(2, "Dealer", event_id=2)]
    assert not is_position_filled(event, "Dealer", rows)


def test_unlisted_position_is_always_full():
    assert is_position_filled(make_event(), "Bartender", [])


def test_move_does_not_double_count():
    event = make_event()
    rows = [assigned(1, "Dealer"), assigned(2, "Host")]
    result = check_capacity(event, "Dealer", rows, worker_id=2)
    assert result.ok
    assert result.filled == 1
    assert result.moved_from is rows[1]


def test_move_into_full_position_is_refused():
    event = make_event()
    rows = [assigned(1, "Dealer"), assigned(3, "Dealer"), assigned(2, "Host")]
    result = check_capacity(event, "Dealer", rows, worker_id=2)
    assert not result.ok
    assert result.reason == FULLY_STAFFED


def test_same_position_twice_is_refused():
    result = check_capacity(make_event(), "Dealer", [assigned(1, "Dealer")], worker_id=1)
    assert not result.ok
    assert result.reason == ALREADY_ASSIGNED


def test_fill_status():
    status = fill_status(make_event(), [assigned(1, "Host")])
    assert status == [
        {"position": "Dealer", "filled": 0, "needed": 2, "is_full": False},
        {"position": "Host", "filled": 1, "needed": 1, "is_full": True},
    ]


def test_pending_applications_do_not_take_a_slot():
    event = make_event()
    applied = Assignment(id=9, event_id=1, worker_id=9, position="Host", status=APPLICATION_PENDING)
    assert not is_position_filled(event, "Host", [applied])
    approved = Assignment(id=9, event_id=1, worker_id=9, position="Host", status=APPLICATION_APPROVED)
    assert is_position_filled(event, "Host", [approved])
