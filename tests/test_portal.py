from datetime import date

from domain.models import Assignment, Event, PositionRequirement, Worker
from rules.portal import access_days_for, change_window_open, upcoming_gigs, visible_events

TODAY = date(2025, 6, 1)


def make_event(event_id: int, day: str, position: str = "Blackjack Dealer") -> Event:
    return Event(id=event_id, name=f"E{event_id}", date=day, time="18:00", end_time="22:00",
                 positions=[PositionRequirement(position, 2)])


def test_access_window_by_rank():
    assert access_days_for(Worker(id=1, name="a", rank=1)) == 0
    assert access_days_for(Worker(id=1, name="a", rank=3)) == 10
    assert access_days_for(Worker(id=1, name="a", rank=9)) == 14


def test_visible_events_respect_window_skills_and_existing_assignments():
    worker = Worker(id=1, name="a", skills=["blackjack"], rank=2)
    events = [
        make_event(1, "2025-06-05"),
        make_event(2, "2025-06-20"),
        make_event(3, "2025-05-30"),
        make_event(4, "2025-06-03", position="Roulette Dealer"),
        make_event(5, "2025-06-02"),
    ]
    taken = [Assignment(id=1, event_id=5, worker_id=1, position="Blackjack Dealer")]
    visible = visible_events(worker, events, taken, TODAY)
    assert [e.id for e in visible] == [1]


def test_rank_one_sees_all_future_events():
    worker = Worker(id=1, name="a", skills=["blackjack"], rank=1)
    events = [make_event(2, "2025-09-20"), make_event(1, "2025-06-05")]
    assert [e.id for e in visible_events(worker, events, [], TODAY)] == [1, 2]


def test_upcoming_gigs_first_then_past():
    events = [make_event(1, "2025-05-01"), make_event(2, "2025-06-10"), make_event(3, "2025-06-02")]
    rows = [Assignment(id=i, event_id=i, worker_id=1, position="Blackjack Dealer") for i in (1, 2, 3)]
    gigs = upcoming_gigs(1, events, rows, TODAY)
    assert [g["event"].id for g in gigs] == [3, 2, 1]
    assert gigs[0]["days_until"] == 1


def test_change_window_closes_a_week_before_the_event():
    assert change_window_open(make_event(1, "2025-06-08"), TODAY)
    assert not change_window_open(make_event(1, "2025-06-07"), TODAY)
    assert not change_window_open(make_event(1, "not a date"), TODAY)
