from domain.models import Worker
from domain.positions import (
    BARTENDER,
    DEALER,
    POKER,
    position_family,
    position_key,
    position_label,
    skill_families,
    skills_match_position,
)
from rules.matching import qualified_workers


def test_position_family_lookup():
    assert position_family("Poker Dealer") == POKER
    assert position_family("dealer") == DEALER
    assert position_family("Head Dealer") is None
    assert position_family("Mixology Lead") == BARTENDER
    assert position_family("Server") is None


def test_skill_tags():
    assert skill_families("poker_dealer") == {POKER, DEALER}
    assert skill_families("Bartender") == {BARTENDER}
    assert skill_families("greeter") == set()


def test_specific_position_needs_family_skill():
    assert skills_match_position(["Blackjack"], "Blackjack Dealer")
    assert not skills_match_position(["roulette_dealer"], "Blackjack Dealer")
    assert skills_match_position(["mixology"], "Bartender")


def test_generic_dealer_accepts_any_dealer_family_skill():
    assert skills_match_position(["craps"], "Dealer")
    assert skills_match_position(["dealer"], "DEALER")
    assert not skills_match_position(["host"], "Dealer")


def test_unknown_position_is_open_to_everyone():
    assert skills_match_position([], "Cashier")
    assert skills_match_position(["host"], "Server")


def test_position_key_and_label():
    assert position_key("Blackjack Dealer") == "blackjack_dealer"
    assert position_key("Valet Parking") == "valet_parking"
    assert position_label("host") == "Host"
    assert position_label("valet") == "valet"


def test_qualified_workers_sorted_by_rank_then_reliability():
    workers = [
        Worker(id=1, name="Ann", skills=["poker"], rank=2, reliability=4.0),
        Worker(id=2, name="Bob", skills=["poker_dealer"], rank=1, reliability=3.0),
        Worker(id=3, name="Cid", skills=["poker"], rank=2, reliability=4.9),
        Worker(id=4, name="Dee", skills=["host"], rank=1, reliability=5.0),
    ]
    offered = qualified_workers("Poker Dealer", workers)
    assert [w.id for w in offered] == [2, 3, 1]
    assert [w.id for w in qualified_workers("Poker Dealer", workers, search="an")] == [1]
