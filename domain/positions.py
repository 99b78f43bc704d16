"""Canonical position families and skill tagging for GigStaff."""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple

__all__ = [
    "POKER",
    "BLACKJACK",
    "ROULETTE",
    "CRAPS",
    "BACCARAT",
    "HOST",
    "BARTENDER",
    "DEALER",
    "DEALER_FAMILIES",
    "STANDARD_POSITIONS",
    "position_family",
    "skill_families",
    "skills_match_position",
    "position_key",
    "position_label",
]


POKER = "poker"
BLACKJACK = "blackjack"
ROULETTE = "roulette"
CRAPS = "craps"
BACCARAT = "baccarat"
HOST = "host"
BARTENDER = "bartender"
DEALER = "dealer"

# Scan order matters for position names carrying several markers.
_FAMILY_MARKERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (POKER, ("poker",)),
    (BLACKJACK, ("blackjack",)),
    (ROULETTE, ("roulette",)),
    (CRAPS, ("craps",)),
    (BACCARAT, ("baccarat",)),
    (HOST, ("host",)),
    (BARTENDER, ("bartender", "mixology")),
)

DEALER_FAMILIES: FrozenSet[str] = frozenset({DEALER, POKER, BLACKJACK, ROULETTE, CRAPS, BACCARAT})

STANDARD_POSITIONS: Tuple[Dict[str, str], ...] = (
    {"key": "blackjack_dealer", "label": "Blackjack Dealer"},
    {"key": "poker_dealer", "label": "Poker Dealer"},
    {"key": "roulette_dealer", "label": "Roulette Dealer"},
    {"key": "craps_dealer", "label": "Craps Dealer"},
    {"key": "baccarat_dealer", "label": "Baccarat Dealer"},
    {"key": "dealer", "label": "Dealer"},
    {"key": "host", "label": "Host"},
    {"key": "bartender", "label": "Bartender"},
    {"key": "server", "label": "Server"},
    {"key": "cashier", "label": "Cashier"},
)


def _normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def position_family(position: Optional[str]) -> Optional[str]:
    """Return the family tag for a *position* name.

    The generic ``Dealer`` position is matched exactly, everything else by
    marker substring. ``None`` means the position is open to every worker.
    """

    normalized = _normalize(position)
    if normalized == DEALER:
        return DEALER
    for family, markers in _FAMILY_MARKERS:
        if any(marker in normalized for marker in markers):
            return family
    return None


def skill_families(skill: Optional[str]) -> Set[str]:
    """Tag a free-text *skill* with every family whose marker it contains."""

    normalized = _normalize(skill)
    families = {family for family, markers in _FAMILY_MARKERS if any(m in normalized for m in markers)}
    if DEALER in normalized:
        families.add(DEALER)
    return families


def skills_match_position(skills: Iterable[str], position: Optional[str]) -> bool:
    family = position_family(position)
    if family is None:
        return True
    tags: Set[str] = set()
    for skill in skills or ():
        tags |= skill_families(skill)
    if family == DEALER:
        return bool(tags & DEALER_FAMILIES)
    return family in tags


def position_key(label: str) -> str:
    for position in STANDARD_POSITIONS:
        if label in (position["key"], position["label"]):
            return position["key"]
    return label.strip().lower().replace(" ", "_")


def position_label(key: str) -> str:
    for position in STANDARD_POSITIONS:
        if key in (position["key"], position["label"]):
            return position["label"]
    return key
