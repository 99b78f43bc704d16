"""Domain dataclasses for GigStaff."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

PAYMENT_PENDING = "pending"
PAYMENT_PAID = "paid"
PAYMENT_STATUSES = (PAYMENT_PENDING, PAYMENT_PAID)

# assignment status: set by an admin, or applied for in the portal and then approved
ASSIGNED = "assigned"
APPLICATION_PENDING = "pending"
APPLICATION_APPROVED = "approved"
APPLICATION_STATUSES = (APPLICATION_PENDING, APPLICATION_APPROVED)

LAKE_GENEVA = "Lake Geneva"
HOLIDAY_MULTIPLIER = "Holiday Multiplier"
DEFAULT_LAKE_GENEVA_BONUS = 15.0
DEFAULT_HOLIDAY_MULTIPLIER = 1.5


@dataclass(frozen=True)
class TravelTier:
    min_miles: float
    max_miles: float
    pay_amount: float

    def contains(self, miles: float) -> bool:
        return self.min_miles <= miles <= self.max_miles


@dataclass(frozen=True)
class PaymentConfig:
    """Pay rates, travel tiers and bonuses used by a single calculation."""

    pay_rates: Mapping[str, float] = field(default_factory=dict)
    travel_tiers: Tuple[TravelTier, ...] = ()
    bonuses: Mapping[str, float] = field(default_factory=dict)

    @classmethod
    def from_rows(
        cls,
        pay_rates: Mapping[str, Any],
        travel_tiers: Sequence[Mapping[str, Any]],
        bonuses: Mapping[str, Any],
    ) -> "PaymentConfig":
        tiers = sorted(
            (
                TravelTier(
                    min_miles=float(row["min_miles"]),
                    max_miles=float(row["max_miles"]),
                    pay_amount=float(row["pay_amount"]),
                )
                for row in travel_tiers
            ),
            key=lambda tier: tier.min_miles,
        )
        return cls(
            pay_rates={str(k): float(v) for k, v in pay_rates.items()},
            travel_tiers=tuple(tiers),
            bonuses={str(k): float(v) for k, v in bonuses.items()},
        )


@dataclass(frozen=True)
class PayBreakdown:
    base_pay: float
    travel_pay: float
    lake_geneva_bonus: float
    subtotal: float
    holiday_multiplier: float
    total_pay: float
    warnings: Tuple[str, ...] = ()

    @property
    def degraded(self) -> bool:
        return bool(self.warnings)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "base_pay": self.base_pay,
            "travel_pay": self.travel_pay,
            "lake_geneva_bonus": self.lake_geneva_bonus,
            "subtotal": self.subtotal,
            "holiday_multiplier": self.holiday_multiplier,
            "total_pay": self.total_pay,
            "warnings": list(self.warnings),
            "degraded": self.degraded,
        }


@dataclass(frozen=True)
class PositionRequirement:
    name: str
    count: int


@dataclass
class Event:
    id: int
    name: str
    date: str
    time: Optional[str]
    end_time: Optional[str] = None
    venue: str = ""
    address: str = ""
    positions: List[PositionRequirement] = field(default_factory=list)

    def count_needed(self, position: str) -> int:
        for req in self.positions:
            if req.name == position:
                return req.count
        return 0

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Event":
        return cls(
            id=payload["id"],
            name=payload.get("name", ""),
            date=payload.get("date", ""),
            time=payload.get("time"),
            end_time=payload.get("end_time") or None,
            venue=payload.get("venue") or "",
            address=payload.get("address") or "",
            positions=[
                PositionRequirement(name=pos["name"], count=int(pos.get("count", 0)))
                for pos in payload.get("positions") or []
            ],
        )


@dataclass
class Worker:
    id: int
    name: str
    skills: List[str] = field(default_factory=list)
    rank: int = 5
    reliability: float = 5.0
    email: str = ""
    phone: str = ""
    address: str = ""
    total_gigs: int = 0
    is_active: bool = True

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Worker":
        reliability = payload.get("reliability")
        return cls(
            id=payload["id"],
            name=payload.get("name", ""),
            skills=list(payload.get("skills") or []),
            rank=int(payload.get("rank") or 5),
            reliability=5.0 if reliability is None else float(reliability),
            email=payload.get("email") or "",
            phone=payload.get("phone") or "",
            address=payload.get("address") or "",
            total_gigs=int(payload.get("total_gigs") or 0),
            is_active=bool(payload.get("is_active", True)),
        )


@dataclass
class Assignment:
    id: Optional[int]
    event_id: int
    worker_id: int
    position: str
    status: str = ASSIGNED
    hours: Optional[float] = None
    miles: Optional[float] = None
    is_lake_geneva: bool = False
    is_holiday: bool = False
    pay: Optional[PayBreakdown] = None
    payment_status: str = PAYMENT_PENDING
    paid_at: Optional[str] = None
    applied_at: Optional[str] = None

    @property
    def holds_position(self) -> bool:
        return self.status != APPLICATION_PENDING

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Assignment":
        pay = None
        if payload.get("total_pay") is not None:
            pay = PayBreakdown(
                base_pay=float(payload.get("base_pay") or 0),
                travel_pay=float(payload.get("travel_pay") or 0),
                lake_geneva_bonus=float(payload.get("lake_geneva_bonus") or 0),
                subtotal=float(payload.get("subtotal") or 0),
                holiday_multiplier=float(payload.get("holiday_multiplier") or 1.0),
                total_pay=float(payload["total_pay"]),
            )
        return cls(
            id=payload.get("id"),
            event_id=payload["event_id"],
            worker_id=payload["worker_id"],
            position=payload["position"],
            status=payload.get("status") or ASSIGNED,
            hours=payload.get("hours"),
            miles=payload.get("miles"),
            is_lake_geneva=bool(payload.get("is_lake_geneva")),
            is_holiday=bool(payload.get("is_holiday")),
            pay=pay,
            payment_status=payload.get("payment_status") or PAYMENT_PENDING,
            paid_at=payload.get("paid_at"),
            applied_at=payload.get("applied_at"),
        )


@dataclass(frozen=True)
class ConflictResult:
    """Outcome of a scheduling conflict check.

    ``blocking_event`` is the already-assigned event that overlaps the
    candidate; ``position`` is what the worker holds there.
    """

    conflict: bool
    blocking_event: Optional[Event] = None
    window: Optional[Tuple[str, str]] = None
    position: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        if not self.conflict or self.blocking_event is None:
            return {"conflict": False}
        return {
            "conflict": True,
            "event_id": self.blocking_event.id,
            "event_name": self.blocking_event.name,
            "start": self.window[0] if self.window else None,
            "end": self.window[1] if self.window else None,
            "position": self.position,
        }


@dataclass(frozen=True)
class CapacityResult:
    ok: bool
    filled: int
    needed: int
    reason: Optional[str] = None
    moved_from: Optional[Assignment] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "filled": self.filled,
            "needed": self.needed,
            "reason": self.reason,
            "moved_from": self.moved_from.position if self.moved_from else None,
        }
