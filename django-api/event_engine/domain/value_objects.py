"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Self
from uuid import UUID, uuid4


class _Identifier:
    """Shared parsing for UUID-backed identifiers."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    @classmethod
    def generate(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId(_Identifier):
    """Unique identifier for an Event."""

    value: UUID


@dataclass(frozen=True)
class MissionId(_Identifier):
    """Unique identifier for a Mission."""

    value: UUID


@dataclass(frozen=True)
class RideId(_Identifier):
    """Unique identifier for a Ride."""

    value: UUID


@dataclass(frozen=True)
class AssignmentId(_Identifier):
    """Unique identifier for a ResourceAssignment."""

    value: UUID


@dataclass(frozen=True)
class ParticipantId(_Identifier):
    """Unique identifier for a Participant."""

    value: UUID


CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Currency amount with cent precision.

    Amounts are quantized to two fractional digits on creation so that
    sums never accumulate float error.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        try:
            amount = Decimal(str(self.amount)).quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid money amount: {self.amount!r}") from exc
        if amount < 0:
            raise ValueError("Money amount cannot be negative")
        object.__setattr__(self, "amount", amount)

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=Decimal("0"))

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(amount=self.amount + other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class TimeWindow:
    """Half-open time interval ``[start, end)``."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Time window cannot end before it starts")

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "TimeWindow") -> bool:
        # Adjacent windows share only a boundary and do not overlap.
        if self.is_empty or other.is_empty:
            return False
        return self.start < other.end and other.start < self.end

    def intersection(self, other: "TimeWindow") -> "TimeWindow | None":
        if not self.overlaps(other):
            return None
        return TimeWindow(start=max(self.start, other.start), end=min(self.end, other.end))

    def shifted(self, delta: timedelta) -> "TimeWindow":
        return TimeWindow(start=self.start + delta, end=self.end + delta)


class ResourceKind(Enum):
    """The interchangeable kinds of bookable resource."""

    VEHICLE = "vehicle"
    VENUE = "venue"
    TEAM = "team"

    @classmethod
    def parse(cls, value: str) -> "ResourceKind":
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown resource kind: {value!r}") from None


@dataclass(frozen=True)
class ResourceRef:
    """A vehicle, venue or team, identified by kind and id."""

    kind: ResourceKind
    resource_id: UUID

    @classmethod
    def from_strings(cls, kind: str, resource_id: str) -> Self:
        return cls(kind=ResourceKind.parse(kind), resource_id=UUID(str(resource_id)))

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.resource_id}"
