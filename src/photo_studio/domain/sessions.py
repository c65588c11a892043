"""Domain models for booked photo sessions."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle states of a booked session."""

    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_active(self) -> bool:
        """Return True while the session still holds its equipment."""
        return self in _ACTIVE_STATUSES

    def can_transition_to(self, target: "SessionStatus") -> bool:
        """Return True if the state machine allows moving to ``target``."""
        return target in _TRANSITIONS.get(self, frozenset())


_ACTIVE_STATUSES = frozenset({SessionStatus.PLANNED, SessionStatus.IN_PROGRESS})

_TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.PLANNED: frozenset(
        {
            SessionStatus.IN_PROGRESS,
            SessionStatus.COMPLETED,
            SessionStatus.CANCELLED,
        }
    ),
    SessionStatus.IN_PROGRESS: frozenset(
        {SessionStatus.COMPLETED, SessionStatus.CANCELLED}
    ),
}


@dataclass(frozen=True)
class Session:
    """Represents a booked session with its cost fixed at booking time."""

    id: int
    client_id: int
    staff_id: int
    equipment_ids: tuple[int, ...]
    scheduled_at: datetime
    duration_hours: int
    session_type: str
    location: str
    status: SessionStatus
    total_cost: Decimal


@dataclass(frozen=True)
class BookingRequest:
    """Fields collected to book a session."""

    client_id: int
    staff_id: int
    scheduled_at: datetime
    duration_hours: int
    equipment_ids: tuple[int, ...] = field(default_factory=tuple)
    session_type: str = ""
    location: str = ""
