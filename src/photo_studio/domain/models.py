"""Domain models for studio clients and staff."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class ContactInfo:
    """Name and contact details shared by clients and staff."""

    first_name: str
    last_name: str
    phone: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        """Return the first and last name joined by a space."""
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Client:
    """Represents a registered studio client."""

    id: int
    contact: ContactInfo
    registered_at: datetime
    sessions_count: int = 0


@dataclass(frozen=True)
class Staff:
    """Represents a photographer who can be booked by the hour."""

    id: int
    contact: ContactInfo
    specialization: str
    hourly_rate: Decimal
    experience_years: int


@dataclass(frozen=True)
class ClientRequest:
    """Fields collected to register a client."""

    first_name: str
    last_name: str
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class StaffRequest:
    """Fields collected to register a photographer."""

    first_name: str
    last_name: str
    hourly_rate: Decimal
    specialization: str = ""
    experience_years: int = 0
    phone: str = ""
    email: str = ""
