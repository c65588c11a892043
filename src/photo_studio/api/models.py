"""Pydantic models for studio API request bodies."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from photo_studio.domain.equipment import EquipmentCategory, EquipmentRequest
from photo_studio.domain.models import ClientRequest, StaffRequest
from photo_studio.domain.sessions import BookingRequest


class ClientIn(BaseModel):
    """Client registration payload."""

    first_name: str
    last_name: str
    phone: str = ""
    email: str = ""

    def to_request(self) -> ClientRequest:
        return ClientRequest(**self.model_dump())


class StaffIn(BaseModel):
    """Photographer registration payload."""

    first_name: str
    last_name: str
    hourly_rate: Decimal
    specialization: str = ""
    experience_years: int = 0
    phone: str = ""
    email: str = ""

    def to_request(self) -> StaffRequest:
        return StaffRequest(**self.model_dump())


class EquipmentIn(BaseModel):
    """Equipment registration payload."""

    name: str
    category: EquipmentCategory
    rental_price: Decimal
    model: str = ""
    is_available: bool = True
    condition: str | None = None

    def to_request(self) -> EquipmentRequest:
        return EquipmentRequest(**self.model_dump())


class BookingIn(BaseModel):
    """Session booking payload."""

    client_id: int
    staff_id: int
    scheduled_at: datetime
    duration_hours: int
    equipment_ids: list[int] = Field(default_factory=list)
    session_type: str = ""
    location: str = ""

    def to_request(self) -> BookingRequest:
        return BookingRequest(
            client_id=self.client_id,
            staff_id=self.staff_id,
            scheduled_at=self.scheduled_at,
            duration_hours=self.duration_hours,
            equipment_ids=tuple(self.equipment_ids),
            session_type=self.session_type,
            location=self.location,
        )
