"""Pydantic models describing the persisted ledger snapshot."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from photo_studio.domain.equipment import Equipment, EquipmentCategory
from photo_studio.domain.models import Client, ContactInfo, Staff
from photo_studio.domain.sessions import Session, SessionStatus


class ClientEntry(BaseModel):
    """Client record as stored in a snapshot."""

    id: int = Field(gt=0)
    first_name: str
    last_name: str
    phone: str = ""
    email: str = ""
    registered_at: datetime
    sessions_count: int = Field(default=0, ge=0)

    @classmethod
    def from_record(cls, client: Client) -> "ClientEntry":
        return cls(
            id=client.id,
            first_name=client.contact.first_name,
            last_name=client.contact.last_name,
            phone=client.contact.phone,
            email=client.contact.email,
            registered_at=client.registered_at,
            sessions_count=client.sessions_count,
        )

    def to_record(self) -> Client:
        return Client(
            id=self.id,
            contact=ContactInfo(
                first_name=self.first_name,
                last_name=self.last_name,
                phone=self.phone,
                email=self.email,
            ),
            registered_at=self.registered_at,
            sessions_count=self.sessions_count,
        )


class StaffEntry(BaseModel):
    """Staff record as stored in a snapshot."""

    id: int = Field(gt=0)
    first_name: str
    last_name: str
    phone: str = ""
    email: str = ""
    specialization: str = ""
    hourly_rate: Decimal = Field(ge=0)
    experience_years: int = Field(default=0, ge=0)

    @classmethod
    def from_record(cls, staff: Staff) -> "StaffEntry":
        return cls(
            id=staff.id,
            first_name=staff.contact.first_name,
            last_name=staff.contact.last_name,
            phone=staff.contact.phone,
            email=staff.contact.email,
            specialization=staff.specialization,
            hourly_rate=staff.hourly_rate,
            experience_years=staff.experience_years,
        )

    def to_record(self) -> Staff:
        return Staff(
            id=self.id,
            contact=ContactInfo(
                first_name=self.first_name,
                last_name=self.last_name,
                phone=self.phone,
                email=self.email,
            ),
            specialization=self.specialization,
            hourly_rate=self.hourly_rate,
            experience_years=self.experience_years,
        )


class EquipmentEntry(BaseModel):
    """Equipment record as stored in a snapshot."""

    id: int = Field(gt=0)
    name: str
    category: EquipmentCategory
    model: str = ""
    rental_price: Decimal = Field(ge=0)
    is_available: bool = True
    condition: str

    @classmethod
    def from_record(cls, equipment: Equipment) -> "EquipmentEntry":
        return cls(
            id=equipment.id,
            name=equipment.name,
            category=equipment.category,
            model=equipment.model,
            rental_price=equipment.rental_price,
            is_available=equipment.is_available,
            condition=equipment.condition,
        )

    def to_record(self) -> Equipment:
        return Equipment(
            id=self.id,
            name=self.name,
            category=self.category,
            model=self.model,
            rental_price=self.rental_price,
            is_available=self.is_available,
            condition=self.condition,
        )


class SessionEntry(BaseModel):
    """Session record as stored in a snapshot."""

    id: int = Field(gt=0)
    client_id: int
    staff_id: int
    equipment_ids: list[int] = Field(default_factory=list)
    scheduled_at: datetime
    duration_hours: int = Field(gt=0)
    session_type: str = ""
    location: str = ""
    status: SessionStatus
    total_cost: Decimal = Field(ge=0)

    @classmethod
    def from_record(cls, session: Session) -> "SessionEntry":
        return cls(
            id=session.id,
            client_id=session.client_id,
            staff_id=session.staff_id,
            equipment_ids=list(session.equipment_ids),
            scheduled_at=session.scheduled_at,
            duration_hours=session.duration_hours,
            session_type=session.session_type,
            location=session.location,
            status=session.status,
            total_cost=session.total_cost,
        )

    def to_record(self) -> Session:
        return Session(
            id=self.id,
            client_id=self.client_id,
            staff_id=self.staff_id,
            equipment_ids=tuple(self.equipment_ids),
            scheduled_at=self.scheduled_at,
            duration_hours=self.duration_hours,
            session_type=self.session_type,
            location=self.location,
            status=self.status,
            total_cost=self.total_cost,
        )


class NextIds(BaseModel):
    """Next id to hand out for each collection."""

    client: int = Field(default=1, gt=0)
    staff: int = Field(default=1, gt=0)
    equipment: int = Field(default=1, gt=0)
    session: int = Field(default=1, gt=0)


class LedgerSnapshot(BaseModel):
    """Complete structural snapshot of the ledger."""

    clients: list[ClientEntry] = Field(default_factory=list)
    staff: list[StaffEntry] = Field(default_factory=list)
    equipment: list[EquipmentEntry] = Field(default_factory=list)
    sessions: list[SessionEntry] = Field(default_factory=list)
    next_ids: NextIds = Field(default_factory=NextIds)
