"""In-memory ledger enforcing the studio's booking rules."""

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError as SchemaValidationError

from photo_studio.domain.equipment import (
    DEFAULT_CONDITION,
    Equipment,
    EquipmentCategory,
    EquipmentRequest,
)
from photo_studio.domain.errors import (
    BookingConflict,
    InvalidTransition,
    NotFound,
    PersistenceError,
    ValidationError,
)
from photo_studio.domain.models import (
    Client,
    ClientRequest,
    ContactInfo,
    Staff,
    StaffRequest,
)
from photo_studio.domain.sessions import BookingRequest, Session, SessionStatus
from photo_studio.domain.snapshot import (
    ClientEntry,
    EquipmentEntry,
    LedgerSnapshot,
    NextIds,
    SessionEntry,
    StaffEntry,
)
from photo_studio.services.pricing import session_cost

_logger = logging.getLogger(__name__)

_COLLECTIONS = ("client", "staff", "equipment", "session")


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class InventoryLedger:
    """Authoritative holder of clients, staff, equipment and sessions.

    Every public operation runs inside a single lock so that the
    availability check and the reservation in ``book_session`` happen as
    one step, and ``import_state`` swaps all collections at once.
    """

    require_known_client: bool = False
    clock: Callable[[], datetime] = _utc_now
    _clients: dict[int, Client] = field(default_factory=dict, init=False, repr=False)
    _staff: dict[int, Staff] = field(default_factory=dict, init=False, repr=False)
    _equipment: dict[int, Equipment] = field(
        default_factory=dict, init=False, repr=False
    )
    _sessions: dict[int, Session] = field(
        default_factory=dict, init=False, repr=False
    )
    _next_ids: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(_COLLECTIONS, 1),
        init=False,
        repr=False,
    )
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def add_client(self, request: ClientRequest) -> Client:
        """Register a client and return it with its assigned id."""
        contact = _contact_from(request)
        with self._lock:
            client = Client(
                id=self._take_id("client"),
                contact=contact,
                registered_at=self.clock(),
                sessions_count=0,
            )
            self._clients[client.id] = client
        _logger.info("Client added: id=%s", client.id)
        return client

    def add_staff(self, request: StaffRequest) -> Staff:
        """Register a photographer and return it with its assigned id."""
        contact = _contact_from(request)
        hourly_rate = _non_negative_decimal(request.hourly_rate, "hourly_rate")
        experience = _non_negative_int(request.experience_years, "experience_years")
        with self._lock:
            staff = Staff(
                id=self._take_id("staff"),
                contact=contact,
                specialization=_optional_text(
                    request.specialization, "specialization"
                ),
                hourly_rate=hourly_rate,
                experience_years=experience,
            )
            self._staff[staff.id] = staff
        _logger.info("Staff added: id=%s rate=%s", staff.id, staff.hourly_rate)
        return staff

    def add_equipment(self, request: EquipmentRequest) -> Equipment:
        """Register an equipment item and return it with its assigned id."""
        name = _require_text(request.name, "name")
        model = _optional_text(request.model, "model")
        condition = _optional_text(request.condition, "condition")
        category = _category(request.category)
        rental_price = _non_negative_decimal(request.rental_price, "rental_price")
        with self._lock:
            equipment = Equipment(
                id=self._take_id("equipment"),
                name=name,
                category=category,
                model=model,
                rental_price=rental_price,
                is_available=bool(request.is_available),
                condition=condition or DEFAULT_CONDITION,
            )
            self._equipment[equipment.id] = equipment
        _logger.info("Equipment added: id=%s name=%s", equipment.id, equipment.name)
        return equipment

    def find_client_by_id(self, client_id: int) -> Client | None:
        """Return a client by id, if present."""
        with self._lock:
            return self._clients.get(client_id)

    def find_staff_by_id(self, staff_id: int) -> Staff | None:
        """Return a staff member by id, if present."""
        with self._lock:
            return self._staff.get(staff_id)

    def find_equipment_by_id(self, equipment_id: int) -> Equipment | None:
        """Return an equipment item by id, if present."""
        with self._lock:
            return self._equipment.get(equipment_id)

    def find_session_by_id(self, session_id: int) -> Session | None:
        """Return a session by id, if present."""
        with self._lock:
            return self._sessions.get(session_id)

    def list_clients(self) -> list[Client]:
        with self._lock:
            return list(self._clients.values())

    def list_staff(self) -> list[Staff]:
        with self._lock:
            return list(self._staff.values())

    def list_equipment(self) -> list[Equipment]:
        with self._lock:
            return list(self._equipment.values())

    def list_sessions(self) -> list[Session]:
        with self._lock:
            return list(self._sessions.values())

    def list_available_equipment(self) -> list[Equipment]:
        """Return equipment that is free to book, in insertion order."""
        with self._lock:
            return [item for item in self._equipment.values() if item.is_available]

    def find_sessions_by_client(self, client_id: int) -> list[Session]:
        """Return every session booked for a client."""
        with self._lock:
            return [s for s in self._sessions.values() if s.client_id == client_id]

    def find_sessions_by_staff(self, staff_id: int) -> list[Session]:
        """Return every session assigned to a photographer."""
        with self._lock:
            return [s for s in self._sessions.values() if s.staff_id == staff_id]

    def book_session(self, request: BookingRequest) -> Session:
        """Book a session, reserving all requested equipment or none of it.

        Raises ``ValidationError`` for a missing or ill-typed field, a bad
        duration, duplicate equipment ids or unknown staff/equipment, and
        ``BookingConflict`` when any requested item is already reserved.
        The cost is fixed from the rates in effect at booking time.
        """
        client_id = _require_id(request.client_id, "client_id")
        staff_id = _require_id(request.staff_id, "staff_id")
        scheduled_at = _require_datetime(request.scheduled_at, "scheduled_at")
        duration = _positive_int(request.duration_hours, "duration_hours")
        session_type = _optional_text(request.session_type, "session_type")
        location = _optional_text(request.location, "location")
        equipment_ids = tuple(request.equipment_ids or ())
        if len(set(equipment_ids)) != len(equipment_ids):
            raise ValidationError("Duplicate equipment ids in booking request")

        with self._lock:
            staff = self._staff.get(staff_id)
            if staff is None:
                raise ValidationError(f"Staff #{staff_id} does not exist")
            client = self._clients.get(client_id)
            if client is None and self.require_known_client:
                raise ValidationError(f"Client #{client_id} does not exist")

            items: list[Equipment] = []
            for equipment_id in equipment_ids:
                equipment = self._equipment.get(equipment_id)
                if equipment is None:
                    raise ValidationError(f"Equipment #{equipment_id} does not exist")
                items.append(equipment)
            for equipment in items:
                if not equipment.is_available:
                    raise BookingConflict(equipment.id, equipment.name)

            total_cost = session_cost(
                staff.hourly_rate, (item.rental_price for item in items), duration
            )
            for equipment in items:
                self._equipment[equipment.id] = replace(equipment, is_available=False)
            session = Session(
                id=self._take_id("session"),
                client_id=client_id,
                staff_id=staff.id,
                equipment_ids=equipment_ids,
                scheduled_at=scheduled_at,
                duration_hours=duration,
                session_type=session_type,
                location=location,
                status=SessionStatus.PLANNED,
                total_cost=total_cost,
            )
            self._sessions[session.id] = session
            if client is not None:
                self._clients[client.id] = replace(
                    client, sessions_count=client.sessions_count + 1
                )

        if client is None:
            _logger.warning(
                "Session %s booked for unknown client %s; counter not updated",
                session.id,
                client_id,
            )
        _logger.info(
            "Session booked: id=%s staff_id=%s equipment=%s total_cost=%s",
            session.id,
            session.staff_id,
            list(session.equipment_ids),
            session.total_cost,
        )
        return session

    def start_session(self, session_id: int) -> Session:
        """Move a planned session to in-progress."""
        return self._transition(session_id, SessionStatus.IN_PROGRESS)

    def complete_session(self, session_id: int) -> Session:
        """Complete a session and release its equipment."""
        return self._transition(session_id, SessionStatus.COMPLETED)

    def cancel_session(self, session_id: int) -> Session:
        """Cancel a session and release its equipment."""
        return self._transition(session_id, SessionStatus.CANCELLED)

    def export_state(self) -> LedgerSnapshot:
        """Return a full snapshot of all collections and id counters."""
        with self._lock:
            return LedgerSnapshot(
                clients=[ClientEntry.from_record(c) for c in self._clients.values()],
                staff=[StaffEntry.from_record(s) for s in self._staff.values()],
                equipment=[
                    EquipmentEntry.from_record(e) for e in self._equipment.values()
                ],
                sessions=[
                    SessionEntry.from_record(s) for s in self._sessions.values()
                ],
                next_ids=NextIds(**self._next_ids),
            )

    def import_state(self, snapshot: LedgerSnapshot | Mapping[str, object]) -> None:
        """Replace all state with a snapshot.

        The snapshot is validated completely before anything is replaced,
        so a rejected snapshot leaves the current state untouched.
        """
        if isinstance(snapshot, LedgerSnapshot):
            parsed = snapshot
        else:
            try:
                parsed = LedgerSnapshot.model_validate(snapshot)
            except SchemaValidationError as exc:
                raise PersistenceError(f"Malformed snapshot: {exc}") from exc

        clients = _index(parsed.clients, "client")
        staff = _index(parsed.staff, "staff")
        equipment = _index(parsed.equipment, "equipment")
        sessions = _index(parsed.sessions, "session")
        _reserve_for_active_sessions(staff, equipment, sessions)
        next_ids = _reconcile_counters(
            parsed.next_ids,
            {
                "client": clients,
                "staff": staff,
                "equipment": equipment,
                "session": sessions,
            },
        )

        with self._lock:
            self._clients = clients
            self._staff = staff
            self._equipment = equipment
            self._sessions = sessions
            self._next_ids = next_ids
        _logger.info(
            "Ledger imported: clients=%s staff=%s equipment=%s sessions=%s",
            len(clients),
            len(staff),
            len(equipment),
            len(sessions),
        )

    def _transition(self, session_id: int, target: SessionStatus) -> Session:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise NotFound("session", session_id)
            if not session.status.can_transition_to(target):
                raise InvalidTransition(session_id, session.status.value, target.value)
            updated = replace(session, status=target)
            self._sessions[session_id] = updated
            if not target.is_active:
                self._release(updated.equipment_ids)
        _logger.info("Session %s moved to %s", session_id, target.value)
        return updated

    def _release(self, equipment_ids: tuple[int, ...]) -> None:
        for equipment_id in equipment_ids:
            equipment = self._equipment.get(equipment_id)
            if equipment is not None:
                self._equipment[equipment_id] = replace(equipment, is_available=True)

    def _take_id(self, collection: str) -> int:
        next_id = self._next_ids[collection]
        self._next_ids[collection] = next_id + 1
        return next_id


def _contact_from(request: ClientRequest | StaffRequest) -> ContactInfo:
    return ContactInfo(
        first_name=_require_text(request.first_name, "first_name"),
        last_name=_require_text(request.last_name, "last_name"),
        phone=_optional_text(request.phone, "phone"),
        email=_optional_text(request.email, "email"),
    )


def _require_text(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} is required")
    return value


def _optional_text(value: object, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def _require_id(value: object, field_name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer id")
    return value


def _require_datetime(value: object, field_name: str) -> datetime:
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a datetime")
    return value


def _category(value: object) -> EquipmentCategory:
    try:
        return EquipmentCategory(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown equipment category: {value!r}") from exc


def _non_negative_decimal(value: object, field_name: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return amount


def _non_negative_int(value: object, field_name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValidationError(f"{field_name} must be a non-negative integer")
    return value


def _positive_int(value: object, field_name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return value


def _index(entries: list, entity: str) -> dict:
    records = {}
    for entry in entries:
        if entry.id in records:
            raise PersistenceError(f"Duplicate {entity} id {entry.id} in snapshot")
        records[entry.id] = entry.to_record()
    return records


def _reserve_for_active_sessions(
    staff: dict[int, Staff],
    equipment: dict[int, Equipment],
    sessions: dict[int, Session],
) -> None:
    """Check active sessions against the snapshot and mark their items taken.

    An active session must name a known photographer and known equipment,
    and no item may be held by two active sessions.
    """
    holders: dict[int, int] = {}
    for session in sessions.values():
        if not session.status.is_active:
            continue
        if session.staff_id not in staff:
            raise PersistenceError(
                f"Session {session.id} references unknown staff {session.staff_id}"
            )
        for equipment_id in session.equipment_ids:
            item = equipment.get(equipment_id)
            if item is None:
                raise PersistenceError(
                    f"Session {session.id} references unknown equipment "
                    f"{equipment_id}"
                )
            if equipment_id in holders:
                raise PersistenceError(
                    f"Equipment {equipment_id} is held by sessions "
                    f"{holders[equipment_id]} and {session.id}"
                )
            holders[equipment_id] = session.id
            if item.is_available:
                _logger.warning(
                    "Equipment %s held by active session %s was stored as "
                    "available; marking it reserved",
                    equipment_id,
                    session.id,
                )
                equipment[equipment_id] = replace(item, is_available=False)


def _reconcile_counters(
    next_ids: NextIds, collections: dict[str, dict[int, object]]
) -> dict[str, int]:
    """Raise any counter that would hand out an id already in use."""
    counters = next_ids.model_dump()
    for name, records in collections.items():
        floor = max(records, default=0) + 1
        if counters[name] < floor:
            _logger.warning(
                "Snapshot next %s id %s is behind existing ids; using %s",
                name,
                counters[name],
                floor,
            )
            counters[name] = floor
    return counters
