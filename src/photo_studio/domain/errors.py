"""Typed errors raised by the studio ledger."""


class LedgerError(Exception):
    """Base class for recoverable ledger errors."""

    kind = "ledger_error"


class ValidationError(LedgerError):
    """Raised when a request is malformed or references unknown records."""

    kind = "validation_error"


class BookingConflict(LedgerError):
    """Raised when requested equipment is already reserved."""

    kind = "booking_conflict"

    def __init__(self, equipment_id: int, equipment_name: str) -> None:
        super().__init__(
            f"Equipment #{equipment_id} ({equipment_name}) is already booked"
        )
        self.equipment_id = equipment_id
        self.equipment_name = equipment_name


class NotFound(LedgerError):
    """Raised when a record looked up by id does not exist."""

    kind = "not_found"

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity.capitalize()} #{entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransition(LedgerError):
    """Raised when a session status change is not allowed."""

    kind = "invalid_transition"

    def __init__(self, session_id: int, current: str, target: str) -> None:
        super().__init__(
            f"Session #{session_id} cannot move from {current} to {target}"
        )
        self.session_id = session_id
        self.current = current
        self.target = target


class PersistenceError(LedgerError):
    """Raised when a snapshot cannot be read, written or applied."""

    kind = "persistence_error"
