"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from photo_studio.api.admin import router as admin_router
from photo_studio.api.models import BookingIn, ClientIn, EquipmentIn, StaffIn
from photo_studio.app_logging import configure_logging
from photo_studio.containers import AppContainer
from photo_studio.domain.errors import (
    BookingConflict,
    InvalidTransition,
    LedgerError,
    NotFound,
    PersistenceError,
    ValidationError,
)
from photo_studio.domain.snapshot import (
    ClientEntry,
    EquipmentEntry,
    SessionEntry,
    StaffEntry,
)
from photo_studio.services.ledger import InventoryLedger

_ERROR_STATUS: dict[type[LedgerError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NotFound: status.HTTP_404_NOT_FOUND,
    BookingConflict: status.HTTP_409_CONFLICT,
    InvalidTransition: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        persistence = state_container.persistence_service
        if state_container.settings.autoload and persistence.store.exists():
            try:
                persistence.load()
            except PersistenceError:
                logger.exception("Failed to load studio snapshot on startup")
        yield
        if state_container.settings.autosave:
            try:
                persistence.save()
            except PersistenceError:
                logger.exception("Failed to save studio snapshot on shutdown")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(_request: Request, exc: LedgerError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Ledger request failed: %s", exc)
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.kind, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/clients", status_code=status.HTTP_201_CREATED)
    async def add_client(payload: ClientIn, request: Request) -> ClientEntry:
        """Register a client."""
        client = _ledger(request).add_client(payload.to_request())
        return ClientEntry.from_record(client)

    @app.get("/clients")
    async def list_clients(request: Request) -> list[ClientEntry]:
        """Return all clients."""
        return [ClientEntry.from_record(c) for c in _ledger(request).list_clients()]

    @app.get("/clients/{client_id}")
    async def get_client(client_id: int, request: Request) -> ClientEntry:
        """Return a client by id."""
        client = _ledger(request).find_client_by_id(client_id)
        if client is None:
            raise NotFound("client", client_id)
        return ClientEntry.from_record(client)

    @app.get("/clients/{client_id}/sessions")
    async def client_sessions(client_id: int, request: Request) -> list[SessionEntry]:
        """Return the sessions booked for a client."""
        sessions = _ledger(request).find_sessions_by_client(client_id)
        return [SessionEntry.from_record(s) for s in sessions]

    @app.post("/staff", status_code=status.HTTP_201_CREATED)
    async def add_staff(payload: StaffIn, request: Request) -> StaffEntry:
        """Register a photographer."""
        staff = _ledger(request).add_staff(payload.to_request())
        return StaffEntry.from_record(staff)

    @app.get("/staff")
    async def list_staff(request: Request) -> list[StaffEntry]:
        """Return all photographers."""
        return [StaffEntry.from_record(s) for s in _ledger(request).list_staff()]

    @app.get("/staff/{staff_id}")
    async def get_staff(staff_id: int, request: Request) -> StaffEntry:
        """Return a photographer by id."""
        staff = _ledger(request).find_staff_by_id(staff_id)
        if staff is None:
            raise NotFound("staff", staff_id)
        return StaffEntry.from_record(staff)

    @app.get("/staff/{staff_id}/sessions")
    async def staff_sessions(staff_id: int, request: Request) -> list[SessionEntry]:
        """Return the sessions assigned to a photographer."""
        sessions = _ledger(request).find_sessions_by_staff(staff_id)
        return [SessionEntry.from_record(s) for s in sessions]

    @app.post("/equipment", status_code=status.HTTP_201_CREATED)
    async def add_equipment(payload: EquipmentIn, request: Request) -> EquipmentEntry:
        """Register an equipment item."""
        equipment = _ledger(request).add_equipment(payload.to_request())
        return EquipmentEntry.from_record(equipment)

    @app.get("/equipment")
    async def list_equipment(
        request: Request, available: bool = False
    ) -> list[EquipmentEntry]:
        """Return all equipment, or only free items with ``available=true``."""
        ledger = _ledger(request)
        if available:
            items = ledger.list_available_equipment()
        else:
            items = ledger.list_equipment()
        return [EquipmentEntry.from_record(item) for item in items]

    @app.get("/equipment/{equipment_id}")
    async def get_equipment(equipment_id: int, request: Request) -> EquipmentEntry:
        """Return an equipment item by id."""
        equipment = _ledger(request).find_equipment_by_id(equipment_id)
        if equipment is None:
            raise NotFound("equipment", equipment_id)
        return EquipmentEntry.from_record(equipment)

    @app.post("/sessions", status_code=status.HTTP_201_CREATED)
    async def book_session(payload: BookingIn, request: Request) -> SessionEntry:
        """Book a session and reserve its equipment."""
        session = _ledger(request).book_session(payload.to_request())
        return SessionEntry.from_record(session)

    @app.get("/sessions")
    async def list_sessions(request: Request) -> list[SessionEntry]:
        """Return all sessions."""
        return [SessionEntry.from_record(s) for s in _ledger(request).list_sessions()]

    @app.get("/sessions/{session_id}")
    async def get_session(session_id: int, request: Request) -> SessionEntry:
        """Return a session by id."""
        session = _ledger(request).find_session_by_id(session_id)
        if session is None:
            raise NotFound("session", session_id)
        return SessionEntry.from_record(session)

    @app.post("/sessions/{session_id}/start")
    async def start_session(session_id: int, request: Request) -> SessionEntry:
        """Mark a planned session as in progress."""
        return SessionEntry.from_record(_ledger(request).start_session(session_id))

    @app.post("/sessions/{session_id}/complete")
    async def complete_session(session_id: int, request: Request) -> SessionEntry:
        """Complete a session and release its equipment."""
        return SessionEntry.from_record(_ledger(request).complete_session(session_id))

    @app.post("/sessions/{session_id}/cancel")
    async def cancel_session(session_id: int, request: Request) -> SessionEntry:
        """Cancel a session and release its equipment."""
        return SessionEntry.from_record(_ledger(request).cancel_session(session_id))

    return app


def _ledger(request: Request) -> InventoryLedger:
    container: AppContainer = request.app.state.container
    return container.ledger
