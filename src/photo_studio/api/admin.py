"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from photo_studio.domain.snapshot import LedgerSnapshot

if TYPE_CHECKING:
    from photo_studio.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/snapshot", dependencies=[Depends(require_admin)])
async def snapshot(request: Request) -> LedgerSnapshot:
    """Return the current ledger snapshot."""
    container: AppContainer = request.app.state.container
    return container.ledger.export_state()


@router.post("/save", dependencies=[Depends(require_admin)])
async def save(request: Request) -> dict[str, object]:
    """Write the ledger to the configured data file."""
    container: AppContainer = request.app.state.container
    written = container.persistence_service.save()
    return {"status": "saved", "counts": _counts(written)}


@router.post("/load", dependencies=[Depends(require_admin)])
async def load(request: Request) -> dict[str, object]:
    """Replace the ledger with the configured data file."""
    container: AppContainer = request.app.state.container
    loaded = container.persistence_service.load()
    return {"status": "loaded", "counts": _counts(loaded)}


def _counts(snapshot: LedgerSnapshot) -> dict[str, int]:
    return {
        "clients": len(snapshot.clients),
        "staff": len(snapshot.staff),
        "equipment": len(snapshot.equipment),
        "sessions": len(snapshot.sessions),
    }
