"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from photo_studio.config import Settings
from photo_studio.containers import AppContainer
from photo_studio.domain.equipment import EquipmentCategory, EquipmentRequest
from photo_studio.domain.errors import PersistenceError
from photo_studio.domain.models import ClientRequest, StaffRequest
from photo_studio.domain.snapshot import LedgerSnapshot
from photo_studio.services.ledger import InventoryLedger
from photo_studio.services.persistence import PersistenceService, SnapshotStore

FIXED_NOW = datetime(2024, 3, 1, 10, 0, tzinfo=UTC)
SESSION_AT = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


def client_request(
    first_name: str = "Anna", last_name: str = "Ivanova"
) -> ClientRequest:
    return ClientRequest(
        first_name=first_name,
        last_name=last_name,
        phone="+79161234567",
        email="anna@mail.ru",
    )


def staff_request(rate: int | str = 2000) -> StaffRequest:
    return StaffRequest(
        first_name="Maria",
        last_name="Petrova",
        specialization="Portrait photography",
        hourly_rate=Decimal(rate),
        experience_years=5,
    )


def equipment_request(
    name: str = "Lens",
    price: int | str = 500,
    category: EquipmentCategory = EquipmentCategory.LENS,
) -> EquipmentRequest:
    return EquipmentRequest(
        name=name,
        category=category,
        model="85mm f/1.8",
        rental_price=Decimal(price),
    )


@dataclass
class InMemorySnapshotStore(SnapshotStore):
    """In-memory snapshot store for tests."""

    snapshot: LedgerSnapshot | None = None
    writes: list[LedgerSnapshot] = field(default_factory=list)

    def read(self) -> LedgerSnapshot:
        if self.snapshot is None:
            raise PersistenceError("No snapshot stored")
        return self.snapshot

    def write(self, snapshot: LedgerSnapshot) -> None:
        self.snapshot = snapshot
        self.writes.append(snapshot)

    def exists(self) -> bool:
        return self.snapshot is not None


@dataclass
class FailingSnapshotStore(SnapshotStore):
    """Snapshot store whose I/O always fails."""

    def read(self) -> LedgerSnapshot:
        raise PersistenceError("disk unavailable")

    def write(self, snapshot: LedgerSnapshot) -> None:
        raise PersistenceError("disk unavailable")

    def exists(self) -> bool:
        return True


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        admin_token="admin-token",
        data_file=str(tmp_path / "studio_data.json"),
        seed_sample_data=False,
    )


@pytest.fixture
def ledger() -> InventoryLedger:
    return InventoryLedger(clock=fixed_clock)


@pytest.fixture
def stocked_ledger(ledger: InventoryLedger) -> InventoryLedger:
    """Ledger with one client, one photographer and two equipment items."""
    ledger.add_client(client_request())
    ledger.add_staff(staff_request(2000))
    ledger.add_equipment(equipment_request("Lens", 500))
    ledger.add_equipment(
        equipment_request("Canon EOS R5", 1500, EquipmentCategory.CAMERA)
    )
    return ledger


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def container(
    settings: Settings,
    stocked_ledger: InventoryLedger,
    snapshot_store: InMemorySnapshotStore,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        ledger=stocked_ledger,
        persistence_service=PersistenceService(
            ledger=stocked_ledger, store=snapshot_store
        ),
    )
