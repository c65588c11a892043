"""Dependency container wiring for the application."""

from dataclasses import dataclass

from photo_studio.adapters.json_snapshot_store import JsonSnapshotStore
from photo_studio.config import Settings
from photo_studio.services.ledger import InventoryLedger
from photo_studio.services.persistence import PersistenceService
from photo_studio.services.seed import seed_sample_data


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ledger: InventoryLedger
    persistence_service: PersistenceService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    ledger = InventoryLedger(
        require_known_client=resolved_settings.require_known_client
    )
    store = JsonSnapshotStore.create(resolved_settings.data_file)
    persistence_service = PersistenceService(ledger=ledger, store=store)
    will_load = resolved_settings.autoload and store.exists()
    if resolved_settings.seed_sample_data and not will_load:
        seed_sample_data(ledger)

    return AppContainer(
        settings=resolved_settings,
        ledger=ledger,
        persistence_service=persistence_service,
    )
