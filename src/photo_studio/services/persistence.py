"""Saving and loading the ledger through a snapshot store."""

import logging
from dataclasses import dataclass
from typing import Protocol

from photo_studio.domain.snapshot import LedgerSnapshot
from photo_studio.services.ledger import InventoryLedger

_logger = logging.getLogger(__name__)


class SnapshotStore(Protocol):
    """Durable storage for ledger snapshots."""

    def read(self) -> LedgerSnapshot:
        """Return the stored snapshot or raise PersistenceError."""

    def write(self, snapshot: LedgerSnapshot) -> None:
        """Store a snapshot or raise PersistenceError."""

    def exists(self) -> bool:
        """Return True if a snapshot has been stored."""


@dataclass
class PersistenceService:
    """Application service that moves ledger state to and from a store."""

    ledger: InventoryLedger
    store: SnapshotStore

    def save(self) -> LedgerSnapshot:
        """Write the current ledger state and return the written snapshot."""
        snapshot = self.ledger.export_state()
        self.store.write(snapshot)
        _logger.info(
            "Ledger saved: clients=%s staff=%s equipment=%s sessions=%s",
            len(snapshot.clients),
            len(snapshot.staff),
            len(snapshot.equipment),
            len(snapshot.sessions),
        )
        return snapshot

    def load(self) -> LedgerSnapshot:
        """Replace the ledger state with the stored snapshot."""
        snapshot = self.store.read()
        self.ledger.import_state(snapshot)
        return snapshot
