"""JSON file snapshot store."""

import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError as SchemaValidationError

from photo_studio.domain.errors import PersistenceError
from photo_studio.domain.snapshot import LedgerSnapshot
from photo_studio.services.persistence import SnapshotStore


@dataclass
class JsonSnapshotStore(SnapshotStore):
    """Stores the ledger snapshot as an indented JSON document."""

    path: Path

    @classmethod
    def create(cls, path: str | Path) -> "JsonSnapshotStore":
        """Create a store for the given file path."""
        return cls(path=Path(path))

    def exists(self) -> bool:
        """Return True if the snapshot file exists."""
        return self.path.is_file()

    def read(self) -> LedgerSnapshot:
        """Read and validate the snapshot file."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise PersistenceError(f"Snapshot file not found: {self.path}") from exc
        except OSError as exc:
            raise PersistenceError(f"Failed to read {self.path}: {exc}") from exc
        try:
            return LedgerSnapshot.model_validate_json(raw)
        except SchemaValidationError as exc:
            raise PersistenceError(f"Malformed snapshot in {self.path}") from exc

    def write(self, snapshot: LedgerSnapshot) -> None:
        """Write the snapshot, replacing the previous file atomically."""
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(f"Failed to write {self.path}: {exc}") from exc
