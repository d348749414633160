"""
Local storage backend

Keeps every VersionRecord in one JSON array. Saves rewrite the whole file
through a temp file and os.replace; concurrent writers are last-writer-wins.
"""

import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from envtracker.core.json_files import read_json, write_json_atomic
from envtracker.domain.errors import ConfigurationError, StorageIOError
from envtracker.models import VersionRecord

logger = logging.getLogger(__name__)


class LocalStorage:
    """File-backed VersionStorage"""

    def __init__(self, storage_path: str | Path | None):
        if not storage_path:
            raise ConfigurationError(
                message="Storage path is not configured. Run 'evt config local --storage-path <path>'",
                code="storage_path_missing",
            )
        self.path = Path(storage_path)

    def _read_records(self) -> list[VersionRecord]:
        if not self.path.exists():
            return []
        data = read_json(self.path)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array in {self.path}")
        return [VersionRecord.model_validate(item) for item in data]

    async def init(self) -> None:
        return None

    async def get_latest(self, environment: str) -> VersionRecord | None:
        try:
            records = [r for r in self._read_records() if r.environment == environment]
        except (OSError, ValueError, PydanticValidationError) as e:
            raise StorageIOError(
                message=f"Failed to get version: {e}", code="storage_read_failed"
            ) from e
        if not records:
            return None
        return max(records, key=lambda r: r.created_at)

    async def save(self, record: VersionRecord) -> None:
        try:
            records = self._read_records()
            records.append(record)
            write_json_atomic(self.path, [r.to_json_dict() for r in records])
        except (OSError, ValueError, PydanticValidationError) as e:
            raise StorageIOError(
                message=f"Failed to save version: {e}", code="storage_write_failed"
            ) from e
        logger.debug("Saved %s/%s to %s", record.environment, record.version, self.path)

    async def close(self) -> None:
        return None
