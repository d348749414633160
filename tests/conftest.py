import json
from datetime import UTC, datetime, timedelta

import pytest

from envtracker.core.config import get_config_file_path
from envtracker.models import VersionRecord


@pytest.fixture
def temp_workspace(tmp_path):
    """Create a temporary workspace directory"""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def write_config(temp_workspace):
    """Write .env-version-tracker/config.json in the workspace"""

    def _write(payload: dict) -> None:
        config_file = get_config_file_path(temp_workspace)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def local_workspace(temp_workspace, write_config):
    """Workspace configured for local storage in versions.json"""
    write_config({"storage": "local", "storagePath": str(temp_workspace / "versions.json")})
    return temp_workspace


@pytest.fixture
def make_record():
    """Build VersionRecords with deterministic timestamps"""
    base = datetime(2024, 1, 1, tzinfo=UTC)

    def _make(version: str, environment: str, minutes: int = 0, **kwargs) -> VersionRecord:
        return VersionRecord(
            version=version,
            environment=environment,
            created_at=base + timedelta(minutes=minutes),
            **kwargs,
        )

    return _make
