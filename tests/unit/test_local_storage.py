"""
Unit tests for the file-backed store
"""

import json

import pytest

from envtracker.domain.errors import ConfigurationError, StorageIOError
from envtracker.storage.local import LocalStorage


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "data" / "versions.json")


def test_missing_path_is_configuration_error():
    with pytest.raises(ConfigurationError, match="Storage path is not configured"):
        LocalStorage(None)


@pytest.mark.asyncio
async def test_get_latest_on_missing_file_returns_none(storage):
    assert await storage.get_latest("dev") is None
    assert not storage.path.exists()


@pytest.mark.asyncio
async def test_save_creates_parent_directory_and_json_array(storage, make_record):
    await storage.save(make_record("1.0.0", "dev"))

    payload = json.loads(storage.path.read_text(encoding="utf-8"))
    assert isinstance(payload, list)
    assert payload[0]["version"] == "1.0.0"
    assert "createdAt" in payload[0]
    assert "commitHash" in payload[0]


@pytest.mark.asyncio
async def test_get_latest_filters_by_environment(storage, make_record):
    dev = make_record("1.0.0", "dev", minutes=0)
    await storage.save(dev)
    await storage.save(make_record("3.0.0", "production", minutes=5))

    latest = await storage.get_latest("dev")
    assert latest == dev


@pytest.mark.asyncio
async def test_get_latest_picks_greatest_created_at(storage, make_record):
    newer = make_record("1.1.0", "dev", minutes=10)
    await storage.save(newer)
    await storage.save(make_record("1.0.0", "dev", minutes=1))

    latest = await storage.get_latest("dev")
    assert latest.version == "1.1.0"


@pytest.mark.asyncio
async def test_environment_lookup_is_case_sensitive(storage, make_record):
    await storage.save(make_record("1.0.0", "Dev"))
    assert await storage.get_latest("dev") is None


@pytest.mark.asyncio
async def test_round_trip_is_deep_equal(storage, make_record):
    record = make_record(
        "2.3.4", "staging", commit_hash="abc1234", commit_message="Fix | pipes", author="a@b.c"
    )
    await storage.save(record)
    assert await storage.get_latest("staging") == record


@pytest.mark.asyncio
async def test_save_keeps_previous_records(storage, make_record):
    for minute in range(3):
        await storage.save(make_record(f"0.0.{minute + 1}", "dev", minutes=minute))

    assert len(json.loads(storage.path.read_text(encoding="utf-8"))) == 3


@pytest.mark.asyncio
async def test_reads_records_written_with_naive_timestamps(storage):
    storage.path.parent.mkdir(parents=True)
    storage.path.write_text(
        json.dumps(
            [
                {"id": "1", "version": "1.0.0", "environment": "dev",
                 "createdAt": "2024-01-01T00:00:00"},
                {"id": "2", "version": "1.0.1", "environment": "dev",
                 "createdAt": "2024-01-02T00:00:00.000Z"},
            ]
        ),
        encoding="utf-8",
    )
    latest = await storage.get_latest("dev")
    assert latest.id == "2"
    assert latest.commit_hash is None


@pytest.mark.asyncio
async def test_corrupted_file_raises_storage_io_error(storage, make_record):
    storage.path.parent.mkdir(parents=True)
    storage.path.write_text("[{broken", encoding="utf-8")

    with pytest.raises(StorageIOError, match="Failed to get version"):
        await storage.get_latest("dev")
    with pytest.raises(StorageIOError, match="Failed to save version"):
        await storage.save(make_record("1.0.0", "dev"))
    assert storage.path.read_text(encoding="utf-8") == "[{broken"


@pytest.mark.asyncio
async def test_close_is_idempotent(storage):
    await storage.close()
    await storage.close()
