"""
Pydantic models for env-version-tracker records and configuration.

Field aliases keep the persisted JSON in camelCase so that storage files and
MongoDB documents stay readable by other tooling that shares them.
"""

from datetime import UTC, datetime
from typing import Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

StorageKind = Literal["local", "remote"]


def _new_record_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(UTC)


class VersionRecord(BaseModel):
    """One entry per (environment, push event)"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=_new_record_id)
    version: str
    environment: str
    commit_hash: Optional[str] = Field(None, alias="commitHash")
    commit_message: Optional[str] = Field(None, alias="commitMessage")
    author: Optional[str] = None
    created_at: datetime = Field(default_factory=_utc_now, alias="createdAt")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps (older files, BSON dates) are stored in UTC
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value

    def to_document(self) -> dict:
        """Serialize for storage, keeping datetimes as native objects."""
        return self.model_dump(by_alias=True)

    def to_json_dict(self) -> dict:
        """Serialize for JSON files (ISO-8601 timestamps)."""
        return self.model_dump(by_alias=True, mode="json")


class TrackerConfig(BaseModel):
    """Persisted tool configuration (.env-version-tracker/config.json)"""

    model_config = ConfigDict(populate_by_name=True)

    storage: Optional[StorageKind] = "local"
    storage_path: Optional[str] = Field(None, alias="storagePath")
    storage_env_file: Optional[str] = Field(None, alias="storageEnvFile")
    storage_env_files: dict[str, str] = Field(default_factory=dict, alias="storageEnvFiles")

    # Legacy direct connection fields (deprecated in favour of env files)
    storage_url: Optional[str] = Field(None, alias="storageUrl")
    storage_database: Optional[str] = Field(None, alias="storageDatabase")
    storage_collection: Optional[str] = Field(None, alias="storageCollection")


class RemoteStorageConfig(BaseModel):
    """Resolved connection parameters for the document store"""

    model_config = ConfigDict(frozen=True)

    url: str
    database: str
    collection: str = "versions"

    @property
    def identity(self) -> str:
        """Connection identity key; the collection does not affect the client."""
        return f"{self.url}|{self.database}"
