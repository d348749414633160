"""
Credentials file loader

Parses `.env` style files (KEY=VALUE) into dictionaries and builds the remote
storage connection settings from them.
"""

from pathlib import Path

from dotenv import dotenv_values

from envtracker.domain.errors import ConfigurationError, StorageIOError
from envtracker.models import RemoteStorageConfig

URL_KEYS = ("DATABASE_URL", "DATABASE_URI", "DB_URL", "DB_URI")
DATABASE_KEYS = ("DATABASE_NAME", "DATABASE", "DB_NAME", "DB")
COLLECTION_KEYS = ("COLLECTION_NAME", "COLLECTION", "TABLE_NAME", "TABLE")

ENV_FILE_INSTRUCTIONS = """\
Required environment variables in your .env file:

  # Database Connection URL
  DATABASE_URL=mongodb://localhost:27017
  # Or use: DATABASE_URI, DB_URL, DB_URI

  # Database Name
  DATABASE_NAME=version-tracker
  # Or use: DATABASE, DB_NAME, DB

  # Collection/Table Name
  COLLECTION_NAME=versions
  # Or use: COLLECTION, TABLE_NAME, TABLE
"""


def load_env_file(env_file_path: str | Path, base_dir: Path | None = None) -> dict[str, str]:
    """Load a credentials file; relative paths resolve against base_dir (default: cwd)"""
    path = Path(env_file_path)
    if not path.is_absolute():
        path = (base_dir or Path.cwd()) / path

    if not path.exists():
        raise ConfigurationError(
            message=f"Environment file not found: {path}", code="env_file_not_found"
        )
    try:
        values = dotenv_values(path, interpolate=False, encoding="utf-8")
    except OSError as e:
        raise StorageIOError(
            message=f"Failed to read environment file {path}: {e}", code="env_file_unreadable"
        ) from e
    return {key: value for key, value in values.items() if value is not None}


def _first_value(env: dict[str, str], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        if env.get(key):
            return env[key]
    return None


def remote_config_from_env(env: dict[str, str]) -> RemoteStorageConfig:
    """Build connection settings from parsed credentials"""
    url = _first_value(env, URL_KEYS)
    if not url:
        raise ConfigurationError(
            message="Database URL not found in environment file. Please set DATABASE_URL",
            code="missing_database_url",
        )
    database = _first_value(env, DATABASE_KEYS)
    if not database:
        raise ConfigurationError(
            message="Database name not found in environment file. Please set DATABASE_NAME",
            code="missing_database_name",
        )
    collection = _first_value(env, COLLECTION_KEYS)
    if not collection:
        raise ConfigurationError(
            message=(
                "Collection/Table name not found in environment file. "
                "Please set COLLECTION_NAME"
            ),
            code="missing_collection_name",
        )
    return RemoteStorageConfig(url=url, database=database, collection=collection)


def load_remote_config(env_file_path: str | Path, base_dir: Path | None = None) -> RemoteStorageConfig:
    return remote_config_from_env(load_env_file(env_file_path, base_dir=base_dir))
