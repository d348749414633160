"""Build the configured storage backend for one environment."""

from pathlib import Path

from envtracker.core.config import ENV_FILE_KEYS, environment_key, resolve_env_file
from envtracker.core.env_loader import load_remote_config
from envtracker.domain.errors import ConfigurationError
from envtracker.models import RemoteStorageConfig, TrackerConfig

from .base import VersionStorage
from .local import LocalStorage
from .remote import ConnectionManager, RemoteStorage


def missing_env_file_hint(environment: str) -> str:
    """Command lines that would configure credentials for environment"""
    key = environment_key(environment)
    option = f"--env-file-{key}" if key in ENV_FILE_KEYS else "--storage-env-file"
    return (
        f"To configure, run:\n  evt config remote {option} .env.{key}\n"
        "Or configure for all environments:\n  evt config remote --storage-env-file .env"
    )


def resolve_remote_settings(
    config: TrackerConfig, environment: str, base_dir: Path | None = None
) -> RemoteStorageConfig:
    """Connection settings for environment from its credentials file or legacy fields

    Raises:
        ConfigurationError: If nothing is configured for environment
    """
    env_file = resolve_env_file(config, environment)
    if env_file:
        return load_remote_config(env_file, base_dir=base_dir)

    if config.storage_url:
        if not config.storage_database:
            raise ConfigurationError(
                message="MongoDB database is not configured (storageDatabase)",
                code="storage_database_missing",
            )
        return RemoteStorageConfig(
            url=config.storage_url,
            database=config.storage_database,
            collection=config.storage_collection or "versions",
        )

    raise ConfigurationError(
        message=f'No .env file configured for environment "{environment}"',
        code="env_file_missing",
    )


def create_storage(
    config: TrackerConfig,
    environment: str,
    manager: ConnectionManager | None = None,
    base_dir: Path | None = None,
) -> VersionStorage:
    """Instantiate the backend selected by config; no connection is opened here

    Raises:
        ConfigurationError: If storage is unset or incompletely configured
    """
    if not config.storage:
        raise ConfigurationError(
            message="Storage not configured. Run 'evt config' command first.",
            code="storage_not_configured",
        )
    if config.storage == "local":
        path = config.storage_path
        if path and base_dir is not None and not Path(path).is_absolute():
            path = str(base_dir / path)
        return LocalStorage(path)

    settings = resolve_remote_settings(config, environment, base_dir=base_dir)
    return RemoteStorage(settings, manager or ConnectionManager())
