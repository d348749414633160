"""
Config Command

Switches the tracker between local and remote storage and records where the
remote credentials live.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from envtracker.core.config import ENV_FILE_KEYS, load_config, save_config
from envtracker.domain.errors import ConfigurationError, ValidationError
from envtracker.models import TrackerConfig

logger = logging.getLogger(__name__)

STORAGE_KINDS = ("local", "remote")


@dataclass(slots=True)
class ConfigureResult:
    config: TrackerConfig
    path: Path
    legacy: bool = False
    warnings: list[str] = field(default_factory=list)


def configure_storage(
    storage: str,
    *,
    storage_path: str | None = None,
    storage_env_file: str | None = None,
    env_files: dict[str, str] | None = None,
    storage_url: str | None = None,
    storage_database: str | None = None,
    storage_collection: str | None = None,
    workspace: Path | None = None,
) -> ConfigureResult:
    """Update and persist the storage configuration

    Args:
        storage: "local" or "remote"
        storage_path: JSON file for local storage
        storage_env_file: Credentials file shared by all environments
        env_files: Per-environment credentials files keyed by dev/staging/preprod/production
        storage_url / storage_database / storage_collection: Deprecated direct settings
        workspace: Project directory (default: cwd)

    Raises:
        ValidationError: Unknown storage kind or environment key
        ConfigurationError: Remote storage without any credentials source
    """
    if storage not in STORAGE_KINDS:
        raise ValidationError(
            message=f"Unknown storage type: {storage}. Use one of: {', '.join(STORAGE_KINDS)}",
            code="unknown_storage",
        )

    current = load_config(workspace)
    warnings: list[str] = []
    legacy = False
    env_files = {k: v for k, v in (env_files or {}).items() if v}
    unknown = sorted(set(env_files) - set(ENV_FILE_KEYS))
    if unknown:
        raise ValidationError(
            message=f"Unknown environment for env file: {', '.join(unknown)}",
            code="unknown_environment",
        )

    if storage == "local":
        updated = current.model_copy(
            update={
                "storage": "local",
                "storage_path": storage_path,
                "storage_env_file": None,
                "storage_env_files": {},
                "storage_url": None,
                "storage_database": None,
                "storage_collection": None,
            }
        )
        if not storage_path:
            warnings.append("No storage path provided. Please set it with --storage-path")
    elif storage_env_file or env_files:
        updated = current.model_copy(
            update={
                "storage": "remote",
                "storage_env_file": storage_env_file or current.storage_env_file,
                "storage_env_files": {**current.storage_env_files, **env_files},
                "storage_url": None,
                "storage_database": None,
                "storage_collection": None,
            }
        )
    elif storage_url:
        legacy = True
        warnings.append(
            "Direct configuration is deprecated. Please use --storage-env-file instead."
        )
        updated = current.model_copy(
            update={
                "storage": "remote",
                "storage_url": storage_url,
                "storage_database": storage_database,
                "storage_collection": storage_collection,
                "storage_env_file": None,
                "storage_env_files": {},
            }
        )
    else:
        raise ConfigurationError(
            message="For remote storage, you must provide --storage-env-file",
            code="env_file_required",
        )

    for warning in warnings:
        logger.warning(warning)
    path = save_config(updated, workspace)
    return ConfigureResult(config=updated, path=path, legacy=legacy, warnings=warnings)
