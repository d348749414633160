"""
Configuration layer

Reads and writes `.env-version-tracker/config.json` in the working directory and
resolves which credentials file applies to an environment.
"""

import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from envtracker.core.json_files import read_json, write_json_atomic
from envtracker.domain.errors import StorageIOError
from envtracker.models import TrackerConfig

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".env-version-tracker"
CONFIG_FILENAME = "config.json"

# Environment names accepted on the command line -> key in storageEnvFiles
ENVIRONMENT_ALIASES: dict[str, str] = {
    "dev": "dev",
    "development": "dev",
    "staging": "staging",
    "preprod": "preprod",
    "prod": "production",
    "production": "production",
}
ENV_FILE_KEYS = ("dev", "staging", "preprod", "production")


def get_config_dir(workspace_path: Path | None = None) -> Path:
    """Get the .env-version-tracker directory path"""
    return (workspace_path or Path.cwd()) / CONFIG_DIRNAME


def get_config_file_path(workspace_path: Path | None = None) -> Path:
    """Get the config file path"""
    return get_config_dir(workspace_path) / CONFIG_FILENAME


def load_config(workspace_path: Path | None = None) -> TrackerConfig:
    """Load configuration, falling back to defaults when missing or unreadable"""
    config_file = get_config_file_path(workspace_path)
    if not config_file.exists():
        return TrackerConfig()

    try:
        return TrackerConfig.model_validate(read_json(config_file))
    except (OSError, ValueError, PydanticValidationError) as e:
        logger.warning("Error loading config %s: %s; using defaults", config_file, e)
        return TrackerConfig()


def save_config(config: TrackerConfig, workspace_path: Path | None = None) -> Path:
    """Persist configuration and return the file written"""
    config_file = get_config_file_path(workspace_path)
    try:
        write_json_atomic(config_file, config.model_dump(by_alias=True))
    except OSError as e:
        raise StorageIOError(
            message=f"Failed to save config: {e}", code="config_write_failed"
        ) from e
    logger.debug("Saved config to %s", config_file)
    return config_file


def environment_key(environment: str) -> str:
    """Map an environment name onto its storageEnvFiles key"""
    lowered = environment.lower()
    return ENVIRONMENT_ALIASES.get(lowered, lowered)


def resolve_env_file(config: TrackerConfig, environment: str) -> str | None:
    """Credentials file for an environment, or None when nothing is configured

    Only meaningful for remote storage. Environment-specific files win over the
    shared storageEnvFile.
    """
    if config.storage != "remote":
        return None
    env_file = config.storage_env_files.get(environment_key(environment))
    return env_file or config.storage_env_file or None
