"""Core utilities: versions, configuration, credentials, git and lifecycle."""

from .config import load_config, resolve_env_file, save_config
from .env_loader import load_env_file, load_remote_config
from .git import CommitInfo, GitClient, SyncOutcome
from .lifecycle import ShutdownHooks, run_with_shutdown
from .version import (
    DEFAULT_VERSION,
    SemanticVersion,
    next_version,
    parse_semantic_version,
    validate_version_tag,
)

__all__ = [
    "DEFAULT_VERSION",
    "SemanticVersion",
    "next_version",
    "parse_semantic_version",
    "validate_version_tag",
    "load_config",
    "save_config",
    "resolve_env_file",
    "load_env_file",
    "load_remote_config",
    "GitClient",
    "CommitInfo",
    "SyncOutcome",
    "ShutdownHooks",
    "run_with_shutdown",
]
