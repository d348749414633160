"""Domain types and contracts for env-version-tracker workflows."""

from .errors import (
    ConfigurationError,
    ConnectivityError,
    EnvTrackerError,
    GitCommandError,
    InvalidVersionFormatError,
    InvalidVersionTagError,
    StorageIOError,
    SyncError,
    ValidationError,
)
from .results import CommandResult

__all__ = [
    "CommandResult",
    "EnvTrackerError",
    "ConfigurationError",
    "ValidationError",
    "InvalidVersionTagError",
    "InvalidVersionFormatError",
    "SyncError",
    "ConnectivityError",
    "StorageIOError",
    "GitCommandError",
]
