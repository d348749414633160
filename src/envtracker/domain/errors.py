"""Unified domain error taxonomy for version tracking workflows."""

from dataclasses import dataclass


@dataclass(slots=True)
class EnvTrackerError(Exception):
    """Base class for application/domain-level failures."""

    message: str
    code: str

    def __str__(self) -> str:
        return self.message


class ConfigurationError(EnvTrackerError):
    """Raised when storage is unset or credentials cannot be resolved."""


class ValidationError(EnvTrackerError):
    """Raised for bad input arguments or corrupted stored state."""


class InvalidVersionTagError(ValidationError):
    """Raised when a tag is neither a bump keyword nor a literal semver."""


class InvalidVersionFormatError(ValidationError):
    """Raised when a version string is not MAJOR.MINOR.PATCH."""


class SyncError(EnvTrackerError):
    """Raised when the upstream repository has nothing to receive."""


class ConnectivityError(EnvTrackerError):
    """Raised when the remote document store is unreachable."""


class StorageIOError(EnvTrackerError):
    """Raised for filesystem read/write/parse failures."""


class GitCommandError(EnvTrackerError):
    """Raised when a git subprocess exits with a failure."""
