"""
env-version-tracker

Track the last pushed semantic version of every deployment environment in a
local JSON file or a MongoDB collection.
"""

__version__ = "1.0.0"

from .core.version import next_version, parse_semantic_version, validate_version_tag
from .models import RemoteStorageConfig, TrackerConfig, VersionRecord
from .storage import ConnectionManager, LocalStorage, RemoteStorage, VersionStorage

__all__ = [
    "__version__",
    "VersionRecord",
    "TrackerConfig",
    "RemoteStorageConfig",
    "VersionStorage",
    "LocalStorage",
    "RemoteStorage",
    "ConnectionManager",
    "next_version",
    "parse_semantic_version",
    "validate_version_tag",
]
