"""Storage backends for version records."""

from .base import VersionStorage
from .factory import create_storage, resolve_remote_settings
from .local import LocalStorage
from .remote import ConnectionManager, RemoteStorage

__all__ = [
    "VersionStorage",
    "LocalStorage",
    "RemoteStorage",
    "ConnectionManager",
    "create_storage",
    "resolve_remote_settings",
]
