"""Storage capability shared by the local and remote backends."""

from typing import Protocol, runtime_checkable

from envtracker.models import VersionRecord


@runtime_checkable
class VersionStorage(Protocol):
    """Read the latest record of an environment and append new ones.

    `get_latest` returns None when an environment has no record; it raises only
    for I/O or connectivity failures. `close` must be idempotent and safe to call
    when `init` never ran.
    """

    async def init(self) -> None: ...

    async def get_latest(self, environment: str) -> VersionRecord | None: ...

    async def save(self, record: VersionRecord) -> None: ...

    async def close(self) -> None: ...
