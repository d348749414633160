"""
Remote storage backend (MongoDB)

A ConnectionManager owns the pooled client for the whole process and is injected
into every RemoteStorage, so stores built for the same URL and database share one
connection instead of reconnecting.
"""

import asyncio
import logging
from typing import Any, Callable

from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from envtracker.domain.errors import ConnectivityError, StorageIOError
from envtracker.models import RemoteStorageConfig, VersionRecord

logger = logging.getLogger(__name__)

POOL_OPTIONS: dict[str, Any] = {
    "maxPoolSize": 10,
    "minPoolSize": 2,
    "serverSelectionTimeoutMS": 5000,
    "socketTimeoutMS": 45000,
    "tz_aware": True,
}

ClientFactory = Callable[..., Any]


async def _close_quietly(client: Any) -> None:
    try:
        await client.close()
    except Exception as e:
        logger.warning("Error closing MongoDB connection: %s", e)


class ConnectionManager:
    """Process-wide holder of one AsyncMongoClient and its database handle

    Usage:
        manager = ConnectionManager()
        db = await manager.connect(settings)
        ...
        await manager.close()
    """

    def __init__(self, client_factory: ClientFactory = AsyncMongoClient):
        self._client_factory = client_factory
        self._client: Any = None
        self._db: Any = None
        self._identity: str | None = None
        self._lock = asyncio.Lock()
        self.connections_opened = 0

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._db is not None

    @property
    def identity(self) -> str | None:
        return self._identity

    async def connect(self, settings: RemoteStorageConfig) -> Any:
        """Return the database for settings, opening a client only when needed

        Concurrent callers wait on the same lock, so overlapping calls open at
        most one client. A held client for other settings is closed first.

        Raises:
            ConnectivityError: If the server cannot be reached
        """
        async with self._lock:
            if self.is_connected and self._identity == settings.identity:
                return self._db

            if self._client is not None:
                logger.info("Closing connection to %s before reconnecting", self._identity)
                await self._reset()

            try:
                client = self._client_factory(settings.url, **POOL_OPTIONS)
            except PyMongoError as e:
                raise ConnectivityError(
                    message=f"Failed to connect to MongoDB: {e}", code="connection_failed"
                ) from e
            try:
                await client.admin.command("ping")
            except PyMongoError as e:
                await _close_quietly(client)
                raise ConnectivityError(
                    message=f"Failed to connect to MongoDB: {e}", code="connection_failed"
                ) from e

            self._client = client
            self._db = client[settings.database]
            self._identity = settings.identity
            self.connections_opened += 1
            logger.debug("Connected to MongoDB database %s", settings.database)
            return self._db

    async def ensure_connection(self, settings: RemoteStorageConfig) -> Any:
        """Reconnect when the tracked connection is gone or belongs to other settings"""
        if self.is_connected and self._identity == settings.identity:
            return self._db
        return await self.connect(settings)

    async def _reset(self) -> None:
        client = self._client
        self._client = None
        self._db = None
        self._identity = None
        if client is not None:
            await _close_quietly(client)

    async def close(self) -> None:
        """Tear down the shared client; safe to call repeatedly"""
        async with self._lock:
            await self._reset()


class RemoteStorage:
    """MongoDB-backed VersionStorage; connects lazily when init() was skipped"""

    def __init__(self, settings: RemoteStorageConfig, manager: ConnectionManager):
        self.settings = settings
        self.manager = manager

    async def init(self) -> None:
        await self.manager.connect(self.settings)

    async def _collection(self) -> Any:
        db = await self.manager.ensure_connection(self.settings)
        return db[self.settings.collection]

    async def get_latest(self, environment: str) -> VersionRecord | None:
        collection = await self._collection()
        try:
            document = await collection.find_one(
                {"environment": environment}, sort=[("createdAt", -1)]
            )
        except ConnectionFailure as e:
            raise ConnectivityError(
                message=f"Failed to get version: {e}", code="connection_lost"
            ) from e
        except PyMongoError as e:
            raise StorageIOError(
                message=f"Failed to get version: {e}", code="storage_read_failed"
            ) from e
        if document is None:
            return None
        return VersionRecord.model_validate(document)

    async def save(self, record: VersionRecord) -> None:
        collection = await self._collection()
        try:
            await collection.insert_one(record.to_document())
        except ConnectionFailure as e:
            raise ConnectivityError(
                message=f"Failed to save version: {e}", code="connection_lost"
            ) from e
        except PyMongoError as e:
            raise StorageIOError(
                message=f"Failed to save version: {e}", code="storage_write_failed"
            ) from e

    async def close(self) -> None:
        await self.manager.close()
