"""
Motor connection manager.

The caller supplies the collection indexes at connect time; the unique
(userId, date) and (userId, weekStart) indexes are what turn a
concurrent duplicate write into a DuplicateKeyError instead of a second
document.

Example:
    db = MongoDB()
    await db.connect(uri, "mentalspace", indexes=COLLECTION_INDEXES)
    checkins = db.db["checkIns"]
"""

import logging
from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import IndexModel

logger = logging.getLogger(__name__)


class MongoDB:
    """One client, one database."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None

    async def connect(
        self,
        uri: str,
        database_name: str,
        indexes: Optional[Dict[str, List[IndexModel]]] = None,
        max_pool_size: int = 10,
        min_pool_size: int = 1,
    ) -> None:
        """
        Open the client and ensure indexes.

        Datetimes come back timezone-aware (UTC) so bad-day and crisis
        timestamps compare cleanly with datetime.now(timezone.utc).

        Args:
            indexes: Collection name -> index models to create
        """
        host = uri.rsplit("@", 1)[-1]
        logger.info(f"Connecting to MongoDB at {host}, database {database_name}")

        client = AsyncIOMotorClient(
            uri,
            maxPoolSize=max_pool_size,
            minPoolSize=min_pool_size,
            tz_aware=True,
        )
        try:
            for collection, models in (indexes or {}).items():
                await client[database_name][collection].create_indexes(models)
        except Exception as e:
            logger.error(f"Failed to prepare MongoDB indexes: {e}")
            client.close()
            raise

        self._client = client
        self._database_name = database_name
        logger.info(f"Connected to MongoDB database {database_name}")

    async def disconnect(self) -> None:
        if self._client:
            self._client.close()
            logger.info(f"Disconnected from MongoDB database {self._database_name}")
        self._client = None
        self._database_name = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """The Motor database handle services are built on."""
        if self._client is None:
            raise RuntimeError("Database not connected")
        return self._client[self._database_name]
