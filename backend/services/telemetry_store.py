"""
Telemetry Store

Read-only access to raw gameplay telemetry in MongoDB. The report pipeline
never touches the database; the server fetches a player's batch here and
hands it over once the fetch has completed.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class TelemetryStoreError(Exception):
    """Raised when the telemetry database cannot be read."""


class TelemetryStore:
    """Fetches raw telemetry documents from the game_data collection."""

    def __init__(self, db: AsyncIOMotorDatabase, collection: str = "game_data"):
        self.db = db
        self.collection = collection

    @classmethod
    def from_url(cls, mongo_url: str, db_name: str, collection: str = "game_data") -> "TelemetryStore":
        client = AsyncIOMotorClient(mongo_url)
        return cls(client[db_name], collection)

    async def fetch_player_entries(self, username: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """All raw events for one player, without MongoDB's _id field."""
        try:
            cursor = self.db[self.collection].find({"username": username}, {"_id": 0})
            return await cursor.to_list(limit)
        except Exception as e:
            logger.error(f"Error fetching telemetry for {username}: {e}")
            raise TelemetryStoreError(f"Could not fetch telemetry for {username}") from e

    def close(self):
        self.db.client.close()
