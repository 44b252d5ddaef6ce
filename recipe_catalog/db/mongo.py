"""MongoDB connection lifecycle.

MongoConnection owns one AsyncMongoClient for the lifetime of the application.
The client is created lazily on first use, verified with a ping on connect(),
and released on close(). Components receive the database handle explicitly;
nothing reaches for a module-level client.
"""

from typing import Callable, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from recipe_catalog.errors.errors import StoreFailure
from recipe_catalog.utils.logger import logger

RECIPES_COLLECTION = "recipes"
TAGS_COLLECTION = "tags"
CUISINES_COLLECTION = "cuisines"
INGREDIENTS_COLLECTION = "ingredients"


def _default_client_factory(uri: str) -> AsyncMongoClient:
    return AsyncMongoClient(uri, server_api=ServerApi("1"))


class MongoConnection:
    """Lazily-initialized, explicitly closed MongoDB client."""

    def __init__(
        self,
        uri: str,
        db_name: str,
        client_factory: Optional[Callable[[str], AsyncMongoClient]] = None,
    ) -> None:
        """Initialize the connection holder (no network activity).

        Args:
            uri: MongoDB connection string.
            db_name: Name of the catalog database.
            client_factory: Builds the client from the uri (tests inject fakes).

        Raises:
            ValueError: If uri or db_name is empty.
        """
        if not uri:
            raise ValueError("MONGO_URI is required")
        if not db_name:
            raise ValueError("MONGO_DB_NAME is required")

        self.uri = uri
        self.db_name = db_name
        self._client_factory = client_factory or _default_client_factory
        self._client: Optional[AsyncMongoClient] = None

    @property
    def client(self) -> AsyncMongoClient:
        if self._client is None:
            self._client = self._client_factory(self.uri)
        return self._client

    @property
    def database(self) -> AsyncDatabase:
        return self.client[self.db_name]

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def connect(self) -> AsyncDatabase:
        """Create the client if needed and verify the server is reachable.

        Returns:
            The catalog database handle.

        Raises:
            StoreFailure: If the server does not answer the ping.
        """
        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            raise StoreFailure(f"Could not connect to MongoDB: {e}") from e

        logger.info(f"Connected to MongoDB (database={self.db_name})")
        return self.database

    async def close(self) -> None:
        """Close the client. Safe to call when never opened or already closed."""
        if self._client is None:
            return
        await self._client.close()
        self._client = None
        logger.info("MongoDB connection closed")
