"""MongoDB client and collection handles shared across the application."""

from loguru import logger
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from src.user_api.runtime.config.config_data import MongoConfig
from src.user_api.runtime.context import get_config


class MongoService:
    def __init__(self, config: MongoConfig | None = None, client: MongoClient | None = None):
        """Initialize the process-wide client.

        The client pools connections internally and is safe to share between
        concurrent requests. Pass ``client`` to reuse an existing one.
        """
        self._config = config or get_config().mongo

        if client is None:
            logger.info(
                "Initializing MongoDB client for database '{}' (pool size {}, selection timeout {}ms)",
                self._config.database,
                self._config.max_pool_size,
                self._config.server_selection_timeout_ms,
            )
            client = MongoClient(self._config.url, **self._config.client_kwargs())
        self._client = client

    @property
    def client(self) -> MongoClient:
        return self._client

    def get_database(self) -> Database:
        """Return the configured database handle."""
        return self._client[self._config.database]

    def get_collection(self, name: str | None = None) -> Collection:
        """Return a collection handle, the configured user collection by default."""
        return self.get_database()[name or self._config.collection]

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def close(self) -> None:
        """Close all pooled connections."""
        logger.info("Closing MongoDB client")
        self._client.close()
