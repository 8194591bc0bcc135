"""Database initialization script."""

from loguru import logger

from src.user_api.core.services.database.mongo_service import MongoService
from src.user_api.entities.core.user import UserRepository


def init_db(database_service: MongoService | None = None) -> None:
    """Create the indexes the user collection relies on."""
    owns_service = database_service is None
    database_service = database_service or MongoService()
    try:
        UserRepository(database_service.get_collection()).ensure_indexes()
        logger.info("User collection indexes ensured")
    finally:
        if owns_service:
            database_service.close()


if __name__ == "__main__":
    init_db()
