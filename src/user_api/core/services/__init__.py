from .database.mongo_service import MongoService

__all__ = ["MongoService"]
