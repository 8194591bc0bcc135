from dataclasses import dataclass

from src.user_api.core.services import MongoService
from src.user_api.entities.core.user import UserRepository


@dataclass
class ApplicationDependencies:
    database_service: MongoService
    user_repository: UserRepository
