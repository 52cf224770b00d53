"""Repository layer modules."""

from app.repositories.entity_repository import EntityRepository, Tables, create_entity_repository
from app.repositories.user_repository import UserRepository

__all__ = [
    "EntityRepository",
    "Tables",
    "UserRepository",
    "create_entity_repository",
]
