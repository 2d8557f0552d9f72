"""Infrastructure layer: concrete implementations of application ports, and settings."""

from kinship.infrastructure.config import Settings, get_driver, load_settings
from kinship.infrastructure.memory_repository import InMemoryPersonRepository
from kinship.infrastructure.persistence.neo4j_repository import (
    Neo4jPersonRepository,
    ensure_person_constraint,
)

__all__ = [
    "InMemoryPersonRepository",
    "Neo4jPersonRepository",
    "Settings",
    "ensure_person_constraint",
    "get_driver",
    "load_settings",
]
