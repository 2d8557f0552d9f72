"""Domain layer: graph entities, snapshot DTO and relationship kinds. No dependencies on outer layers."""

from kinship.domain.entities import Person, Relationship
from kinship.domain.errors import IncompleteEdgeError, InvariantViolation
from kinship.domain.relationship_type import (
    PARENT_KINDS,
    RelationshipType,
    inverse,
    inverses,
    is_parent_kind,
)
from kinship.domain.snapshot import PersonSnapshot

__all__ = [
    "IncompleteEdgeError",
    "InvariantViolation",
    "PARENT_KINDS",
    "Person",
    "PersonSnapshot",
    "Relationship",
    "RelationshipType",
    "inverse",
    "inverses",
    "is_parent_kind",
]
