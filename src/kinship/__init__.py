"""
Kinship core: clean-architecture layout.

- domain: Person graph nodes, Relationship edges, snapshots, relationship kinds. No outer dependencies.
- application: snapshot mapping, eligibility evaluation, edge guard, FamilyService, ports, verdicts.
- infrastructure: adapters (InMemoryPersonRepository, Neo4jPersonRepository) and settings.
"""

from kinship.application import (
    Eligible,
    EmptySubject,
    FamilyService,
    InvalidLookup,
    MultipleMatches,
    NoPartner,
    NoRecord,
    NoSharedChildren,
    NoUnderageSharedChild,
    PersonRepository,
    RequestContext,
    Verdict,
    WrongChildCount,
    evaluate,
    map_snapshot,
    prepare_for_save,
)
from kinship.domain import (
    IncompleteEdgeError,
    InvariantViolation,
    Person,
    PersonSnapshot,
    Relationship,
    RelationshipType,
)
from kinship.infrastructure import InMemoryPersonRepository, Neo4jPersonRepository

__all__ = [
    "Eligible",
    "EmptySubject",
    "FamilyService",
    "InMemoryPersonRepository",
    "IncompleteEdgeError",
    "InvalidLookup",
    "InvariantViolation",
    "MultipleMatches",
    "Neo4jPersonRepository",
    "NoPartner",
    "NoRecord",
    "NoSharedChildren",
    "NoUnderageSharedChild",
    "Person",
    "PersonRepository",
    "PersonSnapshot",
    "Relationship",
    "RelationshipType",
    "RequestContext",
    "Verdict",
    "WrongChildCount",
    "evaluate",
    "map_snapshot",
    "prepare_for_save",
]
