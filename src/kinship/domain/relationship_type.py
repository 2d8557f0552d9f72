"""Relationship kinds and their inverses.

An edge of type T from A to B reads "B is A's T": A -[CHILD]-> B means B is a
child of A, and the mirrored edge B -[PARENT]-> A says A is a parent of B.
"""

from collections.abc import Iterable
from enum import Enum


class RelationshipType(str, Enum):
    PARENT = "PARENT"
    CHILD = "CHILD"
    PARTNER = "PARTNER"

    @property
    def inverse(self) -> "RelationshipType":
        return _INVERSES[self]


_INVERSES = {
    RelationshipType.PARENT: RelationshipType.CHILD,
    RelationshipType.CHILD: RelationshipType.PARENT,
    RelationshipType.PARTNER: RelationshipType.PARTNER,
}

# Kinds that denote parentage. Everything that asks "is X a parent of Y"
# goes through this set rather than a single hardcoded kind.
PARENT_KINDS = frozenset({RelationshipType.PARENT})


def inverse(relationship_type: RelationshipType) -> RelationshipType:
    """Return the kind seen from the other end of the edge."""
    return _INVERSES[relationship_type]


def inverses(types: Iterable[RelationshipType]) -> frozenset[RelationshipType]:
    return frozenset(_INVERSES[t] for t in types)


def is_parent_kind(relationship_type: RelationshipType) -> bool:
    return relationship_type in PARENT_KINDS
