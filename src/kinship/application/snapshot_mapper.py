"""Map a live Person graph to a detached PersonSnapshot graph.

Depth-first and cycle-safe: every call owns a visited map keyed by identity,
and a node is registered there before its relationships are walked, so a
cycle found deeper down resolves to the snapshot still being built.
Under a depth limit the map also records the depth each node was mapped at;
a node reached again at a shallower depth is walked again into the same
snapshot, so a cut-off leaf never hides edges that are within reach.
"""

import logging
from collections.abc import Iterable

from kinship.domain import Person, PersonSnapshot, RelationshipType, inverses

logger = logging.getLogger(__name__)


def map_snapshot(
    root: Person | None,
    relationship_filter: Iterable[RelationshipType] | None = None,
    max_depth: int | None = None,
) -> PersonSnapshot | None:
    """Build a snapshot rooted at root.

    relationship_filter: kinds to follow from the root. None or empty means all.
    While a filter is active, each hop continues with the inverse of the kind
    just traversed (from a parent into a child, the child's other parents surface).
    max_depth: hops to expand. 0 gives a shallow copy; None is bounded only by
    cycle detection.
    """
    if root is None:
        return None
    if max_depth is not None and max_depth < 0:
        raise ValueError("max_depth must be non-negative.")
    visited: dict[int, tuple[PersonSnapshot, int]] = {}
    filter_set = frozenset(relationship_filter or ())
    return _map(root, filter_set, max_depth, 0, visited)


def shallow_snapshot(person: Person) -> PersonSnapshot:
    """Attributes only, no relationships."""
    return PersonSnapshot(
        internal_id=person.internal_id,
        external_id=person.external_id,
        name=person.name,
        date_of_birth=person.date_of_birth,
        deleted=person.deleted,
    )


def _map(
    person: Person,
    relationship_filter: frozenset[RelationshipType],
    max_depth: int | None,
    depth: int,
    visited: dict[int, tuple[PersonSnapshot, int]],
) -> PersonSnapshot:
    if person.internal_id is None:
        # Cannot be deduplicated, so never cached.
        return shallow_snapshot(person)

    entry = visited.get(person.internal_id)
    if entry is None:
        snapshot = shallow_snapshot(person)
    else:
        snapshot, mapped_depth = entry
        if max_depth is None or depth >= mapped_depth:
            logger.debug("Reusing mapped person %s", person.internal_id)
            return snapshot
        # Reached closer to the root than before: more hops are left, walk again.
        logger.debug(
            "Re-mapping person %s at depth %d (was %d)",
            person.internal_id,
            depth,
            mapped_depth,
        )
    visited[person.internal_id] = (snapshot, depth)

    if max_depth is not None and depth >= max_depth:
        return snapshot

    logger.debug(
        "Mapping person %s at depth %d (filter: %s)",
        person.internal_id,
        depth,
        sorted(t.value for t in relationship_filter) or "all",
    )
    # Identity order: the snapshot shape must not vary with set iteration order.
    for rel in sorted(person.relationships, key=lambda r: r.key):
        rel_type = rel.relationship_type
        if relationship_filter and rel_type not in relationship_filter:
            logger.debug("  -> %s to %s filtered out", rel_type.value, rel.related_person.internal_id)
            continue

        next_filter = inverses({rel_type}) if relationship_filter else frozenset()
        related = _map(rel.related_person, next_filter, max_depth, depth + 1, visited)

        snapshot.add_relation(rel_type, related)
        if not related.has_relation(rel_type.inverse, snapshot):
            related.add_relation(rel_type.inverse, snapshot)
    return snapshot
