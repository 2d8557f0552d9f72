"""Validate and deduplicate relationship edges before they reach storage."""

import logging
from collections.abc import Iterable

from kinship.domain import IncompleteEdgeError, Relationship

logger = logging.getLogger(__name__)


def prepare_for_save(edges: Iterable[Relationship]) -> list[Relationship]:
    """Return one edge per (person, related_person) identity pair, ordered by that pair.

    Raises IncompleteEdgeError naming every edge with an endpoint that has no
    identity yet; nothing is returned for a partially valid batch.
    """
    edges = list(edges)
    logger.debug("Preparing batch of %d relationship(s)", len(edges))

    invalid = [edge for edge in edges if not edge.is_complete]
    if invalid:
        error = IncompleteEdgeError(invalid)
        logger.error(str(error))
        raise error

    unique: dict[tuple[int, int], Relationship] = {}
    for edge in edges:
        unique.setdefault(edge.key, edge)

    if len(unique) != len(edges):
        logger.debug("Dropped %d duplicate relationship(s)", len(edges) - len(unique))
    return [unique[key] for key in sorted(unique)]
