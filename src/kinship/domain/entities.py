"""Domain entities: Person (live graph node) and Relationship (directed typed edge)."""

import logging
from dataclasses import dataclass, field
from datetime import date

from kinship.domain.errors import InvariantViolation
from kinship.domain.relationship_type import RelationshipType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Relationship:
    """
    A directed edge: related_person is person's relationship_type.
    Identity is the ordered (person, related_person) identity pair.
    """

    person: "Person"
    related_person: "Person"
    relationship_type: RelationshipType

    @property
    def inverse_type(self) -> RelationshipType:
        return self.relationship_type.inverse

    @property
    def key(self) -> tuple[int | None, int | None]:
        return (self.person.internal_id, self.related_person.internal_id)

    @property
    def is_complete(self) -> bool:
        """True when both endpoints carry a storage-assigned identity."""
        return (
            self.person.internal_id is not None
            and self.related_person.internal_id is not None
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.is_complete and self.key == other.key

    def __hash__(self) -> int:
        if not self.is_complete:
            return object.__hash__(self)
        return hash(self.key)

    def __repr__(self) -> str:
        return (
            f"Relationship({self.person.internal_id} -[{self.relationship_type.value}]-> "
            f"{self.related_person.internal_id})"
        )


@dataclass(eq=False)
class Person:
    """
    A person in the live relationship graph.
    internal_id is assigned by storage on first save; until then the person
    cannot take part in any edge and is equal only to itself.
    """

    name: str | None = None
    date_of_birth: date | None = None
    external_id: int | str | None = None
    internal_id: int | None = None
    deleted: bool = False
    _relationships: dict[int, Relationship] = field(
        default_factory=dict, init=False, repr=False
    )

    @property
    def relationships(self) -> frozenset[Relationship]:
        return frozenset(self._relationships.values())

    def relations_of(self, relationship_type: RelationshipType) -> set["Person"]:
        return {
            rel.related_person
            for rel in self._relationships.values()
            if rel.relationship_type is relationship_type
        }

    def add_relationship(
        self, other: "Person", relationship_type: RelationshipType
    ) -> None:
        """Link self -> other as relationship_type and other -> self as its inverse.

        Both endpoints must already be saved. Re-adding an existing pair is a no-op.
        """
        if self.internal_id is None or other.internal_id is None:
            raise InvariantViolation(
                "both endpoints must have an assigned identity before an edge can be created"
            )

        logger.debug(
            "Adding relationship %s -[%s]-> %s",
            self.internal_id,
            relationship_type.value,
            other.internal_id,
        )
        self._attach(other, relationship_type)
        other._attach(self, relationship_type.inverse)

    def _attach(self, other: "Person", relationship_type: RelationshipType) -> None:
        existing = self._relationships.get(other.internal_id)
        if existing is None:
            self._relationships[other.internal_id] = Relationship(
                person=self, related_person=other, relationship_type=relationship_type
            )
            return
        if existing.relationship_type is not relationship_type:
            logger.warning(
                "Person %s already has a %s edge to %s; ignoring %s",
                self.internal_id,
                existing.relationship_type.value,
                other.internal_id,
                relationship_type.value,
            )

    def pretty(self) -> str:
        """Indented dump of the reachable graph. Each person is expanded once."""
        lines: list[str] = []
        self._pretty(lines, 0, set())
        return "\n".join(lines)

    def _pretty(self, lines: list[str], indent: int, seen: set[int]) -> None:
        pad = "  " * indent
        if self.internal_id is None:
            lines.append(f"{pad}[unsaved person {self.name!r}]")
            return
        if self.internal_id in seen:
            lines.append(f"{pad}[person {self.internal_id} already shown]")
            return
        seen.add(self.internal_id)
        lines.append(
            f"{pad}Person {self.name!r} (internal_id={self.internal_id}, "
            f"external_id={self.external_id}, dob={self.date_of_birth}, deleted={self.deleted})"
        )
        for rel in sorted(self._relationships.values(), key=lambda r: r.key):
            lines.append(f"{pad}  {rel.relationship_type.value}:")
            rel.related_person._pretty(lines, indent + 2, seen)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Person):
            return NotImplemented
        return self.internal_id is not None and self.internal_id == other.internal_id

    def __hash__(self) -> int:
        # Hash changes once storage assigns an id; save before putting in sets.
        if self.internal_id is None:
            return object.__hash__(self)
        return hash(self.internal_id)
