"""Detached, storage-independent copy of a graph neighbourhood.

Snapshots hold node-to-node membership per relationship type and no edge
objects. They are built fresh per request by the snapshot mapper.
"""

from dataclasses import dataclass, field
from datetime import date

from kinship.domain.relationship_type import RelationshipType


@dataclass(eq=False)
class PersonSnapshot:
    internal_id: int | None = None
    external_id: int | str | None = None
    name: str | None = None
    date_of_birth: date | None = None
    deleted: bool = False
    relations: dict[RelationshipType, set["PersonSnapshot"]] = field(
        default_factory=dict, repr=False
    )

    def relations_of(self, relationship_type: RelationshipType) -> set["PersonSnapshot"]:
        """Related snapshots of the given type. Empty set when there are none."""
        return self.relations.get(relationship_type, set())

    def add_relation(
        self, relationship_type: RelationshipType, related: "PersonSnapshot"
    ) -> None:
        self.relations.setdefault(relationship_type, set()).add(related)

    def has_relation(
        self, relationship_type: RelationshipType, related: "PersonSnapshot"
    ) -> bool:
        return related in self.relations_of(relationship_type)

    def age_on(self, today: date) -> int | None:
        """Whole years between date_of_birth and today, or None without a birth date."""
        if self.date_of_birth is None:
            return None
        dob = self.date_of_birth
        return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))

    def describe(self) -> str:
        """Compact multi-line rendering for debug logs; each person expanded once."""
        lines: list[str] = []
        self._describe(lines, 0, set())
        return "\n".join(lines)

    def _describe(self, lines: list[str], indent: int, seen: set[int]) -> None:
        pad = "  " * indent
        label = f"{self.name!r} (internal_id={self.internal_id}, dob={self.date_of_birth})"
        if self.internal_id is not None and self.internal_id in seen:
            lines.append(f"{pad}{label} ...")
            return
        lines.append(f"{pad}{label}")
        if self.internal_id is not None:
            seen.add(self.internal_id)
        for rel_type in sorted(self.relations, key=lambda t: t.value):
            lines.append(f"{pad}  {rel_type.value}:")
            for related in sorted(
                self.relations[rel_type], key=lambda s: (s.internal_id is None, s.internal_id or 0)
            ):
                related._describe(lines, indent + 2, seen)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, PersonSnapshot):
            return NotImplemented
        return self.internal_id is not None and self.internal_id == other.internal_id

    def __hash__(self) -> int:
        if self.internal_id is None:
            return object.__hash__(self)
        return hash(self.internal_id)
