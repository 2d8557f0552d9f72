"""In-memory implementation of PersonRepository (no DB)."""

from collections.abc import Iterable
from datetime import date

from kinship.domain import Person, Relationship


class InMemoryPersonRepository:
    """Stores Person objects by reference; ids are assigned sequentially from 1.
    Edges live on the stored Person objects; save_all also indexes them by identity pair.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, Person] = {}
        self._edges: dict[tuple[int, int], Relationship] = {}
        self._next_id = 1

    def save(self, person: Person) -> Person:
        if person.internal_id is None:
            person.internal_id = self._next_id
            self._next_id += 1
        self._by_id[person.internal_id] = person
        return person

    def find_by_id(self, internal_id: int) -> Person | None:
        person = self._by_id.get(internal_id)
        if person is None or person.deleted:
            return None
        return person

    def find_by_external_id(
        self, external_id: int | str, *, include_deleted: bool = False
    ) -> Person | None:
        for person in self._by_id.values():
            if person.external_id == external_id and (include_deleted or not person.deleted):
                return person
        return None

    def find_all_by_name_and_date_of_birth(
        self, name: str, date_of_birth: date | None
    ) -> list[Person]:
        return [
            person
            for person in self._by_id.values()
            if not person.deleted
            and person.name == name
            and person.date_of_birth == date_of_birth
        ]

    def find_all_by_external_ids(
        self, external_ids: Iterable[int | str], *, include_deleted: bool = False
    ) -> list[Person]:
        wanted = set(external_ids)
        return [
            person
            for person in self._by_id.values()
            if person.external_id in wanted and (include_deleted or not person.deleted)
        ]

    def save_all(self, edges: Iterable[Relationship]) -> list[Relationship]:
        saved = []
        for edge in edges:
            existing = self._edges.setdefault(edge.key, edge)
            if existing.relationship_type is edge.relationship_type:
                saved.append(edge)
        return saved

    def get_edge(self, person_id: int, related_person_id: int) -> Relationship | None:
        return self._edges.get((person_id, related_person_id))

    def soft_delete(self, external_ids: Iterable[int | str]) -> int:
        wanted = set(external_ids)
        count = 0
        for person in self._by_id.values():
            if person.external_id in wanted and not person.deleted:
                person.deleted = True
                count += 1
        return count
