"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Iterable
from datetime import date
from typing import Protocol

from kinship.domain import Person, Relationship


class PersonRepository(Protocol):
    """Persists people and their relationship edges. Lookups skip soft-deleted people."""

    def save(self, person: Person) -> Person:
        """Store person attributes, assigning internal_id on first save."""
        ...

    def find_by_id(self, internal_id: int) -> Person | None:
        """Return the person with its relationship neighbourhood loaded, or None."""
        ...

    def find_by_external_id(
        self, external_id: int | str, *, include_deleted: bool = False
    ) -> Person | None:
        ...

    def find_all_by_name_and_date_of_birth(
        self, name: str, date_of_birth: date | None
    ) -> list[Person]:
        ...

    def find_all_by_external_ids(
        self, external_ids: Iterable[int | str], *, include_deleted: bool = False
    ) -> list[Person]:
        ...

    def save_all(self, edges: Iterable[Relationship]) -> list[Relationship]:
        """Store edges. Both endpoints must already be saved.

        Returns the edges now stored. An edge whose pair already holds a
        different type is left out and the stored edge is kept.
        """
        ...

    def soft_delete(self, external_ids: Iterable[int | str]) -> int:
        """Flag people as deleted. Returns the number of people flagged."""
        ...
