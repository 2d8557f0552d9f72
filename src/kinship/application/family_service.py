"""Eligibility lookups and relationship updates over a PersonRepository."""

import logging
from collections.abc import Callable, Iterable
from datetime import date

from kinship.application.dto import (
    InvalidLookup,
    MultipleMatches,
    NoRecord,
    RequestContext,
    Verdict,
)
from kinship.application.eligibility import ADULT_AGE, evaluate
from kinship.application.ports import PersonRepository
from kinship.application.relationship_guard import prepare_for_save
from kinship.application.snapshot_mapper import map_snapshot
from kinship.domain import Person, PersonSnapshot, Relationship, RelationshipType

logger = logging.getLogger(__name__)

# Kinds followed from the subject when checking eligibility.
CHECK_FILTER = frozenset({RelationshipType.PARTNER, RelationshipType.CHILD})


def _request_id(context: RequestContext | None) -> str:
    return (context.request_id if context else None) or "-"


class FamilyService:
    """Looks people up, snapshots their family and evaluates eligibility. Also upserts relationships."""

    def __init__(
        self,
        repository: PersonRepository,
        *,
        snapshot_depth: int = 3,
        name_lookup_depth: int = 2,
        adult_age: int = ADULT_AGE,
        distinguish_underage: bool = False,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._repo = repository
        self._snapshot_depth = snapshot_depth
        self._name_lookup_depth = name_lookup_depth
        self._adult_age = adult_age
        self._distinguish_underage = distinguish_underage
        self._today = today or date.today

    def evaluate_by_id(
        self, internal_id: int, context: RequestContext | None = None
    ) -> Verdict:
        person = self._repo.find_by_id(internal_id)
        if person is None:
            logger.info("[%s] No person found for internal id %s", _request_id(context), internal_id)
            return NoRecord()
        return self._evaluate(person, self._snapshot_depth, context)

    def evaluate_by_external_id(
        self, external_id: int | str, context: RequestContext | None = None
    ) -> Verdict:
        person = self._repo.find_by_external_id(external_id)
        if person is None:
            logger.info("[%s] No person found for external id", _request_id(context))
            return NoRecord()
        return self._evaluate(person, self._snapshot_depth, context)

    def evaluate_by_name_and_dob(
        self,
        name: str,
        date_of_birth: date | None,
        context: RequestContext | None = None,
    ) -> Verdict:
        """Evaluate the single person with this name and birth date.

        Several matches short-circuit to MultipleMatches; one is never picked.
        """
        matches = self._repo.find_all_by_name_and_date_of_birth(name, date_of_birth)
        if not matches:
            logger.info("[%s] No person found by name and date of birth", _request_id(context))
            return NoRecord()
        if len(matches) > 1:
            logger.info(
                "[%s] Found %d people with the same name and date of birth",
                _request_id(context),
                len(matches),
            )
            return MultipleMatches(match_count=len(matches))
        return self._evaluate(matches[0], self._name_lookup_depth, context)

    def check_person(
        self,
        external_id: int | str | None = None,
        name: str | None = None,
        date_of_birth: date | None = None,
        context: RequestContext | None = None,
    ) -> Verdict | InvalidLookup:
        """Evaluate by external id, falling back to name and birth date when no record matches."""
        has_name = bool((name or "").strip())
        if external_id is None and not has_name and date_of_birth is None:
            return InvalidLookup(reason="Request is missing ID, Name and Date of Birth")

        if external_id is not None:
            verdict = self.evaluate_by_external_id(external_id, context)
            if not isinstance(verdict, NoRecord):
                return verdict
            if not has_name and date_of_birth is None:
                return verdict
            logger.debug("[%s] Falling back to name and date of birth", _request_id(context))

        return self.evaluate_by_name_and_dob((name or "").strip(), date_of_birth, context)

    def prepare_for_save(self, edges: Iterable[Relationship]) -> list[Relationship]:
        return prepare_for_save(edges)

    def update_person(
        self,
        external_id: int | str,
        *,
        name: str | None = None,
        date_of_birth: date | None = None,
        parent_ids: Iterable[int | str] = (),
        partner_ids: Iterable[int | str] = (),
        child_ids: Iterable[int | str] = (),
        context: RequestContext | None = None,
    ) -> PersonSnapshot | None:
        """Create or update a person and link them to people given by external id.

        Related people not stored yet are created with only their external id.
        Returns a one-hop snapshot of the person, or None if they were soft-deleted.
        """
        rid = _request_id(context)
        main = self._repo.find_by_external_id(external_id, include_deleted=True)
        if main is None:
            logger.debug("[%s] Creating new person", rid)
            main = Person(external_id=external_id)
        elif main.deleted:
            logger.info("[%s] Person %s is deleted; not updating", rid, main.internal_id)
            return None

        if (name or "").strip():
            main.name = name.strip()
        if date_of_birth is not None:
            main.date_of_birth = date_of_birth
        main = self._repo.save(main)

        wanted = {
            RelationshipType.PARENT: list(parent_ids),
            RelationshipType.PARTNER: list(partner_ids),
            RelationshipType.CHILD: list(child_ids),
        }
        related = self._load_or_create(
            {eid for ids in wanted.values() for eid in ids}, rid
        )

        for rel_type, ids in wanted.items():
            for eid in ids:
                other = related.get(eid)
                if other is None or other == main:
                    continue
                main.add_relationship(other, rel_type)

        edges = set(main.relationships)
        for rel in main.relationships:
            edges.update(rel.related_person.relationships)
        saved = self._repo.save_all(prepare_for_save(edges))
        logger.info("[%s] Updated person %s with %d relationship(s)", rid, main.internal_id, len(saved))
        return map_snapshot(main, None, 1)

    def soft_delete_persons(
        self, external_ids: Iterable[int | str], context: RequestContext | None = None
    ) -> int:
        count = self._repo.soft_delete(external_ids)
        logger.info("[%s] Soft deleted %d person(s)", _request_id(context), count)
        return count

    def _load_or_create(self, external_ids: set, rid: str) -> dict:
        found = {
            p.external_id: p
            for p in self._repo.find_all_by_external_ids(external_ids, include_deleted=True)
        }
        out = {}
        for eid in external_ids:
            person = found.get(eid)
            if person is None:
                logger.debug("[%s] Related person not found; creating", rid)
                person = self._repo.save(Person(external_id=eid))
            elif person.deleted:
                logger.debug("[%s] Skipping deleted related person %s", rid, person.internal_id)
                continue
            out[eid] = person
        return out

    def _evaluate(
        self, person: Person, depth: int, context: RequestContext | None
    ) -> Verdict:
        snapshot = map_snapshot(person, CHECK_FILTER, depth)
        logger.debug("[%s] Evaluating snapshot:\n%s", _request_id(context), snapshot.describe())
        verdict = evaluate(
            snapshot,
            today=self._today(),
            adult_age=self._adult_age,
            distinguish_underage=self._distinguish_underage,
        )
        logger.info(
            "[%s] Person %s: %s",
            _request_id(context),
            person.internal_id,
            type(verdict).__name__,
        )
        return verdict
