"""Unit tests for the eligibility engine. Snapshots are mostly built by hand; no repository."""

import itertools
from datetime import date

from kinship.application import (
    CHECK_FILTER,
    Eligible,
    EmptySubject,
    NoPartner,
    NoSharedChildren,
    NoUnderageSharedChild,
    WrongChildCount,
    evaluate,
    map_snapshot,
)
from kinship.application import eligibility
from kinship.domain import Person, PersonSnapshot, RelationshipType

TODAY = date(2026, 6, 1)
PARENT = RelationshipType.PARENT
CHILD = RelationshipType.CHILD
PARTNER = RelationshipType.PARTNER


def _born(years_ago: int) -> date:
    return date(TODAY.year - years_ago, 1, 15)


def _snap(internal_id: int, dob: date | None = None) -> PersonSnapshot:
    return PersonSnapshot(internal_id=internal_id, name=f"p{internal_id}", date_of_birth=dob)


def _link(a: PersonSnapshot, b: PersonSnapshot, t: RelationshipType) -> None:
    a.add_relation(t, b)
    b.add_relation(t.inverse, a)


def _subject_with(
    partners: int,
    children_by_partner: dict[int, list[int]],
    child_ages: dict[int, int | None],
) -> PersonSnapshot:
    """Subject id 1; partners ids 2.. ; children ids from child_ages. Subject is parent of every child."""
    subject = _snap(1, _born(40))
    partner_snaps = {pid: _snap(pid, _born(40)) for pid in range(2, 2 + partners)}
    children = {
        cid: _snap(cid, _born(age) if age is not None else None)
        for cid, age in child_ages.items()
    }
    for p in partner_snaps.values():
        _link(subject, p, PARTNER)
    for c in children.values():
        _link(subject, c, CHILD)
    for pid, cids in children_by_partner.items():
        for cid in cids:
            _link(partner_snaps[pid], children[cid], CHILD)
    return subject


def test_single_partner_three_shared_children_one_minor_is_eligible() -> None:
    subject = _subject_with(1, {2: [10, 11, 12]}, {10: 10, 11: 20, 12: 25})
    assert evaluate(subject, today=TODAY) == Eligible(person_id=1, partner_id=2)


def test_four_children_is_wrong_child_count() -> None:
    subject = _subject_with(1, {2: [10, 11, 12, 13]}, {10: 5, 11: 6, 12: 7, 13: 8})
    assert evaluate(subject, today=TODAY) == WrongChildCount(child_count=4)


def test_two_children_is_wrong_child_count() -> None:
    subject = _subject_with(1, {2: [10, 11]}, {10: 5, 11: 6})
    assert evaluate(subject, today=TODAY) == WrongChildCount(child_count=2)


def test_children_split_between_partners_is_not_shared() -> None:
    subject = _subject_with(2, {2: [10], 3: [11, 12]}, {10: 5, 11: 6, 12: 7})
    assert evaluate(subject, today=TODAY) == NoSharedChildren()


def test_all_shared_children_adult_collapses_to_no_shared_children() -> None:
    subject = _subject_with(1, {2: [10, 11, 12]}, {10: 18, 11: 20, 12: 25})
    assert evaluate(subject, today=TODAY) == NoSharedChildren()


def test_all_shared_children_adult_distinguished_when_enabled() -> None:
    subject = _subject_with(1, {2: [10, 11, 12]}, {10: 18, 11: 20, 12: 25})
    verdict = evaluate(subject, today=TODAY, distinguish_underage=True)
    assert verdict == NoUnderageSharedChild(partner_id=2)
    assert verdict.reason == "Does not have a child under 18"


def test_distinguish_underage_still_reports_unshared_children() -> None:
    subject = _subject_with(2, {2: [10], 3: [11, 12]}, {10: 5, 11: 6, 12: 7})
    assert evaluate(subject, today=TODAY, distinguish_underage=True) == NoSharedChildren()


def test_no_partner() -> None:
    subject = _subject_with(0, {}, {10: 5, 11: 6, 12: 7})
    assert evaluate(subject, today=TODAY) == NoPartner()


def test_no_partner_is_checked_before_child_count() -> None:
    assert evaluate(_snap(1), today=TODAY) == NoPartner()


def test_empty_subject() -> None:
    assert evaluate(None, today=TODAY) == EmptySubject()


def test_second_partner_can_satisfy_the_check() -> None:
    subject = _subject_with(2, {3: [10, 11, 12]}, {10: 3, 11: 30, 12: 31})
    assert evaluate(subject, today=TODAY) == Eligible(person_id=1, partner_id=3)


def test_child_without_birth_date_is_not_a_minor() -> None:
    subject = _subject_with(1, {2: [10, 11, 12]}, {10: None, 11: 20, 12: 25})
    assert evaluate(subject, today=TODAY) == NoSharedChildren()


def test_minor_among_unshared_children_does_not_count() -> None:
    # Partner shares only the adults; the minor belongs to the subject alone.
    subject = _subject_with(1, {2: [11, 12]}, {10: 4, 11: 20, 12: 25})
    assert evaluate(subject, today=TODAY) == NoSharedChildren()


def test_age_is_floor_of_whole_years() -> None:
    day_before_18th = date(TODAY.year - 18, TODAY.month, TODAY.day + 1)
    on_18th = date(TODAY.year - 18, TODAY.month, TODAY.day)
    assert _snap(1, day_before_18th).age_on(TODAY) == 17
    assert _snap(1, on_18th).age_on(TODAY) == 18
    assert _snap(1).age_on(TODAY) is None


def test_adult_age_is_configurable() -> None:
    subject = _subject_with(1, {2: [10, 11, 12]}, {10: 18, 11: 20, 12: 25})
    assert evaluate(subject, today=TODAY, adult_age=21) == Eligible(person_id=1, partner_id=2)


def test_verdict_does_not_depend_on_partner_or_child_order() -> None:
    ages = {10: 4, 11: 20, 12: 25}
    for partner_order in itertools.permutations([2, 3]):
        for child_order in itertools.permutations([10, 11, 12]):
            subject = _snap(1, _born(40))
            partners = {pid: _snap(pid) for pid in partner_order}
            children = {cid: _snap(cid, _born(ages[cid])) for cid in child_order}
            for pid in partner_order:
                _link(subject, partners[pid], PARTNER)
            for cid in child_order:
                _link(subject, children[cid], CHILD)
                if cid != 12:
                    _link(partners[2], children[cid], CHILD)
                _link(partners[3], children[cid], CHILD)
            assert evaluate(subject, today=TODAY) == Eligible(person_id=1, partner_id=3)


def test_parent_check_uses_child_parent_relations() -> None:
    subject = _subject_with(1, {}, {10: 4, 11: 5, 12: 6})
    partner = next(iter(subject.relations_of(PARTNER)))
    # Partner lists the children but the children do not list the partner as parent.
    for child in subject.relations_of(CHILD):
        partner.add_relation(CHILD, child)
    assert evaluate(subject, today=TODAY) == NoSharedChildren()
    for child in subject.relations_of(CHILD):
        child.add_relation(PARENT, partner)
    assert evaluate(subject, today=TODAY) == Eligible(person_id=1, partner_id=2)


def test_parent_check_asks_is_parent_kind(monkeypatch) -> None:
    subject = _subject_with(1, {2: [10, 11, 12]}, {10: 5, 11: 6, 12: 7})
    assert isinstance(evaluate(subject, today=TODAY), Eligible)

    monkeypatch.setattr(eligibility, "is_parent_kind", lambda kind: False)
    assert evaluate(subject, today=TODAY) == NoSharedChildren()


def test_verdict_over_mapped_graph_does_not_depend_on_id_order() -> None:
    # A step-parent of two children makes some children reachable by paths of different length.
    roles = ["subject", "partner", "child_1", "child_2", "child_3", "step_parent"]
    births = {
        "subject": _born(40),
        "partner": _born(42),
        "child_1": _born(11),
        "child_2": _born(10),
        "child_3": _born(8),
        "step_parent": _born(45),
    }
    for order in itertools.permutations(range(1, 7)):
        people = {
            role: Person(name=role, date_of_birth=births[role], internal_id=pid)
            for role, pid in zip(roles, order)
        }
        people["subject"].add_relationship(people["partner"], PARTNER)
        for child in ("child_1", "child_2", "child_3"):
            people["subject"].add_relationship(people[child], CHILD)
            people["partner"].add_relationship(people[child], CHILD)
        people["step_parent"].add_relationship(people["child_1"], CHILD)
        people["step_parent"].add_relationship(people["child_2"], CHILD)

        snapshot = map_snapshot(people["subject"], CHECK_FILTER, 3)
        verdict = evaluate(snapshot, today=TODAY)
        assert verdict == Eligible(
            person_id=people["subject"].internal_id,
            partner_id=people["partner"].internal_id,
        ), order
