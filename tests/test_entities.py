"""Unit tests for Person graph nodes and Relationship edges."""

import pytest

from kinship.domain import InvariantViolation, Person, Relationship, RelationshipType


def _saved(internal_id: int, name: str = "") -> Person:
    return Person(name=name or f"Person {internal_id}", internal_id=internal_id)


def test_add_relationship_creates_mirror_edge() -> None:
    a, b = _saved(1), _saved(2)
    a.add_relationship(b, RelationshipType.CHILD)

    assert len(a.relationships) == 1
    assert len(b.relationships) == 1
    (forward,) = a.relationships
    (backward,) = b.relationships
    assert forward.related_person is b
    assert forward.relationship_type is RelationshipType.CHILD
    assert backward.related_person is a
    assert backward.relationship_type is RelationshipType.PARENT
    assert a.relations_of(RelationshipType.CHILD) == {b}
    assert b.relations_of(RelationshipType.PARENT) == {a}


def test_partner_edge_is_partner_both_ways() -> None:
    a, b = _saved(1), _saved(2)
    a.add_relationship(b, RelationshipType.PARTNER)
    assert a.relations_of(RelationshipType.PARTNER) == {b}
    assert b.relations_of(RelationshipType.PARTNER) == {a}


def test_adding_same_edge_twice_is_a_no_op() -> None:
    a, b = _saved(1), _saved(2)
    a.add_relationship(b, RelationshipType.PARTNER)
    a.add_relationship(b, RelationshipType.PARTNER)
    b.add_relationship(a, RelationshipType.PARTNER)
    assert len(a.relationships) == 1
    assert len(b.relationships) == 1


def test_one_edge_per_ordered_pair_keeps_first_type() -> None:
    a, b = _saved(1), _saved(2)
    a.add_relationship(b, RelationshipType.CHILD)
    a.add_relationship(b, RelationshipType.PARTNER)
    assert a.relations_of(RelationshipType.CHILD) == {b}
    assert a.relations_of(RelationshipType.PARTNER) == set()
    assert len(b.relationships) == 1


@pytest.mark.parametrize("unsaved_side", ["self", "other", "both"])
def test_edge_on_unsaved_person_fails_without_mutation(unsaved_side: str) -> None:
    a = Person(name="A") if unsaved_side in ("self", "both") else _saved(1)
    b = Person(name="B") if unsaved_side in ("other", "both") else _saved(2)

    with pytest.raises(InvariantViolation, match="assigned identity"):
        a.add_relationship(b, RelationshipType.PARENT)

    assert a.relationships == frozenset()
    assert b.relationships == frozenset()


def test_person_equality_is_identity_based() -> None:
    assert _saved(1, "A") == _saved(1, "Someone else")
    assert _saved(1) != _saved(2)
    unsaved = Person(name="A")
    assert unsaved != Person(name="A")
    assert unsaved == unsaved
    assert len({_saved(1), _saved(1), _saved(2)}) == 2


def test_relationship_equality_uses_identity_pair() -> None:
    a, b = _saved(1), _saved(2)
    r1 = Relationship(a, b, RelationshipType.CHILD)
    r2 = Relationship(_saved(1), _saved(2), RelationshipType.PARTNER)
    assert r1 == r2
    assert hash(r1) == hash(r2)
    assert r1.key == (1, 2)
    assert r1.inverse_type is RelationshipType.PARENT
    assert r1 != Relationship(b, a, RelationshipType.PARENT)

    incomplete = Relationship(a, Person(name="X"), RelationshipType.CHILD)
    assert not incomplete.is_complete
    assert incomplete != Relationship(a, Person(name="X"), RelationshipType.CHILD)


def test_pretty_terminates_on_cycles() -> None:
    a, b = _saved(1, "Anna"), _saved(2, "Ben")
    a.add_relationship(b, RelationshipType.PARTNER)
    text = a.pretty()
    assert "Anna" in text
    assert "Ben" in text
    assert "already shown" in text
