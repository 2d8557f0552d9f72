"""Neo4j implementation of PersonRepository.
Graph: (:Person {internal_id, external_id, name, date_of_birth, deleted})-[:RELATED {type}]->(:Person).
Both directions of a relationship are stored; at most one RELATED per ordered pair.
internal_id comes from a (:Sequence {name: 'person'}) counter node.
"""

import logging
from collections.abc import Iterable
from datetime import date

from kinship.domain import Person, Relationship, RelationshipType

logger = logging.getLogger(__name__)

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT person_internal_id_unique IF NOT EXISTS
FOR (p:Person) REQUIRE p.internal_id IS UNIQUE
"""

_CREATE_PERSON_QUERY = """
MERGE (s:Sequence {name: 'person'})
ON CREATE SET s.value = 0
SET s.value = s.value + 1
WITH s.value AS internal_id
CREATE (p:Person {
    internal_id: internal_id,
    external_id: $external_id,
    name: $name,
    date_of_birth: $date_of_birth,
    deleted: $deleted
})
RETURN p.internal_id AS internal_id
"""

_UPDATE_PERSON_QUERY = """
MATCH (p:Person {internal_id: $internal_id})
SET p.external_id = $external_id,
    p.name = $name,
    p.date_of_birth = $date_of_birth,
    p.deleted = $deleted
RETURN p.internal_id AS internal_id
"""

_EDGES_FROM_QUERY = """
MATCH (a:Person)-[r:RELATED]->(b:Person)
WHERE a.internal_id IN $ids
RETURN a.internal_id AS from_id, r.type AS type, b
"""

_SAVE_EDGES_QUERY = """
UNWIND $rows AS row
MATCH (a:Person {internal_id: row.from_id}), (b:Person {internal_id: row.to_id})
MERGE (a)-[r:RELATED]->(b)
ON CREATE SET r.type = row.type
RETURN row.from_id AS from_id, row.to_id AS to_id, r.type AS type
"""

_ALIVE = "coalesce(p.deleted, false) = false"


def ensure_person_constraint(driver) -> None:
    """Create unique constraint on Person(internal_id) if missing."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


def _date_to_iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _iso_to_date(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


def _node_to_person(node) -> Person:
    return Person(
        internal_id=node["internal_id"],
        external_id=node.get("external_id"),
        name=node.get("name"),
        date_of_birth=_iso_to_date(node.get("date_of_birth")),
        deleted=bool(node.get("deleted") or False),
    )


class Neo4jPersonRepository:
    """Stores people and relationships in Neo4j.
    Lookups return freshly built Person graphs loaded load_depth hops out from each match.
    """

    def __init__(self, driver: object, load_depth: int = 3) -> None:
        self._driver = driver
        self._load_depth = load_depth

    def save(self, person: Person) -> Person:
        params = {
            "external_id": person.external_id,
            "name": person.name,
            "date_of_birth": _date_to_iso(person.date_of_birth),
            "deleted": person.deleted,
        }
        with self._driver.session() as session:
            if person.internal_id is None:
                record = session.run(_CREATE_PERSON_QUERY, **params).single()
                person.internal_id = record["internal_id"]
                logger.debug("Created person %s", person.internal_id)
            else:
                record = session.run(
                    _UPDATE_PERSON_QUERY, internal_id=person.internal_id, **params
                ).single()
                if record is None:
                    raise ValueError(f"Person {person.internal_id} does not exist.")
        return person

    def find_by_id(self, internal_id: int) -> Person | None:
        found = self._find(
            f"MATCH (p:Person {{internal_id: $internal_id}}) WHERE {_ALIVE} RETURN p",
            internal_id=internal_id,
        )
        return found[0] if found else None

    def find_by_external_id(
        self, external_id: int | str, *, include_deleted: bool = False
    ) -> Person | None:
        where = "" if include_deleted else f"WHERE {_ALIVE}"
        found = self._find(
            f"MATCH (p:Person {{external_id: $external_id}}) {where} "
            "RETURN p ORDER BY p.internal_id LIMIT 1",
            external_id=external_id,
        )
        return found[0] if found else None

    def find_all_by_name_and_date_of_birth(
        self, name: str, date_of_birth: date | None
    ) -> list[Person]:
        return self._find(
            f"""
            MATCH (p:Person {{name: $name}})
            WHERE {_ALIVE}
              AND ((p.date_of_birth IS NULL AND $dob IS NULL) OR p.date_of_birth = $dob)
            RETURN p
            ORDER BY p.internal_id
            """,
            name=name,
            dob=_date_to_iso(date_of_birth),
        )

    def find_all_by_external_ids(
        self, external_ids: Iterable[int | str], *, include_deleted: bool = False
    ) -> list[Person]:
        ids = list(external_ids)
        if not ids:
            return []
        alive = "" if include_deleted else f"AND {_ALIVE}"
        return self._find(
            f"MATCH (p:Person) WHERE p.external_id IN $ids {alive} RETURN p ORDER BY p.internal_id",
            ids=ids,
        )

    def save_all(self, edges: Iterable[Relationship]) -> list[Relationship]:
        edges = list(edges)
        if not edges:
            return []
        rows = [
            {
                "from_id": e.person.internal_id,
                "to_id": e.related_person.internal_id,
                "type": e.relationship_type.value,
            }
            for e in edges
        ]
        with self._driver.session() as session:
            result = session.run(_SAVE_EDGES_QUERY, rows=rows)
            stored = {(rec["from_id"], rec["to_id"]): rec["type"] for rec in result}
        saved = []
        for e in edges:
            stored_type = stored.get(e.key)
            if stored_type is None:
                continue
            if stored_type != e.relationship_type.value:
                logger.warning(
                    "Person %s already has a %s edge to %s; ignoring %s",
                    e.person.internal_id,
                    stored_type,
                    e.related_person.internal_id,
                    e.relationship_type.value,
                )
                continue
            saved.append(e)
        logger.debug("Saved %d of %d relationship(s)", len(saved), len(edges))
        return saved

    def soft_delete(self, external_ids: Iterable[int | str]) -> int:
        ids = list(external_ids)
        if not ids:
            return 0
        with self._driver.session() as session:
            record = session.run(
                f"""
                MATCH (p:Person)
                WHERE p.external_id IN $ids AND {_ALIVE}
                SET p.deleted = true
                RETURN count(p) AS n
                """,
                ids=ids,
            ).single()
        return record["n"] if record else 0

    def _find(self, query: str, **params) -> list[Person]:
        with self._driver.session() as session:
            roots = [_node_to_person(rec["p"]) for rec in session.run(query, **params)]
            if not roots:
                return []
            self._load_relationships(session, roots)
        return roots

    def _load_relationships(self, session, roots: list[Person]) -> None:
        """Breadth-first load of RELATED edges up to load_depth hops from the roots."""
        people = {p.internal_id: p for p in roots}
        frontier = list(people)
        for _ in range(self._load_depth):
            if not frontier:
                break
            next_frontier = []
            for rec in session.run(_EDGES_FROM_QUERY, ids=frontier):
                node = rec["b"]
                related_id = node["internal_id"]
                if related_id not in people:
                    people[related_id] = _node_to_person(node)
                    next_frontier.append(related_id)
                people[rec["from_id"]].add_relationship(
                    people[related_id], RelationshipType(rec["type"])
                )
            frontier = next_frontier
