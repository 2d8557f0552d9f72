#!/usr/bin/env python3
"""Seed a sample family into Neo4j and/or run the partner-and-children check.

Usage (from repo root, with .env holding NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD):
    python scripts/check_family.py seed
    python scripts/check_family.py check <external_id>
Seeding is idempotent: people are matched by external id.
"""
import logging
import sys
import uuid
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from kinship.application import FamilyService, RequestContext  # noqa: E402
from kinship.infrastructure import (  # noqa: E402
    Neo4jPersonRepository,
    ensure_person_constraint,
    get_driver,
    load_settings,
)

logger = logging.getLogger("check_family")

# external_id -> (name, date_of_birth)
_SAMPLE_PEOPLE = {
    1001: ("Anna", date(1985, 3, 14)),
    1002: ("Ben", date(1983, 7, 2)),
    1003: ("Cleo", date(2012, 1, 20)),
    1004: ("Dirk", date(2015, 9, 5)),
    1005: ("Eva", date(2019, 11, 30)),
}


def _seed(service: FamilyService, context: RequestContext) -> None:
    for external_id, (name, dob) in _SAMPLE_PEOPLE.items():
        service.update_person(external_id, name=name, date_of_birth=dob, context=context)
    service.update_person(1001, partner_ids=[1002], child_ids=[1003, 1004, 1005], context=context)
    service.update_person(1002, child_ids=[1003, 1004, 1005], context=context)
    print(f"Seeded {len(_SAMPLE_PEOPLE)} people.")


def main(argv: list[str]) -> int:
    settings = load_settings()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level, logging.INFO),
    )
    if not argv or argv[0] not in ("seed", "check") or (argv[0] == "check" and len(argv) < 2):
        print(__doc__, file=sys.stderr)
        return 2

    driver = get_driver(settings)
    try:
        ensure_person_constraint(driver)
        service = FamilyService(
            Neo4jPersonRepository(driver, load_depth=settings.snapshot_depth),
            snapshot_depth=settings.snapshot_depth,
            name_lookup_depth=settings.name_lookup_depth,
            adult_age=settings.adult_age,
            distinguish_underage=settings.distinguish_underage,
        )
        context = RequestContext(request_id=str(uuid.uuid4()))
        if argv[0] == "seed":
            _seed(service, context)
            return 0

        raw_id = argv[1]
        external_id = int(raw_id) if raw_id.isdigit() else raw_id
        verdict = service.evaluate_by_external_id(external_id, context)
        print(f"{type(verdict).__name__}: {verdict.reason or 'OK'}")
        return 0 if verdict.reason == "" else 1
    except Exception as e:
        logger.exception("Check failed")
        print(f"Check failed: {e}", file=sys.stderr)
        return 1
    finally:
        driver.close()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
