"""Eligibility check over a snapshot: a partner sharing exactly three children, one a minor."""

import logging
from datetime import date

from kinship.application.dto import (
    EmptySubject,
    Eligible,
    NoPartner,
    NoSharedChildren,
    NoUnderageSharedChild,
    Verdict,
    WrongChildCount,
)
from kinship.domain import PersonSnapshot, RelationshipType, is_parent_kind

logger = logging.getLogger(__name__)

REQUIRED_CHILD_COUNT = 3
ADULT_AGE = 18


def evaluate(
    subject: PersonSnapshot | None,
    *,
    today: date | None = None,
    adult_age: int = ADULT_AGE,
    distinguish_underage: bool = False,
) -> Verdict:
    """Return Eligible or the reason the subject is not eligible.

    Every partner is tried independently; the first one that is a parent of all
    three children, at least one of them under adult_age, makes the subject
    eligible. A child without a birth date never counts as a minor.
    With distinguish_underage, "all shared but no minor" is reported as
    NoUnderageSharedChild instead of NoSharedChildren.
    """
    if subject is None:
        logger.debug("No subject to evaluate")
        return EmptySubject()

    partners = subject.relations_of(RelationshipType.PARTNER)
    if not partners:
        logger.debug("Person %s does not have any partners", subject.internal_id)
        return NoPartner()

    children = subject.relations_of(RelationshipType.CHILD)
    if len(children) != REQUIRED_CHILD_COUNT:
        logger.debug(
            "Person %s has %d children, expected %d",
            subject.internal_id,
            len(children),
            REQUIRED_CHILD_COUNT,
        )
        return WrongChildCount(child_count=len(children))

    today = today or date.today()
    adult_partner: PersonSnapshot | None = None
    for partner in sorted(partners, key=_identity_order):
        shared = [child for child in children if _is_parent_of(partner, child)]
        if len(shared) != REQUIRED_CHILD_COUNT:
            logger.debug(
                "Partner %s shares %d of %d children",
                partner.internal_id,
                len(shared),
                REQUIRED_CHILD_COUNT,
            )
            continue
        if any(_is_minor(child, today, adult_age) for child in shared):
            logger.debug(
                "Person %s is eligible with partner %s",
                subject.internal_id,
                partner.internal_id,
            )
            return Eligible(person_id=subject.internal_id, partner_id=partner.internal_id)
        if adult_partner is None:
            adult_partner = partner

    if distinguish_underage and adult_partner is not None:
        logger.debug(
            "Children shared by %s and %s are all %d or older",
            subject.internal_id,
            adult_partner.internal_id,
            adult_age,
        )
        return NoUnderageSharedChild(partner_id=adult_partner.internal_id)
    logger.debug("No partner of %s shares all children with a minor among them", subject.internal_id)
    return NoSharedChildren()


def _identity_order(snapshot: PersonSnapshot) -> tuple[bool, int]:
    return (snapshot.internal_id is None, snapshot.internal_id or 0)


def _is_parent_of(candidate: PersonSnapshot, child: PersonSnapshot) -> bool:
    return any(
        is_parent_kind(kind) and candidate in related
        for kind, related in child.relations.items()
    )


def _is_minor(child: PersonSnapshot, today: date, adult_age: int) -> bool:
    age = child.age_on(today)
    return age is not None and age < adult_age
