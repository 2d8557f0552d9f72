"""Application layer: use cases, ports, and result types. Depends only on domain."""

from kinship.application.dto import (
    Eligible,
    EmptySubject,
    InvalidLookup,
    MultipleMatches,
    NoPartner,
    NoRecord,
    NoSharedChildren,
    NoUnderageSharedChild,
    RequestContext,
    Verdict,
    WrongChildCount,
)
from kinship.application.eligibility import evaluate
from kinship.application.family_service import CHECK_FILTER, FamilyService
from kinship.application.ports import PersonRepository
from kinship.application.relationship_guard import prepare_for_save
from kinship.application.snapshot_mapper import map_snapshot

__all__ = [
    "CHECK_FILTER",
    "Eligible",
    "EmptySubject",
    "FamilyService",
    "InvalidLookup",
    "MultipleMatches",
    "NoPartner",
    "NoRecord",
    "NoSharedChildren",
    "NoUnderageSharedChild",
    "PersonRepository",
    "RequestContext",
    "Verdict",
    "WrongChildCount",
    "evaluate",
    "map_snapshot",
    "prepare_for_save",
]
