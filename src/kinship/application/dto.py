"""Verdicts and request context for the eligibility flow.

Verdicts are plain values, never exceptions. Callers branch on isinstance.
"""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class RequestContext:
    """Correlation data threaded explicitly through service calls."""

    request_id: str | None = None


# --- evaluation results ---


@dataclass(frozen=True)
class Eligible:
    """Subject has a partner sharing exactly three children, one of them a minor."""

    reason: ClassVar[str] = ""

    person_id: int | None = None
    partner_id: int | None = None


@dataclass(frozen=True)
class NoRecord:
    """No person matched the lookup."""

    reason: ClassVar[str] = "No record found"


@dataclass(frozen=True)
class EmptySubject:
    """Engine was handed no subject."""

    reason: ClassVar[str] = "No person to evaluate"


@dataclass(frozen=True)
class NoPartner:
    reason: ClassVar[str] = "Does not have a partner"


@dataclass(frozen=True)
class WrongChildCount:
    reason: ClassVar[str] = "Does not have exactly 3 children"

    child_count: int


@dataclass(frozen=True)
class NoSharedChildren:
    reason: ClassVar[str] = "No shared children"


@dataclass(frozen=True)
class NoUnderageSharedChild:
    """All three children are shared with a partner but none is a minor."""

    reason: ClassVar[str] = "Does not have a child under 18"

    partner_id: int | None = None


@dataclass(frozen=True)
class MultipleMatches:
    """Lookup was ambiguous. Never resolved by picking one of the matches."""

    reason: ClassVar[str] = "Could not find a single matching record"

    match_count: int


@dataclass(frozen=True)
class InvalidLookup:
    """Request carried none of the keys needed for a lookup."""

    reason: str


Verdict = (
    Eligible
    | NoRecord
    | EmptySubject
    | NoPartner
    | WrongChildCount
    | NoSharedChildren
    | NoUnderageSharedChild
    | MultipleMatches
)
