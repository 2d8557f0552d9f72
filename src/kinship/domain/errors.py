"""Invariant violations raised by the graph model. Not verdicts; never retried."""


class InvariantViolation(Exception):
    """A programming or data error that must abort the current operation."""


class IncompleteEdgeError(InvariantViolation):
    """One or more edges in a batch reference an endpoint without an identity."""

    def __init__(self, edges: list) -> None:
        self.edges = list(edges)
        super().__init__(
            f"Found {len(self.edges)} invalid relationship(s) without assigned identities: "
            + ", ".join(repr(e) for e in self.edges)
        )
