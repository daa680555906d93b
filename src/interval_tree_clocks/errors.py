"""Exception hierarchy for interval-tree-clocks."""
from __future__ import annotations

from typing import Any


class IntervalTreeClockError(Exception):
    """Base exception for all library errors."""
    pass


class NonDisjointIdentityError(IntervalTreeClockError):
    """Raised when two identities that overlap are summed.

    Summing is only defined for identities produced by a matching split
    (or otherwise disjoint). Overlapping ownership cannot be recombined
    without inventing a result that misrepresents causality.
    """

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot sum non-disjoint identities: {left!r} + {right!r}. "
            f"Both claim ownership of the same region."
        )


class ShapeMismatchError(IntervalTreeClockError):
    """Identity and event tree shapes do not line up during growth.

    This is an internal-consistency failure: either an unsplit identity
    reached a position where the event tree has already branched, or an
    identity that owns nothing was asked to record an event.
    """

    def __init__(self, identity: Any, event: Any) -> None:
        self.identity = identity
        self.event = event
        super().__init__(
            f"Identity {identity!r} cannot grow event tree {event!r}: "
            f"an identity must be split wherever the tree has branched"
        )
