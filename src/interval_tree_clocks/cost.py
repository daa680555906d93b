"""Cost ranking for candidate growth paths when recording an event."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Cost:
    """Price of one way of growing an event tree.

    Fields are declared creation first so the generated ordering compares
    ``creation_count`` before ``descent_count``: any path that fabricates
    a new branch is dearer than any path that only descends existing ones.
    """

    creation_count: int = 0
    descent_count: int = 0

    def inc_descent(self) -> Cost:
        """One more step down already-present structure."""
        return Cost(
            creation_count=self.creation_count,
            descent_count=self.descent_count + 1,
        )

    def inc_creation(self) -> Cost:
        """A new branch had to be materialized; descent is reset."""
        return Cost(creation_count=self.creation_count + 1, descent_count=0)

    def __repr__(self) -> str:
        return (
            f"Cost(creation={self.creation_count}, "
            f"descent={self.descent_count})"
        )


ZERO = Cost()
