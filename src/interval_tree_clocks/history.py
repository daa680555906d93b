"""Event history algebra.

An event tree is a delta-encoded counter tree over two shapes:

- ``Leaf(n)``: a terminal counter (written ``n``).
- ``Branch(n, left, right)``: a counter whose children hold offsets on top
  of ``n`` (written ``(n, left, right)``).

The absolute count of a leaf is the sum of every counter on its path from
the root. Equality between event trees ignores representation: two trees
are equal when their normalized forms are identical.

Events are recorded with :func:`record_event`, which first tries
:func:`fill` and falls back to :func:`grow`.
"""
from __future__ import annotations

import logging
from typing import Annotated, Any, List, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from interval_tree_clocks.cost import ZERO, Cost
from interval_tree_clocks.errors import ShapeMismatchError
from interval_tree_clocks.identity import Absent, Full, Id, Pair

logger = logging.getLogger("interval_tree_clocks.history")


class _EventNode(BaseModel):
    """Common base for event nodes: frozen, compared after normalization."""

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _EventNode):
            return NotImplemented
        return _canonical_key(self) == _canonical_key(other)

    def __hash__(self) -> int:
        return hash(_canonical_key(self))


class Leaf(_EventNode):
    """Terminal relative event counter."""

    kind: Literal["leaf"] = "leaf"
    n: int = Field(..., description="Counter relative to the parent")

    def __init__(self, n: int, **data: Any) -> None:
        super().__init__(n=n, **data)

    def __repr__(self) -> str:
        return str(self.n)


class Branch(_EventNode):
    """Internal node whose children are offsets on top of its own counter."""

    kind: Literal["branch"] = "branch"
    n: int = Field(..., description="Counter relative to the parent")
    left: Event = Field(..., description="Left subtree, relative to n")
    right: Event = Field(..., description="Right subtree, relative to n")

    def __init__(self, n: int, left: Any, right: Any, **data: Any) -> None:
        super().__init__(n=n, left=left, right=right, **data)

    def __repr__(self) -> str:
        return f"({self.n}, {self.left!r}, {self.right!r})"


Event = Annotated[Union[Leaf, Branch], Field(discriminator="kind")]

Branch.model_rebuild()


def _structure_key(e: Event) -> Any:
    if isinstance(e, Branch):
        return (e.n, _structure_key(e.left), _structure_key(e.right))
    return e.n


def _canonical_key(e: Event) -> Any:
    return _structure_key(normalize_event(e))


# ---------------------------------------------------------------------------
# Structural helpers
# ---------------------------------------------------------------------------


def value(e: Event) -> int:
    """Return the root counter of ``e``, ignoring any ancestors."""
    return e.n


def lift(e: Event, m: int) -> Event:
    """Add ``m`` to the root counter; children are shared, not copied."""
    if isinstance(e, Leaf):
        return Leaf(e.n + m)
    return Branch(e.n + m, e.left, e.right)


def sink(e: Event, m: int) -> Event:
    """Subtract ``m`` from the root counter."""
    return lift(e, -m)


def min_count(e: Event) -> int:
    """Smallest absolute count from the root of ``e`` to any leaf."""
    if isinstance(e, Leaf):
        return e.n
    return e.n + min(min_count(e.left), min_count(e.right))


def max_count(e: Event) -> int:
    """Largest absolute count from the root of ``e`` to any leaf."""
    if isinstance(e, Leaf):
        return e.n
    return e.n + max(max_count(e.left), max_count(e.right))


def leaf_counts(e: Event, base: int = 0) -> List[int]:
    """Absolute count of every leaf, in left-to-right order."""
    if isinstance(e, Leaf):
        return [base + e.n]
    return leaf_counts(e.left, base + e.n) + leaf_counts(e.right, base + e.n)


def normalize_event(e: Event) -> Event:
    """Return the canonical, minimal form of ``e``.

    Children are normalized first. Two equal leaf children collapse into a
    single leaf; otherwise the children's common minimum is sunk into the
    branch counter. Subtrees that are already canonical are returned as the
    same objects.
    """
    if isinstance(e, Leaf):
        return e

    left = normalize_event(e.left)
    right = normalize_event(e.right)
    if isinstance(left, Leaf) and isinstance(right, Leaf) and left.n == right.n:
        return Leaf(e.n + left.n)

    m = min(min_count(left), min_count(right))
    if m == 0 and left is e.left and right is e.right:
        return e
    return Branch(e.n + m, sink(left, m), sink(right, m))


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------


def fill(e: Event, identity: Id) -> Event:
    """Raise every region owned by ``identity`` to the highest count seen.

    Filling never increases ``max_count(e)``; it only catches owned regions
    up with what the tree already witnesses. Leaves are returned unchanged
    since there is nothing to fill into without growing first.
    """
    if isinstance(e, Leaf) or isinstance(identity, Absent):
        return e
    if isinstance(identity, Full):
        return Leaf(max_count(e))

    left_id, right_id = identity.left, identity.right
    if isinstance(left_id, Full):
        right = fill(e.right, right_id)
        top = max(max_count(e.left), max_count(right))
        return normalize_event(Branch(e.n, Leaf(top), right))
    if isinstance(right_id, Full):
        left = fill(e.left, left_id)
        top = max(max_count(left), max_count(e.right))
        return normalize_event(Branch(e.n, left, Leaf(top)))
    return normalize_event(
        Branch(e.n, fill(e.left, left_id), fill(e.right, right_id))
    )


def grow(e: Event, identity: Id) -> Tuple[Event, Cost]:
    """Record a new event by expanding the tree inside the owned region.

    Of all places the identity owns, the one requiring the least new
    structure wins, then the shallowest. A leaf owned outright is simply
    incremented; a leaf only partly owned is first expanded into
    ``(n, 0, 0)``. When both children are candidates and cost the same,
    the right child is grown.

    Args:
        e: The event tree to grow.
        identity: The identity recording the event.

    Returns:
        The grown tree and the cost of the chosen path.

    Raises:
        ShapeMismatchError: If an unsplit identity (``Full`` or ``Absent``)
            meets a branch, which includes any attempt to grow with an
            identity that owns nothing.
    """
    if isinstance(e, Leaf):
        if isinstance(identity, Full):
            return Leaf(e.n + 1), ZERO
        grown, cost = grow(Branch(e.n, Leaf(0), Leaf(0)), identity)
        return grown, cost.inc_creation()

    if not isinstance(identity, Pair):
        logger.error("Identity %r does not align with branch %r", identity, e)
        raise ShapeMismatchError(identity, e)

    if isinstance(identity.left, Absent):
        right, cost = grow(e.right, identity.right)
        return Branch(e.n, e.left, right), cost.inc_descent()
    if isinstance(identity.right, Absent):
        left, cost = grow(e.left, identity.left)
        return Branch(e.n, left, e.right), cost.inc_descent()

    left, left_cost = grow(e.left, identity.left)
    right, right_cost = grow(e.right, identity.right)
    if left_cost < right_cost:
        return Branch(e.n, left, e.right), left_cost.inc_descent()
    return Branch(e.n, e.left, right), right_cost.inc_descent()


def record_event(e: Event, identity: Id) -> Event:
    """Record one new event owned by ``identity`` into the history ``e``.

    Filling is tried first because it represents the event without adding
    structure. Only when filling changes nothing is the tree grown.

    Args:
        e: The replica's current event tree.
        identity: The replica's identity.

    Returns:
        The new, normalized event tree.

    Raises:
        ShapeMismatchError: If ``identity`` owns nothing, or its shape
            cannot be aligned with ``e``.
    """
    filled = fill(e, identity)
    if filled != e:
        logger.debug("Recorded event by fill: %r -> %r", e, filled)
        return filled

    grown, cost = grow(normalize_event(e), identity)
    result = normalize_event(grown)
    logger.debug("Recorded event by grow at %r: %r -> %r", cost, e, result)
    return result
