"""Identity interval algebra.

An identity describes which part of the abstract (0, 1) ownership space a
replica may record events in. It is a binary tree over three shapes:

- ``Absent``: owns nothing in this region (written ``0``).
- ``Full``: owns the whole region (written ``1``).
- ``Pair(left, right)``: ownership split between two halves.

Identities are forked with :func:`split_id` and rejoined with
:func:`sum_ids`. Nodes are frozen; operations return new roots that reuse
untouched subtrees by reference.
"""
from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from interval_tree_clocks.errors import NonDisjointIdentityError

logger = logging.getLogger("interval_tree_clocks.identity")


class _IdNode(BaseModel):
    """Common base for identity nodes: frozen, structurally compared."""

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _IdNode):
            return NotImplemented
        return _shape_key(self) == _shape_key(other)

    def __hash__(self) -> int:
        return hash(_shape_key(self))


class Absent(_IdNode):
    """No ownership of any event-recording right in this region."""

    kind: Literal["absent"] = "absent"

    def __repr__(self) -> str:
        return "0"


class Full(_IdNode):
    """Exclusive ownership of this region."""

    kind: Literal["full"] = "full"

    def __repr__(self) -> str:
        return "1"


class Pair(_IdNode):
    """Ownership split between a left and a right sub-region."""

    kind: Literal["pair"] = "pair"
    left: Id = Field(..., description="Ownership of the left half")
    right: Id = Field(..., description="Ownership of the right half")

    def __init__(self, left: Any, right: Any, **data: Any) -> None:
        super().__init__(left=left, right=right, **data)

    def __repr__(self) -> str:
        return f"({self.left!r}, {self.right!r})"


Id = Annotated[Union[Absent, Full, Pair], Field(discriminator="kind")]

Pair.model_rebuild()

ABSENT: Absent = Absent()
FULL: Full = Full()


def _shape_key(node: _IdNode) -> Any:
    if isinstance(node, Pair):
        return (_shape_key(node.left), _shape_key(node.right))
    return 1 if isinstance(node, Full) else 0


def split_id(identity: Id) -> Tuple[Id, Id]:
    """Fork an identity into two disjoint halves.

    The halves recombine with :func:`sum_ids` into the original identity.
    When one side of a pair owns nothing, the split descends into the
    other side (left checked first); when both sides own something, each
    half simply takes one side.

    Args:
        identity: The identity to fork.

    Returns:
        A ``(left, right)`` tuple of disjoint identities.
    """
    if isinstance(identity, Absent):
        return ABSENT, ABSENT
    if isinstance(identity, Full):
        return Pair(FULL, ABSENT), Pair(ABSENT, FULL)

    left, right = identity.left, identity.right
    if isinstance(left, Absent):
        r1, r2 = split_id(right)
        return Pair(left, r1), Pair(left, r2)
    if isinstance(right, Absent):
        l1, l2 = split_id(left)
        return Pair(l1, right), Pair(l2, right)
    return Pair(left, ABSENT), Pair(ABSENT, right)


def normalize_id(identity: Id) -> Id:
    """Collapse ``(0, 0)`` to ``0`` and ``(1, 1)`` to ``1`` at the root.

    Children are assumed to be normalized already; every other shape is
    returned unchanged.
    """
    if isinstance(identity, Pair):
        left, right = identity.left, identity.right
        if isinstance(left, Absent) and isinstance(right, Absent):
            return ABSENT
        if isinstance(left, Full) and isinstance(right, Full):
            return FULL
    return identity


def sum_ids(a: Id, b: Id) -> Id:
    """Join two disjoint identities into one.

    Args:
        a: First identity.
        b: Second identity, disjoint from ``a``.

    Returns:
        The normalized union of both identities.

    Raises:
        NonDisjointIdentityError: If ``a`` and ``b`` both claim the same
            region (one side is ``Full`` where the other owns anything).
    """
    if isinstance(a, Absent):
        return b
    if isinstance(b, Absent):
        return a
    if isinstance(a, Pair) and isinstance(b, Pair):
        return normalize_id(
            Pair(sum_ids(a.left, b.left), sum_ids(a.right, b.right))
        )
    logger.warning("Refusing to sum overlapping identities: %r + %r", a, b)
    raise NonDisjointIdentityError(a, b)


def is_anonymous(identity: Id) -> bool:
    """Return True if the identity owns no region at all."""
    if isinstance(identity, Pair):
        return is_anonymous(identity.left) and is_anonymous(identity.right)
    return isinstance(identity, Absent)
