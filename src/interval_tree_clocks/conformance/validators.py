"""Normal-form validation for identities and event trees.

Packages that store or exchange ITC values (stamps, codecs, replication
layers) can use these checks to confirm that values they produce are in
canonical form, so that structural equality matches semantic equality.

Each violation names the node it was found at as a dotted path from the
root, e.g. ``"root.L.R"`` is the right child of the root's left child.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from interval_tree_clocks.history import Branch, Event, Leaf, min_count
from interval_tree_clocks.identity import Absent, Full, Id, Pair

COLLAPSIBLE_PAIR = "collapsible_pair"
COLLAPSIBLE_BRANCH = "collapsible_branch"
UNSUNK_CHILDREN = "unsunk_children"


@dataclass(frozen=True)
class InvariantViolation:
    """A normal-form rule broken at one node."""

    path: str
    rule: str
    message: str


@dataclass(frozen=True)
class ConformanceResult:
    """Result of checking a value against its normal form."""

    valid: bool
    violations: Tuple[InvariantViolation, ...]


def _id_violations(
    identity: Id, path: str, found: List[InvariantViolation]
) -> None:
    if not isinstance(identity, Pair):
        return
    left, right = identity.left, identity.right
    if isinstance(left, Absent) and isinstance(right, Absent):
        found.append(InvariantViolation(
            path=path,
            rule=COLLAPSIBLE_PAIR,
            message="(0, 0) must be written as 0",
        ))
    elif isinstance(left, Full) and isinstance(right, Full):
        found.append(InvariantViolation(
            path=path,
            rule=COLLAPSIBLE_PAIR,
            message="(1, 1) must be written as 1",
        ))
    _id_violations(left, f"{path}.L", found)
    _id_violations(right, f"{path}.R", found)


def _event_violations(
    e: Event, path: str, found: List[InvariantViolation]
) -> None:
    if not isinstance(e, Branch):
        return
    left, right = e.left, e.right
    if isinstance(left, Leaf) and isinstance(right, Leaf) and left.n == right.n:
        found.append(InvariantViolation(
            path=path,
            rule=COLLAPSIBLE_BRANCH,
            message=(
                f"children are both {left.n}; "
                f"must be written as {e.n + left.n}"
            ),
        ))
    offset = min(min_count(left), min_count(right))
    if offset != 0:
        found.append(InvariantViolation(
            path=path,
            rule=UNSUNK_CHILDREN,
            message=(
                f"children share offset {offset} "
                f"that belongs in the branch counter"
            ),
        ))
    _event_violations(left, f"{path}.L", found)
    _event_violations(right, f"{path}.R", found)


def validate_id(identity: Id) -> ConformanceResult:
    """Check that an identity contains no collapsible pairs.

    Args:
        identity: The identity to check.

    Returns:
        ConformanceResult listing every collapsible pair found.
    """
    found: List[InvariantViolation] = []
    _id_violations(identity, "root", found)
    return ConformanceResult(valid=not found, violations=tuple(found))


def validate_event(e: Event) -> ConformanceResult:
    """Check that an event tree is in canonical form.

    A canonical tree has no branch with two equal leaf children and no
    branch whose children share a non-zero common minimum.

    Args:
        e: The event tree to check.

    Returns:
        ConformanceResult listing every violation found, outermost first.
    """
    found: List[InvariantViolation] = []
    _event_violations(e, "root", found)
    return ConformanceResult(valid=not found, violations=tuple(found))
