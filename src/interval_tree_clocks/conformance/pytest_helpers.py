"""Reusable test helpers for interval-tree-clocks conformance testing.

Consumers can import these to write their own conformance assertions:
    from interval_tree_clocks.conformance.pytest_helpers import (
        assert_normalized_event,
        assert_recomposes,
        assert_single_increment,
    )
"""
from __future__ import annotations

from typing import List, Tuple

from interval_tree_clocks.conformance.validators import (
    ConformanceResult,
    validate_event,
    validate_id,
)
from interval_tree_clocks.history import Branch, Event, Leaf
from interval_tree_clocks.identity import Id, split_id, sum_ids


def _format(result: ConformanceResult) -> str:
    return "\n".join(
        f"  {v.path} [{v.rule}]: {v.message}" for v in result.violations
    )


def assert_normalized_id(identity: Id) -> ConformanceResult:
    """Assert an identity is in normal form."""
    result = validate_id(identity)
    if not result.valid:
        raise AssertionError(
            f"Identity {identity!r} is not normalized:\n" + _format(result)
        )
    return result


def assert_normalized_event(e: Event) -> ConformanceResult:
    """Assert an event tree is in canonical form."""
    result = validate_event(e)
    if not result.valid:
        raise AssertionError(
            f"Event tree {e!r} is not normalized:\n" + _format(result)
        )
    return result


def assert_recomposes(identity: Id) -> Tuple[Id, Id]:
    """Assert that splitting an identity and summing the halves restores it."""
    left, right = split_id(identity)
    joined = sum_ids(left, right)
    assert joined == identity, (
        f"split({identity!r}) = ({left!r}, {right!r}) "
        f"sums back to {joined!r}"
    )
    return left, right


def _expand(e: Event) -> Branch:
    if isinstance(e, Branch):
        return e
    return Branch(e.n, Leaf(0), Leaf(0))


def _aligned_counts(
    a: Event,
    b: Event,
    base_a: int,
    base_b: int,
    out: List[Tuple[int, int]],
) -> None:
    if isinstance(a, Leaf) and isinstance(b, Leaf):
        out.append((base_a + a.n, base_b + b.n))
        return
    a, b = _expand(a), _expand(b)
    _aligned_counts(a.left, b.left, base_a + a.n, base_b + b.n, out)
    _aligned_counts(a.right, b.right, base_a + a.n, base_b + b.n, out)


def assert_single_increment(before: Event, after: Event) -> None:
    """Assert ``after`` differs from ``before`` by one event in one place.

    Both trees are aligned by expanding leaves where the other tree
    branches; exactly one aligned position may change, and only by +1.
    """
    pairs: List[Tuple[int, int]] = []
    _aligned_counts(before, after, 0, 0, pairs)
    changed = [(old, new) for old, new in pairs if old != new]
    assert len(changed) == 1, (
        f"Expected exactly one position to change from {before!r} "
        f"to {after!r}; {len(changed)} changed: {changed}"
    )
    old, new = changed[0]
    assert new == old + 1, (
        f"Expected one position to advance by 1 from {before!r} "
        f"to {after!r}; it went from {old} to {new}"
    )
