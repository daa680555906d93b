"""Conformance helpers for packages built on interval-tree-clocks.

Hypothesis strategies live in ``interval_tree_clocks.conformance.strategies``
and need the ``conformance`` extra.
"""
from interval_tree_clocks.conformance.pytest_helpers import (
    assert_normalized_event,
    assert_normalized_id,
    assert_recomposes,
    assert_single_increment,
)
from interval_tree_clocks.conformance.validators import (
    COLLAPSIBLE_BRANCH,
    COLLAPSIBLE_PAIR,
    UNSUNK_CHILDREN,
    ConformanceResult,
    InvariantViolation,
    validate_event,
    validate_id,
)

__all__ = [
    "COLLAPSIBLE_BRANCH",
    "COLLAPSIBLE_PAIR",
    "UNSUNK_CHILDREN",
    "ConformanceResult",
    "InvariantViolation",
    "assert_normalized_event",
    "assert_normalized_id",
    "assert_recomposes",
    "assert_single_increment",
    "validate_event",
    "validate_id",
]
