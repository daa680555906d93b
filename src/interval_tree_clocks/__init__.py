"""
interval-tree-clocks: the core algebra of Interval Tree Clocks (ITC).

ITC tracks causality between replicas whose membership changes over time.
Each replica holds an identity (the region of an abstract ownership space it
may record events in) and an event tree (a compact encoding of the history
it has seen). Identities are forked with ``split_id`` and rejoined with
``sum_ids``; events are recorded with ``record_event``.

Example:
    >>> from interval_tree_clocks import FULL, Leaf, record_event, split_id
    >>> alice, bob = split_id(FULL)
    >>> alice, bob
    ((1, 0), (0, 1))
    >>> history = record_event(Leaf(0), alice)
    >>> history
    (0, 1, 0)

Scope Notes:
    Only the identity and event algebras live here. A stamp type pairing
    the two, cross-replica comparison and joining of event trees, and any
    serialization are left to packages built on top of these primitives.
    ``interval_tree_clocks.conformance`` offers validators, pytest helpers
    and hypothesis strategies for such packages.
"""

__version__ = "0.1.0"

# Errors
from interval_tree_clocks.errors import (
    IntervalTreeClockError,
    NonDisjointIdentityError,
    ShapeMismatchError,
)

# Identity algebra
from interval_tree_clocks.identity import (
    ABSENT,
    FULL,
    Absent,
    Full,
    Id,
    Pair,
    is_anonymous,
    normalize_id,
    split_id,
    sum_ids,
)

# Growth cost
from interval_tree_clocks.cost import Cost

# Event algebra
from interval_tree_clocks.history import (
    Branch,
    Event,
    Leaf,
    fill,
    grow,
    leaf_counts,
    lift,
    max_count,
    min_count,
    normalize_event,
    record_event,
    sink,
    value,
)

__all__ = [
    # Errors
    "IntervalTreeClockError",
    "NonDisjointIdentityError",
    "ShapeMismatchError",
    # Identity algebra
    "ABSENT",
    "FULL",
    "Absent",
    "Full",
    "Id",
    "Pair",
    "is_anonymous",
    "normalize_id",
    "split_id",
    "sum_ids",
    # Growth cost
    "Cost",
    # Event algebra
    "Branch",
    "Event",
    "Leaf",
    "fill",
    "grow",
    "leaf_counts",
    "lift",
    "max_count",
    "min_count",
    "normalize_event",
    "record_event",
    "sink",
    "value",
]
