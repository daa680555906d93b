"""Hypothesis strategies for identities and event trees.

Requires the ``conformance`` extra (hypothesis). Every strategy produces
values in normal form.
"""
from __future__ import annotations

from hypothesis import strategies as st

from interval_tree_clocks.history import Branch, Event, Leaf, normalize_event
from interval_tree_clocks.identity import (
    ABSENT,
    FULL,
    Id,
    Pair,
    normalize_id,
    split_id,
)


def ids(max_leaves: int = 8) -> st.SearchStrategy[Id]:
    """Arbitrary normalized identities, including ``0`` and ``1``."""
    return st.recursive(
        st.sampled_from([ABSENT, FULL]),
        lambda children: st.builds(
            lambda left, right: normalize_id(Pair(left, right)),
            children,
            children,
        ),
        max_leaves=max_leaves,
    )


def owning_ids(max_leaves: int = 8) -> st.SearchStrategy[Id]:
    """Normalized identities that own at least part of the space."""
    return ids(max_leaves=max_leaves).filter(lambda i: i != ABSENT)


@st.composite
def split_ids(draw: st.DrawFn, max_splits: int = 6) -> Id:
    """Identities reachable from ``1`` by repeatedly forking one side."""
    identity: Id = FULL
    for _ in range(draw(st.integers(min_value=0, max_value=max_splits))):
        left, right = split_id(identity)
        identity = left if draw(st.booleans()) else right
    return identity


def events(max_leaves: int = 8, max_counter: int = 5) -> st.SearchStrategy[Event]:
    """Arbitrary normalized event trees with non-negative counters."""
    counters = st.integers(min_value=0, max_value=max_counter)
    return st.recursive(
        st.builds(Leaf, counters),
        lambda children: st.builds(
            lambda n, left, right: normalize_event(Branch(n, left, right)),
            counters,
            children,
            children,
        ),
        max_leaves=max_leaves,
    )
