"""Property-based tests for identity algebra laws using Hypothesis."""
from hypothesis import given, settings, strategies as st

from interval_tree_clocks.conformance import assert_normalized_id
from interval_tree_clocks.conformance.strategies import ids, split_ids
from interval_tree_clocks.identity import (
    ABSENT,
    FULL,
    Pair,
    is_anonymous,
    normalize_id,
    split_id,
    sum_ids,
)

# Identities with no normalization applied anywhere
raw_ids = st.recursive(
    st.sampled_from([ABSENT, FULL]),
    lambda children: st.builds(Pair, children, children),
    max_leaves=8,
)


class TestSplitSumLaws:
    """Laws tying split_id and sum_ids together."""

    @settings(deadline=None)
    @given(ids())
    def test_split_then_sum_recomposes(self, identity):
        """Test sum(split(id)) == id for normalized identities."""
        left, right = split_id(identity)
        assert sum_ids(left, right) == identity

    @settings(deadline=None)
    @given(split_ids())
    def test_forked_identities_recompose(self, identity):
        """Test identities held by real replicas always rejoin."""
        left, right = split_id(identity)
        assert sum_ids(left, right) == identity
        assert sum_ids(right, left) == identity

    @settings(deadline=None)
    @given(ids())
    def test_split_preserves_normal_form(self, identity):
        """Test both halves of a normalized identity are normalized."""
        left, right = split_id(identity)
        assert_normalized_id(left)
        assert_normalized_id(right)

    @settings(deadline=None)
    @given(split_ids())
    def test_split_halves_own_something(self, identity):
        """Test forking an owning identity never produces an anonymous half."""
        left, right = split_id(identity)
        assert not is_anonymous(left)
        assert not is_anonymous(right)

    @settings(deadline=None)
    @given(ids())
    def test_absent_is_identity_element(self, identity):
        """Test sum(0, x) == x and sum(x, 0) == x."""
        assert sum_ids(ABSENT, identity) == identity
        assert sum_ids(identity, ABSENT) == identity


class TestNormalizeLaws:
    """Laws for normalize_id."""

    @settings(deadline=None)
    @given(raw_ids)
    def test_normalize_idempotent(self, identity):
        """Test norm(norm(x)) == norm(x)."""
        once = normalize_id(identity)
        assert normalize_id(once) == once

    @settings(deadline=None)
    @given(raw_ids)
    def test_normalize_preserves_anonymity(self, identity):
        """Test normalization never changes whether an identity owns anything."""
        assert is_anonymous(normalize_id(identity)) == is_anonymous(identity)
