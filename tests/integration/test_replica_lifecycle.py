"""Integration test for forking, recording and rejoining replicas."""
import pytest

from interval_tree_clocks import (
    ABSENT,
    FULL,
    Branch,
    Leaf,
    NonDisjointIdentityError,
    Pair,
    ShapeMismatchError,
    leaf_counts,
    max_count,
    record_event,
    split_id,
    sum_ids,
)
from interval_tree_clocks.conformance import (
    assert_normalized_event,
    assert_normalized_id,
)


class TestReplicaLifecycle:
    """Replicas fork, record independently, and hand identities back."""

    def test_single_replica_counts_in_place(self) -> None:
        """Test a replica owning everything just increments its leaf."""
        history = Leaf(0)
        for _ in range(3):
            history = record_event(history, FULL)
        assert history == Leaf(3)

    def test_fork_record_and_rejoin(self) -> None:
        """Test the full fork / record / rejoin cycle across three replicas."""
        # Step 1: the seed replica forks into alice and bob
        alice, bob = split_id(FULL)
        assert alice == Pair(FULL, ABSENT)
        assert bob == Pair(ABSENT, FULL)

        # Step 2: each records events in its own half only
        alice_history = record_event(record_event(Leaf(0), alice), alice)
        bob_history = record_event(Leaf(0), bob)
        assert repr(alice_history) == "(0, 2, 0)"
        assert repr(bob_history) == "(0, 0, 1)"

        # Step 3: alice forks carol; both start from alice's history
        alice, carol = split_id(alice)
        assert alice == Pair(Pair(FULL, ABSENT), ABSENT)
        assert carol == Pair(Pair(ABSENT, FULL), ABSENT)
        carol_history = alice_history

        alice_history = record_event(alice_history, alice)
        carol_history = record_event(carol_history, carol)
        assert repr(alice_history) == "(0, (2, 1, 0), 0)"
        assert repr(carol_history) == "(0, (2, 0, 1), 0)"
        assert leaf_counts(carol_history) == [2, 3, 0]

        # Step 4: identities are handed back
        rejoined = sum_ids(alice, carol)
        assert rejoined == Pair(FULL, ABSENT)
        assert sum_ids(rejoined, bob) == FULL

        for history in (alice_history, bob_history, carol_history):
            assert_normalized_event(history)

    def test_forked_replicas_share_history(self) -> None:
        """Test forking and recording reuse untouched subtrees."""
        alice, _ = split_id(FULL)
        history = record_event(record_event(Leaf(0), alice), alice)

        left, right = split_id(alice)
        left_history = record_event(history, left)
        right_history = record_event(history, right)

        assert left_history.right is history.right
        assert right_history.right is history.right

    def test_adopted_history_is_caught_up_by_fill(self) -> None:
        """Test a replica catches up on a sibling's history without growing."""
        alice, _ = split_id(FULL)
        history = record_event(record_event(Leaf(0), alice), alice)
        alice, carol = split_id(alice)
        carol_history = record_event(history, carol)

        # alice adopts carol's history; her owned region is raised to the
        # witnessed maximum instead of new structure being created
        caught_up = record_event(carol_history, alice)
        assert caught_up == Branch(0, Leaf(3), Leaf(0))
        assert max_count(caught_up) == max_count(carol_history)

    def test_rejoining_the_same_identity_twice_fails(self) -> None:
        """Test summing overlapping identities is reported, not papered over."""
        alice, bob = split_id(FULL)
        whole = sum_ids(alice, bob)
        with pytest.raises(NonDisjointIdentityError):
            sum_ids(whole, alice)

        left, _ = split_id(alice)
        with pytest.raises(NonDisjointIdentityError):
            sum_ids(left, alice)

    def test_replica_without_identity_cannot_record(self) -> None:
        """Test an identity that owns nothing is refused."""
        retired, also_retired = split_id(ABSENT)
        assert_normalized_id(retired)
        with pytest.raises(ShapeMismatchError):
            record_event(Leaf(0), retired)
        with pytest.raises(ShapeMismatchError):
            record_event(Branch(0, Leaf(1), Leaf(0)), also_retired)
