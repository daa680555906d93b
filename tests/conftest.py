"""Shared pytest fixtures for all tests."""
from typing import Tuple

import pytest

from interval_tree_clocks import FULL, Id, Leaf, split_id


@pytest.fixture
def seed_history() -> Leaf:
    """Event tree of a replica that has recorded nothing yet."""
    return Leaf(0)


@pytest.fixture
def halves() -> Tuple[Id, Id]:
    """The two identities produced by the first fork of the seed."""
    return split_id(FULL)
