import logging

import numpy as np
import pytest

from layoutgen.geometry import PhysicalKey

PANGRAM = "the quick brown fox jumps over the lazy dog"


@pytest.fixture(autouse=True)
def restore_root_logging():
    """CLI tests reconfigure the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def pangram_corpus():
    return PANGRAM.replace(" ", "")


@pytest.fixture
def random_weights():
    """Symmetric 8x8 integer weight graph."""
    rng = np.random.default_rng(7)
    upper = np.triu(rng.integers(0, 20, size=(8, 8)))
    weights = upper + np.triu(upper, 1).T
    return weights.astype(np.int64)


@pytest.fixture
def small_geometry():
    """Four keys on two fingers, in two cost groups."""
    return (
        PhysicalKey(key_index=0, finger_id=0, cost_group=1),
        PhysicalKey(key_index=1, finger_id=1, cost_group=0),
        PhysicalKey(key_index=2, finger_id=0, cost_group=0),
        PhysicalKey(key_index=3, finger_id=1, cost_group=1),
    )
