import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so every test sees the same random draws."""
    return np.random.default_rng(1234)
