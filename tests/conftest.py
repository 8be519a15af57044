import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")


@pytest.fixture
def impulse():
    grid = np.zeros((3, 3), dtype=np.uint8)
    grid[1, 1] = 255
    return grid


@pytest.fixture
def vertical_seam():
    """4 rows x 6 columns, left half black, right half white."""
    grid = np.zeros((4, 6), dtype=np.uint8)
    grid[:, 3:] = 255
    return grid


@pytest.fixture
def noisy():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(17, 23), dtype=np.uint8)
