import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from pixel_matrix import new_matrix


@pytest.fixture
def solid_red():
    """10x10 solid red matrix."""
    return new_matrix(10, 10, (255, 0, 0))


@pytest.fixture
def gradient():
    """16x8 matrix whose red channel ramps with x and green with y."""
    return [[(x * 16, y * 32, 100) for y in range(8)] for x in range(16)]


@pytest.fixture
def seed_matrix():
    """7x7 black matrix with a single white pixel in the middle."""
    m = new_matrix(7, 7)
    m[3][3] = (255, 255, 255)
    return m
