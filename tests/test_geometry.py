import pytest

from geometry import copy_matrix, resize_nearest_neighbor
from img_errors import DimensionError, InvalidParameterError


def test_resize_2x2_to_4x4_replicates_quadrants():
    m = [[(1, 1, 1), (2, 2, 2)], [(3, 3, 3), (4, 4, 4)]]
    out = resize_nearest_neighbor(m, 4, 4)
    assert len(out) == 4 and all(len(col) == 4 for col in out)
    for x in range(4):
        for y in range(4):
            assert out[x][y] == m[x // 2][y // 2]


def test_resize_down_samples_and_stays_in_bounds(gradient):
    out = resize_nearest_neighbor(gradient, 3, 5)
    assert len(out) == 3 and len(out[0]) == 5
    assert out[0][0] == gradient[0][0]
    assert out[2][4] == gradient[2 * 16 // 3][4 * 8 // 5]


def test_resize_non_integer_ratio():
    m = [[(x, y, 0) for y in range(3)] for x in range(3)]
    out = resize_nearest_neighbor(m, 7, 2)
    assert [out[x][0][0] for x in range(7)] == [0, 0, 0, 1, 1, 2, 2]
    assert [out[0][y][1] for y in range(2)] == [0, 1]


@pytest.mark.parametrize("w,h", [(0, 4), (4, 0), (-1, 2), (2.5, 2)])
def test_resize_rejects_bad_targets(w, h):
    with pytest.raises(InvalidParameterError):
        resize_nearest_neighbor([[(0, 0, 0)]], w, h)


def test_resize_rejects_empty_matrix():
    with pytest.raises(DimensionError):
        resize_nearest_neighbor([], 2, 2)


def test_copy_is_independent(gradient):
    dup = copy_matrix(gradient)
    assert dup == gradient
    dup[0][0] = (9, 9, 9)
    assert gradient[0][0] == (0, 0, 100)
    assert all(a is not b for a, b in zip(dup, gradient))
