"""
Tests for combining matrices and laying them out.
"""

import pytest

from image_processing import add_pixels, avg_pixels, not_pixel
from img_errors import DimensionError, InvalidParameterError
from matrix_ops import (
    apply_unary, combine_two, concat_horizontal, concat_vertical, tint_non_white,
)
from pixel_matrix import WHITE, Channel, new_matrix


def test_combine_equal_sizes():
    a = new_matrix(3, 2, (10, 20, 30))
    b = new_matrix(3, 2, (1, 2, 3))
    out = combine_two(a, b, add_pixels)
    assert len(out) == 3 and len(out[0]) == 2
    assert all(px == (11, 22, 33) for col in out for px in col)


def test_combine_mismatched_sizes_zero_pads():
    a = new_matrix(4, 1, (100, 100, 100))
    b = new_matrix(2, 3, (50, 50, 50))
    out = combine_two(a, b, add_pixels)
    assert len(out) == 4 and len(out[0]) == 3
    assert out[0][0] == (150, 150, 150)   # both present
    assert out[3][0] == (100, 100, 100)   # only a
    assert out[1][2] == (50, 50, 50)      # only b
    assert out[3][2] == (0, 0, 0)         # neither


def test_combine_does_not_mutate_inputs():
    a = new_matrix(2, 2, (8, 8, 8))
    b = new_matrix(2, 2, (2, 2, 2))
    combine_two(a, b, avg_pixels)
    assert a[0][0] == (8, 8, 8) and b[1][1] == (2, 2, 2)


def test_combine_rejects_empty():
    with pytest.raises(DimensionError):
        combine_two([], new_matrix(1, 1), add_pixels)


def test_apply_unary_returns_new_matrix():
    m = new_matrix(2, 2, (0, 100, 255))
    out = apply_unary(m, not_pixel)
    assert out[1][1] == (255, 155, 0)
    assert m[1][1] == (0, 100, 255)


def test_concat_horizontal_brackets_with_white_strips():
    a = new_matrix(2, 3, (1, 1, 1))
    b = new_matrix(1, 3, (2, 2, 2))
    out = concat_horizontal([a, b], 2)
    # 2 + 2 + 2 for a, 2 + 1 + 2 for b
    assert len(out) == 11
    assert all(len(col) == 3 for col in out)
    assert out[0] == [WHITE] * 3 and out[1] == [WHITE] * 3
    assert out[2][0] == (1, 1, 1) and out[3][2] == (1, 1, 1)
    assert out[4] == [WHITE] * 3
    assert out[8][1] == (2, 2, 2)
    assert out[10] == [WHITE] * 3


def test_concat_horizontal_rejects_height_mismatch():
    with pytest.raises(DimensionError):
        concat_horizontal([new_matrix(2, 3), new_matrix(2, 4)], 1)


def test_concat_vertical_brackets_with_white_strips():
    a = new_matrix(2, 2, (1, 1, 1))
    b = new_matrix(2, 1, (2, 2, 2))
    out = concat_vertical([a, b], 1)
    assert len(out) == 2
    assert out[0] == [WHITE, (1, 1, 1), (1, 1, 1), WHITE, WHITE, (2, 2, 2), WHITE]


def test_concat_vertical_rejects_width_mismatch():
    with pytest.raises(DimensionError):
        concat_vertical([new_matrix(2, 2), new_matrix(3, 2)], 1)


def test_concat_negative_separator():
    with pytest.raises(InvalidParameterError):
        concat_horizontal([new_matrix(1, 1)], -1)


def test_tint_non_white():
    m = [[WHITE, (0, 0, 0), (200, 200, 200)]]
    assert tint_non_white(m, Channel.GREEN) == [[WHITE, (0, 255, 0), (0, 255, 0)]]
