"""
Tests for masks, reducers and the sliding-window engine.
"""

import math

import pytest

from filters import (
    RankReducer, apply_filter, box_blur, conservative_smoothing, dilate, erode,
    gaussian_blur, make_gaussian_mask, make_mask_of_ones, median_filter,
    rank_filter, reduce_conservative, reduce_max, reduce_mean, reduce_median,
)
from img_errors import DimensionError, InvalidParameterError
from pixel_matrix import new_matrix


@pytest.mark.parametrize("size,sigma", [(1, 1.0), (3, 0.5), (5, 1.0), (7, 2.5), (9, 10.0)])
def test_gaussian_mask_sums_to_one(size, sigma):
    mask = make_gaussian_mask(size, sigma)
    assert len(mask) == size and all(len(row) == size for row in mask)
    assert math.isclose(sum(sum(row) for row in mask), 1.0, abs_tol=1e-9)


def test_gaussian_mask_peaks_at_center_and_is_symmetric():
    mask = make_gaussian_mask(5, 1.0)
    assert mask[2][2] == max(max(row) for row in mask)
    assert math.isclose(mask[0][1], mask[1][0])
    assert math.isclose(mask[0][0], mask[4][4])


def test_mask_of_ones_is_unnormalized():
    assert make_mask_of_ones(3) == [[1.0] * 3] * 3


@pytest.mark.parametrize("size", [0, -3, 2, 4])
def test_mask_size_must_be_positive_odd(size):
    with pytest.raises(InvalidParameterError):
        make_mask_of_ones(size)
    with pytest.raises(InvalidParameterError):
        make_gaussian_mask(size, 1.0)


@pytest.mark.parametrize("sigma", [0, -1.0, float("nan")])
def test_gaussian_sigma_must_be_positive(sigma):
    with pytest.raises(InvalidParameterError):
        make_gaussian_mask(3, sigma)


def test_max_filter_dilates_single_seed(seed_matrix):
    out = apply_filter(seed_matrix, make_mask_of_ones(3), reduce_max)
    for x in range(7):
        for y in range(7):
            if max(abs(x - 3), abs(y - 3)) <= 1:
                assert out[x][y] == (255, 255, 255)
            else:
                assert out[x][y] == seed_matrix[x][y]


def test_min_filter_erodes_single_seed(seed_matrix):
    out = erode(seed_matrix)
    assert out[3][3] == (0, 0, 0)


def test_border_pixels_pass_through():
    m = [[(x * 10, y * 10, 7) for y in range(5)] for x in range(5)]
    out = box_blur(m)
    for i in range(5):
        assert out[0][i] == m[0][i]
        assert out[4][i] == m[4][i]
        assert out[i][0] == m[i][0]
        assert out[i][4] == m[i][4]


def test_box_blur_of_constant_is_constant():
    m = new_matrix(6, 6, (90, 45, 3))
    assert box_blur(m) == m


def test_gaussian_blur_of_constant_is_constant():
    m = new_matrix(9, 9, (100, 200, 37))
    assert gaussian_blur(m, 5, 1.2) == m


def test_median_removes_salt_noise(seed_matrix):
    out = median_filter(seed_matrix)
    assert out[3][3] == (0, 0, 0)


def test_rank_filter_extremes_match_min_and_max(seed_matrix):
    assert rank_filter(seed_matrix, 0) == erode(seed_matrix)
    assert rank_filter(seed_matrix, 8) == dilate(seed_matrix)


@pytest.mark.parametrize("rank,size", [(9, 3), (100, 3), (25, 5)])
def test_rank_filter_rejects_rank_outside_window(seed_matrix, rank, size):
    with pytest.raises(InvalidParameterError):
        rank_filter(seed_matrix, rank, size)


def test_rank_reducer_rejects_short_window():
    with pytest.raises(InvalidParameterError):
        RankReducer(3)([1, 2, 3])
    assert RankReducer(2)([3, 1, 2]) == 3


def test_rank_reducer_rejects_negative():
    with pytest.raises(InvalidParameterError):
        RankReducer(-1)


def test_conservative_reducer():
    assert reduce_conservative([1, 2, 3, 4, 50, 6, 7, 8, 9]) == 9
    assert reduce_conservative([10, 20, 30, 40, 0, 60, 70, 80, 90]) == 10
    assert reduce_conservative([1, 2, 3, 4, 5, 6, 7, 8, 9]) == 5
    assert reduce_conservative([42]) == 42


def test_conservative_smoothing_flattens_spike(seed_matrix):
    out = conservative_smoothing(seed_matrix)
    assert out[3][3] == (0, 0, 0)
    assert out[2][2] == (0, 0, 0)


def test_basic_reducers():
    assert reduce_mean([1, 2, 3, 6]) == 3
    assert reduce_median([9, 1, 5]) == 5


def test_mask_larger_than_matrix():
    with pytest.raises(DimensionError):
        apply_filter(new_matrix(2, 5), make_mask_of_ones(3), reduce_max)


def test_even_or_ragged_mask_rejected():
    m = new_matrix(5, 5)
    with pytest.raises(InvalidParameterError):
        apply_filter(m, [[1.0, 1.0], [1.0, 1.0]], reduce_max)
    with pytest.raises(InvalidParameterError):
        apply_filter(m, [[1.0, 1.0, 1.0], [1.0]], reduce_max)


def test_filter_does_not_mutate_input(seed_matrix):
    before = [list(col) for col in seed_matrix]
    dilate(seed_matrix)
    assert seed_matrix == before
