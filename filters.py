#!/usr/bin/env python3
"""
filters.py

Neighborhood filters built from three independent parts:
- a mask (uniform box or normalized Gaussian weights)
- the sliding-window engine, which gathers weighted samples per channel
- a reducer, which turns those samples into one output value

Pairings used by the convenience wrappers:
- ones + mean        -> box blur
- ones + max / min   -> dilation / erosion
- ones + median      -> median filter
- ones + rank        -> generalized rank filter
- ones + conservative -> conservative smoothing
- gaussian + sum     -> Gaussian blur
"""

import logging
import math
from typing import Callable, List, Sequence

from img_errors import DimensionError, InvalidParameterError
from pixel_matrix import (
    Mask, PixelMatrix, clamp8, matrix_height, matrix_width, validate_matrix,
)

logger = logging.getLogger(__name__)

Reducer = Callable[[Sequence[float]], float]

# ------------------ Masks ------------------

def _check_mask_size(size: int) -> None:
    if not isinstance(size, int) or size <= 0:
        raise InvalidParameterError(f"Mask size must be a positive integer, got {size!r}")
    if size % 2 == 0:
        raise InvalidParameterError(f"Mask size must be odd, got {size}")

def make_mask_of_ones(size: int) -> Mask:
    """Unnormalized box mask; the reducer does any averaging."""
    _check_mask_size(size)
    return [[1.0] * size for _ in range(size)]

def make_gaussian_mask(size: int, sigma: float) -> Mask:
    """w(dx,dy) = exp(-(dx²+dy²)/(2σ²)) / (2πσ²), rescaled to sum to 1."""
    _check_mask_size(size)
    if not isinstance(sigma, (int, float)) or not math.isfinite(sigma) or sigma <= 0:
        raise InvalidParameterError(f"Sigma must be a positive number, got {sigma!r}")
    c = size // 2
    two_s2 = 2.0 * sigma * sigma
    mask = [[math.exp(-((i - c) ** 2 + (j - c) ** 2) / two_s2) / (math.pi * two_s2)
             for j in range(size)] for i in range(size)]
    total = sum(sum(row) for row in mask)
    return [[w / total for w in row] for row in mask]

# ------------------ Reducers ------------------

def reduce_max(samples: Sequence[float]) -> float:
    return max(samples)

def reduce_min(samples: Sequence[float]) -> float:
    return min(samples)

def reduce_mean(samples: Sequence[float]) -> float:
    return sum(samples) / len(samples)

def reduce_sum(samples: Sequence[float]) -> float:
    return sum(samples)

def reduce_median(samples: Sequence[float]) -> float:
    win = sorted(samples)
    return win[len(win) // 2]

class RankReducer:
    """Order statistic: sort the window and take element `rank`.

    A rank past the end of the window is rejected.
    """

    def __init__(self, rank: int):
        if not isinstance(rank, int) or rank < 0:
            raise InvalidParameterError(f"Rank must be a non-negative integer, got {rank!r}")
        self.rank = rank

    def __call__(self, samples: Sequence[float]) -> float:
        if self.rank >= len(samples):
            raise InvalidParameterError(
                f"Rank {self.rank} is outside a window of {len(samples)} samples")
        return sorted(samples)[self.rank]

    def __repr__(self):
        return f"RankReducer(rank={self.rank})"

def reduce_conservative(samples: Sequence[float]) -> float:
    """Clamp the center sample into the range of its neighbors."""
    mid = len(samples) // 2
    center = samples[mid]
    others = list(samples[:mid]) + list(samples[mid + 1:])
    if not others:
        return center
    lo, hi = min(others), max(others)
    if center < lo:
        return lo
    if center > hi:
        return hi
    return center

# ------------------ Engine ------------------

def _check_mask(mask: Mask, width: int, height: int) -> int:
    size = len(mask)
    if size == 0 or any(len(row) != size for row in mask):
        raise InvalidParameterError("Mask must be a non-empty square grid")
    if size % 2 == 0:
        raise InvalidParameterError(f"Mask size must be odd, got {size}")
    if size > width or size > height:
        raise DimensionError(f"{size}x{size} mask does not fit a {width}x{height} matrix")
    return size

def apply_filter(matrix: PixelMatrix, mask: Mask, reduce: Reducer) -> PixelMatrix:
    """Slide mask over every interior pixel and reduce each channel's
    weighted samples. Border pixels, where the mask would leave the
    matrix, are copied unchanged."""
    validate_matrix(matrix)
    w, h = matrix_width(matrix), matrix_height(matrix)
    size = _check_mask(mask, w, h)
    r = size // 2
    logger.debug(f"apply_filter: {w}x{h}, mask {size}x{size}, reducer {getattr(reduce, '__name__', reduce)}")

    out: PixelMatrix = []
    for x in range(w):
        col = []
        for y in range(h):
            if x < r or y < r or x >= w - r or y >= h - r:
                col.append(matrix[x][y])
                continue
            px = []
            for ch in range(3):
                samples: List[float] = []
                for i in range(size):
                    sx = x + i - r
                    for j in range(size):
                        sy = y + j - r
                        v = matrix[sx][sy][ch] if 0 <= sx < w and 0 <= sy < h else 0
                        samples.append(v * mask[i][j])
                # drop float residue so exact sums do not truncate one short
                px.append(clamp8(round(reduce(samples), 9)))
            col.append(tuple(px))
        out.append(col)
    return out

# ------------------ Filters ------------------

def box_blur(matrix: PixelMatrix, size: int = 3) -> PixelMatrix:
    return apply_filter(matrix, make_mask_of_ones(size), reduce_mean)

def dilate(matrix: PixelMatrix, size: int = 3) -> PixelMatrix:
    return apply_filter(matrix, make_mask_of_ones(size), reduce_max)

def erode(matrix: PixelMatrix, size: int = 3) -> PixelMatrix:
    return apply_filter(matrix, make_mask_of_ones(size), reduce_min)

def median_filter(matrix: PixelMatrix, size: int = 3) -> PixelMatrix:
    return apply_filter(matrix, make_mask_of_ones(size), reduce_median)

def rank_filter(matrix: PixelMatrix, rank: int, size: int = 3) -> PixelMatrix:
    mask = make_mask_of_ones(size)
    reducer = RankReducer(rank)
    if rank >= size * size:
        raise InvalidParameterError(f"Rank must be below {size * size} for a {size}x{size} mask, got {rank}")
    return apply_filter(matrix, mask, reducer)

def conservative_smoothing(matrix: PixelMatrix, size: int = 3) -> PixelMatrix:
    return apply_filter(matrix, make_mask_of_ones(size), reduce_conservative)

def gaussian_blur(matrix: PixelMatrix, size: int = 5, sigma: float = 1.0) -> PixelMatrix:
    return apply_filter(matrix, make_gaussian_mask(size, sigma), reduce_sum)
