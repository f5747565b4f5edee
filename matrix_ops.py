# matrix_ops.py
"""
Apply pixel operators across whole matrices and lay matrices out side by
side.
"""

import logging
from typing import Callable, List, Sequence

from img_errors import DimensionError, InvalidParameterError
from pixel_matrix import (
    WHITE, Channel, PixelMatrix, matrix_height, matrix_width, max_dimension,
    validate_matrix,
)

logger = logging.getLogger(__name__)

BinaryOp = Callable[[int, int], int]
UnaryOp = Callable[[int], int]


def combine_two(m1: PixelMatrix, m2: PixelMatrix, op: BinaryOp) -> PixelMatrix:
    """Apply op channel-wise to two matrices.

    The result spans the larger width and the larger height of the two;
    pixels missing from the smaller input read as black.
    """
    validate_matrix(m1)
    validate_matrix(m2)
    w1, h1 = matrix_width(m1), matrix_height(m1)
    w2, h2 = matrix_width(m2), matrix_height(m2)
    width = max_dimension(w1, w2)
    height = max_dimension(h1, h2)
    logger.debug(f"combine_two: {w1}x{h1} + {w2}x{h2} -> {width}x{height}")

    out = []
    for x in range(width):
        col = []
        for y in range(height):
            p1 = m1[x][y] if x < w1 and y < h1 else (0, 0, 0)
            p2 = m2[x][y] if x < w2 and y < h2 else (0, 0, 0)
            col.append((op(p1[0], p2[0]), op(p1[1], p2[1]), op(p1[2], p2[2])))
        out.append(col)
    return out


def apply_unary(matrix: PixelMatrix, op: UnaryOp) -> PixelMatrix:
    """Apply op to each channel of every pixel. The input is left untouched."""
    validate_matrix(matrix)
    return [[(op(r), op(g), op(b)) for (r, g, b) in col] for col in matrix]


def _check_separator(separator_width: int) -> None:
    if separator_width < 0:
        raise InvalidParameterError(f"Separator width must be >= 0, got {separator_width}")


def concat_horizontal(matrices: Sequence[PixelMatrix], separator_width: int) -> PixelMatrix:
    """Place matrices left to right, each bracketed by white vertical strips."""
    _check_separator(separator_width)
    if not matrices:
        raise DimensionError("Nothing to concatenate")
    height = matrix_height(matrices[0])
    out: PixelMatrix = []
    for i, m in enumerate(matrices):
        validate_matrix(m)
        if matrix_height(m) != height:
            raise DimensionError(
                f"Matrix {i} has height {matrix_height(m)}, expected {height}")
        out.extend([WHITE] * height for _ in range(separator_width))
        out.extend(list(col) for col in m)
        out.extend([WHITE] * height for _ in range(separator_width))
    return out


def concat_vertical(matrices: Sequence[PixelMatrix], separator_width: int) -> PixelMatrix:
    """Stack matrices top to bottom, each bracketed by white horizontal strips."""
    _check_separator(separator_width)
    if not matrices:
        raise DimensionError("Nothing to concatenate")
    width = matrix_width(matrices[0])
    for i, m in enumerate(matrices):
        validate_matrix(m)
        if matrix_width(m) != width:
            raise DimensionError(
                f"Matrix {i} has width {matrix_width(m)}, expected {width}")

    band = [WHITE] * separator_width
    out: PixelMatrix = []
    for x in range(width):
        col: List = []
        for m in matrices:
            col.extend(band)
            col.extend(m[x])
            col.extend(band)
        out.append(col)
    return out


def tint_non_white(matrix: PixelMatrix, channel: Channel) -> PixelMatrix:
    """Replace every non-white pixel with the solid channel color."""
    validate_matrix(matrix)
    color = channel.color
    return [[px if px == WHITE else color for px in col] for col in matrix]
