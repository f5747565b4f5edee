# geometry.py
"""
Nearest-neighbor resize and matrix copy.
"""

import logging

from img_errors import InvalidParameterError
from pixel_matrix import PixelMatrix, matrix_height, matrix_width, validate_matrix

logger = logging.getLogger(__name__)


def resize_nearest_neighbor(matrix: PixelMatrix, new_width: int, new_height: int) -> PixelMatrix:
    """Sample source pixel (x * W // new_w, y * H // new_h), clamped to the edge."""
    validate_matrix(matrix)
    for name, v in (("width", new_width), ("height", new_height)):
        if not isinstance(v, int) or v <= 0:
            raise InvalidParameterError(f"Target {name} must be a positive integer, got {v!r}")

    w, h = matrix_width(matrix), matrix_height(matrix)
    logger.debug(f"resize_nearest_neighbor: {w}x{h} -> {new_width}x{new_height}")
    # Precompute source index per target row/column
    ys = [min(y * h // new_height, h - 1) for y in range(new_height)]
    out = []
    for x in range(new_width):
        src = matrix[min(x * w // new_width, w - 1)]
        out.append([src[sy] for sy in ys])
    return out


def copy_matrix(matrix: PixelMatrix) -> PixelMatrix:
    """Independent copy; no column list is shared with the original."""
    return [list(col) for col in matrix]
