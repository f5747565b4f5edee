# pixel_matrix.py
"""
Pixel matrix data model shared by every transform.

A matrix is indexed matrix[x][y]: the outer list holds columns, so the
width is len(matrix) and the height is len(matrix[0]). Each cell is an
(r, g, b) tuple of ints in [0, 255].
"""

from enum import IntEnum
from typing import List, Tuple

from img_errors import DimensionError

Pixel = Tuple[int, int, int]
PixelMatrix = List[List[Pixel]]
Mask = List[List[float]]

MAX_VALUE = 255
WHITE: Pixel = (255, 255, 255)
BLACK: Pixel = (0, 0, 0)


class Channel(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def color(self) -> Pixel:
        """Solid pixel for this channel, e.g. (255, 0, 0) for RED."""
        px = [0, 0, 0]
        px[self.value] = MAX_VALUE
        return tuple(px)


# ---------------------------------------------------------------------
# Typed comparisons
# ---------------------------------------------------------------------
def max_dimension(a: int, b: int) -> int:
    return a if a > b else b


def max_channel(a: int, b: int) -> int:
    return a if a > b else b


def clamp8(v) -> int:
    """Truncate to int and saturate into [0, 255]."""
    v = int(v)
    if v < 0:
        return 0
    if v > MAX_VALUE:
        return MAX_VALUE
    return v


# ---------------------------------------------------------------------
# Shape helpers
# ---------------------------------------------------------------------
def matrix_width(matrix: PixelMatrix) -> int:
    return len(matrix)


def matrix_height(matrix: PixelMatrix) -> int:
    return len(matrix[0]) if matrix else 0


def new_matrix(width: int, height: int, fill: Pixel = BLACK) -> PixelMatrix:
    return [[fill] * height for _ in range(width)]


def validate_matrix(matrix: PixelMatrix) -> None:
    """Raise DimensionError unless the matrix is non-empty and rectangular."""
    if not matrix or not matrix[0]:
        raise DimensionError("Matrix has zero width or height")
    h = len(matrix[0])
    for x, col in enumerate(matrix):
        if len(col) != h:
            raise DimensionError(f"Column {x} has height {len(col)}, expected {h}")


def channel_values(matrix: PixelMatrix, channel: Channel) -> List[int]:
    """Flat list of one channel's values, column by column."""
    return [px[channel] for col in matrix for px in col]


# ---------------------------------------------------------------------
# Row <-> column conversion
# ---------------------------------------------------------------------
def from_rows(rows: List[List[Pixel]]) -> PixelMatrix:
    """Build a matrix from image rows (rows[y][x])."""
    if not rows:
        return []
    return [[tuple(rows[y][x]) for y in range(len(rows))] for x in range(len(rows[0]))]


def to_rows(matrix: PixelMatrix) -> List[List[Pixel]]:
    """Inverse of from_rows."""
    return [[matrix[x][y] for x in range(matrix_width(matrix))]
            for y in range(matrix_height(matrix))]
