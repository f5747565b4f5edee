# image_processing.py
"""
Per-pixel arithmetic and logic operators, plus whole-matrix point
processing built on them.

Binary operators map two channel values to one, unary operators map one
value to one. All of them are total over [0, 255] and saturate instead of
wrapping.
"""

import logging
import math
from dataclasses import dataclass

from img_errors import InvalidParameterError
from matrix_ops import apply_unary
from pixel_matrix import (
    MAX_VALUE, Channel, PixelMatrix, clamp8, matrix_height, matrix_width,
    max_channel, validate_matrix,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# 1. Binary operators
# ---------------------------------------------------------------------
def add_pixels(a: int, b: int) -> int:
    """s = a + b, saturated at 255."""
    s = a + b
    return MAX_VALUE if s > MAX_VALUE else s


def subtract_pixels(a: int, b: int) -> int:
    """Absolute difference |a - b|."""
    return a - b if a > b else b - a


def blend_pixels(factor: float, a: int, b: int) -> int:
    """s = f*a + (1-f)*b, truncated and saturated."""
    return clamp8(factor * a + (1 - factor) * b)


def avg_pixels(a: int, b: int) -> int:
    return (a + b) // 2


def and_pixels(a: int, b: int) -> int:
    return a & b


def or_pixels(a: int, b: int) -> int:
    return a | b


def xor_pixels(a: int, b: int) -> int:
    return a ^ b


def multiply_pixels(a: int, b: int) -> int:
    """Normalized product a*b/255."""
    return a * b // MAX_VALUE


def divide_pixels(a: int, b: int) -> int:
    """Ratio of the smaller value to the larger, scaled to 255."""
    hi = max_channel(a, b)
    if hi == 0:
        return 0
    lo = a if hi == b else b
    return int(lo / hi * MAX_VALUE)


# ---------------------------------------------------------------------
# 2. Unary operators
# ---------------------------------------------------------------------
def multiply_by_factor(factor: float, p: int) -> int:
    """s = f*p, truncated and saturated."""
    return clamp8(factor * p)


def not_pixel(p: int) -> int:
    """Complement against the fixed maximum: s = 255 - p."""
    return MAX_VALUE - p


# ---------------------------------------------------------------------
# 3. Parameterized operators
# ---------------------------------------------------------------------
def _check_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return value


@dataclass(frozen=True)
class Blend:
    """Binary operator carrying its blend factor. The factor is not
    restricted to [0, 1]; out-of-range results saturate."""
    factor: float

    def __post_init__(self):
        object.__setattr__(self, "factor", _check_finite("Blend factor", self.factor))

    def apply(self, a: int, b: int) -> int:
        return blend_pixels(self.factor, a, b)

    __call__ = apply


@dataclass(frozen=True)
class ScaleBy:
    """Unary operator multiplying every value by a non-negative factor."""
    factor: float

    def __post_init__(self):
        factor = _check_finite("Scale factor", self.factor)
        if factor < 0:
            raise InvalidParameterError(f"Scale factor must be >= 0, got {factor}")
        object.__setattr__(self, "factor", factor)

    @classmethod
    def divide(cls, divisor: float) -> "ScaleBy":
        divisor = _check_finite("Divisor", divisor)
        if divisor <= 0:
            raise InvalidParameterError(f"Divisor must be > 0, got {divisor}")
        return cls(1.0 / divisor)

    def apply(self, p: int) -> int:
        return multiply_by_factor(self.factor, p)

    __call__ = apply


# ---------------------------------------------------------------------
# 4. Whole-matrix point processing
# ---------------------------------------------------------------------
def invert(matrix: PixelMatrix) -> PixelMatrix:
    """Negative transformation: s = 255 - r (for each channel)."""
    return apply_unary(matrix, not_pixel)


def invert_to_channel_max(matrix: PixelMatrix) -> PixelMatrix:
    """Negative against each channel's observed maximum instead of 255."""
    validate_matrix(matrix)
    peaks = [0, 0, 0]
    for col in matrix:
        for px in col:
            for c in Channel:
                peaks[c] = max_channel(peaks[c], px[c])
    logger.debug(f"invert_to_channel_max: peaks={peaks}")
    return [[(peaks[0] - r, peaks[1] - g, peaks[2] - b) for (r, g, b) in col]
            for col in matrix]


def to_grayscale(matrix: PixelMatrix) -> PixelMatrix:
    """Convert to grayscale using s = (R + G + B) / 3."""
    validate_matrix(matrix)
    out = []
    for col in matrix:
        pcol = []
        for (r, g, b) in col:
            s = (r + g + b) // 3
            pcol.append((s, s, s))
        out.append(pcol)
    return out


def to_binary(matrix: PixelMatrix) -> PixelMatrix:
    """Black/white at the mean gray level: gray >= mean -> 255, else 0."""
    gray = to_grayscale(matrix)
    total = sum(px[0] for col in gray for px in col)
    threshold = total // (matrix_width(gray) * matrix_height(gray))
    logger.debug(f"to_binary: threshold={threshold}")
    return [[(255, 255, 255) if px[0] >= threshold else (0, 0, 0) for px in col]
            for col in gray]
