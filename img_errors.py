# img_errors.py
"""
Exception types raised by the matrix transform engine.

Every failure is local to one call: nothing is retried and no partial
matrix is ever returned.
"""


class ImageOpsError(Exception):
    """Base class for all img-ops failures."""


class DecodeError(ImageOpsError):
    """Input bytes are malformed, unsupported or too large."""


class EncodeError(ImageOpsError):
    """A matrix could not be written out as an image."""


class DimensionError(ImageOpsError, ValueError):
    """Zero-size or ragged matrix, mask larger than the matrix, or
    mismatched extents during concatenation."""


class DegenerateHistogramError(ImageOpsError):
    """Equalization of a channel whose whole mass sits in bin 0."""

    def __init__(self, channel):
        self.channel = channel
        super().__init__(f"Cannot equalize {channel.label} channel: every pixel is 0")


class InvalidParameterError(ImageOpsError, ValueError):
    """Bad mask size, sigma, factor or resize target."""
