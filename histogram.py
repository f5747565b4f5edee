# histogram.py
"""
Per-channel histograms: counting, equalization and rendered comparison
panels.
"""

import logging
from io import BytesIO
from typing import List, Sequence

import matplotlib.pyplot as plt

from geometry import resize_nearest_neighbor
from image_codec import decode
from img_errors import DegenerateHistogramError
from matrix_ops import concat_horizontal, concat_vertical, tint_non_white
from pixel_matrix import Channel, PixelMatrix, channel_values, validate_matrix
from settings import DEFAULTS

logger = logging.getLogger(__name__)

CM_PER_INCH = 2.54

_HIST = DEFAULTS['histogram']
_COMPARE = DEFAULTS['compare']


# ---------------------------------------------------------------------
# 1. Counting
# ---------------------------------------------------------------------
def compute_histogram(matrix: PixelMatrix) -> List[List[int]]:
    """Return [red, green, blue] lists of 256 value counts."""
    validate_matrix(matrix)
    hist = [[0] * 256 for _ in Channel]
    rhist, ghist, bhist = hist
    for col in matrix:
        for (r, g, b) in col:
            rhist[r] += 1
            ghist[g] += 1
            bhist[b] += 1
    return hist


def cumulative_distribution(hist: Sequence[int]) -> List[int]:
    """Running sum of one channel's bin counts."""
    cfd = []
    csum = 0
    for count in hist:
        csum += count
        cfd.append(csum)
    return cfd


# ---------------------------------------------------------------------
# 2. Equalization
# ---------------------------------------------------------------------
def equalize(matrix: PixelMatrix) -> PixelMatrix:
    """Histogram equalization, each channel on its own.

    v -> floor((CFD[v] - CFD[0]) * 255 / (N - CFD[0])). A channel whose
    pixels are all 0 leaves a zero denominator and raises
    DegenerateHistogramError.
    """
    hist = compute_histogram(matrix)
    luts = []
    for c in Channel:
        cfd = cumulative_distribution(hist[c])
        total, base = cfd[-1], cfd[0]
        span = total - base
        if span == 0:
            raise DegenerateHistogramError(c)
        luts.append([(cfd[v] - base) * 255 // span for v in range(256)])

    rlut, glut, blut = luts
    return [[(rlut[r], glut[g], blut[b]) for (r, g, b) in col] for col in matrix]


# ---------------------------------------------------------------------
# 3. Rendering
# ---------------------------------------------------------------------
def render_channel_histogram(channel: Channel, values: Sequence[int],
                             size_cm: float = _HIST['chart_size_cm'],
                             dpi: int = _HIST['dpi']) -> bytes:
    """Plot value frequency (256 bins) for one channel, returned as PNG bytes."""
    counts = [0] * 256
    for v in values:
        counts[v] += 1

    inches = size_cm / CM_PER_INCH
    fig, ax = plt.subplots(figsize=(inches, inches), dpi=dpi)
    try:
        ax.bar(range(256), counts, width=1.0, color="black")
        ax.set_xlim(0, 255)
        ax.set_ylim(0, max(counts) * 1.1 if any(counts) else 1)
        ax.set_title(channel.label)
        buf = BytesIO()
        fig.savefig(buf, format="png", facecolor="white")
    finally:
        plt.close(fig)
    return buf.getvalue()


def channel_histogram_panel(matrix: PixelMatrix, channel: Channel,
                            size_cm: float = _HIST['chart_size_cm'],
                            dpi: int = _HIST['dpi']) -> PixelMatrix:
    """Histogram chart for one channel, decoded and tinted in that channel's color."""
    png = render_channel_histogram(channel, channel_values(matrix, channel), size_cm, dpi)
    return tint_non_white(decode(png, max_bytes=None), channel)


def rgb_histogram(matrix: PixelMatrix,
                  separator: int = _HIST['panel_separator'],
                  size_cm: float = _HIST['chart_size_cm'],
                  dpi: int = _HIST['dpi']) -> PixelMatrix:
    """Red, green and blue histogram panels side by side."""
    validate_matrix(matrix)
    panels = [channel_histogram_panel(matrix, c, size_cm, dpi) for c in Channel]
    return concat_horizontal(panels, separator)


def compare_histograms(m1: PixelMatrix, m2: PixelMatrix,
                       image_size=tuple(_COMPARE['image_size']),
                       histogram_size=tuple(_COMPARE['histogram_size']),
                       horizontal_separator: int = _COMPARE['horizontal_separator'],
                       vertical_separator: int = _COMPARE['vertical_separator'],
                       panel_separator: int = _HIST['panel_separator'],
                       size_cm: float = _HIST['chart_size_cm'],
                       dpi: int = _HIST['dpi']) -> PixelMatrix:
    """Two rows, one per input: the image next to its RGB histogram."""
    rows = []
    for m in (m1, m2):
        hist = rgb_histogram(m, panel_separator, size_cm, dpi)
        img = resize_nearest_neighbor(m, *image_size)
        hist = resize_nearest_neighbor(hist, *histogram_size)
        rows.append(concat_horizontal([img, hist], horizontal_separator))
    logger.debug(f"compare_histograms: image {image_size}, histogram {histogram_size}")
    return concat_vertical(rows, vertical_separator)
