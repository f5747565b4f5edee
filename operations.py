# operations.py
"""
Named operations shared by the command line and the viewer.

Each entry records how many input images the operation takes and which
parameters it reads; run_operation dispatches on the name.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple

import filters
import histogram
from geometry import resize_nearest_neighbor
from image_processing import (
    Blend, ScaleBy, add_pixels, and_pixels, avg_pixels, divide_pixels, invert,
    invert_to_channel_max, multiply_pixels, or_pixels, subtract_pixels,
    to_binary, to_grayscale, xor_pixels,
)
from img_errors import InvalidParameterError
from matrix_ops import apply_unary, combine_two
from pixel_matrix import PixelMatrix
from settings import default_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operation:
    name: str
    arity: int
    description: str
    params: Tuple[str, ...] = field(default=())


OPERATIONS: Dict[str, Operation] = {op.name: op for op in (
    Operation("add", 2, "Saturating sum"),
    Operation("subtract", 2, "Absolute difference"),
    Operation("blend", 2, "f*A + (1-f)*B", ("factor",)),
    Operation("avg", 2, "Average"),
    Operation("and", 2, "Bitwise AND"),
    Operation("or", 2, "Bitwise OR"),
    Operation("xor", 2, "Bitwise XOR"),
    Operation("multiply", 2, "Normalized product A*B/255"),
    Operation("divide", 2, "Ratio of smaller to larger value"),
    Operation("multiply-by", 1, "Scale by a factor", ("factor",)),
    Operation("divide-by", 1, "Scale by 1/factor", ("factor",)),
    Operation("not", 1, "Complement against 255"),
    Operation("not-max", 1, "Complement against each channel's maximum"),
    Operation("grayscale", 1, "Channel average"),
    Operation("binary", 1, "Threshold at the mean gray level"),
    Operation("box-blur", 1, "Mean over a box mask", ("size",)),
    Operation("gaussian", 1, "Gaussian blur", ("size", "sigma")),
    Operation("dilate", 1, "Max over a box mask", ("size",)),
    Operation("erode", 1, "Min over a box mask", ("size",)),
    Operation("median", 1, "Median over a box mask", ("size",)),
    Operation("rank", 1, "Order statistic over a box mask", ("size", "rank")),
    Operation("conservative", 1, "Conservative smoothing", ("size",)),
    Operation("equalize", 1, "Histogram equalization"),
    Operation("histogram", 1, "RGB histogram panels"),
    Operation("compare-histograms", 2, "Images with their histograms, stacked"),
    Operation("resize", 1, "Nearest-neighbor resize", ("width", "height")),
)}

_BINARY_PIXEL_OPS = {
    "add": add_pixels,
    "subtract": subtract_pixels,
    "avg": avg_pixels,
    "and": and_pixels,
    "or": or_pixels,
    "xor": xor_pixels,
    "multiply": multiply_pixels,
    "divide": divide_pixels,
}

_MASK_FILTERS = {
    "box-blur": filters.box_blur,
    "dilate": filters.dilate,
    "erode": filters.erode,
    "median": filters.median_filter,
    "conservative": filters.conservative_smoothing,
}


def _require(name: str, params: Dict[str, Any], key: str) -> Any:
    value = params.get(key)
    if value is None:
        raise InvalidParameterError(f"Operation '{name}' needs --{key}")
    return value


def _get(params: Dict[str, Any], key: str, default: Any) -> Any:
    value = params.get(key)
    return default if value is None else value


def run_operation(name: str, images: Sequence[PixelMatrix],
                  config: Optional[Dict[str, Any]] = None, **params) -> PixelMatrix:
    """Run operation `name` on `images` and return the resulting matrix."""
    op = OPERATIONS.get(name)
    if op is None:
        raise InvalidParameterError(f"Unknown operation: {name}")
    if len(images) != op.arity:
        raise InvalidParameterError(
            f"Operation '{name}' takes {op.arity} image(s), got {len(images)}")
    config = config or default_config()
    given = {k: v for k, v in params.items() if v is not None}
    logger.info(f"Running {name} with {given or 'no parameters'}")

    if name in _BINARY_PIXEL_OPS:
        return combine_two(images[0], images[1], _BINARY_PIXEL_OPS[name])
    if name == "blend":
        return combine_two(images[0], images[1], Blend(_require(name, params, "factor")))

    m = images[0]
    if name == "multiply-by":
        return apply_unary(m, ScaleBy(_require(name, params, "factor")))
    if name == "divide-by":
        return apply_unary(m, ScaleBy.divide(_require(name, params, "factor")))
    if name == "not":
        return invert(m)
    if name == "not-max":
        return invert_to_channel_max(m)
    if name == "grayscale":
        return to_grayscale(m)
    if name == "binary":
        return to_binary(m)
    if name in _MASK_FILTERS:
        return _MASK_FILTERS[name](m, _get(params, "size", 3))
    if name == "gaussian":
        return filters.gaussian_blur(m, _get(params, "size", 5), _get(params, "sigma", 1.0))
    if name == "rank":
        return filters.rank_filter(m, _require(name, params, "rank"), _get(params, "size", 3))
    if name == "equalize":
        return histogram.equalize(m)
    if name == "resize":
        return resize_nearest_neighbor(
            m, _require(name, params, "width"), _require(name, params, "height"))

    hist_cfg, cmp_cfg = config['histogram'], config['compare']
    if name == "histogram":
        return histogram.rgb_histogram(
            m, hist_cfg['panel_separator'], hist_cfg['chart_size_cm'], hist_cfg['dpi'])
    if name == "compare-histograms":
        return histogram.compare_histograms(
            images[0], images[1],
            image_size=tuple(cmp_cfg['image_size']),
            histogram_size=tuple(cmp_cfg['histogram_size']),
            horizontal_separator=cmp_cfg['horizontal_separator'],
            vertical_separator=cmp_cfg['vertical_separator'],
            panel_separator=hist_cfg['panel_separator'],
            size_cm=hist_cfg['chart_size_cm'],
            dpi=hist_cfg['dpi'],
        )
    raise InvalidParameterError(f"Operation '{name}' has no handler")
