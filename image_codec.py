# image_codec.py
"""
Bridge between encoded image bytes and pixel matrices, via Pillow.

Pillow yields (H, W, 3) row-major arrays; the matrix model is column-major,
so rows go through from_rows on the way in and to_rows on the way out.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from img_errors import DecodeError, EncodeError
from pixel_matrix import PixelMatrix, from_rows, to_rows, validate_matrix
from settings import DEFAULTS

logger = logging.getLogger(__name__)

MAX_INPUT_BYTES = DEFAULTS['limits']['max_input_bytes']


def from_pil(img: Image.Image) -> PixelMatrix:
    rows = np.asarray(img.convert("RGB"), dtype=np.uint8).tolist()
    return from_rows(rows)


def to_pil(matrix: PixelMatrix) -> Image.Image:
    validate_matrix(matrix)
    arr = np.array(to_rows(matrix), dtype=np.uint8)
    return Image.fromarray(arr)


def decode(data: bytes, max_bytes: int = MAX_INPUT_BYTES) -> PixelMatrix:
    """Decode PNG/JPEG/BMP/TIFF/GIF/PCX/... bytes into a matrix."""
    if max_bytes is not None and len(data) > max_bytes:
        raise DecodeError(f"Input is {len(data)} bytes, limit is {max_bytes}")
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            logger.debug(f"decode: {img.format} {img.mode} {img.width}x{img.height}")
            matrix = from_pil(img)
    except (UnidentifiedImageError, Image.DecompressionBombError,
            OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e
    validate_matrix(matrix)
    return matrix


def encode(matrix: PixelMatrix, fmt: str = "PNG") -> bytes:
    img = to_pil(matrix)
    buf = BytesIO()
    try:
        img.save(buf, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode image as {fmt}: {e}") from e
    return buf.getvalue()


def load_image(path: Union[str, Path], max_bytes: int = MAX_INPUT_BYTES) -> PixelMatrix:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Cannot read {path}: {e}") from e
    return decode(data, max_bytes=max_bytes)


def save_image(matrix: PixelMatrix, path: Union[str, Path]) -> None:
    """Write matrix to path; the format follows the file extension (PNG if none)."""
    path = Path(path)
    fmt = Image.registered_extensions().get(path.suffix.lower(), "PNG")
    data = encode(matrix, fmt)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise EncodeError(f"Cannot write {path}: {e}") from e
