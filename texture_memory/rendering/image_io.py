"""Image source and PNG frame export.

Pillow arrays are ``(height, width, 3)``; grids here are ``(width, height, 3)``
so ``grid[i, j]`` is the pixel at x=``i``, y=``j``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..common.errors import FrameExportError, ImageLoadError
from ..common.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def load_pixels(path: PathLike) -> np.ndarray:
    """Decode ``path`` to an RGB ``(width, height, 3)`` ``uint8`` grid."""
    try:
        with Image.open(path) as img:
            pixels = np.array(img.convert("RGB"), dtype=np.uint8)
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageLoadError(f"could not decode image {str(path)!r}: {exc}") from exc
    grid = np.ascontiguousarray(pixels.transpose(1, 0, 2))
    logger.info(f"loaded {path} ({grid.shape[0]}x{grid.shape[1]})")
    return grid


def grid_to_image(grid: np.ndarray, cell_size: int = 1) -> Image.Image:
    """Render ``grid`` as an RGB image with ``cell_size`` pixel square cells."""
    pixels = np.asarray(grid, dtype=np.uint8).transpose(1, 0, 2)
    if cell_size > 1:
        pixels = np.repeat(np.repeat(pixels, cell_size, axis=0), cell_size, axis=1)
    return Image.fromarray(np.ascontiguousarray(pixels))


def save_frame(grid: np.ndarray, path: PathLike, cell_size: int = 1) -> Path:
    path = Path(path)
    try:
        grid_to_image(grid, cell_size).save(path)
    except (OSError, ValueError) as exc:
        raise FrameExportError(f"could not write frame to {str(path)!r}: {exc}") from exc
    logger.info(f"saved frame to {path}")
    return path
