"""Shared utilities for the scoring passes: luminance, histogram, clamping."""

from __future__ import annotations

import cv2
import numpy as np
from numpy.typing import NDArray
from PIL import Image

from camtamper.errors import InvalidInput
from camtamper.scoring.types import IntensityHistogram

Raster = NDArray[np.uint8]

# Integer modes holding up to 16 bits per sample (PNG/TIFF 16-bit gray)
HIGH_DEPTH_MODES = frozenset({"I", "I;16", "I;16L", "I;16B", "I;16N"})


def clamp_score(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp a score into [low, high]."""
    return min(high, max(low, value))


def to_luminance(image: Image.Image | NDArray) -> Raster:
    """Reduce an image to a single-channel 8-bit intensity raster.

    This is the only validity gate of the kernel: every analyzer
    assumes its input came through here.

    Args:
        image: PIL Image (any mode), or numpy array shaped (H, W) or
            (H, W, C). Channels are read as gray (1), gray plus alpha (2),
            RGB (3), RGBA (4), or RGB followed by extra planes (more than 4).
            16-bit PIL modes keep their top 8 bits.

    Returns:
        2-D uint8 array with the same width and height.

    Raises:
        InvalidInput: If the raster has no pixels or an unsupported shape.
        TypeError: If image is neither a PIL Image nor a numpy array.
    """
    if isinstance(image, Image.Image):
        if image.width == 0 or image.height == 0:
            raise InvalidInput("Image has no pixels")
        if image.mode in HIGH_DEPTH_MODES:
            wide = np.asarray(image).astype(np.int64)
            return (np.clip(wide, 0, 65535) >> 8).astype(np.uint8)
        # ITU-R 601-2 luma
        return np.array(image.convert("L"), dtype=np.uint8)

    if not isinstance(image, np.ndarray):
        raise TypeError(
            f"Expected PIL Image or numpy array, got {type(image).__name__}"
        )

    if image.size == 0:
        raise InvalidInput("Raster has no pixels")

    arr = image
    if arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)

    if arr.ndim == 2:
        return np.ascontiguousarray(arr)
    if arr.ndim == 3:
        channels = arr.shape[2]
        if channels <= 2:
            # Alpha carries no intensity
            return np.ascontiguousarray(arr[:, :, 0])
        if channels == 4:
            return cv2.cvtColor(arr, cv2.COLOR_RGBA2GRAY)
        return cv2.cvtColor(np.ascontiguousarray(arr[:, :, :3]), cv2.COLOR_RGB2GRAY)

    raise InvalidInput(f"Unsupported raster shape: {arr.shape}")


def compute_histogram(gray: Raster) -> IntensityHistogram:
    """Count pixels per intensity value (256 bins)."""
    hist, _ = np.histogram(gray.ravel(), bins=256, range=(0, 256))
    return IntensityHistogram(counts=hist.astype(np.int64))


def is_empty_frame(image: object) -> bool:
    """True for an already-decoded frame (PIL Image or array) with no pixels."""
    if isinstance(image, Image.Image):
        return image.width == 0 or image.height == 0
    if isinstance(image, np.ndarray):
        return image.size == 0
    return False
