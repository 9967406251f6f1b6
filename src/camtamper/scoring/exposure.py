"""Exposure pass: blackout and flash severity from the histogram."""

from __future__ import annotations

from camtamper.scoring.types import IntensityHistogram
from camtamper.scoring.utils import Raster, clamp_score, compute_histogram

DARK_PIXEL_MAX = 74  # inclusive
BRIGHT_PIXEL_MIN = 200
BLACKOUT_MEAN_PIVOT = 60.0
BLACKOUT_MEAN_WEIGHT = 1.5
BLACKOUT_DARK_WEIGHT = 0.6
FLASH_BRIGHT_WEIGHT = 3.0


def compute_blackout_score(
    gray: Raster,
    histogram: IntensityHistogram | None = None,
) -> float:
    """Score lens covering / low light.

    Combines how far the mean sits below 60 with the share of
    pixels in [0, 74].

    Args:
        gray: Single-channel intensity raster.
        histogram: Precomputed histogram of gray (computed if omitted).

    Returns:
        Blackout score 0-100.
    """
    if histogram is None:
        histogram = compute_histogram(gray)

    avg_intensity = float(gray.mean())
    dark_percentage = histogram.percentage(0, DARK_PIXEL_MAX + 1)

    intensity_score = max(
        0.0, (BLACKOUT_MEAN_PIVOT - avg_intensity) * BLACKOUT_MEAN_WEIGHT
    )
    dark_pixel_score = dark_percentage * BLACKOUT_DARK_WEIGHT
    return clamp_score(intensity_score + dark_pixel_score)


def compute_flash_score(
    gray: Raster,
    histogram: IntensityHistogram | None = None,
) -> float:
    """Score sudden over-exposure from the share of pixels in [200, 255]."""
    if histogram is None:
        histogram = compute_histogram(gray)

    bright_percentage = histogram.percentage(BRIGHT_PIXEL_MIN, 256)
    return clamp_score(bright_percentage * FLASH_BRIGHT_WEIGHT)
