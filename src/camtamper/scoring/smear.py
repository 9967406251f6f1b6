"""Smear pass: composite score for smeared or obstructed lenses.

A smeared lens gives a frame that is soft, low in contrast, poor in
edges and oddly distributed in brightness. The pass blends:

    1. Blur score (Laplacian variance), weight 0.5
    2. Contrast score (global intensity stddev), weight 0.3
    3. Edge score (Canny edge density), weight 0.2
    4. Intensity distribution score (histogram thirds), weight 0.4 on top

then stretches the combined value around a pivot of 20 so that
mid-to-high combined scores spread over the high-severity band.

All weights and thresholds are fixed empirical constants.
"""

from __future__ import annotations

from camtamper.scoring.edges import compute_edge_score
from camtamper.scoring.sharpness import compute_blur_score
from camtamper.scoring.types import IntensityHistogram
from camtamper.scoring.utils import Raster, clamp_score, compute_histogram

CONTRAST_STDDEV_SCALE = 10.0

BLUR_WEIGHT = 0.5
CONTRAST_WEIGHT = 0.3
EDGE_WEIGHT = 0.2
INTENSITY_WEIGHT = 0.4

# Histogram thirds: dark < 85 <= mid < 170 <= bright
MID_BIN_START = 85
BRIGHT_BIN_START = 170

BRIGHTNESS_REFERENCE = 120.0
BRIGHTNESS_EXCESS_WEIGHT = 0.8

SMEAR_PIVOT = 20.0
SMEAR_STRETCH = 1.5
SMEAR_COMPRESS = 0.5


def compute_contrast_score(gray: Raster) -> float:
    """Score lack of global contrast (100 = perfectly flat frame)."""
    stddev = float(gray.std())
    return 100.0 - clamp_score(stddev / CONTRAST_STDDEV_SCALE * 100.0)


def compute_intensity_distribution_score(
    mean_intensity: float,
    dark_pct: float,
    mid_pct: float,
    bright_pct: float,
) -> float:
    """Score an abnormal brightness distribution.

    Each histogram third contributes only when its share exceeds a
    threshold that shifts with overall brightness: bright frames
    tolerate fewer dark pixels, dark frames fewer bright ones.

    Args:
        mean_intensity: Mean pixel intensity (0-255).
        dark_pct: Percentage of pixels below 85.
        mid_pct: Percentage of pixels in [85, 170).
        bright_pct: Percentage of pixels at or above 170.

    Returns:
        Unbounded non-negative distribution score.
    """
    brightness_factor = min(1.0, mean_intensity / BRIGHTNESS_REFERENCE)
    dark_threshold = 8.0 + brightness_factor * 3.0
    bright_threshold = 8.0 + (1.0 - brightness_factor) * 3.0
    mid_threshold = 15.0 + brightness_factor * 2.0

    # Summation order is fixed so results stay bit-for-bit stable
    terms = (
        (mean_intensity - BRIGHTNESS_REFERENCE) * BRIGHTNESS_EXCESS_WEIGHT
        if mean_intensity > BRIGHTNESS_REFERENCE
        else 0.0,
        dark_pct * 0.5 if dark_pct > dark_threshold else 0.0,
        bright_pct * 0.5 if bright_pct > bright_threshold else 0.0,
        mid_pct * 0.3 if mid_pct > mid_threshold else 0.0,
    )
    return sum(terms, 0.0)


def rescale_combined_score(combined: float) -> float:
    """Map the combined score onto the final 0-100 smear scale.

    Above the pivot, values are stretched 1.5x (capped at 100);
    at or below it they are halved.
    """
    if combined > SMEAR_PIVOT:
        return min(100.0, SMEAR_PIVOT + (combined - SMEAR_PIVOT) * SMEAR_STRETCH)
    return combined * SMEAR_COMPRESS


def compute_smear_score(
    gray: Raster,
    histogram: IntensityHistogram | None = None,
    blur_score: float | None = None,
) -> float:
    """Compute the composite smear score for a frame.

    Args:
        gray: Single-channel intensity raster.
        histogram: Precomputed histogram of gray (computed if omitted).
        blur_score: Precomputed blur score of gray (computed if omitted).

    Returns:
        Smear score 0-100.
    """
    if histogram is None:
        histogram = compute_histogram(gray)
    if blur_score is None:
        blur_score = compute_blur_score(gray)

    contrast_score = compute_contrast_score(gray)
    edge_score = compute_edge_score(gray)

    base_score = (
        blur_score * BLUR_WEIGHT
        + contrast_score * CONTRAST_WEIGHT
        + edge_score * EDGE_WEIGHT
    )

    intensity_score = compute_intensity_distribution_score(
        mean_intensity=float(gray.mean()),
        dark_pct=histogram.percentage(0, MID_BIN_START),
        mid_pct=histogram.percentage(MID_BIN_START, BRIGHT_BIN_START),
        bright_pct=histogram.percentage(BRIGHT_BIN_START, 256),
    )

    combined = base_score + intensity_score * INTENSITY_WEIGHT
    return rescale_combined_score(combined)
