"""Sharpness pass: blur severity from Laplacian variance."""

from __future__ import annotations

import cv2

from camtamper.scoring.utils import Raster, clamp_score

# Empirical scale ceiling; not derived from the image.
MIN_LAPLACIAN_VARIANCE = 0.0
MAX_LAPLACIAN_VARIANCE = 1000.0


def laplacian_variance(gray: Raster) -> float:
    """Variance of the Laplacian response over the whole raster.

    Higher values = more local detail.
    """
    laplacian = cv2.Laplacian(gray, cv2.CV_64F)
    return float(laplacian.var())


def compute_blur_score(gray: Raster) -> float:
    """Score blur severity.

    A flat (fully defocused) raster has variance 0 and scores 100;
    the score falls toward 0 as detail approaches the variance ceiling.

    Args:
        gray: Single-channel intensity raster.

    Returns:
        Blur score 0-100 (100 = no detail at all).
    """
    variance = laplacian_variance(gray)
    normalized = (
        (variance - MIN_LAPLACIAN_VARIANCE)
        / (MAX_LAPLACIAN_VARIANCE - MIN_LAPLACIAN_VARIANCE)
        * 100.0
    )
    return 100.0 - clamp_score(normalized)
