"""Edge density pass: share of pixels on Canny edges."""

from __future__ import annotations

import cv2
import numpy as np
from numpy.typing import NDArray

from camtamper.scoring.utils import Raster, clamp_score

CANNY_LOW_THRESHOLD = 50
CANNY_HIGH_THRESHOLD = 150
EDGE_DENSITY_WEIGHT = 150.0


def compute_edge_map(gray: Raster) -> NDArray[np.uint8]:
    """Binary edge map (255 = edge) with hysteresis thresholds 50/150.

    Pixels above the high threshold are edges; pixels above the low
    threshold are edges only when connected to one that is.
    """
    return cv2.Canny(gray, CANNY_LOW_THRESHOLD, CANNY_HIGH_THRESHOLD)


def compute_edge_density(gray: Raster) -> float:
    """Fraction of pixels classified as edges (0-1)."""
    edges = compute_edge_map(gray)
    return float(np.count_nonzero(edges)) / float(edges.size)


def compute_edge_score(gray: Raster) -> float:
    """Score lack of edges.

    Returns:
        0-100, high for flat/smeared frames, low for detailed ones.
    """
    edge_density = compute_edge_density(gray)
    return 100.0 - clamp_score(edge_density * EDGE_DENSITY_WEIGHT)
