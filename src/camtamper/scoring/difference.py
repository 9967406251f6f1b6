"""Difference pass: scene change between two aligned frames."""

from __future__ import annotations

import cv2

from camtamper.errors import DimensionMismatch
from camtamper.scoring.utils import Raster, clamp_score

# Mean absolute difference treated as a full scene change
FULL_CHANGE_DIFF = 50.0


def compute_scene_change_score(current: Raster, previous: Raster | None) -> float:
    """Score how much the scene changed since the previous frame.

    Args:
        current: Current intensity raster.
        previous: Previous intensity raster, or None if there is none.

    Returns:
        Scene change score 0-100. 0 when there is no previous frame.

    Raises:
        DimensionMismatch: If the rasters differ in width or height.
    """
    if previous is None or previous.size == 0:
        return 0.0

    if current.shape[:2] != previous.shape[:2]:
        raise DimensionMismatch(current.shape, previous.shape)

    diff = cv2.absdiff(current, previous)
    avg_diff = float(diff.mean())
    return clamp_score(avg_diff / FULL_CHANGE_DIFF * 100.0)
