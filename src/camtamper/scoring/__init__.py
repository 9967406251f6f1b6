"""Per-frame tamper scoring kernel.

Scoring Passes:
    1. Sharpness - blur from Laplacian variance
    2. Exposure - blackout and flash from histogram mass and mean
    3. Edges - edge density from Canny hysteresis thresholding
    4. Smear - composite of sharpness, contrast, edges, histogram shape
    5. Difference - scene change against a previous frame

Every pass is a pure function of its raster(s): no I/O, no caching,
nothing shared between calls.
"""

from __future__ import annotations

from numpy.typing import NDArray
from PIL import Image

# Re-export types for convenience
from camtamper.scoring.types import (
    IntensityHistogram,
    SceneChangeRecord,
    ScoreRecord,
)

# Re-export utilities
from camtamper.scoring.utils import (
    Raster,
    clamp_score,
    compute_histogram,
    is_empty_frame,
    to_luminance,
)

# Import pass functions for direct use
from camtamper.scoring.difference import compute_scene_change_score
from camtamper.scoring.edges import (
    compute_edge_density,
    compute_edge_map,
    compute_edge_score,
)
from camtamper.scoring.exposure import compute_blackout_score, compute_flash_score
from camtamper.scoring.sharpness import compute_blur_score, laplacian_variance
from camtamper.scoring.smear import (
    compute_contrast_score,
    compute_intensity_distribution_score,
    compute_smear_score,
    rescale_combined_score,
)

__all__ = [
    # Types
    "ScoreRecord",
    "SceneChangeRecord",
    "IntensityHistogram",
    "Raster",
    # Utilities
    "clamp_score",
    "compute_histogram",
    "is_empty_frame",
    "to_luminance",
    # Main scoring
    "score_frame",
    "score_scene_change",
    # Individual metrics (for direct access)
    "laplacian_variance",
    "compute_blur_score",
    "compute_blackout_score",
    "compute_flash_score",
    "compute_edge_map",
    "compute_edge_density",
    "compute_edge_score",
    "compute_contrast_score",
    "compute_intensity_distribution_score",
    "rescale_combined_score",
    "compute_smear_score",
    "compute_scene_change_score",
]


def score_frame(image: Image.Image | NDArray) -> ScoreRecord:
    """Compute all single-frame tamper scores.

    Args:
        image: Decoded frame (PIL Image or numpy array).

    Returns:
        ScoreRecord with blur, blackout, flash and smear severities.

    Raises:
        InvalidInput: If the frame has no pixels.
    """
    gray = to_luminance(image)
    histogram = compute_histogram(gray)
    blur_score = compute_blur_score(gray)

    return ScoreRecord(
        blur_score=blur_score,
        blackout_score=compute_blackout_score(gray, histogram),
        flash_score=compute_flash_score(gray, histogram),
        smear_score=compute_smear_score(gray, histogram, blur_score),
    )


def score_scene_change(
    current: Image.Image | NDArray,
    previous: Image.Image | NDArray | None,
) -> SceneChangeRecord:
    """Compute the scene change score for a frame pair.

    Args:
        current: Current decoded frame.
        previous: Previous decoded frame, or None.

    Returns:
        SceneChangeRecord (score 0 when previous is None or empty).

    Raises:
        InvalidInput: If the current frame has no pixels.
        DimensionMismatch: If the frames differ in size.
    """
    current_gray = to_luminance(current)
    previous_gray = None
    if previous is not None and not is_empty_frame(previous):
        previous_gray = to_luminance(previous)

    return SceneChangeRecord(
        scene_change_score=compute_scene_change_score(current_gray, previous_gray)
    )

