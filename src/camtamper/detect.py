"""Public entry points: decode a frame source and score it."""

from __future__ import annotations

import logging

from camtamper.ingest import FrameSource, decode_frame, is_frame_source, load_raster
from camtamper.scoring import (
    SceneChangeRecord,
    ScoreRecord,
    compute_smear_score,
    score_frame,
    score_scene_change,
)

logger = logging.getLogger(__name__)


def detect_sabotage(source: FrameSource) -> ScoreRecord:
    """Score a single frame for camera tampering.

    Args:
        source: Image path, encoded image bytes, PIL Image or numpy array.

    Returns:
        ScoreRecord with blur, blackout, flash and smear scores (0-100).

    Raises:
        TypeError: If source is not an accepted type.
        InvalidInput: If the frame cannot be decoded or is empty.

    Examples:
        >>> import numpy as np
        >>> detect_sabotage(np.zeros((8, 8), dtype=np.uint8)).blackout_score
        100.0
    """
    gray = load_raster(source)
    record = score_frame(gray)
    logger.debug(
        f"Scored {gray.shape[1]}x{gray.shape[0]} frame: "
        f"blur={record.blur_score:.1f} blackout={record.blackout_score:.1f} "
        f"flash={record.flash_score:.1f} smear={record.smear_score:.1f}"
    )
    return record


def detect_scene_change(
    current: FrameSource,
    previous: FrameSource | None,
) -> SceneChangeRecord:
    """Score the change between two consecutive frames.

    Args:
        current: Current frame source.
        previous: Previous frame source, or None for the first frame.

    Returns:
        SceneChangeRecord (0-100, 0 when there is no previous frame).

    Raises:
        TypeError: If either source is not an accepted type.
        InvalidInput: If a supplied frame cannot be decoded, or the
            current frame is empty.
        DimensionMismatch: If the frames differ in size.
    """
    # Reject bad types up front, before any decode work
    if not is_frame_source(current):
        raise TypeError(f"Unsupported current frame type: {type(current).__name__}")
    if previous is not None and not is_frame_source(previous):
        raise TypeError(f"Unsupported previous frame type: {type(previous).__name__}")

    current_gray = load_raster(current)
    if previous is not None:
        previous = decode_frame(previous)

    record = score_scene_change(current_gray, previous)
    logger.debug(f"Scene change score: {record.scene_change_score:.1f}")
    return record


def detect_smear(source: FrameSource) -> float:
    """Score a single frame for lens smearing only.

    Same value as detect_sabotage(source).smear_score.
    """
    gray = load_raster(source)
    score = compute_smear_score(gray)
    logger.debug(f"Smear score: {score:.1f}")
    return score

