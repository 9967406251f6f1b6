"""Parallel and non-blocking execution for camtamper.

Scoring is CPU-bound and pure, so frames can be spread over a
ProcessPoolExecutor with no coordination, and single calls can be
pushed off an event loop with run_in_executor.
"""

from __future__ import annotations

import asyncio
import logging
import os
from concurrent.futures import Executor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from camtamper.detect import detect_sabotage, detect_scene_change
from camtamper.ingest import FrameSource, load_raster
from camtamper.scoring import (
    SceneChangeRecord,
    ScoreRecord,
    score_frame,
    score_scene_change,
)

logger = logging.getLogger(__name__)

MAX_WORKERS = 16


@dataclass
class FrameResult:
    """Result of scoring one frame of a sequence."""

    index: int
    path: str
    success: bool
    scores: ScoreRecord | None = None
    scene_change: SceneChangeRecord | None = None
    error: str | None = None


def _process_single_frame(
    index: int,
    path_str: str,
    previous_str: str | None,
) -> FrameResult:
    """Score a single frame of a sequence (runs in worker process).

    Args:
        index: Position of the frame in the sequence.
        path_str: Path to the frame image.
        previous_str: Path to the preceding frame, or None.

    Returns:
        FrameResult with scores, or the error if the frame was unusable.
        If only the comparison fails (unreadable or differently sized
        previous frame), the frame keeps its scores, scene_change is
        None and error says why. Each file is decoded once.
    """
    try:
        gray = load_raster(path_str)
        scores = score_frame(gray)
    except Exception as e:
        return FrameResult(index=index, path=path_str, success=False, error=str(e))

    try:
        previous_gray = load_raster(previous_str) if previous_str else None
        scene_change = score_scene_change(gray, previous_gray)
    except Exception as e:
        return FrameResult(
            index=index,
            path=path_str,
            success=True,
            scores=scores,
            error=f"scene change unavailable: {e}",
        )

    return FrameResult(
        index=index,
        path=path_str,
        success=True,
        scores=scores,
        scene_change=scene_change,
    )


def process_frames_parallel(
    files: list[Path],
    workers: int | None = None,
    compare_previous: bool = True,
) -> Iterator[FrameResult]:
    """Score an ordered frame sequence in parallel.

    Args:
        files: Frame paths in sequence order.
        workers: Number of worker processes (default: CPU count - 1).
        compare_previous: Score each frame against the one before it.

    Yields:
        FrameResult for each frame, in completion order.
    """
    if not files:
        return

    if workers is None:
        workers = get_default_workers()

    # Limit workers to reasonable bounds
    workers = max(1, min(workers, MAX_WORKERS, len(files)))

    paths = [str(path.resolve()) for path in files]

    with ProcessPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(
                _process_single_frame,
                i,
                path_str,
                paths[i - 1] if compare_previous and i > 0 else None,
            ): path_str
            for i, path_str in enumerate(paths)
        }

        for future in as_completed(futures):
            result = future.result()
            if result.error:
                logger.warning(f"Frame {result.path}: {result.error}")
            yield result


def get_default_workers() -> int:
    """Get default number of workers based on CPU count."""
    cpu_count = os.cpu_count() or 4
    # Use N-1 CPUs to leave headroom, minimum 1
    return max(1, cpu_count - 1)


async def detect_sabotage_async(
    source: FrameSource,
    executor: Executor | None = None,
) -> ScoreRecord:
    """Run detect_sabotage without blocking the event loop.

    Args:
        source: Frame source, as for detect_sabotage.
        executor: Executor to run on (default: the loop's thread pool).

    Returns:
        ScoreRecord for the frame.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, detect_sabotage, source)


async def detect_scene_change_async(
    current: FrameSource,
    previous: FrameSource | None,
    executor: Executor | None = None,
) -> SceneChangeRecord:
    """Run detect_scene_change without blocking the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        executor, detect_scene_change, current, previous
    )
