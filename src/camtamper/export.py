"""Export module: write batch scan results as CSV or JSON reports."""

from __future__ import annotations

import csv
import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Literal

from camtamper.parallel import FrameResult

ReportFormat = Literal["csv", "json"]

CSV_COLUMNS = [
    "index",
    "path",
    "blur_score",
    "blackout_score",
    "flash_score",
    "smear_score",
    "scene_change_score",
    "error",
]


def _frame_row(result: FrameResult) -> dict[str, object]:
    """Flatten a FrameResult into one CSV row."""
    row: dict[str, object] = {column: "" for column in CSV_COLUMNS}
    row["index"] = result.index
    row["path"] = result.path
    if result.scores:
        row["blur_score"] = f"{result.scores.blur_score:.4f}"
        row["blackout_score"] = f"{result.scores.blackout_score:.4f}"
        row["flash_score"] = f"{result.scores.flash_score:.4f}"
        row["smear_score"] = f"{result.scores.smear_score:.4f}"
    if result.scene_change:
        row["scene_change_score"] = f"{result.scene_change.scene_change_score:.4f}"
    if result.error:
        row["error"] = result.error
    return row


def export_csv(results: list[FrameResult], out_path: Path) -> None:
    """Export frame results to a CSV file, one row per frame.

    Args:
        results: Frame results (written sorted by sequence index).
        out_path: Output file path.
    """
    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for result in sorted(results, key=lambda r: r.index):
            writer.writerow(_frame_row(result))


def export_json(
    results: list[FrameResult],
    out_path: Path,
    source_dir: Path | None = None,
) -> None:
    """Export frame results to a JSON report.

    Args:
        results: Frame results (written sorted by sequence index).
        out_path: Output file path.
        source_dir: Scanned directory (for header).
    """
    timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")

    frames = []
    for result in sorted(results, key=lambda r: r.index):
        frame: dict[str, object] = {"index": result.index, "path": result.path}
        if result.scores:
            frame.update(result.scores.to_dict())
        if result.scene_change:
            frame.update(result.scene_change.to_dict())
        if result.error:
            frame["error"] = result.error
        frames.append(frame)

    report: dict[str, object] = {"generated": timestamp}
    if source_dir:
        report["source"] = str(source_dir)
    report["count"] = len(frames)
    report["frames"] = frames

    out_path.write_text(json.dumps(report, indent=2) + "\n", encoding="utf-8")


def export_report(
    results: list[FrameResult],
    out_path: Path,
    fmt: ReportFormat = "csv",
    source_dir: Path | None = None,
) -> None:
    """Write a report in the requested format."""
    if fmt == "csv":
        export_csv(results, out_path)
    elif fmt == "json":
        export_json(results, out_path, source_dir=source_dir)
    else:
        raise ValueError(f"Unknown report format: {fmt}")
