"""camtamper: Camera tampering scores for video frames."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from camtamper.detect import detect_sabotage, detect_scene_change, detect_smear
from camtamper.errors import CamTamperError, DimensionMismatch, InvalidInput
from camtamper.ingest import FRAME_EXTENSIONS, find_frame_files, parse_extensions
from camtamper.scoring import SceneChangeRecord, ScoreRecord

if TYPE_CHECKING:
    from camtamper.parallel import FrameResult

__version__ = "0.1.0"

DEFAULT_ALERT_THRESHOLD = 70.0

__all__ = [
    "__version__",
    "CamTamperError",
    "DimensionMismatch",
    "InvalidInput",
    "SceneChangeRecord",
    "ScoreRecord",
    "detect_sabotage",
    "detect_scene_change",
    "detect_smear",
    "main",
]


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="camtamper",
        description="Camera tampering scores for video frames.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # score command
    score_parser = subparsers.add_parser(
        "score", help="Score one frame for blur, blackout, flash and smear"
    )
    score_parser.add_argument("image", type=Path, help="Frame image")
    score_parser.add_argument("--json", action="store_true", help="Print JSON")

    # smear command
    smear_parser = subparsers.add_parser("smear", help="Score one frame for smear")
    smear_parser.add_argument("image", type=Path, help="Frame image")

    # change command
    change_parser = subparsers.add_parser(
        "change", help="Score the scene change between two frames"
    )
    change_parser.add_argument("current", type=Path, help="Current frame")
    change_parser.add_argument(
        "previous", type=Path, nargs="?", default=None, help="Previous frame"
    )
    change_parser.add_argument("--json", action="store_true", help="Print JSON")

    # scan command - score a directory of frames as a sequence
    scan_parser = subparsers.add_parser(
        "scan", help="Score every frame in a directory as a sequence"
    )
    scan_parser.add_argument("directory", type=Path, help="Directory of frames")
    scan_parser.add_argument(
        "--ext",
        default=",".join(sorted(FRAME_EXTENSIONS)),
        help=f"File extensions, comma-separated (default: {','.join(sorted(FRAME_EXTENSIONS))})",
    )
    scan_parser.add_argument(
        "--workers", type=int, default=None, help="Worker processes (default: CPUs - 1)"
    )
    scan_parser.add_argument(
        "--threshold",
        type=float,
        default=DEFAULT_ALERT_THRESHOLD,
        help=f"Flag frames with any score at or above this (default: {DEFAULT_ALERT_THRESHOLD})",
    )
    scan_parser.add_argument("--out", type=Path, default=None, help="Report file")
    scan_parser.add_argument(
        "--format",
        choices=["csv", "json"],
        default="csv",
        help="Report format: csv or json (default: csv)",
    )
    scan_parser.add_argument(
        "--no-compare",
        action="store_true",
        help="Skip scene change scoring against the previous frame",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "score":
        return cmd_score(args.image, args.json)
    if args.command == "smear":
        return cmd_smear(args.image)
    if args.command == "change":
        return cmd_change(args.current, args.previous, args.json)
    if args.command == "scan":
        return cmd_scan(
            args.directory,
            args.ext,
            args.workers,
            args.threshold,
            args.out,
            args.format,
            not args.no_compare,
        )

    parser.print_help()
    return 1


def cmd_score(image: Path, as_json: bool) -> int:
    """Score one frame."""
    try:
        record = detect_sabotage(image)
    except CamTamperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(record.to_dict()))
        return 0

    print(f"Blur:     {record.blur_score:6.1f}")
    print(f"Blackout: {record.blackout_score:6.1f}")
    print(f"Flash:    {record.flash_score:6.1f}")
    print(f"Smear:    {record.smear_score:6.1f}")
    return 0


def cmd_smear(image: Path) -> int:
    """Score one frame for smear only."""
    try:
        score = detect_smear(image)
    except CamTamperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Smear: {score:.1f}")
    return 0


def cmd_change(current: Path, previous: Path | None, as_json: bool) -> int:
    """Score the scene change between two frames."""
    try:
        record = detect_scene_change(current, previous)
    except CamTamperError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(record.to_dict()))
    else:
        print(f"Scene change: {record.scene_change_score:.1f}")
    return 0


def cmd_scan(
    directory: Path,
    ext: str,
    workers: int | None,
    threshold: float,
    out: Path | None,
    fmt: str,
    compare_previous: bool,
) -> int:
    """Score a directory of frames and report flagged ones."""
    from camtamper.export import export_report
    from camtamper.parallel import process_frames_parallel

    if not directory.is_dir():
        print(f"Error: {directory} is not a directory", file=sys.stderr)
        return 1

    files = find_frame_files(directory, parse_extensions(ext))
    if not files:
        print(f"No frames found in {directory}")
        if out:
            export_report([], out, fmt, source_dir=directory)
        return 0

    results: list[FrameResult] = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TextColumn("({task.completed}/{task.total})"),
        TimeElapsedColumn(),
        console=None,
    ) as progress:
        task = progress.add_task("[cyan]Scoring frames...", total=len(files))

        for result in process_frames_parallel(files, workers, compare_previous):
            progress.update(task, description=f"[cyan]Scored {Path(result.path).name}")
            results.append(result)
            progress.advance(task)

    results.sort(key=lambda r: r.index)
    failed = [r for r in results if not r.success]
    flagged = [r for r in results if r.success and _max_score(r) >= threshold]

    if flagged:
        print(
            f"{'Index':<6} {'Blur':>6} {'Black':>6} {'Flash':>6} {'Smear':>6} {'Change':>7}  {'File'}"
        )
        print("-" * 80)
        for r in flagged:
            s = r.scores
            change = r.scene_change.scene_change_score if r.scene_change else 0.0
            print(
                f"{r.index:<6} {s.blur_score:>6.1f} {s.blackout_score:>6.1f} "
                f"{s.flash_score:>6.1f} {s.smear_score:>6.1f} {change:>7.1f}  "
                f"{Path(r.path).name}"
            )
        print()

    print(
        f"Scanned {len(results)} frames: {len(flagged)} flagged "
        f"(threshold {threshold:.0f}), {len(failed)} unreadable"
    )

    if out:
        export_report(results, out, fmt, source_dir=directory)
        print(f"Wrote {fmt} report to {out}")

    return 0


def _max_score(result: FrameResult) -> float:
    """Highest severity of a scored frame, scene change included."""
    best = result.scores.max_score() if result.scores else 0.0
    if result.scene_change:
        best = max(best, result.scene_change.scene_change_score)
    return best


if __name__ == "__main__":
    sys.exit(main())
