"""Tests for the camtamper command line."""

import csv
import json
from pathlib import Path

from PIL import Image

from camtamper import main


def save_frame(path: Path, value: int, size: tuple = (40, 30)) -> Path:
    """Write a uniform gray PNG frame."""
    Image.new("L", size, value).save(path, "PNG")
    return path


def test_score_command(tmp_path: Path, capsys):
    """Score a single black frame."""
    frame = save_frame(tmp_path / "black.png", 0)

    result = main(["score", str(frame)])

    assert result == 0
    out = capsys.readouterr().out
    assert "Blackout:" in out
    assert "100.0" in out


def test_score_command_json(tmp_path: Path, capsys):
    """Score output as JSON uses wire names."""
    frame = save_frame(tmp_path / "white.png", 255)

    result = main(["score", str(frame), "--json"])

    assert result == 0
    data = json.loads(capsys.readouterr().out)
    assert set(data) == {"blurScore", "blackoutScore", "flashScore", "smearScore"}
    assert data["flashScore"] == 100.0


def test_score_command_missing_file(tmp_path: Path, capsys):
    """Error on unreadable frame."""
    result = main(["score", str(tmp_path / "missing.png")])
    assert result == 1
    assert "Error:" in capsys.readouterr().err


def test_smear_command(tmp_path: Path, capsys):
    """Smear score for a flat frame."""
    frame = save_frame(tmp_path / "flat.png", 128)

    result = main(["smear", str(frame)])

    assert result == 0
    assert "Smear: 100.0" in capsys.readouterr().out


def test_change_command(tmp_path: Path, capsys):
    """Scene change between two offset frames."""
    current = save_frame(tmp_path / "cur.png", 100)
    previous = save_frame(tmp_path / "prev.png", 125)

    result = main(["change", str(current), str(previous), "--json"])

    assert result == 0
    assert json.loads(capsys.readouterr().out) == {"sceneChangeScore": 50.0}


def test_change_command_no_previous(tmp_path: Path, capsys):
    """First frame has no scene change."""
    current = save_frame(tmp_path / "cur.png", 100)

    result = main(["change", str(current)])

    assert result == 0
    assert "Scene change: 0.0" in capsys.readouterr().out


def test_change_command_mismatch(tmp_path: Path, capsys):
    """Error on differently sized frames."""
    current = save_frame(tmp_path / "cur.png", 100, (40, 30))
    previous = save_frame(tmp_path / "prev.png", 100, (20, 20))

    result = main(["change", str(current), str(previous)])

    assert result == 1
    assert "dimensions differ" in capsys.readouterr().err


def test_scan_command(tmp_path: Path, capsys):
    """Scan a frame sequence and write a CSV report."""
    frames = tmp_path / "frames"
    frames.mkdir()
    save_frame(frames / "frame_000.png", 128)
    save_frame(frames / "frame_001.png", 0)
    out = tmp_path / "report.csv"

    result = main(
        ["scan", str(frames), "--workers", "1", "--out", str(out), "--format", "csv"]
    )

    assert result == 0
    assert out.exists()
    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert float(rows[1]["blackout_score"]) == 100.0
    assert "Scanned 2 frames" in capsys.readouterr().out


def test_scan_command_json(tmp_path: Path):
    """Scan with a JSON report."""
    save_frame(tmp_path / "a.png", 10)
    out = tmp_path / "report.json"

    result = main(
        ["scan", str(tmp_path), "--workers", "1", "--out", str(out), "--format", "json"]
    )

    assert result == 0
    assert json.loads(out.read_text())["count"] == 1


def test_scan_flags_frames(tmp_path: Path, capsys):
    """Frames at or above the threshold are listed."""
    save_frame(tmp_path / "frame_000.png", 255)

    result = main(["scan", str(tmp_path), "--workers", "1", "--threshold", "90"])

    assert result == 0
    out = capsys.readouterr().out
    assert "frame_000.png" in out
    assert "1 flagged" in out


def test_scan_empty_dir(tmp_path: Path, capsys):
    """Handle a directory with no frames."""
    (tmp_path / "empty").mkdir()

    result = main(["scan", str(tmp_path / "empty")])

    assert result == 0
    assert "No frames found" in capsys.readouterr().out


def test_scan_invalid_dir(tmp_path: Path):
    """Error on invalid directory."""
    result = main(["scan", str(tmp_path / "nonexistent")])
    assert result == 1


def test_no_command():
    """Print help without a command."""
    assert main([]) == 1
