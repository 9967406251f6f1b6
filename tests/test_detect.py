"""Tests for camtamper.detect module."""

import io
import logging
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from camtamper.detect import detect_sabotage, detect_scene_change, detect_smear
from camtamper.errors import DimensionMismatch, InvalidInput
from camtamper.scoring import SceneChangeRecord, ScoreRecord


def save_frame(path: Path, value: int, size: tuple = (64, 48)) -> Path:
    """Write a uniform gray PNG frame."""
    Image.new("L", size, value).save(path, "PNG")
    return path


def png_bytes(value: int, size: tuple = (64, 48)) -> bytes:
    """Encode a uniform gray frame as PNG bytes."""
    buf = io.BytesIO()
    Image.new("L", size, value).save(buf, "PNG")
    return buf.getvalue()


def make_noise_frame(seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(60, 80), dtype=np.uint8)


class TestDetectSabotage:
    def test_black_frame_from_path(self, tmp_path: Path):
        record = detect_sabotage(save_frame(tmp_path / "black.png", 0))
        assert isinstance(record, ScoreRecord)
        assert record.blur_score == 100.0
        assert record.blackout_score == 100.0
        assert record.flash_score == 0.0

    def test_white_frame_from_bytes(self):
        record = detect_sabotage(png_bytes(255))
        assert record.flash_score == 100.0
        assert record.blackout_score == 0.0

    def test_from_array(self):
        record = detect_sabotage(make_noise_frame())
        for value in record.to_dict().values():
            assert 0.0 <= value <= 100.0

    def test_undecodable(self):
        with pytest.raises(InvalidInput):
            detect_sabotage(b"\x00\x01\x02")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(InvalidInput):
            detect_sabotage(tmp_path / "nope.png")

    def test_16bit_mid_gray(self):
        buf = io.BytesIO()
        Image.fromarray(np.full((32, 32), 32768, dtype=np.uint16)).save(buf, "PNG")
        record = detect_sabotage(buf.getvalue())
        assert record.flash_score == 0.0
        assert record.blackout_score == 0.0

    def test_empty_raster(self):
        with pytest.raises(InvalidInput):
            detect_sabotage(np.zeros((0, 0), dtype=np.uint8))

    def test_bad_type(self):
        with pytest.raises(TypeError):
            detect_sabotage(3.14)

    def test_logs_scores(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="camtamper.detect"):
            detect_sabotage(np.zeros((8, 8), dtype=np.uint8))
        assert "blackout=100.0" in caplog.text


class TestDetectSmear:
    def test_matches_sabotage_record(self):
        frame = make_noise_frame(seed=11)
        assert detect_smear(frame) == detect_sabotage(frame).smear_score

    def test_flat_frame(self, tmp_path: Path):
        assert detect_smear(save_frame(tmp_path / "flat.png", 128)) == 100.0

    def test_undecodable(self):
        with pytest.raises(InvalidInput):
            detect_smear(b"garbage")


class TestDetectSceneChange:
    def test_identical_frames(self, tmp_path: Path):
        a = save_frame(tmp_path / "a.png", 90)
        b = save_frame(tmp_path / "b.png", 90)
        record = detect_scene_change(a, b)
        assert isinstance(record, SceneChangeRecord)
        assert record.scene_change_score == 0.0

    def test_constant_offset(self, tmp_path: Path):
        current = save_frame(tmp_path / "cur.png", 100)
        previous = save_frame(tmp_path / "prev.png", 125)
        record = detect_scene_change(current, previous)
        assert record.scene_change_score == pytest.approx(50.0)

    def test_saturates(self):
        record = detect_scene_change(png_bytes(0), png_bytes(50))
        assert record.scene_change_score == 100.0

    def test_no_previous(self):
        assert detect_scene_change(png_bytes(0), None).scene_change_score == 0.0

    def test_empty_previous(self):
        empty = np.zeros((0, 0), dtype=np.uint8)
        assert detect_scene_change(png_bytes(0), empty).scene_change_score == 0.0

    def test_empty_pil_previous(self):
        empty = Image.new("L", (0, 0))
        assert detect_scene_change(png_bytes(0), empty).scene_change_score == 0.0

    def test_mixed_sources(self):
        previous = np.full((48, 64), 25, dtype=np.uint8)
        record = detect_scene_change(png_bytes(0), previous)
        assert record.scene_change_score == pytest.approx(50.0)

    def test_undecodable_previous(self):
        with pytest.raises(InvalidInput):
            detect_scene_change(png_bytes(0), b"broken")

    def test_undecodable_current(self):
        with pytest.raises(InvalidInput):
            detect_scene_change(b"broken", png_bytes(0))

    def test_type_checked_before_decode(self):
        # Bad previous type wins over the undecodable current frame
        with pytest.raises(TypeError):
            detect_scene_change(b"broken", 42)

    def test_bad_current_type(self):
        with pytest.raises(TypeError):
            detect_scene_change(None, png_bytes(0))

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatch):
            detect_scene_change(png_bytes(0, (64, 48)), png_bytes(0, (32, 32)))
