"""Ingest module: decode frame sources into intensity rasters."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from camtamper.errors import InvalidInput
from camtamper.scoring.utils import Raster, to_luminance

FrameSource = Union[str, Path, bytes, bytearray, memoryview, Image.Image, NDArray]

# Supported frame formats for directory scans (case-insensitive matching)
FRAME_EXTENSIONS = frozenset(
    {".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".webp"}
)


def is_frame_source(source: object) -> bool:
    """True if source is a type load_raster accepts."""
    return isinstance(
        source, (str, Path, bytes, bytearray, memoryview, Image.Image, np.ndarray)
    )


def load_raster(source: FrameSource) -> Raster:
    """Decode a frame source into a single-channel intensity raster.

    Args:
        source: Path to an image file, encoded image bytes, PIL Image,
            or decoded numpy array.

    Returns:
        2-D uint8 intensity raster.

    Raises:
        TypeError: If source is not one of the accepted types.
        InvalidInput: If decoding fails or the result has no pixels.
    """
    if not is_frame_source(source):
        raise TypeError(
            "Expected a path, bytes-like buffer, PIL Image or numpy array, "
            f"got {type(source).__name__}"
        )

    if isinstance(source, (str, Path)):
        return _decode(source, label=str(source))

    if isinstance(source, (bytes, bytearray, memoryview)):
        if len(source) == 0:
            raise InvalidInput("Failed to read image: empty buffer")
        return _decode(io.BytesIO(bytes(source)), label="buffer")

    return to_luminance(source)


def decode_frame(source: FrameSource) -> Image.Image | NDArray:
    """Decode paths and encoded buffers; pass decoded frames through as is.

    Decoded frames (PIL Images, numpy arrays) are left for the scoring
    passes to validate, so an empty one still reaches them intact.
    """
    if isinstance(source, (str, Path, bytes, bytearray, memoryview)):
        return load_raster(source)
    if not is_frame_source(source):
        raise TypeError(f"Unsupported frame type: {type(source).__name__}")
    return source


def _decode(fp: str | Path | io.BytesIO, label: str) -> Raster:
    """Open an encoded image with PIL and reduce it to luminance."""
    try:
        with Image.open(fp) as img:
            img.load()
            return to_luminance(img)
    except (OSError, Image.DecompressionBombError) as e:
        # OSError covers missing files and PIL.UnidentifiedImageError
        raise InvalidInput(f"Failed to read image {label}: {e}") from e


def find_frame_files(
    directory: Path,
    extensions: frozenset[str] | None = None,
) -> list[Path]:
    """Find all frame images in directory (recursive), sorted by path.

    Args:
        directory: Root directory to scan.
        extensions: Set of extensions to match (lowercase, with dot).
                   Defaults to FRAME_EXTENSIONS.

    Returns:
        Sorted list of paths; sorting fixes the frame sequence order.
    """
    if extensions is None:
        extensions = FRAME_EXTENSIONS

    result = []
    for path in directory.rglob("*"):
        if path.is_file() and path.suffix.lower() in extensions:
            result.append(path)
    return sorted(result)


def parse_extensions(ext_arg: str) -> frozenset[str]:
    """Parse comma-separated extensions into a frozenset."""
    exts = []
    for e in ext_arg.split(","):
        e = e.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            e = "." + e
        exts.append(e)
    return frozenset(exts)
