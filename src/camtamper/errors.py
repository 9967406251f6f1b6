"""Exceptions raised by camtamper."""

from __future__ import annotations


class CamTamperError(Exception):
    """Base class for camtamper errors."""


class InvalidInput(CamTamperError, ValueError):
    """Raster is empty, undecodable, or has an unsupported shape."""


class DimensionMismatch(CamTamperError, ValueError):
    """Two rasters that must be aligned have different dimensions."""

    def __init__(self, current: tuple[int, ...], previous: tuple[int, ...]) -> None:
        self.current = current
        self.previous = previous
        super().__init__(
            f"Frame dimensions differ: current {current[1]}x{current[0]}, "
            f"previous {previous[1]}x{previous[0]}"
        )
