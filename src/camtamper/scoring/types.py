"""Record dataclasses for the tamper scoring kernel."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass
class ScoreRecord:
    """Single-frame tamper severities (all 0-100, higher = worse)."""

    blur_score: float = 0.0  # defocus / loss of detail
    blackout_score: float = 0.0  # covered lens or low light
    flash_score: float = 0.0  # sudden over-exposure
    smear_score: float = 0.0  # smeared or obstructed lens

    def to_dict(self) -> dict[str, float]:
        """Return the record keyed by its wire names."""
        return {
            "blurScore": self.blur_score,
            "blackoutScore": self.blackout_score,
            "flashScore": self.flash_score,
            "smearScore": self.smear_score,
        }

    def max_score(self) -> float:
        """Highest of the four severities."""
        return max(
            self.blur_score, self.blackout_score, self.flash_score, self.smear_score
        )


@dataclass
class SceneChangeRecord:
    """Frame-pair change severity (0-100)."""

    scene_change_score: float = 0.0

    def to_dict(self) -> dict[str, float]:
        """Return the record keyed by its wire name."""
        return {"sceneChangeScore": self.scene_change_score}


@dataclass
class IntensityHistogram:
    """256-bin intensity counts of one raster."""

    counts: NDArray[np.int64]

    @property
    def total(self) -> int:
        """Number of pixels counted (width x height of the source)."""
        return int(self.counts.sum())

    def percentage(self, low: int, high: int) -> float:
        """Percentage of pixels with intensity in [low, high).

        Args:
            low: First bin included.
            high: First bin excluded (256 to include the top bin).

        Returns:
            Share of pixels in the range, 0-100.
        """
        return float(self.counts[low:high].sum()) / self.total * 100.0
