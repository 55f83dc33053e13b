"""Straight-line blending between neighbouring samples."""

from __future__ import annotations

from typing import Sequence

from ..models import Segment
from .base import RunInterpolator, blend_segments


class LinearRunInterpolator(RunInterpolator):
    """Lerps every metric between the bracketing samples.

    Linear blending never leaves the input range, so the input spectrum is
    forwarded unchanged.
    """

    def blend(self, segments: Sequence[Segment], lo: int, hi: int, u: float) -> Segment:
        return blend_segments(segments[lo], segments[hi], u)
