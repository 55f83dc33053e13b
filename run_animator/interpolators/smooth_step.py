"""Ease-in/ease-out blending between neighbouring samples."""

from __future__ import annotations

from typing import Sequence

from ..models import Segment
from .base import RunInterpolator, blend_segments


def smoothstep(u: float) -> float:
    """``u² (3 − 2u)``: maps [0, 1] onto [0, 1] with flat ends."""

    return u * u * (3.0 - 2.0 * u)


class SmoothStepRunInterpolator(RunInterpolator):
    """Like linear interpolation, but the blend factor is eased first.

    Each span between two samples starts and ends with zero slope. Frame
    density and time mapping match :class:`LinearRunInterpolator`, and the
    spectrum is forwarded unchanged.
    """

    def blend(self, segments: Sequence[Segment], lo: int, hi: int, u: float) -> Segment:
        return blend_segments(segments[lo], segments[hi], smoothstep(u))
