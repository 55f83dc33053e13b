"""Uniform resamplers turning sparse runs into dense animation frames."""

from .base import RunInterpolator, Timing, blend_segments, lerp
from .catmull_rom import CatmullRomRunInterpolator, catmull_rom
from .linear import LinearRunInterpolator
from .options import InterpolatorOption
from .smooth_step import SmoothStepRunInterpolator, smoothstep

__all__ = [
    "CatmullRomRunInterpolator",
    "InterpolatorOption",
    "LinearRunInterpolator",
    "RunInterpolator",
    "SmoothStepRunInterpolator",
    "Timing",
    "blend_segments",
    "catmull_rom",
    "lerp",
    "smoothstep",
]
