"""Selectable, labelled interpolation strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List

from .base import RunInterpolator
from .catmull_rom import CatmullRomRunInterpolator
from .linear import LinearRunInterpolator
from .smooth_step import SmoothStepRunInterpolator


@dataclass(frozen=True, slots=True)
class InterpolatorOption:
    """An interpolator paired with a display label.

    Equality and hashing use the label only.
    """

    label: str
    interpolator: RunInterpolator = field(compare=False, hash=False)

    LINEAR: ClassVar["InterpolatorOption"]
    SMOOTH_STEP: ClassVar["InterpolatorOption"]
    CATMULL_ROM: ClassVar["InterpolatorOption"]

    @classmethod
    def all(cls) -> List["InterpolatorOption"]:
        """Built-in options, in display order."""

        return [cls.LINEAR, cls.SMOOTH_STEP, cls.CATMULL_ROM]

    @classmethod
    def by_label(cls, label: str) -> "InterpolatorOption":
        wanted = label.strip().lower().replace("-", " ").replace("_", " ")
        for option in cls.all():
            if option.label.lower().replace("-", " ") == wanted:
                return option
        raise ValueError(f"Unknown interpolator: {label}")


InterpolatorOption.LINEAR = InterpolatorOption("Linear", LinearRunInterpolator())
InterpolatorOption.SMOOTH_STEP = InterpolatorOption(
    "Smooth Step", SmoothStepRunInterpolator()
)
InterpolatorOption.CATMULL_ROM = InterpolatorOption(
    "Catmull-Rom", CatmullRomRunInterpolator()
)
