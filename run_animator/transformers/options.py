"""Selectable, labelled transformer entries for building a chain."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List
import uuid

from ..config import WAVE_SAMPLING_RANK, WAVE_SAMPLING_TARGET_COUNT
from .base import RunTransformer
from .gaussian import GaussianConfig, GaussianRun
from .speed_weighted import SpeedWeightedConfig, SpeedWeightedRun
from .wave_sampling import WaveSamplingTransformer


@dataclass(frozen=True, slots=True)
class TransformerOption:
    """A transformer paired with a display label and description.

    Every option carries its own ``id`` so the same transformer type can
    appear more than once in a chain.
    """

    label: str
    description: str
    transformer: RunTransformer
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def with_transformer(self, transformer: RunTransformer) -> "TransformerOption":
        """Return a copy using ``transformer`` while keeping id and labels."""

        return replace(self, transformer=transformer)

    @classmethod
    def custom(cls, transformer: RunTransformer) -> "TransformerOption":
        return cls(label="Custom", description="", transformer=transformer)

    @classmethod
    def gaussian(cls, config: GaussianConfig | None = None) -> "TransformerOption":
        return cls(
            label="Gaussian",
            description=(
                "Smooths run metrics using a time-based Gaussian kernel, reducing "
                "noise from GPS anomalies and brief stops while preserving "
                "meaningful signal changes."
            ),
            transformer=GaussianRun(config),
        )

    @classmethod
    def speed_weighted(
        cls, config: SpeedWeightedConfig | None = None
    ) -> "TransformerOption":
        return cls(
            label="Speed Weighted",
            description=(
                "Fades direction amplitude toward zero when the runner is moving "
                "slowly or stopped, and clips speed outliers at the 98th "
                "percentile to prevent GPS spikes."
            ),
            transformer=SpeedWeightedRun(config),
        )

    @classmethod
    def wave_sampling(
        cls,
        target_count: int = WAVE_SAMPLING_TARGET_COUNT,
        rank: int = WAVE_SAMPLING_RANK,
    ) -> "TransformerOption":
        return cls(
            label="Wave Sampling",
            description=(
                "Reduces the run to a fixed number of synthetic segments by "
                "alternating between peak and valley values across windows."
            ),
            transformer=WaveSamplingTransformer(target_count=target_count, rank=rank),
        )

    @classmethod
    def catalog(cls) -> List["TransformerOption"]:
        """Fresh instances of every built-in option, in display order."""

        return [cls.gaussian(), cls.speed_weighted(), cls.wave_sampling()]
