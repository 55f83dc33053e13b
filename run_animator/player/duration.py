"""Mappings from a run's recorded duration to its playback duration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, List


@dataclass(frozen=True, slots=True)
class PlayerDuration:
    """A labelled ``run_duration -> playback_duration`` function.

    Fixed presets ignore the run length; :attr:`REAL_TIME` plays the run at
    its recorded pace. Equality and hashing use the label only.
    """

    label: str
    mapping: Callable[[float], float] = field(compare=False, hash=False, repr=False)

    FIFTEEN_SECONDS: ClassVar["PlayerDuration"]
    THIRTY_SECONDS: ClassVar["PlayerDuration"]
    ONE_MINUTE: ClassVar["PlayerDuration"]
    REAL_TIME: ClassVar["PlayerDuration"]

    def __call__(self, run_duration: float) -> float:
        return float(self.mapping(run_duration))

    @classmethod
    def fixed(cls, label: str, seconds: float) -> "PlayerDuration":
        """Condense any run into ``seconds`` of playback."""

        if seconds <= 0:
            raise ValueError("seconds must be positive")
        return cls(label, lambda _run_duration: seconds)

    @classmethod
    def all(cls) -> List["PlayerDuration"]:
        return [cls.FIFTEEN_SECONDS, cls.THIRTY_SECONDS, cls.ONE_MINUTE, cls.REAL_TIME]

    @classmethod
    def by_label(cls, label: str) -> "PlayerDuration":
        wanted = label.strip().lower().replace(" ", "")
        for preset in cls.all():
            if preset.label.lower().replace(" ", "") == wanted:
                return preset
        raise ValueError(f"Unknown playback duration: {label}")


PlayerDuration.FIFTEEN_SECONDS = PlayerDuration.fixed("15s", 15.0)
PlayerDuration.THIRTY_SECONDS = PlayerDuration.fixed("30s", 30.0)
PlayerDuration.ONE_MINUTE = PlayerDuration.fixed("1 min", 60.0)
PlayerDuration.REAL_TIME = PlayerDuration("Real-time", lambda run_duration: run_duration)
