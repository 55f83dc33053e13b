"""Pure ``Run -> Run`` transformation stages."""

from .base import RunTransformer, TransformerChain
from .gaussian import GaussianConfig, GaussianRun, gaussian_smooth
from .normalised import NormalisedRun
from .options import TransformerOption
from .speed_weighted import SpeedWeightedConfig, SpeedWeightedRun, percentile_cap
from .wave_sampling import WaveSamplingTransformer

__all__ = [
    "GaussianConfig",
    "GaussianRun",
    "NormalisedRun",
    "RunTransformer",
    "SpeedWeightedConfig",
    "SpeedWeightedRun",
    "TransformerChain",
    "TransformerOption",
    "WaveSamplingTransformer",
    "gaussian_smooth",
    "percentile_cap",
]
