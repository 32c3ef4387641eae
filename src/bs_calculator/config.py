from __future__ import annotations

import math
from dataclasses import dataclass

from bs_calculator.types import ContractParameters, OptionType

# Session start-up values
DEFAULT_SPOT = 100.0
DEFAULT_STRIKE = 105.0
DEFAULT_EXPIRY = 0.5
DEFAULT_RATE = 0.05
DEFAULT_SIGMA = 0.2
DEFAULT_KIND = OptionType.CALL


def default_parameters() -> ContractParameters:
    return ContractParameters(
        spot=DEFAULT_SPOT,
        strike=DEFAULT_STRIKE,
        expiry=DEFAULT_EXPIRY,
        rate=DEFAULT_RATE,
        sigma=DEFAULT_SIGMA,
        kind=DEFAULT_KIND,
    )


@dataclass(frozen=True, slots=True)
class CurveConfig:
    """Sampling grid for the price-vs-underlying curve.

    The default grid is ``50, 52, ..., 148``: ``n_points`` spots starting at
    ``start`` and spaced by ``step``.
    """

    start: float = 50.0
    step: float = 2.0
    n_points: int = 50
    decimals: int = 2

    def __post_init__(self) -> None:
        if self.n_points <= 0:
            raise ValueError("n_points must be > 0")
        if self.step <= 0:
            raise ValueError("step must be > 0")
        if self.start <= 0:
            raise ValueError("start must be > 0")
        if self.decimals < 0:
            raise ValueError("decimals must be >= 0")

    @property
    def stop(self) -> float:
        """Last sampled spot (inclusive)."""
        return self.start + (self.n_points - 1) * self.step


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    """Sawtooth walk of the underlying: ``step`` per tick, wrapping at ``upper``."""

    period: float = 0.2  # seconds between ticks
    step: float = 1.0
    lower: float = 50.0
    upper: float = 150.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.period) and self.period > 0):
            raise ValueError("period must be > 0")
        if not (math.isfinite(self.step) and self.step > 0):
            raise ValueError("step must be > 0")
        if not self.lower < self.upper:
            raise ValueError("Need lower < upper")
