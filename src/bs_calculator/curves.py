"""Price-vs-underlying curve sampling.

The curve is sampled on a fixed grid of spots (``50, 52, ..., 148`` by
default) that does not move with the live spot, so it only needs to be
recomputed when strike, expiry, rate, volatility or option kind change.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from .config import CurveConfig
from .pricers.black_scholes import bs_price_vec
from .types import ContractParameters, PricePoint
from .typing import FloatArray

__all__ = [
    "CURVE_FIELDS",
    "curve_depends_on",
    "curve_spots",
    "sample_curve",
    "curve_frame",
]

# Fields the sampled curve is a function of (spot is not one of them)
CURVE_FIELDS = frozenset({"strike", "expiry", "rate", "sigma", "kind"})


def curve_depends_on(field: str) -> bool:
    return field in CURVE_FIELDS


def curve_spots(cfg: CurveConfig | None = None) -> FloatArray:
    cfg = CurveConfig() if cfg is None else cfg
    return cfg.start + cfg.step * np.arange(cfg.n_points, dtype=np.float64)


def sample_curve(
    params: ContractParameters, cfg: CurveConfig | None = None
) -> tuple[PricePoint, ...]:
    """Sample the option value along the spot grid.

    Parameters
    ----------
    params : ContractParameters
        Contract to price. ``params.spot`` is ignored.
    cfg : CurveConfig, optional
        Sampling grid; defaults to 50 points from 50 in steps of 2.

    Returns
    -------
    tuple of PricePoint
        ``cfg.n_points`` points in increasing spot order, values rounded to
        ``cfg.decimals`` places.

    Raises
    ------
    InvalidDomainError
        If any point cannot be priced. No partial curve is returned.
    """
    cfg = CurveConfig() if cfg is None else cfg
    spots = curve_spots(cfg)
    # + 0.0 turns a rounded -0.0 into 0.0
    values = np.round(bs_price_vec(params, spots), cfg.decimals) + 0.0
    return tuple(
        PricePoint(spot=float(s), value=float(v))
        for s, v in zip(spots, values, strict=True)
    )


def curve_frame(points: tuple[PricePoint, ...] | list[PricePoint]) -> pd.DataFrame:
    """Tabular view of a sampled curve with columns ``S`` and ``value``."""
    return pd.DataFrame(
        {
            "S": [p.spot for p in points],
            "value": [p.value for p in points],
        }
    )
