from __future__ import annotations

import math

import numpy as np

from ..exceptions import DomainDetail, InvalidDomainError
from ..numerics.normal import norm_cdf
from ..typing import FloatArray, FloatDType


def _validate_scalar_inputs(
    *, spot: float, strike: float, rate: float, sigma: float, tau: float
) -> None:
    for name, value in (
        ("spot", spot),
        ("strike", strike),
        ("rate", rate),
        ("sigma", sigma),
        ("tau", tau),
    ):
        if not math.isfinite(value):
            raise InvalidDomainError(f"{name} must be finite, got {value!r}", field=name)
    if spot <= 0.0:
        raise InvalidDomainError("spot must be positive", field="spot")
    if strike <= 0.0:
        raise InvalidDomainError("strike must be positive", field="strike")
    if sigma <= 0.0:
        raise InvalidDomainError("sigma must be positive", field="sigma")
    if tau <= 0.0:
        raise InvalidDomainError("tau must be positive", field="tau")


def _overflow(what: str) -> InvalidDomainError:
    return InvalidDomainError(
        f"{what} is not finite; inputs are out of floating-point range",
        detail=DomainDetail.NUMERIC_OVERFLOW,
    )


def discount_factor(rate: float, tau: float) -> float:
    try:
        df = math.exp(-rate * tau)
    except OverflowError:
        raise _overflow("discount factor") from None
    if not math.isfinite(df):
        raise _overflow("discount factor")
    return df


def d1_d2(
    *, spot: float, strike: float, rate: float, sigma: float, tau: float
) -> tuple[float, float]:
    _validate_scalar_inputs(spot=spot, strike=strike, rate=rate, sigma=sigma, tau=tau)
    vol_sqrt_t = sigma * math.sqrt(tau)
    num = math.log(spot) - math.log(strike) + (rate + 0.5 * sigma * sigma) * tau
    d1 = num / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    if not (math.isfinite(d1) and math.isfinite(d2)):
        raise _overflow("d1/d2")
    return float(d1), float(d2)


def _checked(price: float) -> float:
    if not math.isfinite(price):
        raise _overflow("option price")
    return float(price)


def call_price(
    *, spot: float, strike: float, rate: float, sigma: float, tau: float
) -> float:
    """
    Black–Scholes European call, no dividends.
    """
    d1, d2 = d1_d2(spot=spot, strike=strike, rate=rate, sigma=sigma, tau=tau)
    df = discount_factor(rate, tau)
    return _checked(spot * norm_cdf(d1) - strike * df * norm_cdf(d2))


def put_price(
    *, spot: float, strike: float, rate: float, sigma: float, tau: float
) -> float:
    """
    Black–Scholes European put, no dividends.
    """
    d1, d2 = d1_d2(spot=spot, strike=strike, rate=rate, sigma=sigma, tau=tau)
    df = discount_factor(rate, tau)
    return _checked(strike * df * norm_cdf(-d2) - spot * norm_cdf(-d1))


# -------------------------
# Vectorized in spot (used by the curve sampler)
# -------------------------
def _d1_d2_vec(
    *, spots: FloatArray, strike: float, rate: float, sigma: float, tau: float
) -> tuple[FloatArray, FloatArray, float]:
    spots = np.asarray(spots, dtype=FloatDType)
    if spots.size == 0:
        raise ValueError("spots must be non-empty")
    if not np.all(np.isfinite(spots)):
        raise InvalidDomainError("spots must be finite", field="spot")
    if np.any(spots <= 0.0):
        raise InvalidDomainError("spots must be positive", field="spot")

    # validates strike, rate, sigma, tau against the first spot
    d1_d2(spot=float(spots.flat[0]), strike=strike, rate=rate, sigma=sigma, tau=tau)

    vol_sqrt_t = sigma * math.sqrt(tau)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        d1 = (np.log(spots) - math.log(strike) + (rate + 0.5 * sigma * sigma) * tau) / vol_sqrt_t
        d2 = d1 - vol_sqrt_t
    if not (np.all(np.isfinite(d1)) and np.all(np.isfinite(d2))):
        raise _overflow("d1/d2")
    return d1, d2, discount_factor(rate, tau)


def _checked_vec(prices: FloatArray) -> FloatArray:
    if not np.all(np.isfinite(prices)):
        raise _overflow("option price")
    return prices


def call_price_vec(
    *, spots: FloatArray, strike: float, rate: float, sigma: float, tau: float
) -> FloatArray:
    """Black–Scholes calls for an array of spots (other inputs fixed)."""
    d1, d2, df = _d1_d2_vec(spots=spots, strike=strike, rate=rate, sigma=sigma, tau=tau)
    spots = np.asarray(spots, dtype=FloatDType)
    with np.errstate(over="ignore", invalid="ignore"):
        prices = spots * norm_cdf(d1) - strike * df * norm_cdf(d2)
    return _checked_vec(prices)


def put_price_vec(
    *, spots: FloatArray, strike: float, rate: float, sigma: float, tau: float
) -> FloatArray:
    """Black–Scholes puts for an array of spots (other inputs fixed)."""
    d1, d2, df = _d1_d2_vec(spots=spots, strike=strike, rate=rate, sigma=sigma, tau=tau)
    spots = np.asarray(spots, dtype=FloatDType)
    with np.errstate(over="ignore", invalid="ignore"):
        prices = strike * df * norm_cdf(-d2) - spots * norm_cdf(-d1)
    return _checked_vec(prices)
