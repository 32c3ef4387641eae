from __future__ import annotations

import numpy as np

from ..models import bs as bs_model
from ..types import ContractParameters, OptionType
from ..typing import FloatArray


# -------------------------
# BS wrappers (scalar)
# -------------------------
def bs_price_call(p: ContractParameters) -> float:
    return bs_model.call_price(
        spot=p.spot,
        strike=p.strike,
        rate=p.rate,
        sigma=p.sigma,
        tau=p.expiry,
    )


def bs_price_put(p: ContractParameters) -> float:
    return bs_model.put_price(
        spot=p.spot,
        strike=p.strike,
        rate=p.rate,
        sigma=p.sigma,
        tau=p.expiry,
    )


def bs_price(p: ContractParameters) -> float:
    """Black-Scholes price of the option described by ``p``.

    Raises
    ------
    InvalidDomainError
        If the formula is undefined for ``p`` or overflows.
    """
    if p.kind == OptionType.CALL:
        return bs_price_call(p)
    if p.kind == OptionType.PUT:
        return bs_price_put(p)
    raise ValueError(f"Unsupported option kind: {p.kind}")


# -------------------------
# BS wrappers (vectorized in spot)
# -------------------------
def bs_price_vec(p: ContractParameters, spots: FloatArray | list[float]) -> FloatArray:
    """Price ``p`` at every spot in ``spots``; ``p.spot`` itself is ignored."""
    spots = np.asarray(spots, dtype=np.float64)
    if p.kind == OptionType.CALL:
        return bs_model.call_price_vec(
            spots=spots, strike=p.strike, rate=p.rate, sigma=p.sigma, tau=p.expiry
        )
    if p.kind == OptionType.PUT:
        return bs_model.put_price_vec(
            spots=spots, strike=p.strike, rate=p.rate, sigma=p.sigma, tau=p.expiry
        )
    raise ValueError(f"Unsupported option kind: {p.kind}")
