"""Pytest helpers for the bs_calculator library."""

from __future__ import annotations

import pytest

from bs_calculator.types import ContractParameters, OptionType


@pytest.fixture
def base_params() -> dict:
    """A small set of canonical parameters used across tests."""
    return {
        "S": 100.0,
        "K": 100.0,
        "r": 0.05,
        "sigma": 0.2,
        "T": 1.0,
    }


@pytest.fixture
def make_params():
    """Factory fixture for constructing ContractParameters."""

    def _make(
        *,
        S: float,
        K: float,
        r: float,
        sigma: float,
        T: float,
        kind: OptionType = OptionType.CALL,
    ) -> ContractParameters:
        return ContractParameters(
            spot=S, strike=K, expiry=T, rate=r, sigma=sigma, kind=kind
        )

    return _make
