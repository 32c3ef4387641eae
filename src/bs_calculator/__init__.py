"""
bs_calculator

Black-Scholes European option calculator.

This package exposes the main user-facing objects at the top level, so you
can write, for example:

    from bs_calculator import CalculatorSession, bs_price
"""

import logging

from .config import CurveConfig, SimulationConfig, default_parameters
from .curves import curve_frame, sample_curve
from .exceptions import (
    DomainDetail,
    InvalidDomainError,
    UnknownParameterError,
    UnknownScenarioError,
)
from .numerics.normal import norm_cdf
from .pricers.black_scholes import bs_price, bs_price_call, bs_price_put
from .scenarios import SCENARIOS, get_scenario
from .session import CalculatorSession, ParameterChange, SessionUpdate
from .simulation import SimulationDriver, SimulationState, next_spot
from .types import ContractParameters, OptionType, PricePoint, Scenario

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Types
    "OptionType",
    "ContractParameters",
    "PricePoint",
    "Scenario",
    # Config
    "CurveConfig",
    "SimulationConfig",
    "default_parameters",
    # Errors
    "DomainDetail",
    "InvalidDomainError",
    "UnknownParameterError",
    "UnknownScenarioError",
    # Pricing
    "norm_cdf",
    "bs_price",
    "bs_price_call",
    "bs_price_put",
    # Curves
    "sample_curve",
    "curve_frame",
    # Scenarios
    "SCENARIOS",
    "get_scenario",
    # Simulation
    "SimulationDriver",
    "SimulationState",
    "next_spot",
    # Session
    "CalculatorSession",
    "ParameterChange",
    "SessionUpdate",
]

__version__ = "0.1.0"
