from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class OptionType(str, Enum):
    """Option contract type.

    An enumeration of plain-vanilla option types.

    Attributes
    ----------
    CALL : str
        Call option ("call").
    PUT : str
        Put option ("put").
    """

    CALL = "call"
    PUT = "put"

    def flipped(self) -> OptionType:
        return OptionType.PUT if self is OptionType.CALL else OptionType.CALL

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(slots=True)
class ContractParameters:
    """Mutable Black-Scholes inputs shared by the pricer and the curve sampler.

    This is the single piece of state a calculator session owns. It is mutated
    by field edits, replaced wholesale when a scenario is loaded, and has its
    ``spot`` advanced by the simulation driver.

    Parameters
    ----------
    spot : float
        Current price of the underlying, typically denoted :math:`S`.
    strike : float
        Exercise price, typically denoted :math:`K`.
    expiry : float
        Time to expiry in years, typically denoted :math:`T`.
    rate : float
        Continuously-compounded risk-free rate, typically denoted :math:`r`.
    sigma : float
        Annualized volatility of the underlying's log-returns.
    kind : OptionType
        Call or put.

    Notes
    -----
    No domain checks happen here: a user may type any number into a field.
    The pricer rejects inputs for which the formula is undefined, see
    :class:`bs_calculator.exceptions.InvalidDomainError`.
    """

    spot: float
    strike: float
    expiry: float
    rate: float
    sigma: float
    kind: OptionType

    @property
    def S(self) -> float:
        return self.spot

    @property
    def K(self) -> float:
        return self.strike

    @property
    def T(self) -> float:
        return self.expiry

    @property
    def r(self) -> float:
        return self.rate

    def copy(self) -> ContractParameters:
        return replace(self)

    def with_spot(self, spot: float) -> ContractParameters:
        return replace(self, spot=float(spot))


@dataclass(frozen=True, slots=True)
class PricePoint:
    """One sample of the price-vs-underlying curve."""

    spot: float
    value: float


@dataclass(frozen=True, slots=True)
class Scenario:
    """Named, read-only parameter preset.

    Loading a scenario replaces every field of :class:`ContractParameters`
    at once.
    """

    key: str
    name: str
    spot: float
    strike: float
    expiry: float
    rate: float
    sigma: float
    kind: OptionType

    def to_parameters(self) -> ContractParameters:
        return ContractParameters(
            spot=self.spot,
            strike=self.strike,
            expiry=self.expiry,
            rate=self.rate,
            sigma=self.sigma,
            kind=self.kind,
        )
