from __future__ import annotations

from enum import Enum


class DomainDetail(str, Enum):
    """Why a Black-Scholes evaluation was rejected."""

    INVALID_INPUT = "invalid_input"
    NUMERIC_OVERFLOW = "numeric_overflow"


class InvalidDomainError(ValueError):
    """Raised when the Black-Scholes formula is undefined for the given inputs.

    The closed form divides by ``sigma * sqrt(T)`` and takes ``log(S / K)``, so
    it is only defined for ``S > 0``, ``K > 0``, ``T > 0`` and ``sigma > 0``.
    Inputs outside that domain are reported with
    :attr:`DomainDetail.INVALID_INPUT`.

    Extreme but formally valid inputs (for example a very large ``r * T``) can
    still push intermediate exponentials out of floating-point range. Those are
    reported with :attr:`DomainDetail.NUMERIC_OVERFLOW` so a caller never sees a
    ``nan`` or ``inf`` price.

    Attributes
    ----------
    detail : DomainDetail
        Category of the failure.
    field : str or None
        Name of the offending parameter, when a single one is to blame.
    """

    def __init__(
        self,
        message: str,
        *,
        detail: DomainDetail = DomainDetail.INVALID_INPUT,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.detail = detail
        self.field = field

    @property
    def is_overflow(self) -> bool:
        return self.detail == DomainDetail.NUMERIC_OVERFLOW


class UnknownScenarioError(KeyError):
    """Raised when a scenario id matches no preset in the catalogue."""


class UnknownParameterError(KeyError):
    """Raised when a field name does not refer to a contract parameter."""
