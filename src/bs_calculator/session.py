"""Calculator session: the parameter-mutation and price-query boundary.

A :class:`CalculatorSession` owns the single :class:`ContractParameters`
instance, the last computed price and curve, and the simulation driver.
Every mutator applies its change, recomputes what the change affects and
then notifies subscribers with a :class:`SessionUpdate`. All of this runs
synchronously, so on an asyncio loop a field edit and a simulation tick can
never interleave.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields
from enum import Enum

from .config import CurveConfig, SimulationConfig, default_parameters
from .curves import curve_depends_on, sample_curve
from .exceptions import InvalidDomainError, UnknownParameterError
from .pricers.black_scholes import bs_price
from .scenarios import get_scenario
from .simulation import SimulationDriver, SimulationState, next_spot
from .types import ContractParameters, OptionType, PricePoint, Scenario

__all__ = [
    "PARAMETER_FIELDS",
    "ChangeSource",
    "ParameterChange",
    "SessionUpdate",
    "CalculatorSession",
    "resolve_field",
]

logger = logging.getLogger(__name__)

PARAMETER_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(ContractParameters))

_ALIASES = {
    "s": "spot",
    "underlying": "spot",
    "underlying_price": "spot",
    "k": "strike",
    "strike_price": "strike",
    "t": "expiry",
    "time_to_expiry": "expiry",
    "r": "rate",
    "risk_free_rate": "rate",
    "σ": "sigma",
    "vol": "sigma",
    "volatility": "sigma",
    "option_kind": "kind",
    "option_type": "kind",
}


def resolve_field(name: str) -> str:
    """Map a field name or alias (``"S"``, ``"σ"``, ``"volatility"``...) to its attribute."""
    key = str(name).strip().casefold()
    if key in PARAMETER_FIELDS:
        return key
    try:
        return _ALIASES[key]
    except KeyError:
        raise UnknownParameterError(name) from None


class ChangeSource(str, Enum):
    INITIAL = "initial"
    FIELD = "field"
    SCENARIO = "scenario"
    TOGGLE = "toggle"
    SIMULATION = "simulation"
    RECALCULATE = "recalculate"


@dataclass(frozen=True, slots=True)
class ParameterChange:
    """Which fields a mutation touched and where it came from."""

    fields: frozenset[str]
    source: ChangeSource

    @property
    def curve_stale(self) -> bool:
        return any(curve_depends_on(f) for f in self.fields)


@dataclass(frozen=True, slots=True)
class SessionUpdate:
    """What subscribers receive after every recompute."""

    change: ParameterChange
    parameters: ContractParameters
    price: float | None
    curve: tuple[PricePoint, ...]
    error: InvalidDomainError | None = None


Listener = Callable[[SessionUpdate], None]


def _coerce(field: str, value: object) -> float | OptionType:
    if field == "kind":
        if isinstance(value, OptionType):
            return value
        return OptionType(str(value).strip().lower())
    if isinstance(value, bool):
        raise TypeError(f"{field} must be a real number, got {value!r}")
    return float(value)  # type: ignore[arg-type]


class CalculatorSession:
    """Black-Scholes calculator state for one UI session.

    Parameters
    ----------
    params : ContractParameters, optional
        Initial inputs; defaults to S=100, K=105, T=0.5, r=0.05, sigma=0.2, call.
        The session keeps its own copy.
    curve_config : CurveConfig, optional
        Spot grid for :meth:`get_curve`.
    simulation_config : SimulationConfig, optional
        Tick period and bounds of the simulated spot walk.
    """

    def __init__(
        self,
        params: ContractParameters | None = None,
        *,
        curve_config: CurveConfig | None = None,
        simulation_config: SimulationConfig | None = None,
    ) -> None:
        self._params = default_parameters() if params is None else params.copy()
        self.curve_config = CurveConfig() if curve_config is None else curve_config
        self._price: float | None = None
        self._curve: tuple[PricePoint, ...] = ()
        self._last_error: InvalidDomainError | None = None
        self._listeners: list[Listener] = []
        self._driver = SimulationDriver(self.advance_underlying, simulation_config)
        self._refresh(ParameterChange(frozenset(PARAMETER_FIELDS), ChangeSource.INITIAL))

    # -------------------------
    # Queries
    # -------------------------
    @property
    def parameters(self) -> ContractParameters:
        """Snapshot of the current inputs (mutating it does not affect the session)."""
        return self._params.copy()

    @property
    def last_error(self) -> InvalidDomainError | None:
        return self._last_error

    @property
    def simulation(self) -> SimulationDriver:
        return self._driver

    @property
    def simulation_state(self) -> SimulationState:
        return self._driver.state

    def get_price(self) -> float | None:
        return self._price

    def get_curve(self) -> tuple[PricePoint, ...]:
        return self._curve

    def price_label(self) -> str:
        label = self._params.kind.label
        if self._price is None:
            return f"{label} price: n/a"
        return f"{label} price: ${self._price:.2f}"

    # -------------------------
    # Mutators
    # -------------------------
    def set_parameter(self, field: str, value: object) -> ParameterChange:
        """Set one input and reprice.

        Raises
        ------
        UnknownParameterError
            If ``field`` names no parameter.
        TypeError, ValueError
            If ``value`` is not a number (or not an option kind for ``kind``).
            The session is left untouched.
        """
        name = resolve_field(field)
        setattr(self._params, name, _coerce(name, value))
        return self._apply(frozenset({name}), ChangeSource.FIELD)

    def load_scenario(self, scenario_id: int | str | Scenario) -> ParameterChange:
        """Replace every input with a preset from :data:`~bs_calculator.scenarios.SCENARIOS`."""
        scenario = get_scenario(scenario_id)
        incoming = scenario.to_parameters()
        for name in PARAMETER_FIELDS:
            setattr(self._params, name, getattr(incoming, name))
        logger.info("Loaded scenario %r", scenario.name)
        return self._apply(frozenset(PARAMETER_FIELDS), ChangeSource.SCENARIO)

    def toggle_option_kind(self) -> ParameterChange:
        self._params.kind = self._params.kind.flipped()
        return self._apply(frozenset({"kind"}), ChangeSource.TOGGLE)

    def calculate(self) -> ParameterChange:
        """Reprice without changing any input."""
        return self._apply(frozenset(), ChangeSource.RECALCULATE)

    def advance_underlying(self) -> ParameterChange:
        """Apply one step of the simulated spot walk and reprice."""
        self._params.spot = next_spot(self._params.spot, self._driver.config)
        return self._apply(frozenset({"spot"}), ChangeSource.SIMULATION)

    def start_simulation(self) -> bool:
        return self._driver.start()

    def stop_simulation(self) -> bool:
        return self._driver.stop()

    # -------------------------
    # Notifications
    # -------------------------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # -------------------------
    # Internals
    # -------------------------
    def _apply(self, changed: frozenset[str], source: ChangeSource) -> ParameterChange:
        change = ParameterChange(changed, source)
        self._refresh(change)
        return change

    def _refresh(self, change: ParameterChange) -> None:
        error: InvalidDomainError | None = None

        try:
            self._price = bs_price(self._params)
        except InvalidDomainError as exc:
            logger.warning("Price not updated: %s", exc)
            error = exc

        if change.curve_stale:
            try:
                self._curve = sample_curve(self._params, self.curve_config)
            except InvalidDomainError as exc:
                logger.warning("Curve not updated: %s", exc)
                error = error or exc

        self._last_error = error

        logger.debug(
            "Recomputed after %s change of %s: price=%s",
            change.source.value,
            sorted(change.fields),
            self._price,
        )
        update = SessionUpdate(
            change=change,
            parameters=self._params.copy(),
            price=self._price,
            curve=self._curve,
            error=error,
        )
        for listener in list(self._listeners):
            listener(update)
