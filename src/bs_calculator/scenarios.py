from __future__ import annotations

from .exceptions import UnknownScenarioError
from .types import OptionType, Scenario

__all__ = ["SCENARIOS", "get_scenario", "scenario_names"]


SCENARIOS: tuple[Scenario, ...] = (
    Scenario(
        key="call_purchase",
        name="Call Purchase",
        spot=100.0,
        strike=105.0,
        expiry=0.5,
        rate=0.05,
        sigma=0.2,
        kind=OptionType.CALL,
    ),
    Scenario(
        key="put_protection",
        name="Put Protection",
        spot=1500.0,
        strike=1400.0,
        expiry=1.0,
        rate=0.03,
        sigma=0.25,
        kind=OptionType.PUT,
    ),
    Scenario(
        key="volatility_impact",
        name="Volatility Impact",
        spot=200.0,
        strike=200.0,
        expiry=0.5,
        rate=0.05,
        sigma=0.5,
        kind=OptionType.CALL,
    ),
)


def scenario_names() -> list[str]:
    return [s.name for s in SCENARIOS]


def get_scenario(scenario_id: int | str | Scenario) -> Scenario:
    """Look up a preset by position, key or display name.

    Names and keys are matched case-insensitively, e.g. ``0``,
    ``"call_purchase"`` and ``"Call Purchase"`` all select the first preset.
    A :class:`Scenario` instance is returned unchanged.
    """
    if isinstance(scenario_id, Scenario):
        return scenario_id
    if isinstance(scenario_id, bool):
        raise UnknownScenarioError(scenario_id)
    if isinstance(scenario_id, int):
        if 0 <= scenario_id < len(SCENARIOS):
            return SCENARIOS[scenario_id]
        raise UnknownScenarioError(scenario_id)

    wanted = str(scenario_id).strip().casefold()
    for s in SCENARIOS:
        if wanted in (s.key.casefold(), s.name.casefold()):
            return s
    raise UnknownScenarioError(scenario_id)
