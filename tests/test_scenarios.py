from __future__ import annotations

import pytest

from bs_calculator.exceptions import UnknownScenarioError
from bs_calculator.pricers.black_scholes import bs_price
from bs_calculator.scenarios import SCENARIOS, get_scenario, scenario_names
from bs_calculator.types import OptionType


def test_catalogue_order_and_size():
    assert len(SCENARIOS) == 3
    assert scenario_names() == ["Call Purchase", "Put Protection", "Volatility Impact"]


def test_put_protection_values():
    s = get_scenario("put_protection")
    assert (s.spot, s.strike, s.expiry, s.rate, s.sigma, s.kind) == (
        1500.0,
        1400.0,
        1.0,
        0.03,
        0.25,
        OptionType.PUT,
    )


@pytest.mark.parametrize("sid", [0, "call_purchase", "Call Purchase", "  call purchase "])
def test_lookup_forms(sid):
    assert get_scenario(sid) is SCENARIOS[0]


def test_lookup_passes_scenarios_through():
    assert get_scenario(SCENARIOS[2]) is SCENARIOS[2]


@pytest.mark.parametrize("sid", [3, -1, "straddle", True])
def test_unknown_scenario(sid):
    with pytest.raises(UnknownScenarioError):
        get_scenario(sid)


def test_unknown_scenario_is_a_key_error():
    with pytest.raises(KeyError):
        get_scenario("nope")


def test_scenarios_are_frozen():
    with pytest.raises(AttributeError):
        SCENARIOS[0].spot = 1.0  # type: ignore[misc]


def test_to_parameters_is_independent_copy():
    a = SCENARIOS[0].to_parameters()
    a.spot = 1.0
    assert SCENARIOS[0].to_parameters().spot == 100.0


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.key)
def test_every_scenario_prices(scenario):
    assert bs_price(scenario.to_parameters()) > 0.0
