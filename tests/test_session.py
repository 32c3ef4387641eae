from __future__ import annotations

import asyncio
import math

import pytest

from bs_calculator.config import SimulationConfig
from bs_calculator.exceptions import (
    DomainDetail,
    InvalidDomainError,
    UnknownParameterError,
    UnknownScenarioError,
)
from bs_calculator.pricers.black_scholes import bs_price
from bs_calculator.scenarios import SCENARIOS
from bs_calculator.session import (
    PARAMETER_FIELDS,
    CalculatorSession,
    ChangeSource,
    SessionUpdate,
    resolve_field,
)
from bs_calculator.simulation import SimulationState
from bs_calculator.types import ContractParameters, OptionType


@pytest.fixture
def session() -> CalculatorSession:
    return CalculatorSession()


def test_defaults_are_priced_on_creation(session):
    p = session.parameters
    assert (p.spot, p.strike, p.expiry, p.rate, p.sigma, p.kind) == (
        100.0,
        105.0,
        0.5,
        0.05,
        0.2,
        OptionType.CALL,
    )
    assert session.get_price() == pytest.approx(4.58, abs=0.02)
    assert len(session.get_curve()) == 50
    assert session.last_error is None
    assert session.simulation_state == SimulationState.IDLE


def test_price_absent_until_first_successful_computation():
    bad = ContractParameters(
        spot=100.0, strike=105.0, expiry=0.5, rate=0.05, sigma=0.0, kind=OptionType.CALL
    )
    s = CalculatorSession(bad)
    assert s.get_price() is None
    assert s.get_curve() == ()
    assert isinstance(s.last_error, InvalidDomainError)
    assert s.price_label() == "Call price: n/a"

    s.set_parameter("sigma", 0.2)
    assert s.get_price() is not None
    assert len(s.get_curve()) == 50


def test_session_copies_initial_parameters():
    p = ContractParameters(
        spot=100.0, strike=105.0, expiry=0.5, rate=0.05, sigma=0.2, kind=OptionType.CALL
    )
    s = CalculatorSession(p)
    p.spot = 1.0
    assert s.parameters.spot == 100.0


def test_parameters_property_is_a_snapshot(session):
    snap = session.parameters
    snap.strike = 1.0
    assert session.parameters.strike == 105.0


@pytest.mark.parametrize(
    "alias,field",
    [
        ("S", "spot"),
        ("spot", "spot"),
        ("K", "strike"),
        ("T", "expiry"),
        ("r", "rate"),
        ("σ", "sigma"),
        ("volatility", "sigma"),
        ("option_kind", "kind"),
    ],
)
def test_resolve_field(alias, field):
    assert resolve_field(alias) == field


def test_set_spot_reprices_without_resampling_curve(session):
    curve = session.get_curve()
    change = session.set_parameter("S", 120)
    assert change.fields == frozenset({"spot"})
    assert change.source == ChangeSource.FIELD
    assert change.curve_stale is False
    assert session.get_curve() is curve
    assert session.get_price() == pytest.approx(bs_price(session.parameters), abs=1e-12)


def test_set_sigma_resamples_curve(session):
    before = session.get_curve()
    change = session.set_parameter("σ", 0.4)
    assert change.curve_stale is True
    assert session.parameters.sigma == 0.4
    assert session.get_curve() != before
    assert all(a.value <= b.value for a, b in zip(before, session.get_curve(), strict=True))


def test_set_kind_from_string(session):
    session.set_parameter("kind", "PUT")
    assert session.parameters.kind == OptionType.PUT
    assert session.price_label().startswith("Put price: $")


def test_unknown_field(session):
    with pytest.raises(UnknownParameterError):
        session.set_parameter("dividend_yield", 0.01)


@pytest.mark.parametrize("value", ["abc", None, True])
def test_non_numeric_values_leave_state_untouched(session, value):
    before = session.parameters
    price = session.get_price()
    with pytest.raises((TypeError, ValueError)):
        session.set_parameter("strike", value)
    assert session.parameters == before
    assert session.get_price() == price


def test_invalid_kind(session):
    with pytest.raises(ValueError):
        session.set_parameter("kind", "straddle")


@pytest.mark.parametrize(
    "field,value",
    [("T", 0.0), ("sigma", -0.1), ("S", 0.0), ("K", -5.0)],
)
def test_invalid_edit_keeps_last_valid_price_and_curve(session, field, value):
    price, curve = session.get_price(), session.get_curve()
    session.set_parameter(field, value)
    assert session.get_price() == price
    assert session.get_curve() == curve
    assert isinstance(session.last_error, InvalidDomainError)
    assert session.last_error.detail == DomainDetail.INVALID_INPUT


def test_error_clears_once_inputs_are_valid_again(session):
    session.set_parameter("T", 0.0)
    assert session.last_error is not None
    session.set_parameter("T", 1.0)
    assert session.last_error is None
    assert session.get_price() == pytest.approx(bs_price(session.parameters), abs=1e-12)


def test_overflow_is_rejected(session):
    price = session.get_price()
    session.set_parameter("r", -1000.0)
    assert session.last_error is not None
    assert session.last_error.is_overflow
    assert session.get_price() == price
    assert math.isfinite(session.get_price())


@pytest.mark.parametrize("sid", [0, 1, 2])
def test_load_scenario_replaces_all_fields(session, sid):
    scenario = SCENARIOS[sid]
    change = session.load_scenario(sid)
    assert change.fields == frozenset(PARAMETER_FIELDS)
    assert change.source == ChangeSource.SCENARIO
    assert session.parameters == scenario.to_parameters()
    assert session.get_price() == pytest.approx(bs_price(scenario.to_parameters()))


def test_load_scenario_by_name(session):
    session.load_scenario("Put Protection")
    assert session.parameters.kind == OptionType.PUT
    assert session.parameters.spot == 1500.0


def test_unknown_scenario_leaves_state(session):
    before = session.parameters
    with pytest.raises(UnknownScenarioError):
        session.load_scenario("Iron Condor")
    assert session.parameters == before


def test_toggle_option_kind_reprices_price_and_curve(session):
    call_price, call_curve = session.get_price(), session.get_curve()
    change = session.toggle_option_kind()
    assert change.fields == frozenset({"kind"})
    assert change.curve_stale is True
    assert session.parameters.kind == OptionType.PUT
    put_price = session.get_price()
    p = session.parameters
    assert call_price - put_price == pytest.approx(
        p.spot - p.strike * math.exp(-p.rate * p.expiry), abs=1e-4
    )
    assert session.get_curve() != call_curve
    session.toggle_option_kind()
    assert session.get_price() == pytest.approx(call_price)
    assert session.get_curve() == call_curve


def test_calculate_recomputes_price_only(session):
    curve = session.get_curve()
    change = session.calculate()
    assert change.fields == frozenset()
    assert change.source == ChangeSource.RECALCULATE
    assert session.get_curve() is curve


def test_advance_underlying_wraps(session):
    session.set_parameter("S", 149)
    session.advance_underlying()
    assert session.parameters.spot == 150.0
    change = session.advance_underlying()
    assert session.parameters.spot == 50.0
    assert change.source == ChangeSource.SIMULATION
    assert session.get_price() == pytest.approx(bs_price(session.parameters), abs=1e-12)


def test_listeners_receive_updates(session):
    updates: list[SessionUpdate] = []
    session.subscribe(updates.append)
    session.set_parameter("K", 110)
    session.toggle_option_kind()
    assert [u.change.source for u in updates] == [ChangeSource.FIELD, ChangeSource.TOGGLE]
    last = updates[-1]
    assert last.price == session.get_price()
    assert last.curve == session.get_curve()
    assert last.parameters.kind == OptionType.PUT
    assert last.error is None

    session.unsubscribe(updates.append)
    session.calculate()
    assert len(updates) == 2


def test_listener_sees_error(session):
    updates: list[SessionUpdate] = []
    session.subscribe(updates.append)
    session.set_parameter("T", -1)
    assert isinstance(updates[0].error, InvalidDomainError)


def test_price_label(session):
    assert session.price_label() == "Call price: $4.58"


def test_simulation_runs_and_stops():
    async def run() -> tuple[float, float, CalculatorSession]:
        s = CalculatorSession(simulation_config=SimulationConfig(period=0.01))
        assert s.start_simulation() is True
        assert s.simulation_state == SimulationState.RUNNING
        await asyncio.sleep(0.1)
        assert s.stop_simulation() is True
        spot_at_stop = s.parameters.spot
        await asyncio.sleep(0.08)
        await s.simulation.wait_stopped()
        return spot_at_stop, s.parameters.spot, s

    spot_at_stop, spot_later, s = asyncio.run(run())
    assert spot_at_stop > 100.0
    assert spot_later == spot_at_stop
    assert s.simulation_state == SimulationState.IDLE
    assert s.get_price() == pytest.approx(bs_price(s.parameters), abs=1e-12)


def test_field_edit_while_simulating_is_consistent():
    async def run() -> CalculatorSession:
        s = CalculatorSession(simulation_config=SimulationConfig(period=0.005))
        s.start_simulation()
        await asyncio.sleep(0.02)
        s.set_parameter("K", 120)
        assert s.get_price() == pytest.approx(bs_price(s.parameters), abs=1e-12)
        await asyncio.sleep(0.02)
        s.stop_simulation()
        await s.simulation.wait_stopped()
        return s

    s = asyncio.run(run())
    assert s.parameters.strike == 120.0
    assert s.get_price() == pytest.approx(bs_price(s.parameters), abs=1e-12)
