from __future__ import annotations

import asyncio
import logging


async def simulate(session, seconds: float) -> None:
    session.start_simulation()
    await asyncio.sleep(seconds)
    session.stop_simulation()
    await session.simulation.wait_stopped()


def main() -> None:
    # [START README_QUICKSTART]
    from bs_calculator import CalculatorSession, SimulationConfig, curve_frame

    session = CalculatorSession(simulation_config=SimulationConfig(period=0.05))
    session.subscribe(
        lambda u: print(f"S={u.parameters.spot:g} -> {u.price:.4f} ({u.change.source.value})")
    )

    print(session.price_label())
    session.set_parameter("σ", 0.3)
    session.load_scenario("Put Protection")
    session.toggle_option_kind()
    print(session.price_label())

    session.load_scenario(0)
    asyncio.run(simulate(session, 0.3))

    print(curve_frame(session.get_curve()).head())
    # [END README_QUICKSTART]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
