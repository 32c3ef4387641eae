"""Periodic sawtooth walk of the underlying price.

The driver owns no pricing logic. Every period it calls the host-supplied
``on_tick`` callback, which is expected to advance the spot (see
:func:`next_spot`) and reprice. Ticks run on the current asyncio event loop,
one at a time, from a single task that sleeps between them.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from enum import Enum

from .config import SimulationConfig

__all__ = ["SimulationState", "SimulationDriver", "next_spot"]

logger = logging.getLogger(__name__)


class SimulationState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


def next_spot(spot: float, cfg: SimulationConfig | None = None) -> float:
    """One step of the walk: ``spot + step``, wrapping to ``lower`` past ``upper``.

    With the default config 149 -> 150 -> 50.
    """
    cfg = SimulationConfig() if cfg is None else cfg
    advanced = spot + cfg.step
    if advanced > cfg.upper:
        return cfg.lower
    return advanced


class _CancelToken:
    __slots__ = ("cancelled",)

    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class SimulationDriver:
    """Idle/Running state machine that fires ``on_tick`` every ``config.period``.

    Parameters
    ----------
    on_tick : callable
        Invoked with no arguments once per tick while running.
    config : SimulationConfig, optional
        Tick period and walk bounds.

    Notes
    -----
    Each run gets its own cancellation token. :meth:`stop` invalidates it and
    cancels the task; the run loop re-checks the token after every sleep,
    so a tick whose timer already fired but whose callback has not run yet
    is dropped.
    """

    def __init__(
        self,
        on_tick: Callable[[], object],
        config: SimulationConfig | None = None,
    ) -> None:
        self.config = SimulationConfig() if config is None else config
        self._on_tick = on_tick
        self._token: _CancelToken | None = None
        self._task: asyncio.Task[None] | None = None
        self._ticks = 0

    @property
    def state(self) -> SimulationState:
        if self._token is None:
            return SimulationState.IDLE
        return SimulationState.RUNNING

    @property
    def is_running(self) -> bool:
        return self.state == SimulationState.RUNNING

    @property
    def ticks(self) -> int:
        """Number of ticks applied since the driver was created."""
        return self._ticks

    def start(self) -> bool:
        """Idle -> Running. Returns False if already running.

        Must be called with an asyncio event loop running in this thread.
        """
        if self._token is not None:
            return False
        loop = asyncio.get_running_loop()
        token = _CancelToken()
        self._token = token
        self._task = loop.create_task(self._run(token))
        logger.info("Simulation started (period=%gs)", self.config.period)
        return True

    def stop(self) -> bool:
        """Running -> Idle. Returns False if already idle."""
        token = self._token
        if token is None:
            return False
        token.cancel()
        self._token = None
        if self._task is not None:
            self._task.cancel()
        logger.info("Simulation stopped after %d ticks", self._ticks)
        return True

    async def wait_stopped(self) -> None:
        """Wait until the most recent run task has finished."""
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self, token: _CancelToken) -> None:
        try:
            while not token.cancelled:
                await asyncio.sleep(self.config.period)
                if token.cancelled:
                    return
                self._ticks += 1
                logger.debug("Simulation tick %d", self._ticks)
                self._on_tick()
        except Exception:
            logger.exception("Simulation tick failed; stopping")
            raise
        finally:
            if self._token is token:
                self._token = None
