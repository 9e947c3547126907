"""Integrations - Mock wearable sync and the periodic auto-sync loop.

No real platform is contacted. A source produces an activity delta that the
container adds to today's stats, exactly as a manual activity log would.
"""

import asyncio
import logging
import os
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from .container import AppStateContainer


logger = logging.getLogger(__name__)

DEFAULT_SYNC_INTERVAL = 2 * 60 * 60  # seconds


@dataclass(frozen=True)
class ActivityDelta:
    steps: int
    calories: int


class IntegrationSource(Protocol):
    def pull(self) -> ActivityDelta: ...


class RandomIntegrationSource:
    """Pseudo-random activity: steps in [0, 500), calories in [0, 50)."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def pull(self) -> ActivityDelta:
        return ActivityDelta(steps=self._rng.randrange(500), calories=self._rng.randrange(50))


class FixedIntegrationSource:
    """Always reports the same delta."""

    def __init__(self, steps: int, calories: int) -> None:
        self.delta = ActivityDelta(steps=steps, calories=calories)

    def pull(self) -> ActivityDelta:
        return self.delta


def sync_interval() -> float:
    return float(os.environ.get("CALORIX_SYNC_INTERVAL", DEFAULT_SYNC_INTERVAL))


class AutoSyncer:
    """Calls ``container.sync_now()`` every interval while an integration is on.

    The timer only exists while at least one integration is enabled; the
    container notifies the syncer after every transition so toggling the last
    integration off cancels it.
    """

    def __init__(self, container: "AppStateContainer", interval: Optional[float] = None) -> None:
        self.container = container
        self.interval = interval if interval is not None else sync_interval()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            logger.info("Auto-sync tick")
            self.container.sync_now()

    def _reconcile(self) -> None:
        if self._loop is None:
            return
        active = self.container.has_active_integrations()
        if active and not self.running:
            logger.info("Starting auto-sync every %.0f seconds", self.interval)
            self._task = self._loop.create_task(self._run())
        elif not active and self.running:
            logger.info("Stopping auto-sync: no integration enabled")
            self._task.cancel()
            self._task = None

    def refresh(self, *_args) -> None:
        """Start or stop the timer to match the current integrations."""
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._reconcile)

    def start(self) -> None:
        """Attach to the running event loop and to container changes."""
        self._loop = asyncio.get_running_loop()
        self.container.add_listener(self.refresh)
        self._reconcile()

    async def stop(self) -> None:
        self.container.remove_listener(self.refresh)
        task, self._task = self._task, None
        self._loop = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
