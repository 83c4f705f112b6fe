"""
clock.py — Step Clock
======================
The pause between two operations.  `await clock.wait(ms, token)` either
sleeps the full duration or raises Cancelled the moment the token's
current generation dies, whichever comes first.

No polling: the wait is one asyncio timer plus one token subscription,
and both are torn down in `finally`, so nothing outlives the wait.
"""

import asyncio
import logging

from engine.token import CancellationToken
from structures.errors import Cancelled

logger = logging.getLogger(__name__)


class StepClock:
    """Awaitable, cancellable delay.  Must be used from inside the event loop."""

    def __init__(self):
        self.pending: int = 0     # waits currently in flight

    async def wait(self, duration_ms: float, token: CancellationToken) -> None:
        generation = token.generation
        # cancelled before we even scheduled anything
        token.raise_if_cancelled(generation)

        loop = asyncio.get_running_loop()
        done = loop.create_future()

        def wake() -> None:
            if not done.done():
                done.set_result(None)

        timer = loop.call_later(max(duration_ms, 0) / 1000.0, wake)
        unsubscribe = token.subscribe(wake)
        self.pending += 1
        try:
            await done
        finally:
            timer.cancel()
            unsubscribe()
            self.pending -= 1

        if token.is_stale(generation):
            logger.debug("wait of %sms interrupted (generation %d)", duration_ms, generation)
            raise Cancelled(generation)
