"""
token.py — Cancellation Token
==============================
A shared flag plus a monotonically increasing generation number.

    token = CancellationToken()
    gen = token.renew()          # start of a run → generation 1
    ...
    token.is_stale(gen)          # True once the run was paused / reset
    token.cancel()               # pause: current generation is dead

Every piece of work belonging to a run captures the generation it was
started under and checks it before touching shared state.  Waiters can
also subscribe, so a sleeping step clock wakes the instant the token is
cancelled instead of finding out on its next tick.
"""

import logging
from typing import Callable, List

from structures.errors import Cancelled

logger = logging.getLogger(__name__)


Listener = Callable[[], None]


class CancellationToken:
    """
    Attributes:
        generation : Identity of the current run; bumped by renew().
        cancelled  : True once the current generation has been cancelled.
    """

    def __init__(self):
        self.generation: int  = 0
        self.cancelled:  bool = False
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def cancel(self) -> None:
        """Kill the current generation.  Idempotent."""
        if self.cancelled:
            return
        self.cancelled = True
        logger.debug("generation %d cancelled", self.generation)
        self._notify()

    def renew(self) -> int:
        """Start a new generation (clears `cancelled`) and return it."""
        self.generation += 1
        self.cancelled = False
        # anything still waiting belongs to an older generation
        self._notify()
        return self.generation

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_stale(self, generation: int) -> bool:
        return self.cancelled or generation != self.generation

    def raise_if_cancelled(self, generation: int) -> None:
        if self.is_stale(generation):
            raise Cancelled(generation)

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
