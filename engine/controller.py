"""
controller.py — Playback Controller
====================================
The PlaybackController is the ONLY object the UI talks to during a run.
It owns the driver generator, the current VisualState, the cancellation
token and the tempo, and exposes a start/pause/resume/reset/step API.

State machine:
    IDLE      →  start()   →  RUNNING
    RUNNING   →  pause()   →  PAUSED
    PAUSED    →  resume()  →  RUNNING       (same driver, nothing re-derived)
    IDLE / PAUSED  →  step()  →  PAUSED     (exactly one operation)
    RUNNING   →  (driver exhausted) → COMPLETE
    COMPLETE  →  start()   →  IDLE          (i.e. reset)
    any       →  reset()   →  IDLE
    COMPLETE  →  commit()  →  IDLE          (structure result becomes the input)
    any       →  clear()   →  IDLE          (empty structure)

Concurrency:
  Everything runs on ONE asyncio event loop.  The only suspension point of
  a run is the StepClock wait between two operations; applying an
  operation is plain synchronous code.  Each run task captures its
  generation and re-checks it before every write, so a paused or reset
  run can never land a stale update.

Events (plain callables, all optional):
    on_step_change(step_index)      code pointer moved
    on_state_change(VisualState)    new snapshot
    on_complete(result)             driver finished naturally
    on_validation_error(message)    a command was rejected
    on_failure(message)             invariant violation, run aborted
"""

import asyncio
import logging
import random
from enum import Enum
from typing import Any, Callable, Dict, Generator, List, Optional

from algorithms import GROWING_OPS, AlgoInfo, get_algorithm
from algorithms.inputs import MAX_ELEMENTS, check_bound, coerce_int
from algorithms.step import Operation
from engine.clock import StepClock
from engine.projector import finalize, project
from engine.token import CancellationToken
from structures.errors import Cancelled, InvariantViolation, ValidationError
from structures.state import VisualState

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    PAUSED   = "paused"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Speed (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,   # teaching mode
    "medium": 500,
    "fast":   150,    # demo mode
    "turbo":  50,
}

MIN_SPEED_MS     = 0
MAX_SPEED_MS     = 2000
DEFAULT_SPEED_MS = SPEED_PRESETS["medium"]

RANDOM_MIN = 1
RANDOM_MAX = 100


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state    : Current PlaybackState.
        snapshot : The VisualState currently on screen.
        speed_ms : Delay between two operations.
        applied  : Number of operations applied since the last reset.
        result   : Return value of the driver once it completes.
        algo     : AlgoInfo of the loaded visualizer (None before load()).
        params   : Validated parameters of the loaded run.
    """

    def __init__(
        self,
        speed_ms: int = DEFAULT_SPEED_MS,
        clock: Optional[StepClock] = None,
        rng: Optional[random.Random] = None,
    ):
        self.token:    CancellationToken = CancellationToken()
        self.clock:    StepClock         = clock or StepClock()
        self.state:    PlaybackState     = PlaybackState.IDLE
        self.snapshot: VisualState       = VisualState()
        self.speed_ms: int               = speed_ms
        self.applied:  int               = 0
        self.result:   Any               = None
        self.algo:     Optional[AlgoInfo] = None
        self.params:   Dict[str, Any]    = {}

        self.on_step_change:      Optional[Callable[[Optional[int]], None]] = None
        self.on_state_change:     Optional[Callable[[VisualState], None]]   = None
        self.on_complete:         Optional[Callable[[Any], None]]           = None
        self.on_validation_error: Optional[Callable[[str], None]]           = None
        self.on_failure:          Optional[Callable[[str], None]]           = None

        self._rng:     random.Random = rng or random.Random()
        self._initial: VisualState   = VisualState()
        self._driver:  Optional[Generator[Operation, None, Any]] = None
        self._task:    Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def load(self, algo_key: str, **params: Any) -> None:
        """Validate and install a new run.  Counts as a structural-input change → reset."""
        info = get_algorithm(algo_key)
        if info is None:
            self._reject(f"Unknown algorithm: {algo_key}")
        try:
            self._adopt(info, params)
        except ValidationError as exc:
            self._reject(exc.message)
        logger.info("loaded %s with %s", algo_key, self.params)

    def randomize(self, length: Any = 8) -> None:
        """Fresh random values (1–100) for the loaded visualizer, then reset."""
        if self.algo is None or not self.algo.has_values:
            self._reject("This visualizer has no values to randomize")
        try:
            count = check_bound(length, 1, MAX_ELEMENTS, "length")
        except ValidationError as exc:
            self._reject(exc.message)
        values = [self._rng.randint(RANDOM_MIN, RANDOM_MAX) for _ in range(count)]
        self.load(self.algo.key, **{**self.params, "values": values})

    def commit(self) -> None:
        """
        Keep the structure a finished operation produced as the input of the
        next one (array, stack, queue and linked-list visualizers).

        The loaded operation is kept when it can still run on the new
        structure; an index or position that no longer fits falls back to 0,
        and an operation that needs elements (pop, delete, …) on an empty
        structure gives way to the family's growing operation.
        """
        if self.algo is None or not self.algo.is_structure:
            self._reject("Only data-structure operations can keep their result")
        if self.state is not PlaybackState.COMPLETE:
            self._reject("Finish the operation before keeping its result")
        self._carry(list(self.snapshot.values))
        logger.info("kept %s result %s as the next input", self._label, self.params["values"])

    def clear(self) -> None:
        """Empty the structure of the loaded data-structure visualizer."""
        if self.algo is None or not self.algo.is_structure:
            self._reject("Only data-structure operations can be cleared")
        self._carry([])
        logger.info("cleared %s", self._label)

    def close(self) -> None:
        """Stop for good: cancel any in-flight run and drop the driver."""
        self.token.cancel()
        self.state   = PlaybackState.IDLE
        self._driver = None
        self._task   = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Begin (or continue) the run.  Returns True if a run task was started."""
        if self.state is PlaybackState.RUNNING:
            return False
        if self.state is PlaybackState.COMPLETE:
            self.reset()
            return False
        if self._driver is None:
            self._reject("Load an algorithm first")

        generation = self.token.renew()
        self.state = PlaybackState.RUNNING
        self._task = asyncio.get_running_loop().create_task(self._run(generation))
        logger.debug("run started (generation %d, %d op(s) already applied)", generation, self.applied)
        return True

    def pause(self) -> bool:
        if self.state is not PlaybackState.RUNNING:
            return False
        self.token.cancel()
        self.state = PlaybackState.PAUSED
        logger.info("paused after %d operation(s)", self.applied)
        return True

    def resume(self) -> bool:
        if self.state is not PlaybackState.PAUSED:
            return False
        return self.start()

    def reset(self) -> None:
        """Back to the caller-supplied input, Idle.  Idempotent."""
        self.token.renew()
        if self.algo is not None:
            self._install(self.algo.fn(**self.params))
        else:
            self._install(None)
        logger.debug("reset (generation %d)", self.token.generation)

    def step(self) -> bool:
        """Apply exactly one operation while not running."""
        if self.state in (PlaybackState.RUNNING, PlaybackState.COMPLETE):
            return False
        if self._driver is None:
            self._reject("Load an algorithm first")

        generation = self.token.renew()
        try:
            op = next(self._driver)
        except StopIteration as stop:
            self._complete(generation, stop.value)
            return False
        except InvariantViolation:
            logger.exception("invariant violated while stepping %s", self._label)
            self._fail()
            return False

        self.state = PlaybackState.PAUSED
        try:
            self._apply(op)
        except InvariantViolation:
            logger.exception("invariant violated while stepping %s", self._label)
            self._fail()
            return False
        return True

    async def join(self) -> None:
        """Wait for the current run task (if any) to finish or stop."""
        if self._task is not None:
            await self._task

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed_ms: Any) -> None:
        if self.state is PlaybackState.RUNNING:
            self._reject("Pause the visualization before changing speed")
        try:
            value = coerce_int(speed_ms, "speed")
        except ValidationError as exc:
            self._reject(exc.message)
        if not MIN_SPEED_MS <= value <= MAX_SPEED_MS:
            self._reject(f"Speed must be between {MIN_SPEED_MS} and {MAX_SPEED_MS} ms")
        self.speed_ms = value

    def set_speed_preset(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            self._reject(f"Unknown speed preset: {preset}")
        self.set_speed(SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_running(self) -> bool:
        return self.state is PlaybackState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state is PlaybackState.PAUSED

    @property
    def is_complete(self) -> bool:
        return self.state is PlaybackState.COMPLETE

    @property
    def current_step_index(self) -> Optional[int]:
        return self.snapshot.step_index

    @property
    def initial(self) -> VisualState:
        return self._initial

    def playback(self) -> Dict[str, Any]:
        return {
            "state":              self.state.value,
            "is_running":         self.is_running,
            "is_paused":          self.is_paused,
            "is_complete":        self.is_complete,
            "current_step_index": self.current_step_index,
            "speed_ms":           self.speed_ms,
            "applied":            self.applied,
            "structure":          bool(self.algo and self.algo.is_structure),
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @property
    def _label(self) -> str:
        return self.algo.label if self.algo else "nothing"

    async def _run(self, generation: int) -> None:
        try:
            while True:
                self.token.raise_if_cancelled(generation)
                try:
                    op = next(self._driver)
                except StopIteration as stop:
                    self._complete(generation, stop.value)
                    return
                self._apply(op)
                await self.clock.wait(self.speed_ms, self.token)
        except Cancelled:
            logger.debug("run of generation %d stopped", generation)
        except InvariantViolation:
            logger.exception("invariant violated while running %s", self._label)
            if not self.token.is_stale(generation):
                self._fail()

    def _apply(self, op: Operation) -> None:
        prior = self.snapshot
        self.snapshot = project(prior, op)
        self.applied += 1
        if self.snapshot.step_index != prior.step_index:
            self._emit(self.on_step_change, self.snapshot.step_index)
        self._emit(self.on_state_change, self.snapshot)

    def _complete(self, generation: int, result: Any) -> None:
        if self.token.is_stale(generation):
            return
        self.result = result
        self.snapshot = finalize(self.snapshot)
        self.state = PlaybackState.COMPLETE
        self._driver = None
        logger.info("%s complete after %d operation(s), result=%r", self._label, self.applied, result)
        self._emit(self.on_state_change, self.snapshot)
        self._emit(self.on_complete, result)

    def _fail(self) -> None:
        label = self._label
        self.reset()
        self._emit(self.on_failure, f"Something went wrong while running {label}; the visualizer was reset.")

    def _adopt(self, info: AlgoInfo, params: Dict[str, Any]) -> None:
        """Validate params for `info` and install the run; raises ValidationError untouched."""
        resolved = info.resolve(params)
        driver = info.fn(**resolved)
        initial = info.seed(resolved)

        self.token.renew()
        self.algo     = info
        self.params   = resolved
        self._initial = initial
        self._install(driver)

    def _carry(self, values: List[Any]) -> None:
        info = self.algo
        grow = get_algorithm(GROWING_OPS[info.kind])
        attempts = [
            (info, {**self.params, "values": values}),
            (info, {**self.params, "values": values, "index": 0, "position": 0}),
            (grow, {**grow.params, "values": values, "index": 0, "position": 0}),
        ]
        error: Optional[ValidationError] = None
        for candidate, params in attempts:
            try:
                self._adopt(candidate, params)
                return
            except ValidationError as exc:
                error = exc
        self._reject(error.message)

    def _install(self, driver: Optional[Generator[Operation, None, Any]]) -> None:
        self._driver  = driver
        self._task    = None
        self.snapshot = self._initial
        self.state    = PlaybackState.IDLE
        self.applied  = 0
        self.result   = None
        self._emit(self.on_step_change, None)
        self._emit(self.on_state_change, self.snapshot)

    def _reject(self, message: str) -> None:
        logger.debug("rejected: %s", message)
        self._emit(self.on_validation_error, message)
        raise ValidationError(message)

    @staticmethod
    def _emit(callback: Optional[Callable[..., None]], *args: Any) -> None:
        if callback is not None:
            callback(*args)
