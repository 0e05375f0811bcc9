from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from .events import InputEvent, Mutation
from .sandbox import Sandbox

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Configuration for the frame loop.

    Attributes:
        tick_rate: Target updates per second for the loop. If 0 or None, updates as fast as possible.
        max_steps: If provided and > 0, the loop will automatically stop after this many updates.
    """

    tick_rate: float = 60.0
    max_steps: Optional[int] = None


class GameEngine:
    """Frame loop that feeds queued input into a Sandbox once per tick.

    The engine keeps the frame clock: it starts at 0 and grows by each tick's
    dt, so timestamps are frame-relative and monotonic. A GUI backend pushes
    events with feed() and calls update() from its own timer; headless callers
    use run().
    """

    def __init__(self, sandbox: Sandbox, config: Optional[GameConfig] = None) -> None:
        self.sandbox = sandbox
        self.config = config or GameConfig()
        self._running: bool = False
        self._step: int = 0
        self._clock: float = 0.0
        self._last_time: Optional[float] = None
        self._queue: List[InputEvent] = []
        self.last_mutations: List[Mutation] = []

    @property
    def running(self) -> bool:
        return self._running

    @property
    def step(self) -> int:
        return self._step

    @property
    def clock(self) -> float:
        return self._clock

    def start(self) -> None:
        """Start the engine loop state.

        Safe to call multiple times; subsequent calls are no-ops.
        """
        if self._running:
            logger.debug("GameEngine.start() called while already running")
            return
        self._running = True
        self._step = 0
        self._last_time = time.perf_counter()
        logger.info("GameEngine started (tick_rate=%s, max_steps=%s)", self.config.tick_rate, self.config.max_steps)

    def stop(self) -> None:
        """Stop the loop gracefully."""
        if not self._running:
            return
        self._running = False
        logger.info("GameEngine stopped at step=%s", self._step)

    def feed(self, event: InputEvent) -> None:
        """Queue an input event for the next update."""
        self._queue.append(event)

    def update(self, dt: float) -> List[Mutation]:
        """Perform a single update tick.

        Args:
            dt: Delta time in seconds since last update.

        Returns:
            Mutations produced by the queued input.
        """
        if not self._running:
            logger.debug("update() called while not running; ignored")
            return []
        self._step += 1
        self._clock += max(0.0, dt)
        events, self._queue = self._queue, []
        self.last_mutations = self.sandbox.advance(events, self._clock)
        logger.debug("Tick #%d (dt=%.4f, events=%d)", self._step, dt, len(events))

        # Auto stop if max_steps set
        if self.config.max_steps is not None and self._step >= self.config.max_steps:
            self.stop()
        return self.last_mutations

    def run(self) -> None:
        """Run a blocking loop until stopped or max_steps reached.

        This is a headless loop suitable for CLI mode. It throttles to tick_rate if configured.
        """
        self.start()
        target_dt = 0.0
        if self.config.tick_rate and self.config.tick_rate > 0:
            target_dt = 1.0 / float(self.config.tick_rate)

        while self._running:
            now = time.perf_counter()
            if self._last_time is None:
                dt = 0.0
            else:
                dt = now - self._last_time
            self._last_time = now

            self.update(dt)

            # Throttle to tick rate if configured
            if target_dt > 0:
                elapsed = time.perf_counter() - now
                remaining = target_dt - elapsed
                if remaining > 0:
                    time.sleep(remaining)

        logger.info("Loop complete (steps=%d)", self._step)
