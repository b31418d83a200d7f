"""EngineManager — singleton wrapper that runs the WorldLoop on a background thread.

The API reads from an atomically-swapped plain-data snapshot; the WorldLoop
is mutated only while holding ``_loop_lock`` (ticks on the engine thread,
inventory use from a request thread), so there is a single writer at a time.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any

from skirmish.ai.autopilot import Autopilot
from skirmish.core.models import PlayerCommand
from skirmish.engine.world_loop import UseResult, WorldLoop
from skirmish.utils.event_log import EventLog

if TYPE_CHECKING:
    from skirmish.config import CombatConfig

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the session lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded ring buffer)
      - control commands (start / pause / resume / step / reset)
      - player input and inventory use
    """

    def __init__(self, config: CombatConfig, autopilot: bool = False) -> None:
        self._config = config
        self.config = config
        self._tick_rate: float = config.tick_ms / 1000.0  # seconds between ticks
        self._autopilot_enabled = autopilot

        self._loop: WorldLoop | None = None
        self._loop_lock = threading.Lock()

        # Thread-safe shared state
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: dict[str, Any] | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.005, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def autopilot(self) -> bool:
        return self._autopilot_enabled

    # -- snapshot access --

    def get_snapshot(self) -> dict[str, Any] | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick (must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave stopped with a fresh initial snapshot."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("EngineManager reset.")

    def tick_sync(self, count: int = 1) -> bool:
        """Run *count* ticks on the calling thread.  Only valid while stopped."""
        if self._running.is_set():
            raise RuntimeError("tick_sync() cannot run while the engine thread is running.")
        can_continue = True
        for _ in range(count):
            with self._loop_lock:
                can_continue = self._loop.tick_once()
            self._publish_snapshot()
            if not can_continue:
                break
        return can_continue

    # -- input --

    def set_input(self, command: PlayerCommand) -> None:
        with self._loop_lock:
            self._loop.set_command(command)

    def set_autopilot(self, enabled: bool) -> None:
        with self._loop_lock:
            self._autopilot_enabled = enabled
            self._loop.autopilot = Autopilot() if enabled else None
        logger.info("Autopilot %s", "enabled" if enabled else "disabled")

    def use_item(self, slot: int) -> UseResult:
        with self._loop_lock:
            result = self._loop.use_item(slot)
        self._publish_snapshot()
        return result

    def discard_item(self, slot: int) -> UseResult:
        with self._loop_lock:
            result = self._loop.discard_item(slot)
        self._publish_snapshot()
        return result

    # -- internals --

    def _build(self) -> None:
        """Construct a fresh session from config and publish its first snapshot."""
        autopilot = Autopilot() if self._autopilot_enabled else None
        with self._loop_lock:
            self._loop = WorldLoop(self._config, event_log=self._event_log, autopilot=autopilot)
        self._publish_snapshot()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Engine thread started.")
        assert self._loop is not None

        while not self._stop_requested.is_set():
            # Handle pause
            if self._paused.is_set() and not self._step_requested.is_set():
                time.sleep(0.01)
                continue

            single_step = self._step_requested.is_set()
            if single_step:
                self._step_requested.clear()

            with self._loop_lock:
                can_continue = self._loop.tick_once()
            self._publish_snapshot()

            if not can_continue:
                logger.info("Session ended at tick %d.", self._current_tick())
                break

            # Rate limiting
            if not single_step:
                time.sleep(self._tick_rate)

        self._running.clear()
        logger.info("Engine thread exited.")

    def _publish_snapshot(self) -> None:
        """Swap in a fresh snapshot.  Events reach the log from the loop itself."""
        assert self._loop is not None
        with self._loop_lock:
            snap = self._loop.snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _current_tick(self) -> int:
        if self._loop:
            return self._loop.tick
        return 0
