import time
from typing import Callable

from poker import socketio
from .registry import RoomRegistry


class PurgeScheduler:
    """Background sweep that drops rooms nobody has touched for a while.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Runs on a Socket.IO background task so request threads never wait on it
    - A failing sweep is logged and the next one still runs
    """

    def __init__(self, app, registry: RoomRegistry, interval: float, max_age: float,
                 clock: Callable[[], float] = time.time):
        self.app = app
        self.registry = registry
        self.interval = interval
        self.max_age = max_age
        self._clock = clock
        self._running = False
        self._stop_event = None
        self._task = None
        self.sweeps = 0

    def start(self) -> bool:
        if self.app.config.get('TESTING') and not self.app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
            return False
        if self._running:
            return False
        # Event from the active async model, so stop() wakes the loop mid-wait
        self._stop_event = socketio.server.eio.create_event()
        self._running = True
        self.app.logger.info(f"[purge-schedule] every={self.interval}s max_age={self.max_age}s")
        self._task = socketio.start_background_task(self._run)
        return True

    def stop(self, timeout: float = 5.0) -> None:
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        self._task.join(timeout)

    @property
    def running(self) -> bool:
        return self._running

    def sweep(self) -> None:
        self.sweeps += 1
        try:
            self.app.logger.info(f"[purge-start] total={len(self.registry)}")
            removed = self.registry.purge_idle(self._clock(), self.max_age)
            self.app.logger.info(f"[purge-done] removed={len(removed)} total={len(self.registry)}")
        except Exception:
            self.app.logger.exception('[purge-error] sweep failed, will retry next interval')

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.sweep()
