# discrakt/sync.py
import time
import traceback
from datetime import datetime
from typing import Callable, Optional

from .debug import debug_log, log
from .presence import render_presence


class SyncLoop:
    def __init__(
        self,
        client,
        sink,
        interval: float,
        clear_when_idle: bool = True,
        sleep: Callable[[float], None] = time.sleep,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.client = client
        self.sink = sink
        self.interval = interval
        self.clear_when_idle = clear_when_idle
        self._sleep = sleep
        self._clock = clock
        self._running = False
        self._has_presence = False
        self._last_watching = None

    def stop(self):
        self._running = False

    def run_once(self) -> bool:
        """One fetch/render/publish cycle. Returns True when a payload was published."""
        state = self.client.fetch_current_state()

        if state is None:
            if self._last_watching is not None:
                log("[Trakt] Nothing is being watched")
                self._last_watching = None
            if self._has_presence and self.clear_when_idle:
                self.sink.clear()
                self._has_presence = False
            return False

        try:
            rating, artwork = self.client.enrich(state)
            now = self._clock() if self._clock else None
            payload = render_presence(state, rating, artwork, now=now)

            watching = (payload.details, payload.state)
            if watching != self._last_watching:
                log(f"[Trakt] Watching: {payload.details} - {payload.state}")
                self._last_watching = watching

            published = self.sink.publish(payload)
        except Exception as e:
            log(f"[Sync] Cycle failed: {e}")
            debug_log(traceback.format_exc())
            return False

        if published:
            self._has_presence = True
        return published

    def run(self):
        self._running = True
        log(f"[Sync] Polling Trakt every {self.interval:g}s (Ctrl+C to stop)")

        while self._running:
            self.run_once()
            if not self._running:
                break
            self._sleep(self.interval)
