"""
Spinner — a rotating glyph in front of the reporter's current line.

One daemon thread per spinner ticks every `interval` seconds. While the
spinner is active each tick redraws "<glyph> <line>" and advances the
glyph. The active flag, glyph index and line text are guarded by the
reporter's lock, the same lock every terminal write goes through.

Usage (through the reporter only):
    with reporter.with_spinner("Checking database") as spinner:
        spinner.update("Checking database: running query")
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from upkeep.ui.theme import SPINNER_GLYPHS, SPINNER_INTERVAL

if TYPE_CHECKING:
    from upkeep.ui.reporter import CLIReporter


class Spinner:
    def __init__(
        self,
        reporter: CLIReporter,
        interval: float = SPINNER_INTERVAL,
        glyphs: tuple[str, ...] = SPINNER_GLYPHS,
    ) -> None:
        self._reporter = reporter
        self._lock = reporter.lock
        self._interval = interval
        self._glyphs = glyphs
        self._index = 0
        self._active = False
        self._current_line = ""

        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name="upkeep-spinner", daemon=True
        )
        self._thread.start()

    # ── Public API ────────────────────────────────────────────────────────────

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    @property
    def current_line(self) -> str:
        with self._lock:
            return self._current_line

    @property
    def running(self) -> bool:
        """True while the ticking thread is alive."""
        return self._thread.is_alive()

    def update(self, line: str) -> None:
        """Replace the line text and redraw it without waiting for a tick."""
        with self._lock:
            self._current_line = line
            if self._active:
                self._draw()

    def activate(self) -> None:
        with self._lock:
            self._active = True
        self._spin()

    def deactivate(self) -> None:
        with self._lock:
            self._active = False

    def stop(self) -> None:
        """Stop ticking and wait for the thread to exit."""
        self.deactivate()
        self._stopped.set()
        if self._thread is not threading.current_thread():
            self._thread.join()

    # ── Internal ──────────────────────────────────────────────────────────────

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            self._spin()

    def _spin(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._draw()
            self._index = (self._index + 1) % len(self._glyphs)

    def _draw(self) -> None:
        # caller holds the lock
        self._reporter.redraw_current_line(
            f"{self._glyphs[self._index]} {self._current_line}"
        )
