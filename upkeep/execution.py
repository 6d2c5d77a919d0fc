"""
Execution — the runtime record of one step's run.

Status moves pending → running → success | fail | skipped and never
leaves a terminal state. The runner owns an execution for the duration
of its step; the reporter is told when it starts and finishes.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from upkeep.steps.base import Step, StepFailure
from upkeep.ui.reporter import TerminalError

if TYPE_CHECKING:
    from upkeep.ui.reporter import CLIReporter
    from upkeep.ui.spinner import Spinner

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = frozenset(("success", "fail", "skipped"))


class Execution:
    def __init__(self, step: Step, reporter: CLIReporter) -> None:
        self.step = step
        self.reporter = reporter
        self.name = step.description
        self.status = "pending"
        self.output = ""
        self.started_at: float | None = None
        self.finished_at: float | None = None

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def run(self, skip_reason: str | None = None) -> None:
        """
        Run the step, or record it as skipped when skip_reason is given.

        Terminal I/O errors (EOFError, BrokenPipeError, TerminalError)
        propagate; everything else the step raises becomes a `fail` outcome.
        """
        self.status = "running"
        self.started_at = time.monotonic()
        self.reporter.before_execution_starts(self)

        if skip_reason is not None:
            self.skip(skip_reason)
        else:
            try:
                self.step.run(self)
            except StepFailure as e:
                self.fail(str(e))
            except (EOFError, BrokenPipeError, TerminalError):
                # the operator's terminal is gone, not the step
                raise
            except Exception as e:
                logger.debug("Step %s raised", self.step.label, exc_info=True)
                self.fail(f"{type(e).__name__}: {e}")

        self.success()
        self.finished_at = time.monotonic()
        self.reporter.after_execution_finishes(self)

    def success(self) -> None:
        self._finish("success")

    def fail(self, message: str = "") -> None:
        if self._finish("fail"):
            logger.info("Step %s failed: %s", self.step.label, message)
            self.add_output(message)

    def skip(self, reason: str = "") -> None:
        if self._finish("skipped"):
            self.add_output(reason)

    def _finish(self, status: str) -> bool:
        """Record a terminal status unless one is already recorded."""
        if self.terminal:
            return False
        self.status = status
        return True

    # ── Output ────────────────────────────────────────────────────────────────

    def add_output(self, text: str) -> None:
        if not text:
            return
        self.output = f"{self.output}\n{text}" if self.output else text

    @contextmanager
    def with_spinner(self, message: str) -> Iterator[Spinner]:
        with self.reporter.with_spinner(message) as spinner:
            yield spinner

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    @property
    def failed(self) -> bool:
        return self.status == "fail"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def duration(self) -> float | None:
        if self.started_at is None or self.finished_at is None:
            return None
        return self.finished_at - self.started_at
