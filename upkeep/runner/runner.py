"""
Runner — drives a composed scenario step by step.

Steps run in scenario order from a queue. After each step the runner
works out what the operator has to decide:

  failed, remediation offered  — offer the applicable next_steps; a chosen
                                 one runs next, followed by a rerun of the
                                 failed check
  failed, nothing offered      — ask whether to continue with the next
                                 queued step
  otherwise                    — carry on

Quit is cooperative: the step already running finishes, nothing after it
starts. Operator actions arrive as calls to add_step(), skip_to_next()
and ask_to_quit(), dispatched by the reporter.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from upkeep.execution import Execution
from upkeep.features.base import FeatureRegistry
from upkeep.scenario import Scenario
from upkeep.steps.base import Step
from upkeep.ui.reporter import CLIReporter

logger = logging.getLogger(__name__)


class Runner:
    def __init__(
        self,
        registry: FeatureRegistry,
        reporter: CLIReporter,
        assumeyes: bool = False,
        whitelist: Iterable[str] = (),
    ) -> None:
        self.registry = registry
        self.reporter = reporter
        self.assumeyes = assumeyes
        self.whitelist = frozenset(whitelist)

        self.executions: list[Execution] = []
        self._queue: deque[Step] = deque()
        self._quit = False
        self._rerun: set[int] = set()

    # ── Public API ────────────────────────────────────────────────────────────

    def run(self, scenario: Scenario) -> int:
        """
        Run every step of a composed scenario. Returns the exit code.

        Each call starts from a clean slate: earlier executions, a quit
        and pending rechecks are forgotten.
        """
        self.executions = []
        self._quit = False
        self._rerun = set()
        self._queue = deque(scenario.steps)
        self.reporter.before_scenario_starts(scenario)

        while self._queue and not self._quit:
            step = self._queue.popleft()
            execution = self.run_step(step)
            if not self._quit:
                self._after_step(step, execution)

        if self._quit:
            logger.info("Scenario %s stopped by the operator", scenario.label)
        self.reporter.after_scenario_finishes(scenario, self.final_executions)
        return self.exit_code

    def run_step(self, step: Step) -> Execution:
        if id(step) in self._rerun:
            self._rerun.discard(id(step))
            self.reporter.puts("Rerunning the check after fix procedure")
            self.reporter.new_line_if_needed()

        execution = Execution(step, self.reporter)
        skip_reason = None
        if step.label in self.whitelist:
            skip_reason = f"Step [{step.label}] is whitelisted"
        execution.run(skip_reason=skip_reason)
        self.executions.append(execution)
        return execution

    @property
    def quit(self) -> bool:
        return self._quit

    @property
    def pending_steps(self) -> list[Step]:
        return list(self._queue)

    @property
    def final_executions(self) -> list[Execution]:
        """The latest execution of each step; a passing rerun replaces an earlier failure."""
        latest: dict[str, Execution] = {}
        for execution in self.executions:
            latest.pop(execution.step.label, None)
            latest[execution.step.label] = execution
        return list(latest.values())

    @property
    def exit_code(self) -> int:
        return 1 if any(e.failed for e in self.final_executions) else 0

    # ── Operator actions ──────────────────────────────────────────────────────

    def add_step(self, step: Step) -> None:
        """Run `step` next."""
        if self._queue and self._queue[0] is step:
            return
        logger.debug("Adding step %s", step.label)
        self._queue.appendleft(step)

    def skip_to_next(self, step: Step | None = None) -> None:
        """Do not run `step`; it is recorded as skipped if it was queued."""
        if step is None:
            return
        logger.debug("Skipping step %s", step.label)
        if step in self._queue:
            self._queue.remove(step)
            execution = Execution(step, self.reporter)
            execution.run(skip_reason="Skipped by the operator")
            self.executions.append(execution)

    def ask_to_quit(self, step: Step | None = None) -> None:
        logger.debug("Quit requested")
        self._quit = True

    # ── Internal ──────────────────────────────────────────────────────────────

    def _after_step(self, step: Step, execution: Execution) -> None:
        if not execution.failed:
            return

        # whitelisted remedies are never offered
        offered = [s for s in step.offered_steps() if s.label not in self.whitelist]
        if offered:
            self._offer(step, offered)
        elif self._queue:
            self._offer(None, [self._queue[0]])

    def _offer(self, failed: Step | None, steps: list[Step]) -> None:
        """Hand the offered steps to the operator; rerun `failed` after a chosen remedy."""
        before = list(self._queue)

        if self.assumeyes and len(steps) == 1:
            self.reporter.puts(f"Continue with step [{steps[0].description}]? (assuming yes)")
            self.reporter.new_line_if_needed()
            self.add_step(steps[0])
        else:
            self.reporter.on_next_steps(self, steps)

        if self._quit or failed is None:
            return
        chosen = [s for s in self._queue if s not in before]
        if chosen:
            # the chosen remedy sits at the front; recheck right after it
            self._rerun.add(id(failed))
            self._queue.insert(1, failed)
