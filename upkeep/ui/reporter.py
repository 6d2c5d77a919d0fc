"""
CLIReporter — terminal rendering of scenario and step lifecycle events.

Writes go straight to a text stream so a status label can be appended to
the line that was printed last:

    Check the database is up:                                         [OK]

puts() does not end the line right away. It records that a newline is
owed and the next write emits it first, unless puts_status() claims the
line for a right-aligned label.

Every write, including the spinner thread's redraws, happens under
`self.lock`. Public methods take the lock; the underscore helpers expect
the caller to hold it. Nothing blocks while the lock is held: ask() only
takes it to print the prompt, not while waiting for input.

The reporter also owns operator prompts: ask_decision(), ask_to_select()
and on_next_steps(), which turn answers into Runner actions.
"""

from __future__ import annotations

import sys
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Sequence, TextIO

from rich.console import Console
from rich.text import Text

from upkeep.runner.decisions import (
    DECISION_HINT,
    QUIT,
    SELECTION_HINT,
    filter_decision,
    normalize,
    parse_selection,
)
from upkeep.ui.spinner import Spinner
from upkeep.ui.theme import (
    LINE_CHAR,
    LINE_WIDTH,
    SPINNER_INTERVAL,
    STATUS_LABELS,
    STATUS_STYLES,
)

if TYPE_CHECKING:
    from upkeep.execution import Execution
    from upkeep.runner.runner import Runner
    from upkeep.scenario import Scenario
    from upkeep.steps.base import Step


class TerminalError(Exception):
    """Writing to or reading from the operator's terminal failed."""


class CLIReporter:
    def __init__(
        self,
        stdout: TextIO | None = None,
        stdin: TextIO | None = None,
        max_length: int = LINE_WIDTH,
        spinner_interval: float = SPINNER_INTERVAL,
    ) -> None:
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stdin = stdin if stdin is not None else sys.stdin
        self.max_length = max_length
        self.lock = threading.Lock()

        # Only used to style status labels. Colour is dropped automatically
        # when stdout is not a terminal or NO_COLOR is set.
        self._console = Console(file=self.stdout, highlight=False, soft_wrap=True)

        self._last_line = ""
        self._new_line_next_time = False
        self.spinner = Spinner(self, interval=spinner_interval)

    # ── Context manager ───────────────────────────────────────────────────────

    def __enter__(self) -> CLIReporter:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        """Stop the spinner thread. The reporter must not be used afterwards."""
        self.spinner.stop()

    # ── Writing ───────────────────────────────────────────────────────────────

    def print(self, text: str) -> None:
        """Write text without ending the line."""
        with self.lock:
            self._print(text)

    def puts(self, text: str) -> None:
        """
        Write text and owe a newline.

        The newline is not printed right away so that a status label can
        still be put at the end of this line.
        """
        with self.lock:
            self._print(text)
            self._new_line_next_time = True

    def new_line_if_needed(self) -> None:
        with self.lock:
            self._new_line_if_needed()

    def clear_line(self) -> None:
        with self.lock:
            self._clear_line()

    def redraw_current_line(self, text: str) -> None:
        """Erase the current line and write text on it. Caller holds `lock`."""
        self._clear_line()
        self._print(text)

    def hline(self) -> None:
        self.puts(LINE_CHAR * self.max_length)

    def puts_status(self, status: str) -> None:
        """
        Right-align a status label so it ends at column `max_length`.

        The label goes at the end of the last printed line when it fits
        there, otherwise on a fresh line.

        Raises:
            KeyError for a status outside STATUS_LABELS.
        """
        label = STATUS_LABELS[status]
        with self.lock:
            padding = self.max_length - len(self._last_line) - len(label)
            if padding < 1:
                self._write("\n")
                self._last_line = ""
                padding = self.max_length - len(label)
            self._write(" " * padding)
            try:
                self._console.print(Text(label, style=STATUS_STYLES[status]), end="")
                self.stdout.flush()
            except (OSError, ValueError) as e:
                raise TerminalError(str(e)) from e
            self._last_line = f"{self._last_line}{' ' * padding}{label}"
            self._new_line_next_time = True

    # ── Input ─────────────────────────────────────────────────────────────────

    def ask(self, message: str) -> str:
        """
        Print a prompt and block for one line of operator input.

        Returns the answer lower-cased and trimmed.

        Raises:
            EOFError when the input stream is closed.
            TerminalError when reading fails.
        """
        with self.lock:
            self._print(message)
            # ENTER ends the line for us
            self._new_line_next_time = False
            self._last_line = ""

        try:
            answer = self.stdin.readline()
        except (OSError, ValueError) as e:
            raise TerminalError(str(e)) from e
        if not answer:
            raise EOFError("Operator input stream closed")
        return normalize(answer)

    # ── Spinner ───────────────────────────────────────────────────────────────

    @contextmanager
    def with_spinner(self, message: str) -> Iterator[Spinner]:
        """Run the body with the spinner showing `message`; always turned off on exit."""
        try:
            self.new_line_if_needed()
            self.spinner.activate()
            self.spinner.update(message)
            yield self.spinner
        finally:
            self.spinner.deactivate()
            with self.lock:
                self._new_line_next_time = True

    # ── Lifecycle hooks ───────────────────────────────────────────────────────

    def before_scenario_starts(self, scenario: Scenario) -> None:
        self.puts(f"Running {scenario.description or scenario.label}")
        self.hline()

    def before_execution_starts(self, execution: Execution) -> None:
        self.puts(self.execution_info(execution, ""))

    def after_execution_finishes(self, execution: Execution) -> None:
        self.puts_status(execution.status)
        if execution.output:
            self.puts(execution.output)
        self.hline()
        self.new_line_if_needed()

    def after_scenario_finishes(
        self,
        scenario: Scenario,
        executions: Sequence[Execution] = (),
    ) -> None:
        failed = [e for e in executions if e.failed]
        skipped = [e for e in executions if e.skipped]
        if not failed and not skipped:
            return

        self.puts(f"Scenario [{scenario.description or scenario.label}] finished with issues:")
        for title, group in (("Failed", failed), ("Skipped", skipped)):
            if group:
                self.puts(f"  {title}:")
                for execution in group:
                    self.puts(f"    [{execution.step.label}] {execution.name}")
        self.new_line_if_needed()

    def execution_info(self, execution: Execution, text: str) -> str:
        return f"{execution.name}: {text}"

    # ── Decisions ─────────────────────────────────────────────────────────────

    def on_next_steps(self, runner: Runner, steps: Sequence[Step]) -> None:
        """Ask the operator what to do about the offered steps and tell the runner."""
        if not steps:
            return

        if len(steps) > 1:
            choice = self.multiple_steps_selection(steps)
            if choice is None or choice == QUIT:
                runner.ask_to_quit()
            else:
                runner.add_step(choice)
            return

        step = steps[0]
        decision = self.ask_decision(f"Continue with step [{step.description}]?")
        getattr(runner, decision)(step)

    def multiple_steps_selection(self, steps: Sequence[Step]) -> Step | str | None:
        self.puts("There are multiple steps to proceed:")
        for index, step in enumerate(steps, 1):
            self.puts(f"{index}) {step.description}")
        return self.ask_to_select("Select step to continue", steps)

    def ask_decision(self, message: str) -> str:
        """Prompt until the answer maps to an action; return the action name."""
        try:
            while True:
                decision = filter_decision(self.ask(f"{message}, {DECISION_HINT}"))
                if decision is not None:
                    return decision
        finally:
            self.clear_line()

    def ask_to_select(self, message: str, steps: Sequence[Step]) -> Step | str | None:
        """
        Prompt for a 1-based step number.

        Returns the chosen step, QUIT, or None for next. Unknown answers
        and numbers outside the list prompt again.
        """
        try:
            while True:
                answer = self.ask(f"{message}, {SELECTION_HINT}")
                try:
                    return parse_selection(answer, steps)
                except ValueError:
                    continue
        finally:
            self.clear_line()

    # ── Internal (caller holds the lock) ──────────────────────────────────────

    def _print(self, text: str) -> None:
        self._new_line_if_needed()
        self._write(text)
        self._record_last_line(text)

    def _clear_line(self) -> None:
        self._print("\r" + " " * self.max_length + "\r")

    def _new_line_if_needed(self) -> None:
        if self._new_line_next_time:
            self._write("\n")
            self._new_line_next_time = False
            self._last_line = ""

    def _write(self, text: str) -> None:
        try:
            self.stdout.write(text)
            self.stdout.flush()
        except (OSError, ValueError) as e:
            raise TerminalError(str(e)) from e

    def _record_last_line(self, text: str) -> None:
        if "\n" in text:
            self._last_line = ""
            text = text.rsplit("\n", 1)[1]
        if "\r" in text:
            self._last_line = ""
            text = text.rsplit("\r", 1)[1]
        self._last_line += text

