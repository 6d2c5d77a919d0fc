"""
MenuReporter — arrow-key prompts instead of typed answers.

Same decisions as CLIReporter, presented with simple_term_menu. Escape
or Ctrl-C in the menu counts as quit.
"""

from __future__ import annotations

from typing import Sequence

from simple_term_menu import TerminalMenu

from upkeep.runner.decisions import ADD_STEP, ASK_TO_QUIT, QUIT, SKIP_TO_NEXT
from upkeep.steps.base import Step
from upkeep.ui.reporter import CLIReporter


_DECISION_ENTRIES = (
    ("Yes, run it", ADD_STEP),
    ("No, skip", SKIP_TO_NEXT),
    ("Quit", ASK_TO_QUIT),
)


def _menu(entries: list[str]) -> TerminalMenu:
    return TerminalMenu(
        entries,
        menu_cursor="› ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan", "bold"),
        cursor_index=0,
    )


class MenuReporter(CLIReporter):
    def ask_decision(self, message: str) -> str:
        self.puts(message)
        self.new_line_if_needed()
        choice = _menu([label for label, _ in _DECISION_ENTRIES]).show()
        if choice is None:
            return ASK_TO_QUIT
        return _DECISION_ENTRIES[choice][1]

    def multiple_steps_selection(self, steps: Sequence[Step]) -> Step | str | None:
        self.puts("There are multiple steps to proceed:")
        self.new_line_if_needed()
        return self.ask_to_select("Select step to continue", steps)

    def ask_to_select(self, message: str, steps: Sequence[Step]) -> Step | str | None:
        self.puts(message)
        self.new_line_if_needed()
        entries = [f"{i}) {step.description}" for i, step in enumerate(steps, 1)]
        entries += ["Next", "Quit"]
        choice = _menu(entries).show()
        if choice is None or choice == len(steps) + 1:
            return QUIT
        if choice == len(steps):
            return None
        return steps[choice]
