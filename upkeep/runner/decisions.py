"""
Operator answer → action mapping.

Answers are matched after lower-casing and trimming. The tables are
closed: anything not listed is invalid and the caller prompts again.
Action names are Runner method names, so a decision is dispatched with
getattr(runner, decision)(step).
"""

from __future__ import annotations

import re
from typing import Sequence, TypeVar

T = TypeVar("T")

# ── Actions ───────────────────────────────────────────────────────────────────

ADD_STEP = "add_step"
SKIP_TO_NEXT = "skip_to_next"
ASK_TO_QUIT = "ask_to_quit"

# Sentinel returned by a selection when the operator quits
QUIT = "quit"

DECISION_MAPPER: dict[tuple[str, ...], str] = {
    ("y", "yes"):         ADD_STEP,
    ("n", "next", "no"):  SKIP_TO_NEXT,
    ("q", "quit"):        ASK_TO_QUIT,
}

DECISION_HINT = "[y(yes), n(no), q(quit)]"
SELECTION_HINT = "[n(next), q(quit)]"

_SELECT_NEXT = frozenset(("n", "no", "next"))
_SELECT_QUIT = frozenset(("q", "quit"))
_DIGITS = re.compile(r"^\d+$")


def normalize(answer: str) -> str:
    return answer.strip().lower()


def filter_decision(answer: str) -> str | None:
    """Return the action for an answer, or None when it is not recognised."""
    answer = normalize(answer)
    for options, decision in DECISION_MAPPER.items():
        if answer in options:
            return decision
    return None


def parse_selection(answer: str, choices: Sequence[T]) -> T | str | None:
    """
    Resolve an answer to a numbered-list prompt.

    Returns:
        None for next, QUIT for quit, or the chosen item (1-based index).

    Raises:
        ValueError for anything else, including out-of-range numbers.
    """
    answer = normalize(answer)
    if answer in _SELECT_NEXT:
        return None
    if _DIGITS.match(answer):
        index = int(answer)
        if 1 <= index <= len(choices):
            return choices[index - 1]
        raise ValueError(f"No step numbered {index}")
    if answer in _SELECT_QUIT:
        return QUIT
    raise ValueError(f"Unrecognised answer: {answer!r}")
