"""
Tests for runner/decisions.py.

Covers:
  - filter_decision: closed answer table, case and whitespace handling
  - parse_selection: next / number / quit priority, out-of-range numbers
"""

import pytest

from upkeep.runner.decisions import (
    ADD_STEP,
    ASK_TO_QUIT,
    DECISION_MAPPER,
    QUIT,
    SKIP_TO_NEXT,
    filter_decision,
    parse_selection,
)


# ── filter_decision ───────────────────────────────────────────────────────────

class TestFilterDecision:
    @pytest.mark.parametrize(
        "answer, expected",
        [
            ("y", ADD_STEP),
            ("yes", ADD_STEP),
            ("n", SKIP_TO_NEXT),
            ("no", SKIP_TO_NEXT),
            ("next", SKIP_TO_NEXT),
            ("q", ASK_TO_QUIT),
            ("quit", ASK_TO_QUIT),
        ],
    )
    def test_known_answers(self, answer, expected):
        assert filter_decision(answer) == expected

    @pytest.mark.parametrize("answer", ["Y", " YES ", "No\n", "\tQuit"])
    def test_case_and_whitespace_are_ignored(self, answer):
        assert filter_decision(answer) is not None

    @pytest.mark.parametrize("answer", ["", "maybe", "yess", "1", "n o"])
    def test_unknown_answers_return_none(self, answer):
        assert filter_decision(answer) is None

    def test_every_action_is_a_runner_method_name(self):
        assert set(DECISION_MAPPER.values()) == {"add_step", "skip_to_next", "ask_to_quit"}

    def test_no_answer_maps_to_two_actions(self):
        seen = [option for options in DECISION_MAPPER for option in options]
        assert len(seen) == len(set(seen))


# ── parse_selection ───────────────────────────────────────────────────────────

class TestParseSelection:
    choices = ["first", "second", "third"]

    @pytest.mark.parametrize("index", [1, 2, 3])
    def test_number_selects_one_based(self, index):
        assert parse_selection(str(index), self.choices) == self.choices[index - 1]

    @pytest.mark.parametrize("answer", ["n", "no", "next", " NEXT "])
    def test_next_returns_none(self, answer):
        assert parse_selection(answer, self.choices) is None

    @pytest.mark.parametrize("answer", ["q", "quit", "Q"])
    def test_quit_returns_sentinel(self, answer):
        assert parse_selection(answer, self.choices) == QUIT

    def test_quit_regardless_of_list_size(self):
        assert parse_selection("q", []) == QUIT
        assert parse_selection("q", list(range(50))) == QUIT

    @pytest.mark.parametrize("answer", ["0", "4", "99"])
    def test_out_of_range_number_is_invalid(self, answer):
        with pytest.raises(ValueError):
            parse_selection(answer, self.choices)

    @pytest.mark.parametrize("answer", ["", "-1", "1.5", "two", "y"])
    def test_unknown_answer_is_invalid(self, answer):
        with pytest.raises(ValueError):
            parse_selection(answer, self.choices)
