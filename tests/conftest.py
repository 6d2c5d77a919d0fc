"""
Shared pytest fixtures.
"""
from io import StringIO

import pytest

from upkeep.ui.reporter import CLIReporter


@pytest.fixture
def make_reporter():
    """
    Build reporters writing to a StringIO and reading canned answers.

    The spinner interval is long so background ticks never land in the
    captured output. Every reporter is closed after the test.
    """
    reporters = []

    def _make(answers: str = "", cls=CLIReporter, **kwargs):
        out = StringIO()
        kwargs.setdefault("spinner_interval", 60)
        reporter = cls(stdout=out, stdin=StringIO(answers), **kwargs)
        reporters.append(reporter)
        return reporter, out

    yield _make

    for reporter in reporters:
        reporter.close()


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    """Keep rich from forcing colour into captured StringIO output."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
