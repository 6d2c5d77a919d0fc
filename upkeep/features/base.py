"""
Feature model and registry.

Feature          — a detected host capability. detect() returns an
                   instance when the capability is present, None otherwise.
FeatureRegistry  — runs detection on demand and caches the outcome until
                   refresh() is called. One registry per runner; there is
                   no process-wide feature state.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Iterable

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command exited non-zero or could not be started."""

    def __init__(self, command: str, returncode: int, output: str) -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"Command '{command}' failed with exit code {returncode}: {output.strip()}"
        )


def run_command(
    command: str,
    stdin: str | None = None,
    timeout: int | None = None,
) -> str:
    """
    Run a shell command and return its stripped stdout.

    Args:
        command: Shell command line. Always built by definitions, never
                 from operator input.
        stdin:   Text fed to the command's standard input.
        timeout: Seconds to wait; None waits forever.

    Raises:
        CommandError on a non-zero exit, timeout or missing shell.
    """
    # C locale keeps command output parseable regardless of host language
    env = {**os.environ, "LANG": "C", "LC_ALL": "C"}
    logger.debug("Running command: %s", command)
    try:
        result = subprocess.run(
            command,
            shell=True,
            input=stdin,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
            env=env,
        )
    except subprocess.TimeoutExpired:
        raise CommandError(command, -1, f"timed out after {timeout}s") from None
    except OSError as e:
        raise CommandError(command, -1, str(e)) from e

    if result.returncode != 0:
        raise CommandError(command, result.returncode, result.stderr or result.stdout)
    return result.stdout.strip()


class Feature:
    """
    Base class for host capabilities.

    Subclasses set `name` and override detect(). Instances are disposable:
    the registry throws them away on refresh() and detects again.
    """

    name: str = "base_feature"

    @classmethod
    def detect(cls) -> Feature | None:
        """Return an instance when the capability is present on this host."""
        return None

    def execute(self, command: str, stdin: str | None = None) -> str:
        return run_command(command, stdin=stdin)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class FeatureRegistry:
    """On-demand feature detection with an explicit invalidation point."""

    _MISSING = object()

    def __init__(self, feature_classes: Iterable[type[Feature]]) -> None:
        self._classes: dict[str, type[Feature]] = {}
        for cls in feature_classes:
            if cls.name in self._classes:
                raise ValueError(f"Duplicate feature name: {cls.name}")
            self._classes[cls.name] = cls
        self._cache: dict[str, Feature | None] = {}

    @property
    def names(self) -> list[str]:
        return list(self._classes)

    def feature(self, name: str) -> Feature | None:
        """Return the detected instance for `name`, or None when absent."""
        cached = self._cache.get(name, self._MISSING)
        if cached is not self._MISSING:
            return cached

        cls = self._classes.get(name)
        if cls is None:
            raise KeyError(f"Unknown feature: {name}")

        instance = cls.detect()
        logger.debug("Detected feature %s: %s", name, "present" if instance else "absent")
        self._cache[name] = instance
        return instance

    def present(self, name: str) -> bool:
        return self.feature(name) is not None

    def available(self) -> list[str]:
        """Names of all features present on this host, in registration order."""
        return [name for name in self._classes if self.present(name)]

    def refresh(self) -> None:
        """Drop every cached detection; the next lookup detects again."""
        logger.info("Refreshing feature detection")
        self._cache.clear()
