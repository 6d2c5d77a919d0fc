"""
Core data model for upkeep steps.

Step        — abstract base class every check and procedure inherits from.
StepFailure — raised inside Step.run() to end the execution as failed.

A step is applicable when every feature it requires is present and its
applicable() hook agrees. Inapplicable steps are left out of scenarios
rather than reported as failed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable

from upkeep.features.base import Feature, FeatureRegistry

if TYPE_CHECKING:
    from upkeep.execution import Execution


class StepFailure(Exception):
    """The step ran and found a problem. Not a crash."""


class Step(ABC):
    """
    Abstract base class for all upkeep steps.

    Subclasses must:
      1. Set class attributes (label, description, tags, …)
      2. Override run() and report problems by raising StepFailure

    run() is only called for applicable steps. Anything it raises is
    captured by the Execution and turned into a `fail` outcome.
    """

    label: str = "base-step"
    description: str = "Base step"

    # Scenarios pick steps whose tags contain every requested tag.
    # Procedures usually carry no tags: they are only reached as next_steps.
    tags: tuple[str, ...] = ()

    requires_features: tuple[str, ...] = ()

    # Remediation offered to the operator when this step fails
    next_steps: tuple[type[Step], ...] = ()

    def __init__(self, registry: FeatureRegistry) -> None:
        self.registry = registry

    # ── Applicability ─────────────────────────────────────────────────────────

    @classmethod
    def is_applicable(cls, registry: FeatureRegistry) -> bool:
        if not all(registry.present(name) for name in cls.requires_features):
            return False
        return cls.applicable(registry)

    @classmethod
    def applicable(cls, registry: FeatureRegistry) -> bool:
        """Extra applicability hook; runs after the feature gate passed."""
        return True

    @classmethod
    def matches_tags(cls, tags: Iterable[str]) -> bool:
        return set(tags) <= set(cls.tags)

    # ── Public API ────────────────────────────────────────────────────────────

    @abstractmethod
    def run(self, execution: Execution) -> None:
        """
        Do the work.

        Raise StepFailure to report a problem; call execution.skip() to
        give up without failing. Returning normally means success.
        """

    def offered_steps(self) -> list[Step]:
        """Instantiated next_steps that are applicable on this host."""
        return [
            cls(self.registry)
            for cls in self.next_steps
            if cls.is_applicable(self.registry)
        ]

    # ── Helper methods ────────────────────────────────────────────────────────

    def feature(self, name: str) -> Feature:
        instance = self.registry.feature(name)
        if instance is None:
            raise StepFailure(f"Feature {name} is not available")
        return instance

    def fail(self, message: str) -> None:
        raise StepFailure(message)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label}>"
