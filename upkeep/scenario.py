"""
Scenario — an ordered, tag-filtered composition of applicable steps.

Composition is a pure function of the step catalog, the tag filter and
the registry's detected features: same inputs, same ordered list. After
FeatureRegistry.refresh() a new compose() call sees the new host state.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from upkeep.features.base import FeatureRegistry
from upkeep.steps.base import Step

logger = logging.getLogger(__name__)


class Scenario:
    def __init__(
        self,
        label: str,
        description: str,
        tags: Iterable[str],
    ) -> None:
        self.label = label
        self.description = description
        self.tags = tuple(tags)
        self.steps: list[Step] = []

    def select(
        self,
        catalog: Sequence[type[Step]],
        registry: FeatureRegistry,
    ) -> list[type[Step]]:
        """Step classes matching the tag filter and applicable on this host, in catalog order."""
        selected: list[type[Step]] = []
        for cls in catalog:
            if cls in selected or not cls.tags:
                continue
            if not cls.matches_tags(self.tags):
                continue
            if not cls.is_applicable(registry):
                logger.debug("Excluding %s: not applicable", cls.label)
                continue
            selected.append(cls)
        return selected

    def compose(
        self,
        catalog: Sequence[type[Step]],
        registry: FeatureRegistry,
    ) -> list[Step]:
        """Instantiate the selected steps and keep them as `steps`."""
        self.steps = [cls(registry) for cls in self.select(catalog, registry)]
        logger.info(
            "Composed scenario %s: %s",
            self.label,
            ", ".join(step.label for step in self.steps) or "no steps",
        )
        return self.steps

    def __repr__(self) -> str:
        return f"<Scenario {self.label} tags={list(self.tags)}>"
