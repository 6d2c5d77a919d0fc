"""Named scenarios. Each picks its steps by tag."""

from upkeep.scenario import Scenario

# label → (description, tag filter)
SCENARIO_DEFINITIONS: dict[str, tuple[str, tuple[str, ...]]] = {
    "health-check":      ("Health check", ("default",)),
    "pre-upgrade-check": ("Checks before upgrading", ("pre_upgrade_checks",)),
}


def build_scenario(label: str) -> Scenario:
    """Return a fresh, uncomposed scenario. Raises KeyError for unknown labels."""
    description, tags = SCENARIO_DEFINITIONS[label]
    return Scenario(label, description, tags=tags)
