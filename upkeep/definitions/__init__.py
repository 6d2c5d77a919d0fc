"""
Definitions shipped with upkeep.

ALL_FEATURES  — feature classes the registry detects
ALL_STEPS     — every check and procedure, in scenario order
SCENARIO_DEFINITIONS — named scenarios, built with build_scenario()
"""

from upkeep.definitions.checks import ALL_CHECKS
from upkeep.definitions.procedures import ALL_PROCEDURES
from upkeep.definitions.scenarios import SCENARIO_DEFINITIONS, build_scenario
from upkeep.features.database import ForemanDatabase
from upkeep.features.systemd import Systemd

ALL_FEATURES = [ForemanDatabase, Systemd]

ALL_STEPS = ALL_CHECKS + ALL_PROCEDURES
