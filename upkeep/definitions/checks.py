"""
Checks — read-only steps that verify the system state.

A failing check raises StepFailure with a one-line explanation and may
offer procedures that fix the problem.
"""

import shutil

from upkeep.definitions.procedures import (
    PAUSED_TASKS_SQL,
    ForemanTasksDeletePaused,
    ForemanTasksResume,
    ServiceRestartPostgresql,
)
from upkeep.steps.base import Step


class ForemanDatabaseUp(Step):
    label = "foreman-database-up"
    description = "Check the foreman database is reachable"
    tags = ("default", "pre_upgrade_checks")
    requires_features = ("foreman_database",)
    next_steps = (ServiceRestartPostgresql,)

    def run(self, execution):
        with execution.with_spinner("Connecting to the foreman database"):
            reachable = self.feature("foreman_database").ping()
        if not reachable:
            self.fail("The foreman database is not responding")


class ForemanTasksPaused(Step):
    label = "foreman-tasks-paused"
    description = "Check for paused tasks"
    tags = ("default", "pre_upgrade_checks")
    requires_features = ("foreman_database",)
    next_steps = (ForemanTasksResume, ForemanTasksDeletePaused)

    def run(self, execution):
        with execution.with_spinner("Looking for paused tasks"):
            paused = self.feature("foreman_database").query(PAUSED_TASKS_SQL)
        if paused:
            self.fail(f"There are {len(paused)} paused tasks in the system")


class DiskFreeSpace(Step):
    label = "disk-free-space"
    description = "Check free disk space"
    tags = ("default", "pre_upgrade_checks")

    path = "/var"
    min_free_bytes = 5 * 1024 ** 3  # 5 GiB

    def run(self, execution):
        with execution.with_spinner(f"Measuring free space on {self.path}"):
            usage = shutil.disk_usage(self.path)
        free_gib = usage.free / 1024 ** 3
        if usage.free < self.min_free_bytes:
            self.fail(
                f"Only {free_gib:.1f} GiB free on {self.path}, "
                f"at least {self.min_free_bytes / 1024 ** 3:.0f} GiB required"
            )


ALL_CHECKS = [
    ForemanDatabaseUp,
    ForemanTasksPaused,
    DiskFreeSpace,
]
