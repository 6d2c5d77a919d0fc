"""
Procedures — steps that change the system.

They carry no tags, so scenarios never pick them up directly. They are
offered to the operator as next_steps of a failed check.
"""

from upkeep.steps.base import Step


class ServiceRestartPostgresql(Step):
    label = "service-restart-postgresql"
    description = "Restart the postgresql service"
    requires_features = ("systemd",)

    def run(self, execution):
        with execution.with_spinner("Restarting postgresql"):
            self.feature("systemd").restart("postgresql")


class ForemanTasksResume(Step):
    label = "foreman-tasks-resume"
    description = "Resume paused tasks"
    requires_features = ("foreman_database",)

    command = "foreman-rake foreman_tasks:resume"

    def run(self, execution):
        with execution.with_spinner("Resuming paused tasks"):
            output = self.feature("foreman_database").execute(self.command)
        execution.add_output(output)


class ForemanTasksDeletePaused(Step):
    label = "foreman-tasks-delete-paused"
    description = "Delete paused tasks"
    requires_features = ("foreman_database",)

    def run(self, execution):
        db = self.feature("foreman_database")
        with execution.with_spinner("Deleting paused tasks") as spinner:
            count = len(db.query(PAUSED_TASKS_SQL))
            spinner.update(f"Deleting {count} paused tasks")
            db.psql(f"DELETE FROM foreman_tasks_tasks WHERE id IN ({PAUSED_TASK_IDS_SQL});")
        execution.add_output(f"Deleted {count} paused tasks")


PAUSED_TASK_IDS_SQL = (
    "SELECT id FROM foreman_tasks_tasks WHERE state = 'paused'"
)
PAUSED_TASKS_SQL = (
    "SELECT id, label, started_at FROM foreman_tasks_tasks "
    "WHERE state = 'paused' ORDER BY started_at"
)


ALL_PROCEDURES = [
    ServiceRestartPostgresql,
    ForemanTasksResume,
    ForemanTasksDeletePaused,
]
