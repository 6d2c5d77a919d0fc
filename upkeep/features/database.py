"""
Foreman database access.

Queries are run through psql as the postgres user and returned as CSV,
which is parsed into a list of row dicts.
"""

import csv
import io
from pathlib import Path

from upkeep.features.base import CommandError, Feature


class ForemanDatabase(Feature):
    name = "foreman_database"

    config_path = Path("/etc/foreman/database.yml")
    psql_command = "su - postgres -c 'psql -d foreman'"

    @classmethod
    def detect(cls):
        if cls.config_path.exists():
            return cls()
        return None

    def query(self, sql: str) -> list[dict[str, str]]:
        """Run a SELECT and return its rows keyed by column name."""
        return parse_csv(self.psql(f"COPY ({sql}) TO STDOUT WITH CSV HEADER"))

    def psql(self, query: str) -> str:
        return self.execute(self.psql_command, stdin=query)

    def ping(self) -> bool:
        """True when the database answers a trivial query."""
        try:
            self.psql("SELECT 1 as ping")
        except CommandError:
            return False
        return True


def parse_csv(data: str) -> list[dict[str, str]]:
    """Parse CSV text with a header row into row dicts."""
    if not data.strip():
        return []
    return list(csv.DictReader(io.StringIO(data)))
