"""Systemd service control."""

import shutil

from upkeep.features.base import CommandError, Feature


class Systemd(Feature):
    name = "systemd"

    @classmethod
    def detect(cls):
        if shutil.which("systemctl"):
            return cls()
        return None

    def is_active(self, service: str) -> bool:
        try:
            self.execute(f"systemctl is-active {service}")
        except CommandError:
            return False
        return True

    def restart(self, service: str) -> str:
        return self.execute(f"systemctl restart {service}")
