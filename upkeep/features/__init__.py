"""
Host capability detection.

Modules:
  base.py     — Feature base class, FeatureRegistry (cache-until-refresh),
                run_command() and CommandError.
  database.py — ForemanDatabase: psql access to the foreman database.
  systemd.py  — Systemd: service state and restarts.
"""
