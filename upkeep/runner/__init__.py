"""
Scenario execution subsystem for upkeep.

Modules:
  runner.py    — Runner: step queue, operator-approved control flow,
                 whitelist, assume-yes, exit code.
  decisions.py — operator answer → action tables: filter_decision,
                 parse_selection.
"""
