"""
Upkeep visual design system.

Status labels, colors and line geometry as named constants.
Import from here — never hardcode markup strings in other modules.
"""

from rich.style import Style


# ── Line geometry ─────────────────────────────────────────────────────────────

LINE_WIDTH = 80         # fixed display width the reporter aligns against
LINE_CHAR = "-"         # horizontal rule


# ── Status labels ─────────────────────────────────────────────────────────────
# Closed set. A status missing from this table is a programming error.

STATUS_LABELS: dict[str, str] = {
    "success": "[OK]",
    "fail":    "[FAIL]",
    "running": "[RUNNING]",
    "skipped": "[SKIPPED]",
}

STATUS_STYLES: dict[str, Style] = {
    "success": Style(color="green",  bold=True),
    "fail":    Style(color="red",    bold=True),
    "running": Style(color="blue",   bold=True),
    "skipped": Style(color="yellow", bold=True),
}


# ── Spinner ───────────────────────────────────────────────────────────────────

SPINNER_GLYPHS: tuple[str, ...] = ("|", "/", "-", "\\")
SPINNER_INTERVAL = 0.1
