"""Shared visual constants and helpers for grpr output."""

from __future__ import annotations

from rich.text import Text

# ── Color Palette (GitHub Dark + Neon Accents) ──────────────────────────

MUTED = "#8b949e"
CYAN = "#58a6ff"
GREEN = "#39d353"
YELLOW = "#e3b341"
RED = "#f85149"

ICON_REPO = "📦"
ICON_FAIL = "✗"
ICON_DONE = "✓"


def repo_line(path: str) -> Text:
    """Announcement line printed before a repository's git output."""
    t = Text()
    t.append(f"{ICON_REPO} ", style=MUTED)
    t.append("Processing Git repository: ", style=MUTED)
    t.append(path, style=f"bold {CYAN}")
    return t


def failure_line(message: str) -> Text:
    t = Text()
    t.append(f"{ICON_FAIL} ", style=f"bold {RED}")
    t.append(message, style=RED)
    return t


def summary_line(total: int, failed: int) -> Text:
    """One-line tally: green when everything passed, red otherwise."""
    t = Text()
    if failed:
        t.append(f"{ICON_FAIL} ", style=f"bold {RED}")
    else:
        t.append(f"{ICON_DONE} ", style=f"bold {GREEN}")
    noun = "repository" if total == 1 else "repositories"
    t.append(f"{total}", style=f"bold {CYAN}")
    t.append(f" {noun}, ", style=MUTED)
    t.append(f"{failed}", style=f"bold {RED if failed else GREEN}")
    t.append(" failed", style=MUTED)
    return t
