# gitwtlib/display.py
import os
import shutil
import sys

from gitwtlib.parsing import get_worktree_list
from gitwtlib.paths import is_path_current_worktree, rel_display_path


class ColorMode:
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def color_enabled(color_mode, stream=None):
    """Decide color enablement (stream TTY + NO_COLOR)."""
    if color_mode == ColorMode.ALWAYS:
        return True
    if color_mode == ColorMode.NEVER:
        return False
    stream = stream or sys.stderr
    return stream.isatty() and (os.environ.get("NO_COLOR") is None)


def worktree_status(wt):
    if wt.bare:
        return "bare"
    flags = []
    if wt.locked:
        flags.append("locked")
    if wt.prunable:
        flags.append("prunable")
    if wt.detached:
        flags.append("detached")
    return ",".join(flags)


def format_worktree_rows(entries, repo, color_mode=ColorMode.AUTO, force_absolute=False):
    """
    entries: list of Worktree records from parse_worktree_porcelain
    Returns list[str] lines (without newline), formatted for pretty output.

    Column design:
    [markers:2] [branch:var]  [head:10]  [path:var]  [status]
    """
    enable_color = color_enabled(color_mode)

    # ANSI codes
    BOLD = "\033[1m" if enable_color else ""
    DIM = "\033[2m" if enable_color else ""
    YELLOW = "\033[33m" if enable_color else ""
    MAGENTA = "\033[35m" if enable_color else ""
    RESET = "\033[0m" if enable_color else ""

    # Sorting: main first, others by branch (case-insensitive)
    entries_sorted = sorted(
        entries, key=lambda e: (0 if e.is_main else 1, (e.branch or "").lower())
    )

    term_width = shutil.get_terminal_size(fallback=(80, 24)).columns
    head_width = 10
    sep = "  "
    branch_names = [e.branch or "(detached)" for e in entries_sorted]
    branch_width = min(max([len(b) for b in branch_names] + [6]), 40)

    def trunc(s, w):
        if len(s) <= w:
            return s.ljust(w)
        if w <= 1:
            return s[:w]
        return s[: max(0, w - 1)] + "…"

    lines = []
    for e, branch in zip(entries_sorted, branch_names):
        current = is_path_current_worktree(e.path)
        markers = ("*" if current else " ") + ("M" if e.is_main else " ")

        status = worktree_status(e)
        path = rel_display_path(e.path, repo, force_absolute)
        fixed = len(markers) + len(sep) + branch_width + len(sep) + head_width + len(sep)
        path_width = max(term_width - fixed - len(sep) - len(status), 10)

        # Truncate BEFORE applying colors
        branch_cell = trunc(branch, branch_width)
        head_cell = e.head.ljust(head_width)[:head_width]
        path_cell = trunc(path, path_width) if status else path

        if enable_color:
            if current:
                branch_cell = f"{BOLD}{branch_cell}{RESET}"
            path_cell = f"{DIM}{path_cell}{RESET}"
            if e.locked:
                status = f"{YELLOW}{status}{RESET}"
            elif e.prunable:
                status = f"{MAGENTA}{status}{RESET}"

        line = f"{markers}{sep}{branch_cell}{sep}{head_cell}{sep}{path_cell}"
        if status:
            line += f"{sep}{status}"
        lines.append(line.rstrip())

    return lines


def list_worktrees(repo):
    """Print the worktree table to stderr; stdout stays empty."""
    entries = get_worktree_list(repo.root, include_main=True)
    if not entries:
        print("No worktrees found", file=sys.stderr)
        return entries
    for ln in format_worktree_rows(entries, repo):
        print(ln, file=sys.stderr)
    return entries
