# gitwtlib/parsing.py
import os

from gitwtlib.git_ops import run_git_quiet
from gitwtlib.models import Worktree


def parse_worktree_porcelain(output):
    """
    Parse `git worktree list --porcelain` output into Worktree records.

    Blocks are separated by blank lines and start with `worktree <path>`.
    The first block is always the main worktree (or the bare repository).
    Recognised keys: HEAD, branch, detached, bare, locked, prunable; any
    other key is ignored so newer git versions keep parsing.
    """
    entries = []
    block = {}

    def push_block():
        if "path" not in block:
            return
        head = block.get("head", "")
        entries.append(
            Worktree(
                path=block["path"],
                head=head[:10],
                branch=block.get("branch"),
                is_main=not entries,
                bare=block.get("bare", False),
                locked=block.get("locked", False),
                prunable=block.get("prunable", False),
            )
        )

    for ln in output.splitlines():
        if not ln.strip():
            continue
        key, _, value = ln.partition(" ")
        if key == "worktree":
            push_block()
            block = {"path": value.strip()}
        elif key == "HEAD":
            block["head"] = value.strip()
        elif key == "branch":
            ref = value.strip()
            if ref.startswith("refs/heads/"):
                ref = ref[len("refs/heads/") :]
            block["branch"] = ref
        elif key == "bare":
            block["bare"] = True
        elif key == "locked":
            block["locked"] = True
        elif key == "prunable":
            block["prunable"] = True
        # ignore other keys

    push_block()
    return entries


def get_worktree_list(repo_dir, include_main=True):
    """All worktrees git knows about for the repository at `repo_dir`."""
    res = run_git_quiet(["worktree", "list", "--porcelain"], repo_dir)
    entries = parse_worktree_porcelain(res.stdout)
    if not include_main:
        entries = [e for e in entries if not e.is_main]
    return entries


def find_worktree_by_branch(worktrees, branch_name):
    for wt in worktrees:
        if wt.branch == branch_name:
            return wt
    return None


def find_worktree_by_path(worktrees, path, cwd=None):
    """Match `path` (absolute or relative to cwd) against worktree paths."""
    base = cwd or os.getcwd()
    wanted = os.path.realpath(os.path.join(base, path))
    for wt in worktrees:
        if os.path.realpath(wt.path) == wanted:
            return wt
    return None
