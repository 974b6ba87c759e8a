# gitwtlib/paths.py
import os
from typing import Optional

from gitwtlib.config import DEFAULT_BASEDIR


def get_worktree_base(repo, basedir: Optional[str] = None) -> str:
    """Absolute base directory under which branch worktrees are created.

    `basedir` may contain `{gitroot}` (the repository directory's name) and
    `~`; relative values are taken from the repository root.
    """
    template = basedir or DEFAULT_BASEDIR
    expanded = os.path.expanduser(template.replace("{gitroot}", repo.name))
    if not os.path.isabs(expanded):
        expanded = os.path.join(repo.root, expanded)
    return os.path.normpath(expanded)


def get_worktree_path(repo, branch_name: str, basedir: Optional[str] = None) -> str:
    """Where the worktree for `branch_name` lives; `feat/x` nests as feat/x."""
    return os.path.join(get_worktree_base(repo, basedir), *branch_name.split("/"))


def is_path_current_worktree(path: str) -> bool:
    """Check if the current directory is inside the given worktree path."""
    try:
        cur = os.path.realpath(os.getcwd())
    except OSError:
        return False
    p = os.path.realpath(path)
    return cur == p or cur.startswith(p + os.sep)


def rel_display_path(path: str, repo, force_absolute: bool) -> str:
    """Return path for display: relative to the base's parent when inside it."""
    if force_absolute:
        return os.path.abspath(path)
    root_parent = os.path.dirname(os.path.abspath(repo.root))
    abs_path = os.path.abspath(path)
    if abs_path == os.path.abspath(repo.root):
        return abs_path
    if abs_path.startswith(root_parent + os.sep):
        return os.path.relpath(abs_path, root_parent)
    return abs_path
