# gitwtlib/resolution.py
import os
import subprocess
from typing import Optional

from gitwtlib.branches import get_default_branch
from gitwtlib.errors import RepositoryNotFoundError
from gitwtlib.git_ops import run_git_simple
from gitwtlib.models import Repository
from gitwtlib.parsing import get_worktree_list


def auto_detect_git_dir(cwd: Optional[str] = None) -> Optional[str]:
    """Return absolute path to the git common dir for cwd, or None if not in a git repo.
    Uses: git rev-parse --git-common-dir
    Works for subdirs, linked worktrees and bare repos.
    """
    run_cwd = cwd or os.getcwd()
    try:
        res = run_git_simple(["rev-parse", "--git-common-dir"], cwd=run_cwd)
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    out = res.stdout.strip()
    if not out:
        return None
    # rev-parse may return relative path (e.g. .git), normalize to absolute
    if not os.path.isabs(out):
        out = os.path.abspath(os.path.join(run_cwd, out))
    if os.path.isdir(out):
        return out
    return None


def resolve_repository(cwd: Optional[str] = None) -> Repository:
    """Resolve the repository for this invocation.

    The root is the main worktree (first entry of `git worktree list`), so
    running from inside a linked worktree still lays out new worktrees
    beside the main checkout. The default branch is looked up once here.
    """
    run_cwd = cwd or os.getcwd()
    git_dir = auto_detect_git_dir(run_cwd)
    if not git_dir:
        raise RepositoryNotFoundError(run_cwd)

    worktrees = get_worktree_list(run_cwd)
    if worktrees:
        main = worktrees[0]
        root, bare = main.path, main.bare
    else:
        root, bare = os.path.dirname(git_dir), False

    return Repository(
        root=root,
        git_dir=git_dir,
        default_branch=get_default_branch(root),
        bare=bare,
    )
