# gitwtlib/api.py
from gitwtlib.branches import branch_exists_locally, get_default_branch
from gitwtlib.classifier import classify
from gitwtlib.display import ColorMode
from gitwtlib.guard import check_default_branch, resolve_target
from gitwtlib.parsing import get_worktree_list, parse_worktree_porcelain
from gitwtlib.paths import get_worktree_base, get_worktree_path
from gitwtlib.resolution import auto_detect_git_dir, resolve_repository
from gitwtlib.shells import Shell, render_init_script
from gitwtlib.worktrees import checkout, create_worktree, delete_worktrees

__all__ = [
    # classification
    "classify",
    # repository
    "auto_detect_git_dir",
    "resolve_repository",
    "get_default_branch",
    "branch_exists_locally",
    # paths
    "get_worktree_base",
    "get_worktree_path",
    # parsing
    "parse_worktree_porcelain",
    "get_worktree_list",
    # lifecycle
    "checkout",
    "create_worktree",
    "delete_worktrees",
    "resolve_target",
    "check_default_branch",
    # shell integration
    "Shell",
    "render_init_script",
    # display
    "ColorMode",
]
