#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.10"
# dependencies = [
#   "tomli>=2.0.0; python_version < '3.11'",
#   "tomli-w>=1.0.0",
# ]
# ///

# Thin compatibility shim: delegates to gitwtlib and re-exports public API

# Explicit re-exports required by tests (import git_wt; git_wt.func())
from gitwtlib.api import (
    ColorMode,
    Shell,
    auto_detect_git_dir,
    branch_exists_locally,
    check_default_branch,
    checkout,
    classify,
    create_worktree,
    delete_worktrees,
    get_default_branch,
    get_worktree_base,
    get_worktree_list,
    get_worktree_path,
    parse_worktree_porcelain,
    render_init_script,
    resolve_repository,
    resolve_target,
)
from gitwtlib.cli import main  # CLI entrypoint

__all__ = [
    "main",
    # Public API used by tests
    "classify",
    "auto_detect_git_dir",
    "resolve_repository",
    "get_default_branch",
    "branch_exists_locally",
    "get_worktree_base",
    "get_worktree_path",
    "parse_worktree_porcelain",
    "get_worktree_list",
    "checkout",
    "create_worktree",
    "delete_worktrees",
    "resolve_target",
    "check_default_branch",
    "Shell",
    "render_init_script",
    "ColorMode",
]

if __name__ == "__main__":
    main()
