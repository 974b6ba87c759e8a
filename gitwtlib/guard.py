# gitwtlib/guard.py
"""Pre-flight checks for delete batches.

Resolution and the default-branch check are read-only and run over the whole
batch before the executor removes anything, so a protected branch anywhere in
the list blocks every deletion.
"""
from gitwtlib.branches import branch_exists_locally
from gitwtlib.errors import DefaultBranchProtectedError
from gitwtlib.models import BranchTarget
from gitwtlib.parsing import find_worktree_by_branch, find_worktree_by_path


def resolve_target(repo, worktrees, target, cwd=None):
    """Turn a delete argument into a BranchTarget.

    Branch names win over paths, as they do for git itself: the argument is
    a branch when some worktree has it checked out or a local branch of
    that name exists. Otherwise it is tried as a worktree path, and the
    branch checked out there is used. Unknown arguments pass through as
    branch names and fail later in the executor.
    """
    wt = find_worktree_by_branch(worktrees, target)
    if wt is None and not branch_exists_locally(target, repo.root):
        wt = find_worktree_by_path(worktrees, target, cwd=cwd)
        if wt is not None:
            # detached worktrees have no branch to delete
            return BranchTarget.for_branch(
                repo, target, wt.branch or "", path=_removable(wt)
            )
    return BranchTarget.for_branch(
        repo, target, target, path=_removable(wt) if wt is not None else None
    )


def _removable(wt):
    # the main worktree is never removed, only its branch is considered
    return None if wt.is_main else wt.path


def check_default_branch(targets, allow_default):
    """Reject the batch if it names the default branch without the override."""
    if allow_default:
        return targets
    for target in targets:
        if target.is_default:
            raise DefaultBranchProtectedError(target.name)
    return targets
