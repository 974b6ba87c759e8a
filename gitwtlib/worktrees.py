# gitwtlib/worktrees.py
import os
import shutil
import subprocess
import sys

from gitwtlib.branches import branch_exists_locally, find_remote_branch
from gitwtlib.errors import PartialDeletionError, WorktreeCreationError
from gitwtlib.git_ops import git_error_text, run_git_command, run_git_quiet
from gitwtlib.models import Create, DeleteOutcome, Switch
from gitwtlib.output import info, warn
from gitwtlib.parsing import find_worktree_by_branch, get_worktree_list
from gitwtlib.paths import get_worktree_base, get_worktree_path, is_path_current_worktree


def plan_checkout(repo, op, worktrees):
    """Decide whether a create-or-switch request is a Create or a Switch.

    A worktree whose directory has vanished does not count; git is asked to
    prune its stale metadata so the branch can be checked out again.
    """
    wt = find_worktree_by_branch(worktrees, op.branch)
    if wt is not None:
        if os.path.isdir(wt.path):
            return Switch(op.branch)
        info(f"Worktree for '{op.branch}' is missing at {wt.path}; pruning")
        run_git_command(["worktree", "prune"], repo.root)
    return Create(op.branch, op.start_point)


def switch_worktree(repo, op, worktrees):
    """Path of the existing worktree for op.branch. Never mutates anything."""
    wt = find_worktree_by_branch(worktrees, op.branch)
    assert wt is not None
    return wt.path


def create_worktree(repo, op, repo_config, copy_ignored=False):
    """Create the worktree for op.branch and return its path.

    Existing local branch: check it out. Remote-only branch: create a local
    branch tracking it. Otherwise: create a new branch from op.start_point
    (or HEAD).
    """
    branch_name = op.branch
    worktree_path = get_worktree_path(repo, branch_name, repo_config.get("basedir"))

    if branch_exists_locally(branch_name, repo.root):
        if op.start_point:
            warn(
                f"branch '{branch_name}' already exists; ignoring start point "
                f"'{op.start_point}'"
            )
        cmd = ["worktree", "add", worktree_path, branch_name]
    else:
        remote_ref = None
        if not op.start_point:
            remote_ref = find_remote_branch(branch_name, repo.root)
        start = op.start_point or remote_ref
        cmd = ["worktree", "add", "-b", branch_name, worktree_path]
        if start:
            cmd.append(start)
        if remote_ref:
            info(f"Branch '{branch_name}' set up to track '{remote_ref}'")

    try:
        run_git_command(cmd, repo.root)
    except subprocess.CalledProcessError as e:
        raise WorktreeCreationError(branch_name, git_error_text(e)) from e

    info(f"Created worktree at {worktree_path}")
    if copy_ignored or repo_config.get("copy_ignored"):
        copy_ignored_files(repo, worktree_path)
    run_post_create_commands(repo_config, worktree_path, branch_name)
    return worktree_path


def checkout(repo, op, repo_config, copy_ignored=False):
    """Create-or-switch. Returns (resolved operation, worktree path)."""
    worktrees = get_worktree_list(repo.root)
    resolved = plan_checkout(repo, op, worktrees)
    if isinstance(resolved, Switch):
        return resolved, switch_worktree(repo, resolved, worktrees)
    return resolved, create_worktree(repo, resolved, repo_config, copy_ignored)


def _source_worktree(repo):
    """The worktree ignored files are copied from: the current one, else main."""
    candidates = get_worktree_list(repo.root)
    for wt in candidates:
        if not wt.bare and is_path_current_worktree(wt.path):
            return wt.path
    if candidates and not candidates[0].bare:
        return candidates[0].path
    return None


def copy_ignored_files(repo, worktree_path):
    """Copy git-ignored files (.env, local settings, ...) into a new worktree."""
    source = _source_worktree(repo)
    if source is None or os.path.abspath(source) == os.path.abspath(worktree_path):
        return
    try:
        res = run_git_quiet(
            ["ls-files", "-z", "--others", "--ignored", "--exclude-standard"], source
        )
    except subprocess.CalledProcessError as e:
        warn(f"could not list ignored files in {source}: {git_error_text(e)}")
        return
    copied = 0
    for rel in res.stdout.split("\0"):
        if not rel:
            continue
        src = os.path.join(source, rel)
        dst = os.path.join(worktree_path, rel)
        if os.path.exists(dst):
            continue
        try:
            os.makedirs(os.path.dirname(dst), exist_ok=True)
            shutil.copy2(src, dst, follow_symlinks=False)
            copied += 1
        except OSError as e:
            warn(f"could not copy {rel}: {e}")
    if copied:
        info(f"Copied {copied} ignored file{'s' if copied != 1 else ''} from {source}")


def run_post_create_commands(repo_config, worktree_path, branch_name):
    """Run post-create commands inside a new worktree.

    Their output goes to stderr; a failing command is reported but the
    worktree is kept.
    """
    commands = repo_config.get("post_create_commands") or []
    if not commands:
        return
    info(f"Running post-create commands for {branch_name}...")
    for cmd in commands:
        info(f"Running: {cmd}")
        result = subprocess.run(
            cmd, shell=True, cwd=worktree_path, capture_output=True, text=True
        )
        if result.stdout:
            print(result.stdout, file=sys.stderr, end="")
        if result.stderr:
            print(result.stderr, file=sys.stderr, end="")
        if result.returncode != 0:
            warn(f"post-create command failed with exit code {result.returncode}: {cmd}")
            return


def _remove_empty_parents(path, stop):
    """Remove directories left empty by nested branch names, up to `stop`."""
    stop = os.path.abspath(stop)
    parent = os.path.dirname(os.path.abspath(path))
    while parent.startswith(stop + os.sep):
        try:
            os.rmdir(parent)
        except OSError:
            return
        parent = os.path.dirname(parent)


def delete_one(repo, target, force, basedir=None):
    """Remove one target's worktree, then its local branch."""
    worktree_removed = False
    if target.path:
        cmd = ["worktree", "remove"]
        if force:
            cmd.append("--force")
        cmd.append(target.path)
        try:
            run_git_command(cmd, repo.root)
        except subprocess.CalledProcessError as e:
            return DeleteOutcome(
                target.target, target.name, target.path, error=git_error_text(e)
            )
        worktree_removed = True
        info(f"Removed worktree at {target.path}")
        _remove_empty_parents(target.path, get_worktree_base(repo, basedir))

    branch_deleted = False
    if target.name and branch_exists_locally(target.name, repo.root):
        try:
            run_git_command(["branch", "-D" if force else "-d", target.name], repo.root)
        except subprocess.CalledProcessError as e:
            return DeleteOutcome(
                target.target,
                target.name,
                target.path,
                worktree_removed=worktree_removed,
                error=git_error_text(e),
            )
        branch_deleted = True

    error = None
    if not worktree_removed and not branch_deleted:
        error = f"no worktree or branch named '{target.target}'"
    return DeleteOutcome(
        target.target,
        target.name,
        target.path,
        worktree_removed=worktree_removed,
        branch_deleted=branch_deleted,
        error=error,
    )


def delete_worktrees(repo, targets, force=False, basedir=None):
    """Delete guard-approved targets in order, continuing past failures.

    Returns one DeleteOutcome per attempted target. Ctrl-C during a step is
    recorded as that step's failure and ends the batch; earlier deletions are
    not undone. Targets after the interrupted one are reported as skipped.
    """
    targets = list(targets)
    outcomes = []
    interrupted = False
    for target in targets:
        try:
            outcome = delete_one(repo, target, force, basedir)
        except KeyboardInterrupt:
            outcome = DeleteOutcome(
                target.target, target.name, target.path, error="interrupted"
            )
            interrupted = True
        if not outcome.ok:
            print(f"Failed to delete '{outcome.target}': {outcome.error}", file=sys.stderr)
        outcomes.append(outcome)
        if interrupted:
            break

    if interrupted or any(not o.ok for o in outcomes):
        skipped = [t.target for t in targets[len(outcomes) :]]
        raise PartialDeletionError(outcomes, interrupted=interrupted, skipped=skipped)
    return outcomes
