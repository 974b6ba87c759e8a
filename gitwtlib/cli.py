# gitwtlib/cli.py
import subprocess
import sys

from gitwtlib.classifier import classify
from gitwtlib.config import get_repo_config
from gitwtlib.display import list_worktrees
from gitwtlib.errors import GitWtError
from gitwtlib.git_ops import git_error_text
from gitwtlib.guard import check_default_branch, resolve_target
from gitwtlib.models import Checkout, Delete, InitScript, List
from gitwtlib.output import emit_script, emit_worktree_path, info, report_error
from gitwtlib.parsing import get_worktree_list
from gitwtlib.resolution import resolve_repository
from gitwtlib.shells import render_init_script
from gitwtlib.worktrees import checkout, delete_worktrees


def run(op, options, cwd=None):
    """Execute one classified operation. Raises GitWtError on failure."""
    if isinstance(op, InitScript):
        # templating only; the repository is never consulted
        emit_script(render_init_script(op.shell, op.options))
        return

    repo = resolve_repository(cwd)
    repo_config = get_repo_config(repo.git_dir)
    if options.basedir:
        repo_config["basedir"] = options.basedir

    if isinstance(op, List):
        list_worktrees(repo)
    elif isinstance(op, Checkout):
        _, path = checkout(repo, op, repo_config, copy_ignored=options.copy_ignored)
        emit_worktree_path(path)
    elif isinstance(op, Delete):
        worktrees = get_worktree_list(repo.root)
        targets = [resolve_target(repo, worktrees, b, cwd=cwd) for b in op.branches]
        check_default_branch(targets, op.allow_default)
        outcomes = delete_worktrees(
            repo, targets, force=op.force, basedir=repo_config.get("basedir")
        )
        info(f"Deleted {len(outcomes)} target{'s' if len(outcomes) != 1 else ''}")
    else:
        raise TypeError(f"unknown operation: {op!r}")


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        op, options = classify(argv)
        run(op, options)
    except GitWtError as e:
        report_error(e)
        sys.exit(e.exit_code)
    except subprocess.CalledProcessError as e:
        print(f"Error: {git_error_text(e)}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)
