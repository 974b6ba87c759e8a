# gitwtlib/git_ops.py
import subprocess
import sys


def run_git_command(cmd_args, cwd):
    """Run git in `cwd`, echoing everything it prints to stderr.

    stdout is reserved for the worktree path, so git's own chatter must never
    reach it. Raises CalledProcessError on failure; its stderr holds git's
    message and is left for the caller to report.
    """
    cmd = ["git", "-C", cwd] + cmd_args
    result = subprocess.run(cmd, check=True, capture_output=True, text=True)
    if result.stdout:
        print(result.stdout, file=sys.stderr, end="")
    if result.stderr:
        print(result.stderr, file=sys.stderr, end="")
    return result


def run_git_quiet(cmd_args, cwd):
    """Like run_git_command but never prints; returns CompletedProcess."""
    return subprocess.run(
        ["git", "-C", cwd] + cmd_args,
        check=True,
        capture_output=True,
        text=True,
    )


def run_git_simple(cmd_args, cwd=None):
    """For repository discovery, where cwd may not be a repository yet."""
    return subprocess.run(
        ["git"] + cmd_args,
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )


def git_error_text(e):
    """Best-effort diagnostic text from a failed git invocation."""
    for stream in (getattr(e, "stderr", None), getattr(e, "stdout", None)):
        if stream:
            return stream.strip()
    return str(e)
