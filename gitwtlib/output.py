# gitwtlib/output.py
"""stdout/stderr discipline.

The shell hook captures stdout and changes into it when it names an existing
directory. Only `emit_worktree_path` may therefore write to stdout during a
lifecycle operation, and only once, after the operation has succeeded.
Everything meant for a human goes through `info`/`warn`/`report_error`,
which write to stderr.
"""
import os
import sys


def emit_worktree_path(path):
    """Write the single cd-able line for a successful create or switch."""
    resolved = os.path.abspath(path)
    if "\n" in resolved:
        raise ValueError(f"worktree path spans lines: {resolved!r}")
    sys.stdout.write(resolved + "\n")
    sys.stdout.flush()


def emit_script(script):
    """Write generated shell source (the --init payload) to stdout."""
    sys.stdout.write(script)
    sys.stdout.flush()


def info(msg):
    print(msg, file=sys.stderr)


def warn(msg):
    print(f"Warning: {msg}", file=sys.stderr)


def report_error(err):
    """Print a GitWtError, its diagnostic lines and hints to stderr."""
    print(f"Error: {err}", file=sys.stderr)
    for line in err.details():
        print(f"  {line}", file=sys.stderr)
    for hint in err.hints():
        print(f"hint: {hint}", file=sys.stderr)
