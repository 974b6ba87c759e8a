# gitwtlib/errors.py
"""Exception hierarchy for git-wt.

Every error carries the exit code the CLI should terminate with. Validation
errors (usage, unsupported shell, protected default branch) are raised before
the repository is touched; execution errors carry git's own diagnostics.
"""


class GitWtError(Exception):
    """Base error for all git-wt failures."""

    exit_code = 1

    def details(self):
        """Diagnostic lines (usually git's own output) printed under the message."""
        return []

    def hints(self):
        """Extra `hint:` lines printed after the details."""
        return []


class UsageError(GitWtError):
    """Malformed or contradictory command-line arguments."""

    exit_code = 2


class UnsupportedShellError(UsageError):
    """Raised when --init names a shell we cannot generate a hook for."""

    def __init__(self, shell, supported=()):
        self.shell = shell
        self.supported = tuple(supported)
        super().__init__(f"unsupported shell: {shell!r}")

    def hints(self):
        if self.supported:
            return [f"supported shells: {', '.join(self.supported)}"]
        return []


class RepositoryNotFoundError(GitWtError):
    """The current directory is not inside a git repository."""

    def __init__(self, cwd):
        self.cwd = cwd
        super().__init__(f"not a git repository: {cwd}")

    def hints(self):
        return ["cd into a git repository or one of its worktrees"]


class DefaultBranchProtectedError(GitWtError):
    """A delete batch names the repository's default branch."""

    def __init__(self, branch):
        self.branch = branch
        super().__init__(
            f"cannot delete default branch '{branch}' "
            "(use --allow-delete-default to override)"
        )


class WorktreeCreationError(GitWtError):
    """git refused to create the worktree."""

    def __init__(self, branch, detail=""):
        self.branch = branch
        self.detail = (detail or "").strip()
        super().__init__(f"failed to create worktree for branch '{branch}'")

    def details(self):
        return self.detail.splitlines()


class PartialDeletionError(GitWtError):
    """One or more targets of a delete batch could not be removed.

    `skipped` holds the targets an interrupted batch never reached; they
    count towards the batch size and are reported as not attempted.
    """

    def __init__(self, outcomes, interrupted=False, skipped=()):
        self.outcomes = list(outcomes)
        self.failures = [o for o in self.outcomes if not o.ok]
        self.skipped = list(skipped)
        self.interrupted = interrupted
        if interrupted:
            self.exit_code = 130
        total = len(self.outcomes) + len(self.skipped)
        names = ", ".join([o.target for o in self.failures] + self.skipped)
        super().__init__(
            f"failed to delete {len(self.failures) + len(self.skipped)} of {total} "
            f"target{'s' if total != 1 else ''}: {names}"
        )

    def details(self):
        lines = []
        for outcome in self.failures:
            lines.append(f"{outcome.target}: {outcome.error}")
        for target in self.skipped:
            lines.append(f"{target}: not attempted (interrupted)")
        return lines
