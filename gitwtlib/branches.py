# gitwtlib/branches.py
import subprocess

from gitwtlib.git_ops import run_git_quiet


def get_default_branch(repo_dir):
    """Resolve the repository's default branch name.

    Order: the remote HEAD of origin, then init.defaultBranch when that branch
    exists locally, then the first of main/master that exists, then
    init.defaultBranch or "main".
    """
    try:
        res = run_git_quiet(
            ["symbolic-ref", "--quiet", "--short", "refs/remotes/origin/HEAD"],
            repo_dir,
        )
        ref = res.stdout.strip()
        if ref.startswith("origin/"):
            return ref[len("origin/") :]
    except subprocess.CalledProcessError:
        pass

    configured = None
    try:
        res = run_git_quiet(["config", "--get", "init.defaultBranch"], repo_dir)
        configured = res.stdout.strip() or None
    except subprocess.CalledProcessError:
        pass

    candidates = ([configured] if configured else []) + ["main", "master"]
    for candidate in candidates:
        if branch_exists_locally(candidate, repo_dir):
            return candidate
    return configured or "main"


def branch_exists_locally(branch_name, repo_dir):
    """Check if a branch exists locally via git rev-parse."""
    try:
        run_git_quiet(
            ["rev-parse", "--verify", "--quiet", f"refs/heads/{branch_name}"],
            repo_dir,
        )
        return True
    except subprocess.CalledProcessError:
        return False


def find_remote_branch(branch_name, repo_dir):
    """Search for remote branches matching given name, preferring origin."""
    try:
        result = run_git_quiet(
            [
                "for-each-ref",
                "--format=%(refname:short)",
                f"refs/remotes/*/{branch_name}",
            ],
            repo_dir,
        )
    except subprocess.CalledProcessError:
        return None
    refs = [r for r in result.stdout.strip().split("\n") if r]
    if len(refs) == 1:
        return refs[0]
    elif len(refs) > 1:
        for ref in refs:
            if ref.startswith("origin/"):
                return ref
        return refs[0]
    return None

