import os
import subprocess
import sys
from pathlib import Path

GIT_WT = Path(__file__).parent.parent / "git_wt.py"


def _run_cli(tmp_path, cwd, args, env=None):
    e = os.environ.copy()
    e["XDG_CONFIG_HOME"] = str(tmp_path / "xdg")
    e.pop("GIT_WT_BASEDIR", None)
    if env:
        e.update(env)
    return subprocess.run(
        [sys.executable, str(GIT_WT)] + args,
        cwd=cwd,
        env=e,
        capture_output=True,
        text=True,
    )


def _git(repo, *args):
    return subprocess.run(
        ["git", "-C", str(repo)] + list(args),
        check=True,
        capture_output=True,
        text=True,
    )


def _init_repo(repo: Path):
    subprocess.run(
        ["git", "init", "-b", "main", str(repo)],
        check=True,
        capture_output=True,
        text=True,
    )
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    (repo / "README.md").write_text("# Test\n")
    _git(repo, "add", "README.md")
    _git(repo, "commit", "-m", "initial commit")


def _branches(repo):
    out = _git(repo, "branch", "--format=%(refname:short)").stdout
    return out.split()


def _make_repo(tmp_path):
    repo = tmp_path / "repo"
    repo.mkdir()
    _init_repo(repo)
    return repo


def _stdout_is_directory(stdout):
    return bool(stdout.strip()) and os.path.isdir(stdout.strip())


# Default branch protection


def test_safe_delete_of_default_branch_is_blocked(tmp_path):
    repo = _make_repo(tmp_path)
    _git(repo, "checkout", "-b", "other")

    res = _run_cli(tmp_path, repo, ["-d", "main"])
    assert res.returncode != 0
    assert "cannot delete default branch" in res.stderr
    assert "--allow-delete-default" in res.stderr
    assert res.stdout == ""
    assert "main" in _branches(repo)


def test_force_delete_of_default_branch_is_blocked(tmp_path):
    repo = _make_repo(tmp_path)
    _git(repo, "checkout", "-b", "other")

    res = _run_cli(tmp_path, repo, ["-D", "main"])
    assert res.returncode != 0
    assert "cannot delete default branch" in res.stderr
    assert "main" in _branches(repo)


def test_override_allows_deleting_default_branch(tmp_path):
    repo = _make_repo(tmp_path)
    _git(repo, "checkout", "-b", "other")

    res = _run_cli(tmp_path, repo, ["-D", "--allow-delete-default", "main"])
    assert res.returncode == 0, res.stderr
    assert "main" not in _branches(repo)
    assert not _stdout_is_directory(res.stdout)


def test_default_branch_in_batch_blocks_every_deletion(tmp_path):
    repo = _make_repo(tmp_path)
    _git(repo, "branch", "feature-a")
    _git(repo, "branch", "feature-b")
    _git(repo, "checkout", "-b", "other")

    res = _run_cli(tmp_path, repo, ["-D", "feature-a", "main", "feature-b"])
    assert res.returncode != 0
    assert "cannot delete default branch" in res.stderr
    branches = _branches(repo)
    assert "feature-a" in branches
    assert "feature-b" in branches


def test_default_branch_worktree_is_protected(tmp_path):
    repo = _make_repo(tmp_path)
    _git(repo, "checkout", "-b", "other")

    res = _run_cli(tmp_path, repo, ["main"])
    assert res.returncode == 0, res.stderr
    wt_path = res.stdout.strip()
    assert os.path.isdir(wt_path)

    res = _run_cli(tmp_path, repo, ["-d", "main"])
    assert res.returncode != 0
    assert "cannot delete default branch" in res.stderr

    # same answer when the worktree is named by its path
    res = _run_cli(tmp_path, repo, ["-d", wt_path])
    assert res.returncode != 0
    assert "cannot delete default branch" in res.stderr
    assert os.path.isdir(wt_path)


# stdout contract


def test_create_prints_exactly_one_existing_directory(tmp_path):
    repo = _make_repo(tmp_path)

    res = _run_cli(tmp_path, repo, ["feature-shell"])
    assert res.returncode == 0, res.stderr
    assert res.stdout.endswith("\n")
    lines = res.stdout.splitlines()
    assert len(lines) == 1
    assert os.path.isabs(lines[0])
    assert os.path.isdir(lines[0])
    assert lines[0] == str(tmp_path / "repo-wt" / "feature-shell")
    assert "feature-shell" in _branches(repo)


def test_switch_prints_existing_directory_without_diagnostics(tmp_path):
    repo = _make_repo(tmp_path)
    first = _run_cli(tmp_path, repo, ["existing-wt"])
    assert first.returncode == 0, first.stderr

    res = _run_cli(tmp_path, repo, ["existing-wt"])
    assert res.returncode == 0, res.stderr
    assert res.stdout == first.stdout
    assert res.stderr == ""


def test_switch_to_branch_of_main_worktree(tmp_path):
    repo = _make_repo(tmp_path)
    res = _run_cli(tmp_path, repo, ["main"])
    assert res.returncode == 0, res.stderr
    assert os.path.samefile(res.stdout.strip(), repo)


def test_switch_works_from_inside_a_linked_worktree(tmp_path):
    repo = _make_repo(tmp_path)
    wt_a = _run_cli(tmp_path, repo, ["a"]).stdout.strip()

    res = _run_cli(tmp_path, wt_a, ["b"])
    assert res.returncode == 0, res.stderr
    assert res.stdout.strip() == str(tmp_path / "repo-wt" / "b")


def test_list_stdout_is_not_a_directory(tmp_path):
    repo = _make_repo(tmp_path)
    _run_cli(tmp_path, repo, ["listed"])

    res = _run_cli(tmp_path, repo, [])
    assert res.returncode == 0, res.stderr
    assert res.stdout == ""
    assert "listed" in res.stderr
    assert "main" in res.stderr


def test_delete_stdout_is_not_a_directory(tmp_path):
    repo = _make_repo(tmp_path)
    wt = _run_cli(tmp_path, repo, ["to-delete-shell"]).stdout.strip()

    res = _run_cli(tmp_path, repo, ["-d", "to-delete-shell"])
    assert res.returncode == 0, res.stderr
    assert not _stdout_is_directory(res.stdout)
    assert res.stdout == ""
    assert not os.path.exists(wt)
    assert "to-delete-shell" not in _branches(repo)


def test_failed_create_prints_nothing_on_stdout(tmp_path):
    repo = _make_repo(tmp_path)
    res = _run_cli(tmp_path, repo, ["bad..name"])
    assert res.returncode != 0
    assert res.stdout == ""
    assert "failed to create worktree" in res.stderr


# delete batches


def test_partial_deletion_continues_past_failures(tmp_path):
    repo = _make_repo(tmp_path)
    dirty = Path(_run_cli(tmp_path, repo, ["dirty"]).stdout.strip())
    clean = Path(_run_cli(tmp_path, repo, ["clean"]).stdout.strip())
    (dirty / "scratch.txt").write_text("uncommitted\n")

    res = _run_cli(tmp_path, repo, ["-d", "dirty", "clean"])
    assert res.returncode == 1
    assert res.stdout == ""
    assert "failed to delete 1 of 2 targets: dirty" in res.stderr
    assert dirty.is_dir()
    assert not clean.exists()
    assert "clean" not in _branches(repo)
    assert "dirty" in _branches(repo)


def test_force_delete_removes_dirty_worktree(tmp_path):
    repo = _make_repo(tmp_path)
    dirty = Path(_run_cli(tmp_path, repo, ["dirty"]).stdout.strip())
    (dirty / "scratch.txt").write_text("uncommitted\n")

    res = _run_cli(tmp_path, repo, ["-D", "dirty"])
    assert res.returncode == 0, res.stderr
    assert not dirty.exists()


def test_delete_branch_without_worktree(tmp_path):
    repo = _make_repo(tmp_path)
    _git(repo, "branch", "loose")

    res = _run_cli(tmp_path, repo, ["-d", "loose"])
    assert res.returncode == 0, res.stderr
    assert "loose" not in _branches(repo)


def test_delete_unknown_target_fails(tmp_path):
    repo = _make_repo(tmp_path)
    res = _run_cli(tmp_path, repo, ["-d", "nope"])
    assert res.returncode == 1
    assert "no worktree or branch named 'nope'" in res.stderr


def test_delete_nested_branch_cleans_up_directories(tmp_path):
    repo = _make_repo(tmp_path)
    wt = Path(_run_cli(tmp_path, repo, ["feat/x"]).stdout.strip())
    assert wt == tmp_path / "repo-wt" / "feat" / "x"

    res = _run_cli(tmp_path, repo, ["-d", "feat/x"])
    assert res.returncode == 0, res.stderr
    assert not (tmp_path / "repo-wt" / "feat").exists()


# options and configuration


def test_start_point(tmp_path):
    repo = _make_repo(tmp_path)
    base = _git(repo, "rev-parse", "HEAD").stdout.strip()
    (repo / "more.txt").write_text("more\n")
    _git(repo, "add", "more.txt")
    _git(repo, "commit", "-m", "more")

    res = _run_cli(tmp_path, repo, ["from-base", base])
    assert res.returncode == 0, res.stderr
    wt = res.stdout.strip()
    assert _git(wt, "rev-parse", "HEAD").stdout.strip() == base


def test_basedir_flag(tmp_path):
    repo = _make_repo(tmp_path)
    res = _run_cli(tmp_path, repo, ["--basedir", ".worktrees", "inside"])
    assert res.returncode == 0, res.stderr
    assert res.stdout.strip() == str(repo / ".worktrees" / "inside")


def test_basedir_from_environment(tmp_path):
    repo = _make_repo(tmp_path)
    res = _run_cli(
        tmp_path, repo, ["envdir"], env={"GIT_WT_BASEDIR": str(tmp_path / "wts")}
    )
    assert res.returncode == 0, res.stderr
    assert res.stdout.strip() == str(tmp_path / "wts" / "envdir")


def test_copyignored(tmp_path):
    repo = _make_repo(tmp_path)
    (repo / ".gitignore").write_text(".env\n")
    _git(repo, "add", ".gitignore")
    _git(repo, "commit", "-m", "ignore")
    (repo / ".env").write_text("SECRET=1\n")

    res = _run_cli(tmp_path, repo, ["--copyignored", "with-env"])
    assert res.returncode == 0, res.stderr
    assert (Path(res.stdout.strip()) / ".env").read_text() == "SECRET=1\n"


def test_post_create_commands_output_goes_to_stderr(tmp_path):
    repo = _make_repo(tmp_path)
    cfg = tmp_path / "xdg" / "git-wt"
    cfg.mkdir(parents=True)
    git_dir = str(repo / ".git")
    (cfg / "config.toml").write_text(
        f'[repos."{git_dir}"]\npost_create_commands = ["echo hooked > hook.txt; echo ran hook"]\n'
    )

    res = _run_cli(tmp_path, repo, ["hooked"])
    assert res.returncode == 0, res.stderr
    lines = res.stdout.splitlines()
    assert len(lines) == 1
    assert (Path(lines[0]) / "hook.txt").exists()
    assert "ran hook" in res.stderr


def test_not_a_repository(tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    res = _run_cli(tmp_path, outside, ["feature"])
    assert res.returncode == 1
    assert "not a git repository" in res.stderr
    assert res.stdout == ""


# --init


def test_init_bash(tmp_path):
    res = _run_cli(tmp_path, tmp_path, ["--init", "bash"])
    assert res.returncode == 0
    assert "# git-wt shell hook for bash" in res.stdout
    assert "_git_wt()" in res.stdout
    assert "git() {" in res.stdout


def test_init_bash_nocd(tmp_path):
    res = _run_cli(tmp_path, tmp_path, ["--init", "bash", "--nocd"])
    assert res.returncode == 0
    assert "git() {" not in res.stdout
    assert "_git_wt()" in res.stdout


def test_init_fzf_nocd(tmp_path):
    res = _run_cli(tmp_path, tmp_path, ["--init", "bash", "--fzf", "--nocd"])
    assert res.returncode == 0
    assert "fzf" not in res.stdout
    assert "_git_wt()" in res.stdout


def test_init_unsupported_shell(tmp_path):
    res = _run_cli(tmp_path, tmp_path, ["--init", "unsupported"])
    assert res.returncode == 2
    assert res.stdout == ""
    assert "unsupported shell" in res.stderr


def test_init_fzf_peco_mutually_exclusive(tmp_path):
    res = _run_cli(tmp_path, tmp_path, ["--init", "bash", "--fzf", "--peco"])
    assert res.returncode != 0
    assert "mutually exclusive" in res.stderr


def test_init_is_byte_identical(tmp_path):
    a = _run_cli(tmp_path, tmp_path, ["--init", "zsh", "--peco"])
    b = _run_cli(tmp_path, tmp_path, ["--init", "zsh", "--peco"])
    assert a.stdout == b.stdout
