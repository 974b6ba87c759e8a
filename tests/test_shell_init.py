import pytest

import git_wt
from gitwtlib.errors import UnsupportedShellError
from gitwtlib.models import InvocationOptions


def _render(shell, **kwargs):
    return git_wt.render_init_script(shell, InvocationOptions(**kwargs))


@pytest.mark.parametrize(
    "shell, header, marker",
    [
        ("bash", "# git-wt shell hook for bash", "_git_wt()"),
        ("zsh", "# git-wt shell hook for zsh", "_git-wt()"),
        ("fish", "# git-wt shell hook for fish", "function git --wraps git"),
        ("powershell", "# git-wt shell hook for PowerShell", "Invoke-Git"),
    ],
)
def test_headers_and_markers(shell, header, marker):
    out = _render(shell)
    assert out.startswith(header)
    assert marker in out


def test_bash_has_wrapper_and_completion():
    out = _render("bash")
    assert "git() {" in out
    assert "complete -o default -F _git_wt git-wt" in out


def test_bash_nocd_drops_wrapper_keeps_completion():
    out = _render("bash", nocd=True)
    assert "git() {" not in out
    assert "_git_wt()" in out


@pytest.mark.parametrize("shell", git_wt.Shell.names())
def test_nocd_suppresses_picker(shell):
    for picker in ("fzf", "peco"):
        out = _render(shell, nocd=True, **{picker: True})
        assert picker not in out
        assert "command git wt" not in out


@pytest.mark.parametrize("shell", git_wt.Shell.names())
def test_picker_wiring_is_exclusive(shell):
    fzf = _render(shell, fzf=True)
    peco = _render(shell, peco=True)
    assert "fzf" in fzf and "peco" not in fzf
    assert "peco" in peco and "fzf" not in peco


@pytest.mark.parametrize("shell", git_wt.Shell.names())
def test_no_picker_by_default(shell):
    out = _render(shell)
    assert "fzf" not in out
    assert "peco" not in out
    assert "__PICKER" not in out
    assert "__SHELLS__" not in out and "__OPTIONS__" not in out


@pytest.mark.parametrize("shell", git_wt.Shell.names())
def test_rendering_is_deterministic(shell):
    assert _render(shell, fzf=True) == _render(shell, fzf=True)
    assert _render(shell) == _render(git_wt.Shell(shell))


def test_unsupported_shell():
    with pytest.raises(UnsupportedShellError):
        _render("cmd.exe")


def test_completion_lists_supported_shells():
    out = _render("bash")
    assert 'compgen -W "bash zsh fish powershell"' in out


def test_profiles_match_shell_names():
    for shell in git_wt.Shell:
        assert shell.profile.name == shell.value


def test_no_profile_uses_a_native_cd_hook():
    # directory changes always go through the generated `git` wrapper
    for shell in git_wt.Shell:
        assert shell.profile.native_cd_hook is False
        assert shell.profile.wrapper.splitlines()[0] in _render(shell)
