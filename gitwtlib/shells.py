# gitwtlib/shells.py
"""Shell integration scripts printed by `git wt --init <shell>`.

Each script has up to three parts:

- a `git` wrapper function that runs `git wt ...`, captures stdout and cds
  into it when it names an existing directory,
- picker wiring inside the wrapper: a bare `git wt` opens fzf or peco over
  the repository's worktree branches and re-runs with the selection,
- completion for `git-wt` (and `git wt` where the shell allows it).

`--nocd` drops the wrapper, and with it the picker, but keeps completion.
Rendering reads no repository state, so the output depends only on the
shell and the options.
"""
from dataclasses import dataclass
from enum import Enum

from gitwtlib.errors import UnsupportedShellError

PICKER_COMMANDS = {
    "fzf": "fzf --height=40% --reverse",
    "peco": "peco",
}

BASH_WRAPPER = """\
git() {
    if [ "$1" = "wt" ]; then
        shift
        local arg
        for arg in "$@"; do
            if [ "$arg" = "--nocd" ]; then
                command git wt "$@"
                return $?
            fi
        done
__PICKER__
        local result rc
        result="$(command git wt "$@")"
        rc=$?
        if [ $rc -eq 0 ] && [ -n "$result" ] && [ -d "$result" ]; then
            cd -- "$result" || return $?
        elif [ -n "$result" ]; then
            printf '%s\\n' "$result"
        fi
        return $rc
    fi
    command git "$@"
}
"""

POSIX_PICKER = """\
        if [ $# -eq 0 ] && command -v __PICKER_NAME__ >/dev/null 2>&1; then
            local selected
            selected="$(command git worktree list --porcelain 2>/dev/null | sed -n 's|^branch refs/heads/||p' | __PICKER_CMD__)"
            [ -n "$selected" ] || return 1
            set -- "$selected"
        fi
"""

BASH_COMPLETION = """\
_git_wt() {
    local cur prev
    cur="${COMP_WORDS[COMP_CWORD]}"
    prev="${COMP_WORDS[COMP_CWORD-1]}"
    case "$prev" in
        --init)
            COMPREPLY=($(compgen -W "__SHELLS__" -- "$cur"))
            return 0
            ;;
        --basedir)
            COMPREPLY=($(compgen -d -- "$cur"))
            return 0
            ;;
    esac
    case "$cur" in
        -*)
            COMPREPLY=($(compgen -W "__OPTIONS__" -- "$cur"))
            ;;
        *)
            COMPREPLY=($(compgen -W "$(command git for-each-ref --format='%(refname:short)' refs/heads 2>/dev/null)" -- "$cur"))
            ;;
    esac
    return 0
}
complete -o default -F _git_wt git-wt
"""

ZSH_WRAPPER = """\
git() {
    if [[ "$1" == "wt" ]]; then
        shift
        if (( ${argv[(Ie)--nocd]} )); then
            command git wt "$@"
            return $?
        fi
__PICKER__
        local result rc
        result="$(command git wt "$@")"
        rc=$?
        if (( rc == 0 )) && [[ -n "$result" && -d "$result" ]]; then
            cd -- "$result" || return $?
        elif [[ -n "$result" ]]; then
            print -r -- "$result"
        fi
        return $rc
    fi
    command git "$@"
}
"""

ZSH_COMPLETION = """\
_git-wt() {
    local -a branches
    branches=(${(f)"$(command git for-each-ref --format='%(refname:short)' refs/heads 2>/dev/null)"})
    _arguments -s \\
        '-d[delete worktrees and branches]' \\
        '-D[force delete worktrees and branches]' \\
        '--allow-delete-default[allow deleting the default branch]' \\
        '--nocd[do not change into the worktree]' \\
        '--basedir[worktree base directory]:directory:_directories' \\
        '--copyignored[copy ignored files into a new worktree]' \\
        '--init[print shell integration]:shell:(__SHELLS__)' \\
        '--version[show version]' \\
        '*:branch:compadd -a branches'
}
if (( $+functions[compdef] )); then
    compdef _git-wt git-wt
fi
"""

FISH_WRAPPER = """\
function git --wraps git
    if test (count $argv) -gt 0; and test "$argv[1]" = wt
        set -l wt_args $argv
        set -e wt_args[1]
        if contains -- --nocd $wt_args
            command git wt $wt_args
            return $status
        end
__PICKER__
        set -l result (command git wt $wt_args)
        set -l rc $status
        if test $rc -eq 0; and test (count $result) -eq 1; and test -d "$result"
            cd "$result"; or return $status
        else if test (count $result) -gt 0
            printf '%s\\n' $result
        end
        return $rc
    end
    command git $argv
end
"""

FISH_PICKER = """\
        if test (count $wt_args) -eq 0; and type -q __PICKER_NAME__
            set -l selected (command git worktree list --porcelain 2>/dev/null | sed -n 's|^branch refs/heads/||p' | __PICKER_CMD__)
            test -n "$selected"; or return 1
            set wt_args $selected
        end
"""

FISH_COMPLETION = """\
complete -c git-wt -f
complete -c git-wt -s d -d 'Delete worktrees and branches'
complete -c git-wt -s D -d 'Force delete worktrees and branches'
complete -c git-wt -l allow-delete-default -d 'Allow deleting the default branch'
complete -c git-wt -l nocd -d 'Do not change into the worktree'
complete -c git-wt -l basedir -x -a '(__fish_complete_directories)' -d 'Worktree base directory'
complete -c git-wt -l copyignored -d 'Copy ignored files into a new worktree'
complete -c git-wt -l init -x -a '__SHELLS__' -d 'Print shell integration'
complete -c git-wt -l version -d 'Show version'
complete -c git-wt -a '(command git for-each-ref --format="%(refname:short)" refs/heads 2>/dev/null)' -d Branch
complete -c git -n '__fish_seen_subcommand_from wt' -f -a '(command git for-each-ref --format="%(refname:short)" refs/heads 2>/dev/null)' -d Branch
"""

POWERSHELL_WRAPPER = """\
function Invoke-Git {
    $gitCommand = Get-Command -Name git -CommandType Application | Select-Object -First 1
    & $gitCommand @args
}

function git {
    if ($args.Count -gt 0 -and $args[0] -eq 'wt') {
        $wtArgs = @($args | Select-Object -Skip 1)
        if ($wtArgs -contains '--nocd') {
            Invoke-Git wt @wtArgs
            return
        }
__PICKER__
        $result = @(Invoke-Git wt @wtArgs)
        $rc = $LASTEXITCODE
        if ($rc -eq 0 -and $result.Count -eq 1 -and $result[0] -and (Test-Path -LiteralPath $result[0] -PathType Container)) {
            Set-Location -LiteralPath $result[0]
        } elseif ($result.Count -gt 0) {
            $result
        }
        $global:LASTEXITCODE = $rc
        return
    }
    Invoke-Git @args
}
"""

POWERSHELL_PICKER = """\
        if ($wtArgs.Count -eq 0 -and (Get-Command -Name __PICKER_NAME__ -ErrorAction SilentlyContinue)) {
            $selected = Invoke-Git worktree list --porcelain |
                Where-Object { $_ -like 'branch refs/heads/*' } |
                ForEach-Object { $_.Substring(18) } |
                __PICKER_CMD__
            if (-not $selected) {
                $global:LASTEXITCODE = 1
                return
            }
            $wtArgs = @($selected)
        }
"""

POWERSHELL_COMPLETION = """\
Register-ArgumentCompleter -Native -CommandName git-wt -ScriptBlock {
    param($wordToComplete, $commandAst, $cursorPosition)
    if ($wordToComplete.StartsWith('-')) {
        $candidates = '__OPTIONS__' -split ' '
    } else {
        $candidates = @(git for-each-ref --format='%(refname:short)' refs/heads 2>$null)
    }
    $candidates | Where-Object { $_ -clike "$wordToComplete*" } | ForEach-Object {
        [System.Management.Automation.CompletionResult]::new($_, $_, 'ParameterValue', $_)
    }
}
"""

# Offered by completion; the picker flags only matter to --init.
COMPLETION_OPTIONS = (
    "-d",
    "-D",
    "--allow-delete-default",
    "--nocd",
    "--basedir",
    "--copyignored",
    "--init",
    "--version",
)


@dataclass(frozen=True)
class ShellProfile:
    name: str
    display_name: str
    wrapper: str
    completion: str
    picker: str
    # every profile cds through the `git` wrapper; none installs a chpwd-style hook
    native_cd_hook: bool = False

    def header(self):
        return f"# git-wt shell hook for {self.display_name}\n"


class Shell(Enum):
    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "powershell"

    @classmethod
    def names(cls):
        return [s.value for s in cls]

    @classmethod
    def from_name(cls, name):
        try:
            return cls(name.lower())
        except ValueError:
            raise UnsupportedShellError(name, cls.names()) from None

    @property
    def profile(self) -> ShellProfile:
        return PROFILES[self]


PROFILES = {
    Shell.BASH: ShellProfile("bash", "bash", BASH_WRAPPER, BASH_COMPLETION, POSIX_PICKER),
    Shell.ZSH: ShellProfile("zsh", "zsh", ZSH_WRAPPER, ZSH_COMPLETION, POSIX_PICKER),
    Shell.FISH: ShellProfile("fish", "fish", FISH_WRAPPER, FISH_COMPLETION, FISH_PICKER),
    Shell.POWERSHELL: ShellProfile(
        "powershell",
        "PowerShell",
        POWERSHELL_WRAPPER,
        POWERSHELL_COMPLETION,
        POWERSHELL_PICKER,
    ),
}


def _shell_names():
    return " ".join(p.name for p in PROFILES.values())


def _render_picker(profile, picker):
    if picker is None:
        return ""
    return profile.picker.replace("__PICKER_NAME__", picker).replace(
        "__PICKER_CMD__", PICKER_COMMANDS[picker]
    )


def render_init_script(shell, options):
    """Render the integration script for `shell` (a Shell or its name)."""
    if not isinstance(shell, Shell):
        shell = Shell.from_name(shell)
    profile = shell.profile
    parts = [profile.header()]
    if not options.nocd:
        picker = _render_picker(profile, options.picker)
        parts.append(profile.wrapper.replace("__PICKER__\n", picker))
    parts.append(
        profile.completion.replace("__SHELLS__", _shell_names()).replace(
            "__OPTIONS__", " ".join(COMPLETION_OPTIONS)
        )
    )
    return "\n".join(parts)
