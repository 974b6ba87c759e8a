# gitwtlib/classifier.py
import argparse

from gitwtlib import __version__
from gitwtlib.errors import UsageError
from gitwtlib.models import Checkout, Delete, InitScript, InvocationOptions, List
from gitwtlib.shells import Shell


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = _ArgumentParser(
        prog="git-wt",
        description="Manage one git worktree per branch and cd into it.",
        epilog=(
            "With no branch, lists worktrees. With a branch, switches to its "
            "worktree, creating branch and worktree as needed. "
            'Enable cd support with: eval "$(git wt --init bash)"'
        ),
    )
    parser.add_argument(
        "-d",
        dest="delete",
        action="store_true",
        help="Delete the worktrees and branches (refuses unmerged branches)",
    )
    parser.add_argument(
        "-D",
        dest="force_delete",
        action="store_true",
        help="Force delete the worktrees and branches",
    )
    parser.add_argument(
        "--allow-delete-default",
        action="store_true",
        help="Allow -d/-D to delete the default branch",
    )
    parser.add_argument(
        "--init",
        metavar="SHELL",
        help=f"Print shell integration for {', '.join(Shell.names())}",
    )
    parser.add_argument(
        "--nocd", action="store_true", help="Do not change into the worktree"
    )
    parser.add_argument(
        "--fzf", action="store_true", help="With --init: pick worktrees with fzf"
    )
    parser.add_argument(
        "--peco", action="store_true", help="With --init: pick worktrees with peco"
    )
    parser.add_argument(
        "--basedir",
        help="Worktree base directory; {gitroot} expands to the repository name",
    )
    parser.add_argument(
        "--copyignored",
        action="store_true",
        help="Copy git-ignored files into a newly created worktree",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "args",
        nargs="*",
        metavar="branch",
        help="Branch (and optional start point), or branches/worktree paths to delete",
    )
    return parser


def classify(argv):
    """Parse argv into (Operation, InvocationOptions). Raises UsageError."""
    args = build_parser().parse_intermixed_args(argv)

    if args.fzf and args.peco:
        raise UsageError("--fzf and --peco are mutually exclusive")

    options = InvocationOptions(
        nocd=args.nocd,
        fzf=args.fzf,
        peco=args.peco,
        basedir=args.basedir,
        copy_ignored=args.copyignored,
    )
    deleting = args.delete or args.force_delete

    if args.init is not None:
        if args.args or deleting:
            raise UsageError("--init cannot be combined with branches or -d/-D")
        return InitScript(shell=Shell.from_name(args.init), options=options), options

    if options.picker:
        raise UsageError(f"--{options.picker} is only valid with --init")

    if deleting:
        if not args.args:
            raise UsageError("-d/-D requires at least one branch or worktree")
        op = Delete(
            branches=tuple(args.args),
            force=args.force_delete,
            allow_default=args.allow_delete_default,
        )
        return op, options

    if args.allow_delete_default:
        raise UsageError("--allow-delete-default is only valid with -d or -D")

    if not args.args:
        return List(), options
    if len(args.args) > 2:
        raise UsageError(
            "too many arguments: expected a branch and an optional start point"
        )
    start_point = args.args[1] if len(args.args) == 2 else None
    return Checkout(branch=args.args[0], start_point=start_point), options
