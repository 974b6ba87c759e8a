# gitwtlib/models.py
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from gitwtlib.shells import Shell


@dataclass(frozen=True)
class InvocationOptions:
    nocd: bool = False
    fzf: bool = False
    peco: bool = False
    basedir: Optional[str] = None
    copy_ignored: bool = False

    @property
    def picker(self) -> Optional[str]:
        """Name of the requested picker, or None."""
        if self.fzf:
            return "fzf"
        if self.peco:
            return "peco"
        return None


@dataclass(frozen=True)
class Repository:
    root: str
    git_dir: str
    default_branch: str
    bare: bool = False

    @property
    def name(self) -> str:
        base = os.path.basename(self.root.rstrip(os.sep))
        if self.bare and base.endswith(".git"):
            base = base[:-4]
        return base


@dataclass(frozen=True)
class BranchTarget:
    """A branch named on the command line, resolved against the repository."""

    target: str
    name: str
    is_default: bool
    path: Optional[str] = None

    @classmethod
    def for_branch(cls, repo: Repository, target: str, name: str, path=None):
        return cls(
            target=target,
            name=name,
            is_default=(name == repo.default_branch),
            path=path,
        )


@dataclass(frozen=True)
class Worktree:
    path: str
    head: str = ""
    branch: Optional[str] = None
    is_main: bool = False
    bare: bool = False
    locked: bool = False
    prunable: bool = False

    @property
    def detached(self) -> bool:
        return self.branch is None and not self.bare


# Operations


@dataclass(frozen=True)
class Checkout:
    """Create-or-switch request; the executor decides which."""

    branch: str
    start_point: Optional[str] = None


@dataclass(frozen=True)
class Create:
    branch: str
    start_point: Optional[str] = None


@dataclass(frozen=True)
class Switch:
    branch: str


@dataclass(frozen=True)
class Delete:
    branches: Tuple[str, ...]
    force: bool = False
    allow_default: bool = False


@dataclass(frozen=True)
class List:
    pass


@dataclass(frozen=True)
class InitScript:
    shell: Shell
    options: InvocationOptions = field(default_factory=InvocationOptions)


Operation = Union[Checkout, Create, Switch, Delete, List, InitScript]


@dataclass(frozen=True)
class DeleteOutcome:
    target: str
    branch: Optional[str] = None
    path: Optional[str] = None
    worktree_removed: bool = False
    branch_deleted: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
