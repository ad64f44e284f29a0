"""Revision resolution."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from gitfront.git.runner import run_git
from gitfront.lib.constants import BRANCH_PREFIX
from gitfront.lib.errors import GitCommandError

logger = logging.getLogger(__name__)

HASH_PATTERN = re.compile(r'^[0-9a-fA-F]{40}$')


def parse_hash(s: str) -> str:
    """Validate a full SHA-1 hex string and return it in lowercase."""
    if not HASH_PATTERN.match(s):
        raise ValueError(f"not a commit hash: {s!r}")
    return s.lower()


@dataclass(frozen=True)
class Revision:
    """A commit resolved from a revision expression."""
    commit: str
    ref_name: str | None = None  # Full ref the expression named, e.g. refs/heads/main

    @property
    def branch(self) -> str | None:
        """Short branch name if ref_name is a branch."""
        if self.ref_name and self.ref_name.startswith(BRANCH_PREFIX):
            return self.ref_name[len(BRANCH_PREFIX):]
        return None


def parse_rev(repo: Path, expr: str) -> Revision:
    """
    Resolve a revision expression (HEAD, a branch, a hash, ...).

    Raises:
        GitCommandError: if the expression does not name a commit
    """
    args = ["rev-parse", "--quiet", "--verify", f"{expr}^{{commit}}"]
    result = run_git(args, repo)
    if not result.success:
        raise GitCommandError(args, result.returncode, result.stderr or f"unknown revision {expr!r}")
    commit = parse_hash(result.stdout.strip())

    ref_name = None
    sym = run_git(["rev-parse", "--symbolic-full-name", expr], repo)
    if sym.success:
        name = sym.stdout.strip()
        # Detached HEAD and plain hashes don't name a ref
        if name.startswith("refs/"):
            ref_name = name

    rev = Revision(commit=commit, ref_name=ref_name)
    logger.debug(f"resolved {expr} -> {rev.commit} ({rev.ref_name or 'no ref'})")
    return rev


def get_repo_root(cwd: Path) -> Path | None:
    """Top of the working tree, or None outside a repository."""
    result = run_git(["rev-parse", "--show-toplevel"], cwd)
    if result.success and result.stdout.strip():
        return Path(result.stdout.strip())
    return None
