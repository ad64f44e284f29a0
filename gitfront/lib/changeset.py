"""
Choosing what `gf commit` commits when no files are named.

Everything git status reports as added, modified, removed, copied or
renamed is committed. Unmerged files always block the commit. Missing
files (deleted in the working tree without `git rm`) are never committed
implicitly.
"""

import logging
from pathlib import Path
from typing import Iterable

from gitfront.git.status import StatusEntry, StatusKind, read_worktree_status
from gitfront.lib.errors import NothingChanged, StagedMissingFiles, UnmergedChanges

logger = logging.getLogger(__name__)

# git status paths are relative to the top of the repository
TOP_PATHSPEC = ":/:"

COMMITTED_KINDS = {
    StatusKind.ADDED,
    StatusKind.MODIFIED,
    StatusKind.REMOVED,
    StatusKind.COPIED,
    StatusKind.RENAMED,
}


def select_paths(entries: Iterable[StatusEntry]) -> list[str]:
    """
    Pick the pathspecs to commit from git status entries.

    Raises, in this order of precedence:
        UnmergedChanges: any unmerged entry
        NothingChanged: nothing to commit (counts missing files)
        StagedMissingFiles: a missing file has staged changes
    """
    paths: list[str] = []
    missing = missing_staged = unmerged = 0
    for entry in entries:
        kind = entry.kind
        if kind in COMMITTED_KINDS:
            paths.append(TOP_PATHSPEC + entry.name)
        elif kind == StatusKind.MISSING:
            missing += 1
            if entry.is_staged:
                missing_staged += 1
        elif kind == StatusKind.UNMERGED:
            unmerged += 1
        # ignored and untracked files are skipped

    logger.debug(
        f"selected {len(paths)} paths "
        f"(missing={missing}, missing_staged={missing_staged}, unmerged={unmerged})"
    )
    if unmerged:
        raise UnmergedChanges(unmerged)
    if not paths:
        raise NothingChanged(missing)
    if missing_staged:
        raise StagedMissingFiles(missing_staged)
    return paths


def infer_commit_files(worktree: Path) -> list[str]:
    """Read git status for worktree and select the paths to commit."""
    return select_paths(read_worktree_status(worktree))
