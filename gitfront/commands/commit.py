"""
gf commit - Commit the named files or all outstanding changes.

With no files, commits every change git status reports as added, modified,
removed, copied or renamed. Untracked files are left alone. Unmerged files
block the commit, as do missing files that git has staged changes for.
"""

from pathlib import Path

from gitfront.git.commit import commit
from gitfront.lib.changeset import infer_commit_files
from gitfront.lib.settings import Settings


def cmd_commit(args, repo: Path, settings: Settings) -> int:
    files = args.files or infer_commit_files(repo)
    return commit(repo, files, message=args.message, amend=args.amend)
