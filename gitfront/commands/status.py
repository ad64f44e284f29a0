"""
gf status - Show changed files in the working copy.

One line per file:

    A  added (copies and renames list their source on the next line)
    M  modified
    R  removed
    !  missing (deleted without git rm)
    ?  untracked
    U  unmerged

The output is checked with the same parser other tools use to read it
back; lines it would reject are logged and make the command exit 1.
"""

import logging
from pathlib import Path

from gitfront.git.status import read_worktree_status, render_status
from gitfront.lib.constants import EXIT_ERROR, EXIT_SUCCESS
from gitfront.lib.settings import Settings
from gitfront.lib.statusparse import CollectingSink, parse_status

logger = logging.getLogger(__name__)


def cmd_status(args, repo: Path, settings: Settings) -> int:
    text = render_status(read_worktree_status(repo))
    sink = CollectingSink()
    result = parse_status(text, sink)
    for err in sink.errors:
        logger.warning(f"status output {err}")
    print(text, end="")
    return EXIT_SUCCESS if result.ok else EXIT_ERROR
