"""Git status operations.

Reads `git status --porcelain=v1 -z` and classifies each record.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterator

from gitfront.git.runner import start_git
from gitfront.lib.errors import GitCommandError, StatusFormatError

logger = logging.getLogger(__name__)

STATUS_ARGS = ["status", "--porcelain=v1", "-z", "-unormal"]


class StatusKind(Enum):
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"
    COPIED = "copied"
    RENAMED = "renamed"
    UNMERGED = "unmerged"
    IGNORED = "ignored"
    UNTRACKED = "untracked"
    MISSING = "missing"


# Letters used by `gf status` (and read back by lib.statusparse)
DISPLAY_LETTERS = {
    StatusKind.ADDED: "A",
    StatusKind.MODIFIED: "M",
    StatusKind.REMOVED: "R",
    StatusKind.COPIED: "A",
    StatusKind.RENAMED: "A",
    StatusKind.UNMERGED: "U",
    StatusKind.IGNORED: "I",
    StatusKind.UNTRACKED: "?",
    StatusKind.MISSING: "!",
}


def classify(code: str) -> StatusKind:
    """
    Map a two-letter porcelain XY code to a StatusKind.

    X is the index column, Y the working tree column.

    Raises:
        StatusFormatError: unknown code
    """
    if len(code) != 2:
        raise StatusFormatError(f"status code must be 2 characters, got {code!r}")
    x, y = code
    if code == "??":
        return StatusKind.UNTRACKED
    if code == "!!":
        return StatusKind.IGNORED
    if x == "U" or y == "U" or code in ("AA", "DD"):
        return StatusKind.UNMERGED
    if y == "D":
        return StatusKind.MISSING
    # Intent-to-add files can show a rename or copy in the working tree column
    if "R" in code:
        return StatusKind.RENAMED
    if "C" in code:
        return StatusKind.COPIED
    if x == "A" or (x == " " and y == "A"):
        return StatusKind.ADDED
    if x == "D" and y == " ":
        return StatusKind.REMOVED
    if x in "MT" or (x == " " and y in "MT"):
        return StatusKind.MODIFIED
    raise StatusFormatError(f"unknown status code {code!r}")


@dataclass(frozen=True)
class StatusEntry:
    """One porcelain status record."""
    code: str
    name: str
    from_name: str | None = None  # Source path for renames and copies

    @property
    def kind(self) -> StatusKind:
        return classify(self.code)

    @property
    def is_staged(self) -> bool:
        """True if the index column records a change."""
        return self.code[0] not in " ?!"


def _read_record(stream: BinaryIO) -> bytes | None:
    """Read one NUL-terminated record, or None at a clean end of stream."""
    buf = bytearray()
    while True:
        c = stream.read(1)
        if not c:
            if buf:
                raise StatusFormatError(f"status record not terminated: {bytes(buf)!r}")
            return None
        if c == b"\0":
            return bytes(buf)
        buf += c


def read_status_entries(stream: BinaryIO) -> Iterator[StatusEntry]:
    """
    Incrementally parse `git status --porcelain=v1 -z` output.

    Record format: "XY path\\0", followed by "source\\0" when either
    column shows a rename or copy.

    Raises:
        StatusFormatError: truncated or malformed records
    """
    while True:
        record = _read_record(stream)
        if record is None:
            return
        if len(record) < 4 or record[2:3] != b" ":
            raise StatusFormatError(f"malformed status record: {record!r}")
        code = record[:2].decode("ascii", errors="replace")
        classify(code)
        name = record[3:].decode("utf-8", errors="surrogateescape")
        from_name = None
        if "R" in code or "C" in code:
            source = _read_record(stream)
            if source is None:
                raise StatusFormatError(f"missing source path for {name!r}")
            from_name = source.decode("utf-8", errors="surrogateescape")
        yield StatusEntry(code=code, name=name, from_name=from_name)


def read_worktree_status(worktree: Path) -> list[StatusEntry]:
    """Run git status and return all entries."""
    with start_git(STATUS_ARGS, worktree) as proc:
        entries = list(read_status_entries(proc.stdout))
        result = proc.wait()
    if not result.success:
        raise GitCommandError(STATUS_ARGS, result.returncode, result.stderr)
    logger.debug(f"git status: {len(entries)} entries")
    return entries


def render_status(entries: list[StatusEntry]) -> str:
    """
    Render entries as `gf status` display lines.

    "<letter> <path>", with "  <source>" after copies and renames.
    A rename also lists its source as removed, unless that path already has
    its own entry (e.g. it was recreated), so no path has two entry lines.
    """
    lines = []
    seen = {entry.name for entry in entries}
    for entry in entries:
        kind = entry.kind
        lines.append(f"{DISPLAY_LETTERS[kind]} {entry.name}")
        if kind in (StatusKind.COPIED, StatusKind.RENAMED) and entry.from_name:
            lines.append(f"  {entry.from_name}")
    for entry in entries:
        if entry.kind == StatusKind.RENAMED and entry.from_name and entry.from_name not in seen:
            seen.add(entry.from_name)
            lines.append(f"{DISPLAY_LETTERS[StatusKind.REMOVED]} {entry.from_name}")
    return "".join(line + "\n" for line in lines)
