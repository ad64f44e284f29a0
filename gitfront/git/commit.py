"""Git commit operations."""

from pathlib import Path

from gitfront.git.runner import run_git_interactive


def commit_args(files: list[str], message: str | None = None, amend: bool = False) -> list[str]:
    """Build `git commit` arguments for an explicit list of pathspecs."""
    args = ["commit"]
    if amend:
        args.append("--amend")
    if message:
        args.append(f"--message={message}")
    return args + ["--"] + files


def commit(worktree: Path, files: list[str], message: str | None = None, amend: bool = False) -> int:
    """Commit the given pathspecs. Opens the editor when no message is given."""
    return run_git_interactive(commit_args(files, message, amend), worktree)
