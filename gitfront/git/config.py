"""Git configuration and remote listing."""

from pathlib import Path

from gitfront.git.runner import run_git
from gitfront.lib.errors import GitCommandError


def config_value(repo: Path, key: str) -> str:
    """
    Read a single git config value.

    Returns "" when the key is unset. git exits 1 for a missing key;
    any other failure raises GitCommandError.
    """
    args = ["config", "--get", key]
    result = run_git(args, repo)
    if result.success:
        return result.stdout.strip()
    if result.returncode == 1 and not result.timed_out:
        return ""
    raise GitCommandError(args, result.returncode, result.stderr)


def list_remotes(repo: Path) -> set[str]:
    """Get the names of all configured remotes."""
    args = ["remote"]
    result = run_git(args, repo)
    if not result.success:
        raise GitCommandError(args, result.returncode, result.stderr)
    return {line.strip() for line in result.stdout.splitlines() if line.strip()}
