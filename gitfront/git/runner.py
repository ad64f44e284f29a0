"""Git command runner with timeout handling and streamed output."""

import logging
import subprocess
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


@dataclass
class GitResult:
    """Result of a git command."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out


def run_git(
    args: list[str],
    cwd: Path,
    timeout: int = DEFAULT_TIMEOUT,
) -> GitResult:
    """
    Run a git command with timeout handling.

    Args:
        args: Git command arguments (e.g., ["config", "--get", "remote.pushDefault"])
        cwd: Working directory for the command
        timeout: Timeout in seconds

    Returns:
        GitResult with returncode, stdout, stderr, and timed_out flag
    """
    cmd = ["git", "-C", str(cwd)] + args
    logger.debug(f"run: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return GitResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    except subprocess.TimeoutExpired:
        return GitResult(
            returncode=-1,
            stdout="",
            stderr=f"Command timed out after {timeout}s",
            timed_out=True,
        )


def run_git_interactive(args: list[str], cwd: Path) -> int:
    """Run git attached to the terminal (editor, progress, prompts). Returns exit code."""
    cmd = ["git", "-C", str(cwd)] + args
    logger.debug(f"run interactive: {' '.join(cmd)}")
    return subprocess.call(cmd)


class GitProcess:
    """A running git command whose stdout is read incrementally.

    Iterating yields raw stdout lines (bytes, newline included).
    """

    def __init__(self, args: list[str], popen: subprocess.Popen):
        self.args = args
        self._popen = popen

    @property
    def stdout(self) -> BinaryIO:
        return self._popen.stdout

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._popen.stdout)

    def wait(self) -> GitResult:
        """Drain output, wait for exit and return the result.

        stdout in the result only holds what was not already consumed.
        """
        out, err = self._popen.communicate()
        return GitResult(
            returncode=self._popen.returncode,
            stdout=(out or b"").decode("utf-8", errors="replace"),
            stderr=(err or b"").decode("utf-8", errors="replace"),
        )

    def close(self) -> None:
        if self._popen.returncode is not None:
            return
        if self._popen.poll() is None:
            self._popen.kill()
        # communicate() closes the pipes and reaps the child
        self._popen.communicate()


@contextmanager
def start_git(args: list[str], cwd: Path) -> Iterator[GitProcess]:
    """
    Start a git command and stream its stdout.

    The process is always reaped on exit; if the caller stops reading early
    the process is killed.

    Example:
        with start_git(["ls-remote", "--", "origin"], repo) as proc:
            for line in proc:
                ...
            result = proc.wait()
    """
    cmd = ["git", "-C", str(cwd)] + args
    logger.debug(f"start: {' '.join(cmd)}")
    popen = subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    proc = GitProcess(args, popen)
    try:
        yield proc
    finally:
        proc.close()
