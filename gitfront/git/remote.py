"""Push target resolution and remote ref verification."""

import logging
from pathlib import Path
from typing import Callable, Iterable

from gitfront.git.config import config_value, list_remotes
from gitfront.git.runner import run_git_interactive, start_git
from gitfront.lib.constants import BRANCH_PREFIX, REFS_PREFIX
from gitfront.lib.errors import (
    AmbiguousDestination,
    MalformedListing,
    NoDestination,
    RefNotFound,
    RemoteUnreachable,
)

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"

# Width of a SHA-1 in ls-remote output; the tab sits at this index
HASH_WIDTH = 40
_HEX_BYTES = frozenset(b"0123456789abcdefABCDEF")

Lookup = Callable[[], str | None]


def push_remote_lookups(
    branch: str | None,
    get_config: Callable[[str], str],
    get_remotes: Callable[[], Iterable[str]],
) -> list[tuple[str, Lookup]]:
    """
    Build the ordered lookup chain for a push destination.

    Same precedence git itself uses:
        1. branch.<name>.pushRemote (only on a branch)
        2. remote.pushDefault
        3. branch.<name>.remote (only on a branch)
        4. "origin", if such a remote exists

    Returns (description, lookup) pairs. Lookups are evaluated lazily.
    """
    lookups: list[tuple[str, Lookup]] = []
    if branch:
        lookups.append((f"branch.{branch}.pushRemote", lambda: get_config(f"branch.{branch}.pushRemote")))
    lookups.append(("remote.pushDefault", lambda: get_config("remote.pushDefault")))
    if branch:
        lookups.append((f"branch.{branch}.remote", lambda: get_config(f"branch.{branch}.remote")))
    lookups.append((
        f"remote {DEFAULT_REMOTE}",
        lambda: DEFAULT_REMOTE if DEFAULT_REMOTE in set(get_remotes()) else None,
    ))
    return lookups


def resolve_destination(
    branch: str | None,
    get_config: Callable[[str], str],
    get_remotes: Callable[[], Iterable[str]],
) -> str:
    """Pick the repository a push goes to. First non-empty lookup wins."""
    for source, lookup in push_remote_lookups(branch, get_config, get_remotes):
        value = lookup()
        if value:
            logger.debug(f"push destination {value!r} from {source}")
            return value
    raise NoDestination()


def infer_push_repo(repo: Path, branch: str | None) -> str:
    """resolve_destination() backed by the repository's git config."""
    return resolve_destination(
        branch,
        get_config=lambda key: config_value(repo, key),
        get_remotes=lambda: list_remotes(repo),
    )


def resolve_destination_ref(explicit_ref: str | None, source_ref_name: str | None) -> str:
    """
    Pick the remote ref a push updates.

    An explicit ref starting with refs/ is used verbatim; anything else is a
    branch name. Without an explicit ref the source's own ref is reused.
    """
    if explicit_ref:
        if explicit_ref.startswith(REFS_PREFIX):
            return explicit_ref
        return BRANCH_PREFIX + explicit_ref
    if not source_ref_name:
        raise AmbiguousDestination()
    return source_ref_name


def _is_hex(b: bytes) -> bool:
    return all(c in _HEX_BYTES for c in b)


def scan_remote_listing(lines: Iterable[bytes | str], ref: str) -> bool:
    """
    Scan git ls-remote output for an exact ref match.

    Each line is "<40 hex>\\t<ref>\\n". Stops at the first match.

    Raises:
        MalformedListing: a line doesn't start with a SHA-1 and a tab
    """
    want = ref.encode("utf-8")
    for lineno, line in enumerate(lines, 1):
        if isinstance(line, str):
            line = line.encode("utf-8")
        if line.endswith(b"\n"):
            line = line[:-1]
        if HASH_WIDTH >= len(line) or line[HASH_WIDTH] != ord("\t") or not _is_hex(line[:HASH_WIDTH]):
            raise MalformedListing(lineno, line)
        if line[HASH_WIDTH + 1:] == want:
            return True
    return False


def ref_exists(repo: Path, remote: str, ref: str) -> bool:
    """
    Check whether a remote has a ref, without pushing anything.

    Raises:
        MalformedListing: unparseable ls-remote output
        RemoteUnreachable: ls-remote failed
    """
    with start_git(["ls-remote", "--quiet", "--refs", "--", remote, ref], repo) as proc:
        if scan_remote_listing(proc, ref):
            logger.debug(f"{remote} has {ref}")
            return True
        result = proc.wait()
    if not result.success:
        raise RemoteUnreachable(remote, ref, result.stderr.strip())
    logger.debug(f"{remote} does not have {ref}")
    return False


def verify_remote_ref(repo: Path, remote: str, ref: str) -> None:
    """Fail with RefNotFound unless the remote already has ref."""
    if not ref_exists(repo, remote, ref):
        raise RefNotFound(remote, ref)


def push(repo: Path, remote: str, commit: str, ref: str, force: bool = False) -> int:
    """Push a commit to a remote ref. Returns git's exit code."""
    args = ["push"]
    if force:
        args.append("--force")
    args += ["--", remote, f"{commit}:{ref}"]
    return run_git_interactive(args, repo)
