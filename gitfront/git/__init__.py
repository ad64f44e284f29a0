"""Git operations for gitfront.

Thin wrappers around the git binary. Command handlers should use these
instead of calling subprocess directly.

Return type conventions:
- Functions returning GitResult: Caller must check .success before using output.
- Functions returning int: git's exit code from an interactive run.
- Functions returning parsed values raise GitfrontError subclasses on failure.
"""

from gitfront.git.runner import (
    GitResult,
    GitProcess,
    run_git,
    run_git_interactive,
    start_git,
)
from gitfront.git.config import (
    config_value,
    list_remotes,
)
from gitfront.git.rev import (
    Revision,
    parse_hash,
    parse_rev,
    get_repo_root,
)
from gitfront.git.remote import (
    resolve_destination,
    infer_push_repo,
    resolve_destination_ref,
    scan_remote_listing,
    ref_exists,
    verify_remote_ref,
    push,
)
from gitfront.git.status import (
    StatusKind,
    StatusEntry,
    classify,
    read_status_entries,
    read_worktree_status,
    render_status,
)
from gitfront.git.commit import (
    commit_args,
    commit,
)

__all__ = [
    # runner
    "GitResult",
    "GitProcess",
    "run_git",
    "run_git_interactive",
    "start_git",
    # config
    "config_value",
    "list_remotes",
    # rev
    "Revision",
    "parse_hash",
    "parse_rev",
    "get_repo_root",
    # remote
    "resolve_destination",
    "infer_push_repo",
    "resolve_destination_ref",
    "scan_remote_listing",
    "ref_exists",
    "verify_remote_ref",
    "push",
    # status
    "StatusKind",
    "StatusEntry",
    "classify",
    "read_status_entries",
    "read_worktree_status",
    "render_status",
    # commit
    "commit_args",
    "commit",
]
