"""
gf push - Push a revision to a remote ref.

When no destination repository is given, push uses the first non-empty of:

    1. branch.*.pushRemote, if the source is a branch
    2. remote.pushDefault
    3. branch.*.remote, if the source is a branch
    4. the remote called "origin"

-d REF updates REF on the remote (refs/heads/REF unless REF starts with
refs/). Without -d the source's own ref name is used, so pushing a detached
commit requires -d.

Pushing fails rather than creating a new ref on the remote unless --create
is passed.
"""

import logging
from pathlib import Path

from gitfront.git.remote import infer_push_repo, push, resolve_destination_ref, verify_remote_ref
from gitfront.git.rev import parse_rev
from gitfront.lib.settings import Settings

logger = logging.getLogger(__name__)


def cmd_push(args, repo: Path, settings: Settings) -> int:
    """Push args.rev to the inferred or given destination."""
    src = parse_rev(repo, args.rev)

    dst_repo = args.dst or infer_push_repo(repo, src.branch)
    dst_ref = resolve_destination_ref(args.dest, src.ref_name)

    create = args.create or settings.push_create
    if not create:
        verify_remote_ref(repo, dst_repo, dst_ref)

    logger.info(f"pushing {src.commit} to {dst_repo} {dst_ref}")
    return push(repo, dst_repo, src.commit, dst_ref, force=args.force)
