"""
gf mail - Send a revision to Gerrit for review.

Pushes to refs/for/<branch> on the destination repository, encoding review
options (reviewers, cc, message, notification settings) into the ref.
The destination repository is chosen the same way as for gf push.
Defaults for reviewers, cc, notify and publish-comments come from the
mail section of the settings file; flags add to or override them.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from gitfront.git.remote import infer_push_repo, push
from gitfront.git.rev import parse_rev
from gitfront.lib import gerrit
from gitfront.lib.errors import AmbiguousDestination, InvalidGerritOptions
from gitfront.lib.settings import Settings

logger = logging.getLogger(__name__)


def build_options(args, settings: Settings) -> gerrit.GerritOptions:
    """Merge settings defaults with command-line flags."""
    defaults = settings.mail
    publish = defaults.publish_comments
    if args.publish_comments is not None:
        publish = args.publish_comments
    try:
        return gerrit.GerritOptions(
            publish_comments=publish,
            message=args.message,
            reviewers=defaults.reviewers + (args.reviewer or []),
            cc=defaults.cc + (args.cc or []),
            notify=args.notify or defaults.notify,
            notify_to=args.notify_to or [],
            notify_cc=args.notify_cc or [],
            notify_bcc=args.notify_bcc or [],
            topic=args.topic or defaults.topic,
            labels=args.label or [],
        )
    except ValidationError as e:
        details = "; ".join(err["msg"] for err in e.errors())
        raise InvalidGerritOptions(f"invalid review options: {details}") from None


def cmd_mail(args, repo: Path, settings: Settings) -> int:
    """Push args.rev to refs/for/<branch> with review options."""
    src = parse_rev(repo, args.rev)

    branch = args.for_branch or src.branch
    if not branch:
        raise AmbiguousDestination(args.rev)
    dst_repo = args.dst or infer_push_repo(repo, src.branch)

    ref = gerrit.encode(branch, build_options(args, settings))
    logger.info(f"mailing {src.commit} to {dst_repo} {ref}")
    return push(repo, dst_repo, src.commit, ref)
