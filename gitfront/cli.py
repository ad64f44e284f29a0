#!/usr/bin/env python3
"""gf CLI entrypoint."""

import sys
import argparse
import logging
from pathlib import Path

from gitfront.git.rev import get_repo_root
from gitfront.lib.constants import EXIT_ERROR
from gitfront.lib.errors import GitfrontError
from gitfront.lib.gerrit import NOTIFY_MODES
from gitfront.lib.settings import load_settings
from gitfront.commands import push as cmd_push_module
from gitfront.commands import mail as cmd_mail_module
from gitfront.commands import commit as cmd_commit_module
from gitfront.commands import status as cmd_status_module

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='gf', description='Workflow-oriented front end for git')
    parser.add_argument('-C', dest='repo', type=Path, default=None, help='Run as if started in this directory')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log git invocations and decisions')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # gf push
    p_push = subparsers.add_parser('push', help='Push changes to the specified destination')
    p_push.add_argument('dst', nargs='?', help='Destination repository (inferred from config if omitted)')
    p_push.add_argument('-r', '--rev', default='HEAD', help='Source revision (default: HEAD)')
    p_push.add_argument('-d', '--dest', help='Destination ref (branch name or refs/...)')
    p_push.add_argument('--create', action='store_true', help='Allow pushing a new ref')
    p_push.add_argument('-f', '--force', action='store_true', help='Allow non-fast-forward updates')
    p_push.set_defaults(func=cmd_push_module.cmd_push)

    # gf mail
    p_mail = subparsers.add_parser('mail', help='Send changes to Gerrit for review')
    p_mail.add_argument('dst', nargs='?', help='Destination repository (inferred from config if omitted)')
    p_mail.add_argument('-r', '--rev', default='HEAD', help='Source revision (default: HEAD)')
    p_mail.add_argument('-d', '--for', dest='for_branch', help='Target branch (default: source branch)')
    p_mail.add_argument('-R', '--reviewer', action='append', help='Reviewer email (repeatable, comma-separated ok)')
    p_mail.add_argument('--cc', action='append', help='CC email (repeatable, comma-separated ok)')
    p_mail.add_argument('-m', '--message', help='Message for the new patch set')
    p_mail.add_argument('--topic', help='Review topic')
    p_mail.add_argument('-l', '--label', action='append', help='Vote, e.g. Code-Review+1 (repeatable)')
    p_mail.add_argument('--notify', type=str.upper, choices=NOTIFY_MODES, help='Who to notify')
    p_mail.add_argument('--notify-to', action='append', help='Also notify as To (repeatable)')
    p_mail.add_argument('--notify-cc', action='append', help='Also notify as CC (repeatable)')
    p_mail.add_argument('--notify-bcc', action='append', help='Also notify as BCC (repeatable)')
    publish = p_mail.add_mutually_exclusive_group()
    publish.add_argument('--publish-comments', dest='publish_comments', action='store_true', default=None,
                         help='Publish draft comments')
    publish.add_argument('--no-publish-comments', dest='publish_comments', action='store_false', default=None,
                         help='Keep draft comments unpublished')
    p_mail.set_defaults(func=cmd_mail_module.cmd_mail)

    # gf commit
    p_commit = subparsers.add_parser('commit', help='Commit the specified files or all outstanding changes')
    p_commit.add_argument('files', nargs='*', help='Files to commit (default: all changes)')
    p_commit.add_argument('-m', '--message', help='Commit message')
    p_commit.add_argument('--amend', action='store_true', help='Amend the parent of the working copy')
    p_commit.set_defaults(func=cmd_commit_module.cmd_commit)

    # gf status
    p_status = subparsers.add_parser('status', help='Show changed files in the working copy')
    p_status.set_defaults(func=cmd_status_module.cmd_status)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    repo = (args.repo or Path.cwd()).resolve()
    try:
        settings = load_settings(get_repo_root(repo))
        return args.func(args, repo, settings)
    except GitfrontError as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
