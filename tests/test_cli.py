"""Tests for gitfront.cli argument parsing and error reporting."""

from pathlib import Path
from unittest.mock import patch

import pytest

from gitfront.cli import build_parser, main
from gitfront.commands import commit, mail, push, status
from gitfront.lib.errors import NoDestination
from gitfront.lib.settings import Settings


class TestBuildParser:
    """Test the gf argument parser."""

    def test_push_defaults(self):
        args = build_parser().parse_args(["push"])
        assert args.func is push.cmd_push
        assert args.dst is None
        assert args.rev == "HEAD"
        assert args.dest is None
        assert args.create is False
        assert args.force is False

    def test_push_all_flags(self):
        args = build_parser().parse_args(["push", "fork", "-r", "abc", "-d", "topic", "--create", "-f"])
        assert args.dst == "fork"
        assert args.rev == "abc"
        assert args.dest == "topic"
        assert args.create is True
        assert args.force is True

    def test_mail_repeatable_flags(self):
        args = build_parser().parse_args([
            "mail", "-d", "main", "-R", "a@example.com", "-R", "b@example.com,c@example.com",
            "--cc", "d@example.com", "-l", "Code-Review+1", "--notify", "OWNER",
        ])
        assert args.func is mail.cmd_mail
        assert args.for_branch == "main"
        assert args.reviewer == ["a@example.com", "b@example.com,c@example.com"]
        assert args.cc == ["d@example.com"]
        assert args.label == ["Code-Review+1"]
        assert args.notify == "OWNER"

    def test_mail_publish_comments_tristate(self):
        parser = build_parser()
        assert parser.parse_args(["mail"]).publish_comments is None
        assert parser.parse_args(["mail", "--publish-comments"]).publish_comments is True
        assert parser.parse_args(["mail", "--no-publish-comments"]).publish_comments is False

    def test_mail_publish_flags_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["mail", "--publish-comments", "--no-publish-comments"])

    def test_mail_notify_case_insensitive(self):
        args = build_parser().parse_args(["mail", "--notify", "owner_reviewers"])
        assert args.notify == "OWNER_REVIEWERS"

    def test_mail_bad_notify(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["mail", "--notify", "EVERYONE"])

    def test_commit(self):
        args = build_parser().parse_args(["commit", "a.txt", "b.txt", "-m", "msg", "--amend"])
        assert args.func is commit.cmd_commit
        assert args.files == ["a.txt", "b.txt"]
        assert args.message == "msg"
        assert args.amend is True

    def test_commit_no_files(self):
        args = build_parser().parse_args(["commit"])
        assert args.files == []

    def test_status(self):
        args = build_parser().parse_args(["status"])
        assert args.func is status.cmd_status

    def test_global_repo_option(self):
        args = build_parser().parse_args(["-C", "/tmp/work", "status"])
        assert args.repo == Path("/tmp/work")

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """Test main() dispatch and error handling."""

    @patch("gitfront.cli.load_settings")
    @patch("gitfront.cli.get_repo_root")
    def test_dispatches_with_settings(self, mock_root, mock_settings, tmp_path):
        mock_root.return_value = tmp_path
        mock_settings.return_value = Settings(push_create=True)
        with patch("gitfront.commands.status.read_worktree_status", return_value=[]):
            assert main(["-C", str(tmp_path), "status"]) == 0
        mock_root.assert_called_once_with(tmp_path.resolve())
        mock_settings.assert_called_once_with(tmp_path)

    @patch("gitfront.cli.load_settings", return_value=Settings())
    @patch("gitfront.cli.get_repo_root")
    def test_error_reported(self, mock_root, mock_settings, tmp_path, capsys):
        mock_root.return_value = tmp_path
        with patch("gitfront.commands.push.parse_rev", side_effect=NoDestination()):
            assert main(["-C", str(tmp_path), "push"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("ERROR: ")
        assert "origin" in err

    @patch("gitfront.cli.load_settings", return_value=Settings())
    @patch("gitfront.cli.get_repo_root")
    def test_returns_command_exit_code(self, mock_root, mock_settings, tmp_path):
        mock_root.return_value = tmp_path
        with patch("gitfront.commands.commit.infer_commit_files", return_value=[":/:a"]), \
             patch("gitfront.commands.commit.commit", return_value=3):
            assert main(["-C", str(tmp_path), "commit"]) == 3
