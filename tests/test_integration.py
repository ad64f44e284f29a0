"""End-to-end tests against real git repositories in tmp_path."""

import shutil
import subprocess
from pathlib import Path

import pytest

from gitfront.cli import main
from gitfront.git import parse_rev, ref_exists, read_worktree_status
from gitfront.git.status import StatusEntry
from gitfront.lib.changeset import infer_commit_files
from gitfront.lib.errors import NothingChanged
from gitfront.lib.statusparse import StatusLine, parse_status

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(["git", "-C", str(cwd), *args], capture_output=True, text=True, check=True)
    return result.stdout


@pytest.fixture(autouse=True)
def git_env(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture
def work(tmp_path):
    """A repository with one commit on main and a bare origin."""
    origin = tmp_path / "origin.git"
    git(tmp_path, "init", "--bare", str(origin))
    git(origin, "symbolic-ref", "HEAD", "refs/heads/main")

    repo = tmp_path / "work"
    git(tmp_path, "init", str(repo))
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    (repo / "a.txt").write_text("one\n")
    git(repo, "add", "a.txt")
    git(repo, "commit", "-q", "-m", "initial")
    git(repo, "remote", "add", "origin", str(origin))
    return repo


class TestPush:
    def test_new_branch_needs_create(self, work, capsys):
        assert main(["-C", str(work), "push"]) == 1
        assert "ERROR: " in capsys.readouterr().err
        assert not ref_exists(work, "origin", "refs/heads/main")

        assert main(["-C", str(work), "push", "--create"]) == 0
        assert ref_exists(work, "origin", "refs/heads/main")

    def test_existing_branch_updates(self, work):
        git(work, "push", "-q", "origin", "main")
        (work / "a.txt").write_text("two\n")
        git(work, "commit", "-q", "-am", "second")

        assert main(["-C", str(work), "push"]) == 0
        head = parse_rev(work, "HEAD").commit
        assert git(work, "ls-remote", "origin", "refs/heads/main").split("\t")[0] == head

    def test_dest_option(self, work):
        assert main(["-C", str(work), "push", "-d", "release", "--create"]) == 0
        assert ref_exists(work, "origin", "refs/heads/release")


class TestCommit:
    def test_commits_tracked_changes_only(self, work):
        (work / "a.txt").write_text("changed\n")
        (work / "untracked.txt").write_text("x\n")

        assert main(["-C", str(work), "commit", "-m", "change"]) == 0
        assert read_worktree_status(work) == [StatusEntry("??", "untracked.txt")]

    def test_from_subdirectory(self, work):
        sub = work / "sub"
        sub.mkdir()
        (work / "a.txt").write_text("changed\n")
        assert main(["-C", str(sub), "commit", "-m", "change"]) == 0
        assert read_worktree_status(work) == []

    def test_nothing_changed(self, work):
        with pytest.raises(NothingChanged):
            infer_commit_files(work)


class TestStatus:
    def test_output_parses(self, work, capsys):
        git(work, "mv", "a.txt", "b.txt")
        (work / "new.txt").write_text("x\n")

        assert main(["-C", str(work), "status"]) == 0
        result = parse_status(capsys.readouterr().out)
        assert result.ok
        assert result.entries == [
            StatusLine("A", "b.txt", "a.txt"),
            StatusLine("R", "a.txt"),
            StatusLine("?", "new.txt"),
        ]
