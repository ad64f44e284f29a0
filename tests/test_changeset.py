"""Tests for gitfront.lib.changeset."""

from pathlib import Path
from unittest.mock import patch

import pytest

from gitfront.git.status import StatusEntry
from gitfront.lib.changeset import infer_commit_files, select_paths
from gitfront.lib.errors import NothingChanged, StagedMissingFiles, UnmergedChanges


class TestSelectPaths:
    """Which entries get committed."""

    def test_includes_committable_changes(self):
        entries = [
            StatusEntry("A ", "added.txt"),
            StatusEntry(" M", "modified.txt"),
            StatusEntry("D ", "removed.txt"),
            StatusEntry("C ", "copy.txt", "orig.txt"),
            StatusEntry("R ", "new.txt", "old.txt"),
        ]
        assert select_paths(entries) == [
            ":/:added.txt",
            ":/:modified.txt",
            ":/:removed.txt",
            ":/:copy.txt",
            ":/:new.txt",
        ]

    def test_skips_untracked_and_ignored(self):
        entries = [
            StatusEntry("??", "scratch.txt"),
            StatusEntry("!!", "build/"),
            StatusEntry(" M", "real.txt"),
        ]
        assert select_paths(entries) == [":/:real.txt"]

    def test_missing_files_not_committed(self):
        entries = [StatusEntry(" D", "gone.txt"), StatusEntry(" M", "real.txt")]
        assert select_paths(entries) == [":/:real.txt"]

    def test_worktree_rename_committed(self):
        assert select_paths([StatusEntry(" R", "new.txt", "old.txt")]) == [":/:new.txt"]

    def test_accepts_generator(self):
        assert select_paths(e for e in [StatusEntry("A ", "a.txt")]) == [":/:a.txt"]


class TestSelectPathsErrors:
    """Blocking conditions and their precedence."""

    def test_unmerged_blocks_everything(self):
        entries = [
            StatusEntry("UU", "conflict.txt"),
            StatusEntry("A ", "a.txt"),
            StatusEntry("A ", "b.txt"),
        ]
        with pytest.raises(UnmergedChanges) as exc:
            select_paths(entries)
        assert exc.value.count == 1
        assert str(exc.value) == "1 unmerged file; see 'gf status'"

    def test_unmerged_plural(self):
        with pytest.raises(UnmergedChanges) as exc:
            select_paths([StatusEntry("UU", "a"), StatusEntry("AA", "b"), StatusEntry("DD", "c")])
        assert str(exc.value) == "3 unmerged files; see 'gf status'"

    def test_unmerged_wins_over_nothing_changed(self):
        with pytest.raises(UnmergedChanges):
            select_paths([StatusEntry("UU", "a"), StatusEntry(" D", "b")])

    def test_nothing_changed(self):
        with pytest.raises(NothingChanged) as exc:
            select_paths([])
        assert exc.value.missing == 0
        assert str(exc.value) == "nothing changed"

    def test_nothing_changed_untracked_only(self):
        with pytest.raises(NothingChanged):
            select_paths([StatusEntry("??", "new.txt")])

    def test_nothing_changed_one_missing(self):
        with pytest.raises(NothingChanged) as exc:
            select_paths([StatusEntry(" D", "gone.txt")])
        assert str(exc.value) == "nothing changed (1 missing file; see 'gf status')"

    def test_nothing_changed_two_missing(self):
        with pytest.raises(NothingChanged) as exc:
            select_paths([StatusEntry(" D", "a.txt"), StatusEntry(" D", "b.txt")])
        assert exc.value.missing == 2
        assert str(exc.value) == "nothing changed (2 missing files; see 'gf status')"

    def test_staged_missing_blocks_real_changes(self):
        entries = [StatusEntry("AD", "staged-gone.txt"), StatusEntry("A ", "a.txt")]
        with pytest.raises(StagedMissingFiles) as exc:
            select_paths(entries)
        assert exc.value.count == 1
        assert str(exc.value) == "git has staged changes for 1 missing file; see 'gf status'"

    def test_staged_missing_plural(self):
        entries = [StatusEntry("MD", "a"), StatusEntry("AD", "b"), StatusEntry(" M", "c")]
        with pytest.raises(StagedMissingFiles) as exc:
            select_paths(entries)
        assert "2 missing files" in str(exc.value)

    def test_staged_missing_alone_is_nothing_changed(self):
        with pytest.raises(NothingChanged) as exc:
            select_paths([StatusEntry("AD", "a")])
        assert exc.value.missing == 1


class TestInferCommitFiles:
    @patch("gitfront.lib.changeset.read_worktree_status")
    def test_reads_status(self, mock_status):
        mock_status.return_value = [StatusEntry(" M", "a.txt")]
        assert infer_commit_files(Path("/repo")) == [":/:a.txt"]
        mock_status.assert_called_once_with(Path("/repo"))
