"""Tests for lib/git.py - Git operations."""

import subprocess
from unittest.mock import MagicMock, call, patch

import pytest

from core.errors import GitError
from core.ports import RepoPort, verify_port
from lib.git import GitRepo, changed_files, git_add, git_commit, make_commit, run_git


class TestRunGit:
    """Tests for run_git()."""

    def test_run_git_success(self):
        """Should return stripped output on success."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(stdout="  output  \n\n", returncode=0)

            assert run_git(["status"]) == "output"
            mock_run.assert_called_once()

    def test_run_git_without_strip(self):
        """Should keep leading whitespace when strip=False."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(stdout=" M a.d.ts\n", returncode=0)

            assert run_git(["status"], strip=False) == " M a.d.ts\n"

    def test_run_git_with_args_and_cwd(self, tmp_path):
        """Should pass arguments and cwd to subprocess."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(stdout="", returncode=0)

            run_git(["commit", "-m", "message"], cwd=tmp_path)

            assert mock_run.call_args[0][0] == ["git", "commit", "-m", "message"]
            assert mock_run.call_args[1]["cwd"] == tmp_path

    def test_run_git_raises_on_failure(self):
        """Should raise GitError carrying stderr."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.CalledProcessError(
                128, "git", stderr="fatal: not a git repository"
            )

            with pytest.raises(GitError, match="not a git repository"):
                run_git(["status"])

    def test_run_git_raises_when_git_missing(self):
        """Should raise GitError if git cannot be started."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("git")

            with pytest.raises(GitError, match="could not be started"):
                run_git(["status"])


class TestChangedFiles:
    """Tests for changed_files()."""

    def test_parses_modified_and_untracked(self):
        """Should list modified, added and untracked paths in order."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.return_value = (
                " M package.json\n"
                "M  .travis.yml\n"
                "?? paper-button.d.ts\n"
                "A  lib/mixin.d.ts\n"
            )

            assert changed_files() == [
                "package.json",
                ".travis.yml",
                "paper-button.d.ts",
                "lib/mixin.d.ts",
            ]

    def test_keeps_first_entry_leading_space(self):
        """The first status line's leading space must not be lost."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.return_value = " M package.json\n"

            assert changed_files() == ["package.json"]
            assert mock_run.call_args[1]["strip"] is False

    def test_lists_untracked_files_individually(self):
        """Should ask git for individual untracked files."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.return_value = ""

            changed_files()

            assert "--untracked-files=all" in mock_run.call_args[0][0]

    def test_rename_uses_new_path(self):
        """Renames should report the destination path."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.return_value = "R  old.d.ts -> new.d.ts\n"

            assert changed_files() == ["new.d.ts"]

    def test_unquotes_special_paths(self):
        """Quoted paths should be unescaped."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.return_value = '?? "with\\ttab.d.ts"\n'

            assert changed_files() == ["with\ttab.d.ts"]

    def test_deleted_files_are_listed(self):
        """Deleted paths count as changed."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.return_value = " D stale.d.ts\n"

            assert changed_files() == ["stale.d.ts"]

    def test_empty_status(self):
        """Should return an empty list for a clean tree."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.return_value = ""

            assert changed_files() == []


class TestCommit:
    """Tests for git_add(), git_commit() and make_commit()."""

    def test_git_add_stages_files(self):
        """Should stage the given paths, including deletions."""
        with patch("lib.git.run_git") as mock_run:
            git_add(["a.d.ts", "package.json"])

            assert mock_run.call_args[0][0] == ["add", "--all", "--", "a.d.ts", "package.json"]

    def test_git_add_rejects_empty_list(self):
        """Should refuse to stage nothing."""
        with pytest.raises(GitError):
            git_add([])

    def test_git_commit_passes_message(self):
        """Should commit with the given message."""
        with patch("lib.git.run_git") as mock_run:
            git_commit("Update types.")

            assert mock_run.call_args[0][0] == ["commit", "-m", "Update types."]

    def test_make_commit_adds_then_commits(self, tmp_path):
        """Should stage then commit in the given directory."""
        with patch("lib.git.run_git") as mock_run:
            make_commit(["a.d.ts"], "msg", cwd=tmp_path)

            assert mock_run.call_args_list == [
                call(["add", "--all", "--", "a.d.ts"], cwd=tmp_path),
                call(["commit", "-m", "msg"], cwd=tmp_path),
            ]

    def test_make_commit_propagates_failure(self):
        """Commit failures should raise, not be swallowed."""
        with patch("lib.git.run_git") as mock_run:
            mock_run.side_effect = [None, GitError("nothing to commit")]

            with pytest.raises(GitError, match="nothing to commit"):
                make_commit(["a.d.ts"], "msg")


class TestGitRepo:
    """Tests for the GitRepo adapter."""

    def test_satisfies_repo_port(self, tmp_path):
        """GitRepo should implement RepoPort."""
        assert verify_port(GitRepo(tmp_path), RepoPort)

    def test_delegates_with_bound_directory(self, tmp_path):
        """Should run git operations in its own directory."""
        repo = GitRepo(tmp_path)
        with patch("lib.git.changed_files") as mock_changed, patch(
            "lib.git.make_commit"
        ) as mock_commit:
            mock_changed.return_value = ["a.d.ts"]

            assert repo.changed_files() == ["a.d.ts"]
            repo.commit(["a.d.ts"], "msg")

            mock_changed.assert_called_once_with(cwd=tmp_path)
            mock_commit.assert_called_once_with(["a.d.ts"], "msg", cwd=tmp_path)
