"""Git operations.

TIER 1: May import from core only.
"""

import subprocess
from pathlib import Path

from core.errors import GitError


def run_git(args: list[str], cwd: Path | None = None, strip: bool = True) -> str:
    """Run a git command.

    Args:
        args: Git command arguments.
        cwd: Working directory (defaults to current).
        strip: Strip surrounding whitespace from the output.

    Returns:
        Command output.

    Raises:
        GitError: If command fails or git cannot be started.
    """
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            cwd=cwd,
            check=True,
            timeout=60,
        )
        return result.stdout.strip() if strip else result.stdout
    except subprocess.TimeoutExpired as e:
        raise GitError(f"git {' '.join(args)} timed out after 60s") from e
    except subprocess.CalledProcessError as e:
        raise GitError(f"git {' '.join(args)} failed: {e.stderr}") from e
    except OSError as e:
        raise GitError(f"git {' '.join(args)} could not be started: {e}") from e


def _unquote(path: str) -> str:
    """Undo git's quoting of paths with special characters."""
    if len(path) >= 2 and path[0] == path[-1] == '"':
        return path[1:-1].encode("latin-1", "backslashreplace").decode("unicode_escape")
    return path


def changed_files(cwd: Path | None = None) -> list[str]:
    """List paths with working tree or index changes.

    Untracked files are listed individually (not as their directory) so
    newly generated files are visible.

    Args:
        cwd: Working directory (defaults to current).

    Returns:
        Paths relative to the repo root, in git status order.
    """
    output = run_git(
        ["-c", "core.quotepath=off", "status", "--porcelain", "--untracked-files=all"],
        cwd=cwd,
        strip=False,
    )
    paths: list[str] = []

    for line in output.splitlines():
        if not line.strip():
            continue
        filepath = line[3:]

        # Renames and copies: "R  old -> new"
        if line[0] in "RC" and " -> " in filepath:
            filepath = filepath.split(" -> ", 1)[1]

        paths.append(_unquote(filepath.strip()))

    return paths


def git_add(files: list[str], cwd: Path | None = None) -> None:
    """Stage files, including deletions.

    Args:
        files: List of file paths to stage.
        cwd: Working directory (defaults to current).
    """
    if not files:
        raise GitError("No files to stage")
    run_git(["add", "--all", "--", *files], cwd=cwd)


def git_commit(message: str, cwd: Path | None = None) -> None:
    """Commit the index.

    Args:
        message: Commit message.
        cwd: Working directory (defaults to current).
    """
    run_git(["commit", "-m", message], cwd=cwd)


def make_commit(files: list[str], message: str, cwd: Path | None = None) -> None:
    """Stage and commit exactly the given files.

    Args:
        files: Paths relative to the repo root.
        message: Commit message.
        cwd: Working directory (defaults to current).

    Raises:
        GitError: If staging or committing fails.
    """
    git_add(files, cwd=cwd)
    git_commit(message, cwd=cwd)


class GitRepo:
    """Git working tree adapter bound to one directory.

    Implements: core.ports.RepoPort
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def changed_files(self) -> list[str]:
        return changed_files(cwd=self.path)

    def commit(self, files: list[str], message: str) -> None:
        make_commit(files, message, cwd=self.path)

    def __repr__(self) -> str:
        return f"GitRepo({str(self.path)!r})"
