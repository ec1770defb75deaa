"""Git CLI operations used by sprout."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when a git command fails."""


def _run_git(args: list[str], cwd: Path | None = None) -> str:
    """Run a git command and return its stdout.

    Raises GitError with git's stderr on a non-zero exit.
    """
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise GitError("git is not installed") from e
    if result.returncode != 0:
        raise GitError(result.stderr.strip() or f"git {args[0]} failed")
    return result.stdout


def clone(url: str, destination: Path, depth: int | None = 1) -> None:
    """Clone a repository, shallow by default."""
    args = ["clone"]
    if depth is not None:
        args += ["--depth", str(depth)]
    _run_git([*args, url, str(destination)])


def pull_rebase(repo: Path) -> None:
    """Update a clone with ``git pull --rebase``."""
    _run_git(["pull", "--rebase"], cwd=repo)


def init(path: Path) -> None:
    """Initialize a new repository."""
    _run_git(["init"], cwd=path)


def add(path: Path, *files: str) -> None:
    """Stage files in the repository at ``path``."""
    _run_git(["add", *files], cwd=path)
