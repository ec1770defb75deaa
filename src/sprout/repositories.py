"""Local cache of remote template repositories."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from sprout.git import operations as git
from sprout.git.operations import GitError

logger = logging.getLogger(__name__)

REPOSITORIES_DIRNAME = "repositories"


def repository_path(home: Path, url: str) -> Path:
    """Return the cache directory of a repository URL.

    The directory is named after the SHA-256 hex digest of the URL.
    """
    digest = hashlib.sha256(url.encode()).hexdigest()
    return home / REPOSITORIES_DIRNAME / digest


@dataclass(frozen=True)
class SyncResult:
    """Outcome of syncing one repository."""

    url: str
    path: Path
    action: str  # "cloned", "updated" or "failed"
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def sync_repository(home: Path, url: str) -> SyncResult:
    """Clone a repository into the cache, or rebase an existing clone."""
    path = repository_path(home, url)
    try:
        if path.is_dir():
            git.pull_rebase(path)
            action = "updated"
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            git.clone(url, path)
            action = "cloned"
    except GitError as e:
        logger.warning("Cannot sync %s: %s", url, e)
        return SyncResult(url=url, path=path, action="failed", error=str(e))

    logger.info("%s %s", action.capitalize(), url)
    return SyncResult(url=url, path=path, action=action)


def sync_repositories(home: Path, urls: Iterable[str]) -> list[SyncResult]:
    """Sync every repository; a failure does not stop the others."""
    return [sync_repository(home, url) for url in urls]
