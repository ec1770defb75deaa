"""Git integration for sprout."""

from sprout.git.operations import GitError, add, clone, init, pull_rebase

__all__ = [
    "GitError",
    "add",
    "clone",
    "init",
    "pull_rebase",
]
