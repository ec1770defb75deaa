"""Executor registry and utilities."""

from sprout.executors.base import CommandResult, Executor
from sprout.executors.shell import Shell, ShellExecutor

EXECUTORS: dict[str, type[Executor]] = {
    "shell": ShellExecutor,
}

DEFAULT_EXECUTOR = "shell"


def get_executor(name: str | None = None) -> Executor:
    """Get an executor instance by name. Defaults to shell."""
    executor_name = name or DEFAULT_EXECUTOR
    if executor_name not in EXECUTORS:
        raise ValueError(f"Unknown executor: {executor_name}")
    return EXECUTORS[executor_name]()


__all__ = [
    "DEFAULT_EXECUTOR",
    "EXECUTORS",
    "CommandResult",
    "Executor",
    "Shell",
    "ShellExecutor",
    "get_executor",
]
