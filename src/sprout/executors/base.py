"""Base executor class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CommandResult:
    """Exit code and captured output of one command."""

    command: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Executor(ABC):
    """Base class for environments that run post-generation commands."""

    name: str

    @abstractmethod
    def run(self, command: str, cwd: Path) -> CommandResult:
        """Run a command line in ``cwd`` and wait for it to finish."""
        ...
