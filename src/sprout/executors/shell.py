"""Shell executor implementation."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from sprout.executors.base import CommandResult, Executor

logger = logging.getLogger(__name__)


class Shell(Enum):
    """Shells commands can run in."""

    BASH = "bash"
    ZSH = "zsh"
    SH = "sh"

    @classmethod
    def detect(cls, env: Mapping[str, str] | None = None) -> Shell:
        """Detect the user's shell from the environment.

        ``$BASH`` means bash, ``$UPDATE_ZSH_DAYS`` (oh-my-zsh) means zsh,
        anything else falls back to sh.
        """
        env = os.environ if env is None else env
        if env.get("BASH"):
            return cls.BASH
        if env.get("UPDATE_ZSH_DAYS"):
            return cls.ZSH
        return cls.SH


class ShellExecutor(Executor):
    """Executor that runs commands with ``<shell> -c``."""

    name = "shell"

    def __init__(self, shell: Shell | None = None) -> None:
        self.shell = shell or Shell.detect()

    def run(self, command: str, cwd: Path) -> CommandResult:
        """Run a command line and capture its output."""
        logger.debug("%s -c %s (in %s)", self.shell.value, command, cwd)
        try:
            result = subprocess.run(
                [self.shell.value, "-c", command],
                cwd=cwd,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            return CommandResult(command=command, exit_code=127, stderr=str(e))
        return CommandResult(
            command=command,
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
