"""Post-generation project actions."""

from __future__ import annotations

import logging
import shlex
import shutil
from pathlib import Path

from sprout import git
from sprout.console import console
from sprout.data.dataset import ResolvedDataSet, ordered_commands
from sprout.executors import Executor, get_executor
from sprout.executors.base import CommandResult
from sprout.git import GitError

logger = logging.getLogger(__name__)

GITIGNORE = ".gitignore"


class ProjectActions:
    """Run the steps that follow rendering a project.

    In order: git init, the selected template commands, the IDE openers,
    then removal of the project for dry runs. Each step only warns on
    failure.
    """

    def __init__(
        self,
        project_dir: Path,
        data: ResolvedDataSet,
        executor: Executor | None = None,
    ) -> None:
        self.project_dir = project_dir
        self.data = data
        self.executor = executor or get_executor()

    def run(self) -> list[CommandResult]:
        """Run every action and return the results of executed commands."""
        self.init_repository()
        results = self.run_commands()
        results += self.open_editors()
        if self.data.is_dry:
            self.remove_project()
        return results

    def init_repository(self) -> bool:
        """Initialize git and stage .gitignore when the template has one."""
        try:
            git.init(self.project_dir)
            if (self.project_dir / GITIGNORE).exists():
                git.add(self.project_dir, GITIGNORE)
        except GitError as e:
            logger.warning("Cannot initialize git repository: %s", e)
            return False
        return True

    def run_commands(self) -> list[CommandResult]:
        """Run the selected template commands in scheduler order."""
        results: list[CommandResult] = []
        for command in ordered_commands(self.data):
            console.print(f"[bold]$[/bold] {command}")
            results.append(self._execute(command))
        return results

    def open_editors(self) -> list[CommandResult]:
        """Open the project in IntelliJ IDEA and/or VS Code when requested."""
        results: list[CommandResult] = []
        if self.data.is_idea:
            results.append(
                self._execute(f"idea {shlex.quote(str(self.project_dir))}")
            )
        if self.data.is_vs_code:
            results.append(self._execute("code ."))
        return results

    def remove_project(self) -> None:
        """Delete the generated project (dry runs)."""
        shutil.rmtree(self.project_dir, ignore_errors=True)
        console.print(f"[dim]Dry run: removed {self.project_dir}[/dim]")

    def _execute(self, command: str) -> CommandResult:
        result = self.executor.run(command, self.project_dir)
        if result.stdout:
            console.print(result.stdout.rstrip(), markup=False, highlight=False)
        if not result.ok:
            logger.warning(
                "Command '%s' exited with %d: %s",
                command,
                result.exit_code,
                result.stderr.strip(),
            )
        return result
