"""Generate a project directory from a template."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import click

from sprout.data.dataset import ResolvedDataSet
from sprout.templates.base import ProjectTemplate
from sprout.templates.renderer import TemplateRenderer
from sprout.templates.writer import ProjectWriter

logger = logging.getLogger(__name__)


class GenerationAborted(Exception):
    """Raised when the user declines to overwrite an existing project."""


@dataclass
class GenerationReport:
    """Files written and templates that produced nothing."""

    project_dir: Path
    written: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def _confirm_overwrite(path: Path) -> bool:
    return click.confirm(f"{path} already exists. Overwrite it?", default=False)


class ProjectGenerator:
    """Render every file of a template into ``<cwd>/<project name>``."""

    def __init__(
        self,
        template: ProjectTemplate,
        data: ResolvedDataSet,
        cwd: Path | None = None,
        confirm: Callable[[Path], bool] = _confirm_overwrite,
    ) -> None:
        self.template = template
        self.data = data
        self.project_dir = (cwd or Path.cwd()) / data.project_name
        self._confirm = confirm

    def prepare_destination(self) -> None:
        """Clear an existing project directory.

        With ``--force`` it is removed outright, otherwise the user is asked.
        Raises GenerationAborted if they refuse.
        """
        if not self.project_dir.exists():
            return
        if not self.data.is_force and not self._confirm(self.project_dir):
            raise GenerationAborted(f"{self.project_dir} already exists")
        logger.info("Removing existing %s", self.project_dir)
        shutil.rmtree(self.project_dir)

    def generate(self) -> GenerationReport:
        """Render and write the project."""
        self.prepare_destination()
        self.project_dir.mkdir(parents=True)

        renderer = TemplateRenderer(self.template.path)
        writer = ProjectWriter(self.project_dir)
        report = GenerationReport(project_dir=self.project_dir)

        for template_name in self.template.template_names():
            artifacts = renderer.instantiate(self.data, template_name)
            if not artifacts:
                report.skipped.append(template_name)
            for artifact in artifacts:
                path = writer.write(artifact)
                if path is not None:
                    report.written.append(path)

        if writer.escape_hidden():
            # written paths may sit below a renamed directory
            report.written = sorted(
                path for path in self.project_dir.rglob("*") if path.is_file()
            )
        return report
