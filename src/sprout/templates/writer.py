"""Writing rendered artifacts into the project directory."""

from __future__ import annotations

import logging
from pathlib import Path

from sprout.templates.renderer import Artifact

logger = logging.getLogger(__name__)

HIDDEN_MARKER = "!"


def hidden_name(name: str) -> str:
    """Return ``name`` with a leading hidden marker replaced by ``.``."""
    if name.startswith(HIDDEN_MARKER):
        return "." + name[len(HIDDEN_MARKER) :]
    return name


class ProjectWriter:
    """Write artifacts below a project root without overwriting anything."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, artifact: Artifact) -> Path | None:
        """Write one artifact, creating parent directories as needed.

        Returns the written path, or None if the file already exists or
        would land outside the project root.
        """
        path = self.root / artifact.name
        if not path.resolve().is_relative_to(self.root.resolve()):
            logger.warning("Refusing to write %s outside %s", artifact.name, self.root)
            return None
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with path.open("x", encoding="utf-8") as f:
                f.write(artifact.content)
        except FileExistsError:
            logger.warning("Not overwriting existing file %s", path)
            return None
        logger.debug("Wrote %s", path)
        return path

    def escape_hidden(self) -> list[Path]:
        """Rename every marked file and directory to its hidden name.

        Deepest paths go first so parents are renamed after their children.
        Returns the new paths.
        """
        marked = [
            path
            for path in self.root.rglob(f"{HIDDEN_MARKER}*")
            if path.name.startswith(HIDDEN_MARKER)
        ]
        renamed: list[Path] = []
        for path in sorted(marked, key=lambda p: len(p.parts), reverse=True):
            target = path.with_name(hidden_name(path.name))
            if target.exists():
                logger.warning("Cannot rename %s, %s exists", path, target.name)
                continue
            path.rename(target)
            renamed.append(target)
        return renamed
