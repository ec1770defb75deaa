"""Explicit runtime context shared by CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sprout.config.loader import get_home_config_path, get_sprout_home, load_config
from sprout.config.schema import SproutConfig
from sprout.repositories import repository_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SproutContext:
    """Configuration and home directory, built once per invocation."""

    config: SproutConfig
    home: Path

    @classmethod
    def load(cls, home: Path | None = None) -> SproutContext:
        home = home or get_sprout_home()
        return cls(config=load_config(home), home=home)

    @property
    def config_path(self) -> Path:
        return get_home_config_path(self.home)

    @property
    def repositories(self) -> tuple[str, ...]:
        return self.config.repositories or ()

    def library_roots(self) -> list[Path]:
        """Return template library roots in priority order.

        Local libraries come first, then cached repositories, each in
        configuration order. Missing directories are skipped.
        """
        roots: list[Path] = []
        for library in self.config.libraries or ():
            path = Path(library).expanduser()
            if path.is_dir():
                roots.append(path)
            else:
                logger.warning("Template library %s does not exist", path)

        for url in self.repositories:
            path = repository_path(self.home, url)
            if path.is_dir():
                roots.append(path)
            else:
                logger.warning("%s is not downloaded, run 'sprout upgrade'", url)
        return roots
