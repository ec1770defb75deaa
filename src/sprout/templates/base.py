"""Template directory definition."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TEMPLATE_SUFFIX = ".j2"


@dataclass(frozen=True)
class ProjectTemplate:
    """A ``<lang>-<kind>`` directory inside a template library."""

    lang: str
    kind: str
    path: Path
    library: Path

    @property
    def name(self) -> str:
        return f"{self.lang}-{self.kind}"

    @classmethod
    def from_dir(cls, path: Path) -> ProjectTemplate | None:
        """Create from a template directory, or None if the name has no kind."""
        lang, sep, kind = path.name.partition("-")
        if not sep or not lang or not kind:
            return None
        return cls(lang=lang, kind=kind, path=path, library=path.parent)

    def template_names(self) -> list[str]:
        """Return the relative POSIX names of every ``.j2`` file, sorted."""
        return sorted(
            item.relative_to(self.path).as_posix()
            for item in self.path.rglob(f"*{TEMPLATE_SUFFIX}")
            if item.is_file()
        )
