"""The resolved data set handed to templates and project actions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from sprout.data.arguments import DEFAULT_PROJECT_NAME, PROJECT_NAME_KEY


def identifier(key: str) -> str:
    """Return the template identifier for a data key (``proj-kebab`` -> ``proj_kebab``)."""
    return key.replace("-", "_")


@dataclass(frozen=True)
class ResolvedDataSet:
    """Flat rendering context plus the ordered post-generation commands."""

    values: Mapping[str, Any] = field(default_factory=dict)
    commands: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def is_selected(self, name: str) -> bool:
        """Return True if a flag argument was selected."""
        return self.values.get(name) is True

    @property
    def project_name(self) -> str:
        name = self.values.get(PROJECT_NAME_KEY)
        return name if isinstance(name, str) and name else DEFAULT_PROJECT_NAME

    @property
    def is_force(self) -> bool:
        return self.is_selected("force")

    @property
    def is_idea(self) -> bool:
        return self.is_selected("idea")

    @property
    def is_vs_code(self) -> bool:
        return self.is_selected("code")

    @property
    def is_dry(self) -> bool:
        return self.is_selected("dry")

    @property
    def should_render_readme(self) -> bool:
        return self.is_selected("readme")

    def multi_args(self) -> dict[str, list[str]]:
        """Return every list-valued entry, variants included."""
        return {
            key: list(value)
            for key, value in self.values.items()
            if isinstance(value, list)
        }

    def render_context(self) -> dict[str, Any]:
        """Return the Jinja2 context.

        Keys are exposed both as-is and as identifiers, and ``proj`` is
        always bound.
        """
        context: dict[str, Any] = {PROJECT_NAME_KEY: self.project_name}
        for key, value in self.values.items():
            context[key] = value
            context[identifier(key)] = value
        return context


def ordered_commands(data: ResolvedDataSet) -> list[str]:
    """Return the selected post-generation commands in execution order."""
    return list(data.commands)
