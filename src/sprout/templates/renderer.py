"""Template instantiation: naming, fan-out and rendering of artifacts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateError,
    TemplateNotFound,
    Undefined,
    meta,
)

from sprout.data.dataset import ResolvedDataSet, identifier
from sprout.data.variants import VARIANT_SUFFIXES
from sprout.templates.base import TEMPLATE_SUFFIX

logger = logging.getLogger(__name__)

README_NAME = "README.md"


class KeepUndefined(Undefined):
    """Undefined that renders back to its own placeholder.

    Used for the first pass over a template name, so that placeholders not
    bound by the fan-out element survive for the second pass.
    """

    def __str__(self) -> str:
        return f"{{{{ {self._undefined_name} }}}}"


@dataclass(frozen=True)
class Artifact:
    """A rendered output file relative to the project root."""

    name: str
    content: str
    source: str
    is_fanout_copy: bool = False


def output_name(name: str) -> str:
    """Strip the template suffix from a rendered name."""
    if name.endswith(TEMPLATE_SUFFIX):
        return name[: -len(TEMPLATE_SUFFIX)]
    return name


def is_readme(name: str) -> bool:
    return PurePosixPath(output_name(name)).name == README_NAME


def multi_families(multi: dict[str, list[str]]) -> dict[str, dict[str, list[str]]]:
    """Group list-valued keys by the argument they were expanded from.

    ``mod``, ``mod-kebab`` and ``mod-pascal`` form one family under ``mod``.
    A key is a variant only when its base key is list-valued too.
    """
    variants = {
        f"{base}-{suffix}": base
        for base in multi
        for suffix in VARIANT_SUFFIXES
        if f"{base}-{suffix}" in multi
    }
    families: dict[str, dict[str, list[str]]] = {}
    for key, values in multi.items():
        families.setdefault(variants.get(key, key), {})[key] = values
    return families


def name_context(data: ResolvedDataSet) -> dict[str, Any]:
    """Return the render context of template names, without list values."""
    return {
        key: value
        for key, value in data.render_context().items()
        if not isinstance(value, list)
    }


class TemplateRenderer:
    """Render the ``.j2`` files of one template directory."""

    def __init__(self, template_dir: Path) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            keep_trailing_newline=True,
        )
        self._name_env = Environment(keep_trailing_newline=True)
        self._partial_env = Environment(undefined=KeepUndefined)

    def referenced_names(self, template_name: str) -> set[str]:
        """Return the variables a template *name* refers to."""
        return meta.find_undeclared_variables(self._name_env.parse(template_name))

    def fanout_names(self, data: ResolvedDataSet, template_name: str) -> list[str]:
        """Return the names a template fans out to, in element order.

        Only multi-value arguments referenced by the name take part, either
        directly or through one of their variants. Element ``i`` binds the
        argument and each of its variants to their ``i``-th value; the
        remaining placeholders are filled from the scalar values, and other
        multi-value arguments render empty. Identical names are kept once.
        Two multi-value arguments in one name are not combined into a
        cartesian product, each one fans out on its own.
        """
        referenced = self.referenced_names(template_name)
        context = name_context(data)
        names: list[str] = []

        for family in multi_families(data.multi_args()).values():
            if not any(identifier(key) in referenced for key in family):
                continue
            for bound in zip(*family.values(), strict=True):
                element = {
                    identifier(key): value for key, value in zip(family, bound)
                }
                partial = self._partial_env.from_string(template_name).render(
                    element
                )
                name = self._name_env.from_string(partial).render(context)
                if name not in names:
                    names.append(name)

        return names

    def instantiate(self, data: ResolvedDataSet, template_name: str) -> list[Artifact]:
        """Render one template into zero, one or many artifacts.

        Contents are always rendered from ``template_name`` with the full
        data set; only the output names differ between fan-out copies.
        README templates are skipped unless the readme flag is selected.
        """
        if is_readme(template_name) and not data.should_render_readme:
            logger.debug("Skipping %s (readme not requested)", template_name)
            return []

        try:
            names = self.fanout_names(data, template_name)
            fanout = bool(names)
            if not fanout:
                names = [
                    self._name_env.from_string(template_name).render(
                        name_context(data)
                    )
                ]
        except TemplateError as e:
            logger.warning("Cannot render name of %s: %s", template_name, e)
            return []

        artifacts: list[Artifact] = []
        for name in names:
            artifact = self._render(data, template_name, name, fanout)
            if artifact is not None:
                artifacts.append(artifact)
        return artifacts

    def _render(
        self, data: ResolvedDataSet, template_name: str, name: str, fanout: bool
    ) -> Artifact | None:
        try:
            template = self._env.get_template(template_name)
            content = template.render(data.render_context())
        except TemplateNotFound:
            if fanout:
                logger.debug("No template for fan-out copy %s", name)
                return None
            logger.warning("Template not found: %s", template_name)
            return None
        except TemplateError as e:
            logger.warning("Cannot render %s: %s", template_name, e)
            return None

        return Artifact(
            name=output_name(name),
            content=content,
            source=template_name,
            is_fanout_copy=fanout,
        )
