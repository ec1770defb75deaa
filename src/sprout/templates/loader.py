"""Template library discovery and argument schema loading."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

import yaml

from sprout.data.arguments import ArgumentDefinition, SchemaError
from sprout.templates.base import ProjectTemplate

logger = logging.getLogger(__name__)

SCHEMA_FILENAME = "sprout.yaml"

Schema = dict[str, ArgumentDefinition]


def discover_template_dirs(base_path: Path) -> dict[str, Path]:
    """Discover template directories within a library root.

    Returns dict mapping template name -> template directory path.
    Only includes directories named ``<lang>-<kind>``.
    """
    templates: dict[str, Path] = {}
    if not base_path.is_dir():
        return templates

    for item in sorted(base_path.iterdir()):
        if item.is_dir() and ProjectTemplate.from_dir(item) is not None:
            templates[item.name] = item

    return templates


def get_all_templates(roots: Iterable[Path]) -> dict[str, ProjectTemplate]:
    """Return every template across library roots.

    Roots are given in priority order; the first root defining a template
    name wins.
    """
    templates: dict[str, ProjectTemplate] = {}
    for root in roots:
        for name, path in discover_template_dirs(root).items():
            if name in templates:
                continue
            template = ProjectTemplate.from_dir(path)
            if template is not None:
                templates[name] = template
    return templates


def find_template(
    roots: Iterable[Path], lang: str, kind: str
) -> ProjectTemplate | None:
    """Find the ``<lang>-<kind>`` template in the first root that has it."""
    return get_all_templates(roots).get(f"{lang}-{kind}")


def load_schema(path: Path) -> Schema:
    """Load an argument schema file.

    A missing or empty file is an empty schema. Raises SchemaError when the
    file cannot be read or parsed, or when an entry is invalid.
    """
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise SchemaError(f"cannot read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SchemaError(f"{path} must contain a mapping of arguments")

    schema: Schema = {}
    for name, entry in data.items():
        try:
            schema[str(name)] = ArgumentDefinition.from_dict(str(name), entry)
        except SchemaError as e:
            raise SchemaError(f"{path}: {e}") from e
    return schema


def merge_schemas(
    ancestor: Mapping[str, ArgumentDefinition],
    local: Mapping[str, ArgumentDefinition],
) -> Schema:
    """Return a new schema where local definitions override the ancestor's."""
    merged = dict(ancestor)
    merged.update(local)
    return merged


def load_template_schema(template: ProjectTemplate) -> Schema:
    """Load the effective schema of a template.

    The library root schema is the ancestor, the template directory's own
    schema overrides it. A malformed file is never fatal: a bad ancestor
    counts as empty and a bad local file falls back to the ancestor.
    """
    try:
        ancestor = load_schema(template.library / SCHEMA_FILENAME)
    except SchemaError as e:
        logger.warning("Ignoring library schema: %s", e)
        ancestor = {}

    try:
        local = load_schema(template.path / SCHEMA_FILENAME)
    except SchemaError as e:
        logger.warning("Using library schema for %s: %s", template.name, e)
        return dict(ancestor)

    return merge_schemas(ancestor, local)
