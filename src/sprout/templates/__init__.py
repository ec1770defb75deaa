"""Template libraries, schemas and rendering."""

from sprout.templates.base import ProjectTemplate
from sprout.templates.loader import (
    discover_template_dirs,
    find_template,
    get_all_templates,
    load_schema,
    load_template_schema,
    merge_schemas,
)
from sprout.templates.renderer import Artifact, TemplateRenderer
from sprout.templates.writer import ProjectWriter

__all__ = [
    "Artifact",
    "ProjectTemplate",
    "ProjectWriter",
    "TemplateRenderer",
    "discover_template_dirs",
    "find_template",
    "get_all_templates",
    "load_schema",
    "load_template_schema",
    "merge_schemas",
]
