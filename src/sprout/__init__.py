"""sprout - scaffold new projects from template libraries."""

__version__ = "0.1.0"
