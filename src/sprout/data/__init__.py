"""Argument schema model, resolution and naming variants."""

from sprout.data.arguments import (
    STANDARD_ARGUMENTS,
    ArgumentDefinition,
    ArgumentKind,
    Command,
    Flag,
    MultiValue,
    Scalar,
    SchemaError,
)
from sprout.data.dataset import ResolvedDataSet, ordered_commands
from sprout.data.raw import MappingRawValues, RawValues
from sprout.data.resolver import combine_definitions, resolve
from sprout.data.variants import expand

__all__ = [
    "STANDARD_ARGUMENTS",
    "ArgumentDefinition",
    "ArgumentKind",
    "Command",
    "Flag",
    "MappingRawValues",
    "MultiValue",
    "RawValues",
    "ResolvedDataSet",
    "Scalar",
    "SchemaError",
    "combine_definitions",
    "expand",
    "ordered_commands",
    "resolve",
]
