"""Resolve argument definitions and raw values into a data set."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sprout.data.arguments import (
    PROJECT_NAME_ARGUMENT,
    PROJECT_NAME_KEY,
    STANDARD_ARGUMENTS,
    ArgumentDefinition,
    Command,
    Flag,
    MultiValue,
    Scalar,
)
from sprout.data.dataset import ResolvedDataSet
from sprout.data.raw import RawValues
from sprout.data.variants import VariantValue, expand

logger = logging.getLogger(__name__)


def combine_definitions(
    schema: Mapping[str, ArgumentDefinition] | Iterable[ArgumentDefinition],
) -> dict[str, ArgumentDefinition]:
    """Return the standard arguments followed by the template's own.

    A template argument with a standard name replaces the standard one.
    """
    definitions = {arg.name: arg for arg in STANDARD_ARGUMENTS}
    items = schema.values() if isinstance(schema, Mapping) else schema
    for arg in items:
        definitions[arg.name] = arg
    return definitions


def _supplied(
    arg: ArgumentDefinition, raw: RawValues
) -> tuple[bool, VariantValue | None]:
    """Return (present, value) with schema defaults applied."""
    match arg.kind:
        case Scalar(default=default):
            if raw.is_present(arg.name):
                return True, raw.value(arg.name)
            if default is not None:
                return True, default
            return False, None
        case MultiValue(default=default):
            if raw.is_present(arg.name):
                return True, raw.values(arg.name) or []
            if default is not None:
                return True, list(default)
            return False, None
        case _:
            return raw.is_present(arg.name), None


def resolve(
    schema: Mapping[str, ArgumentDefinition] | Iterable[ArgumentDefinition],
    raw: RawValues,
) -> ResolvedDataSet:
    """Resolve a template's arguments against the supplied raw values.

    An argument is selected when it is present XOR default-triggered
    (a negated flag or a default-run command). Selected flags become
    ``True``, selected values are expanded into their naming variants, and
    selected commands are collected and sorted by ``(order, command)``.
    The project name is resolved last so it wins over any template
    variant with the same key.
    """
    values: dict[str, Any] = {}
    commands: list[tuple[int, str]] = []

    for arg in combine_definitions(schema).values():
        present, value = _supplied(arg, raw)
        if present == arg.is_default_triggered:
            continue

        match arg.kind:
            case Flag():
                values[arg.name] = True
            case Command(order=order, command_line=command_line):
                commands.append((order, command_line))
            case _:
                values.update(expand(arg.name, value))
        logger.debug("Selected argument %s", arg.name)

    if raw.is_present(PROJECT_NAME_ARGUMENT):
        values.update(expand(PROJECT_NAME_KEY, raw.value(PROJECT_NAME_ARGUMENT)))

    commands.sort()
    return ResolvedDataSet(
        values=values, commands=tuple(command for _, command in commands)
    )
