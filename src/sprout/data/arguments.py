"""Argument schema model: definitions, kinds and the standard argument set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class SchemaError(Exception):
    """Raised when an argument schema is malformed."""


@dataclass(frozen=True)
class Flag:
    """Boolean switch. A negated flag is selected unless it is given."""

    negate: bool = False


@dataclass(frozen=True)
class Scalar:
    """Single string value with an optional default and allowed values."""

    default: str | None = None
    allowed: tuple[str, ...] | None = None


@dataclass(frozen=True)
class MultiValue:
    """List of string values with an optional default and allowed values."""

    default: tuple[str, ...] | None = None
    allowed: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Command:
    """Post-generation shell command, run in ascending ``order``."""

    command_line: str
    order: int = 0
    default_run: bool = False


ArgumentKind = Flag | Scalar | MultiValue | Command

# Schema spellings accepted for each kind
_KIND_ALIASES: dict[str, type] = {
    "flag": Flag,
    "scalar": Scalar,
    "arg": Scalar,
    "multi": MultiValue,
    "multivalue": MultiValue,
    "command": Command,
    "cmd": Command,
}


def _string_tuple(value: Any, what: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise SchemaError(f"{what} must be a list of strings")
    return tuple(str(item) for item in value)


def _allowed(data: dict[str, Any]) -> tuple[str, ...] | None:
    raw = data.get("allowed", data.get("possible-values"))
    return _string_tuple(raw, "allowed values")


def kind_from_dict(data: Any) -> ArgumentKind:
    """Parse the ``kind`` entry of an argument definition.

    ``data`` is either a bare kind name (``"flag"``) or a single-key mapping
    from kind name to its options. Unknown option keys are ignored.
    """
    if data is None:
        return Scalar()
    if isinstance(data, str):
        name, options = data, {}
    elif isinstance(data, dict) and len(data) == 1:
        name, options = next(iter(data.items()))
        options = options or {}
    else:
        raise SchemaError(f"invalid argument kind: {data!r}")

    kind_type = _KIND_ALIASES.get(str(name).lower())
    if kind_type is None:
        raise SchemaError(f"unknown argument kind: {name!r}")
    if not isinstance(options, dict):
        raise SchemaError(f"options of kind {name!r} must be a mapping")

    if kind_type is Flag:
        return Flag(negate=bool(options.get("negate", False)))

    if kind_type is Scalar:
        default = options.get("default")
        return Scalar(
            default=str(default) if default is not None else None,
            allowed=_allowed(options),
        )

    if kind_type is MultiValue:
        return MultiValue(
            default=_string_tuple(options.get("default"), "default values"),
            allowed=_allowed(options),
        )

    command_line = options.get("cmd", options.get("command"))
    if not command_line:
        raise SchemaError(f"command kind {name!r} requires a 'cmd'")
    try:
        order = int(options.get("order", 0))
    except (TypeError, ValueError) as e:
        raise SchemaError(f"command order must be an integer: {e}") from e
    if not 0 <= order <= 255:
        raise SchemaError(f"command order {order} outside 0..255")
    return Command(
        command_line=str(command_line),
        order=order,
        default_run=bool(options.get("default", False)),
    )


@dataclass(frozen=True)
class ArgumentDefinition:
    """A named template argument.

    Loaded once from a schema file and immutable afterwards.
    """

    name: str
    kind: ArgumentKind = field(default_factory=Scalar)
    help: str | None = None
    short: str | None = None
    long: str | None = None

    @property
    def is_default_triggered(self) -> bool:
        """True when the argument is selected unless explicitly given."""
        match self.kind:
            case Command(default_run=default_run):
                return default_run
            case Flag(negate=negate):
                return negate
            case _:
                return False

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any] | None) -> ArgumentDefinition:
        """Create from a schema entry. Unknown keys are ignored."""
        data = data or {}
        if not isinstance(data, dict):
            raise SchemaError(f"definition of {name!r} must be a mapping")
        short = data.get("short")
        if short is not None and len(str(short)) != 1:
            raise SchemaError(f"short option of {name!r} must be one character")
        help_text = data.get("help", data.get("about"))
        long = data.get("long")
        return cls(
            name=name,
            kind=kind_from_dict(data.get("kind")),
            help=str(help_text) if help_text is not None else None,
            short=str(short) if short is not None else None,
            long=str(long) if long is not None else None,
        )


def _flag(name: str, help_text: str, short: str | None = None) -> ArgumentDefinition:
    return ArgumentDefinition(name=name, kind=Flag(), help=help_text, short=short)


STANDARD_ARGUMENTS: tuple[ArgumentDefinition, ...] = (
    _flag("idea", "Open the project in IntelliJ IDEA."),
    _flag("code", "Open the project in VS Code."),
    _flag("dry", "Delete the project once generated."),
    _flag("readme", "Render README.md files."),
    _flag("force", "Erase an existing project with the same name.", short="f"),
)

PROJECT_NAME_KEY = "proj"
PROJECT_NAME_ARGUMENT = "project-name"
DEFAULT_PROJECT_NAME = "sample"
