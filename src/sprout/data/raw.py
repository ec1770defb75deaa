"""Raw argument values as supplied on the command line."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol


class RawValues(Protocol):
    """Read-only view over the values a user supplied."""

    def is_present(self, name: str) -> bool:
        """Return True if the argument was given (or defaulted to a value)."""
        ...

    def value(self, name: str) -> str | None:
        """Return the single value of an argument, if any."""
        ...

    def values(self, name: str) -> list[str] | None:
        """Return all values of an argument, if any."""
        ...


class MappingRawValues:
    """RawValues backed by a plain mapping.

    A name maps to ``True`` for a given switch, a string for a single value
    or a sequence of strings for repeated values. Names that are missing,
    ``None``, ``False`` or an empty sequence are not present.
    """

    def __init__(
        self, supplied: Mapping[str, bool | str | Sequence[str] | None]
    ) -> None:
        self._supplied = dict(supplied)

    def is_present(self, name: str) -> bool:
        raw = self._supplied.get(name)
        if raw is None or raw is False:
            return False
        if isinstance(raw, (list, tuple)):
            return len(raw) > 0
        return True

    def value(self, name: str) -> str | None:
        raw = self._supplied.get(name)
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, (list, tuple)):
            return raw[0] if raw else None
        return str(raw)

    def values(self, name: str) -> list[str] | None:
        raw = self._supplied.get(name)
        if raw is None or isinstance(raw, bool):
            return None
        if isinstance(raw, (list, tuple)):
            return [str(item) for item in raw]
        return [str(raw)]
