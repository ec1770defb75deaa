"""Configuration schema for sprout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _string_tuple(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class SproutConfig:
    """Sprout configuration.

    None values mean "not set" and are inherited from lower layers.
    """

    # Git URLs of template libraries, cached under <home>/repositories
    repositories: tuple[str, ...] | None = None

    # Local template library directories
    libraries: tuple[str, ...] | None = None

    def merge(self, other: SproutConfig) -> SproutConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new SproutConfig instance.
        """
        return SproutConfig(
            repositories=(
                other.repositories
                if other.repositories is not None
                else self.repositories
            ),
            libraries=other.libraries if other.libraries is not None else self.libraries,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SproutConfig:
        """Create from a dictionary. Unknown keys are ignored."""
        return cls(
            repositories=_string_tuple(data.get("repositories")),
            libraries=_string_tuple(data.get("libraries")),
        )


DEFAULT_CONFIG = SproutConfig(repositories=(), libraries=())
