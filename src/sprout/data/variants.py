"""Naming-convention variants of resolved argument values.

Every scalar or multi-value argument reaches the templates once as supplied
and once per case/separator convention, under ``{key}-{suffix}``::

    >>> dict(expand("proj", "my-app"))["proj-pascal"]
    'MyApp'
"""

from __future__ import annotations

import re
from collections.abc import Callable

VariantValue = str | list[str]

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def split_words(value: str) -> list[str]:
    """Split a string into words.

    Words break on any run of non-alphanumeric characters, before an
    uppercase letter that follows a lowercase letter or digit, and before
    the last capital of an acronym followed by lowercase (``HTTPServer``
    gives ``HTTP`` and ``Server``). Digits never start a new word.
    """
    words: list[str] = []
    current = ""
    for index, char in enumerate(value):
        if not (char.isascii() and char.isalnum()):
            if current:
                words.append(current)
            current = ""
            continue

        if char.isupper() and current:
            previous = value[index - 1]
            following = value[index + 1] if index + 1 < len(value) else ""
            if previous.islower() or previous.isdigit():
                words.append(current)
                current = ""
            elif previous.isupper() and following.islower():
                words.append(current)
                current = ""
        current += char

    if current:
        words.append(current)
    return words


def _joined(
    separator: str, head: Callable[[str], str], tail: Callable[[str], str]
) -> Callable[[str], str]:
    def joined(value: str) -> str:
        words = split_words(value)
        if not words:
            return ""
        return separator.join([head(words[0]), *(tail(word) for word in words[1:])])

    return joined


def to_upper(value: str) -> str:
    return value.upper()


def to_lower(value: str) -> str:
    return value.lower()


to_sentence = _joined(" ", str.lower, str.lower)
to_title = _joined(" ", str.capitalize, str.capitalize)
to_camel = _joined("", str.lower, str.capitalize)
to_pascal = _joined("", str.capitalize, str.capitalize)
to_kebab = _joined("-", str.lower, str.lower)
to_train = _joined("-", str.capitalize, str.capitalize)
to_snake = _joined("_", str.lower, str.lower)
to_constant = _joined("_", str.upper, str.upper)


def to_path(value: str) -> str:
    """Replace each run of non-alphanumeric characters with ``/``."""
    return _NON_ALNUM.sub("/", value)


def to_dot(value: str) -> str:
    """Replace each run of non-alphanumeric characters with ``.``."""
    return _NON_ALNUM.sub(".", value)


CASE_CONVERSIONS: dict[str, Callable[[str], str]] = {
    "upper": to_upper,
    "lower": to_lower,
    "sentence": to_sentence,
    "title": to_title,
    "camel": to_camel,
    "pascal": to_pascal,
    "kebab": to_kebab,
    "train": to_train,
    "snake": to_snake,
    "constant": to_constant,
}

SEPARATOR_CONVERSIONS: dict[str, Callable[[str], str]] = {
    "path": to_path,
    "dot": to_dot,
}

VARIANT_SUFFIXES: tuple[str, ...] = (*CASE_CONVERSIONS, *SEPARATOR_CONVERSIONS)


def convert(
    conversion: Callable[[str], str], value: VariantValue | None
) -> VariantValue:
    """Apply a conversion to a string, or element-wise to a list of strings."""
    if value is None:
        return ""
    if isinstance(value, list):
        return [conversion(item or "") for item in value]
    return conversion(value)


def expand(key: str, value: VariantValue | None) -> list[tuple[str, VariantValue]]:
    """Return the unsuffixed value followed by every suffixed variant."""
    pairs: list[tuple[str, VariantValue]] = [
        (key, value if value is not None else "")
    ]
    for suffix, conversion in (CASE_CONVERSIONS | SEPARATOR_CONVERSIONS).items():
        pairs.append((f"{key}-{suffix}", convert(conversion, value)))
    return pairs
