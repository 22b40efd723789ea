"""Casing helpers shared by configuration and naming."""

from __future__ import annotations

import re

_WORD_SEPARATORS = re.compile(r"[_\-\s]+")


def capitalize(value: str) -> str:
    """Upper-case the first letter of every separated chunk and join them.

    Example:
        >>> capitalize("other_object")
        'OtherObject'
        >>> capitalize("lastObject")
        'LastObject'
    """
    return "".join(chunk[:1].upper() + chunk[1:] for chunk in _WORD_SEPARATORS.split(value))


def camelize(value: str) -> str:
    """Lower camel case a schema key.

    Example:
        >>> camelize("int_value")
        'intValue'
    """
    joined = capitalize(value)
    return joined[:1].lower() + joined[1:]
