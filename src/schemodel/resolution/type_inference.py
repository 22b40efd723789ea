"""Type inference for schemodel.

This module collapses JSON Schema's type grammar into a PropertyTag:
- infer_type: Dispatch a (resolved) schema node to the right rule
- simple_type: Rule for a single type name
- multi_type: Rule for a union of type names
- classify_enum: Turn enum literals into the set of their JSON kinds

The optionality flag is never mutated. Every rule takes the ambient flag
and returns it, possibly forced to True, inside an InferredType.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, NamedTuple

from schemodel.errors import (
    NonArrayEnumError,
    UndefinedTypeError,
    UnsupportedEnumTypeError,
)
from schemodel.models import PropertyTag

TYPE_KEY = "type"
ENUM_KEY = "enum"
MINIMUM_KEY = "minimum"

NULL_TYPE = "null"

# JSON Schema primitive type names accepted in "type"
JSON_TYPES = frozenset({"string", "object", "array", "boolean", "number", "integer", "null"})

# Unions of these stay unboxed when not optional
SIMPLE_NUMBERS = frozenset({"integer", "number"})

# Unions of these collapse to a boxed number
BOXABLE_NUMBERS = frozenset({"boolean", "integer", "number"})

# Type names whose tag is taken verbatim
_VERBATIM_TAGS: dict[str, PropertyTag] = {
    "string": PropertyTag.string,
    "object": PropertyTag.object,
    "array": PropertyTag.array,
}


class InferredType(NamedTuple):
    """A tag together with the (possibly forced) optionality flag."""

    tag: PropertyTag
    optional: bool


def classify_enum(
    enum: Any,
    *,
    schema_path: str | None = None,
) -> list[str]:
    """Return the distinct JSON kinds of an enum's literals, in first-seen order.

    Args:
        enum: The raw ``enum`` value.
        schema_path: Location of the node, for error context.

    Returns:
        Kind names drawn from ``integer, string, null, number, boolean``.

    Raises:
        NonArrayEnumError: If ``enum`` is not a list.
        UnsupportedEnumTypeError: If a literal is a list or a mapping.

    Example:
        >>> classify_enum([1, "a", None, 2])
        ['integer', 'string', 'null']
    """
    if not isinstance(enum, (list, tuple)):
        raise NonArrayEnumError(
            "enum must be an array of literals",
            schema_path=schema_path,
            internal_details=f"enum value was {type(enum).__name__}: {enum!r}",
        )

    kinds: list[str] = []
    for literal in enum:
        kind = _json_kind(literal)
        if kind is None:
            raise UnsupportedEnumTypeError(
                "enum literals must be strings, numbers, booleans or null",
                schema_path=schema_path,
                internal_details=f"unsupported enum literal: {literal!r}",
            )
        if kind not in kinds:
            kinds.append(kind)
    return kinds


def _json_kind(value: Any) -> str | None:
    # bool before int: bool is a subclass of int
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def simple_type(
    type_name: str | None,
    optional: bool,
    node: Mapping[str, Any],
    *,
    schema_path: str | None = None,
) -> InferredType:
    """Apply the single-type rule.

    - ``boolean`` / ``number``: boxed number when optional.
    - ``integer``: boxed number when optional, unsigned when
      ``minimum >= 0``, signed otherwise.
    - ``null``: dynamic, forces optional.
    - ``string`` / ``object`` / ``array``: tag of the same name.

    Raises:
        UndefinedTypeError: If ``type_name`` is missing or not a JSON
            Schema primitive type.
    """
    if type_name is None:
        raise UndefinedTypeError(
            "Schema node has no type, enum or $ref",
            schema_path=schema_path,
        )

    if type_name in ("boolean", "number"):
        if optional:
            return InferredType(PropertyTag.boxed_number, optional)
        tag = PropertyTag.boolean if type_name == "boolean" else PropertyTag.number
        return InferredType(tag, optional)

    if type_name == "integer":
        if optional:
            return InferredType(PropertyTag.boxed_number, optional)
        minimum = node.get(MINIMUM_KEY)
        if _is_non_negative(minimum):
            return InferredType(PropertyTag.unsigned_int, optional)
        return InferredType(PropertyTag.signed_int, optional)

    if type_name == NULL_TYPE:
        return InferredType(PropertyTag.dynamic, True)

    if type_name in _VERBATIM_TAGS:
        return InferredType(_VERBATIM_TAGS[type_name], optional)

    raise UndefinedTypeError(
        f"Unknown schema type '{type_name}'",
        schema_path=schema_path,
    )


def _is_non_negative(minimum: Any) -> bool:
    if isinstance(minimum, bool) or not isinstance(minimum, (int, float)):
        return False
    return minimum >= 0


def multi_type(
    type_names: Iterable[str],
    optional: bool,
    node: Mapping[str, Any],
    *,
    schema_path: str | None = None,
) -> InferredType:
    """Apply the union-type rule.

    A ``null`` member forces optional and is dropped. A single remaining
    name goes through :func:`simple_type`. A non-optional union of
    ``integer``/``number`` stays a plain number, a union of
    ``boolean``/``integer``/``number`` becomes a boxed number, and
    anything else is dynamic.
    """
    members = list(type_names)
    for name in members:
        if not isinstance(name, str) or name not in JSON_TYPES:
            raise UndefinedTypeError(
                f"Unknown schema type '{name}'",
                schema_path=schema_path,
            )
    names = list(dict.fromkeys(members))

    if NULL_TYPE in names:
        optional = True
        names.remove(NULL_TYPE)

    if len(names) == 1:
        return simple_type(names[0], optional, node, schema_path=schema_path)

    # An empty remainder (["null"], enum [None]) falls through the subset checks
    remaining = set(names)
    if remaining <= SIMPLE_NUMBERS and not optional:
        return InferredType(PropertyTag.number, optional)
    if remaining <= BOXABLE_NUMBERS:
        return InferredType(PropertyTag.boxed_number, optional)
    return InferredType(PropertyTag.dynamic, optional)


def infer_type(
    node: Mapping[str, Any],
    optional: bool = False,
    *,
    schema_path: str | None = None,
) -> InferredType:
    """Infer the tag of a schema node that has already been ref-resolved.

    Dispatch order: ``enum`` first, then a ``type`` list, then a single
    ``type`` string.

    Args:
        node: Schema node without ``$ref``.
        optional: Ambient optionality flag.
        schema_path: Location of the node, for error context.

    Returns:
        InferredType with the tag and the resulting optionality.

    Example:
        >>> infer_type({"type": ["integer", "null"]})
        InferredType(tag=<PropertyTag.boxed_number: 'boxedNumber'>, optional=True)
    """
    if ENUM_KEY in node:
        kinds = classify_enum(node[ENUM_KEY], schema_path=schema_path)
        # Enum literals carry no minimum; integer members type as plain numbers
        kinds = ["number" if kind == "integer" else kind for kind in kinds]
        return multi_type(kinds, optional, node, schema_path=schema_path)

    type_value = node.get(TYPE_KEY)
    if isinstance(type_value, (list, tuple)):
        return multi_type(type_value, optional, node, schema_path=schema_path)
    if type_value is not None and not isinstance(type_value, str):
        raise UndefinedTypeError(
            "Schema type must be a string or an array of strings",
            schema_path=schema_path,
            internal_details=f"type value was {type_value!r}",
        )
    return simple_type(type_value, optional, node, schema_path=schema_path)
