"""Reference resolution for schemodel.

This module follows ``$ref`` pointers against a document's ``definitions``
table:
- ResolvedReference: Terminal node plus the last reference segment followed
- ReferenceResolver: Follow ``$ref`` chains with cycle protection
- parse_ref_pointer: Turn ``#/definitions/<name>`` into ``<name>``

Only local ``#/definitions/...`` pointers are supported.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from schemodel.errors import CyclicReferenceError, MissingDefinitionError

logger = logging.getLogger(__name__)

REF_KEY = "$ref"
DEFINITIONS_KEY = "definitions"
DEFINITIONS_POINTER_PREFIX = "#/definitions/"


@dataclass(frozen=True)
class ResolvedReference:
    """Result of following a ``$ref`` chain.

    Attributes:
        node: The first node in the chain without a ``$ref``.
        ref_name: Name of the definition that pointed directly at ``node``,
            or None when the input node had no ``$ref`` at all.
    """

    node: Mapping[str, Any]
    ref_name: str | None = None

    @property
    def via_reference(self) -> bool:
        """True when the node was reached through at least one ``$ref``."""
        return self.ref_name is not None


def parse_ref_pointer(ref: Any, *, schema_path: str | None = None) -> str:
    """Extract the definition name from a ``$ref`` pointer.

    Args:
        ref: The raw ``$ref`` value.
        schema_path: Location of the referencing node, for error context.

    Returns:
        The definition name.

    Raises:
        MissingDefinitionError: If the pointer is not a local
            ``#/definitions/<name>`` pointer.

    Example:
        >>> parse_ref_pointer("#/definitions/banner")
        'banner'
    """
    if not isinstance(ref, str) or not ref.startswith(DEFINITIONS_POINTER_PREFIX):
        raise MissingDefinitionError(
            str(ref),
            schema_path=schema_path,
            internal_details=f"unsupported $ref pointer form: {ref!r}",
        )
    name = ref[len(DEFINITIONS_POINTER_PREFIX) :]
    if not name:
        raise MissingDefinitionError(str(ref), schema_path=schema_path)
    return name


class ReferenceResolver:
    """Follows ``$ref`` chains against a definitions table.

    Attributes:
        definitions: Mapping of definition name to schema node.

    Example:
        >>> resolver = ReferenceResolver({"banner": {"type": "string"}})
        >>> resolved = resolver.resolve({"$ref": "#/definitions/banner"})
        >>> resolved.node, resolved.ref_name
        ({'type': 'string'}, 'banner')
    """

    def __init__(self, definitions: Mapping[str, Any] | None = None) -> None:
        """Initialize the ReferenceResolver.

        Args:
            definitions: Definitions table from the document root.
        """
        self.definitions: Mapping[str, Any] = definitions or {}

    @classmethod
    def for_document(cls, document: Mapping[str, Any]) -> ReferenceResolver:
        """Create a resolver bound to a document's root ``definitions``."""
        return cls(document.get(DEFINITIONS_KEY) or {})

    def resolve(
        self,
        node: Mapping[str, Any],
        *,
        schema_path: str | None = None,
    ) -> ResolvedReference:
        """Follow ``node``'s ``$ref`` chain to its terminal node.

        Args:
            node: Schema node that may carry a ``$ref``.
            schema_path: Location of ``node``, for error context.

        Returns:
            ResolvedReference with the terminal node and the last name
            followed.

        Raises:
            MissingDefinitionError: If a referenced name is absent.
            CyclicReferenceError: If the chain revisits a name.
        """
        current = node
        ref_name: str | None = None
        chain: list[str] = []

        while REF_KEY in current:
            ref_name = parse_ref_pointer(current[REF_KEY], schema_path=schema_path)
            if ref_name in chain:
                raise CyclicReferenceError(
                    [*chain, ref_name],
                    schema_path=schema_path,
                )
            chain.append(ref_name)

            if ref_name not in self.definitions:
                raise MissingDefinitionError(
                    ref_name,
                    sorted(self.definitions),
                    schema_path=schema_path,
                )

            target = self.definitions[ref_name]
            if not isinstance(target, Mapping):
                raise MissingDefinitionError(
                    ref_name,
                    sorted(self.definitions),
                    schema_path=schema_path,
                    internal_details=(
                        f"definition '{ref_name}' is a {type(target).__name__}, not a schema"
                    ),
                )
            current = target

        if chain:
            logger.debug("Resolved $ref chain %s", " -> ".join(chain))
        return ResolvedReference(node=current, ref_name=ref_name)

    def validate_references(self) -> list[str]:
        """Check every definition's ``$ref`` chain without building models.

        Returns a list of error messages. Empty list means every
        definition resolves to a terminal schema.

        Example:
            >>> resolver = ReferenceResolver({"a": {"$ref": "#/definitions/b"}})
            >>> resolver.validate_references()
            ["Definition 'b' not found. Available: a (at #/definitions/a)"]
        """
        errors: list[str] = []
        for name, node in self.definitions.items():
            if not isinstance(node, Mapping):
                errors.append(f"Definition '{name}' is not a schema object")
                continue
            try:
                self.resolve(node, schema_path=f"{DEFINITIONS_POINTER_PREFIX}{name}")
            except (MissingDefinitionError, CyclicReferenceError) as e:
                errors.append(str(e))
        return errors


def resolve_reference(
    node: Mapping[str, Any],
    definitions: Mapping[str, Any] | None,
) -> ResolvedReference:
    """Follow ``node``'s ``$ref`` chain against ``definitions``.

    Functional form of :meth:`ReferenceResolver.resolve`.
    """
    return ReferenceResolver(definitions).resolve(node)
