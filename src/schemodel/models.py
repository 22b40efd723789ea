"""Output models for schemodel.

This module defines the immutable output contract of a resolution run:
- PropertyTag: Closed set of canonical property type tags
- Property: One typed, ordered field of a model
- Model: One named generated type with its dependencies

A rendering layer consumes these; nothing here knows about any target
language.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PropertyTag(str, Enum):
    """Canonical type classification of a property.

    Values are the tag names used in collection element types and
    dependency sets (e.g. ``"string"``, ``"boxedNumber"``).
    """

    array = "array"
    boolean = "boolean"
    signed_int = "signedInt"
    unsigned_int = "unsignedInt"
    number = "number"
    boxed_number = "boxedNumber"
    string = "string"
    object = "object"
    dynamic = "dynamic"

    @property
    def is_reference_like(self) -> bool:
        """True for tags that need reference/ownership semantics downstream."""
        return self in REFERENCE_LIKE_TAGS


REFERENCE_LIKE_TAGS = frozenset(
    {
        PropertyTag.array,
        PropertyTag.boxed_number,
        PropertyTag.string,
        PropertyTag.object,
        PropertyTag.dynamic,
    }
)

SCALAR_TAGS = frozenset(PropertyTag) - REFERENCE_LIKE_TAGS


class Property(BaseModel):
    """One field of a generated model.

    Attributes:
        name: Accessor name, after any name override.
        tag: Canonical type classification.
        optional: True if the value may be absent or null.
        description: Human text carried through from the schema.
        object_model_name: Name of the referenced model (object tags only).
        collection_element_types: Element type names (array tags only).
            Each entry is a model name or a scalar tag value. Empty when
            the element type is a single homogeneous scalar.
        has_properties: True when an object property points at a
            registered model rather than an anonymous object.

    Example:
        >>> prop = Property(name="count", tag=PropertyTag.signed_int, optional=False)
        >>> prop.is_reference_like
        False
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Accessor / field name")
    tag: PropertyTag = Field(..., description="Canonical type tag")
    optional: bool = Field(default=True, description="Value may be absent or null")
    description: str | None = Field(default=None, description="Schema description")
    object_model_name: str | None = Field(
        default=None,
        description="Referenced model name, object tags only",
    )
    collection_element_types: tuple[str, ...] = Field(
        default=(),
        description="Element type names in declaration order, array tags only",
    )
    has_properties: bool = Field(
        default=False,
        description="Object property refers to a registered model",
    )

    @property
    def is_reference_like(self) -> bool:
        """Whether this property needs reference semantics downstream."""
        return self.tag.is_reference_like


class Model(BaseModel):
    """One generated named type.

    Attributes:
        name: Name unique within one resolution run.
        properties: Properties in schema declaration order.
        dependencies: Model names and scalar tags referenced by properties.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Unique model name")
    properties: tuple[Property, ...] = Field(
        default=(),
        description="Properties in declaration order",
    )
    dependencies: frozenset[str] = Field(
        default_factory=frozenset,
        description="Referenced model names and scalar tags",
    )

    def property_names(self) -> list[str]:
        """Return property names in declaration order."""
        return [prop.name for prop in self.properties]

    def get_property(self, name: str) -> Property:
        """Get a property by name.

        Raises:
            KeyError: If no property has that name.
        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(name)
