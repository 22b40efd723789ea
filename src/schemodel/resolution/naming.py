"""Model and property naming for schemodel.

Model names are ``<prefix><base><suffix>``. The base comes from, highest
precedence first:

1. The schema node's name override field.
2. The last ``$ref`` segment the node was reached through.
3. The immediate parent model's base followed by the declaring
   property's capitalized name.

Property names are the schema key in lower camel case, unless the
property entry carries the override field, which is used verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from schemodel.casing import camelize, capitalize
from schemodel.config import GeneratorConfig

__all__ = ["NamingStrategy", "camelize", "capitalize"]


class NamingStrategy:
    """Derives model and property names for one resolution run.

    Example:
        >>> naming = NamingStrategy(GeneratorConfig(class_prefix="TS"))
        >>> naming.model_name(naming.nested_base({}, None, "Value", "obj"))
        'TSValueObjModel'
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize the NamingStrategy.

        Args:
            config: Generator configuration with prefix, suffix, root
                name and the override field key.
        """
        self.config = config

    def override(self, node: Mapping[str, Any]) -> str | None:
        """Return the node's name override, if it carries a usable one."""
        value = node.get(self.config.name_override_key)
        if isinstance(value, str) and value:
            return value
        return None

    def model_name(self, base: str) -> str:
        """Wrap a base name with the configured prefix and suffix."""
        return f"{self.config.class_prefix}{base}{self.config.model_suffix}"

    def root_base(self, node: Mapping[str, Any], ref_name: str | None) -> str:
        """Base name of the root model."""
        override = self.override(node)
        if override is not None:
            return capitalize(override)
        if ref_name is not None:
            return capitalize(ref_name)
        return self.config.root_name

    def nested_base(
        self,
        node: Mapping[str, Any],
        ref_name: str | None,
        parent_base: str,
        property_key: str,
        position: int | None = None,
    ) -> str:
        """Base name of a model declared by ``property_key`` inside a parent.

        Args:
            node: The nested model's (ref-resolved) schema node.
            ref_name: Last ``$ref`` segment followed to reach ``node``.
            parent_base: The declaring model's own base name.
            property_key: The declaring property's schema key.
            position: 1-based index of an inline schema inside a positional
                ``items`` list or ``anyOf``; keeps sibling entries apart.
        """
        override = self.override(node)
        if override is not None:
            return capitalize(override)
        if ref_name is not None:
            return capitalize(ref_name)
        base = f"{parent_base}{capitalize(property_key)}"
        if position is not None:
            base = f"{base}Item{position}"
        return base

    def property_name(self, key: str, entry: Mapping[str, Any]) -> str:
        """Field name for a property entry: override verbatim, else camelized key."""
        override = self.override(entry)
        if override is not None:
            return override
        return camelize(key)
