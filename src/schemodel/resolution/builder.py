"""Model builder for schemodel.

This module drives a resolution run:
- BuildContext: Where in the schema a model is being built
- ModelBuilder: Walk object schemas, build properties, register nested models
- resolve_schema: One-call entry point returning the frozen registry

For every declared property the builder resolves ``$ref``, infers the tag,
and for object tags (or arrays whose items are objects) names the nested
schema and builds it depth-first before the parent records the dependency.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from schemodel.config import GeneratorConfig
from schemodel.errors import ResolutionError, UndefinedTypeError
from schemodel.models import Model, Property, PropertyTag
from schemodel.resolution.naming import NamingStrategy
from schemodel.resolution.references import REF_KEY, ReferenceResolver
from schemodel.resolution.registry import ModelRegistry, schema_fingerprint
from schemodel.resolution.type_inference import (
    JSON_TYPES,
    NULL_TYPE,
    TYPE_KEY,
    infer_type,
    simple_type,
)

logger = logging.getLogger(__name__)

PROPERTIES_KEY = "properties"
REQUIRED_KEY = "required"
ITEMS_KEY = "items"
ANY_OF_KEY = "anyOf"
DESCRIPTION_KEY = "description"

ROOT_PATH = "#"


@dataclass(frozen=True)
class BuildContext:
    """Location of the model being built.

    Attributes:
        base_name: The model's distinguishing base name (no prefix or
            suffix). Nested path-named models extend it.
        schema_path: JSON-pointer-like location of the model's schema.
    """

    base_name: str
    schema_path: str = ROOT_PATH


@dataclass(frozen=True)
class _ElementTypes:
    names: tuple[str, ...] = ()
    nullable: bool = False


def declares_properties(node: Mapping[str, Any], *, schema_path: str | None = None) -> bool:
    """True when ``node`` declares at least one property.

    Raises:
        UndefinedTypeError: If ``properties`` is present but not an object.
    """
    properties = node.get(PROPERTIES_KEY)
    if properties is None:
        return False
    if not isinstance(properties, Mapping):
        raise UndefinedTypeError(
            "properties must be an object mapping names to schemas",
            schema_path=schema_path,
            internal_details=f"properties value was {type(properties).__name__}",
        )
    return len(properties) > 0


class ModelBuilder:
    """Builds the model registry for one schema document.

    Attributes:
        document: Root schema node, holding the ``definitions`` table.
        config: Naming configuration.
        references: Resolver bound to the document's definitions.
        naming: Naming strategy for the run.
        registry: Registry of the current (or last) run.

    Example:
        >>> builder = ModelBuilder(schema, GeneratorConfig(class_prefix="TS"))
        >>> models = builder.resolve()
        >>> list(models)
        ['TSModel', 'TSValueModel']
    """

    def __init__(
        self,
        document: Mapping[str, Any],
        config: GeneratorConfig | None = None,
    ) -> None:
        """Initialize the ModelBuilder.

        Args:
            document: Root schema node.
            config: Naming configuration. Defaults to GeneratorConfig().
        """
        if not isinstance(document, Mapping):
            raise UndefinedTypeError(
                "Schema document must be an object",
                schema_path=ROOT_PATH,
                internal_details=f"document was {type(document).__name__}",
            )
        self.document = document
        self.config = config or GeneratorConfig()
        self.references = ReferenceResolver.for_document(document)
        self.naming = NamingStrategy(self.config)
        self.registry = ModelRegistry()

    def resolve(self) -> Mapping[str, Model]:
        """Run a full resolution of the document.

        An object root becomes the root model. An array root registers the
        models of its items. Any other root yields an empty registry.

        Returns:
            Immutable mapping of model name to Model, parents first.

        Raises:
            ResolutionError: Any resolution failure; nothing partial is
                returned.
        """
        self.registry = ModelRegistry()
        logger.info(
            "Resolving schema: prefix=%r, root=%r",
            self.config.class_prefix,
            self.config.root_name,
        )

        try:
            resolved = self.references.resolve(self.document, schema_path=ROOT_PATH)
            root = resolved.node
            tag, _ = infer_type(root, schema_path=ROOT_PATH)
            context = BuildContext(self.naming.root_base(root, resolved.ref_name))

            if tag is PropertyTag.object and declares_properties(root, schema_path=ROOT_PATH):
                self._register_model(root, context.base_name, ROOT_PATH)
            elif tag is PropertyTag.array:
                self._element_types(root, "", context, ROOT_PATH)
            else:
                logger.debug("Root schema is %s; no root model", tag.value)

            models = self.registry.freeze()
        except ResolutionError as e:
            logger.error("Schema resolution failed: %s", e)
            raise

        logger.info("Resolved %d models", len(models))
        return models

    def build_model(self, node: Mapping[str, Any], context: BuildContext) -> Model:
        """Build one model from an object schema.

        Nested models are registered along the way; the returned model is
        not registered by this call.

        Args:
            node: Ref-resolved object schema with declared properties.
            context: Base name and location of the model.

        Returns:
            The finished Model.
        """
        required = node.get(REQUIRED_KEY) or []
        if not isinstance(required, Sequence) or isinstance(required, str):
            raise UndefinedTypeError(
                "required must be an array of property names",
                schema_path=context.schema_path,
            )

        properties: list[Property] = []
        dependencies: set[str] = set()
        for key, entry in node[PROPERTIES_KEY].items():
            prop = self._build_property(key, entry, key in required, context)
            properties.append(prop)
            if prop.object_model_name is not None:
                dependencies.add(prop.object_model_name)
            dependencies.update(prop.collection_element_types)

        return Model(
            name=self.naming.model_name(context.base_name),
            properties=tuple(properties),
            dependencies=frozenset(dependencies),
        )

    def _register_model(self, node: Mapping[str, Any], base_name: str, schema_path: str) -> str:
        name = self.naming.model_name(base_name)
        if self.registry.reserve(name, schema_fingerprint(node), schema_path=schema_path):
            model = self.build_model(node, BuildContext(base_name, schema_path))
            self.registry.register(model)
        return name

    def _build_property(
        self,
        key: str,
        entry: Any,
        required: bool,
        context: BuildContext,
    ) -> Property:
        path = f"{context.schema_path}/{PROPERTIES_KEY}/{key}"
        if not isinstance(entry, Mapping):
            raise UndefinedTypeError("Property schema must be an object", schema_path=path)

        resolved = self.references.resolve(entry, schema_path=path)
        node = resolved.node
        tag, forced_optional = infer_type(node, schema_path=path)
        optional = forced_optional or not required

        object_model_name: str | None = None
        element_types = _ElementTypes()
        if tag is PropertyTag.object and declares_properties(node, schema_path=path):
            base = self.naming.nested_base(node, resolved.ref_name, context.base_name, key)
            object_model_name = self._register_model(node, base, path)
        elif tag is PropertyTag.array:
            element_types = self._element_types(node, key, context, path)
            optional = optional or element_types.nullable

        return Property(
            name=self.naming.property_name(key, entry),
            tag=tag,
            optional=optional,
            description=_description(entry, node),
            object_model_name=object_model_name,
            collection_element_types=element_types.names,
            has_properties=object_model_name is not None,
        )

    def _element_types(
        self,
        node: Mapping[str, Any],
        key: str,
        context: BuildContext,
        path: str,
    ) -> _ElementTypes:
        items = node.get(ITEMS_KEY)
        items_path = f"{path}/{ITEMS_KEY}"

        if items is None:
            return _ElementTypes()

        if isinstance(items, Mapping):
            if ANY_OF_KEY in items:
                alternatives = items[ANY_OF_KEY]
                if not isinstance(alternatives, Sequence) or isinstance(alternatives, str):
                    raise UndefinedTypeError(
                        "anyOf must be an array of schemas",
                        schema_path=f"{items_path}/{ANY_OF_KEY}",
                    )
                return self._positional_element_types(
                    alternatives, key, context, f"{items_path}/{ANY_OF_KEY}"
                )
            return self._single_element_type(items, key, context, items_path)

        if isinstance(items, Sequence) and not isinstance(items, str):
            if all(isinstance(entry, str) for entry in items):
                return _shorthand_element_types(items, items_path)
            return self._positional_element_types(items, key, context, items_path)

        raise UndefinedTypeError(
            "items must be a schema or an array of schemas",
            schema_path=items_path,
            internal_details=f"items value was {items!r}",
        )

    def _single_element_type(
        self,
        items: Mapping[str, Any],
        key: str,
        context: BuildContext,
        path: str,
    ) -> _ElementTypes:
        resolved = self.references.resolve(items, schema_path=path)
        tag, _ = infer_type(resolved.node, schema_path=path)
        if tag is PropertyTag.object and declares_properties(resolved.node, schema_path=path):
            base = self.naming.nested_base(resolved.node, resolved.ref_name, context.base_name, key)
            return _ElementTypes((self._register_model(resolved.node, base, path),))
        # Homogeneous scalar (or anonymous) elements need no enumeration
        return _ElementTypes()

    def _positional_element_types(
        self,
        entries: Sequence[Any],
        key: str,
        context: BuildContext,
        path: str,
    ) -> _ElementTypes:
        names: list[str] = []
        nullable = False

        for index, entry in enumerate(entries):
            entry_path = f"{path}/{index}"
            if isinstance(entry, str):
                entry = {TYPE_KEY: entry}
            if not isinstance(entry, Mapping):
                raise UndefinedTypeError("items entry must be a schema", schema_path=entry_path)
            if REF_KEY not in entry and entry.get(TYPE_KEY) == NULL_TYPE:
                nullable = True
                continue

            resolved = self.references.resolve(entry, schema_path=entry_path)
            tag, _ = infer_type(resolved.node, schema_path=entry_path)
            has_model = tag is PropertyTag.object and declares_properties(
                resolved.node, schema_path=entry_path
            )
            if has_model:
                base = self.naming.nested_base(
                    resolved.node,
                    resolved.ref_name,
                    context.base_name,
                    key,
                    position=index + 1,
                )
                names.append(self._register_model(resolved.node, base, entry_path))
            elif tag in (PropertyTag.object, PropertyTag.array):
                # Anonymous objects and nested arrays have no model to depend on
                continue
            else:
                names.append(tag.value)

        return _ElementTypes(tuple(names), nullable)


def _shorthand_element_types(type_names: Sequence[str], path: str) -> _ElementTypes:
    # ["string", "null"] style: a scalar union, not positional schemas
    for name in type_names:
        if name not in JSON_TYPES:
            raise UndefinedTypeError(f"Unknown schema type '{name}'", schema_path=path)

    nullable = NULL_TYPE in type_names
    remaining = list(dict.fromkeys(name for name in type_names if name != NULL_TYPE))
    if len(remaining) <= 1:
        return _ElementTypes(nullable=nullable)

    names = tuple(simple_type(name, False, {}, schema_path=path).tag.value for name in remaining)
    return _ElementTypes(names, nullable)


def _description(entry: Mapping[str, Any], node: Mapping[str, Any]) -> str | None:
    for source in (entry, node):
        value = source.get(DESCRIPTION_KEY)
        if isinstance(value, str):
            return value
    return None


def resolve_schema(
    schema: Mapping[str, Any],
    config: GeneratorConfig | None = None,
) -> Mapping[str, Model]:
    """Resolve a schema document into its ordered model registry.

    Args:
        schema: Root schema node (already parsed from JSON/YAML).
        config: Naming configuration. Defaults to GeneratorConfig().

    Returns:
        Immutable mapping of model name to Model.

    Raises:
        ResolutionError: If the schema is structurally invalid.

    Example:
        >>> models = resolve_schema(
        ...     {"type": "object", "properties": {"key": {"type": "string"}}},
        ...     GeneratorConfig(class_prefix="TS"),
        ... )
        >>> models["TSModel"].properties[0].tag
        <PropertyTag.string: 'string'>
    """
    return ModelBuilder(schema, config).resolve()
