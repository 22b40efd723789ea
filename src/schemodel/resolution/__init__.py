"""Resolution engine for schemodel.

This package turns a schema document into named models:
- ReferenceResolver: Follow ``$ref`` chains against ``definitions``
- infer_type: Collapse a schema node's type grammar into a PropertyTag
- NamingStrategy: Derive model and property names
- ModelRegistry: Ordered arena of models for one run
- ModelBuilder / resolve_schema: Drive a full resolution run
"""

from __future__ import annotations

from schemodel.resolution.builder import (
    BuildContext,
    ModelBuilder,
    declares_properties,
    resolve_schema,
)
from schemodel.resolution.naming import NamingStrategy, camelize, capitalize
from schemodel.resolution.references import (
    DEFINITIONS_POINTER_PREFIX,
    ReferenceResolver,
    ResolvedReference,
    parse_ref_pointer,
    resolve_reference,
)
from schemodel.resolution.registry import ModelRegistry, schema_fingerprint
from schemodel.resolution.type_inference import (
    InferredType,
    classify_enum,
    infer_type,
    multi_type,
    simple_type,
)

__all__: list[str] = [
    # Driver
    "ModelBuilder",
    "BuildContext",
    "resolve_schema",
    "declares_properties",
    # References
    "ReferenceResolver",
    "ResolvedReference",
    "resolve_reference",
    "parse_ref_pointer",
    "DEFINITIONS_POINTER_PREFIX",
    # Type inference
    "InferredType",
    "infer_type",
    "simple_type",
    "multi_type",
    "classify_enum",
    # Naming
    "NamingStrategy",
    "capitalize",
    "camelize",
    # Registry
    "ModelRegistry",
    "schema_fingerprint",
]
