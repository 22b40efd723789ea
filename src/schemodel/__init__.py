"""schemodel: Resolve JSON-Schema-like documents into named models.

This package provides:
- resolve_schema / ModelBuilder: Turn a schema tree into ordered models
- Model, Property, PropertyTag: The immutable output contract
- GeneratorConfig: Naming configuration (prefix, root name, overrides)
- Export helpers for rendering layers and cross-language consumers
"""

from __future__ import annotations

__version__ = "0.1.0"

# Configuration
from schemodel.config import GeneratorConfig

# Error types
from schemodel.errors import (
    ConfigurationError,
    CyclicReferenceError,
    MissingDefinitionError,
    NameCollisionError,
    NonArrayEnumError,
    ResolutionError,
    SchemodelError,
    UndefinedTypeError,
    UnsupportedEnumTypeError,
)

# Export functions
from schemodel.export import export_model_schema, export_models

# Output models
from schemodel.models import Model, Property, PropertyTag

# Resolution engine
from schemodel.resolution import (
    ModelBuilder,
    ModelRegistry,
    NamingStrategy,
    ReferenceResolver,
    infer_type,
    resolve_schema,
)

__all__ = [
    "__version__",
    # Resolution
    "resolve_schema",
    "ModelBuilder",
    "ModelRegistry",
    "NamingStrategy",
    "ReferenceResolver",
    "infer_type",
    # Configuration
    "GeneratorConfig",
    # Output models
    "Model",
    "Property",
    "PropertyTag",
    # Errors
    "SchemodelError",
    "ConfigurationError",
    "ResolutionError",
    "UndefinedTypeError",
    "NonArrayEnumError",
    "UnsupportedEnumTypeError",
    "MissingDefinitionError",
    "CyclicReferenceError",
    "NameCollisionError",
    # Export
    "export_models",
    "export_model_schema",
]
