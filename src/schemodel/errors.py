"""Custom exception hierarchy for schemodel.

This module defines the exception classes used throughout schemodel:
- SchemodelError: Base exception for all schemodel errors
- ConfigurationError: Raised when generator configuration cannot be loaded
- ResolutionError: Base for every error that aborts a resolution run

Resolution errors are always fatal to the current run. The caller fixes
the schema and re-runs; no partial registry is ever returned.

User-facing messages name the offending schema location. Technical
details (raw nodes, full reference chains) are logged via structlog.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

logger = structlog.get_logger(__name__)


class SchemodelError(Exception):
    """Base exception for schemodel.

    Args:
        user_message: Message safe to display to the user.
        internal_details: Optional technical details. Logged, never part
            of the exception message.

    Example:
        >>> raise SchemodelError(
        ...     "Schema could not be resolved",
        ...     internal_details="node={'properties': {...}}",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize SchemodelError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "schemodel_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(SchemodelError):
    """Raised when a generator configuration file cannot be loaded.

    Attributes:
        file_path: Path to the configuration file (if known).

    Example:
        >>> raise ConfigurationError(
        ...     "Configuration file is not a mapping",
        ...     file_path="schemodel.yaml",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with file context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            internal_details: Technical details for internal logging only.
        """
        full_message = f"{user_message} (in {file_path})" if file_path else user_message
        super().__init__(full_message, internal_details=internal_details)
        self.file_path = file_path


class ResolutionError(SchemodelError):
    """Base class for errors that abort a schema resolution run.

    Attributes:
        schema_path: JSON-pointer-like location of the offending node
            (e.g. ``#/properties/value/items``), when known.
    """

    def __init__(
        self,
        user_message: str,
        *,
        schema_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ResolutionError with schema location context.

        Args:
            user_message: Safe message to display to the user.
            schema_path: Location of the offending schema node (optional).
            internal_details: Technical details for internal logging only.
        """
        full_message = f"{user_message} (at {schema_path})" if schema_path else user_message
        super().__init__(full_message, internal_details=internal_details)
        self.schema_path = schema_path


class UndefinedTypeError(ResolutionError):
    """Raised when a schema node has no usable ``type``.

    Use this exception when:
    - A node has neither ``type`` nor ``enum`` nor ``$ref``
    - A ``type`` names something outside the JSON Schema primitive set
    """


class NonArrayEnumError(ResolutionError):
    """Raised when ``enum`` is present but is not a sequence of literals."""


class UnsupportedEnumTypeError(ResolutionError):
    """Raised when an ``enum`` literal is itself an array or an object."""


class MissingDefinitionError(ResolutionError):
    """Raised when a ``$ref`` points at an absent definitions entry.

    Always includes the available definition names for actionable feedback.

    Attributes:
        ref_name: The definition name that could not be found.
        available: Names present in the definitions table.

    Example:
        >>> raise MissingDefinitionError("banner", ["obj", "widget"])
        # User sees: "Definition 'banner' not found. Available: obj, widget"
    """

    def __init__(
        self,
        ref_name: str,
        available: Sequence[str] = (),
        *,
        schema_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize MissingDefinitionError with the available definitions.

        Args:
            ref_name: The missing definition name (or the raw pointer).
            available: Names present in the definitions table.
            schema_path: Location of the referencing node (optional).
            internal_details: Technical details for internal logging only.
        """
        available_str = ", ".join(available) if available else "none"
        user_message = f"Definition '{ref_name}' not found. Available: {available_str}"
        super().__init__(
            user_message,
            schema_path=schema_path,
            internal_details=internal_details,
        )
        self.ref_name = ref_name
        self.available = list(available)


class CyclicReferenceError(ResolutionError):
    """Raised when a ``$ref`` chain revisits a name already on its path.

    Attributes:
        chain: Definition names in the order they were followed, ending
            with the repeated name.

    Example:
        >>> raise CyclicReferenceError(["a", "b", "a"])
        # User sees: "Cyclic $ref chain: a -> b -> a"
    """

    def __init__(
        self,
        chain: Sequence[str],
        *,
        schema_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize CyclicReferenceError with the offending chain.

        Args:
            chain: Definition names followed, ending with the repeat.
            schema_path: Location of the referencing node (optional).
            internal_details: Technical details for internal logging only.
        """
        super().__init__(
            f"Cyclic $ref chain: {' -> '.join(chain)}",
            schema_path=schema_path,
            internal_details=internal_details,
        )
        self.chain = list(chain)


class NameCollisionError(ResolutionError):
    """Raised when two structurally distinct schemas get the same model name.

    Attributes:
        model_name: The contested model name.
    """

    def __init__(
        self,
        model_name: str,
        *,
        schema_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize NameCollisionError.

        Args:
            model_name: The contested model name.
            schema_path: Location of the second, conflicting node (optional).
            internal_details: Technical details for internal logging only.
        """
        super().__init__(
            f"Model name '{model_name}' is already used by a different schema; "
            "add a name override to one of them",
            schema_path=schema_path,
            internal_details=internal_details,
        )
        self.model_name = model_name
