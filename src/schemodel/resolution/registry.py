"""Model registry for schemodel.

The registry is an arena owned by one resolution run. A model's name is
reserved together with a structural fingerprint of its schema before its
properties are built, and the finished Model is stored afterwards. This
lets a schema that refers back to an ancestor reuse the reserved name
instead of recursing forever.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from schemodel.errors import NameCollisionError, ResolutionError
from schemodel.models import Model

logger = logging.getLogger(__name__)


DESCRIPTION_KEY = "description"


def schema_fingerprint(node: Mapping[str, Any]) -> str:
    """Structural fingerprint of a schema node.

    Key order and ``description`` annotations are ignored, so two nodes
    with the same shape share a fingerprint.
    """
    return json.dumps(_structure(node), default=repr, separators=(",", ":"), sort_keys=True)


def _structure(value: Any) -> Any:
    if isinstance(value, Mapping):
        # A property named "description" holds a schema, not annotation text
        return {
            str(key): _structure(item)
            for key, item in value.items()
            if not (key == DESCRIPTION_KEY and isinstance(item, str))
        }
    if isinstance(value, (list, tuple)):
        return [_structure(item) for item in value]
    return value


class ModelRegistry:
    """Ordered store of models discovered during one resolution run.

    Models are ordered by reservation, so a parent precedes the models it
    declares.

    Example:
        >>> registry = ModelRegistry()
        >>> registry.reserve("TSModel", schema_fingerprint(root))
        True
        >>> registry.register(Model(name="TSModel", properties=(...)))
        >>> models = registry.freeze()
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._fingerprints: dict[str, str] = {}
        self._models: dict[str, Model | None] = {}

    def reserve(
        self,
        name: str,
        fingerprint: str,
        *,
        schema_path: str | None = None,
    ) -> bool:
        """Claim ``name`` for the schema with ``fingerprint``.

        Args:
            name: Model name to claim.
            fingerprint: Structural fingerprint of the model's schema.
            schema_path: Location of the schema, for error context.

        Returns:
            True if the name was newly reserved and the caller must build
            the model. False if the same schema already holds the name.

        Raises:
            NameCollisionError: If a different schema holds the name.
        """
        existing = self._fingerprints.get(name)
        if existing is None:
            self._fingerprints[name] = fingerprint
            self._models[name] = None
            logger.debug("Reserved model name %s", name)
            return True
        if existing == fingerprint:
            return False
        raise NameCollisionError(
            name,
            schema_path=schema_path,
            internal_details=f"existing={existing} conflicting={fingerprint}",
        )

    def register(self, model: Model) -> None:
        """Store a fully built model under its reserved name.

        Raises:
            ResolutionError: If the name was never reserved or is already
                populated.
        """
        if model.name not in self._models:
            raise ResolutionError(f"Model '{model.name}' was registered without a reservation")
        if self._models[model.name] is not None:
            raise NameCollisionError(model.name)
        self._models[model.name] = model
        logger.debug(
            "Registered model %s with %d properties",
            model.name,
            len(model.properties),
        )

    def get(self, name: str) -> Model | None:
        """Get a registered model by name, or None."""
        return self._models.get(name)

    def names(self) -> list[str]:
        """Return reserved names in reservation order."""
        return list(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[str]:
        return iter(self._models)

    def freeze(self) -> Mapping[str, Model]:
        """Return the immutable, ordered output mapping.

        Raises:
            ResolutionError: If a reserved model was never built.
        """
        pending = [name for name, model in self._models.items() if model is None]
        if pending:
            raise ResolutionError(
                f"Models were reserved but never built: {', '.join(pending)}"
            )
        built = {name: model for name, model in self._models.items() if model is not None}
        return MappingProxyType(built)
