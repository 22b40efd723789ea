"""Unit tests for ModelRegistry."""

from __future__ import annotations

import pytest

from schemodel.errors import NameCollisionError, ResolutionError
from schemodel.models import Model, Property, PropertyTag
from schemodel.resolution.registry import ModelRegistry, schema_fingerprint


def _model(name: str) -> Model:
    return Model(name=name, properties=(Property(name="key", tag=PropertyTag.string),))


class TestSchemaFingerprint:
    """Tests for schema_fingerprint()."""

    def test_equal_nodes_share_fingerprint(self) -> None:
        """Structurally equal nodes fingerprint the same."""
        a = {"type": "object", "properties": {"x": {"type": "string"}}}
        b = {"type": "object", "properties": {"x": {"type": "string"}}}
        assert schema_fingerprint(a) == schema_fingerprint(b)

    def test_different_nodes_differ(self) -> None:
        """A different shape gives a different fingerprint."""
        a = {"type": "object", "properties": {"x": {"type": "string"}}}
        b = {"type": "object", "properties": {"x": {"type": "integer"}}}
        assert schema_fingerprint(a) != schema_fingerprint(b)

    def test_key_order_ignored(self) -> None:
        """Reordered keys fingerprint the same."""
        a = {"type": "object", "properties": {"x": {"type": "string"}, "y": {"type": "integer"}}}
        b = {"properties": {"y": {"type": "integer"}, "x": {"type": "string"}}, "type": "object"}
        assert schema_fingerprint(a) == schema_fingerprint(b)

    def test_descriptions_ignored(self) -> None:
        """Description text does not change the fingerprint."""
        a = {"type": "object", "description": "home", "properties": {"x": {"type": "string"}}}
        b = {
            "type": "object",
            "description": "work",
            "properties": {"x": {"type": "string", "description": "street"}},
        }
        assert schema_fingerprint(a) == schema_fingerprint(b)

    def test_property_named_description_kept(self) -> None:
        """A property called description is part of the shape."""
        a = {"type": "object", "properties": {"description": {"type": "string"}}}
        b = {"type": "object", "properties": {"description": {"type": "integer"}}}
        assert schema_fingerprint(a) != schema_fingerprint(b)


class TestModelRegistry:
    """Tests for reservation, registration and freezing."""

    def test_reserve_then_register(self) -> None:
        """A reserved name can be registered and frozen."""
        registry = ModelRegistry()
        assert registry.reserve("TSModel", "fp") is True
        registry.register(_model("TSModel"))

        models = registry.freeze()
        assert list(models) == ["TSModel"]
        assert "TSModel" in registry
        assert len(registry) == 1

    def test_same_schema_reuses_name(self) -> None:
        """Reserving the same name for the same schema is a no-op."""
        registry = ModelRegistry()
        registry.reserve("TSObjModel", "fp")
        assert registry.reserve("TSObjModel", "fp") is False
        assert len(registry) == 1

    def test_different_schema_collides(self) -> None:
        """A different schema under the same name is a collision."""
        registry = ModelRegistry()
        registry.reserve("TSObjModel", "fp-a")
        with pytest.raises(NameCollisionError) as exc_info:
            registry.reserve("TSObjModel", "fp-b", schema_path="#/properties/obj")
        assert exc_info.value.model_name == "TSObjModel"
        assert exc_info.value.schema_path == "#/properties/obj"

    def test_order_is_reservation_order(self) -> None:
        """Models come out in reservation order even if built in reverse."""
        registry = ModelRegistry()
        registry.reserve("TSModel", "root")
        registry.reserve("TSValueModel", "value")
        registry.register(_model("TSValueModel"))
        registry.register(_model("TSModel"))

        assert list(registry.freeze()) == ["TSModel", "TSValueModel"]
        assert registry.names() == ["TSModel", "TSValueModel"]

    def test_register_without_reservation(self) -> None:
        """Registering an unreserved name is an error."""
        with pytest.raises(ResolutionError, match="without a reservation"):
            ModelRegistry().register(_model("TSModel"))

    def test_register_twice(self) -> None:
        """A name is populated at most once."""
        registry = ModelRegistry()
        registry.reserve("TSModel", "fp")
        registry.register(_model("TSModel"))
        with pytest.raises(NameCollisionError):
            registry.register(_model("TSModel"))

    def test_get(self) -> None:
        """get() returns None until the model is built."""
        registry = ModelRegistry()
        registry.reserve("TSModel", "fp")
        assert registry.get("TSModel") is None
        registry.register(_model("TSModel"))
        assert registry.get("TSModel") == _model("TSModel")

    def test_freeze_with_pending_model(self) -> None:
        """Freezing with an unbuilt reservation fails."""
        registry = ModelRegistry()
        registry.reserve("TSModel", "fp")
        with pytest.raises(ResolutionError, match="never built: TSModel"):
            registry.freeze()

    def test_frozen_mapping_is_read_only(self) -> None:
        """The frozen output cannot be mutated."""
        registry = ModelRegistry()
        registry.reserve("TSModel", "fp")
        registry.register(_model("TSModel"))
        models = registry.freeze()
        with pytest.raises(TypeError):
            models["Other"] = _model("Other")  # type: ignore[index]
