"""Unit tests for reference resolution.

This module tests:
- Nodes without $ref pass through
- Single and chained $ref resolution, tracking the last segment
- Missing definitions and unsupported pointer forms
- Cycle detection
- Bulk validation of a definitions table
"""

from __future__ import annotations

import pytest

from schemodel.errors import CyclicReferenceError, MissingDefinitionError
from schemodel.resolution.references import (
    ReferenceResolver,
    parse_ref_pointer,
    resolve_reference,
)


class TestParseRefPointer:
    """Tests for parse_ref_pointer()."""

    def test_local_definition(self) -> None:
        """Local definitions pointers yield the definition name."""
        assert parse_ref_pointer("#/definitions/banner") == "banner"

    @pytest.mark.parametrize(
        "pointer",
        [
            "http://example.com/schema.json#/definitions/banner",
            "#/properties/banner",
            "#/definitions/",
            42,
        ],
    )
    def test_unsupported_pointer(self, pointer: object) -> None:
        """Other pointer forms are reported as missing definitions."""
        with pytest.raises(MissingDefinitionError):
            parse_ref_pointer(pointer)


class TestReferenceResolver:
    """Tests for ReferenceResolver.resolve()."""

    def test_node_without_ref_is_unchanged(self) -> None:
        """A node without $ref is returned as-is with no ref name."""
        node = {"type": "string"}
        resolved = ReferenceResolver({}).resolve(node)
        assert resolved.node is node
        assert resolved.ref_name is None
        assert resolved.via_reference is False

    def test_single_ref(self) -> None:
        """A single $ref yields the definition and its name."""
        resolver = ReferenceResolver({"banner": {"type": "string"}})
        resolved = resolver.resolve({"$ref": "#/definitions/banner"})
        assert resolved.node == {"type": "string"}
        assert resolved.ref_name == "banner"
        assert resolved.via_reference is True

    def test_chain_tracks_last_segment(self) -> None:
        """A chain returns the terminal node and the name pointing at it."""
        resolver = ReferenceResolver(
            {
                "value2": {"$ref": "#/definitions/value3"},
                "value3": {"type": "object", "properties": {"value4": {"type": "string"}}},
            }
        )
        resolved = resolver.resolve({"$ref": "#/definitions/value2"})
        assert resolved.ref_name == "value3"
        assert resolved.node["type"] == "object"

    def test_missing_definition(self) -> None:
        """An absent name raises MissingDefinitionError listing what exists."""
        resolver = ReferenceResolver({"obj": {"type": "object"}})
        with pytest.raises(MissingDefinitionError) as exc_info:
            resolver.resolve({"$ref": "#/definitions/banner"}, schema_path="#/properties/x")
        assert exc_info.value.ref_name == "banner"
        assert exc_info.value.available == ["obj"]
        assert exc_info.value.schema_path == "#/properties/x"

    def test_missing_definition_mid_chain(self) -> None:
        """A break anywhere in the chain is reported."""
        resolver = ReferenceResolver({"a": {"$ref": "#/definitions/b"}})
        with pytest.raises(MissingDefinitionError, match="'b' not found"):
            resolver.resolve({"$ref": "#/definitions/a"})

    def test_non_mapping_definition(self) -> None:
        """A definition that is not a schema object cannot be followed."""
        resolver = ReferenceResolver({"a": "string"})
        with pytest.raises(MissingDefinitionError):
            resolver.resolve({"$ref": "#/definitions/a"})

    def test_self_reference_cycle(self) -> None:
        """A definition pointing at itself is a cycle."""
        resolver = ReferenceResolver({"a": {"$ref": "#/definitions/a"}})
        with pytest.raises(CyclicReferenceError) as exc_info:
            resolver.resolve({"$ref": "#/definitions/a"})
        assert exc_info.value.chain == ["a", "a"]

    def test_two_step_cycle(self) -> None:
        """A longer loop is detected and its chain reported."""
        resolver = ReferenceResolver(
            {
                "a": {"$ref": "#/definitions/b"},
                "b": {"$ref": "#/definitions/a"},
            }
        )
        with pytest.raises(CyclicReferenceError) as exc_info:
            resolver.resolve({"$ref": "#/definitions/a"})
        assert exc_info.value.chain == ["a", "b", "a"]

    def test_for_document(self) -> None:
        """for_document binds the root definitions table."""
        resolver = ReferenceResolver.for_document(
            {"type": "object", "definitions": {"banner": {"type": "string"}}}
        )
        assert "banner" in resolver.definitions

    def test_for_document_without_definitions(self) -> None:
        """A document without definitions gets an empty table."""
        assert ReferenceResolver.for_document({"type": "string"}).definitions == {}


class TestResolveReference:
    """Tests for the functional resolve_reference() form."""

    def test_matches_resolver(self) -> None:
        """resolve_reference behaves like ReferenceResolver.resolve."""
        definitions = {"banner": {"type": "string"}}
        resolved = resolve_reference({"$ref": "#/definitions/banner"}, definitions)
        assert resolved.node == {"type": "string"}
        assert resolved.ref_name == "banner"

    def test_none_definitions(self) -> None:
        """None definitions behave like an empty table."""
        with pytest.raises(MissingDefinitionError):
            resolve_reference({"$ref": "#/definitions/banner"}, None)


class TestValidateReferences:
    """Tests for ReferenceResolver.validate_references()."""

    def test_all_valid(self) -> None:
        """A consistent table produces no errors."""
        resolver = ReferenceResolver(
            {
                "a": {"$ref": "#/definitions/b"},
                "b": {"type": "string"},
            }
        )
        assert resolver.validate_references() == []

    def test_reports_every_problem(self) -> None:
        """Missing targets, cycles and non-schema entries are all reported."""
        resolver = ReferenceResolver(
            {
                "dangling": {"$ref": "#/definitions/nowhere"},
                "loop": {"$ref": "#/definitions/loop"},
                "scalar": 3,
            }
        )
        errors = resolver.validate_references()
        assert len(errors) == 3
        assert any("'nowhere' not found" in error for error in errors)
        assert any("Cyclic $ref chain: loop -> loop" in error for error in errors)
        assert any("'scalar' is not a schema object" in error for error in errors)
