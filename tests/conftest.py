"""Shared pytest fixtures for schemodel tests.

This module provides common fixtures used across unit and integration
tests.
"""

from __future__ import annotations

import sys
from typing import Any

import pytest
import structlog

from schemodel.config import GeneratorConfig


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    Error internals are logged through structlog; capsys can only see
    them when structlog prints to stdout.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def ts_config() -> GeneratorConfig:
    """Return the configuration used across naming tests (prefix "TS")."""
    return GeneratorConfig(class_prefix="TS")


@pytest.fixture
def definitions_schema() -> dict[str, Any]:
    """Return a schema whose root refers to an object definition.

    ``obj`` holds a ``$ref`` to a scalar definition and an integer.
    """
    return {
        "type": "object",
        "properties": {
            "value": {"$ref": "#/definitions/obj"},
        },
        "definitions": {
            "obj": {
                "type": "object",
                "properties": {
                    "banner": {"$ref": "#/definitions/banner"},
                    "count": {"type": "integer"},
                },
            },
            "banner": {"type": "string"},
        },
    }


@pytest.fixture
def array_lookup_schema() -> dict[str, Any]:
    """Return a schema exercising the three ``items`` forms."""
    return {
        "type": "object",
        "properties": {
            "string_array": {
                "type": "array",
                "items": ["string", "null"],
            },
            "object_array": {
                "type": "array",
                "items": {"$ref": "#/definitions/object"},
            },
            "multi_object_array": {
                "type": "array",
                "items": [
                    {"$ref": "#/definitions/object"},
                    {"$ref": "#/definitions/other_object"},
                    {"type": "string"},
                ],
            },
        },
        "definitions": {
            "object": {
                "type": "object",
                "required": ["int_value"],
                "properties": {
                    "int_value": {"type": "integer"},
                },
            },
            "other_object": {
                "type": "object",
                "properties": {
                    "string_value": {"type": "string"},
                },
            },
        },
    }
