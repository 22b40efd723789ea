"""Export functions for schemodel output.

This module hands resolved models to the outside world:
- export_models: JSON-ready dump of a model registry for rendering layers
- export_model_schema: JSON Schema Draft 2020-12 of the Model contract
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from schemodel.models import Model

MODEL_SCHEMA_ID = "https://schemodel.dev/schemas/model.schema.json"


def export_models(
    models: Mapping[str, Model],
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export a resolved registry as a JSON-ready dictionary.

    Models keep registry order; each model's dependencies are sorted so
    the output is stable across runs.

    Args:
        models: Output of a resolution run.
        output_path: Optional path to write the JSON file. If provided,
            creates parent directories as needed.

    Returns:
        Dictionary of the form ``{"models": [...]}``.

    Example:
        >>> payload = export_models(resolve_schema(schema))
        >>> payload["models"][0]["name"]
        'Model'
    """
    entries: list[dict[str, Any]] = []
    for model in models.values():
        entry = model.model_dump(mode="json")
        entry["dependencies"] = sorted(model.dependencies)
        entries.append(entry)

    payload: dict[str, Any] = {"models": entries}

    if output_path is not None:
        _write_json_file(payload, output_path)

    return payload


def export_model_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export the Model JSON Schema for cross-language consumers.

    Args:
        output_path: Optional path to write the schema file.

    Returns:
        Dictionary containing the JSON Schema.

    Example:
        >>> schema = export_model_schema()
        >>> schema["title"]
        'Model'
    """
    schema = Model.model_json_schema()

    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["$id"] = MODEL_SCHEMA_ID

    if "additionalProperties" not in schema:
        schema["additionalProperties"] = False

    if output_path is not None:
        _write_json_file(schema, output_path)

    return schema


def _write_json_file(payload: dict[str, Any], path: Path | str) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, indent=2))
