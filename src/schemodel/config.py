"""Generator configuration for schemodel.

GeneratorConfig carries the naming knobs for one resolution run: the
prefix applied to every model name, the base name of the root model, the
suffix appended to every model name, and the schema extension field that
carries explicit name overrides.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from schemodel.casing import capitalize
from schemodel.errors import ConfigurationError

DEFAULT_NAME_OVERRIDE_KEY = "nameOverride"
DEFAULT_MODEL_SUFFIX = "Model"


class GeneratorConfig(BaseModel):
    """Naming configuration for a resolution run.

    Attributes:
        class_prefix: Prefix applied to every generated model name.
        root_name: Base name of the root model when the root schema is not
            reached through a ``$ref`` and has no override.
        model_suffix: Suffix appended to every generated model name.
        name_override_key: Schema extension field holding explicit names,
            on both schema nodes (model names) and property entries
            (property names).

    Example:
        >>> config = GeneratorConfig(class_prefix="TS")
        >>> config.root_model_name
        'TSModel'
        >>> GeneratorConfig(class_prefix="TS", root_name="Feed").root_model_name
        'TSFeedModel'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    class_prefix: str = Field(
        default="",
        pattern=r"^[A-Za-z0-9_]*$",
        description="Prefix applied to every generated model name",
    )
    root_name: str = Field(
        default="",
        pattern=r"^[A-Za-z0-9_]*$",
        description="Base name of the root model",
    )
    model_suffix: str = Field(
        default=DEFAULT_MODEL_SUFFIX,
        pattern=r"^[A-Za-z0-9_]*$",
        description="Suffix appended to every generated model name",
    )
    name_override_key: str = Field(
        default=DEFAULT_NAME_OVERRIDE_KEY,
        min_length=1,
        description="Schema extension field carrying explicit names",
    )

    @field_validator("root_name")
    @classmethod
    def capitalize_root_name(cls, v: str) -> str:
        """Capitalize the root name the way schema-derived bases are ("my_feed" -> "MyFeed")."""
        return capitalize(v)

    @property
    def root_model_name(self) -> str:
        """Name the root model gets when nothing overrides it."""
        return f"{self.class_prefix}{self.root_name}{self.model_suffix}"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> GeneratorConfig:
        """Validate a configuration mapping.

        Args:
            data: Raw configuration values. ``None`` yields the defaults.

        Returns:
            Validated GeneratorConfig.

        Raises:
            pydantic.ValidationError: If a value fails validation.
        """
        return cls.model_validate(dict(data or {}))

    @classmethod
    def from_yaml(cls, path: Path | str) -> GeneratorConfig:
        """Load GeneratorConfig from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            Parsed and validated GeneratorConfig.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ConfigurationError: If the YAML is invalid or fails validation.

        Example:
            >>> config = GeneratorConfig.from_yaml(Path("schemodel.yaml"))
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Generator config not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Configuration file is not valid YAML",
                file_path=str(path),
                internal_details=str(e),
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                file_path=str(path),
                internal_details=f"top-level value was {type(data).__name__}",
            )

        try:
            return cls.from_mapping(data)
        except ValidationError as e:
            raise ConfigurationError(
                "Configuration values are invalid",
                file_path=str(path),
                internal_details=str(e),
            ) from e
