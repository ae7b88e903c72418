"""Scenario file configuration using YAML and Pydantic."""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from blobcost.exceptions import ConfigurationError
from blobcost.models import Scenario
from blobcost.pricing import PricingModel

SUPPORTED_VERSIONS = ("1.0",)


def _substitute_env_vars(value: str) -> str:
    """Substitute environment variables in string.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        value: String potentially containing env var references

    Returns:
        String with environment variables substituted

    Raises:
        ConfigurationError: If a referenced variable is unset and has no default
    """
    pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.getenv(var_name)
        if env_value is not None:
            return env_value
        if match.group(2) is not None:
            return match.group(2)
        raise ConfigurationError(
            f"Environment variable {var_name} not set and no default provided",
            context={"variable": var_name},
        )

    return re.sub(pattern, replacer, value)


def _substitute_env_in_dict(data: Any) -> Any:
    """Recursively substitute environment variables in nested YAML data."""
    if isinstance(data, dict):
        return {key: _substitute_env_in_dict(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_substitute_env_in_dict(item) for item in data]
    elif isinstance(data, str):
        return _substitute_env_vars(data)
    return data


class ProjectionConfig(BaseModel):
    """Root configuration of a scenario file."""

    version: str = Field(default="1.0", description="Configuration version")
    months: int = Field(default=24, description="Projection horizon in months", gt=0)
    currency: str = Field(
        default="EUR",
        description="Currency the price table is expressed in (display only)",
        min_length=3,
        max_length=3,
    )
    pricing: PricingModel = Field(
        default_factory=PricingModel,
        description="Price table; omitted prices use the default Azure Blob list prices",
    )
    scenarios: list[Scenario] = Field(
        description="Scenarios to project",
        min_length=1,
    )

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, v: Any) -> str:
        """Validate configuration version."""
        v = str(v)
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(f"Unsupported configuration version: {v}")
        return v

    @field_validator("pricing", mode="before")
    @classmethod
    def default_pricing(cls, v: Any) -> Any:
        """An empty pricing block means the default price table."""
        return {} if v is None else v

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_unique_names(self) -> "ProjectionConfig":
        """Scenario names identify results and must be unique."""
        seen: set[str] = set()
        for scenario in self.scenarios:
            if scenario.name in seen:
                raise ValueError(f"Duplicate scenario name: {scenario.name}")
            seen.add(scenario.name)
        return self

    def select(self, names: Optional[list[str]] = None) -> list[Scenario]:
        """Return the named scenarios in file order (all when no names are given).

        Raises:
            ConfigurationError: If a requested scenario does not exist
        """
        if not names:
            return list(self.scenarios)

        known = {scenario.name for scenario in self.scenarios}
        missing = [name for name in names if name not in known]
        if missing:
            raise ConfigurationError(
                f"Unknown scenario(s): {', '.join(missing)}",
                context={"available": sorted(known)},
            )
        return [scenario for scenario in self.scenarios if scenario.name in names]


def load_config(config_path: Path) -> ProjectionConfig:
    """Load and validate a scenario file.

    Args:
        config_path: Path to YAML scenario file

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If the file is missing, empty, not valid YAML or
            fails validation
    """
    try:
        with open(config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}") from None
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

    if not raw_config:
        raise ConfigurationError("Configuration file is empty", context={"path": str(config_path)})
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping", context={"path": str(config_path)}
        )

    config_data = _substitute_env_in_dict(raw_config)

    try:
        return ProjectionConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e
