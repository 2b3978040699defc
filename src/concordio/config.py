"""Loading of the optional YAML tool configuration file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, ValidationError
import yaml


class ConfigLoadError(RuntimeError):
    """Raised when a configuration file cannot be loaded."""


class ToolConfig(BaseModel):
    """Defaults read from a ``concordio.yaml`` file.

    ``properties`` and ``nswag_options`` hold ``key=value`` strings so that
    order and duplicate keys survive the YAML round trip.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    authors: Optional[str] = None
    description: Optional[str] = None
    kind: Optional[str] = None
    client: Optional[bool] = None
    properties: list[str] = Field(default_factory=list)
    nswag_options: list[str] = Field(default_factory=list)
    nuget_executable: str = "nuget"
    oasdiff_executable: str = "oasdiff"
    process_timeout: Optional[PositiveFloat] = None


def load_tool_config(path: Optional[Path]) -> ToolConfig:
    """Load and validate a tool configuration file.

    Args:
        path (Optional[Path]): Config file path; ``None`` gives the defaults.

    Returns:
        ToolConfig: Validated configuration.
    """
    if path is None:
        return ToolConfig()

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigLoadError(f"Failed to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"Failed to parse YAML in {path}: {exc}") from exc

    if payload is None:
        return ToolConfig()
    if not isinstance(payload, dict):
        raise ConfigLoadError(f"Config file {path} must contain a mapping, got {type(payload)!r}")

    try:
        return ToolConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid config file {path}: {exc}") from exc
