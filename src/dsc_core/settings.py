"""Render settings: the fixed conventions of the emitted configuration text."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import SettingsError

logger = logging.getLogger(__name__)

__all__ = ["RenderSettings", "DEFAULT_SETTINGS", "load_settings"]


class RenderSettings(BaseModel):
    """Output conventions shared by the assembler, rewriter and document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    line_terminator: str = "\r\n"
    indent: str = " " * 12
    resource_indent: str = " " * 8
    # PSDscRunAsCredential is 20 characters long
    min_name_width: int = Field(default=20, ge=0)
    metadata_prefix: str = "_metadata_"
    credential_prefix: str = "$Creds"
    global_node: str = "NonNodeData"

    @field_validator("line_terminator", "metadata_prefix", "credential_prefix", "global_node")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("indent", "resource_indent")
    @classmethod
    def _blank_indent(cls, value: str) -> str:
        if value.strip():
            raise ValueError("indent may only contain whitespace")
        return value

    @property
    def statement_end(self) -> str:
        """Statement separator followed by the line terminator."""
        return ";" + self.line_terminator


DEFAULT_SETTINGS = RenderSettings()


def load_settings(path: Path | str | None = None) -> RenderSettings:
    """Load render settings from a YAML file.

    Args:
        path: YAML file to read. ``None`` returns the defaults.

    Returns:
        The validated settings.

    Raises:
        FileNotFoundError: If *path* does not exist
        SettingsError: If the file content fails validation
    """
    if path is None:
        return DEFAULT_SETTINGS

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"settings file not found at {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise SettingsError(f"{config_path}: expected a mapping at the top level")

    try:
        settings = RenderSettings.model_validate(raw)
    except ValidationError as exc:
        raise SettingsError(f"Render settings validation error: {exc}") from exc

    logger.debug("Loaded render settings from %s", config_path)
    return settings
