"""
Configuration models and YAML I/O for tabular-codec.

This module defines the Pydantic models that map 1:1 to a session config
YAML file, plus helpers for loading and saving it.

Key models:
- TabularConfig: Top-level session config (format + columns + governance
  + format options).
- GovernanceConfig: Column allow-list, required list and skip-unknown flag.
- DelimitedOptions: Separator, quote character and terminator for CSV.
- FixedOptions: Column layout and truncation policy for fixed-width files.

Key functions:
- load_config(path) -> TabularConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Example YAML::

    format: fixed
    columns: null
    governance:
      allowed_columns: [name, zip]
      skip_unknown: true
    format_options:
      truncate: false
      layout:
        - {key: name, width: 23}
        - {width: 2}
        - {key: zip, width: 5, type: integer}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from tabular_codec.exceptions import ConfigValidationError
from tabular_codec.registry import default_registry

logger = logging.getLogger(__name__)


class GovernanceConfig(BaseModel):
    """Column governance rules applied when the header is cleansed."""

    allowed_columns: list[str] | None = Field(
        None, description="Normalized column names to allow; None allows all"
    )
    required_columns: list[str] | None = Field(
        None, description="Columns that must be present after cleansing"
    )
    skip_unknown: bool = Field(
        True,
        description=(
            "If True, columns outside allowed_columns are ignored; "
            "if False, they raise InvalidHeaderError"
        ),
    )


class DelimitedOptions(BaseModel):
    """Options for the CSV codec (passed as format_options)."""

    separator: str = ","
    quote_char: str = '"'
    always_quote: bool = False
    line_terminator: str = Field(
        "", description="Appended to every rendered line; '' leaves it to the sink"
    )

    @field_validator("separator", "quote_char")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"must be a single character, got {value!r}")
        return value

    @model_validator(mode="after")
    def _distinct_characters(self) -> DelimitedOptions:
        if self.separator == self.quote_char:
            raise ValueError("separator and quote_char must differ")
        return self


class FixedOptions(BaseModel):
    """Options for the fixed-width codec (passed as format_options)."""

    layout: list[dict[str, Any]]
    truncate: bool = Field(
        True, description="Truncate over-long string values instead of raising"
    )


class TabularConfig(BaseModel):
    """Top-level configuration for one parsing/rendering session.

    Maps 1:1 to the session YAML file.
    """

    format: str | None = Field(None, description="Explicit format identifier")
    file_name: str | None = Field(
        None, description="Used to infer the format when 'format' is not set"
    )
    default_format: str | None = Field(
        "csv", description="Fallback format; None raises when unresolvable"
    )
    columns: list[str] | None = Field(
        None, description="Header columns when the data has no header line"
    )
    governance: GovernanceConfig = Field(default_factory=GovernanceConfig)
    format_options: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_format_options(self) -> TabularConfig:
        """Validate format_options against the resolved built-in format.

        The format resolves the way a Tabular session resolves it: explicit
        format, then the file name extension, then default_format.
        """
        resolved = self.format
        if resolved is None and self.file_name:
            resolved = default_registry().format_from_file_name(self.file_name)
        if resolved is None:
            resolved = self.default_format

        if resolved == "csv":
            DelimitedOptions.model_validate(self.format_options)
        elif resolved == "fixed":
            FixedOptions.model_validate(self.format_options)
        return self


def load_config(path: str | Path) -> TabularConfig:
    """Load and validate a session YAML file into a TabularConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return TabularConfig.model_validate(raw)


def save_config(config: TabularConfig, path: str | Path) -> None:
    """Serialize a TabularConfig to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# tabular-codec session configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
