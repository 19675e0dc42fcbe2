"""
Fixed-width layout definitions for tabular-codec.

A layout is an ordered list of column fields. Each field defines:
- key: the record key (omit it for filler columns that are skipped on
  parse and space-filled on render)
- width: number of characters, or ``"remainder"`` for a last column that
  takes whatever is left of the line
- type: ``string`` (default), ``integer`` or ``float``
- decimals: digits after the decimal point (float only, default 2)

Layouts can be built in code with ``FixedLayout.from_spec()`` or kept in
YAML files and loaded with ``load_layout()`` / ``load_all_layouts()``::

    name: customer
    columns:
      - {key: name, width: 23}
      - {key: address, width: 40}
      - {width: 2}
      - {key: zip, width: 5}
      - {key: age, width: 8, type: integer}
      - {key: weight, width: 10, type: float, decimals: 2}

Why YAML instead of hardcoded:
- Record layouts change with the upstream system; editing a file is
  cheaper than a code change.
- Separation of structure knowledge (YAML) from codec logic (Python).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from tabular_codec.exceptions import InvalidLayoutError

logger = logging.getLogger(__name__)

REMAINDER = "remainder"

FieldType = Literal["string", "integer", "float"]


class ColumnField(BaseModel):
    """One column of a fixed-width layout."""

    model_config = ConfigDict(extra="forbid")

    key: str | None = None
    width: int | str = Field(..., validation_alias=AliasChoices("width", "size"))
    type: FieldType = "string"
    decimals: int = Field(2, ge=0)

    @field_validator("width", mode="before")
    @classmethod
    def _check_width(cls, value: Any) -> int | str:
        if value == REMAINDER:
            return REMAINDER
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"Width {value!r} must be positive or '{REMAINDER}'")
        return value

    @property
    def is_remainder(self) -> bool:
        return self.width == REMAINDER


class FixedLayout(BaseModel):
    """An ordered list of column fields for one fixed-width record type."""

    name: str = ""
    columns: list[ColumnField]

    @model_validator(mode="after")
    def _check_remainder(self) -> FixedLayout:
        """Only the last column may use the remainder width."""
        for i, column in enumerate(self.columns):
            if column.is_remainder and i != len(self.columns) - 1:
                raise ValueError(
                    f"Only the last column can have width '{REMAINDER}', "
                    f"found it at position {i}"
                )
        return self

    @classmethod
    def from_spec(cls, spec: Sequence[Any], name: str = "") -> FixedLayout:
        """Build a layout from a list of column dicts (or ColumnFields).

        Raises:
            InvalidLayoutError: If any column spec is malformed.
        """
        if isinstance(spec, (str, bytes)) or not isinstance(spec, Sequence):
            raise InvalidLayoutError(
                f"Layout must be a list of column specs, got {type(spec).__name__}"
            )
        for item in spec:
            if isinstance(item, ColumnField):
                continue
            if not isinstance(item, dict):
                raise InvalidLayoutError(f"Invalid column spec: {item!r}")
            if "width" not in item and "size" not in item:
                raise InvalidLayoutError(f"Missing required width in: {item!r}")
        try:
            return cls(name=name, columns=list(spec))
        except ValidationError as exc:
            raise InvalidLayoutError(f"Invalid layout {name or spec!r}: {exc}") from exc

    @property
    def has_remainder(self) -> bool:
        return bool(self.columns) and self.columns[-1].is_remainder

    @property
    def length(self) -> int:
        """Sum of all fixed (non-remainder) widths."""
        return sum(c.width for c in self.columns if not c.is_remainder)

    @property
    def line_length(self) -> int | None:
        """Exact line length every line must have, or None when open-ended."""
        return None if self.has_remainder else self.length

    @property
    def keys(self) -> list[str]:
        """Record keys in layout order (fillers excluded)."""
        return [c.key for c in self.columns if c.key]


def load_layout(path: str | Path) -> FixedLayout:
    """Load a single layout YAML file.

    The file holds either a mapping with ``name`` and ``columns``, or just
    the list of columns (the name then defaults to the file stem).
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    if isinstance(raw, dict):
        name = raw.get("name") or path.stem
        columns = raw.get("columns")
        if columns is None:
            raise InvalidLayoutError(f"Layout file has no 'columns': {path}")
    else:
        name = path.stem
        columns = raw
    return FixedLayout.from_spec(columns, name=name)


def load_all_layouts(layouts_dir: str | Path) -> dict[str, FixedLayout]:
    """Load every ``*.yaml`` layout in a directory, keyed by layout name.

    Files that fail to load are logged and skipped.
    """
    layouts: dict[str, FixedLayout] = {}
    for yaml_path in sorted(Path(layouts_dir).glob("*.yaml")):
        try:
            layout = load_layout(yaml_path)
        except (InvalidLayoutError, yaml.YAMLError) as e:
            logger.warning("Failed to load layout from %s: %s", yaml_path, e)
            continue
        layouts[layout.name] = layout
        logger.debug("Loaded layout: %s from %s", layout.name, yaml_path)
    logger.info("Loaded %d layouts", len(layouts))
    return layouts
