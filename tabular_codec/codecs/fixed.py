"""
Fixed-width codec for tabular-codec.

Parses and renders lines whose fields sit at fixed character offsets, as
described by a ``FixedLayout``.

Per-type behaviour:

  ========  =====================  ======================================
  type      parse                  render
  ========  =====================  ======================================
  string    stripped text          left justified, space padded;
                                   truncated when over width (if enabled)
  integer   int, blank -> None     zero padded, right justified
  float     float, blank -> None   zero padded, ``decimals`` digits
  ========  =====================  ======================================

Numeric values are never truncated: a value that does not fit raises
ValueTooLongError regardless of the truncate flag. ``None`` renders as
blanks so that it parses back as ``None``.

A remainder column takes the rest of the line on parse and renders the
plain string form of its value, unpadded.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from tabular_codec.codecs.base import BaseCodec
from tabular_codec.exceptions import (
    InvalidLineLengthError,
    TypeMismatchError,
    ValueTooLongError,
)
from tabular_codec.layout import ColumnField, FixedLayout
from tabular_codec.rows import Keyed

if TYPE_CHECKING:
    from tabular_codec.header import Header


_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


def _to_number(column: ColumnField, value: Any) -> int | float:
    # int()/float() also accept "1_000", "1e3", "nan" and non-ASCII digits
    if isinstance(value, str):
        pattern = _INTEGER_TEXT if column.type == "integer" else _FLOAT_TEXT
        if not pattern.fullmatch(value.strip()):
            raise TypeMismatchError(
                f"Column '{column.key}' expects {column.type}, got {value!r}"
            )
    try:
        return int(value) if column.type == "integer" else float(value)
    except (TypeError, ValueError) as exc:
        raise TypeMismatchError(
            f"Column '{column.key}' expects {column.type}, got {value!r}"
        ) from exc


def parse_field(column: ColumnField, text: str) -> Any:
    """Decode the raw text of one column."""
    stripped = text.strip()
    if column.type == "string":
        return stripped
    if not stripped:
        return None
    return _to_number(column, stripped)


def render_field(column: ColumnField, value: Any, truncate: bool) -> str:
    """Encode one value into exactly ``column.width`` characters.

    Raises:
        ValueTooLongError: If the value does not fit and cannot be truncated.
        TypeMismatchError: If a numeric column receives a non-numeric value.
    """
    if column.is_remainder:
        if value is None:
            return ""
        if column.type == "string":
            return str(value)
        return str(_to_number(column, value))

    width = column.width
    if column.type == "string":
        text = "" if value is None else str(value)
        if len(text) > width:
            if not truncate:
                raise ValueTooLongError(
                    f"Value: {text!r} is too long to fit into column: "
                    f"{column.key} of width: {width}"
                )
            text = text[:width]
        return text.ljust(width)

    if value is None or (isinstance(value, str) and not value.strip()):
        return " " * width

    number = _to_number(column, value)
    if column.type == "integer":
        formatted = f"{number:0{width}d}"
    else:
        formatted = f"{number:0{width}.{column.decimals}f}"
    if len(formatted) > width:
        raise ValueTooLongError(
            f"Value: {value!r} is too large to fit into column: "
            f"{column.key} of width: {width}"
        )
    return formatted


class FixedCodec(BaseCodec):
    """Codec for fixed-width lines.

    Args:
        layout: A FixedLayout, or a list of column dicts such as
            ``[{"key": "name", "width": 23}, {"width": 2}, ...]``.
        truncate: Whether over-long string values are cut to the column
            width (True) or raise ValueTooLongError (False).
    """

    # The layout names the fields; there is no header line in the data.
    header_in_stream = False

    def __init__(
        self,
        layout: FixedLayout | Sequence[Any],
        truncate: bool = True,
    ) -> None:
        if not isinstance(layout, FixedLayout):
            layout = FixedLayout.from_spec(layout)
        self.layout = layout
        self.truncate = truncate

    @property
    def line_length(self) -> int | None:
        """Required length of every line, or None when the last column is a remainder."""
        return self.layout.line_length

    def header_columns(self) -> list[str]:
        return self.layout.keys

    def parse(self, line: Any) -> Keyed:
        if not isinstance(line, str):
            raise TypeMismatchError(
                f"Line must be a str when format is fixed. Actual: {type(line).__name__}"
            )

        expected = self.layout.line_length
        if expected is not None and len(line) != expected:
            raise InvalidLineLengthError(
                f"Expected line length: {expected}, actual line length: {len(line)}"
            )

        record: dict[str, Any] = {}
        offset = 0
        for column in self.layout.columns:
            if column.is_remainder:
                if column.key:
                    record[column.key] = parse_field(column, line[offset:])
                break
            # Columns without a key are fillers
            if column.key:
                record[column.key] = parse_field(column, line[offset:offset + column.width])
            offset += column.width
        return Keyed(record)

    def render(self, row: Any, header: Header) -> str:
        record = header.to_keyed(row) or {}
        return "".join(
            render_field(column, record.get(column.key) if column.key else None, self.truncate)
            for column in self.layout.columns
        )
