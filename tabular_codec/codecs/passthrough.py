"""
Pass-through codecs for already-structured records.

These formats need no text parsing, or only the standard JSON decoder:

- ArrayCodec (``array``): each record is a list of values; the first list
  in the stream is the header.
- HashCodec (``hash``): each record is already a dict.
- JsonCodec (``json``): one JSON object per line.

They still route every render through the session Header so the column
governance (narrowing, ordering) applies the same way as for text formats.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tabular_codec.codecs.base import BaseCodec
from tabular_codec.exceptions import MalformedInputError, TypeMismatchError
from tabular_codec.rows import Keyed, Positional

if TYPE_CHECKING:
    from tabular_codec.header import Header


class ArrayCodec(BaseCodec):
    """Records are lists of values."""

    def parse(self, line: Any) -> Positional:
        if not isinstance(line, (list, tuple)):
            raise TypeMismatchError(
                f"Row must be a list when format is array. Actual: {type(line).__name__}"
            )
        return Positional(tuple(line))

    def render(self, row: Any, header: Header) -> list[Any]:
        return header.to_positional(row)


class HashCodec(BaseCodec):
    """Records are dicts of column name -> value."""

    carries_field_names = True
    header_in_stream = False

    def parse(self, line: Any) -> Keyed:
        if not isinstance(line, Mapping):
            raise TypeMismatchError(
                f"Row must be a dict when format is hash. Actual: {type(line).__name__}"
            )
        return Keyed(dict(line))

    def render(self, row: Any, header: Header) -> dict[str, Any]:
        return header.to_keyed(row) or {}


class JsonCodec(BaseCodec):
    """One JSON object per line."""

    carries_field_names = True
    header_in_stream = False

    def parse(self, line: Any) -> Keyed:
        if not isinstance(line, (str, bytes)):
            raise TypeMismatchError(
                f"Line must be a str when format is json. Actual: {type(line).__name__}"
            )
        try:
            value = json.loads(line)
        except json.JSONDecodeError as exc:
            raise MalformedInputError(f"Invalid JSON line: {exc}") from exc
        if not isinstance(value, dict):
            raise MalformedInputError(
                f"JSON line must hold an object, got {type(value).__name__}"
            )
        return Keyed(value)

    def render(self, row: Any, header: Header) -> str:
        return json.dumps(header.to_keyed(row) or {}, ensure_ascii=False, separators=(",", ":"))
