"""
Row representations for tabular-codec.

A row is always one of two tagged shapes:

- ``Positional``: an ordered tuple of values, lined up with the header
  columns by index (what the delimited and array codecs produce).
- ``Keyed``: a mapping of column name -> value (what the fixed-width,
  hash and JSON codecs produce, and what ``parse_record`` returns).

Callers may hand in plain lists/tuples and dicts; ``as_row()`` lifts them
into the tagged form once, at the boundary, so every conversion below it
handles exactly these two cases.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from tabular_codec.exceptions import TypeMismatchError


@dataclass(frozen=True)
class Positional:
    """An ordered sequence of scalar values."""
    values: tuple[Any, ...] = ()

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class Keyed:
    """A mapping from column name to scalar value."""
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.fields)


Row = Union[Positional, Keyed]


def is_blank(value: Any) -> bool:
    """True for ``None``, whitespace-only strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (Positional, Keyed, list, tuple, Mapping)):
        return len(value) == 0
    return False


def as_row(value: Any) -> Row | None:
    """Lift *value* into a tagged ``Row``.

    Returns:
        ``None`` when *value* is blank (the caller should skip the record),
        otherwise a ``Positional`` or ``Keyed`` row.

    Raises:
        TypeMismatchError: If *value* is neither a sequence nor a mapping.
    """
    if is_blank(value):
        return None
    if isinstance(value, (Positional, Keyed)):
        return value
    if isinstance(value, (list, tuple)):
        return Positional(tuple(value))
    if isinstance(value, Mapping):
        return Keyed(dict(value))
    raise TypeMismatchError(
        f"Don't know how to convert {type(value).__name__} to a row"
    )
