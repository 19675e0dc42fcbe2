"""
Base codec ABC for tabular-codec.

All format-specific codecs implement this interface. The contract is:
1. parse() takes one line (or one structured record for the pass-through
   formats) and returns a tagged Row.
2. render() takes a row plus the session Header and returns the output
   line (or structured record).

Class attributes tell the dispatcher how the format treats headers:
- carries_field_names: records name their own fields (hash, json), so
  no governance column list is needed to build a keyed record.
- header_in_stream: the column names arrive as the first line of the
  stream and are rendered as the first output line (csv, psv, array).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from tabular_codec.rows import Row

if TYPE_CHECKING:
    from tabular_codec.header import Header


class BaseCodec(ABC):
    """Abstract base class for row codecs."""

    carries_field_names: ClassVar[bool] = False
    header_in_stream: ClassVar[bool] = True

    @abstractmethod
    def parse(self, line: Any) -> Row:
        """Parse one line into a Positional or Keyed row.

        Raises:
            TypeMismatchError: If *line* is not of the expected type.
            MalformedInputError: If *line* cannot be decoded.
        """

    @abstractmethod
    def render(self, row: Any, header: Header) -> Any:
        """Render one row using *header* to order or narrow its values."""

    def header_columns(self) -> list[str] | None:
        """Columns implied by the codec itself (e.g. a fixed layout's keys)."""
        return None
