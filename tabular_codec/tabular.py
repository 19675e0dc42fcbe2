"""
Format dispatcher for tabular-codec.

``Tabular`` is the entry point used by the surrounding line pipeline. One
instance is created per file/stream; it resolves the format, builds the
codec, owns the session's column governance, and exposes uniform
parse/render calls.

Example using the default CSV format::

    tabular = Tabular()
    tabular.parse_header("first field,Second,thirD")
    # -> ["first field", "Second", "thirD"]

    tabular.cleanse_columns()
    # -> []   (no allow-list, nothing rejected)
    tabular.columns
    # -> ["first_field", "second", "third"]

    tabular.parse_record("1,2,3")
    # -> {"first_field": "1", "second": "2", "third": "3"}

    tabular.render_record({"third": "3", "first_field": "1"})
    # -> "1,,3"

Format resolution order:
  1. the explicit ``format``
  2. the rightmost registered extension of ``file_name``
  3. ``default_format`` (``"csv"``; pass None to disable)
  Otherwise UnknownFormatError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from tabular_codec.codecs import BaseCodec, FixedCodec
from tabular_codec.config import TabularConfig
from tabular_codec.exceptions import (
    ConfigValidationError,
    InvalidLayoutError,
    MissingHeaderError,
    UnknownFormatError,
)
from tabular_codec.header import Header
from tabular_codec.registry import FormatRegistry, default_registry
from tabular_codec.rows import Positional, Row, as_row, is_blank

logger = logging.getLogger(__name__)


class Tabular:
    """Parse and render the records of one tabular stream.

    Args:
        format: Format identifier, e.g. ``"csv"`` or ``"fixed"``.
        file_name: Used to infer the format when *format* is None.
        format_options: Keyword arguments for the codec constructor, e.g.
            ``{"layout": [...], "truncate": False}`` for ``fixed``.
        default_format: Fallback when the format cannot be inferred.
        registry: Format table to resolve against. Defaults to the
            built-in formats.
        columns: Header columns when the data carries no header line.
            For ``fixed`` they default to the layout keys.
        allowed_columns: Column allow-list applied by ``cleanse_columns()``.
        required_columns: Columns that must survive cleansing.
        skip_unknown: Ignore (True) or reject (False) unknown columns.

    Raises:
        UnknownFormatError: If no registered format can be resolved.
        InvalidLayoutError: If the fixed-width options are missing or bad.
        ConfigValidationError: If *format_options* do not fit the codec.

    A Tabular instance is not thread-safe; use one per stream.
    """

    def __init__(
        self,
        format: str | None = None,
        file_name: str | None = None,
        format_options: dict[str, Any] | None = None,
        default_format: str | None = "csv",
        registry: FormatRegistry | None = None,
        columns: Sequence[str] | None = None,
        allowed_columns: Iterable[str] | None = None,
        required_columns: Iterable[str] | None = None,
        skip_unknown: bool = True,
    ) -> None:
        self._registry = registry if registry is not None else default_registry()

        resolved = format
        if resolved is None and file_name:
            resolved = self._registry.format_from_file_name(file_name)
        if resolved is None:
            resolved = default_format
        if resolved is None:
            raise UnknownFormatError(
                f"The format cannot be inferred from the file name: {file_name!r}"
            )

        codec_cls = self._registry.codec_class(resolved)
        self._format = resolved
        try:
            self._codec: BaseCodec = codec_cls(**(format_options or {}))
        except (TypeError, ValueError) as exc:
            if issubclass(codec_cls, FixedCodec):
                raise InvalidLayoutError(
                    f"Invalid options for format {resolved!r}: {exc}"
                ) from exc
            raise ConfigValidationError(
                f"Invalid options for format {resolved!r}: {exc}"
            ) from exc
        self._header = Header(
            columns=columns,
            allowed_columns=allowed_columns,
            required_columns=required_columns,
            skip_unknown=skip_unknown,
        )
        if columns is None:
            implied = self._codec.header_columns()
            if implied:
                self._header.set_columns(implied)

        logger.info(
            "Tabular session: format=%s (file_name=%s), columns=%s",
            self._format, file_name, self._header.columns,
        )

    @classmethod
    def from_config(
        cls,
        config: TabularConfig,
        registry: FormatRegistry | None = None,
    ) -> Tabular:
        """Build a session from a validated TabularConfig."""
        return cls(
            format=config.format,
            file_name=config.file_name,
            format_options=config.format_options,
            default_format=config.default_format,
            registry=registry,
            columns=config.columns,
            allowed_columns=config.governance.allowed_columns,
            required_columns=config.governance.required_columns,
            skip_unknown=config.governance.skip_unknown,
        )

    # -- Session state -------------------------------------------------------

    @property
    def format(self) -> str:
        return self._format

    @property
    def codec(self) -> BaseCodec:
        return self._codec

    @property
    def header(self) -> Header:
        """The session's column governance."""
        return self._header

    @property
    def columns(self) -> list[Any] | None:
        """Copy of the current header columns."""
        return self._header.columns

    @property
    def accepted_columns(self) -> list[Any]:
        """Columns that survive governance; use these to set up a writer."""
        return self._header.accepted_columns

    @property
    def rejected_columns(self) -> list[str]:
        return self._header.rejected_columns

    def needs_header(self) -> bool:
        """True when records carry no field names of their own (csv, psv, fixed, array)."""
        return not self._codec.carries_field_names

    def header_pending(self) -> bool:
        """True while a header line still has to be parsed from the stream."""
        return self._codec.header_in_stream and is_blank(self._header.columns)

    # -- Parsing -------------------------------------------------------------

    def parse_header(self, line: Any) -> list[Any] | None:
        """Parse a header line and make it the session's columns.

        The columns are not cleansed; call ``cleanse_columns()`` next.

        Returns:
            The parsed columns, or None when *line* is blank or the format
            takes no header line from the stream.
        """
        if is_blank(line) or not self._codec.header_in_stream:
            return None

        row = self._codec.parse(line)
        columns = list(row.values) if isinstance(row, Positional) else list(row.fields)
        self._header.set_columns(columns)
        logger.info("Parsed header: %s", columns)
        return columns

    def row_parse(self, line: Any) -> Row | None:
        """Parse *line* into a Positional or Keyed row; None when blank."""
        if is_blank(line):
            return None
        return self._codec.parse(line)

    def parse_record(self, line: Any) -> dict[str, Any] | None:
        """Parse *line* into a keyed record; None when blank."""
        row = self.row_parse(line)
        if row is None:
            return None
        return self._header.to_keyed(row)

    def cleanse_columns(self) -> list[str]:
        """Cleanse the header columns. Returns the rejected original names."""
        return self._header.cleanse()

    # -- Rendering -----------------------------------------------------------

    def render_record(self, record: Any) -> Any:
        """Render a record (list, dict or tagged Row); None when blank."""
        row = as_row(record)
        if row is None:
            return None
        return self._codec.render(row, self._header)

    def render_header(self) -> Any:
        """Render the header line for the output format.

        Returns:
            The rendered header, or None when the format has no header line.

        Raises:
            MissingHeaderError: If no columns are known yet.
        """
        if not self._codec.header_in_stream:
            return None

        columns = self._header.columns
        if is_blank(columns):
            raise MissingHeaderError(
                "Header columns must be set before attempting to render a "
                f"header for format: {self._format!r}"
            )
        return self._codec.render(Positional(tuple(columns)), self._header)

    def to_keyed(self, row: Any) -> dict[str, Any] | None:
        """Apply the session header to an already parsed row."""
        return self._header.to_keyed(row)

    def to_positional(self, row: Any) -> list[Any]:
        return self._header.to_positional(row)
