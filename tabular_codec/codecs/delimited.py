"""
Delimited text codecs for tabular-codec.

``DelimitedLineTokenizer`` parses and renders a single line of delimited
text with full quoting semantics (embedded separators, doubled-quote
escaping) at a fraction of the cost of the general-purpose ``csv`` module
machinery, because it runs once per row on high-volume streams.

Parsing algorithm:
  1. Split the line on the separator. Quoted fields that contain the
     separator are broken apart by this split and reassembled below.
  2. Walk the parts keeping an "inside an open quoted value" flag:
     - A part starting with the quote char that also ends with it and
       holds an even number of quote chars is a complete quoted field.
     - Otherwise a leading quote opens a value; following parts are
       appended (re-inserting the separator) until a part ends with a
       quote and holds an odd number of quote chars.
     - Unquoted parts must not contain the quote char or a line break.
  3. A value still open at the end of the line is an error: records
     spanning physical lines must be joined before they get here.

Line terminators: the tokenizer emits complete lines by default
(``line_terminator="\\n"``). ``CsvCodec`` builds its tokenizer with an
empty terminator so rendered records are line content only and the line
sink owns the record separator. Both are configurable.

Also contains ``PsvCodec`` for pipe-separated values, which has no quoting
at all.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tabular_codec.codecs.base import BaseCodec
from tabular_codec.exceptions import MalformedInputError, TypeMismatchError
from tabular_codec.rows import Positional

if TYPE_CHECKING:
    from tabular_codec.header import Header

_LINE_BREAKS = ("\r", "\n")


class DelimitedLineTokenizer:
    """Quote-aware parser/renderer for one delimited line.

    Args:
        separator: Single field separator character.
        quote_char: Single quote character; doubled inside a quoted value
            to represent itself.
        always_quote: Quote every rendered field, not just those that
            need it.
        line_terminator: Appended to every rendered line.
    """

    def __init__(
        self,
        separator: str = ",",
        quote_char: str = '"',
        always_quote: bool = False,
        line_terminator: str = "\n",
    ) -> None:
        if len(separator) != 1 or len(quote_char) != 1:
            raise ValueError("separator and quote_char must be single characters")
        if separator == quote_char:
            raise ValueError("separator and quote_char must differ")
        self.separator = separator
        self.quote_char = quote_char
        self.always_quote = always_quote
        self.line_terminator = line_terminator
        self._escaped_quote = quote_char * 2

    def _unescape(self, value: str) -> str:
        # After removing every doubled quote no quote char may remain.
        if self.quote_char in value.replace(self._escaped_quote, ""):
            raise MalformedInputError(f"Missing or stray quote in: {value!r}")
        return value.replace(self._escaped_quote, self.quote_char)

    def parse(self, line: str) -> list[str]:
        """Split *line* into its fields.

        Raises:
            MalformedInputError: On stray or unterminated quotes, or an
                unquoted field holding a quote char or a line break.
        """
        sep = self.separator
        quote = self.quote_char
        fields: list[str] = []
        pending: list[str] = []
        in_quoted = False

        # Hot path: keep the branches flat, benchmark before refactoring.
        for part in line.split(sep):
            if in_quoted:
                if part.endswith(quote) and part.count(quote) % 2 == 1:
                    pending.append(part[:-1])
                    fields.append(self._unescape("".join(pending)))
                    pending = []
                    in_quoted = False
                else:
                    pending.append(part)
                    pending.append(sep)
            elif part.startswith(quote):
                if len(part) > 1 and part.endswith(quote) and part.count(quote) % 2 == 0:
                    fields.append(self._unescape(part[1:-1]))
                else:
                    pending = [part[1:], sep]
                    in_quoted = True
            elif quote in part:
                raise MalformedInputError(f"Illegal quoting in: {line!r}")
            elif "\r" in part or "\n" in part:
                raise MalformedInputError(
                    f"Unquoted fields do not allow \\r or \\n: {line!r}"
                )
            else:
                fields.append(part)

        if in_quoted:
            raise MalformedInputError(f"Unclosed quoted field in: {line!r}")
        return fields

    def quote(self, value: Any) -> str:
        """Render one field, quoting it only when required."""
        if value is None:
            return ""
        text = value if isinstance(value, str) else str(value)
        if (
            self.always_quote
            or self.separator in text
            or self.quote_char in text
            or any(c in text for c in _LINE_BREAKS)
        ):
            return f"{self.quote_char}{text.replace(self.quote_char, self._escaped_quote)}{self.quote_char}"
        return text

    def render(self, fields: list[Any]) -> str:
        """Join *fields* into one line, followed by the line terminator."""
        return self.separator.join(self.quote(f) for f in fields) + self.line_terminator


class CsvCodec(BaseCodec):
    """Comma (or other single character) separated values."""

    def __init__(
        self,
        separator: str = ",",
        quote_char: str = '"',
        always_quote: bool = False,
        line_terminator: str = "",
    ) -> None:
        self.tokenizer = DelimitedLineTokenizer(
            separator=separator,
            quote_char=quote_char,
            always_quote=always_quote,
            line_terminator=line_terminator,
        )

    def parse(self, line: Any) -> Positional:
        if not isinstance(line, str):
            raise TypeMismatchError(
                f"Line must be a str when format is csv. Actual: {type(line).__name__}"
            )
        return Positional(tuple(self.tokenizer.parse(line)))

    def render(self, row: Any, header: Header) -> str:
        return self.tokenizer.render(header.to_positional(row))


class PsvCodec(BaseCodec):
    """Pipe separated values.

    There is no quoting: on render any '|' inside a value is replaced with
    ':' and line breaks are removed.
    """

    separator = "|"

    def parse(self, line: Any) -> Positional:
        if not isinstance(line, str):
            raise TypeMismatchError(
                f"Line must be a str when format is psv. Actual: {type(line).__name__}"
            )
        return Positional(tuple(line.split(self.separator)))

    def render(self, row: Any, header: Header) -> str:
        return self.separator.join(
            self._clean(value) for value in header.to_positional(row)
        )

    def _clean(self, value: Any) -> str:
        if value is None:
            return ""
        text = value if isinstance(value, str) else str(value)
        return text.replace(self.separator, ":").replace("\r", "").replace("\n", "")
