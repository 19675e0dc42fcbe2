"""
Custom exception hierarchy for tabular-codec.

Why a custom hierarchy:
- The surrounding pipeline decides per error kind whether to abort the
  stream or log and skip the record, so each failure mode gets its own
  class instead of a generic ValueError/RuntimeError.
- Messages name the offending column, value or length so a bad record can
  be diagnosed from the log line alone.

None of these are ever retried or suppressed inside this package.
"""


class TabularCodecError(Exception):
    """Base exception for all tabular-codec errors."""


class UnknownFormatError(TabularCodecError):
    """Raised when no format can be resolved for a session.

    Neither an explicit format, a recognised file name extension, nor a
    default format yielded a registered format identifier.
    """


class InvalidHeaderError(TabularCodecError):
    """Raised when header columns fail cleansing.

    This can happen if:
    - Columns outside ``allowed_columns`` are present and ``skip_unknown``
      is False.
    - Every column was rejected.
    - Some ``required_columns`` are missing after cleansing.
    """


class MissingHeaderError(TabularCodecError):
    """Raised when a header must be rendered but no columns are known yet."""


class TypeMismatchError(TabularCodecError):
    """Raised when a row or value does not have the expected shape or type.

    For example a positional row supplied before any columns are set, a
    non-string line handed to the fixed-width codec, or text that is not a
    number in an integer column.
    """


class InvalidLayoutError(TabularCodecError):
    """Raised when a fixed-width layout definition is malformed."""


class InvalidLineLengthError(TabularCodecError):
    """Raised when a fixed-width line is not exactly the layout length."""


class ValueTooLongError(TabularCodecError):
    """Raised when a value cannot be rendered within its column width."""


class MalformedInputError(TabularCodecError):
    """Raised when a delimited line has stray, missing or illegal quoting."""


class ConfigValidationError(TabularCodecError):
    """Raised when a session config file is empty or inconsistent."""
