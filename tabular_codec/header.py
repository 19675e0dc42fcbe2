"""
Column governance for tabular-codec.

The ``Header`` owns the column list of one parsing/rendering session and
applies the governance rules to it:

- ``cleanse()`` normalizes raw column names, rejects names outside the
  allow-list and checks the required columns.
- ``to_keyed()`` / ``to_positional()`` convert rows between the positional
  and keyed shapes using the current column list.

Positional integrity: a rejected column is never removed. Its slot in the
column list is replaced by a rejection marker (``<rejected:Original Name>``)
and flagged in the parallel ``accepted`` mask, so positional row data keeps
lining up with the columns while the rejected values are dropped from keyed
output.

Ownership: a Header is mutated in place (``set_columns`` then ``cleanse``)
and is owned by exactly one session. It must not be shared across threads;
``Tabular`` creates its own instance and never hands out a second one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from tabular_codec.config import GovernanceConfig
from tabular_codec.exceptions import InvalidHeaderError, TypeMismatchError
from tabular_codec.rows import Keyed, Positional, as_row, is_blank

logger = logging.getLogger(__name__)

REJECTED_PREFIX = "<rejected:"
_REJECTED_SUFFIX = ">"

_SEPARATOR_RUNS = re.compile(r"[\s\-]+")
_NON_WORD = re.compile(r"\W+")


def cleanse_column(name: Any) -> str:
    """Normalize a single column name.

    - Leading and trailing whitespace is stripped.
    - All characters are converted to lower case.
    - Runs of whitespace and '-' become a single '_'.
    - Everything except letters, digits and '_' is removed.

    Examples::

        cleanse_column("  First Name ")   # -> "first_name"
        cleanse_column("Zip-Code (5)")    # -> "zip_code_5"
    """
    if name is None:
        return ""
    cleansed = str(name).strip().lower()
    cleansed = _SEPARATOR_RUNS.sub("_", cleansed)
    return _NON_WORD.sub("", cleansed)


def rejected_marker(name: Any) -> str:
    """Column placeholder that keeps the original *name* for diagnostics."""
    return f"{REJECTED_PREFIX}{'' if name is None else name}{_REJECTED_SUFFIX}"


def is_rejected_marker(column: Any) -> bool:
    return (
        isinstance(column, str)
        and column.startswith(REJECTED_PREFIX)
        and column.endswith(_REJECTED_SUFFIX)
    )


def _original_name(marker: str) -> str:
    return marker[len(REJECTED_PREFIX):-len(_REJECTED_SUFFIX)]


class Header:
    """Column list plus the governance rules applied to it.

    Args:
        columns: Initial column names (raw, not yet cleansed).
        allowed_columns: Normalized names that are permitted. ``None``
            allows every column.
        required_columns: Names that must be present after cleansing.
        skip_unknown: If True, columns outside ``allowed_columns`` are
            marked rejected and ignored. If False, ``cleanse()`` raises
            ``InvalidHeaderError`` as soon as one is found.
    """

    def __init__(
        self,
        columns: Sequence[str] | None = None,
        allowed_columns: Iterable[str] | None = None,
        required_columns: Iterable[str] | None = None,
        skip_unknown: bool = True,
    ) -> None:
        self.allowed_columns = set(allowed_columns) if allowed_columns is not None else None
        self.required_columns = list(required_columns) if required_columns is not None else None
        self.skip_unknown = skip_unknown
        self._columns: list[Any] | None = None
        self._accepted: list[bool] = []
        self._rejected: list[str] = []
        self._cleansed = False
        if columns is not None:
            self.set_columns(columns)

    @classmethod
    def from_config(
        cls,
        columns: Sequence[str] | None,
        governance: GovernanceConfig,
    ) -> Header:
        return cls(
            columns=columns,
            allowed_columns=governance.allowed_columns,
            required_columns=governance.required_columns,
            skip_unknown=governance.skip_unknown,
        )

    # -- State ---------------------------------------------------------------

    @property
    def columns(self) -> list[Any] | None:
        """Current column names, or ``None`` when no header is known yet."""
        return None if self._columns is None else list(self._columns)

    @property
    def accepted(self) -> tuple[bool, ...]:
        """Per-column flag: False for blank and rejected columns."""
        return tuple(self._accepted)

    @property
    def accepted_columns(self) -> list[Any]:
        """The columns a record is keyed by, in order (markers and blanks dropped)."""
        return self._accepted_names()

    @property
    def rejected_columns(self) -> list[str]:
        """Original names rejected by the last ``cleanse()``."""
        return list(self._rejected)

    @property
    def cleansed(self) -> bool:
        return self._cleansed

    def set_columns(self, names: Sequence[Any] | None) -> None:
        """Replace the column list verbatim. No validation is applied yet."""
        if names is None:
            self._columns = None
            self._accepted = []
        else:
            self._columns = list(names)
            self._accepted = [
                not is_blank(col) and not is_rejected_marker(col)
                for col in self._columns
            ]
        self._rejected = []
        self._cleansed = False

    def _accepted_names(self) -> list[Any]:
        return [col for col, ok in zip(self._columns or [], self._accepted) if ok]

    # -- Cleansing -----------------------------------------------------------

    def cleanse(self) -> list[str]:
        """Normalize the columns in place and enforce the governance rules.

        Cleansing an already cleansed list changes nothing: normalized
        names normalize to themselves and rejection markers are kept as is
        (and reported as rejected again).

        Returns:
            The original names of the rejected columns, in column order.

        Raises:
            InvalidHeaderError: If unknown columns are not tolerated, if
                every column was rejected, or if required columns are
                missing after cleansing.
        """
        if not self._columns:
            return []

        cleansed: list[str] = []
        accepted: list[bool] = []
        rejected: list[str] = []
        for column in self._columns:
            if is_rejected_marker(column):
                cleansed.append(column)
                accepted.append(False)
                rejected.append(_original_name(column))
                continue

            name = cleanse_column(column)
            if self.allowed_columns is None or name in self.allowed_columns:
                cleansed.append(name)
                accepted.append(bool(name))
            else:
                original = "" if column is None else str(column)
                cleansed.append(rejected_marker(original))
                accepted.append(False)
                rejected.append(original)

        self._columns = cleansed
        self._accepted = accepted
        self._rejected = rejected
        self._cleansed = True

        if rejected and not self.skip_unknown:
            raise InvalidHeaderError(
                f"Unknown columns after cleansing: {', '.join(rejected)}"
            )

        if len(rejected) == len(cleansed):
            raise InvalidHeaderError(
                f"All columns are unknown after cleansing: {', '.join(rejected)}"
            )

        if self.required_columns:
            present = set(self._accepted_names())
            missing = [col for col in self.required_columns if col not in present]
            if missing:
                raise InvalidHeaderError(
                    f"Missing columns after cleansing: {', '.join(missing)}"
                )

        if rejected:
            logger.warning(
                "Ignoring %d unknown column(s): %s", len(rejected), rejected
            )
        logger.info("Cleansed header: %s", cleansed)
        return rejected

    # -- Row conversion ------------------------------------------------------

    def to_keyed(self, row: Any, cleanse: bool = True) -> dict[str, Any] | None:
        """Convert *row* into a column name -> value dict.

        Args:
            row: A ``Positional``/``Keyed`` row, or a plain list/dict.
            cleanse: Whether to normalize and narrow keyed input to the
                current columns. Turn off when the input is already trusted.

        Returns:
            The keyed record, or ``None`` when *row* is blank.

        Raises:
            TypeMismatchError: If *row* is positional and no columns are set,
                or is neither positional nor keyed.
        """
        row = as_row(row)
        if row is None:
            return None

        if isinstance(row, Positional):
            if self._columns is None:
                raise TypeMismatchError(
                    "Header columns must be set before converting a positional row"
                )
            values = row.values
            return {
                col: values[i] if i < len(values) else None
                for i, (col, ok) in enumerate(zip(self._columns, self._accepted))
                if ok
            }

        if isinstance(row, Keyed):
            if cleanse and self._columns is not None:
                return self._narrow(row.fields)
            return dict(row.fields)

        raise TypeMismatchError(f"Unsupported row type: {type(row).__name__}")

    def to_positional(self, row: Any, cleanse: bool = True) -> list[Any]:
        """Convert *row* into a list ordered like the current columns.

        Missing keys and rejected columns become ``None``. Positional input
        is returned unchanged (as a list).

        Raises:
            TypeMismatchError: If *row* is keyed and no columns are set, or
                is neither positional nor keyed.
        """
        row = as_row(row)
        if row is None:
            return []

        if isinstance(row, Positional):
            return list(row.values)

        if isinstance(row, Keyed):
            if self._columns is None:
                raise TypeMismatchError(
                    "Don't know how to convert a keyed row to a positional one "
                    "without the header columns being set"
                )
            fields = self._narrow(row.fields) if cleanse else row.fields
            return [
                fields.get(col) if ok else None
                for col, ok in zip(self._columns, self._accepted)
            ]

        raise TypeMismatchError(f"Unsupported row type: {type(row).__name__}")

    def _narrow(self, fields: Mapping[Any, Any]) -> dict[str, Any]:
        """Restrict *fields* to the accepted columns.

        Keys that do not match a column exactly get a second chance in
        their normalized form (avoids issues with case, spaces etc.).
        Keys matching no column are dropped.
        """
        known = set(self._accepted_names())
        result = {key: value for key, value in fields.items() if key in known}
        if len(result) == len(fields):
            return result

        for key, value in fields.items():
            if key in known:
                continue
            name = cleanse_column(key)
            if name in known and name not in result:
                result[name] = value
        return result
