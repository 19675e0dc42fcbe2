"""
Record-level helpers on top of a Tabular session.

These wrap the per-line calls of ``Tabular`` for the common case where
the caller already holds an iterable of lines (or records):

- ``iter_records()``: header handling + one keyed record per data line.
- ``render_lines()``: header line + one rendered line per record.
- ``records_to_frame()`` / ``frame_to_lines()``: the same, to and from a
  pandas DataFrame.

Reading and writing the physical lines (files, compression, object
storage) stays with the caller. Blank lines and blank records are skipped;
errors from the codec propagate unchanged so the caller decides whether to
abort the stream or skip the record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

import pandas as pd

from tabular_codec.tabular import Tabular

logger = logging.getLogger(__name__)


def iter_records(
    lines: Iterable[Any],
    tabular: Tabular,
    cleanse_header: bool = True,
) -> Iterator[dict[str, Any]]:
    """Yield one keyed record per non-blank data line.

    When the session still expects a header from the stream, the first
    non-blank line is consumed as the header (and cleansed when
    *cleanse_header* is True) before any record is produced.

    Raises:
        InvalidHeaderError: If the header fails cleansing.
    """
    for line in lines:
        if tabular.header_pending():
            if tabular.parse_header(line) is None:
                continue
            if cleanse_header:
                tabular.cleanse_columns()
            continue

        record = tabular.parse_record(line)
        if record is not None:
            yield record


def render_lines(
    records: Iterable[Any],
    tabular: Tabular,
    include_header: bool = True,
) -> Iterator[Any]:
    """Yield the rendered header (if the format has one) then each record."""
    if include_header:
        header = tabular.render_header()
        if header is not None:
            yield header

    for record in records:
        rendered = tabular.render_record(record)
        if rendered is not None:
            yield rendered


def records_to_frame(
    lines: Iterable[Any],
    tabular: Tabular,
    cleanse_header: bool = True,
) -> pd.DataFrame:
    """Parse *lines* into a DataFrame, one row per record.

    Columns follow the session's accepted header columns, in order, when
    the format has a header; otherwise the order in which keys first
    appear in the records.
    """
    records = list(iter_records(lines, tabular, cleanse_header=cleanse_header))

    columns = None
    if records and tabular.needs_header() and tabular.columns:
        present = set().union(*(r.keys() for r in records))
        columns = [c for c in tabular.columns if c in present]

    df = pd.DataFrame.from_records(records, columns=columns)
    logger.info("Parsed %d records into %d columns", len(df), len(df.columns))
    return df


def frame_to_lines(
    df: pd.DataFrame,
    tabular: Tabular,
    include_header: bool = True,
) -> list[Any]:
    """Render every DataFrame row through *tabular*.

    Missing values (NaN/None/NaT) are rendered as empty/blank fields.
    """
    cleaned = df.astype(object).where(pd.notna(df), None)
    records = cleaned.to_dict(orient="records")
    lines = list(render_lines(records, tabular, include_header=include_header))
    logger.info("Rendered %d records", len(records))
    return lines
