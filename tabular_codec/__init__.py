"""
tabular-codec: per-row codecs for tabular text and structured records.

Public API surface:

- ``Tabular`` -- **recommended entry point**. One instance per stream:
  resolves the format (explicitly, from the file name, or the default),
  owns the column governance, and parses/renders one row at a time.

- ``Header`` -- column governance on its own: cleansing, allow-list and
  required-column checks, positional <-> keyed conversion.

- ``FixedLayout`` / ``load_layout()`` -- fixed-width column layouts, built
  in code or loaded from YAML.

- ``DelimitedLineTokenizer`` -- the quote-aware single-line CSV tokenizer.

- ``iter_records()`` / ``render_lines()`` / ``records_to_frame()`` /
  ``frame_to_lines()`` -- helpers over an iterable of lines.

Example::

    import tabular_codec

    tabular = tabular_codec.Tabular(file_name="people.csv")
    for record in tabular_codec.iter_records(lines, tabular):
        ...
"""

from __future__ import annotations

from tabular_codec.codecs import DelimitedLineTokenizer
from tabular_codec.config import TabularConfig, load_config, save_config
from tabular_codec.header import Header, cleanse_column
from tabular_codec.layout import REMAINDER, ColumnField, FixedLayout, load_all_layouts, load_layout
from tabular_codec.records import frame_to_lines, iter_records, records_to_frame, render_lines
from tabular_codec.registry import FormatRegistry, FormatRegistryBuilder, default_registry
from tabular_codec.rows import Keyed, Positional
from tabular_codec.tabular import Tabular

__all__ = [
    "REMAINDER",
    "ColumnField",
    "DelimitedLineTokenizer",
    "FixedLayout",
    "FormatRegistry",
    "FormatRegistryBuilder",
    "Header",
    "Keyed",
    "Positional",
    "Tabular",
    "TabularConfig",
    "cleanse_column",
    "default_registry",
    "frame_to_lines",
    "iter_records",
    "load_all_layouts",
    "load_config",
    "load_layout",
    "records_to_frame",
    "render_lines",
    "save_config",
]
