"""
Codecs sub-package for tabular-codec.

Contains format-specific codecs that turn one line (or one structured
record) into a tagged Row, and render a Row back.

Design: Strategy Pattern
- base.py defines the BaseCodec ABC (protocol).
- delimited.py implements DelimitedLineTokenizer, CsvCodec and PsvCodec.
- fixed.py implements FixedCodec for fixed-width layouts.
- passthrough.py implements ArrayCodec, HashCodec and JsonCodec.

The format registry (registry.py) maps format identifiers to these
classes; the Tabular dispatcher selects one at session start.
"""

from tabular_codec.codecs.base import BaseCodec
from tabular_codec.codecs.delimited import CsvCodec, DelimitedLineTokenizer, PsvCodec
from tabular_codec.codecs.fixed import FixedCodec
from tabular_codec.codecs.passthrough import ArrayCodec, HashCodec, JsonCodec

__all__ = [
    "ArrayCodec",
    "BaseCodec",
    "CsvCodec",
    "DelimitedLineTokenizer",
    "FixedCodec",
    "HashCodec",
    "JsonCodec",
    "PsvCodec",
]
