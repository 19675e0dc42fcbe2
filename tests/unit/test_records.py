"""
Unit tests for record-level helpers (tabular_codec.records).

Tests header consumption and blank-line skipping in iter_records(), the
header-first output of render_lines(), and the pandas adapters.
"""

from __future__ import annotations

import pandas as pd
import pytest

from tabular_codec.exceptions import InvalidHeaderError
from tabular_codec.records import frame_to_lines, iter_records, records_to_frame, render_lines
from tabular_codec.tabular import Tabular
from tests.conftest import CUSTOMER_LINES, PEOPLE_CSV


class TestIterRecords:
    """Tests for iter_records()."""

    def test_people_csv(self):
        records = list(iter_records(PEOPLE_CSV, Tabular()))
        assert records == [
            {"first_name": "Jack", "last_name": "Smith, Jr.", "age": "32", "internal_code": "A1"},
            {"first_name": "Jill", "last_name": 'O"Brien', "age": "29", "internal_code": "B2"},
        ]

    def test_leading_blank_lines_before_header(self):
        records = list(iter_records(["", "  ", "a,b", "1,2"], Tabular()))
        assert records == [{"a": "1", "b": "2"}]

    def test_allow_list(self):
        tabular = Tabular(allowed_columns=["first_name", "age"])
        records = list(iter_records(PEOPLE_CSV, tabular))
        assert records[0] == {"first_name": "Jack", "age": "32"}
        assert tabular.rejected_columns == ["Last Name", "Internal Code"]

    def test_without_cleansing(self):
        records = list(iter_records(PEOPLE_CSV[:2], Tabular(), cleanse_header=False))
        assert records == [
            {"First Name": "Jack", "Last Name": "Smith, Jr.", "Age": "32", "Internal Code": "A1"},
        ]

    def test_required_column_missing(self):
        tabular = Tabular(required_columns=["email"])
        with pytest.raises(InvalidHeaderError):
            list(iter_records(PEOPLE_CSV, tabular))

    def test_fixed_has_no_header_line(self, customer_layout):
        tabular = Tabular(format="fixed", format_options={"layout": customer_layout})
        records = list(iter_records(CUSTOMER_LINES, tabular))
        assert len(records) == 2
        assert records[0]["name"] == "Jack"

    def test_json(self):
        tabular = Tabular(format="json")
        records = list(iter_records(['{"a": 1}', "", '{"b": 2}'], tabular))
        assert records == [{"a": 1}, {"b": 2}]


class TestRenderLines:
    """Tests for render_lines()."""

    def test_header_first(self):
        tabular = Tabular(columns=["a", "b"])
        lines = list(render_lines([{"a": 1, "b": "x,y"}, [], [2, 3]], tabular))
        assert lines == ["a,b", '1,"x,y"', "2,3"]

    def test_no_header(self):
        tabular = Tabular(columns=["a", "b"])
        assert list(render_lines([[1, 2]], tabular, include_header=False)) == ["1,2"]

    def test_json_has_no_header(self):
        tabular = Tabular(format="json", columns=["a"])
        assert list(render_lines([{"a": 1, "b": 2}], tabular)) == ['{"a":1}']


class TestFrames:
    """Tests for records_to_frame() and frame_to_lines()."""

    def test_records_to_frame(self):
        df = records_to_frame(PEOPLE_CSV, Tabular())
        assert list(df.columns) == ["first_name", "last_name", "age", "internal_code"]
        assert len(df) == 2
        assert df.loc[1, "last_name"] == 'O"Brien'

    def test_records_to_frame_json_key_order(self):
        df = records_to_frame(['{"a": 1}', '{"b": 2, "a": 3}'], Tabular(format="json"))
        assert list(df.columns) == ["a", "b"]
        assert pd.isna(df.loc[0, "b"])

    def test_records_to_frame_empty(self):
        df = records_to_frame(["a,b"], Tabular())
        assert df.empty

    def test_frame_to_lines(self):
        df = pd.DataFrame({"a": ["1", None], "b": ["x,y", "z"]})
        lines = frame_to_lines(df, Tabular(columns=["a", "b"]))
        assert lines == ["a,b", '1,"x,y"', ",z"]

    def test_frame_to_fixed(self, customer_layout):
        tabular = Tabular(format="fixed", format_options={"layout": customer_layout})
        df = pd.DataFrame(
            {"name": ["Jill"], "zip": ["12345"], "age": [None], "weight": [0.0]}
        )
        assert frame_to_lines(df, tabular) == [CUSTOMER_LINES[1]]
