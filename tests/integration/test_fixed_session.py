"""
Integration tests: fixed-width sessions end to end.

Loads layouts from YAML files, reads fixed-width lines into records and
DataFrames, and transcodes between fixed-width and CSV.
"""

from __future__ import annotations

import pytest
import yaml

from tabular_codec import (
    Tabular,
    frame_to_lines,
    iter_records,
    load_all_layouts,
    load_layout,
    records_to_frame,
    render_lines,
)
from tabular_codec.exceptions import InvalidLineLengthError
from tests.conftest import CUSTOMER_LAYOUT, CUSTOMER_LINES


@pytest.fixture()
def layouts_dir(tmp_path):
    """A directory with one named layout, one bare-list layout and one broken file."""
    root = tmp_path / "layouts"
    root.mkdir()
    (root / "customer.yaml").write_text(
        yaml.dump({"name": "customer", "columns": CUSTOMER_LAYOUT}, sort_keys=False),
        encoding="utf-8",
    )
    (root / "note.yaml").write_text(
        yaml.dump([{"key": "id", "width": 3, "type": "integer"}, {"key": "text", "width": "remainder"}]),
        encoding="utf-8",
    )
    (root / "broken.yaml").write_text("- {key: x}\n", encoding="utf-8")
    return root


@pytest.mark.integration
class TestFixedSession:
    """Tests for file-backed fixed-width sessions."""

    def test_load_all_skips_broken(self, layouts_dir):
        layouts = load_all_layouts(layouts_dir)
        assert sorted(layouts) == ["customer", "note"]
        assert layouts["customer"].line_length == 27
        assert layouts["note"].line_length is None

    def test_read_records(self, layouts_dir):
        layout = load_layout(layouts_dir / "customer.yaml")
        tabular = Tabular(file_name="customers.fixed", format_options={"layout": layout})

        records = list(iter_records(CUSTOMER_LINES, tabular))
        assert tabular.format == "fixed"
        assert records == [
            {"name": "Jack", "zip": "90210", "age": 32, "weight": 125.5},
            {"name": "Jill", "zip": "12345", "age": None, "weight": 0.0},
        ]

    def test_governance_on_layout_keys(self, layouts_dir):
        layout = load_layout(layouts_dir / "customer.yaml")
        tabular = Tabular(
            format="fixed",
            format_options={"layout": layout},
            allowed_columns=["name", "age"],
        )
        # The layout supplies the header, so nothing in the stream triggers cleansing
        assert tabular.cleanse_columns() == ["zip", "weight"]
        records = list(iter_records(CUSTOMER_LINES, tabular))
        assert records[0] == {"name": "Jack", "age": 32}

    def test_bad_line_length_stops_stream(self, layouts_dir):
        layout = load_layout(layouts_dir / "customer.yaml")
        tabular = Tabular(format="fixed", format_options={"layout": layout})
        with pytest.raises(InvalidLineLengthError):
            list(iter_records([CUSTOMER_LINES[0], "too short"], tabular))

    def test_fixed_to_csv(self, layouts_dir):
        reader = Tabular(format="fixed", format_options={"layout": load_layout(layouts_dir / "customer.yaml")})
        writer = Tabular(format="csv", columns=reader.columns)

        lines = list(render_lines(iter_records(CUSTOMER_LINES, reader), writer))
        assert lines == [
            "name,zip,age,weight",
            "Jack,90210,32,125.5",
            "Jill,12345,,0.0",
        ]

    def test_csv_to_fixed(self, layouts_dir):
        reader = Tabular()
        records = iter_records(["Name,Zip,Age,Weight", "Jack,90210,32,125.5"], reader)
        writer = Tabular(format="fixed", format_options={"layout": load_layout(layouts_dir / "customer.yaml")})

        lines = list(render_lines(records, writer))
        assert lines == ["Jack      " + "  " + "90210" + "032" + "0125.50"]

    def test_remainder_layout(self, layouts_dir):
        tabular = Tabular(format="fixed", format_options={"layout": load_layout(layouts_dir / "note.yaml")})
        records = list(iter_records(["001first note", "002", "003 third, with comma"], tabular))
        assert records == [
            {"id": 1, "text": "first note"},
            {"id": 2, "text": ""},
            {"id": 3, "text": "third, with comma"},
        ]
        assert tabular.render_record(records[2]) == "003third, with comma"

    def test_frame_round_trip(self, layouts_dir):
        layout = load_layout(layouts_dir / "customer.yaml")
        df = records_to_frame(CUSTOMER_LINES, Tabular(format="fixed", format_options={"layout": layout}))

        assert list(df.columns) == ["name", "zip", "age", "weight"]
        assert df["weight"].tolist() == [125.5, 0.0]

        lines = frame_to_lines(df, Tabular(format="fixed", format_options={"layout": layout}))
        assert lines == [
            "Jack      " + "  " + "90210" + "032" + "0125.50",
            CUSTOMER_LINES[1],
        ]
