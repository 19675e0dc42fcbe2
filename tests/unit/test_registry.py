"""
Unit tests for the format registry (tabular_codec.registry).

Tests the built-in format table, file-name inference, and deriving new
registries through the builder without touching the default one.
"""

from __future__ import annotations

import pytest

from tabular_codec.codecs import CsvCodec, FixedCodec, JsonCodec, PsvCodec
from tabular_codec.exceptions import UnknownFormatError
from tabular_codec.registry import FormatRegistry, FormatRegistryBuilder, default_registry


class TestDefaultRegistry:

    def test_builtin_formats(self):
        assert sorted(default_registry().registered_formats) == [
            "array", "csv", "fixed", "hash", "json", "psv",
        ]

    def test_cached(self):
        assert default_registry() is default_registry()

    def test_codec_class(self):
        registry = default_registry()
        assert registry.codec_class("csv") is CsvCodec
        assert registry.codec_class("fixed") is FixedCodec

    def test_unknown_format(self):
        with pytest.raises(UnknownFormatError, match="Unknown tabular format"):
            default_registry().codec_class("xlsx")

    def test_none_format(self):
        with pytest.raises(UnknownFormatError):
            default_registry().codec_class(None)

    def test_is_read_only(self):
        with pytest.raises(TypeError):
            default_registry()["tsv"] = CsvCodec


class TestFormatFromFileName:
    """Tests for FormatRegistry.format_from_file_name()."""

    @pytest.mark.parametrize(
        "file_name, expected",
        [
            ("people.csv", "csv"),
            ("people.csv.gz", "csv"),
            ("people.csv.gz.enc", "csv"),
            ("export.JSON", "json"),
            ("data.psv.csv", "csv"),
            ("/tmp/dir.json/data.fixed", "fixed"),
            ("README", None),
            ("archive.zip", None),
            ("", None),
            (None, None),
        ],
    )
    def test_inference(self, file_name, expected):
        assert default_registry().format_from_file_name(file_name) == expected


class TestBuilder:

    def test_register_and_build(self):
        registry = FormatRegistryBuilder().register("tsv", CsvCodec).build()
        assert isinstance(registry, FormatRegistry)
        assert "tsv" in registry
        assert len(registry) == 1

    def test_invalid_name(self):
        with pytest.raises(ValueError, match="Invalid format"):
            FormatRegistryBuilder().register("csv-2", CsvCodec)

    def test_deregister(self):
        builder = default_registry().builder()
        assert builder.deregister("psv") is PsvCodec
        assert builder.deregister("psv") is None
        registry = builder.build()
        assert "psv" not in registry
        assert "psv" in default_registry()

    def test_extend_default(self):
        registry = default_registry().builder().register("ndjson", JsonCodec).build()
        assert registry.format_from_file_name("events.ndjson") == "ndjson"
        assert "ndjson" not in default_registry()
