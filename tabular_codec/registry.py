"""
Format registry for tabular-codec.

Maps format identifiers (``csv``, ``fixed``, ``json``, ...) to codec
classes, and infers a format from a file name's extensions.

Design:
- A ``FormatRegistry`` is immutable once built. It is passed by reference
  into each ``Tabular`` session, so steady-state lookups need no locking.
- Registration happens up front on a ``FormatRegistryBuilder``; its
  register/deregister calls are serialized with a lock so a builder may be
  populated from several startup threads.
- ``default_registry()`` returns the built-in table. To add a format,
  derive a new registry from it::

      registry = default_registry().builder().register("tsv", TsvCodec).build()
      tabular = Tabular(file_name="export.tsv", registry=registry)

Format inference takes the rightmost recognised extension, so
``customers.csv.gz`` resolves to ``csv``.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import PurePath
from types import MappingProxyType

from tabular_codec.codecs import (
    ArrayCodec,
    BaseCodec,
    CsvCodec,
    FixedCodec,
    HashCodec,
    JsonCodec,
    PsvCodec,
)
from tabular_codec.exceptions import UnknownFormatError

logger = logging.getLogger(__name__)

_FORMAT_NAME = re.compile(r"\w+")


def _check_name(name: str) -> str:
    if not isinstance(name, str) or not _FORMAT_NAME.fullmatch(name):
        raise ValueError(f"Invalid format {name!r}")
    return name


class FormatRegistry(Mapping[str, type[BaseCodec]]):
    """Read-only table of format identifier -> codec class."""

    def __init__(self, formats: Mapping[str, type[BaseCodec]]) -> None:
        self._formats = MappingProxyType(dict(formats))

    def __getitem__(self, name: str) -> type[BaseCodec]:
        return self._formats[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    @property
    def registered_formats(self) -> list[str]:
        return list(self._formats)

    def codec_class(self, name: str | None) -> type[BaseCodec]:
        """Return the codec class registered for *name*.

        Raises:
            UnknownFormatError: If *name* is not registered.
        """
        try:
            return self._formats[name]
        except (KeyError, TypeError):
            raise UnknownFormatError(
                f"Unknown tabular format: {name!r}. "
                f"Registered formats: {self.registered_formats}"
            ) from None

    def format_from_file_name(self, file_name: str | PurePath | None) -> str | None:
        """Return the registered format of the rightmost matching extension.

        Returns None when no extension of *file_name* is registered.
        """
        if not file_name:
            return None
        for ext in reversed(PurePath(file_name).name.split(".")[1:]):
            ext = ext.lower()
            if ext in self._formats:
                return ext
        return None

    def builder(self) -> FormatRegistryBuilder:
        """Start a new builder pre-populated with this registry's formats."""
        builder = FormatRegistryBuilder()
        for name, codec_cls in self._formats.items():
            builder.register(name, codec_cls)
        return builder


class FormatRegistryBuilder:
    """Mutable, thread-safe staging area for a FormatRegistry."""

    def __init__(self) -> None:
        self._formats: dict[str, type[BaseCodec]] = {}
        self._lock = threading.Lock()

    def register(self, name: str, codec_cls: type[BaseCodec]) -> FormatRegistryBuilder:
        """Register (or replace) the codec class for a format."""
        _check_name(name)
        with self._lock:
            self._formats[name] = codec_cls
        return self

    def deregister(self, name: str) -> type[BaseCodec] | None:
        """Remove a format. Returns the codec class removed, if any."""
        _check_name(name)
        with self._lock:
            return self._formats.pop(name, None)

    def build(self) -> FormatRegistry:
        with self._lock:
            registry = FormatRegistry(self._formats)
        logger.info("Built format registry: %s", registry.registered_formats)
        return registry


@lru_cache(maxsize=1)
def default_registry() -> FormatRegistry:
    """The built-in formats: array, csv, fixed, hash, json, psv."""
    return (
        FormatRegistryBuilder()
        .register("array", ArrayCodec)
        .register("csv", CsvCodec)
        .register("fixed", FixedCodec)
        .register("hash", HashCodec)
        .register("json", JsonCodec)
        .register("psv", PsvCodec)
        .build()
    )
