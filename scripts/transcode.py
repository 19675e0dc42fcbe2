"""
Demo script: transcode a tabular file into another format via the public API.

Usage:
    python scripts/transcode.py people.csv people.json
    python scripts/transcode.py customers.fixed customers.csv --config session.yaml

Input and output formats are inferred from the file names. A session YAML
(see tabular_codec.config) configures the reading side, e.g. the layout
for a fixed-width input or a column allow-list; the writing side reuses
the reader's cleansed columns.

Records that fail to parse are logged and skipped; a bad header aborts.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("transcode")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _option(name: str) -> str | None:
    """Return the value following *name* on the command line, if any."""
    if name in sys.argv:
        idx = sys.argv.index(name)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return None


def _output_columns(reader, record: dict) -> list:
    """Accepted reader columns (rejected ones dropped), else the record keys."""
    return reader.accepted_columns or list(record)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    from tabular_codec import Tabular, load_config
    from tabular_codec.exceptions import TabularCodecError

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    config_path = _option("--config")
    if config_path in args:
        args.remove(config_path)
    if len(args) != 2:
        log.error("Usage: transcode.py INPUT OUTPUT [--config session.yaml]")
        sys.exit(2)

    input_path, output_path = Path(args[0]), Path(args[1])
    if not input_path.exists():
        log.error("Input file not found: %s", input_path)
        sys.exit(1)

    if config_path:
        config = load_config(config_path)
        if config.file_name is None and config.format is None:
            config.file_name = input_path.name
        reader = Tabular.from_config(config)
    else:
        reader = Tabular(file_name=input_path.name)

    log.info("=" * 70)
    log.info("Input : %s (%s)", input_path, reader.format)

    written = skipped = 0
    writer: Tabular | None = None
    with open(input_path, "r", encoding="utf-8") as src, \
            open(output_path, "w", encoding="utf-8") as dst:
        for lineno, raw in enumerate(src, start=1):
            line = raw.rstrip("\r\n")
            if reader.header_pending():
                if reader.parse_header(line) is not None:
                    reader.cleanse_columns()
                continue

            try:
                record = reader.parse_record(line)
            except TabularCodecError as e:
                log.warning("SKIP  line %d: %s", lineno, e)
                skipped += 1
                continue
            if record is None:
                continue

            if writer is None:
                writer = Tabular(file_name=output_path.name, columns=_output_columns(reader, record))
                log.info("Output: %s (%s)", output_path, writer.format)
                header = writer.render_header()
                if header is not None:
                    dst.write(f"{header}\n")

            dst.write(f"{writer.render_record(record)}\n")
            written += 1

    log.info("Done: %d records written, %d skipped", written, skipped)
    log.info("=" * 70)


if __name__ == "__main__":
    main()
