"""
Command-line script: sum the currency values in a charge file.

Usage:
    uv run python scripts/sum_charges.py charges.txt
    uv run python scripts/sum_charges.py charges.txt --config summation.yaml
    uv run python scripts/sum_charges.py charges.txt --breakdown outputs/breakdown.csv
    uv run python scripts/sum_charges.py charges.txt --verbose

Prints the file size, the sum, and the location of every value that
failed to parse. Exits with status 1 if the file cannot be read.
"""

from __future__ import annotations

import argparse
import logging
import sys

from charge_summation import (
    ChargeFileError,
    SummationConfig,
    build_breakdown,
    export_breakdown,
    format_summary,
    load_config,
    sum_file,
)

log = logging.getLogger("sum_charges")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sum the currency values in a file.")
    parser.add_argument("path", help="Charge file to read")
    parser.add_argument("--config", help="YAML config with the currency format")
    parser.add_argument("--breakdown", help="Write a per-value CSV breakdown here")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )

    config = load_config(args.config) if args.config else SummationConfig()

    try:
        results = sum_file(args.path, config)
    except ChargeFileError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(format_summary(results))

    if args.breakdown:
        df = build_breakdown(results.get_second().last_fragments)
        written = export_breakdown(df, args.breakdown)
        log.info("Breakdown written to %s", written)

    return 0


if __name__ == "__main__":
    sys.exit(main())
