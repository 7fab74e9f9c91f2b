"""
charge-summation: sum the currency amounts found in a charge file.

Public API surface:

- ``ChargeCardSummation`` -- the accumulating engine. ``parse(text)`` adds
  every ``<symbol><amount>`` value in *text* to a running sum and records
  the positions of values that failed to parse.

- ``sum_file(path, config=None)`` -- read a file and sum it; returns a
  ``ChargeLineResults`` pair of (bytes read, summation).

- ``CurrencyFormat`` / ``SummationConfig`` -- configuration models;
  ``load_config()`` / ``save_config()`` read and write them as YAML.

Examples::

    import charge_summation

    summation = charge_summation.ChargeCardSummation()
    summation.parse("$1.00$abc$3.00")
    summation.get_sum()      # 4.0
    summation.get_errors()   # (2,)

    results = charge_summation.sum_file("charges.txt")
    print(charge_summation.format_summary(results))
"""

from __future__ import annotations

from charge_summation.config import CurrencyFormat, SummationConfig, load_config, save_config
from charge_summation.exceptions import (
    ChargeFileError,
    ChargeFileNotFoundError,
    ChargeSummationError,
    ConfigValidationError,
    ExportError,
    FragmentParseError,
)
from charge_summation.reader import ChargeLineReader, ChargeLineResults, sum_file
from charge_summation.report import build_breakdown, export_breakdown, format_summary
from charge_summation.summation import ChargeCardSummation
from charge_summation.tokenizer import (
    FragmentResult,
    escape_for_delimiter,
    parse_amount,
    split_fragments,
)

__all__ = [
    "ChargeCardSummation",
    "ChargeFileError",
    "ChargeFileNotFoundError",
    "ChargeLineReader",
    "ChargeLineResults",
    "ChargeSummationError",
    "ConfigValidationError",
    "CurrencyFormat",
    "ExportError",
    "FragmentParseError",
    "FragmentResult",
    "SummationConfig",
    "build_breakdown",
    "escape_for_delimiter",
    "export_breakdown",
    "format_summary",
    "load_config",
    "parse_amount",
    "save_config",
    "split_fragments",
    "sum_file",
]
