"""
Reporting helpers for charge-summation.

- ``build_breakdown``: One row per parsed fragment, for inspecting which
  values were summed and which were rejected.
- ``export_breakdown``: Write the breakdown as CSV.
- ``format_summary``: The plain-text summary printed by the CLI.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from charge_summation.exceptions import ExportError
from charge_summation.reader import ChargeLineResults
from charge_summation.summation import ChargeCardSummation
from charge_summation.tokenizer import FragmentResult

logger = logging.getLogger(__name__)

BREAKDOWN_COLUMNS = ["position", "fragment", "amount", "parsed"]


def build_breakdown(fragments: Iterable[FragmentResult]) -> pd.DataFrame:
    """Build a per-fragment table.

    Columns:
        position: 1-based fragment index (the value reported as an error
            location).
        fragment: Fragment text, currency symbol removed.
        amount: Parsed value, ``NaN`` for failed fragments.
        parsed: Whether the fragment parsed.

    Args:
        fragments: Usually ``ChargeCardSummation.last_fragments``.
    """
    rows = [
        {
            "position": f.position,
            "fragment": f.text,
            "amount": f.amount,
            "parsed": f.parsed,
        }
        for f in fragments
    ]
    df = pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").astype("float64")
    df["parsed"] = df["parsed"].astype(bool)
    df["position"] = df["position"].astype("int64")
    return df


def export_breakdown(df: pd.DataFrame, path: str | Path) -> str:
    """Write a breakdown table to *path* as CSV.

    The parent directory is created if needed.

    Returns:
        The path written, as a string.

    Raises:
        ExportError: If writing fails for any reason.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Failed to write {path.name}: {exc}") from exc
    logger.info("Exported breakdown -> %s (%d rows)", path, len(df))
    return str(path)


def format_summary(results: ChargeLineResults[int, ChargeCardSummation]) -> str:
    """Render the console summary for a file summation.

    Example output::

        The size of the file is 21; the summation is $4.00.
        Parse errors occurred at the following locations -
        Location: 2
    """
    summation = results.get_second()
    if summation is None:
        raise ValueError("Results carry no summation to report")

    lines = [
        f"The size of the file is {results.get_first()}; "
        f"the summation is {summation.symbol}{summation.get_sum():.2f}."
    ]
    errors = summation.get_errors()
    if not errors:
        lines.append("No parse errors occurred.")
    else:
        lines.append("Parse errors occurred at the following locations - ")
        lines.extend(f"Location: {error}" for error in errors)
    return "\n".join(lines)
