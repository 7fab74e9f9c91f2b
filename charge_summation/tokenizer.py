"""
Currency tokenizer/parser for charge-summation.

Turns raw text into currency amounts:

1. ``escape_for_delimiter`` makes the currency symbol safe to use as a
   split pattern.
2. ``split_fragments`` cuts the text at every occurrence of the symbol.
   Fragment 0 is whatever precedes the first symbol.
3. ``parse_amount`` parses one ``"<symbol><amount>"`` candidate against the
   grammar described by a ``CurrencyFormat``.

``iter_fragments`` chains the three steps and yields one
``FragmentResult`` per fragment after the first, recording failures
instead of raising.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from charge_summation.config import CurrencyFormat
from charge_summation.exceptions import FragmentParseError

logger = logging.getLogger(__name__)

# Characters that change meaning inside a regular expression
SPECIAL_CHARACTERS: frozenset[str] = frozenset("\\^$.|?*+()[]")


@dataclass(frozen=True)
class FragmentResult:
    """Outcome of parsing one split fragment.

    Attributes:
        position: 1-based index of the fragment in the split result.
        text: The fragment without the currency symbol.
        amount: Parsed value, or ``None`` if the fragment failed to parse.
    """

    position: int
    text: str
    amount: float | None = None

    @property
    def parsed(self) -> bool:
        return self.amount is not None


def escape_for_delimiter(symbol: str) -> str:
    """Prefix every regex special character in *symbol* with a backslash.

    Example::

        >>> escape_for_delimiter("US$")
        'US\\\\$'
    """
    return "".join("\\" + ch if ch in SPECIAL_CHARACTERS else ch for ch in symbol)


def split_fragments(text: str, pattern: str) -> list[str]:
    """Split *text* at every non-overlapping match of *pattern*.

    Trailing empty fragments are kept, so a string made of the symbol
    repeated ``k`` times gives ``k + 1`` empty fragments.
    """
    return re.split(pattern, text)


@functools.lru_cache(maxsize=32)
def build_amount_pattern(fmt: CurrencyFormat) -> re.Pattern[str]:
    """Compile the amount grammar for *fmt*.

    The pattern matches at the start of a candidate and captures
    ``lead_sign``, ``sign``, ``integer`` and ``fraction``. Group separators
    are left inside ``integer``; ``parse_amount`` strips them.
    """
    symbol = escape_for_delimiter(fmt.symbol)
    group = re.escape(fmt.grouping_separator)
    decimal = re.escape(fmt.decimal_separator)
    size = fmt.grouping_size

    integer = rf"\d{{1,{size}}}(?:{group}\d{{{size}}})+|\d+"
    number = rf"(?P<integer>{integer})(?:{decimal}(?P<fraction>\d+))?|{decimal}(?P<bare_fraction>\d+)"
    # The amount must not run straight into more number-like text.
    boundary = rf"(?!\d|{group}\d|{decimal}\d)"
    end = r"" if fmt.allow_trailing_text else r"\s*\Z"

    return re.compile(
        rf"\s*(?P<lead_sign>[-+])?{symbol}(?P<sign>[-+])?(?:{number}){boundary}{end}"
    )


def parse_amount(candidate: str, fmt: CurrencyFormat | None = None) -> float:
    """Parse a ``"<symbol><amount>"`` string into a float.

    Args:
        candidate: Text starting with the currency symbol, e.g. ``"$1,234.50"``.
        fmt: The currency grammar. Defaults to ``CurrencyFormat()`` ($, comma
            grouping, period decimal).

    Returns:
        The parsed amount.

    Raises:
        FragmentParseError: If *candidate* is empty, lacks the symbol, or
            the digits/separators after it do not form an amount.
    """
    if fmt is None:
        fmt = CurrencyFormat()
    if not candidate.strip():
        raise FragmentParseError(candidate, "empty")

    match = build_amount_pattern(fmt).match(candidate)
    if match is None:
        raise FragmentParseError(candidate)
    if match.group("lead_sign") and match.group("sign"):
        raise FragmentParseError(candidate, "more than one sign")

    integer = (match.group("integer") or "0").replace(fmt.grouping_separator, "")
    fraction = match.group("fraction") or match.group("bare_fraction") or "0"
    value = float(f"{integer}.{fraction}")

    if "-" in (match.group("lead_sign"), match.group("sign")):
        value = -value
    return value


def iter_fragments(text: str, fmt: CurrencyFormat | None = None) -> Iterator[FragmentResult]:
    """Split *text* and parse every fragment after the first.

    Failed fragments are yielded with ``amount=None``; nothing is raised.
    """
    if fmt is None:
        fmt = CurrencyFormat()
    fragments = split_fragments(text, escape_for_delimiter(fmt.symbol))

    if fragments[0].strip():
        logger.debug("Discarding text before first %r: %r", fmt.symbol, fragments[0][:40])

    for position in range(1, len(fragments)):
        fragment = fragments[position]
        try:
            amount = parse_amount(fmt.symbol + fragment, fmt)
        except FragmentParseError as exc:
            logger.debug("Fragment %d failed: %s", position, exc)
            yield FragmentResult(position=position, text=fragment)
        else:
            yield FragmentResult(position=position, text=fragment, amount=amount)
