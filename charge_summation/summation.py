"""
Accumulating summation engine for charge-summation.

``ChargeCardSummation`` owns a running sum and the positions of the
fragments that failed during the most recent ``parse()`` call. The sum
carries over between calls until ``reinitialize()``; the error log is
cleared at the start of every call.

Example::

    summation = ChargeCardSummation()
    summation.parse("$1.00$abc$3.00")
    summation.get_sum()     # 4.0
    summation.get_errors()  # (2,)
"""

from __future__ import annotations

import logging

from charge_summation.config import CurrencyFormat, SummationConfig
from charge_summation.tokenizer import FragmentResult, escape_for_delimiter, iter_fragments

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_SUM = 0.0


class ChargeCardSummation:
    """Sums currency amounts across one or more ``parse()`` calls.

    Not safe for concurrent use; callers sharing an instance between
    threads must serialize access themselves.

    Args:
        initial_sum: Starting value of the running sum.
        currency_format: Amount grammar; fixed for the lifetime of the
            instance. Defaults to ``CurrencyFormat()``.
    """

    def __init__(
        self,
        initial_sum: float = DEFAULT_INITIAL_SUM,
        currency_format: CurrencyFormat | None = None,
    ) -> None:
        self._format = currency_format if currency_format is not None else CurrencyFormat()
        self._symbol = self._format.symbol
        self._pattern = escape_for_delimiter(self._symbol)
        self._errors: list[int] = []
        self._fragments: tuple[FragmentResult, ...] = ()
        self._sum = DEFAULT_INITIAL_SUM
        self.reinitialize(initial_sum)

    @classmethod
    def from_config(cls, config: SummationConfig) -> ChargeCardSummation:
        return cls(initial_sum=config.initial_sum, currency_format=config.currency)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def currency_format(self) -> CurrencyFormat:
        return self._format

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def pattern(self) -> str:
        """The escaped split pattern derived from the symbol."""
        return self._pattern

    @property
    def sum(self) -> float:
        return self._sum

    @property
    def errors(self) -> tuple[int, ...]:
        return self.get_errors()

    @property
    def last_fragments(self) -> tuple[FragmentResult, ...]:
        """Per-fragment results of the most recent ``parse()`` call."""
        return self._fragments

    def get_sum(self) -> float:
        """Return the current running sum."""
        return self._sum

    def get_errors(self) -> tuple[int, ...]:
        """Return the 1-based fragment positions that failed in the last parse."""
        return tuple(self._errors)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def clear_errors(self) -> None:
        self._errors.clear()

    def reinitialize(self, sum: float = DEFAULT_INITIAL_SUM) -> None:
        """Replace the running sum outright. The error log is left alone."""
        self._sum = float(sum)

    def parse(self, text: str) -> None:
        """Parse *text* for charge values and add them to the running sum.

        Text before the first currency symbol is skipped. Each fragment that
        fails to parse is recorded by position and leaves the sum untouched;
        the remaining fragments are still summed.
        """
        self.clear_errors()
        results = tuple(iter_fragments(text, self._format))
        added = 0.0

        for result in results:
            if result.amount is None:
                self._add_error(result.position)
            else:
                self._add_to_sum(result.amount)
                added += result.amount

        self._fragments = results
        logger.info(
            "Parsed %d value(s): %d error(s), added %.2f, sum is now %.2f",
            len(results),
            len(self._errors),
            added,
            self._sum,
        )

    def _add_error(self, position: int) -> None:
        self._errors.append(position)

    def _add_to_sum(self, value: float) -> None:
        self._sum += value

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(sum={self._sum!r}, symbol={self._symbol!r}, "
            f"errors={self.get_errors()!r})"
        )
