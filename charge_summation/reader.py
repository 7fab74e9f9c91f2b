"""
Charge file reader for charge-summation.

Reads a charge file into memory (up to a buffer size), decodes it, and
hands the text to a fresh ``ChargeCardSummation``. The result is a
``ChargeLineResults`` pair of (bytes read, summation).

This module owns all file access: missing or unreadable files surface
as ``ChargeFileNotFoundError`` / ``ChargeFileError``. The summation
engine itself never touches the filesystem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from charge_summation.config import CurrencyFormat, SummationConfig
from charge_summation.exceptions import ChargeFileError, ChargeFileNotFoundError
from charge_summation.summation import DEFAULT_INITIAL_SUM, ChargeCardSummation

logger = logging.getLogger(__name__)

# Largest buffer a single read will request
MAX_BUFFER_SIZE = 2**31 - 1

# Reported as the byte count when a non-empty read hits end of file
END_OF_STREAM = -1

FirstT = TypeVar("FirstT")
SecondT = TypeVar("SecondT")


@dataclass(frozen=True)
class ChargeLineResults(Generic[FirstT, SecondT]):
    """A two-field result carrier.

    For ``ChargeLineReader.sum()``, ``first`` is the number of bytes read
    and ``second`` is the summation after parsing.
    """

    first: FirstT
    second: SecondT | None = None

    def get_first(self) -> FirstT:
        return self.first

    def get_second(self) -> SecondT | None:
        return self.second


class ChargeLineReader:
    """Reads charge values from a file and sums them.

    Args:
        path: The file to read.
        buffer_size: Maximum number of bytes to read. Defaults to the size
            of the file (0 if it does not exist). Capped at
            ``MAX_BUFFER_SIZE``.
        encoding: Text encoding used to decode the bytes. Undecodable
            bytes are replaced rather than rejected.
    """

    def __init__(
        self,
        path: str | Path,
        buffer_size: int | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.path = Path(path)
        if buffer_size is None:
            buffer_size = self.path.stat().st_size if self.path.is_file() else 0
        if buffer_size < 0:
            raise ValueError(f"buffer_size must be >= 0, got {buffer_size}")
        self.buffer_size = min(buffer_size, MAX_BUFFER_SIZE)
        self.encoding = encoding

    @classmethod
    def from_config(cls, path: str | Path, config: SummationConfig) -> ChargeLineReader:
        return cls(path, buffer_size=config.buffer_size, encoding=config.encoding)

    def read(self) -> tuple[int, str]:
        """Read and decode up to ``buffer_size`` bytes.

        Returns:
            ``(length, text)`` where *length* is the number of bytes read,
            or ``END_OF_STREAM`` if a non-empty read found no data.

        Raises:
            ChargeFileNotFoundError: If the file does not exist.
            ChargeFileError: If the file cannot be read.
        """
        try:
            with open(self.path, "rb") as stream:
                data = stream.read(self.buffer_size)
        except FileNotFoundError as exc:
            raise ChargeFileNotFoundError(
                str(self.path),
                f"The indicated file '{self.path.resolve()}' was not found.",
            ) from exc
        except OSError as exc:
            raise ChargeFileError(
                str(self.path),
                f"An I/O exception occurred while parsing the named file: "
                f"'{self.path.resolve()}'.",
            ) from exc

        length = len(data)
        if length == 0 and self.buffer_size > 0:
            length = END_OF_STREAM
        logger.info("Read %d of %d byte(s) from %s", len(data), self.buffer_size, self.path)
        return length, data.decode(self.encoding, errors="replace")

    def sum(
        self,
        initial_sum: float = DEFAULT_INITIAL_SUM,
        currency_format: CurrencyFormat | None = None,
    ) -> ChargeLineResults[int, ChargeCardSummation]:
        """Sum the currency values contained in the file.

        Raises:
            ChargeFileNotFoundError: If the file does not exist.
            ChargeFileError: If the file cannot be read.
        """
        length, text = self.read()
        summation = ChargeCardSummation(initial_sum, currency_format)
        summation.parse(text)
        return ChargeLineResults(length, summation)


def sum_file(
    path: str | Path,
    config: SummationConfig | None = None,
) -> ChargeLineResults[int, ChargeCardSummation]:
    """Read *path* and sum its charge values using *config*.

    Convenience wrapper around ``ChargeLineReader`` for callers that
    keep their settings in a ``SummationConfig``.
    """
    if config is None:
        config = SummationConfig()
    reader = ChargeLineReader.from_config(path, config)
    return reader.sum(initial_sum=config.initial_sum, currency_format=config.currency)
