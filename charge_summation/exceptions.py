"""
Custom exception hierarchy for charge-summation.

Callers can catch a specific failure (e.g., ChargeFileNotFoundError vs
ConfigValidationError) or everything raised by the package through
ChargeSummationError.
"""


class ChargeSummationError(Exception):
    """Base exception for all charge-summation errors."""


class FragmentParseError(ChargeSummationError, ValueError):
    """Raised when a single fragment is not a well-formed currency amount.

    ``ChargeCardSummation.parse()`` catches this for every fragment and
    records the fragment position instead, so it only reaches callers who
    use ``parse_amount()`` directly.
    """

    def __init__(self, text: str, reason: str = "not a currency amount") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot parse {text!r}: {reason}")


class ConfigValidationError(ChargeSummationError):
    """Raised when a currency format or config file is unusable.

    This can happen if:
    - The YAML config file is empty.
    - Separators collide with each other or with the currency symbol.
    - A locale name is not known to the CLDR data.
    """


class ChargeFileError(ChargeSummationError):
    """Raised when the charge file cannot be read."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


class ChargeFileNotFoundError(ChargeFileError):
    """Raised when the charge file does not exist."""


class ExportError(ChargeSummationError):
    """Raised when the breakdown table cannot be written to disk."""
