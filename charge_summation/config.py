"""
Configuration models and YAML I/O for charge-summation.

This module defines the Pydantic models that map 1:1 to a summation
config YAML file, plus helpers for loading and saving it.

Key models:
- CurrencyFormat: The explicit amount grammar (symbol, separators,
  grouping size). Used in place of a platform locale formatter so that
  parsing behaves the same on every machine.
- SummationConfig: Top-level config (currency format + initial sum +
  reader settings).

Key functions:
- load_config(path) -> SummationConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- CurrencyFormat.for_locale(locale, currency): Build a format from CLDR
  data via Babel.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from babel import Locale, UnknownLocaleError
from babel.numbers import get_currency_symbol, get_decimal_symbol, get_group_symbol
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from charge_summation.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class CurrencyFormat(BaseModel):
    """Currency amount grammar for one locale.

    An amount is ``[sign] symbol [sign] number`` where ``number`` is
    either plain digits or digits grouped by ``grouping_separator`` every
    ``grouping_size`` digits, optionally followed by ``decimal_separator``
    and fraction digits.

    Instances are immutable; an engine captures its format once at
    construction.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field("$", description="Currency marker preceding every amount")
    grouping_separator: str = Field(",", description="Thousands separator")
    decimal_separator: str = Field(".", description="Decimal point")
    grouping_size: int = Field(3, ge=1, description="Digits per group")
    allow_trailing_text: bool = Field(
        True,
        description=(
            "If True, text after a complete amount is ignored "
            "(e.g. '$12.34, ' parses as 12.34)"
        ),
    )

    @field_validator("symbol")
    @classmethod
    def _check_symbol(cls, value: str) -> str:
        if not value:
            raise ValueError("Currency symbol must not be empty.")
        if any(ch.isdigit() for ch in value):
            raise ValueError(f"Currency symbol {value!r} must not contain digits.")
        return value

    @field_validator("grouping_separator", "decimal_separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        if len(value) != 1 or value.isdigit():
            raise ValueError(
                f"Separator {value!r} must be a single non-digit character."
            )
        return value

    @model_validator(mode="after")
    def _check_no_collisions(self) -> CurrencyFormat:
        """Separators must be distinguishable from each other and the symbol."""
        if self.grouping_separator == self.decimal_separator:
            raise ValueError(
                f"Grouping and decimal separators are both {self.decimal_separator!r}."
            )
        for name in ("grouping_separator", "decimal_separator"):
            sep = getattr(self, name)
            if sep in self.symbol:
                raise ValueError(f"{name} {sep!r} occurs in symbol {self.symbol!r}.")
        return self

    @classmethod
    def for_locale(
        cls,
        locale: str,
        currency: str = "USD",
        **overrides: object,
    ) -> CurrencyFormat:
        """Build a format from the CLDR data for *locale*.

        Args:
            locale: Locale identifier, e.g. ``"en_US"`` or ``"de_DE"``.
            currency: ISO 4217 code whose symbol should be used.
            **overrides: Field values that replace the CLDR-derived ones.

        Raises:
            ConfigValidationError: If the locale is unknown, or the CLDR
                separators collide (e.g. a no-break space grouping symbol
                that is also part of the currency symbol).
        """
        try:
            parsed = Locale.parse(locale)
        except (UnknownLocaleError, ValueError) as exc:
            raise ConfigValidationError(f"Unknown locale: {locale!r}") from exc

        fields: dict[str, object] = {
            "symbol": get_currency_symbol(currency, locale=parsed),
            "grouping_separator": get_group_symbol(parsed),
            "decimal_separator": get_decimal_symbol(parsed),
        }
        fields.update(overrides)
        logger.debug("Currency format for %s/%s: %s", locale, currency, fields)
        try:
            return cls.model_validate(fields)
        except ValueError as exc:
            raise ConfigValidationError(
                f"CLDR data for {locale!r} does not form a usable currency format: {exc}"
            ) from exc


class SummationConfig(BaseModel):
    """Top-level configuration for a summation run.

    Maps 1:1 to the YAML config file.
    """

    currency: CurrencyFormat = Field(default_factory=CurrencyFormat)
    initial_sum: float = Field(0.0, description="Starting value of the running sum")
    buffer_size: int | None = Field(
        None,
        ge=0,
        description="Maximum bytes read from the charge file; None reads the whole file",
    )
    encoding: str = Field("utf-8", description="Text encoding of the charge file")


def load_config(path: str | Path) -> SummationConfig:
    """Load and validate a YAML config file into a SummationConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return SummationConfig.model_validate(raw)


def save_config(config: SummationConfig, path: str | Path) -> None:
    """Serialize a SummationConfig to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# charge-summation configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)
