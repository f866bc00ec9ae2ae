"""Rule, formatting and conversion data types.

A ``Rule`` is the static description of one redenomination: the conversion
factor, currency identifiers, display precision and formatting preferences.
Rules and their formatting blocks are frozen; engines replace them wholesale
rather than mutating them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .plugin import Plugin

Direction = Literal["forward", "reverse"]
RoundingMode = Literal["round", "floor", "ceil", "none"]
SymbolPosition = Literal["before", "after"]


class FormattingOptions(BaseModel):
    """Display preferences attached to a rule.

    ``None`` means "not configured" so callers can fall back to the rule, the
    locale or the library default in that order.
    """

    model_config = ConfigDict(frozen=True)

    locale: str | None = None
    thousands_separator: str | None = None
    decimal_separator: str | None = None
    symbol_position: SymbolPosition | None = None
    symbol_spacing: bool | None = None
    format_pattern: str | None = None
    # Suppress decimals only when the amount is a whole number (e.g. "Rp 10.000")
    hide_decimals: bool | None = None
    # Always suppress decimals
    omit_decimals: bool | None = None


class CurrencyFormatOptions(FormattingOptions):
    """Formatting options plus the explicit symbol and precision to render with."""

    symbol: str | None = None
    decimals: int | None = Field(default=None, ge=0)


class Rule(BaseModel):
    """A redenomination rule: ``old / factor = new`` and ``new * factor = old``."""

    model_config = ConfigDict(frozen=True)

    name: str
    factor: float
    old_currency: str | None = None
    new_currency: str | None = None
    old_local_symbol: str | None = None
    new_local_symbol: str | None = None
    decimals: int | None = Field(default=None, ge=0)
    country_code: str | None = None
    year: int | None = None
    formatting: FormattingOptions | None = None
    use_local_symbol: bool | None = None


class ConvertOptions(BaseModel):
    """Per-call conversion options. Unset values fall back to engine defaults."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rounding: RoundingMode | None = None
    decimals: int | None = Field(default=None, ge=0)
    plugins: list[Plugin] = Field(default_factory=list)
    format: bool = False


class BatchConvertOptions(ConvertOptions):
    """Conversion options plus the object traversal mode used by batch helpers."""

    paths: list[str] = Field(default_factory=list)
    deep: bool = False


class ConversionResult(BaseModel):
    """Outcome of a single conversion."""

    model_config = ConfigDict(frozen=True)

    amount: float
    original: float
    direction: Direction
    formatted: str | None = None
