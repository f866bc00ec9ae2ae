"""Currency formatting and parsing.

Two renderers are provided: a locale renderer that takes its separators from
the locale table (``format_currency``) and a general renderer where every
aspect can be overridden (``format_currency_general``). Both round half away
from zero on the decimal representation of the amount, so 1000.5 with no
decimals is shown as 1,001.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Callable, Mapping

from ..errors import InvalidCurrencyValue
from ..models.locale import get_number_format
from ..models.rule import CurrencyFormatOptions, Rule

DEFAULT_LOCALE = "en-US"
DEFAULT_DECIMALS = 2

# Non-finite amounts pass through rounding and are shown as-is
INFINITY_TEXT = "∞"
NAN_TEXT = "NaN"

_NON_NUMERIC = re.compile(r"[^\d.,-]")


def _group_digits(digits: str, separator: str) -> str:
    """Insert *separator* every three digits from the right."""
    head = len(digits) % 3 or 3
    groups = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
    return separator.join(groups)


def _render(value: Decimal, decimals: int, thousands_separator: str, decimal_separator: str) -> str:
    if value.is_nan():
        return NAN_TEXT
    if value.is_infinite():
        return f"-{INFINITY_TEXT}" if value.is_signed() else INFINITY_TEXT

    # Enough precision for the whole integer part plus the requested decimals
    context = Context(prec=max(28, value.adjusted() + decimals + 2))
    quantized = value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP, context=context)
    sign = "-" if quantized < 0 else ""
    integer_part, _, fraction = f"{quantized.copy_abs():f}".partition(".")
    rendered = _group_digits(integer_part, thousands_separator)
    if decimals > 0:
        rendered = f"{rendered}{decimal_separator}{fraction}"
    return sign + rendered


def _effective_decimals(amount: float, decimals: int, hide_decimals: bool, omit_decimals: bool) -> int:
    if omit_decimals:
        return 0
    if hide_decimals and float(amount).is_integer():
        return 0
    return decimals


def format_number(
    amount: float,
    decimals: int = DEFAULT_DECIMALS,
    locale: str | None = DEFAULT_LOCALE,
    thousands_separator: str | None = None,
    decimal_separator: str | None = None,
) -> str:
    """Render *amount* with exactly *decimals* places using locale separators.

    Explicit separators take precedence over the locale's.
    """
    number_format = get_number_format(locale)
    return _render(
        Decimal(str(amount)),
        decimals,
        number_format.thousands_separator if thousands_separator is None else thousands_separator,
        number_format.decimal_separator if decimal_separator is None else decimal_separator,
    )


def format_currency(
    amount: float,
    symbol: str = "",
    decimals: int = DEFAULT_DECIMALS,
    locale: str = DEFAULT_LOCALE,
    hide_decimals: bool = False,
) -> str:
    """Format *amount* for *locale*, prefixed with ``"{symbol} "`` when given."""
    formatted = format_number(amount, _effective_decimals(amount, decimals, hide_decimals, False), locale)
    return f"{symbol} {formatted}" if symbol else formatted


def format_currency_general(amount: float, options: CurrencyFormatOptions | Mapping[str, Any] | None = None) -> str:
    """Format *amount* with fully custom separators, symbol placement and pattern.

    Resolution:
    - separators: explicit option, else the locale's (en-US when unset)
    - decimals: ``omit_decimals`` forces 0, ``hide_decimals`` forces 0 for
      whole numbers, else ``decimals`` (default 2)
    - placement: ``format_pattern`` with ``{symbol}``/``{amount}`` wins over
      ``symbol_position`` (default "before") and ``symbol_spacing``
      (default True)
    """
    if options is None:
        opts = CurrencyFormatOptions()
    elif isinstance(options, CurrencyFormatOptions):
        opts = options
    else:
        opts = CurrencyFormatOptions.model_validate(dict(options))

    decimals = DEFAULT_DECIMALS if opts.decimals is None else opts.decimals
    number = format_number(
        amount,
        _effective_decimals(amount, decimals, bool(opts.hide_decimals), bool(opts.omit_decimals)),
        opts.locale,
        thousands_separator=opts.thousands_separator,
        decimal_separator=opts.decimal_separator,
    )
    symbol = opts.symbol or ""

    if opts.format_pattern:
        return opts.format_pattern.replace("{symbol}", symbol).replace("{amount}", number)
    if not symbol:
        return number

    space = " " if opts.symbol_spacing is not False else ""
    if opts.symbol_position == "after":
        return f"{number}{space}{symbol}"
    return f"{symbol}{space}{number}"


def parse_currency(value: str) -> float:
    """Extract the numeric amount from a currency string.

    Everything except digits, ``.``, ``,`` and a leading ``-`` is dropped and
    commas are treated as grouping, never as a decimal separator::

        parse_currency("IDR 1,000.50")  # 1000.5
        parse_currency("1,000.50-")     # 1000.5
    """
    cleaned = _NON_NUMERIC.sub("", value).replace(",", "")
    sign = "-" if cleaned.startswith("-") else ""
    cleaned = sign + cleaned.replace("-", "")
    try:
        return float(cleaned)
    except ValueError:
        raise InvalidCurrencyValue(value) from None


def format_with_separator(
    amount: float,
    separator: str = ",",
    decimals: int = DEFAULT_DECIMALS,
    decimal_separator: str = ".",
) -> str:
    """Fixed-point render of *amount* with manual thousands grouping."""
    # Exact binary value, as fixed-point stringification sees it
    return _render(Decimal(amount), decimals, separator, decimal_separator)


def get_currency_symbol(rule: Rule, use_new: bool = True) -> str:
    """Resolve the display symbol for one side of the rule.

    With ``use_local_symbol`` the colloquial symbol wins and the ISO code is
    the fallback; otherwise the ISO code is used.
    """
    if use_new:
        local_symbol, currency = rule.new_local_symbol, rule.new_currency
    else:
        local_symbol, currency = rule.old_local_symbol, rule.old_currency
    if rule.use_local_symbol:
        return local_symbol or currency or ""
    return currency or ""


def rule_format_options(rule: Rule, use_new: bool = True, **overrides: Any) -> CurrencyFormatOptions:
    """Merge a rule's formatting block with its symbol and decimals.

    Keyword overrides that are not ``None`` take precedence over the rule.
    """
    merged: dict[str, Any] = {
        "symbol": get_currency_symbol(rule, use_new),
        "decimals": DEFAULT_DECIMALS if rule.decimals is None else rule.decimals,
    }
    if rule.formatting is not None:
        merged.update(rule.formatting.model_dump(exclude_none=True))
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return CurrencyFormatOptions.model_validate(merged)


def create_general_formatter(rule: Rule) -> Callable[[float], str]:
    """Bind *rule* into a single-argument general formatter."""
    options = rule_format_options(rule)
    return lambda amount: format_currency_general(amount, options)


def create_formatter(rule: Rule, locale: str | None = None) -> Callable[[float], str]:
    """Bind *rule* into a single-argument formatter.

    Rules with a formatting block use the general formatter (*locale*, when
    given, replaces the rule's locale); other rules use ``format_currency``.
    """
    if rule.formatting is not None:
        options = rule_format_options(rule, locale=locale)
        return lambda amount: format_currency_general(amount, options)

    symbol = get_currency_symbol(rule)
    decimals = DEFAULT_DECIMALS if rule.decimals is None else rule.decimals
    return lambda amount: format_currency(amount, symbol, decimals, locale or DEFAULT_LOCALE)
