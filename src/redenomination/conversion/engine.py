"""Core redenomination engine."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..config import Settings
from ..errors import InvalidConversionFactor
from ..formatting.formatters import format_currency_general, format_number, get_currency_symbol, rule_format_options
from ..models.plugin import Plugin
from ..models.rule import ConversionResult, ConvertOptions, CurrencyFormatOptions, Direction, Rule
from ..utils.logging import get_logger
from .plugins import apply_plugins, first_plugin_format
from .rounding import round_amount

logger = get_logger(__name__)


def _coerce_rule(rule: Rule | Mapping[str, Any]) -> Rule:
    if isinstance(rule, Rule):
        return rule
    return Rule.model_validate(dict(rule))


def _check_factor(rule: Rule) -> Rule:
    if not rule.factor > 0:
        raise InvalidConversionFactor(rule.factor)
    return rule


def coerce_options(
    options: ConvertOptions | None,
    overrides: Mapping[str, Any],
    model: type[ConvertOptions] = ConvertOptions,
) -> Any:
    """Build a *model* instance from an options object and/or keyword arguments."""
    if options is None:
        return model.model_validate(dict(overrides))
    if not overrides and isinstance(options, model):
        return options
    return model.model_validate({**options.model_dump(exclude={"plugins"}), "plugins": options.plugins, **overrides})


class RedenominationEngine:
    """Converts amounts between the old and new denomination of one rule.

    The engine owns its rule and an ordered list of default plugins. Default
    plugins run before per-call plugins, in registration order, for every
    hook. Conversions never change engine state.
    """

    def __init__(
        self,
        rule: Rule | Mapping[str, Any],
        default_plugins: Sequence[Plugin] | None = None,
        settings: Settings | None = None,
    ):
        if settings is None:
            settings = Settings()
        self._settings = settings
        self._rule = _check_factor(_coerce_rule(rule))
        self._default_plugins: list[Plugin] = list(default_plugins or [])

    # ── Conversion ─────────────────────────────────────────────────────────

    def convert_forward(self, amount: float, options: ConvertOptions | None = None, **kwargs: Any) -> ConversionResult:
        """Convert an old-denomination amount to the new denomination."""
        return self.convert(amount, "forward", options, **kwargs)

    def convert_reverse(self, amount: float, options: ConvertOptions | None = None, **kwargs: Any) -> ConversionResult:
        """Convert a new-denomination amount back to the old denomination."""
        return self.convert(amount, "reverse", options, **kwargs)

    def convert(
        self,
        amount: float,
        direction: Direction,
        options: ConvertOptions | None = None,
        **kwargs: Any,
    ) -> ConversionResult:
        """Convert *amount* in *direction*.

        Steps: ``before_convert`` hooks on the raw input, divide (forward) or
        multiply (reverse) by the factor, round, then ``after_convert`` hooks
        seeded with the rounded value. ``after_convert`` hooks also receive
        the raw input as the original amount.

        Options (object or keyword arguments):
            rounding: "round" (default), "floor", "ceil" or "none"
            decimals: places to round to, defaults to the rule's decimals
            plugins: extra plugins for this call, run after the defaults
            format: attach a formatted string to the result
        """
        if direction not in ("forward", "reverse"):
            raise ValueError(f"Unknown conversion direction: {direction}")
        opts = coerce_options(options, kwargs)

        rule = self._rule
        rounding = opts.rounding or self._settings.default_rounding
        decimals = opts.decimals if opts.decimals is not None else self._rule_decimals()
        plugins = [*self._default_plugins, *opts.plugins]

        result = apply_plugins(amount, amount, direction, rule, plugins, "before_convert")
        if direction == "forward":
            result = result / rule.factor
        else:
            result = result * rule.factor
        result = round_amount(result, rounding, decimals)
        result = apply_plugins(result, amount, direction, rule, plugins, "after_convert")

        formatted = self.format(result, opts.plugins) if opts.format else None
        return ConversionResult(amount=result, original=amount, direction=direction, formatted=formatted)

    # ── Formatting ─────────────────────────────────────────────────────────

    def format(
        self,
        amount: float,
        plugins: Sequence[Plugin] | None = None,
        use_general_format: bool = False,
        override_options: CurrencyFormatOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Format a new-denomination amount for display.

        The first plugin ``format`` hook returning a non-empty string wins.
        Otherwise the general formatter is used when requested and the rule
        has a formatting block, else the locale formatter with the rule's
        symbol, decimals and decimal-suppression flags (overrides first).
        """
        rule = self._rule
        formatted = first_plugin_format(amount, rule, [*self._default_plugins, *(plugins or [])])
        if formatted:
            return formatted

        overrides = _coerce_overrides(override_options)

        if use_general_format and rule.formatting is not None:
            options = rule_format_options(rule, **overrides.model_dump(exclude_none=True))
            if options.locale is None:
                options = options.model_copy(update={"locale": self._settings.default_locale})
            return format_currency_general(amount, options)

        formatting = rule.formatting
        symbol = overrides.symbol if overrides.symbol is not None else get_currency_symbol(rule, True)
        decimals = overrides.decimals if overrides.decimals is not None else self._rule_decimals()
        hide_decimals = _first_set(overrides.hide_decimals, formatting.hide_decimals if formatting else None)
        omit_decimals = _first_set(overrides.omit_decimals, formatting.omit_decimals if formatting else None)
        locale = overrides.locale or (formatting.locale if formatting else None) or self._settings.default_locale

        if omit_decimals:
            decimals = 0
        elif hide_decimals and float(amount).is_integer():
            decimals = 0

        number = format_number(amount, decimals, locale)
        return f"{symbol} {number}" if symbol else number

    # ── Rule and plugin management ─────────────────────────────────────────

    def get_rule(self) -> Rule:
        """Return a copy of the current rule."""
        return self._rule.model_copy()

    def update_rule(self, rule: Rule | Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Merge *rule* fields (and keyword fields) into the current rule.

        Raises ``InvalidConversionFactor`` if the merged factor is not
        positive; the current rule is left untouched in that case.
        """
        if isinstance(rule, Rule):
            partial = rule.model_dump(exclude_unset=True)
        else:
            partial = dict(rule or {})
        partial.update(fields)

        merged = Rule.model_validate({**self._rule.model_dump(), **partial})
        self._rule = _check_factor(merged)
        logger.debug("rule_updated", name=merged.name, factor=merged.factor, fields=sorted(partial))

    def add_plugin(self, plugin: Plugin) -> None:
        """Append *plugin* to the default plugins."""
        self._default_plugins.append(plugin)
        logger.debug("plugin_added", plugin=plugin.name, count=len(self._default_plugins))

    def remove_plugin(self, plugin: Plugin) -> None:
        """Remove *plugin* (by identity) from the default plugins, if present."""
        for index, registered in enumerate(self._default_plugins):
            if registered is plugin:
                del self._default_plugins[index]
                logger.debug("plugin_removed", plugin=plugin.name, count=len(self._default_plugins))
                return

    @property
    def plugins(self) -> list[Plugin]:
        """Snapshot of the default plugins in invocation order."""
        return list(self._default_plugins)

    def _rule_decimals(self) -> int:
        if self._rule.decimals is not None:
            return self._rule.decimals
        return self._settings.default_decimals


def _coerce_overrides(options: CurrencyFormatOptions | Mapping[str, Any] | None) -> CurrencyFormatOptions:
    if options is None:
        return CurrencyFormatOptions()
    if isinstance(options, CurrencyFormatOptions):
        return options
    return CurrencyFormatOptions.model_validate(dict(options))


def _first_set(*values: bool | None) -> bool:
    for value in values:
        if value is not None:
            return value
    return False
