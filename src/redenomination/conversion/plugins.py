"""Plugin pipeline and built-in plugin factories.

Conversion hooks fold: each plugin receives the running amount produced by
the previous one. A hook that returns something other than a number leaves
the running amount unchanged.
"""
from __future__ import annotations

from typing import Any, Callable, Literal, Sequence

from ..errors import ValidationFailure
from ..models.plugin import Plugin
from ..models.rule import Direction, Rule
from ..utils.logging import get_logger
from .rounding import round_amount

logger = get_logger(__name__)

LOG_PREFIX = "[Currency Redenomination]"

Hook = Literal["before_convert", "after_convert"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def apply_plugins(
    amount: float,
    original_amount: float,
    direction: Direction,
    rule: Rule,
    plugins: Sequence[Plugin],
    hook: Hook,
) -> float:
    """Run one conversion hook across *plugins* in list order."""
    if hook not in ("before_convert", "after_convert"):
        raise ValueError(f"Unknown plugin hook: {hook}")

    result = amount
    for plugin in plugins:
        if hook == "before_convert" and plugin.before_convert is not None:
            hook_result = plugin.before_convert(result, direction, rule)
        elif hook == "after_convert" and plugin.after_convert is not None:
            hook_result = plugin.after_convert(result, original_amount, direction, rule)
        else:
            continue
        if _is_number(hook_result):
            result = hook_result
    return result


def first_plugin_format(amount: float, rule: Rule, plugins: Sequence[Plugin]) -> str | None:
    """Return the first non-empty string produced by a plugin ``format`` hook."""
    for plugin in plugins:
        if plugin.format is None:
            continue
        formatted = plugin.format(amount, rule)
        if formatted:
            return formatted
    return None


# ── Built-in plugins ───────────────────────────────────────────────────────


def create_rounding_plugin(decimals: int = 2) -> Plugin:
    """Round every converted amount half-up to *decimals* places."""
    return Plugin(
        name="rounding",
        after_convert=lambda amount, original, direction, rule: round_amount(amount, "round", decimals),
    )


def create_logging_plugin(sink: Callable[[str], Any] | None = None) -> Plugin:
    """Report every conversion before and after it happens.

    With no *sink* the events go to the structlog logger of this module;
    otherwise *sink* is called with a human-readable message.
    """

    def before_convert(amount: float, direction: Direction, rule: Rule) -> None:
        if sink is None:
            logger.info("converting", direction=direction, amount=amount, rule=rule.name)
        else:
            sink(f"{LOG_PREFIX} Converting {direction}: {amount} ({rule.name})")

    def after_convert(amount: float, original_amount: float, direction: Direction, rule: Rule) -> None:
        if sink is None:
            logger.info("converted", direction=direction, original=original_amount, amount=amount, rule=rule.name)
        else:
            sink(f"{LOG_PREFIX} Converted {direction}: {original_amount} → {amount} ({rule.name})")

    return Plugin(name="logging", before_convert=before_convert, after_convert=after_convert)


def create_validation_plugin(minimum: float | None = None, maximum: float | None = None) -> Plugin:
    """Reject input amounts outside ``[minimum, maximum]`` with ``ValidationFailure``."""

    def before_convert(amount: float, direction: Direction, rule: Rule) -> None:
        if minimum is not None and amount < minimum:
            raise ValidationFailure(amount, minimum=minimum)
        if maximum is not None and amount > maximum:
            raise ValidationFailure(amount, maximum=maximum)

    return Plugin(name="validation", before_convert=before_convert)


def create_transformer_plugin(transform: Callable[[float, Direction, Rule], float]) -> Plugin:
    """Apply *transform* to every converted amount."""
    return Plugin(
        name="transformer",
        after_convert=lambda amount, original, direction, rule: transform(amount, direction, rule),
    )


def create_formatting_plugin(formatter: Callable[[float, Rule], str]) -> Plugin:
    """Use *formatter* in place of the engine's default formatting."""
    return Plugin(name="formatting", format=formatter)
