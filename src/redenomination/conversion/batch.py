"""Batch conversion over sequences, key paths and nested JSON-like data.

Deep mode converts every numeric leaf it meets, including values that are not
money (quantities, counts). Use ``paths`` when only some fields are amounts.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from ..models.rule import BatchConvertOptions, ConversionResult, Direction
from .engine import RedenominationEngine, coerce_options


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _converter(
    engine: RedenominationEngine,
    direction: Direction,
    options: BatchConvertOptions,
) -> Callable[[float], float]:
    if direction not in ("forward", "reverse"):
        raise ValueError(f"Unknown conversion direction: {direction}")
    convert: Callable[..., ConversionResult] = (
        engine.convert_forward if direction == "forward" else engine.convert_reverse
    )
    return lambda amount: convert(amount, options).amount


def batch_convert_array(
    engine: RedenominationEngine,
    amounts: Sequence[float],
    direction: Direction = "forward",
    options: BatchConvertOptions | None = None,
    **kwargs: Any,
) -> list[float]:
    """Convert each amount, preserving order and length."""
    convert = _converter(engine, direction, coerce_options(options, kwargs, BatchConvertOptions))
    return [convert(amount) for amount in amounts]


def batch_convert_object(
    engine: RedenominationEngine,
    data: Mapping[str, Any],
    direction: Direction = "forward",
    options: BatchConvertOptions | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """Convert the numeric values of *data*.

    - ``paths``: convert the numbers found at these dot-delimited paths
      ("item.price", "items.0.price"); other values are left as they are
    - ``deep``: convert every numeric leaf of nested mappings and lists
    - neither: return a shallow copy unchanged

    The input is never modified; containers along converted paths are copied.
    """
    opts = coerce_options(options, kwargs, BatchConvertOptions)
    convert = _converter(engine, direction, opts)

    if opts.paths:
        result = dict(data)
        for path in opts.paths:
            keys = path.split(".")
            value = _get_path(result, keys)
            if _is_number(value):
                result = _set_path(result, keys, convert(value))
        return result
    if opts.deep:
        return _deep_convert(data, convert)
    return dict(data)


def batch_convert_objects(
    engine: RedenominationEngine,
    objects: Sequence[Mapping[str, Any]],
    direction: Direction = "forward",
    options: BatchConvertOptions | None = None,
    **kwargs: Any,
) -> list[dict[str, Any]]:
    """Apply ``batch_convert_object`` to each element, preserving order."""
    opts = coerce_options(options, kwargs, BatchConvertOptions)
    return [batch_convert_object(engine, obj, direction, opts) for obj in objects]


def _deep_convert(value: Any, convert: Callable[[float], float]) -> Any:
    if value is None:
        return value
    if _is_number(value):
        return convert(value)
    if isinstance(value, Mapping):
        return {key: _deep_convert(item, convert) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_deep_convert(item, convert) for item in value)
    return value


def _child(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key)
    if isinstance(container, list) and key.lstrip("-").isdigit():
        index = int(key)
        return container[index] if -len(container) <= index < len(container) else None
    return None


def _get_path(data: Any, keys: list[str]) -> Any:
    value = data
    for key in keys:
        if value is None:
            return None
        value = _child(value, key)
    return value


def _set_path(container: Any, keys: list[str], value: Any) -> Any:
    """Return a copy of *container* with *value* stored at *keys*."""
    key, rest = keys[0], keys[1:]
    if isinstance(container, list):
        updated = list(container)
        index = int(key)
        updated[index] = _set_path(updated[index], rest, value) if rest else value
        return updated
    updated = dict(container)
    updated[key] = _set_path(updated[key], rest, value) if rest else value
    return updated
