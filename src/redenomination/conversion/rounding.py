"""Rounding of converted amounts to a fixed number of decimals."""
from __future__ import annotations

import math

ROUNDING_MODES = ("round", "floor", "ceil", "none")


def round_amount(amount: float, mode: str, decimals: int) -> float:
    """Round *amount* to *decimals* places using *mode*.

    ``round`` is half-up towards positive infinity (-2.5 -> -2), ``floor`` and
    ``ceil`` go towards negative and positive infinity respectively, ``none``
    returns the amount unchanged.
    """
    if mode == "none":
        return amount
    if mode not in ROUNDING_MODES:
        raise ValueError(f"Unknown rounding mode: {mode}")
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative, got {decimals}")
    if not math.isfinite(amount):
        return amount

    multiplier = 10 ** decimals
    scaled = amount * multiplier
    if mode == "round":
        return math.floor(scaled + 0.5) / multiplier
    if mode == "floor":
        return math.floor(scaled) / multiplier
    return math.ceil(scaled) / multiplier
