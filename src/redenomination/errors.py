"""Error kinds raised by the redenomination engine."""
from __future__ import annotations


class RedenominationError(ValueError):
    """Base class for all redenomination errors."""


class InvalidConversionFactor(RedenominationError):
    """Raised when a rule's conversion factor is not strictly positive."""

    def __init__(self, factor: float | None = None):
        self.factor = factor
        super().__init__("Conversion factor must be greater than 0")


class InvalidCurrencyValue(RedenominationError):
    """Raised when no numeric value can be extracted from a currency string."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid currency value: {value}")


class ValidationFailure(RedenominationError):
    """Raised by the validation plugin when an amount is out of range."""

    def __init__(self, amount: float, minimum: float | None = None, maximum: float | None = None):
        self.amount = amount
        self.minimum = minimum
        self.maximum = maximum
        if minimum is not None and amount < minimum:
            message = f"Amount {_num(amount)} is below minimum {_num(minimum)}"
        else:
            message = f"Amount {_num(amount)} is above maximum {_num(maximum)}"
        super().__init__(message)


def _num(value: float | None) -> str:
    # 2000000.0 -> "2000000" so messages read the same for ints and floats
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
