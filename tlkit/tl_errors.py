# tlkit/tl_errors.py
from __future__ import annotations
import numpy as np


class InvalidParameterError(ValueError):
    """Raised when an input is outside the physically meaningful domain."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"invalid parameter '{name}': {reason}")


def require_positive(name: str, value: float) -> float:
    if not np.isfinite(value) or value <= 0:
        raise InvalidParameterError(name, f"must be positive and finite, got {value!r}")
    return value


def require_non_negative(name: str, value: float) -> float:
    if np.isnan(value) or value < 0:
        raise InvalidParameterError(name, f"must be >= 0, got {value!r}")
    return value


def require_count(name: str, value: int, minimum: int) -> int:
    if not np.isfinite(value) or int(value) != value or value < minimum:
        raise InvalidParameterError(name, f"must be an integer >= {minimum}, got {value!r}")
    return int(value)
