"""Parameter domain checks shared by all samplers."""

import math


class InvalidParameterError(ValueError):
    """A distribution parameter is outside its domain."""

    def __init__(self, name: str, value: object, requirement: str):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be {requirement}, got {value!r}")


def require_finite(name: str, value: float) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidParameterError(name, value, "a finite number")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(name, value, "a finite number") from None
    if not math.isfinite(value):
        raise InvalidParameterError(name, value, "a finite number")
    return value


def require_positive(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value <= 0:
        raise InvalidParameterError(name, value, "> 0")
    return value


def require_non_negative(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0:
        raise InvalidParameterError(name, value, ">= 0")
    return value


def require_probability(name: str, value: float) -> float:
    value = require_finite(name, value)
    if value < 0 or value > 1:
        raise InvalidParameterError(name, value, "in [0, 1]")
    return value


def require_int_at_least(name: str, value: int, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidParameterError(name, value, f"an integer >= {minimum}")
    return value
