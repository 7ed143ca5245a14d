"""Runtime value domain of plox. Values are plain Python objects:

    Boolean -> bool, Double -> float, String -> str, Nil -> None, Callable -> LoxCallable

Numbers are always floats, even when written without a fractional part.
"""

import math


def is_truthy(value):
    """nil and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Structural equality across the whole value domain. Values of different variants are never equal, so unlike in
    Python, true != 1. Floats follow IEEE-754 (NaN != NaN).
    """
    if type(left) is not type(right):
        return False
    return left == right


def stringify(value):
    """Textual rendering used by 'print'."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return ("-" if math.copysign(1.0, value) < 0 and value == 0 else "") + str(int(value))
        return repr(value)
    return str(value)


def type_name(value):
    """Name of value's variant, for diagnostics."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    return "function"
