"""
Builtin functions, binary operators and value formatting.

All values are doubles. Domain problems follow IEEE 754: they produce NaN or
an infinity instead of raising, so they show up in PRINT output.
"""

import math
from decimal import Decimal
from typing import Callable, Dict

from .errors import UnknownFunction

TRUE = 1.0
FALSE = 0.0

NAN = float('nan')
INF = float('inf')


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value) and value % 2 == 1


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return NAN
        return math.copysign(INF, left) * math.copysign(1.0, right)
    return left / right


def _power(left: float, right: float) -> float:
    try:
        return math.pow(left, right)
    except OverflowError:
        if left < 0 and _is_odd_integer(right):
            return -INF
        return INF
    except ValueError:
        if left == 0:
            # Zero to a negative power
            if _is_odd_integer(right):
                return math.copysign(INF, left)
            return INF
        return NAN


OPERATORS: Dict[str, Callable[[float, float], float]] = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _divide,
    '^': _power,
    '=': lambda a, b: TRUE if a == b else FALSE,
    '<': lambda a, b: TRUE if a < b else FALSE,
    '<=': lambda a, b: TRUE if a <= b else FALSE,
    '>': lambda a, b: TRUE if a > b else FALSE,
    '>=': lambda a, b: TRUE if a >= b else FALSE,
}


def apply_operator(op: str, left: float, right: float) -> float:
    """Apply a binary operator. Comparisons give 1.0 or 0.0."""
    return OPERATORS[op](left, right)


def _sqrt(value: float) -> float:
    if value < 0:
        return NAN
    return math.sqrt(value)


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return INF


def _trig(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapper(value: float) -> float:
        if not math.isfinite(value):
            return NAN
        return func(value)
    return wrapper


def _round(value: float) -> float:
    """Round half up: ROUND(2.5) is 3, ROUND(-2.5) is -2."""
    if not math.isfinite(value):
        return value
    floor = float(math.floor(value))
    return floor + 1.0 if value - floor >= 0.5 else floor


def _sgn(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return value  # 0.0, -0.0 or NaN


def _ceil(value: float) -> float:
    if not math.isfinite(value):
        return value
    result = float(math.ceil(value))
    if result == 0:
        # CEIL(-0.5) is -0.0
        return math.copysign(0.0, value)
    return result


FUNCTIONS: Dict[str, Callable[[float], float]] = {
    'ABS': abs,
    'SQR': _sqrt,
    'EXP': _exp,
    'SIN': _trig(math.sin),
    'COS': _trig(math.cos),
    'ROUND': _round,
    'SGN': _sgn,
    'CEIL': _ceil,
}


def lookup_function(name: str) -> Callable[[float], float]:
    """Find a builtin by (case-insensitive) name."""
    func = FUNCTIONS.get(name.upper())
    if func is None:
        raise UnknownFunction(name)
    return func


def format_value(value: float) -> str:
    """Canonical text for a value, as written by PRINT.

    Magnitudes in [1e-3, 1e7) print as plain decimals that always keep a
    fractional part (``2.0``); anything else uses ``d.dddE<n>`` notation.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '-0.0' if math.copysign(1.0, value) < 0 else '0.0'

    if 1e-3 <= abs(value) < 1e7:
        return repr(value)

    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    sci_exponent = len(digits) + exponent - 1
    mantissa = str(digits[0]) + '.' + (''.join(map(str, digits[1:])) or '0')
    return f"{'-' if sign else ''}{mantissa}E{sci_exponent}"
