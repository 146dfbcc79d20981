"""
Operator semantics shared by the evaluator and the optimizer

All values are Python floats (IEEE-754 doubles). Bitwise and shift
operators work on 64-bit signed integers: operands are truncated toward
zero and wrapped into the int64 range, NaN becomes 0 and infinities
saturate. Shift counts are taken modulo 64.

Division and the short-circuit operators are not here: they need control
over operand evaluation, which only the callers have.
"""

from typing import Callable, Dict
import math

import numpy as np


INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1
_MASK = (1 << INT_BITS) - 1

UNARY_OPS = ('-', '!', '~')
ARITHMETIC_OPS = ('+', '-', '*', '/')
SHIFT_OPS = ('<<', '>>')
COMPARISON_OPS = ('>', '>=', '<', '<=', '==', '!=')
BITWISE_OPS = ('&', '^', '|')
LOGICAL_OPS = ('&&', '||')
BINARY_OPS = ARITHMETIC_OPS + SHIFT_OPS + COMPARISON_OPS + BITWISE_OPS + LOGICAL_OPS

FUNCTIONS: Dict[str, Callable] = {
    'sin': np.sin,
    'cos': np.cos,
    'exp': np.exp,
}


def truth(value: float) -> float:
    return 1.0 if value != 0.0 else 0.0


def wrap_int(value: int) -> int:
    """Wrap an integer into the signed 64-bit range"""
    value &= _MASK
    if value > INT_MAX:
        value -= 1 << INT_BITS
    return value


def to_int(value: float) -> int:
    """Truncate a double to a signed 64-bit integer"""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return INT_MAX if value > 0 else INT_MIN
    return wrap_int(int(value))


def apply_unary(op: str, value: float) -> float:
    if op == '-':
        return -value
    elif op == '!':
        return 1.0 if value == 0.0 else 0.0
    elif op == '~':
        return float(~to_int(value))
    else:
        raise ValueError(f"Unknown unary operator: {op}")


def apply_binary(op: str, left: float, right: float) -> float:
    """Apply a non-short-circuit binary operator to evaluated operands"""
    if op == '+':
        return left + right
    elif op == '-':
        return left - right
    elif op == '*':
        return left * right
    elif op == '/':
        # callers check for a zero divisor first
        return left / right
    elif op == '<<':
        return float(wrap_int(to_int(left) << (to_int(right) % INT_BITS)))
    elif op == '>>':
        return float(to_int(left) >> (to_int(right) % INT_BITS))
    elif op == '>':
        return 1.0 if left > right else 0.0
    elif op == '>=':
        return 1.0 if left >= right else 0.0
    elif op == '<':
        return 1.0 if left < right else 0.0
    elif op == '<=':
        return 1.0 if left <= right else 0.0
    elif op == '==':
        return 1.0 if left == right else 0.0
    elif op == '!=':
        return 1.0 if left != right else 0.0
    elif op == '&':
        return float(to_int(left) & to_int(right))
    elif op == '^':
        return float(to_int(left) ^ to_int(right))
    elif op == '|':
        return float(to_int(left) | to_int(right))
    elif op == '&&':
        return truth(right) if left != 0.0 else 0.0
    elif op == '||':
        return 1.0 if left != 0.0 else truth(right)
    else:
        raise ValueError(f"Unknown binary operator: {op}")


def apply_function(name: str, arg: float) -> float:
    """
    Apply a builtin function with IEEE semantics.

    Overflow yields inf and invalid arguments yield nan instead of raising,
    e.g. exp(1000) -> inf, sin(inf) -> nan.
    """
    func = FUNCTIONS[name]
    with np.errstate(all='ignore'):
        return float(func(np.float64(arg)))


__all__ = [
    'INT_BITS', 'INT_MIN', 'INT_MAX',
    'UNARY_OPS', 'BINARY_OPS', 'FUNCTIONS',
    'truth', 'wrap_int', 'to_int',
    'apply_unary', 'apply_binary', 'apply_function',
]
