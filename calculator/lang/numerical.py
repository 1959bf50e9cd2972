"""32-bit signed integer arithmetic for the calculator language. Python ints are unbounded, so every operation here
computes the exact result and then checks it against the int32 range: a result that does not fit is an error, never a
silent wraparound.

Source: https://docs.oracle.com/javase/8/docs/api/java/lang/Math.html#addExact-int-int-
"""

import enum

from calculator.lang.error import arithmetic_error

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

DIVIDE_ZERO_MESSAGE = "division by zero"
OPERATION_ERROR_MESSAGE = "integer overflow while performing ({}) with values ({}, {})"


class Operator(enum.Enum):
    """Binary operators, keyed by their keyword in the language. Operator("add") is Operator.ADD."""
    ADD = "add"
    SUB = "sub"
    MULT = "mult"
    DIV = "div"

    @property
    def keyword(self):
        return self.value

    def apply(self, left, right):
        """Checked application of this operator to two int32 values."""
        return _OPERATIONS[self](left, right)


def in_range(value):
    return INT_MIN <= value <= INT_MAX


def int32(value):
    """Returns value if it fits in 32 bits, otherwise raises OverflowError."""
    if not in_range(value):
        raise OverflowError(f"{value} does not fit in a 32-bit signed integer")
    return value


def negate(value):
    """Checked unary minus. Only INT_MIN has no positive counterpart, and only a negative literal can reach here."""
    return int32(-value)


def _checked(operator, result, left, right):
    if not in_range(result):
        raise arithmetic_error(OPERATION_ERROR_MESSAGE.format(operator.keyword, left, right))
    return result


def add(left, right):
    return _checked(Operator.ADD, left + right, left, right)


def sub(left, right):
    return _checked(Operator.SUB, left - right, left, right)


def mult(left, right):
    return _checked(Operator.MULT, left * right, left, right)


def div(left, right):
    """Truncating division (toward zero, as in C and Java). INT_MIN / -1 is the only overflowing quotient."""
    if right == 0:
        raise arithmetic_error(DIVIDE_ZERO_MESSAGE)

    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return _checked(Operator.DIV, quotient, left, right)


_OPERATIONS = {
    Operator.ADD: add,
    Operator.SUB: sub,
    Operator.MULT: mult,
    Operator.DIV: div,
}
