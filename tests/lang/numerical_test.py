import unittest

from calculator.lang import numerical
from calculator.lang.error import CalculatorError, ErrorKind
from calculator.lang.numerical import INT_MAX, INT_MIN, Operator


class Int32TestCase(unittest.TestCase):

    def test_int32(self):
        should_fail = [INT_MAX + 1, INT_MIN - 1, 2 ** 40]
        for case in should_fail:
            self.assertRaises(OverflowError, numerical.int32, case)

        should_pass = [0, 1, -1, INT_MAX, INT_MIN]
        for case in should_pass:
            self.assertEqual(case, numerical.int32(case))

    def test_negate(self):
        self.assertEqual(INT_MIN, numerical.negate(INT_MAX + 1))
        self.assertEqual(-INT_MAX, numerical.negate(INT_MAX))
        self.assertRaises(OverflowError, numerical.negate, INT_MAX + 2)


class OperatorTestCase(unittest.TestCase):

    def test_lookup(self):
        cases = {"add": Operator.ADD, "sub": Operator.SUB, "mult": Operator.MULT, "div": Operator.DIV}
        for case, expected in cases.items():
            self.assertIs(expected, Operator(case), case)
        self.assertRaises(ValueError, Operator, "let")

    def test_apply(self):
        cases = {
            (Operator.ADD, 1, 2): 3,
            (Operator.ADD, INT_MAX, INT_MIN): -1,
            (Operator.SUB, INT_MIN, -1): INT_MIN + 1,
            (Operator.SUB, 0, INT_MAX): -INT_MAX,
            (Operator.MULT, 46341, -46340): -2147441940,
            (Operator.MULT, -1, INT_MAX): -INT_MAX,
            (Operator.DIV, 7, 2): 3,
            (Operator.DIV, -7, 2): -3,
            (Operator.DIV, 7, -2): -3,
            (Operator.DIV, -7, -2): 3,
            (Operator.DIV, INT_MIN, 1): INT_MIN,
            (Operator.DIV, INT_MAX, -1): -INT_MAX,
            (Operator.DIV, 0, 5): 0,
        }
        for (operator, left, right), expected in cases.items():
            self.assertEqual(expected, operator.apply(left, right), (operator, left, right))

    def test_overflow(self):
        should_raise = [
            (Operator.ADD, INT_MAX, 1),
            (Operator.ADD, INT_MIN, -1),
            (Operator.SUB, INT_MIN, 1),
            (Operator.SUB, 0, INT_MIN),
            (Operator.MULT, 46341, 46341),
            (Operator.MULT, INT_MIN, -1),
            (Operator.DIV, INT_MIN, -1),
        ]
        for operator, left, right in should_raise:
            with self.assertRaises(CalculatorError, msg=(operator, left, right)) as context:
                operator.apply(left, right)
            self.assertIs(ErrorKind.ARITHMETIC, context.exception.kind)
            self.assertIn(f"({operator.keyword})", context.exception.msg)
            self.assertIn(f"({left}, {right})", context.exception.msg)

    def test_division_by_zero(self):
        should_raise = [0, 1, -1, INT_MIN, INT_MAX]
        for case in should_raise:
            with self.assertRaises(CalculatorError, msg=case) as context:
                numerical.div(case, 0)
            self.assertIs(ErrorKind.ARITHMETIC, context.exception.kind)
            self.assertEqual(numerical.DIVIDE_ZERO_MESSAGE, context.exception.msg)


if __name__ == '__main__':
    unittest.main()
