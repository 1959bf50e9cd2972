"""Calculator language: integer arithmetic with add, sub, mult, div and lexically scoped let bindings.

Basic program flow:
    1. Scanner: turns the input string into tokens (lang/stream.py, lang/lexical.py)
    2. Parser: recursive descent over a one-token lookahead stream, resolving variables against the scope as it goes
       (lang/parser.py, lang/scope.py)
    3. Evaluation: walks the Expression tree with checked 32-bit arithmetic (lang/expression.py, lang/numerical.py)
"""

from calculator.lang.error import CalculatorError, ErrorKind
from calculator.lang.parser import parse
from calculator.lang.session import Outcome, Session, calculate, evaluate

__all__ = ["CalculatorError", "ErrorKind", "Outcome", "Session", "calculate", "evaluate", "parse"]
