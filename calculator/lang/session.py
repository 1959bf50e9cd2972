"""Session control for the calculator language. A Session is one evaluation request: it owns its own character stream,
token stream and scope chain, and nothing is shared or cached between sessions.
"""

from dataclasses import dataclass

from calculator.lang.error import CalculatorError, ErrorKind
from calculator.lang.parser import parse


@dataclass(frozen=True)
class Outcome:
    """Result of a request: exactly one of value and error is set."""
    value: int = None
    error: CalculatorError = None

    @property
    def ok(self):
        return self.error is None


def evaluate(expression):
    """Evaluates an Expression tree. Raises a CalculatorError on arithmetic failure or if the tree is too deep."""
    try:
        return expression.evaluate()
    except RecursionError:
        raise CalculatorError(ErrorKind.RESOURCE, "maximum recursion depth exceeded while evaluating")


class Session:
    """Governs a single parse-then-evaluate request."""

    def __init__(self, text):
        self.text = text
        self.tree = None
        self.result = None

    def parse(self):
        """Parses self.text into self.tree. Lexical and parse errors propagate to the caller."""
        self.tree = parse(self.text)
        return self.tree

    def run(self):
        """Parses (if not already parsed) and evaluates, returning the int result."""
        if self.tree is None:
            self.parse()

        try:
            self.result = evaluate(self.tree)
        except CalculatorError as error:
            if not error.expr:
                error.expr, error.end = self.text, len(self.text)
            raise
        return self.result


def calculate(text):
    """Runs text through a fresh Session and returns an Outcome instead of raising."""
    try:
        return Outcome(value=Session(text).run())
    except CalculatorError as error:
        return Outcome(error=error)
