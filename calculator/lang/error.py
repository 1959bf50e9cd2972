"""Error handling for the calculator language. Only CalculatorErrors should be encountered while scanning, parsing or
evaluating: if another type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every CalculatorError is fatal to the request that raised it. There is no local recovery and no partial result.
"""

import enum
import sys

from termcolor import colored


class ErrorKind(enum.Enum):
    """Closed set of failure kinds. Callers branch on this instead of on exception types."""
    LEXICAL = "lexical"
    PARSE = "parse"
    ARITHMETIC = "arithmetic"
    RESOURCE = "resource"
    INTERNAL = "internal"


class CalculatorError(Exception):
    """Message-carrying failure of a single evaluation request.

    :param kind: an ErrorKind
    :param msg: human-readable description
    :param expr: source text the error refers to (used for diagnosis)
    :param start: first column of the offending span in expr
    :param end: column after the offending span (-1 means end of expr)
    """

    def __init__(self, kind, msg, expr="", start=0, end=-1, internal=False):
        super().__init__(msg)
        self.kind = kind
        self.msg = msg
        self.expr = expr if expr is not None else ""
        self.start = start
        self.end = end if end != -1 else len(self.expr)
        self.internal = internal

    def __repr__(self):
        return f"CalculatorError({self.kind.name}, {self.msg!r})"

    def __str__(self):
        return f"{self.kind.value} error - {self.msg}"


def lexical_error(msg, expr="", start=0, end=-1):
    return CalculatorError(ErrorKind.LEXICAL, msg, expr, start, end)


def parse_error(msg, expr="", start=0, end=-1):
    return CalculatorError(ErrorKind.PARSE, msg, expr, start, end)


def arithmetic_error(msg, expr="", start=0, end=-1):
    return CalculatorError(ErrorKind.ARITHMETIC, msg, expr, start, end)


class ErrorHandler:
    """Context manager that prints CalculatorErrors as coloured diagnostics and exits with a non-zero status."""
    ERROR = "red"

    def __init__(self, fatal=True, color=True, stream=None):
        self.fatal = fatal
        self.color = color
        self.stream = stream if stream is not None else sys.stderr

    def _colored(self, text, color=None, attrs=None):
        if not self.color:
            return text
        return colored(text, color, attrs=attrs)

    def diagnose(self, error):
        """Returns offending part of error.expr highlighted and bolded, with a caret line underneath."""
        start = min(error.start, len(error.expr))
        end = max(error.end, start + 1)

        diagnosis = "  " + error.expr[:start]
        diagnosis += self._colored(error.expr[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += self._colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error, a CalculatorError, and exits if this handler is fatal."""
        error_msg = ""
        if error.internal:
            error_msg += self._colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += self._colored(f"{error.kind.value} error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.stream)

        if not error.internal and error.expr:
            print(self.diagnose(error), file=self.stream)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(CalculatorError(ErrorKind.RESOURCE, "keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(CalculatorError(ErrorKind.RESOURCE, "maximum recursion depth exceeded"))
        elif exc_type is CalculatorError:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(CalculatorError(ErrorKind.INTERNAL, f"unknown error: '{exc_type.__name__}: {exc_val}'",
                                       internal=True))
            do_exit = True

        return not do_exit
