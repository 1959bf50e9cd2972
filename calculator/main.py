"""Command-line entry point for the calculator language. Evaluates the single expression given as argument and prints
the result. Also uses the error handling context manager. Called from the calc console script.
"""

import argparse
import sys

from calculator.lang.error import ErrorHandler
from calculator.lang.session import Session

USAGE = 'Example usage: calc "add(5, 5)"'


def build_parser():
    parser = argparse.ArgumentParser(prog="calc", description="Evaluate an arithmetic expression with let bindings.",
                                     allow_abbrev=False)
    parser.add_argument("expression", help="expression to evaluate, e.g. 'let(a, 5, add(a, a))'", nargs="*")
    parser.add_argument("--tree", help="print the parsed expression tree before the result", action="store_true")
    parser.add_argument("--no-color", help="do not colour error diagnostics", action="store_true")
    return parser


def main(argv=None):
    """Runs the calculator. Returns 0 on success; any CalculatorError is printed and exits with status 1."""
    # an expression such as "-x" looks like an option to argparse; leftovers are treated as the expression
    args, leftover = build_parser().parse_known_args(argv)
    args.expression += leftover

    if len(args.expression) != 1:
        print(USAGE)
        return 0

    with ErrorHandler(color=not args.no_color):
        sess = Session(args.expression[0])
        tree = sess.parse()
        if args.tree:
            print(tree.display())

        print(sess.run())

    return 0


if __name__ == "__main__":
    sys.exit(main())
