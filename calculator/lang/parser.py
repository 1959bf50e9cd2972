"""Recursive-descent parser for the calculator language. Builds an Expression tree from a TokenStream while threading
the variable Scope through every call.

Formally, the grammar can be defined as

```
<expression> ::= <operator> "(" <operand> "," <operand> ")"     ; operator is add, sub, mult or div
               | "let" "(" <name> "," <value> "," <expression> ")"
<operand>    ::= <integer>
               | <expression>
               | <name>                                         ; must be bound by an enclosing let
<value>      ::= <integer>
               | <expression>                                   ; parsed without <name> in scope
```

A let may not bind a name that is already visible at its declaration point. The whole input must be exactly one
<expression>; anything after it is an error.
"""

from calculator.lang.error import CalculatorError, ErrorKind, parse_error
from calculator.lang.expression import BinaryOp, IntegerLiteral, Let, VariableRef
from calculator.lang.lexical import LET, OPERATORS, TokenKind, TokenStream
from calculator.lang.scope import Scope

EXPECTED_EXPRESSION = "expected add, sub, mult, div, let"


class Parser:
    """Parses one expression string. A Parser is single-use: call run once."""

    def __init__(self, text):
        self.text = text
        self.tokens = TokenStream(text)

    def run(self):
        """Parses the whole input and returns the root Expression."""
        if self.tokens.peek_type() is not TokenKind.KEYWORD:
            self._error(EXPECTED_EXPRESSION, self.tokens.peek_token())

        expression = self.expression(Scope.empty())
        self.expect(TokenKind.EOF)
        return expression

    def expression(self, scope):
        token = self.tokens.peek_token()
        if token.kind is not TokenKind.KEYWORD:
            self._error(EXPECTED_EXPRESSION, token)

        if token.value in OPERATORS:
            return self.binary_op(scope)
        elif token.value == LET:
            return self.let_expression(scope)

        self._error(f"operation '{token.value}' not supported, {EXPECTED_EXPRESSION}", token)

    def binary_op(self, scope):
        keyword = self.expect(TokenKind.KEYWORD)
        self.expect(TokenKind.LEFT_PAREN)
        left = self.operand(scope)
        self.expect(TokenKind.COMMA)
        right = self.operand(scope)
        close = self.expect(TokenKind.RIGHT_PAREN)

        return BinaryOp(OPERATORS[keyword.value], left, right, self.text, keyword.start, close.end)

    def operand(self, scope):
        token = self.tokens.peek_token()

        if token.kind is TokenKind.INTEGER:
            self.tokens.advance()
            return IntegerLiteral(token.value, token.start, token.end)

        if token.kind is TokenKind.KEYWORD:
            if token.is_reserved:
                return self.expression(scope)
            elif token.value in scope:
                self.tokens.advance()
                return VariableRef(token.value, scope[token.value], token.start, token.end)

        self._error("error parsing operand", token)

    def let_expression(self, scope):
        keyword = self.expect(TokenKind.KEYWORD)
        self.expect(TokenKind.LEFT_PAREN)

        variable = self.expect(TokenKind.KEYWORD)
        if variable.is_reserved:
            self._error(f"'{variable.value}' is reserved and cannot be used as a variable name", variable)
        if variable.value in scope:
            self._error(f"'{variable.value}' is already declared in this scope", variable)
        self.expect(TokenKind.COMMA)

        # the value is parsed against the incoming scope: the new name is not visible yet
        token = self.tokens.peek_token()
        if token.kind is TokenKind.INTEGER:
            self.tokens.advance()
            bound = IntegerLiteral(token.value, token.start, token.end)
        elif token.kind is TokenKind.KEYWORD:
            bound = self.expression(scope)
        else:
            self._error("error parsing let expression", token)

        self.expect(TokenKind.COMMA)
        body = self.expression(scope.bind(variable.value, bound))
        close = self.expect(TokenKind.RIGHT_PAREN)

        return Let(variable.value, bound, body, keyword.start, close.end)

    def expect(self, kind):
        """Consumes the next token, raising a parse error if it is not of type kind."""
        token = self.tokens.advance()
        if token.kind is not kind:
            self._error(f"expected {kind.value}, but instead was {token.kind.value}", token)
        return token

    def _error(self, msg, token):
        raise parse_error(msg, self.text, token.start, max(token.end, token.start + 1))


def parse(text):
    """Parses text into an Expression. Raises a CalculatorError of kind LEXICAL or PARSE on malformed input, and of
    kind RESOURCE if the input is nested too deeply to parse.
    """
    try:
        return Parser(text).run()
    except RecursionError:
        raise CalculatorError(ErrorKind.RESOURCE, "maximum recursion depth exceeded while parsing", text)
