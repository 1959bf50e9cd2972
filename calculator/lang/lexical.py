"""Lexical analysis for the calculator language. Turns an expression string into a stream of Tokens.

Terminals can be loosely defined as follows:

```
<integer>  ::= "-"? <digit>+          ; must fit in a 32-bit signed integer after negation
<keyword>  ::= <lower> (<lower> | <digit>)*
                                      ; an operator name (add, sub, mult, div, let) or a variable name: the
                                      ; scanner does not decide which, the parser does
<punct>    ::= "(" | ")" | ","
```

Spaces separate terminals and are otherwise ignored. No other whitespace is recognized.
"""

from dataclasses import dataclass, field
import enum

from calculator.lang import numerical
from calculator.lang.error import lexical_error
from calculator.lang.numerical import Operator
from calculator.lang.stream import CharacterStream

WHITE_SPACE = " "
LET = "let"
MAX_DIGITS = len(str(-numerical.INT_MIN))

# keyword text -> Operator; "let" is reserved but is not a binary operator
OPERATORS = {operator.keyword: operator for operator in Operator}
RESERVED = frozenset(OPERATORS) | {LET}


class TokenKind(enum.Enum):
    INTEGER = "integer"
    KEYWORD = "keyword"
    LEFT_PAREN = "'('"
    RIGHT_PAREN = "')'"
    COMMA = "','"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """A recognized terminal. value is the int for INTEGER tokens and the raw text for KEYWORD tokens."""
    kind: TokenKind
    value: object = None
    start: int = field(default=0, compare=False)
    end: int = field(default=0, compare=False)

    @property
    def is_reserved(self):
        return self.kind is TokenKind.KEYWORD and self.value in RESERVED

    def __str__(self):
        if self.kind in (TokenKind.INTEGER, TokenKind.KEYWORD):
            return str(self.value)
        return self.kind.value


PUNCTUATION = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    ",": TokenKind.COMMA,
}


def is_digit(char):
    return "0" <= char <= "9"


def is_identifier_char(char):
    return "a" <= char <= "z" or is_digit(char)


def can_start_identifier(char):
    return not is_digit(char) and is_identifier_char(char)


class Scanner:
    """Produces one Token per call to scan_next. Once input is exhausted, every further call returns an EOF token."""

    def __init__(self, text):
        self.text = text
        self.chars = CharacterStream(text)

    def scan_next(self):
        self._skip_whitespace()
        start = self.chars.pos

        if self.chars.is_at_end():
            return Token(TokenKind.EOF, start=start, end=start)

        char = self.chars.peek()
        if is_digit(char):
            return self._scan_integer(start)

        if char in PUNCTUATION:
            self.chars.advance()
            return Token(PUNCTUATION[char], start=start, end=start + 1)

        if char == "-":
            self.chars.advance()
            return self._scan_integer(start, negative=True)

        if can_start_identifier(char):
            return self._scan_keyword(start)

        raise lexical_error(f"cannot match character '{char}' to a terminal", self.text, start, start + 1)

    def _skip_whitespace(self):
        while not self.chars.is_at_end() and self.chars.peek() == WHITE_SPACE:
            self.chars.advance()

    def _scan_integer(self, start, negative=False):
        # the whole digit run is consumed before checking range, so 99999999999 is an overflow, not a wrap
        digits = ""
        while is_digit(self.chars.peek()):
            digits += self.chars.advance()
        end = self.chars.pos

        if not digits:
            raise lexical_error("expected digits after '-'", self.text, start, end)

        # int() refuses very long digit strings, so anything wider than INT_MIN is rejected before converting
        significant = digits.lstrip("0") or "0"
        try:
            if len(significant) > MAX_DIGITS:
                raise OverflowError(f"{significant} has more than {MAX_DIGITS} digits")
            value = int(significant)
            value = numerical.negate(value) if negative else numerical.int32(value)
        except OverflowError:
            sequence = "-" + significant if negative else significant
            raise lexical_error(f"integer overflow for value '{sequence}'", self.text, start, end)

        return Token(TokenKind.INTEGER, value, start, end)

    def _scan_keyword(self, start):
        sequence = ""
        while is_identifier_char(self.chars.peek()):
            sequence += self.chars.advance()
        return Token(TokenKind.KEYWORD, sequence, start, self.chars.pos)

    def __iter__(self):
        """Yields tokens up to and including the first EOF token."""
        while True:
            token = self.scan_next()
            yield token
            if token.kind is TokenKind.EOF:
                return


class TokenStream:
    """One-token lookahead buffer over a Scanner, so the parser can choose a production before consuming."""

    def __init__(self, text):
        self.scanner = Scanner(text)
        self._next = self.scanner.scan_next()  # prime the first token

    @property
    def text(self):
        return self.scanner.text

    def peek_type(self):
        return self._next.kind

    def peek_token(self):
        return self._next

    def advance(self):
        """Returns the buffered token and refills the buffer from the scanner."""
        token = self._next
        self._next = self.scanner.scan_next()
        return token
