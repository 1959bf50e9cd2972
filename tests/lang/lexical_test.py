import unittest

from calculator.lang.error import CalculatorError, ErrorKind
from calculator.lang.lexical import Scanner, Token, TokenKind, TokenStream
from calculator.lang.stream import EOS, CharacterStream


def kinds(text):
    return [token.kind for token in Scanner(text)]


class CharacterStreamTestCase(unittest.TestCase):

    def test_peek_advance(self):
        chars = CharacterStream("ab")
        self.assertEqual("a", chars.peek())
        self.assertEqual("a", chars.peek())
        self.assertEqual("a", chars.advance())
        self.assertEqual("b", chars.advance())
        self.assertTrue(chars.is_at_end())

    def test_end_of_input(self):
        cases = ["", "x"]
        for case in cases:
            chars = CharacterStream(case)
            for _ in case:
                chars.advance()
            self.assertTrue(chars.is_at_end(), case)
            self.assertEqual(EOS, chars.peek(), case)
            self.assertEqual(EOS, chars.advance(), case)
            self.assertEqual(EOS, chars.advance(), case)
            self.assertEqual(len(case), chars.pos, case)


class ScannerTestCase(unittest.TestCase):

    def test_integers(self):
        cases = {
            "0": 0,
            "42": 42,
            "007": 7,
            "-5": -5,
            "2147483647": 2147483647,
            "-2147483648": -2147483648,
            "0" * 5000: 0,
            "0" * 5000 + "1": 1,
            "-" + "0" * 5000 + "2147483648": -2147483648,
        }
        for case, expected in cases.items():
            self.assertEqual(Token(TokenKind.INTEGER, expected), Scanner(case).scan_next(), case)

    def test_integer_overflow(self):
        should_raise = ["2147483648", "-2147483649", "99999999999", "-99999999999999999999", "9" * 5000,
                        "-" + "9" * 5000, "0" * 5000 + "12345678901"]
        for case in should_raise:
            with self.assertRaises(CalculatorError, msg=case) as context:
                Scanner(case).scan_next()
            self.assertIs(ErrorKind.LEXICAL, context.exception.kind, case)
            self.assertIn("overflow", context.exception.msg, case)

    def test_keywords(self):
        cases = ["add", "sub", "mult", "div", "let", "a", "abc1", "x9y"]
        for case in cases:
            self.assertEqual(Token(TokenKind.KEYWORD, case), Scanner(case).scan_next(), case)

        self.assertTrue(Token(TokenKind.KEYWORD, "mult").is_reserved)
        self.assertTrue(Token(TokenKind.KEYWORD, "let").is_reserved)
        self.assertFalse(Token(TokenKind.KEYWORD, "multiply").is_reserved)

    def test_token_sequence(self):
        cases = {
            "add(1,2)": [TokenKind.KEYWORD, TokenKind.LEFT_PAREN, TokenKind.INTEGER, TokenKind.COMMA,
                         TokenKind.INTEGER, TokenKind.RIGHT_PAREN, TokenKind.EOF],
            "  let ( a , -1 )  ": [TokenKind.KEYWORD, TokenKind.LEFT_PAREN, TokenKind.KEYWORD, TokenKind.COMMA,
                                   TokenKind.INTEGER, TokenKind.RIGHT_PAREN, TokenKind.EOF],
            "": [TokenKind.EOF],
            "   ": [TokenKind.EOF],
            "12abc": [TokenKind.INTEGER, TokenKind.KEYWORD, TokenKind.EOF],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds(case), case)

    def test_sub_vs_negative(self):
        tokens = list(Scanner("sub(-3,3)"))
        self.assertEqual(Token(TokenKind.KEYWORD, "sub"), tokens[0])
        self.assertEqual(Token(TokenKind.INTEGER, -3), tokens[2])

    def test_eof_is_idempotent(self):
        scanner = Scanner("a")
        scanner.scan_next()
        for _ in range(3):
            self.assertIs(TokenKind.EOF, scanner.scan_next().kind)

    def test_positions(self):
        tokens = list(Scanner("add( 10,x)"))
        self.assertEqual([(0, 3), (3, 4), (5, 7), (7, 8), (8, 9), (9, 10), (10, 10)],
                         [(token.start, token.end) for token in tokens])

    def test_lexical_errors(self):
        should_raise = {"ADD(1,2)": 0, "add(1;2)": 5, "add(1,\t2)": 6, "-": 0, "- 5": 0, "-a": 0, "a_b": 1}
        for case, column in should_raise.items():
            with self.assertRaises(CalculatorError, msg=case) as context:
                list(Scanner(case))
            self.assertIs(ErrorKind.LEXICAL, context.exception.kind, case)
            self.assertEqual(column, context.exception.start, case)


class TokenStreamTestCase(unittest.TestCase):

    def test_lookahead(self):
        tokens = TokenStream("add(1,2)")
        self.assertIs(TokenKind.KEYWORD, tokens.peek_type())
        self.assertEqual(Token(TokenKind.KEYWORD, "add"), tokens.peek_token())
        self.assertEqual(Token(TokenKind.KEYWORD, "add"), tokens.advance())
        self.assertIs(TokenKind.LEFT_PAREN, tokens.peek_type())

        for _ in range(5):
            tokens.advance()
        self.assertIs(TokenKind.EOF, tokens.peek_type())
        self.assertIs(TokenKind.EOF, tokens.advance().kind)
        self.assertIs(TokenKind.EOF, tokens.peek_type())

    def test_primes_first_token(self):
        self.assertRaises(CalculatorError, TokenStream, "#")


if __name__ == '__main__':
    unittest.main()
