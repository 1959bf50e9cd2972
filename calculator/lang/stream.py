"""Character stream over the raw expression text. Provides one character of lookahead for the scanner.

End of input is a state, not an error: once the text is exhausted, peek and advance keep returning NUL.
"""

EOS = "\0"


class CharacterStream:
    """One-character lookahead over a string."""

    def __init__(self, text):
        self.text = text
        self.pos = -1          # column of the character returned by peek
        self._next = EOS
        self._eof = False

        self._internal_advance()  # prime the first character

    def peek(self):
        """Returns the next unread character without consuming it."""
        return self._next

    def advance(self):
        """Returns the character last returned by peek and moves the cursor forward by one."""
        current = self._next
        if not self._eof:
            self._internal_advance()
        return current

    def is_at_end(self):
        return self._eof

    def _internal_advance(self):
        self.pos += 1
        if self.pos >= len(self.text):
            self.pos = len(self.text)
            self._eof = True
            self._next = EOS
        else:
            self._next = self.text[self.pos]

    def __repr__(self):
        return f"CharacterStream(pos={self.pos}, next={self._next!r})"
