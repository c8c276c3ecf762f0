"""Character stream over program source text. Tracks line/column so that lexical and parse errors can be positioned."""

from lambdalang.lang.error import LexicalError


class InputStream:
    """Exposes source text one character at a time."""

    def __init__(self, text):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 0

    def next(self):
        """Consumes and returns the next character, or "" at the end of input."""
        char = self.text[self.position:self.position + 1]
        self.position += len(char)

        if char == "\n":
            self.line += 1
            self.column = 0
        elif char:
            self.column += 1
        return char

    def peek(self):
        return self.text[self.position:self.position + 1]

    def eof(self):
        return self.peek() == ""

    def fail_with(self, msg, error=LexicalError):
        """Raises error (a PositionedError subclass) at the current line and column."""
        raise error(msg, self.line, self.column)
