"""Lexical analysis for lambdalang. Turns a character stream into classified tokens on demand.

Token grammar, loosely:

```
<number>      ::= <digit>+ ("." <digit>*)?          ; a second "." ends the number
<string>      ::= '"' (<char> | "\\" <char>)* '"'   ; "\\" takes the next character literally
<identifier>  ::= (<letter> | "_" | "λ") (<letter> | <digit> | "_" | "λ" | [?!-<>=])*
<keyword>     ::= "if" | "then" | "else" | "lambda" | "λ" | "true" | "false"
<punctuation> ::= [,;(){}[]]
<operator>    ::= [+-*/%=&|<>!]+                    ; maximal run

<comment>     ::= "#" <char>* <newline>
```
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from lambdalang.lang.error import LexicalError, ParseError
from lambdalang.syntax.input import InputStream


NUMBER = "number"
KEYWORD = "keyword"
VAR = "var"
STRING = "string"
PUNCTUATION = "punctuation"
OPERATOR = "operator"

KEYWORDS = ("if", "then", "else", "lambda", "λ", "true", "false")
LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
IDENTIFIER_START = LETTERS + "_λ"
IDENTIFIER = IDENTIFIER_START + DIGITS + "?!-<>="
OPERATORS = "+-*/%=&|<>!"
PUNCTUATIONS = ",;(){}[]"
WHITESPACE = " \t\n"


@dataclass(frozen=True)
class Token:
    kind: str
    value: Union[str, float]
    line: int = field(default=0, compare=False)    # position right after the token, for diagnostics
    column: int = field(default=0, compare=False)

    def __repr__(self):
        return f"Token({self.kind}, {self.value!r})"


class TokenStream:
    """Lazily tokenizes an InputStream, with one token of lookahead."""

    def __init__(self, stream):
        self.input = stream
        self.current: Optional[Token] = None

    def next(self):
        """Returns the next token (None at end of input) and consumes it."""
        token = self.current
        self.current = None
        return token if token is not None else self._read_next()

    def peek(self):
        """Returns the next token (None at end of input) without consuming it."""
        if self.current is None:
            self.current = self._read_next()
        return self.current

    def eof(self):
        return self.peek() is None

    def fail_with(self, msg, error=ParseError, token=None):
        """Raises error at the end of token if given, otherwise at the current input position."""
        if token is not None:
            raise error(msg, token.line, token.column)
        self.input.fail_with(msg, error)

    def __iter__(self):
        while not self.eof():
            yield self.next()

    def _read_next(self):
        self._read_while(lambda char: char in WHITESPACE)
        while self.input.peek() == "#":
            self._skip_comment()
            self._read_while(lambda char: char in WHITESPACE)
        if self.input.eof():
            return None

        char = self.input.peek()
        if char == '"':
            return self._token(STRING, self._read_escaped('"'))
        if char in DIGITS:
            return self._read_number()
        if char in IDENTIFIER_START:
            return self._read_identifier()
        if char in PUNCTUATIONS:
            return self._token(PUNCTUATION, self.input.next())
        if char in OPERATORS:
            return self._token(OPERATOR, self._read_while(lambda c: c in OPERATORS))

        self.input.fail_with(f"Can't handle character: {char}", LexicalError)

    def _token(self, kind, value):
        return Token(kind, value, self.input.line, self.input.column)

    def _read_while(self, predicate):
        chars = []
        while not self.input.eof() and predicate(self.input.peek()):
            chars.append(self.input.next())
        return "".join(chars)

    def _read_number(self):
        has_dot = False

        def is_number_part(char):
            nonlocal has_dot
            if char != ".":
                return char in DIGITS
            if has_dot:
                return False
            has_dot = True
            return True

        return self._token(NUMBER, float(self._read_while(is_number_part)))

    def _read_identifier(self):
        identifier = self._read_while(lambda char: char in IDENTIFIER)
        return self._token(KEYWORD if identifier in KEYWORDS else VAR, identifier)

    def _read_escaped(self, end):
        escaped = False
        chars = []
        self.input.next()
        while not self.input.eof():
            char = self.input.next()
            if escaped:
                chars.append(char)
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == end:
                break
            else:
                chars.append(char)
        return "".join(chars)

    def _skip_comment(self):
        self._read_while(lambda char: char != "\n")
        self.input.next()


def tokenize(text):
    """Returns the list of all tokens in text."""
    return list(TokenStream(InputStream(text)))
