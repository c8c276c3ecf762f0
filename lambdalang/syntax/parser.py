"""Recursive descent parser for lambdalang, with precedence climbing for binary and assignment operators.

```
<program>    ::= <expression> (";" <expression>)* ";"?
<expression> ::= <atom> (<operator> <atom>)*               ; folded by PRECEDENCE
<atom>       ::= ( "(" <expression> ")"
               | "{" (<expression> ("," <expression>)*)? "}"
               | "if" <expression> "then"? <expression> ("else" <expression>)?
               | "true" | "false"
               | ("lambda" | "λ") "(" (<var> ("," <var>)*)? ")" <expression>
               | <number> | <string> | <var>
               ) ("(" (<expression> ("," <expression>)*)? ")")*
```

"then" may only be left out when the consequent starts with "{".
"""

from lambdalang.syntax import ast
from lambdalang.syntax.input import InputStream
from lambdalang.syntax.tokenizer import KEYWORD, NUMBER, OPERATOR, PUNCTUATION, STRING, VAR, TokenStream


PRECEDENCE = {
    "=": 1,
    "||": 2,
    "&&": 3,
    "<": 7, ">": 7, "<=": 7, ">=": 7, "==": 7, "!=": 7,
    "+": 10, "-": 10,
    "*": 20, "/": 20, "%": 20,
}
RIGHT_ASSOCIATIVE = {"="}

LEAVES = {NUMBER: ast.Number, STRING: ast.String, VAR: ast.Var}


class Parser:
    """Holds a TokenStream and exposes one method per grammar production."""

    def __init__(self, tokens):
        self.tokens = tokens

    def parse(self):
        """Consumes the whole token stream and returns an ast.Program."""
        program = []
        while not self.tokens.eof():
            program.append(self.parse_expression())
            if not self.tokens.eof():
                self.skip_punctuation(";")
        return ast.Program(tuple(program))

    def parse_expression(self):
        return self.maybe_call(self.maybe_binary(self.parse_atom(), 0))

    def parse_atom(self):
        return self.maybe_call(self._parse_simple_atom())

    def _parse_simple_atom(self):
        if self.is_punctuation("("):
            self.tokens.next()
            expression = self.parse_expression()
            self.skip_punctuation(")")
            return expression

        if self.is_punctuation("{"):
            return self.parse_block()
        if self.is_keyword("if"):
            return self.parse_if()
        if self.is_keyword("true") or self.is_keyword("false"):
            return self.parse_bool()
        if self.is_keyword("lambda") or self.is_keyword("λ"):
            self.tokens.next()
            return self.parse_lambda()

        token = self.tokens.peek()
        if token is not None and token.kind in LEAVES:
            self.tokens.next()
            return LEAVES[token.kind](token.value)

        self.unexpected()

    def parse_block(self):
        program = self.delimited("{", "}", ",", self.parse_expression)
        if not program:
            return ast.Bool(False)
        if len(program) == 1:
            return program[0]
        return ast.Program(tuple(program))

    def parse_if(self):
        self.skip_keyword("if")
        condition = self.parse_expression()
        if not self.is_punctuation("{"):
            self.skip_keyword("then")

        then = self.parse_expression()
        otherwise = None
        if self.is_keyword("else"):
            self.tokens.next()
            otherwise = self.parse_expression()

        return ast.If(condition, then, otherwise)

    def parse_bool(self):
        return ast.Bool(self.tokens.next().value == "true")

    def parse_lambda(self):
        params = self.delimited("(", ")", ",", self.parse_varname)
        return ast.Lambda(tuple(params), self.parse_expression())

    def parse_varname(self):
        token = self.tokens.next()
        if token is None or token.kind != VAR:
            self.tokens.fail_with("Expecting variable name", token=token)
        return token.value

    def parse_call(self, func):
        return ast.Call(func, tuple(self.delimited("(", ")", ",", self.parse_expression)))

    def maybe_call(self, expression):
        while self.is_punctuation("("):
            expression = self.parse_call(expression)
        return expression

    def maybe_binary(self, left, my_precedence):
        """Folds operators binding tighter than my_precedence onto left."""
        while True:
            token = self.is_operator()
            if not token:
                return left

            his_precedence = PRECEDENCE.get(token.value)
            if his_precedence is None or his_precedence <= my_precedence:
                return left

            self.tokens.next()
            threshold = his_precedence - 1 if token.value in RIGHT_ASSOCIATIVE else his_precedence
            right = self.maybe_binary(self.parse_atom(), threshold)

            if token.value == "=":
                if not isinstance(left, ast.Var):
                    self.tokens.fail_with(f"Cannot assign to {left!r}", token=token)
                left = ast.Assign(left, right)
            else:
                left = ast.Binary(token.value, left, right)

    def delimited(self, start, stop, separator, parser):
        """Parses a start/stop wrapped, separator delimited list (trailing separator allowed)."""
        result = []
        first = True
        self.skip_punctuation(start)

        while not self.tokens.eof():
            if self.is_punctuation(stop):
                break

            if first:
                first = False
            else:
                self.skip_punctuation(separator)

            if self.is_punctuation(stop):
                break

            result.append(parser())

        self.skip_punctuation(stop)
        return result

    def skip_punctuation(self, char):
        if not self.is_punctuation(char):
            self.tokens.fail_with(f'Expected punctuation: "{char}"')
        self.tokens.next()

    def skip_keyword(self, keyword):
        if not self.is_keyword(keyword):
            self.tokens.fail_with(f'Expected keyword: "{keyword}"')
        self.tokens.next()

    def is_punctuation(self, char=None):
        return self._is(PUNCTUATION, char)

    def is_keyword(self, keyword=None):
        return self._is(KEYWORD, keyword)

    def is_operator(self, operator=None):
        return self._is(OPERATOR, operator)

    def _is(self, kind, value):
        """Peeks: returns the next token if it has kind (and value, if given), otherwise None."""
        token = self.tokens.peek()
        if token is not None and token.kind == kind and (value is None or token.value == value):
            return token
        return None

    def unexpected(self):
        token = self.tokens.peek()
        described = "end of input" if token is None else f"{token.kind} {token.value!r}"
        self.tokens.fail_with(f"Unexpected token: {described}", token=token)


def parse(text):
    """Tokenizes and parses text, returning an ast.Program."""
    return Parser(TokenStream(InputStream(text))).parse()
