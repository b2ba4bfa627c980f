"""
Arithmetic expressions desugared into Church encodings.

```
expression := term (("+" | "-") term)*
term       := factor ("*" factor)*
factor     := number | "(" expression ")"
```

`2 + 3` becomes `ADD 2 3` where the numbers are Church numerals. Subtraction
is truncated at zero, and division is not supported.
"""

import re
from typing import Iterator, NamedTuple

from .church import ADD, MUL, SUB, church_numeral
from .errors import ParseError
from .term import Term

__all__ = ["parse_arithmetic"]

OPERATORS = {"+": ADD, "-": SUB, "*": MUL}

TOKEN_REGEX = re.compile(r"(?P<NUMBER>\d+)|(?P<OP>[-+*/()])|(?P<WHITESPACE>\s+)|(?P<MISMATCH>.)")


class Token(NamedTuple):
    kind: str
    value: str
    position: int


def tokenize(text: str) -> Iterator[Token]:
    for match in TOKEN_REGEX.finditer(text):
        kind = match.lastgroup
        assert kind is not None
        if kind == "WHITESPACE":
            continue
        if kind == "MISMATCH":
            raise ParseError(match.start(), f"unexpected character {match.group()!r}")
        yield Token(kind, match.group(), match.start())
    yield Token("EOF", "", len(text))


class ArithmeticParser:
    def __init__(self, text: str):
        self.tokens = list(tokenize(text))
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.current
        self.pos += 1
        return token

    def parse(self) -> Term:
        term = self.expression()
        if self.current.kind != "EOF":
            raise ParseError(self.current.position, f"unexpected {self.current.value!r}")
        return term

    def expression(self) -> Term:
        term = self.term()
        while self.current.value in ("+", "-"):
            operator = OPERATORS[self.advance().value]
            term = operator(term)(self.term())
        return term

    def term(self) -> Term:
        term = self.factor()
        while self.current.value in ("*", "/"):
            token = self.advance()
            if token.value == "/":
                raise ParseError(token.position, "division is not supported")
            term = MUL(term)(self.factor())
        return term

    def factor(self) -> Term:
        token = self.advance()
        if token.kind == "NUMBER":
            return church_numeral(int(token.value))
        if token.value == "(":
            term = self.expression()
            closing = self.advance()
            if closing.value != ")":
                raise ParseError(closing.position, "expected ')'")
            return term
        found = "end of input" if token.kind == "EOF" else repr(token.value)
        raise ParseError(token.position, f"expected a number, found {found}")


def parse_arithmetic(text: str) -> Term:
    return ArithmeticParser(text).parse()
