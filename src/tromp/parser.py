"""
Parser for lambda calculus expressions.

Grammar:
```
expression  := abstraction | application
abstraction := ("λ" | "\\") identifier+ "." expression
application := atom+ abstraction?
atom        := identifier | "(" expression ")"
```

Application is left associative and an abstraction extends as far right as
possible, so `λx.f x y` is `λx.((f x) y)`. `λx y.M` is sugar for `λx.λy.M`.
"""

import re
from typing import Iterator, NamedTuple

from .errors import ParseError
from .term import Abstraction, Application, Term, Variable

__all__ = ["parse", "tokenize", "Token"]

TOKEN_SPECIFICATION = [
    ("LAMBDA", r"λ|\\"),
    ("DOT", r"\."),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("IDENTIFIER", r"[A-Za-z0-9_]+'*"),
    ("WHITESPACE", r"\s+"),
    ("MISMATCH", r"."),
]

TOKEN_REGEX = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in TOKEN_SPECIFICATION)
)


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


class Parser:
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

    def expect(self, kind: str, what: str) -> Token:
        token = self.current
        if token.kind != kind:
            raise ParseError(token.position, f"expected {what}, found {_describe(token)}")
        return self.advance()

    def parse(self) -> Term:
        term = self.expression()
        if self.current.kind != "EOF":
            raise ParseError(
                self.current.position, f"unexpected {_describe(self.current)}"
            )
        return term

    def expression(self) -> Term:
        if self.current.kind == "LAMBDA":
            return self.abstraction()
        return self.application()

    def abstraction(self) -> Term:
        self.expect("LAMBDA", "λ")
        params = [self.expect("IDENTIFIER", "a parameter name").value]
        while self.current.kind == "IDENTIFIER":
            params.append(self.advance().value)
        self.expect("DOT", "'.'")
        body = self.expression()
        for param in reversed(params):
            body = Abstraction(param, body)
        return body

    def application(self) -> Term:
        term = self.atom()
        while self.current.kind in ("IDENTIFIER", "LPAREN", "LAMBDA"):
            if self.current.kind == "LAMBDA":
                return Application(term, self.abstraction())
            term = Application(term, self.atom())
        return term

    def atom(self) -> Term:
        token = self.current
        if token.kind == "IDENTIFIER":
            self.advance()
            return Variable(token.value)
        if token.kind == "LPAREN":
            self.advance()
            term = self.expression()
            self.expect("RPAREN", "')'")
            return term
        raise ParseError(token.position, f"expected a term, found {_describe(token)}")


def _describe(token: Token) -> str:
    if token.kind == "EOF":
        return "end of input"
    return repr(token.value)


def parse(text: str) -> Term:
    """
    Parse a lambda calculus expression.

    Raises:
        ParseError: with the position of the offending character in `text`
    """
    return Parser(text).parse()
