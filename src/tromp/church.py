"""
Church encodings.

The natural number n is the function applying its first argument n times:
    0 = λf.λx.x
    2 = λf.λx.f (f x)
"""

from .core import DEFAULT_MAX_STEPS, reduce_to_normal_form
from .parser import parse
from .term import Abstraction, Application, Term, Variable

__all__ = [
    "TRUE",
    "FALSE",
    "SUCC",
    "ADD",
    "MUL",
    "PRED",
    "SUB",
    "church_numeral",
    "church_to_int",
]

TRUE = parse("λt.λf.t")
FALSE = parse("λt.λf.f")

SUCC = parse("λn.λf.λx.f (n f x)")
ADD = parse("λm.λn.λf.λx.m f (n f x)")
MUL = parse("λm.λn.λf.m (n f)")
PRED = parse("λn.λf.λx.n (λg.λh.h (g f)) (λu.x) (λu.u)")
# truncated: m - n = 0 when n > m
SUB = Abstraction("m", Abstraction("n", Variable("n")(PRED)(Variable("m"))))


def church_numeral(n: int) -> Term:
    if n < 0:
        raise ValueError(f"Church numerals are natural numbers, got {n}")
    body: Term = Variable("x")
    for _ in range(n):
        body = Application(Variable("f"), body)
    return Abstraction("f", Abstraction("x", body))


def church_to_int(term: Term, max_steps: int = DEFAULT_MAX_STEPS) -> int:
    """
    Normalize `term` and read the number it encodes.

    Raises:
        ValueError: if the normal form is not a Church numeral
    """
    normal = reduce_to_normal_form(term, max_steps)
    if isinstance(normal, Abstraction) and isinstance(normal.body, Abstraction):
        f, x = normal.param, normal.body.param
        body = normal.body.body
        count = 0
        while (
            f != x
            and isinstance(body, Application)
            and body.left == Variable(f)
        ):
            count += 1
            body = body.right
        if body == Variable(x):
            return count
    raise ValueError(f"not a Church numeral: {normal}")
