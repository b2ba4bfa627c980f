from typing import List, Union

try:
    import polars  # noqa: F401
except ImportError:
    raise ImportError(
        "tromp needs the `polars` library. \n Please install it, typically with `pip install polars`"
    )

from .arithmetic import parse_arithmetic
from .church import church_numeral, church_to_int
from .core import (
    DEFAULT_MAX_STEPS,
    Strategy,
    beta_reduce,
    beta_reduce_applicative,
    is_normal_form,
    reduce_many,
    reduce_to_normal_form,
    substitute,
)
from .debruijn import (
    FREE,
    App,
    Lam,
    Var,
    alpha_equivalent,
    dims,
    from_de_bruijn,
    to_de_bruijn,
)
from .errors import FreeVariableError, LambdaError, MalformedTermError, ParseError
from .layout import ApplicationLink, Diagram, LayoutOptions, layout
from .parser import parse
from .term import Abstraction, Application, Term, Variable, free_variables, stringify

__all__ = [
    "L",
    "V",
    "parse",
    "parse_arithmetic",
    "stringify",
    "Term",
    "Variable",
    "Abstraction",
    "Application",
    "free_variables",
    "FREE",
    "Var",
    "Lam",
    "App",
    "to_de_bruijn",
    "from_de_bruijn",
    "alpha_equivalent",
    "dims",
    "DEFAULT_MAX_STEPS",
    "Strategy",
    "substitute",
    "beta_reduce",
    "beta_reduce_applicative",
    "is_normal_form",
    "reduce_many",
    "reduce_to_normal_form",
    "ApplicationLink",
    "LayoutOptions",
    "Diagram",
    "layout",
    "church_numeral",
    "church_to_int",
    "LambdaError",
    "ParseError",
    "FreeVariableError",
    "MalformedTermError",
]


class L:
    """
    Build a term without parsing it.

    ```
    L("f", "x")._("f").call(V("f").call("x")).build()   # λf.λx.f (f x)
    ```

    `_` adds a term to the body, juxtaposed with the previous ones.
    `call` applies the last added term to an argument.
    """

    def __init__(self, *lambda_names: str):
        self.lambda_names = list(lambda_names)
        self.items: List[Term] = []

    def lamb(self, name: str) -> "L":
        self.lambda_names.append(name)
        return self

    def _(self, x: Union[str, "L", Term]) -> "L":
        self.items.append(_as_term(x))
        return self

    def call(self, arg: Union[str, "L", Term]) -> "L":
        assert self.items, "call() needs a term to apply, add one with _()"
        self.items[-1] = Application(self.items[-1], _as_term(arg))
        return self

    def build(self) -> Term:
        if not self.items:
            raise ValueError("the body of the term is empty")
        body = self.items[0]
        for item in self.items[1:]:
            body = Application(body, item)
        for name in reversed(self.lambda_names):
            body = Abstraction(name, body)
        return body


def _as_term(x: Union[str, L, Term]) -> Term:
    if isinstance(x, L):
        return x.build()
    if isinstance(x, str):
        return Variable(x)
    assert isinstance(x, Term)
    return x


def V(name: str) -> L:
    return L()._(name)
