"""
Lambda calculus terms using De Bruijn indices.

A variable does not carry a name but the number of lambdas to cross upward
to find its binder:
- index=0: bound by the immediately enclosing lambda
- index=1: bound by the next outer lambda
- etc.

This is the representation the diagram layout works on, because the
binder of a variable is found by counting, exactly like the lines of a
Tromp diagram are drawn.

Free variables are tolerated: they get the `FREE` index, so that open terms
arising in the middle of a reduction can still be drawn. Passing `strict=True`
to `to_de_bruijn` raises `FreeVariableError` instead.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence

from .errors import FreeVariableError, MalformedTermError
from .term import Abstraction, Application, Term, Variable

__all__ = [
    "FREE",
    "DeBruijnTerm",
    "Var",
    "Lam",
    "App",
    "Dimensions",
    "to_de_bruijn",
    "from_de_bruijn",
    "alpha_equivalent",
    "dims",
    "count_variables",
]

FREE = -1

FRESH_NAMES = ("x", "y", "z", "a", "b", "c", "m", "n")


class DeBruijnTerm(ABC):
    def __call__(self, arg: DeBruijnTerm) -> DeBruijnTerm:
        return App(self, arg)


@dataclass(frozen=True)
class Var(DeBruijnTerm):
    """
    A variable reference.

    Example:
        λx. λy. x  =>  Lam(Lam(Var(1)))
        λx. λy. y  =>  Lam(Lam(Var(0)))
        λx. y      =>  Lam(Var(FREE))

    Attributes:
        index: De Bruijn index, or `FREE`
    """

    index: int

    @property
    def is_free(self) -> bool:
        return self.index < 0


@dataclass(frozen=True)
class Lam(DeBruijnTerm):
    body: Optional[DeBruijnTerm]


@dataclass(frozen=True)
class App(DeBruijnTerm):
    left: Optional[DeBruijnTerm]
    right: Optional[DeBruijnTerm]


class Dimensions(NamedTuple):
    width: int
    height: int


def child(term: DeBruijnTerm, field: str) -> DeBruijnTerm:
    """
    Get a child of a de Bruijn node, failing loudly if a caller built the node without it.
    """
    value = getattr(term, field, None)
    if value is None:
        raise MalformedTermError(type(term).__name__, field)
    return value


def index(term: Var) -> int:
    """
    The De Bruijn index of a variable, failing loudly if it was built without one.
    """
    if term.index is None:
        raise MalformedTermError(type(term).__name__, "index")
    return term.index


def to_de_bruijn(
    term: Term, context: Sequence[str] = (), strict: bool = False
) -> DeBruijnTerm:
    """
    Resolve every variable to the binder it refers to.

    Args:
        context: names bound around `term`, innermost first
        strict: raise `FreeVariableError` on a free variable instead of using `FREE`
    """
    if isinstance(term, Variable):
        try:
            return Var(list(context).index(term.name))
        except ValueError:
            if strict:
                raise FreeVariableError(term.name) from None
            return Var(FREE)
    elif isinstance(term, Abstraction):
        return Lam(to_de_bruijn(term.body, (term.param, *context), strict))
    elif isinstance(term, Application):
        return App(
            to_de_bruijn(term.left, context, strict),
            to_de_bruijn(term.right, context, strict),
        )
    raise TypeError(f"not a lambda term: {term!r}")


def fresh_param(context: Sequence[str]) -> str:
    for name in FRESH_NAMES:
        if name not in context:
            return name
    i = 0
    while f"x{i}" in context:
        i += 1
    return f"x{i}"


def from_de_bruijn(term: DeBruijnTerm, context: Sequence[str] = ()) -> Term:
    """
    Give names back to a de Bruijn term.

    Parameters are synthesized so that they never collide with a name of
    `context`, hence no variable can be captured on the way back.
    Free variables are named `free_<n>`.
    """
    if isinstance(term, Var):
        i = index(term)
        if i < 0:
            return Variable(f"free_{len(context)}")
        if i >= len(context):
            return Variable(f"free_{i}")
        return Variable(context[i])
    elif isinstance(term, Lam):
        body = child(term, "body")
        param = fresh_param(context)
        return Abstraction(param, from_de_bruijn(body, (param, *context)))
    elif isinstance(term, App):
        return Application(
            from_de_bruijn(child(term, "left"), context),
            from_de_bruijn(child(term, "right"), context),
        )
    raise MalformedTermError(type(term).__name__, "kind")


def alpha_equivalent(a: Term, b: Term) -> bool:
    """
    Check if two terms only differ by the names of their bound variables.
    """
    if free_names(a) != free_names(b):
        return False
    return to_de_bruijn(a) == to_de_bruijn(b)


def free_names(term: Term, bound: tuple[str, ...] = ()) -> list[str]:
    # free variables in order of appearance, they are all `FREE` once converted
    if isinstance(term, Variable):
        return [] if term.name in bound else [term.name]
    elif isinstance(term, Abstraction):
        return free_names(term.body, (term.param, *bound))
    elif isinstance(term, Application):
        return free_names(term.left, bound) + free_names(term.right, bound)
    raise TypeError(f"not a lambda term: {term!r}")


def dims(term: DeBruijnTerm) -> Dimensions:
    """
    Size of the diagram of `term`, in grid units.

    Each variable takes one column. A lambda adds a row on top of its body,
    an application puts its sides next to each other and adds a row.
    """
    if isinstance(term, Var):
        index(term)
        return Dimensions(1, 0)
    elif isinstance(term, Lam):
        width, height = dims(child(term, "body"))
        return Dimensions(width, height + 1)
    elif isinstance(term, App):
        left = dims(child(term, "left"))
        right = dims(child(term, "right"))
        return Dimensions(left.width + right.width, max(left.height, right.height) + 1)
    raise MalformedTermError(type(term).__name__, "kind")


def count_variables(term: DeBruijnTerm) -> int:
    if isinstance(term, Var):
        index(term)
        return 1
    elif isinstance(term, Lam):
        return count_variables(child(term, "body"))
    elif isinstance(term, App):
        return count_variables(child(term, "left")) + count_variables(
            child(term, "right")
        )
    raise MalformedTermError(type(term).__name__, "kind")
