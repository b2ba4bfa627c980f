"""
Lambda calculus terms with named variables.

This is the representation produced by the parser and rewritten by the
reduction engine (see `core`). A term is one of:

- `Variable`, a reference to a binder by name (or a free name)
- `Abstraction`, a lambda binding `param` over `body`
- `Application`, `left` applied to `right`

Terms are immutable and compared structurally, so two terms built separately
are equal when they have the same shape and the same names.
Alpha-equivalence is a different question, answered in `debruijn`.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Union

if TYPE_CHECKING:
    from .core import Strategy

__all__ = [
    "Term",
    "Variable",
    "Abstraction",
    "Application",
    "free_variables",
    "occurs_free",
    "stringify",
]

LAMBDA = "λ"


class Term(ABC):
    def __call__(self, arg: Term) -> Term:
        """Apply this term to an argument"""
        return Application(self, arg)

    def __str__(self) -> str:
        return stringify(self)

    def beta(self, strategy: Union[Strategy, str] = "normal") -> Optional[Term]:
        """
        Reduce a single redex, or return None if this term is in normal form.
        """
        from .core import step

        return step(self, strategy)

    def reduce(
        self, max_steps: Optional[int] = None, strategy: Union[Strategy, str] = "normal"
    ) -> Term:
        from .core import DEFAULT_MAX_STEPS, reduce_to_normal_form

        if max_steps is None:
            max_steps = DEFAULT_MAX_STEPS
        return reduce_to_normal_form(self, max_steps, strategy)

    def reduction_chain(
        self, strategy: Union[Strategy, str] = "normal", max_steps: Optional[int] = None
    ) -> Iterator[Term]:
        from .core import DEFAULT_MAX_STEPS, reduction_chain

        if max_steps is None:
            max_steps = DEFAULT_MAX_STEPS
        return reduction_chain(self, strategy, max_steps)

    def _repr_html_(self) -> str:
        from .layout import layout

        return layout(self)._repr_html_()


@dataclass(frozen=True)
class Variable(Term):
    """
    A reference to the nearest enclosing abstraction with the same `param`.
    When there is none, the variable is free.
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Abstraction(Term):
    """
    Lambda abstraction.

    Example:
        λx. x      =>  Abstraction("x", Variable("x"))
        λx. λy. x  =>  Abstraction("x", Abstraction("y", Variable("x")))

    Attributes:
        param: the name bound in `body`. It shadows any outer binder with the same name.
        body: the body of the lambda abstraction
    """

    param: str
    body: Term


@dataclass(frozen=True)
class Application(Term):
    """
    Function application.

    Attributes:
        left: the function being applied
        right: the argument
    """

    left: Term
    right: Term


def free_variables(term: Term) -> frozenset[str]:
    """Names that occur in `term` without an enclosing binder."""
    if isinstance(term, Variable):
        return frozenset((term.name,))
    elif isinstance(term, Abstraction):
        return free_variables(term.body) - {term.param}
    elif isinstance(term, Application):
        return free_variables(term.left) | free_variables(term.right)
    raise TypeError(f"not a lambda term: {term!r}")


def occurs_free(term: Term, name: str) -> bool:
    if isinstance(term, Variable):
        return term.name == name
    elif isinstance(term, Abstraction):
        return term.param != name and occurs_free(term.body, name)
    elif isinstance(term, Application):
        return occurs_free(term.left, name) or occurs_free(term.right, name)
    raise TypeError(f"not a lambda term: {term!r}")


def stringify(term: Term) -> str:
    """
    Canonical notation, the one accepted by `parser.parse`.

    An abstraction extends as far right as possible, so it is parenthesized
    when it appears on either side of an application. Application is left
    associative, so only an application on the right side needs parentheses.

    ```
    (λx.λy.x) a b    is    Application(Application(λx.λy.x, a), b)
    f (g x)          is    Application(f, Application(g, x))
    ```
    """
    if isinstance(term, Variable):
        return term.name
    elif isinstance(term, Abstraction):
        return f"{LAMBDA}{term.param}.{stringify(term.body)}"
    elif isinstance(term, Application):
        left = stringify(term.left)
        if isinstance(term.left, Abstraction):
            left = f"({left})"
        right = stringify(term.right)
        if isinstance(term.right, (Abstraction, Application)):
            right = f"({right})"
        return f"{left} {right}"
    raise TypeError(f"not a lambda term: {term!r}")
