"""Core engine of lambda-calculus.

This module rewrites named terms (see `term`). Some vocabulary:

# 1. Redex

A "Redex" is an `Application` whose left side is an `Abstraction`:
    (λparam. body) argument
The abstraction is the function of the redex, the right side is its argument.

# 2. Substitution

`substitute(term, name, replacement)` replaces every free occurrence of `name`
in `term` by `replacement`.

2.1 An abstraction binding `name` again shadows it: nothing below is replaced.
2.2 An abstraction binding a name that occurs free in `replacement` would
    capture it. The binder is renamed first (alpha-conversion), with a numeric
    suffix: `y` becomes `y1`, `y2` ... until the name is fresh.

# 3. Beta-reduction

The beta-reduction of a redex is the substitution of the argument for the
parameter in the body. A term with no redex is in "normal form".

# 4. Strategies

A term can contain several redexes, the strategy chooses which one is reduced.

4.1 Normal order reduces the leftmost-outermost redex. It finds the normal
    form whenever there is one.
4.2 Applicative order reduces the argument of a redex before the redex itself,
    like a strict programming language. It can loop on terms that have a
    normal form, and takes a different number of steps.

Some terms (like Omega, `(λx.x x) (λx.x x)`) have no normal form at all,
which is why every loop in this module takes a `max_steps` bound.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import AbstractSet, Iterator, Optional, Union

from .term import Abstraction, Application, Term, Variable, free_variables, occurs_free

__all__ = [
    "DEFAULT_MAX_STEPS",
    "Strategy",
    "substitute",
    "fresh_name",
    "beta_reduce",
    "beta_reduce_applicative",
    "step",
    "is_normal_form",
    "reduction_chain",
    "reduce_many",
    "reduce_to_normal_form",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 1000


class Strategy(str, Enum):
    NORMAL = "normal"
    APPLICATIVE = "applicative"


def fresh_name(base: str, forbidden: AbstractSet[str]) -> str:
    """
    Generate a name from `base` with the smallest numeric suffix not in `forbidden`.

    The number goes before trailing primes, `y'` gives `y1'`, so that the
    name is still read as a single identifier.
    """
    stem = base.rstrip("'")
    primes = base[len(stem) :]
    counter = 1
    while f"{stem}{counter}{primes}" in forbidden:
        counter += 1
    return f"{stem}{counter}{primes}"


def substitute(term: Term, name: str, replacement: Term) -> Term:
    """
    Replace the free occurrences of `name` in `term` by `replacement`, without capture (see 2.)
    """
    if isinstance(term, Variable):
        return replacement if term.name == name else term
    elif isinstance(term, Application):
        return Application(
            substitute(term.left, name, replacement),
            substitute(term.right, name, replacement),
        )
    elif isinstance(term, Abstraction):
        if term.param == name:
            return term
        if occurs_free(replacement, term.param):
            forbidden = free_variables(term.body) | free_variables(replacement) | {name}
            param = fresh_name(term.param, forbidden)
            body = substitute(term.body, term.param, Variable(param))
            return Abstraction(param, substitute(body, name, replacement))
        return Abstraction(term.param, substitute(term.body, name, replacement))
    raise TypeError(f"not a lambda term: {term!r}")


def _fire(redex: Application) -> Term:
    function = redex.left
    assert isinstance(function, Abstraction)
    return substitute(function.body, function.param, redex.right)


def beta_reduce(term: Term) -> Optional[Term]:
    """
    Reduce the leftmost-outermost redex (see 4.1)

    Returns None if the term is in normal form.
    """
    if isinstance(term, Application):
        if isinstance(term.left, Abstraction):
            return _fire(term)

        left = beta_reduce(term.left)
        if left is not None:
            return Application(left, term.right)

        right = beta_reduce(term.right)
        if right is not None:
            return Application(term.left, right)
        return None

    if isinstance(term, Abstraction):
        body = beta_reduce(term.body)
        if body is not None:
            return Abstraction(term.param, body)
        return None

    return None


def beta_reduce_applicative(term: Term) -> Optional[Term]:
    """
    Reduce the argument of an application first, and fire a redex only once
    its argument has no redex left (see 4.2)

    Returns None if the term is in normal form.
    """
    if isinstance(term, Application):
        right = beta_reduce_applicative(term.right)
        if right is not None:
            return Application(term.left, right)

        if isinstance(term.left, Abstraction):
            return _fire(term)

        left = beta_reduce_applicative(term.left)
        if left is not None:
            return Application(left, term.right)
        return None

    if isinstance(term, Abstraction):
        body = beta_reduce_applicative(term.body)
        if body is not None:
            return Abstraction(term.param, body)
        return None

    return None


def step(term: Term, strategy: Union[Strategy, str] = Strategy.NORMAL) -> Optional[Term]:
    strategy = Strategy(strategy)
    if strategy is Strategy.APPLICATIVE:
        return beta_reduce_applicative(term)
    return beta_reduce(term)


def is_normal_form(term: Term, strategy: Union[Strategy, str] = Strategy.NORMAL) -> bool:
    return step(term, strategy) is None


def reduction_chain(
    term: Term,
    strategy: Union[Strategy, str] = Strategy.NORMAL,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Iterator[Term]:
    """
    Yield `term`, then each term obtained by one more reduction.

    Stops at normal form, or after `max_steps` reductions.
    """
    if max_steps < 0:
        raise ValueError(f"max_steps must be non-negative, got {max_steps}")
    strategy = Strategy(strategy)

    yield term
    for i in range(max_steps):
        reduced = step(term, strategy)
        if reduced is None:
            logger.debug("normal form reached after %d steps", i)
            return
        term = reduced
        logger.debug("step %d: %s", i + 1, term)
        yield term

    if step(term, strategy) is not None:
        logger.info(
            "stopped after %d steps without reaching a normal form", max_steps
        )


def reduce_many(
    term: Term,
    strategy: Union[Strategy, str] = Strategy.NORMAL,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> list[Term]:
    """
    The full reduction trace `[term, step1, step2, ...]`.
    """
    return list(reduction_chain(term, strategy, max_steps))


def reduce_to_normal_form(
    term: Term,
    max_steps: int = DEFAULT_MAX_STEPS,
    strategy: Union[Strategy, str] = Strategy.NORMAL,
) -> Term:
    """
    Reduce until there is no redex left, or `max_steps` reductions were done.

    Reaching the limit is not an error: the last term is returned, and
    `is_normal_form` tells whether it is actually normal.
    """
    last = term
    for last in reduction_chain(term, strategy, max_steps):
        pass
    return last
