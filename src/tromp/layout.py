"""
Layout of Tromp diagrams.

In a Tromp diagram:
- an abstraction is a horizontal line, as wide as its body
- a variable is a vertical line, dropping from the line of its binder
- an application is a horizontal connector between the function and the argument,
  placed under the abstraction lines of both sides.

The layout works on a grid. Each variable takes a column, each abstraction or
application takes a row. Rows grow downward. Coordinates are grid indices, the
renderer is the one multiplying them by `LayoutOptions.unit`.

The layout happens in 2 passes:
1. `dims` computes the size of the whole diagram (see `debruijn`)
2. `_place` walks the term and assigns a cell to every node, threading the
   column offset from left to right and a stack of binder rows from top to bottom.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Union

from .debruijn import (
    App,
    DeBruijnTerm,
    Lam,
    Var,
    child,
    dims,
    from_de_bruijn,
    index,
    to_de_bruijn,
)
from .errors import MalformedTermError
from .term import Abstraction, Application, Term, Variable
from .utils import Interval

__all__ = [
    "ApplicationLink",
    "LayoutOptions",
    "Point",
    "Node",
    "Link",
    "Diagram",
    "layout",
]

logger = logging.getLogger(__name__)

ABSTRACTION = "abstraction"
VARIABLE = "variable"
APPLICATION = "application"


class ApplicationLink(str, Enum):
    """
    Where the connector of an application starts on the function side.

    Both are valid Tromp diagram conventions:
    - LEFTMOST: the leftmost variable of the function
    - NEAREST_DEEPEST: the variable of the function that is the nearest to the argument
    """

    LEFTMOST = "leftmost"
    NEAREST_DEEPEST = "nearest-deepest"


@dataclass(frozen=True)
class LayoutOptions:
    """
    Attributes:
        unit: size of a grid cell once rendered
        application_link: see `ApplicationLink`
        show_names: label nodes with the names of the variables and parameters
    """

    unit: float = 40
    application_link: ApplicationLink = ApplicationLink.LEFTMOST
    show_names: bool = True

    def __post_init__(self):
        if self.unit <= 0:
            raise ValueError(f"grid unit must be positive, got {self.unit}")
        object.__setattr__(
            self, "application_link", ApplicationLink(self.application_link)
        )


class Point(NamedTuple):
    x: float
    y: float


class Node(NamedTuple):
    """
    A positioned element of the diagram.

    The size of a node is the size of the diagram of its sub-term.

    Attributes:
        index: for variables, the De Bruijn index
        binder: for bound variables, the id of the abstraction node they refer to
        label: the name of the variable or of the parameter, if names are shown
    """

    id: str
    kind: str
    x: int
    y: int
    width: int
    height: int
    index: Optional[int] = None
    binder: Optional[str] = None
    label: Optional[str] = None


class Link(NamedTuple):
    """
    A polyline of the diagram.

    Attributes:
        source: the node that emitted this line
        target: for variable lines, the abstraction node the line goes up to
    """

    id: str
    kind: str
    points: tuple[Point, ...]
    source: str
    target: Optional[str] = None


@dataclass(frozen=True)
class Diagram:
    nodes: tuple[Node, ...]
    links: tuple[Link, ...]
    width: int
    height: int
    unit: float = 40

    def node(self, node_id: str) -> Node:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def nodes_of(self, kind: str) -> list[Node]:
        return [n for n in self.nodes if n.kind == kind]

    def links_of(self, kind: str) -> list[Link]:
        return [link for link in self.links if link.kind == kind]

    def to_frames(self):
        from .frame import diagram_frames

        return diagram_frames(self)

    def to_svg(self) -> str:
        from .display import to_svg

        return to_svg(self)

    def _repr_html_(self) -> str:
        return f"<div>{self.to_svg()}</div>"


class Placed(NamedTuple):
    node: str
    columns: Interval
    height: int


@dataclass
class _Builder:
    """
    Accumulates the elements of a single diagram. Ids are counted from zero
    for each diagram, so the same term always gets the same diagram.
    """

    options: LayoutOptions
    labels: Iterator[Optional[str]]
    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    def add_node(self, kind: str, x: int, y: int, **kwargs) -> int:
        label = next(self.labels, None)
        if not self.options.show_names:
            label = None
        node = Node(
            id=f"node_{len(self.nodes)}",
            kind=kind,
            x=x,
            y=y,
            width=1,
            height=0,
            label=label,
            **kwargs,
        )
        self.nodes.append(node)
        return len(self.nodes) - 1

    def resize(self, i: int, width: int, height: int):
        self.nodes[i] = self.nodes[i]._replace(width=width, height=height)

    def add_link(
        self, kind: str, points: list[Point], source: str, target: Optional[str] = None
    ):
        self.links.append(
            Link(
                id=f"link_{len(self.links)}",
                kind=kind,
                points=tuple(points),
                source=source,
                target=target,
            )
        )


def _labels(term: Term) -> Iterator[Optional[str]]:
    # names in the same pre-order as the nodes produced by `_place`
    if isinstance(term, Variable):
        yield term.name
    elif isinstance(term, Abstraction):
        yield term.param
        yield from _labels(term.body)
    elif isinstance(term, Application):
        yield None
        yield from _labels(term.left)
        yield from _labels(term.right)


def _place(
    term: DeBruijnTerm,
    x: int,
    y: int,
    binders: list[tuple[int, str]],
    builder: _Builder,
) -> Placed:
    """
    Lay out `term` with its top-left cell at `(x, y)`.

    Args:
        binders: the (row, node id) of the enclosing abstractions, innermost last
    """
    if isinstance(term, Var):
        db_index = index(term)
        bound = 0 <= db_index < len(binders)
        row, binder = binders[-1 - db_index] if bound else (None, None)
        i = builder.add_node(VARIABLE, x, y, index=db_index, binder=binder)
        node_id = builder.nodes[i].id
        if bound:
            builder.add_link(VARIABLE, [Point(x, row), Point(x, y)], node_id, binder)
        return Placed(node_id, Interval.span(x, 1), 0)

    elif isinstance(term, Lam):
        body = child(term, "body")
        i = builder.add_node(ABSTRACTION, x, y)
        node_id = builder.nodes[i].id

        binders.append((y, node_id))
        placed = _place(body, x, y + 1, binders, builder)
        binders.pop()

        columns = placed.columns
        builder.resize(i, len(columns), placed.height + 1)
        builder.add_link(
            ABSTRACTION, [Point(columns[0], y), Point(columns[1], y)], node_id
        )
        return Placed(node_id, columns, placed.height + 1)

    elif isinstance(term, App):
        left_term, right_term = child(term, "left"), child(term, "right")
        i = builder.add_node(APPLICATION, x, y)
        node_id = builder.nodes[i].id

        left = _place(left_term, x, y + 1, binders, builder)
        right = _place(right_term, x + len(left.columns), y + 1, binders, builder)

        if builder.options.application_link is ApplicationLink.NEAREST_DEEPEST:
            start = left.columns[1]
        else:
            start = left.columns[0]
        builder.add_link(
            APPLICATION, [Point(start, y + 1), Point(right.columns[0], y + 1)], node_id
        )

        columns = left.columns | right.columns
        height = max(left.height, right.height) + 1
        builder.resize(i, len(columns), height)
        return Placed(node_id, columns, height)

    raise MalformedTermError(type(term).__name__, "kind")


def layout(
    term: Union[Term, DeBruijnTerm], options: Optional[LayoutOptions] = None
) -> Diagram:
    """
    Compute the Tromp diagram of a term.

    `term` can be a named term or a De Bruijn term. Free variables are drawn
    without a line to a binder.
    """
    if options is None:
        options = LayoutOptions()

    if isinstance(term, DeBruijnTerm):
        db_term = term
        labels = _labels(from_de_bruijn(term)) if options.show_names else iter(())
    else:
        db_term = to_de_bruijn(term)
        labels = _labels(term)

    width, height = dims(db_term)
    builder = _Builder(options, labels)
    _place(db_term, 0, 0, [], builder)

    logger.debug(
        "diagram of %d nodes and %d links, %dx%d",
        len(builder.nodes),
        len(builder.links),
        width,
        height,
    )
    return Diagram(
        nodes=tuple(builder.nodes),
        links=tuple(builder.links),
        width=width,
        height=height,
        unit=options.unit,
    )
