"""
Tabular views of terms and diagrams, as polars DataFrames.

A term is flattened in pre-order into a node table:
- `id`: position of the node in pre-order. The root is 0, the body of an abstraction
  and the function of an application directly follow their parent.
- `kind`: "abstraction", "variable" or "application"
- `ref`: for a bound variable, the id of its abstraction
- `arg`: for an application, the id of its argument
- `depth`: number of ancestors of the node, which is also its row in the diagram
"""

from typing import Any, Optional

import polars as pl
from polars import Int64, Schema, String, UInt32

from .debruijn import App, DeBruijnTerm, Lam, Var, child
from .errors import MalformedTermError
from .layout import ABSTRACTION, APPLICATION, VARIABLE, Diagram

__all__ = [
    "SCHEMA",
    "term_frame",
    "count_variable_rows",
    "compute_height",
    "diagram_frames",
]

SCHEMA = Schema(
    {
        "id": UInt32,
        "kind": String,
        "ref": UInt32,
        "arg": UInt32,
        "depth": UInt32,
    },
)

NODES_SCHEMA = Schema(
    {
        "id": String,
        "kind": String,
        "x": Int64,
        "y": Int64,
        "width": Int64,
        "height": Int64,
        "index": Int64,
        "binder": String,
        "label": String,
    }
)

LINKS_SCHEMA = Schema(
    {
        "id": String,
        "kind": String,
        "source": String,
        "target": String,
        "x1": pl.Float64,
        "y1": pl.Float64,
        "x2": pl.Float64,
        "y2": pl.Float64,
    }
)


def _flatten(
    term: DeBruijnTerm,
    depth: int,
    binders: list[int],
    rows: list[Optional[dict[str, Any]]],
):
    my_id = len(rows)
    rows.append(None)
    row = {"id": my_id, "depth": depth, "ref": None, "arg": None}

    if isinstance(term, Var):
        if 0 <= term.index < len(binders):
            row["ref"] = binders[-1 - term.index]
        rows[my_id] = {**row, "kind": VARIABLE}
    elif isinstance(term, Lam):
        rows[my_id] = {**row, "kind": ABSTRACTION}
        _flatten(child(term, "body"), depth + 1, binders + [my_id], rows)
    elif isinstance(term, App):
        _flatten(child(term, "left"), depth + 1, binders, rows)
        rows[my_id] = {**row, "kind": APPLICATION, "arg": len(rows)}
        _flatten(child(term, "right"), depth + 1, binders, rows)
    else:
        raise MalformedTermError(type(term).__name__, "kind")


def term_frame(term: DeBruijnTerm) -> pl.DataFrame:
    rows: list[Optional[dict[str, Any]]] = []
    _flatten(term, 0, [], rows)
    return pl.DataFrame(rows, schema=SCHEMA)


def count_variable_rows(nodes: pl.DataFrame) -> int:
    return nodes.filter(pl.col("kind") == VARIABLE).height


def compute_height(nodes: pl.DataFrame) -> int:
    """
    Height of the diagram: every abstraction or application above a variable adds a row.
    """
    return nodes.filter(pl.col("kind") == VARIABLE)["depth"].max()  # type: ignore


def diagram_frames(diagram: Diagram) -> tuple[pl.DataFrame, pl.DataFrame]:
    """
    The nodes and the links of a diagram. Links are reduced to their 2 end points.
    """
    nodes = pl.DataFrame(
        [node._asdict() for node in diagram.nodes], schema=NODES_SCHEMA
    )
    links = pl.DataFrame(
        [
            {
                "id": link.id,
                "kind": link.kind,
                "source": link.source,
                "target": link.target,
                "x1": float(link.points[0].x),
                "y1": float(link.points[0].y),
                "x2": float(link.points[-1].x),
                "y2": float(link.points[-1].y),
            }
            for link in diagram.links
        ],
        schema=LINKS_SCHEMA,
    )
    return nodes, links
