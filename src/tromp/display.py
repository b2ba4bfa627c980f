from typing import Iterable

import svg

from .layout import ABSTRACTION, APPLICATION, VARIABLE, Diagram

__all__ = ["render", "to_svg"]

BAR_TOP = 0.2
BAR_HEIGHT = 0.2
CONNECTOR = 0.8


def draw(diagram: Diagram) -> Iterable[svg.Element]:
    """
    Generate the shapes of a diagram, in grid units.

    Within a cell, the abstraction bar is at the top and the application
    connector at the bottom, so that variables lines go from the first to the second.
    """
    for link in diagram.links_of(ABSTRACTION):
        start, end = link.points[0], link.points[-1]
        yield svg.Rect(
            x=start.x + 0.1,
            y=start.y + BAR_TOP,
            width=0.8 + end.x - start.x,
            height=BAR_HEIGHT,
            fill="blue",
        )

    for link in diagram.links_of(VARIABLE):
        top, bottom = link.points[0], link.points[-1]
        yield svg.Line(
            x1=top.x + 0.5,
            y1=top.y + BAR_TOP + BAR_HEIGHT,
            x2=bottom.x + 0.5,
            y2=bottom.y + CONNECTOR,
            stroke="gray",
            stroke_width=0.1,
        )

    for node in diagram.nodes_of(VARIABLE):
        if node.binder is None:
            yield svg.Line(
                x1=node.x + 0.5,
                y1=node.y + 0.1,
                x2=node.x + 0.5,
                y2=node.y + CONNECTOR,
                stroke="red",
                stroke_width=0.1,
            )

    for link in diagram.links_of(APPLICATION):
        start, end = link.points[0], link.points[-1]
        yield svg.Line(
            x1=start.x + 0.5,
            y1=start.y + CONNECTOR,
            x2=end.x + 0.5,
            y2=end.y + CONNECTOR,
            stroke="black",
            stroke_width=0.05,
        )
        yield svg.Circle(cx=start.x + 0.5, cy=start.y + CONNECTOR, r=0.1, fill="black")

    for node in diagram.nodes:
        if node.label is None:
            continue
        if node.kind == ABSTRACTION:
            yield svg.Text(x=node.x + 0.1, y=node.y + 0.15, text=node.label, font_size=0.2)
        elif node.kind == VARIABLE:
            yield svg.Text(
                x=node.x + 0.6, y=node.y + CONNECTOR, text=node.label, font_size=0.2
            )


SCALED = (
    "x", "y", "x1", "y1", "x2", "y2", "cx", "cy", "r",
    "width", "height", "stroke_width", "font_size",
)  # fmt: skip


def _scale(element: svg.Element, unit: float) -> svg.Element:
    # grid units to pixels
    for name in SCALED:
        value = getattr(element, name, None)
        if value is not None:
            element.__setattr__(name, value * unit)
    return element


def render(diagram: Diagram) -> svg.SVG:
    unit = diagram.unit
    width = diagram.width * unit
    height = (diagram.height + 1) * unit
    return svg.SVG(
        xmlns="http://www.w3.org/2000/svg",
        viewBox=f"0 0 {width} {height}",  # type: ignore
        width=width,
        height=height,
        elements=[_scale(e, unit) for e in draw(diagram)],
    )


def to_svg(diagram: Diagram) -> str:
    return render(diagram).as_str()
