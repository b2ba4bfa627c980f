import pytest

from tromp import (
    FREE,
    App,
    ApplicationLink,
    Lam,
    LayoutOptions,
    MalformedTermError,
    Var,
    dims,
    layout,
    parse,
    to_de_bruijn,
)
from tromp.debruijn import count_variables
from tromp.layout import Point

TERMS = [
    "x",
    "λx.x",
    "λx.λy.x",
    "(λx.x) y",
    "λf.λx.f (f x)",
    "(λx.x x) (λx.x x)",
    "λx.λy.λz.x z (y z)",
    "λa.a a a",
    "λx.f (λy.y x) z",
]


def test_const():
    diagram = layout(parse("λx.λy.x"))
    assert (diagram.width, diagram.height) == (1, 2)

    outer, inner, var = diagram.nodes
    assert (outer.kind, outer.x, outer.y, outer.width, outer.height) == ("abstraction", 0, 0, 1, 2)
    assert (inner.kind, inner.x, inner.y) == ("abstraction", 0, 1)
    assert (var.kind, var.x, var.y, var.index, var.binder) == ("variable", 0, 2, 1, outer.id)
    assert [n.label for n in diagram.nodes] == ["x", "y", "x"]

    var_link, inner_link, outer_link = diagram.links
    assert var_link.kind == "variable"
    assert var_link.points == (Point(0, 0), Point(0, 2))
    assert (var_link.source, var_link.target) == (var.id, outer.id)
    assert inner_link.points == (Point(0, 1), Point(0, 1))
    assert outer_link.source == outer.id


def test_application_with_free_variable():
    diagram = layout(parse("(λx.x) y"))
    app, lam, x, y = diagram.nodes
    assert (app.kind, app.x, app.y, app.width, app.height) == ("application", 0, 0, 2, 2)
    assert (lam.x, lam.y) == (0, 1)
    assert (x.x, x.y, x.binder) == (0, 2, lam.id)
    assert (y.x, y.y, y.index, y.binder, y.label) == (1, 1, FREE, None, "y")

    [connector] = diagram.links_of("application")
    assert connector.source == app.id
    assert connector.points == (Point(0, 1), Point(1, 1))
    assert [link.source for link in diagram.links_of("variable")] == [x.id]


def test_abstraction_link_spans_body():
    diagram = layout(parse("λf.λx.f (f x)"))
    f_line = diagram.links_of("abstraction")[-1]
    assert f_line.source == diagram.nodes[0].id
    assert f_line.points == (Point(0, 0), Point(2, 0))


@pytest.mark.parametrize(
    "style, start",
    [(ApplicationLink.LEFTMOST, 0), (ApplicationLink.NEAREST_DEEPEST, 1)],
)
def test_application_link_style(style, start):
    diagram = layout(parse("λa.a a a"), LayoutOptions(application_link=style))
    outer_app = diagram.nodes[1]
    assert outer_app.kind == "application"
    [connector] = [link for link in diagram.links if link.source == outer_app.id]
    assert connector.points == (Point(start, 2), Point(2, 2))


def test_styles_only_differ_by_application_links():
    term = parse("λx.λy.λz.x z (y z)")
    leftmost = layout(term, LayoutOptions(application_link="leftmost"))
    nearest = layout(term, LayoutOptions(application_link="nearest-deepest"))
    assert leftmost.nodes == nearest.nodes
    assert leftmost.links_of("variable") == nearest.links_of("variable")
    assert leftmost.links_of("application") != nearest.links_of("application")


@pytest.mark.parametrize("text", TERMS)
class TestInvariants:
    def test_size_is_dims(self, text):
        db = to_de_bruijn(parse(text))
        diagram = layout(db)
        assert (diagram.width, diagram.height) == dims(db)
        assert (diagram.nodes[0].width, diagram.nodes[0].height) == dims(db)

    def test_width_is_number_of_variables(self, text):
        diagram = layout(parse(text))
        variables = diagram.nodes_of("variable")
        assert diagram.width == len(variables) == count_variables(to_de_bruijn(parse(text)))
        assert sorted(n.x for n in variables) == list(range(diagram.width))

    def test_height_is_deepest_row(self, text):
        diagram = layout(parse(text))
        assert diagram.height == max(n.y for n in diagram.nodes)

    def test_binder_links(self, text):
        diagram = layout(parse(text))
        lambda_lines = diagram.links_of("abstraction")
        for var in diagram.nodes_of("variable"):
            links = [link for link in diagram.links_of("variable") if link.source == var.id]
            if var.binder is None:
                assert links == []
                continue
            [link] = links
            top = link.points[0]
            binder = diagram.node(var.binder)
            assert top == Point(var.x, binder.y)
            on_line = [
                line
                for line in lambda_lines
                if line.points[0].y == top.y
                and line.points[0].x <= top.x <= line.points[-1].x
            ]
            assert len(on_line) == 1
            assert on_line[0].source == binder.id

    def test_idempotent(self, text):
        term = parse(text)
        options = LayoutOptions(unit=10)
        assert layout(term, options) == layout(term, options)
        assert layout(term).nodes[0].id == "node_0"


def test_hidden_names():
    diagram = layout(parse("λx.x"), LayoutOptions(show_names=False))
    assert all(n.label is None for n in diagram.nodes)


def test_de_bruijn_input_gets_synthesized_names():
    diagram = layout(Lam(Lam(Var(1))))
    assert [n.label for n in diagram.nodes] == ["x", "y", "x"]


def test_malformed_term():
    with pytest.raises(MalformedTermError):
        layout(Lam(None))
    with pytest.raises(MalformedTermError, match="index"):
        layout(Var(None))
    with pytest.raises(MalformedTermError, match="index"):
        layout(App(Var(0), Var(None)))


def test_options():
    with pytest.raises(ValueError):
        LayoutOptions(unit=0)
    with pytest.raises(ValueError):
        LayoutOptions(application_link="diagonal")
    options = LayoutOptions(application_link="nearest-deepest")
    assert options.application_link is ApplicationLink.NEAREST_DEEPEST
    assert layout(parse("x"), LayoutOptions(unit=12)).unit == 12
