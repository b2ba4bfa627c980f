import pytest

from tromp import Abstraction, Application, ParseError, Variable, parse, stringify

x, y, f, a, b, c = (Variable(n) for n in "xyfabc")


class TestParsing:
    def test_variable(self):
        assert parse("x") == x

    def test_multichar_names_and_primes(self):
        assert parse("foo_1 x'") == Application(Variable("foo_1"), Variable("x'"))

    def test_backslash_and_lambda_are_the_same(self):
        assert parse(r"\x.x") == parse("λx.x") == Abstraction("x", x)

    def test_application_is_left_associative(self):
        assert parse("a b c") == Application(Application(a, b), c)

    def test_parentheses_group(self):
        assert parse("a (b c)") == Application(a, Application(b, c))

    def test_abstraction_extends_to_the_right(self):
        assert parse("λx.f x y") == Abstraction("x", Application(Application(f, x), y))

    def test_abstraction_as_last_argument(self):
        assert parse("f λx.x") == Application(f, Abstraction("x", x))

    def test_several_parameters(self):
        assert parse("λx y.x") == Abstraction("x", Abstraction("y", x))

    def test_whitespace_is_ignored(self):
        assert parse("  ( λx .  x )  y ") == Application(Abstraction("x", x), y)

    @pytest.mark.parametrize(
        "text",
        [
            "(λx.λy.x) a b",
            "f (g x)",
            "λf.λx.f (f x)",
            "f (λx.x) y",
            "(λx.x x) (λx.x x)",
            "λx.x (λy.y) x",
        ],
    )
    def test_stringify_round_trip(self, text):
        term = parse(text)
        assert stringify(term) == text
        assert parse(stringify(term)) == term


class TestParseErrors:
    @pytest.mark.parametrize(
        "text, position",
        [
            ("", 0),
            ("λ.x", 1),
            ("λx x", 4),
            ("(x", 2),
            ("x )", 2),
            ("x $", 2),
            ("  (x", 4),
            ("()", 1),
        ],
    )
    def test_position(self, text, position):
        with pytest.raises(ParseError) as info:
            parse(text)
        assert info.value.position == position

    def test_message(self):
        with pytest.raises(ParseError, match="unexpected character '\\$'"):
            parse("x $")

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse(".x")
