import pytest

from tromp import ParseError, church_numeral, church_to_int, parse, parse_arithmetic
from tromp.church import ADD, FALSE, MUL, PRED, SUB, SUCC, TRUE


def test_numerals():
    assert church_numeral(0) == parse("λf.λx.x")
    assert church_numeral(2) == parse("λf.λx.f (f x)")
    with pytest.raises(ValueError):
        church_numeral(-1)


@pytest.mark.parametrize("n", [0, 1, 4])
def test_decode(n):
    assert church_to_int(church_numeral(n)) == n


def test_decode_alpha_renamed_numeral():
    assert church_to_int(parse("λg.λy.g (g (g y))")) == 3


def test_not_a_numeral():
    with pytest.raises(ValueError):
        church_to_int(parse("λx.x"))
    with pytest.raises(ValueError):
        church_to_int(parse("λf.λx.x f"))


def test_operators():
    two, three = church_numeral(2), church_numeral(3)
    assert church_to_int(SUCC(two)) == 3
    assert church_to_int(ADD(two)(three)) == 5
    assert church_to_int(MUL(two)(three)) == 6
    assert church_to_int(PRED(three)) == 2
    assert church_to_int(SUB(three)(two)) == 1
    assert church_to_int(SUB(two)(three)) == 0


def test_booleans():
    assert TRUE(parse("a"))(parse("b")).reduce() == parse("a")
    assert FALSE(parse("a"))(parse("b")).reduce() == parse("b")


@pytest.mark.parametrize(
    "text, value",
    [
        ("7", 7),
        ("2 + 3", 5),
        ("2 * 3", 6),
        ("2 + 3 * (4 - 1)", 11),
        ("(1 + 1) * 2", 4),
        ("3 - 5", 0),
        ("10 - 2 - 3", 5),
    ],
)
def test_arithmetic(text, value):
    assert church_to_int(parse_arithmetic(text), max_steps=10_000) == value


def test_arithmetic_structure():
    assert parse_arithmetic("1 + 2") == ADD(church_numeral(1))(church_numeral(2))


@pytest.mark.parametrize(
    "text, position",
    [("4 / 2", 2), ("2 +", 3), ("(1", 2), ("1 x", 2), ("", 0), ("1 2", 2)],
)
def test_arithmetic_errors(text, position):
    with pytest.raises(ParseError) as info:
        parse_arithmetic(text)
    assert info.value.position == position
