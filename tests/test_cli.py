from tromp.cli import main


def test_reduces_and_prints(capsys):
    assert main(["(λx.x) y"]) == 0
    assert capsys.readouterr().out == "y\n"


def test_trace(capsys):
    assert main(["--trace", "(λx.λy.x) a b"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "0: (λx.λy.x) a b",
        "1: (λy.a) b",
        "2: a",
    ]


def test_math(capsys):
    assert main(["--math", "2 + 1"]) == 0
    assert capsys.readouterr().out == "λf.λx.f (f (f x))\n"


def test_applicative_strategy(capsys):
    assert main(["--trace", "--strategy", "applicative", "(λx.λy.x) a ((λz.z) b)"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 4


def test_step_cap(capsys, caplog):
    assert main(["--max-steps", "5", "(λx.x x) (λx.x x)"]) == 0
    assert capsys.readouterr().out == "(λx.x x) (λx.x x)\n"
    assert "no normal form after 5 steps" in caplog.text


def test_writes_svg(tmp_path, capsys):
    target = tmp_path / "diagram.svg"
    assert main(["--svg", str(target), "--style", "nearest-deepest", "λf.λx.f (f x)"]) == 0
    assert target.read_text(encoding="utf-8").startswith("<svg")


def test_table(capsys):
    assert main(["--table", "λx.x"]) == 0
    out = capsys.readouterr().out
    assert "abstraction" in out
    assert "variable" in out


def test_parse_error(capsys):
    assert main(["λ.x"]) == 1
    assert "position 1" in capsys.readouterr().err


def test_negative_max_steps(capsys):
    assert main(["--max-steps", "-1", "x"]) == 1
    assert "max-steps" in capsys.readouterr().err


def test_unwritable_svg(tmp_path, capsys):
    target = tmp_path / "missing" / "diagram.svg"
    assert main(["--svg", str(target), "λx.x"]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_too_deep(monkeypatch, capsys):
    def overflow(*args):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr("tromp.cli.reduce_many", overflow)
    assert main(["--math", "100 * 100"]) == 1
    assert capsys.readouterr().err == "error: the term is nested too deeply\n"
