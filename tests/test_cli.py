import json
import sys
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from monkey import monkey_cli


def test_run_monkey_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    status = monkey_cli.run_monkey(source="let x = 5; x * 2", is_string=True)
    assert status == 0
    assert capsys.readouterr().out.strip() == "10"


def test_run_monkey_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "input.monkey"
    file_path.write_text('let greet = fn(n) { "hi " + n }; greet("there")')
    assert monkey_cli.run_monkey(source=str(file_path)) == 0
    assert capsys.readouterr().out.strip() == "hi there"


def test_run_monkey_rejects_other_extensions(tmp_path: Path) -> None:
    file_path = tmp_path / "input.txt"
    file_path.write_text("1")
    with pytest.raises(ValueError, match="Only .monkey files are supported."):
        monkey_cli.run_monkey(source=str(file_path))


def test_run_monkey_null_result_prints_nothing(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert monkey_cli.run_monkey(source="let x = 1;", is_string=True) == 0
    assert capsys.readouterr().out == ""


def test_run_monkey_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="x;", is_string=True, show_tokens=True)
    out = capsys.readouterr().out
    assert "Token(IDENT, 'x')" in out
    assert "Token(SEMICOLON, ';')" in out
    assert "Token(EOF, '')" in out


def test_run_monkey_ast_is_json(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(source="1 + 2", is_string=True, show_ast=True)
    out = capsys.readouterr().out
    json_text, _, result = out.rpartition("}")
    data = json.loads(json_text + "}")
    assert data["kind"] == "program"
    assert data["statements"][0]["expression"]["operator"] == "+"
    assert result.strip() == "3"


def test_run_monkey_pretty_output(capsys: pytest.CaptureFixture[str]) -> None:
    monkey_cli.run_monkey(
        source="1", is_string=True, show_tokens=True, show_ast=True, pretty=True
    )
    out = capsys.readouterr().out
    assert "Tokens" in out
    assert "AST" in out
    assert "<<< OUTPUT >>>" in out
    assert "=" * 20 in out


def test_run_monkey_parser_errors(capsys: pytest.CaptureFixture[str]) -> None:
    status = monkey_cli.run_monkey(source="let 5;", is_string=True)
    captured = capsys.readouterr()
    assert status == 1
    assert captured.out == ""
    assert "[error] >>> parser errors:" in captured.err
    assert "expected next token to be IDENT, got INT instead" in captured.err


def test_run_monkey_runtime_error(capsys: pytest.CaptureFixture[str]) -> None:
    status = monkey_cli.run_monkey(source="1 / 0", is_string=True)
    captured = capsys.readouterr()
    assert status == 1
    assert "[error] >>> division by zero" in captured.err


def test_main_entry(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "len(\"abc\")"])
    with pytest.raises(SystemExit) as exc:
        monkey_cli.main()
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "3"


def test_main_entry_error_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["monkey", "-s", "missing"])
    with pytest.raises(SystemExit) as exc:
        monkey_cli.main()
    assert exc.value.code == 1


def test_main_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "prog.monkey"
    file_path.write_text("if (1 < 2) { 10 } else { 20 }")
    monkeypatch.setattr(sys, "argv", ["monkey", str(file_path), "--pretty"])
    with pytest.raises(SystemExit):
        monkey_cli.main()
    out = capsys.readouterr().out
    assert out.rstrip().endswith("10")


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["monkey"], {}),
        (["monkey", "--repl"], {"verbose": False, "show_tokens": False}),
        (["monkey", "--repl", "--verbose", "--tokens"], {"verbose": True, "show_tokens": True}),
        (["monkey", "--verbose"], {"verbose": True, "show_tokens": False}),
    ],
)
def test_main_launches_repl(
    monkeypatch: pytest.MonkeyPatch, argv: list[str], expected: dict[str, Any]
) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(sys, "argv", argv)
    monkeypatch.setattr(
        "monkey.monkey_repl.start_repl", lambda **kwargs: calls.append(kwargs)
    )
    monkey_cli.main()
    assert calls == [expected]


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])  # type: ignore[misc]
@given(st.integers(min_value=0, max_value=10**9), st.integers(min_value=0, max_value=10**9))  # type: ignore[misc]
def test_run_monkey_adds(
    capsys: pytest.CaptureFixture[str], a: int, b: int
) -> None:
    assert monkey_cli.run_monkey(source=f"{a} + {b}", is_string=True) == 0
    assert capsys.readouterr().out.strip() == str(a + b)
