import json
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from initlang import initlang_cli


def test_run_string_prints_ast(capsys: pytest.CaptureFixture[str]) -> None:
    code = initlang_cli.run_initlang("let x ==> 5", is_string=True)
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["kind"] == "Program"
    decl = data["statements"][0]
    assert decl["kind"] == "VariableDeclaration"
    assert decl["name"] == "x"
    assert decl["value"]["value"] == 5.0


def test_run_string_prints_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    code = initlang_cli.run_initlang("let x ==> 5", is_string=True, tokens=True)
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert "LET" in lines[0] and "'let'" in lines[0]
    assert "ARROW" in lines[2]
    assert "EOF" in lines[4]


def test_run_file_input(
    tmp_path: Path, sample_source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "prog.il"
    path.write_text(sample_source, encoding="utf-8")
    assert initlang_cli.run_initlang(str(path)) == 0
    data = json.loads(capsys.readouterr().out)
    assert [s["kind"] for s in data["statements"]] == [
        "VariableDeclaration",
        "VariableDeclaration",
        "ExpressionStatement",
        "FunctionDeclaration",
    ]


def test_run_rejects_other_extensions(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match=r"Only \.il files are supported"):
        initlang_cli.run_initlang(str(tmp_path / "prog.txt"))


def test_run_pretty_banner(capsys: pytest.CaptureFixture[str]) -> None:
    initlang_cli.run_initlang("x", is_string=True, pretty=True)
    out = capsys.readouterr().out
    assert "=" * 20 in out
    assert "AST" in out


def test_run_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_path = tmp_path / "ast.json"
    assert (
        initlang_cli.run_initlang("f(1)", is_string=True, out=str(out_path), pretty=True)
        == 0
    )
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["statements"][0]["expression"]["kind"] == "CallExpression"
    assert f"(wrote to {out_path})" in capsys.readouterr().out


def test_run_output_file_quiet(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_path = tmp_path / "tokens.txt"
    initlang_cli.run_initlang("a", is_string=True, tokens=True, out=str(out_path))
    assert capsys.readouterr().out == ""
    assert "IDENTIFIER" in out_path.read_text(encoding="utf-8")


def test_parse_failure_reports_diagnostic(capsys: pytest.CaptureFixture[str]) -> None:
    code = initlang_cli.run_initlang("let x 5", is_string=True)
    assert code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error[ExpectedArrow]" in captured.err
    assert "--> 1:7" in captured.err


def test_lex_failure_in_token_mode(capsys: pytest.CaptureFixture[str]) -> None:
    code = initlang_cli.run_initlang('"open', is_string=True, tokens=True)
    assert code == 1
    assert "error[UnterminatedString]" in capsys.readouterr().err


def test_main_dispatches_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    with patch.object(sys, "argv", ["initlang", "-s", "let y ==> 1", "--tokens"]):
        with pytest.raises(SystemExit) as excinfo:
            initlang_cli.main()
    assert excinfo.value.code == 0
    assert "IDENTIFIER" in capsys.readouterr().out


def test_main_exit_code_on_error(capsys: pytest.CaptureFixture[str]) -> None:
    with patch.object(sys, "argv", ["initlang", "-s", "fi (x) {}"]):
        with pytest.raises(SystemExit) as excinfo:
            initlang_cli.main()
    assert excinfo.value.code == 1
    assert "ExpectedIdentifier" in capsys.readouterr().err


def test_deeply_nested_file_reports_diagnostic(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "deep.il"
    path.write_text("let x ==> " + "(" * 5000 + "\n", encoding="utf-8")
    with patch.object(sys, "argv", ["initlang", str(path)]):
        with pytest.raises(SystemExit) as excinfo:
            initlang_cli.main()
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "error[NestingTooDeep]" in err
    assert "Traceback" not in err


def test_main_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "nope.il"
    with patch.object(sys, "argv", ["initlang", str(missing)]):
        with pytest.raises(SystemExit) as excinfo:
            initlang_cli.main()
    assert excinfo.value.code == 2
    assert capsys.readouterr().err.startswith("initlang:")


def test_module_entrypoint_subprocess(tmp_path: Path) -> None:
    path = tmp_path / "hello.il"
    path.write_text('init.ger("hello")\n', encoding="utf-8")
    result = subprocess.run(
        [sys.executable, "-m", "initlang.initlang_cli", str(path)],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["statements"][0]["expression"] == {
        "kind": "StringLiteral",
        "line": 1,
        "col": 10,
        "value": "hello",
    }
