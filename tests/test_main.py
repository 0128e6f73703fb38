import io
import logging

import pytest

import main
from main import EXIT_OK, EXIT_PARSE_FAILURE, EXIT_USAGE

PROGRAM = "x = 1\ny = x + 2\n"


@pytest.fixture
def source(tmp_path):
    def write(text):
        path = tmp_path / "input.py"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write


def test_cpp_from_file(source, capsys):
    assert main.main(["cpp", source(PROGRAM)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "double x;\ndouble y;\n" in out
    assert "x = 1;\ny = x + 2;\n" in out


def test_dot_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(PROGRAM))
    assert main.main(["dot"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("digraph G {\n")
    assert "  program -> ASSIGNMENT0;\n" in out


def test_mode_is_case_insensitive(source, capsys):
    assert main.main(["CPP", source(PROGRAM)]) == EXIT_OK
    assert "int main() {" in capsys.readouterr().out


def test_lex_mode(source, capsys):
    assert main.main(["lex", source(PROGRAM)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "IDENTIFIER" in out
    assert "ASSIGN" in out


@pytest.mark.parametrize("mode", ["cpp", "dot", "lex"])
def test_parse_failure_writes_nothing(mode, source, capsys):
    assert main.main([mode, source("x = $\n")]) == EXIT_PARSE_FAILURE
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ParseError" in captured.err


def test_syntax_error_exit_status(source, capsys):
    assert main.main(["cpp", source("if x\n  y = 1\n")]) == EXIT_PARSE_FAILURE
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("argv", [[], ["cpp", "a", "b"], ["asm"]])
def test_usage_errors(argv, capsys):
    assert main.main(argv) == EXIT_USAGE
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Usage:" in captured.err


def test_missing_file(tmp_path, capsys):
    assert main.main(["cpp", str(tmp_path / "nope.py")]) == EXIT_USAGE
    assert "Error reading input" in capsys.readouterr().err


def test_run_writes_to_given_stream():
    out = io.StringIO()
    assert main.run("dot", "", out) == EXIT_OK
    assert out.getvalue() == "digraph G {\n}\n"


def test_entry_points(monkeypatch, source, capsys):
    monkeypatch.setattr("sys.argv", ["py2dot", source("a = 1\n")])
    with pytest.raises(SystemExit) as exc:
        main.dot_main()
    assert exc.value.code == EXIT_OK
    assert "ASSIGNMENT0" in capsys.readouterr().out

    monkeypatch.setattr("sys.argv", ["py2cpp", source("a = $\n")])
    with pytest.raises(SystemExit) as exc:
        main.cpp_main()
    assert exc.value.code == EXIT_PARSE_FAILURE


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv(main.LOG_LEVEL_ENV, "not-a-level")
    assert main.configure_logging() == logging.WARNING
    monkeypatch.setenv(main.LOG_LEVEL_ENV, "debug")
    assert main.configure_logging() == logging.DEBUG


def test_undecodable_file(tmp_path, capsys):
    path = tmp_path / "binary.py"
    path.write_bytes(b"x = 1\n\xff\xfe\n")
    assert main.main(["cpp", str(path)]) == EXIT_USAGE
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Error reading input" in captured.err


def test_long_expression_chain(source, capsys):
    chain = " + ".join(["1"] * 1500)
    assert main.main(["cpp", source(f"x = {chain}\n")]) == EXIT_OK
    assert f"x = {chain};" in capsys.readouterr().out
