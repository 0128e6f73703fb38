import pytest

from errors import LexError, ParseError
from lexer import PyLexer, print_tokens


def _types(text):
    return [tok["type"] for tok in PyLexer().tokenize(text)]


def test_assignment_tokens():
    assert _types("x = 1\n") == ["IDENTIFIER", "ASSIGN", "INTEGER", "NEWLINE"]


def test_missing_final_newline_is_supplied():
    assert _types("x = 1") == ["IDENTIFIER", "ASSIGN", "INTEGER", "NEWLINE"]


def test_empty_and_blank_input():
    assert _types("") == []
    assert _types("\n\n   \n# just a comment\n") == []


def test_numbers_and_keywords():
    toks = PyLexer().tokenize("a = 1.5 + 2. + .5 + 10 and True or not false\n")
    assert [(t["type"], t["value"]) for t in toks[:-1]] == [
        ("IDENTIFIER", "a"),
        ("ASSIGN", "="),
        ("FLOAT", "1.5"),
        ("PLUS", "+"),
        ("FLOAT", "2."),
        ("PLUS", "+"),
        ("FLOAT", ".5"),
        ("PLUS", "+"),
        ("INTEGER", "10"),
        ("AND", "and"),
        ("BOOLEAN", "True"),
        ("OR", "or"),
        ("NOT", "not"),
        ("IDENTIFIER", "false"),
    ]


def test_two_character_operators_win():
    assert _types("a == b != c <= d >= e < f > g\n")[:-1] == [
        "IDENTIFIER", "EQ", "IDENTIFIER", "NEQ", "IDENTIFIER", "LTE",
        "IDENTIFIER", "GTE", "IDENTIFIER", "LT", "IDENTIFIER", "GT", "IDENTIFIER",
    ]


def test_indent_and_dedent():
    assert _types("if a:\n  b = 1\nc = 2\n") == [
        "IF", "IDENTIFIER", "COLON", "NEWLINE",
        "INDENT", "IDENTIFIER", "ASSIGN", "INTEGER", "NEWLINE",
        "DEDENT", "IDENTIFIER", "ASSIGN", "INTEGER", "NEWLINE",
    ]


def test_open_blocks_closed_at_eof():
    assert _types("while a:\n    if b:\n        break") == [
        "WHILE", "IDENTIFIER", "COLON", "NEWLINE",
        "INDENT", "IF", "IDENTIFIER", "COLON", "NEWLINE",
        "INDENT", "BREAK", "NEWLINE", "DEDENT", "DEDENT",
    ]


def test_comments_and_blank_lines_inside_block():
    assert _types("if a:\n  b = 1  # trailing\n\n      # stray\n  c = 2\n") == [
        "IF", "IDENTIFIER", "COLON", "NEWLINE",
        "INDENT", "IDENTIFIER", "ASSIGN", "INTEGER", "NEWLINE",
        "IDENTIFIER", "ASSIGN", "INTEGER", "NEWLINE",
        "DEDENT",
    ]


def test_line_and_column_tracking():
    toks = PyLexer().tokenize("x = 1\n\ny = 22\n")
    y = [t for t in toks if t["value"] == "y"][0]
    num = [t for t in toks if t["value"] == "22"][0]
    assert (y["line"], y["column"]) == (3, 1)
    assert (num["line"], num["column"]) == (3, 5)


def test_illegal_character_raises_with_position():
    with pytest.raises(LexError) as exc:
        PyLexer().tokenize("x = 1 $ 2\n")
    assert exc.value.line == 1
    assert exc.value.col == 7
    assert isinstance(exc.value, ParseError)


def test_inconsistent_dedent_raises():
    with pytest.raises(LexError, match="Unindent"):
        PyLexer().tokenize("if a:\n    b = 1\n  c = 2\n")


def test_lexer_is_reusable():
    lexer = PyLexer()
    lexer.tokenize("a = 1\nb = 2\n")
    toks = lexer.tokenize("c = 3\n")
    assert toks[0]["line"] == 1


def test_print_tokens(capsys):
    print_tokens(PyLexer().tokenize("x = 1\n"))
    out = capsys.readouterr().out
    assert "IDENTIFIER" in out
    assert "\\n" in out


def test_print_tokens_empty(capsys):
    print_tokens([])
    assert capsys.readouterr().out == "No tokens found!\n"


@pytest.mark.parametrize("text, ttype, value", [
    ("1e5", "FLOAT", "1e5"),
    ("2.5E-3", "FLOAT", "2.5E-3"),
    ("1.e+2", "FLOAT", "1.e+2"),
    ("1_000.000_1", "FLOAT", "1000.0001"),
    ("1_000", "INTEGER", "1000"),
])
def test_number_spellings(text, ttype, value):
    tok = PyLexer().tokenize(f"x = {text}\n")[2]
    assert (tok["type"], tok["value"]) == (ttype, value)


def test_unsupported_keyword_position():
    with pytest.raises(LexError, match="Unsupported keyword 'return'") as exc:
        PyLexer().tokenize("x = 1\nreturn = 2\n")
    assert (exc.value.line, exc.value.col) == (2, 1)
