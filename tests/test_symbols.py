from symbols import SymbolTable


def test_define_rejects_duplicates():
    table = SymbolTable()
    assert table.define("x")
    assert not table.define("x")
    assert len(table) == 1
    assert "x" in table
    assert "y" not in table


def test_iteration_is_lexicographic():
    table = SymbolTable.of(["zeta", "alpha", "Beta", "alpha"])
    assert list(table) == ["Beta", "alpha", "zeta"]
    assert table.ordered() == ["Beta", "alpha", "zeta"]
