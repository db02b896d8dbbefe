import pytest

from minicc.symtab import SymbolInfo, SymbolNotFound, SymbolTable


@pytest.fixture
def table():
    t = SymbolTable()
    t.enter_function()
    return t


def test_locals_get_increasing_slots(table):
    table.register("a", "local")
    table.register("b", "local")
    assert table.lookup("a").slot == 1
    assert table.lookup("b").slot == 2


def test_args_are_numbered_separately(table):
    table.register("x", "arg")
    table.register("a", "local")
    table.register("y", "arg")
    assert table.lookup("x") == SymbolInfo("x", "arg", 1, 1)
    assert table.lookup("y").slot == 2
    assert table.lookup("a").slot == 1


def test_global_slot_is_zero(table):
    table.register("g", "global")
    assert table.lookup("g").slot == 0


def test_unknown_name_raises(table):
    with pytest.raises(SymbolNotFound):
        table.lookup("missing")


def test_block_scope_is_removed(table):
    table.enter_block()
    table.register("inner", "local")
    assert table.lookup("inner").layer == 2
    table.leave_block()
    assert table.layer == 1
    with pytest.raises(SymbolNotFound):
        table.lookup("inner")


def test_shadowing_restores_outer(table):
    table.register("x", "local")
    table.enter_block()
    table.register("x", "local")
    assert table.lookup("x").slot == 2
    table.leave_block()
    assert table.lookup("x").slot == 1


def test_leave_function_returns_local_count_and_clears(table):
    table.register("a", "local")
    table.enter_block()
    table.register("b", "local")
    table.register("p", "arg")
    assert table.leave_function() == 2
    assert table.layer == 0
    with pytest.raises(SymbolNotFound):
        table.lookup("a")


def test_enter_function_restarts_numbering(table):
    table.register("a", "local")
    table.leave_function()
    table.enter_function()
    table.register("b", "local")
    assert table.lookup("b").slot == 1


def test_entries_at_layer_zero_survive_leave_function():
    t = SymbolTable()
    t.register("p", "arg")
    t.leave_function()
    assert t.lookup("p").layer == 0