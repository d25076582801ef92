import pytest

from softlang.datatypes import DataType
from softlang.nodes import Node, Parameter
from softlang.symbol_table import (
    CompileError,
    ModuleInfo,
    Symbol,
    SymbolTable,
    SymbolType,
)


def _body():
    return Node.create_block([], 1, 1)


def _function(name, params=(), module=None):
    return Symbol.function(name, DataType.INT, list(params), _body(), module)


def test_function_symbol_properties():
    params = [Parameter(DataType.INT, "a"), Parameter(DataType.FLOAT, "b")]
    symbol = _function("add", params)
    assert symbol.is_function()
    assert symbol.is_callable()
    assert not symbol.is_constructor()
    assert symbol.symbol_type.arity() == 2
    assert symbol.symbol_type.parameters() == params
    assert symbol.symbol_type.body() == _body()
    assert symbol.symbol_type.start_address() is None
    assert symbol.symbol_type.has_body()


def test_constructor_is_callable_but_not_function():
    symbol = Symbol.constructor("P::constructor", "P", [], _body(), None)
    assert symbol.is_constructor()
    assert symbol.is_callable()
    assert not symbol.is_function()
    assert symbol.symbol_type.info.class_name == "P"


def test_variable_and_class_are_not_callable():
    var = Symbol.variable("x", DataType.INT, True, None)
    cls = Symbol.class_("P", [Parameter(DataType.INT, "x")], None, None)
    assert var.is_variable() and not var.is_callable()
    assert cls.is_class() and not cls.is_callable()
    assert var.symbol_type.arity() is None
    assert cls.symbol_type.body() is None
    assert cls.symbol_type.parameters() is None


def test_set_start_address_on_non_callable_raises():
    var = Symbol.variable("x", DataType.INT, True, None)
    with pytest.raises(CompileError, match="non-callable"):
        var.symbol_type.set_start_address(3)


def test_qualified_name():
    assert _function("f", module="m").qualified_name() == "m::f"
    assert _function("f").qualified_name() == "f"


def test_add_and_lookup_global():
    table = SymbolTable()
    symbol = _function("main")
    table.add_symbol(symbol)
    assert table.lookup("main") is symbol
    assert table.lookup("other") is None


def test_duplicate_symbol_raises():
    table = SymbolTable()
    table.add_symbol(_function("main"))
    with pytest.raises(CompileError, match="Symbol 'main' already defined"):
        table.add_symbol(_function("main"))


def test_module_symbols_are_qualified():
    table = SymbolTable()
    table.enter_module("m")
    table.add_symbol(_function("f", module="m"))
    assert table.lookup("f").name == "f"
    assert "m::f" in table.symbols
    assert "f" in table.modules["m"]
    table.exit_module()
    assert table.current_module is None
    assert table.lookup("f") is None
    assert table.lookup_in_module("m", "f").name == "f"


def test_lookup_in_module_falls_back_to_global():
    table = SymbolTable()
    table.add_symbol(_function("g"))
    table.enter_module("m")
    assert table.lookup("g").name == "g"


def test_enter_module_keeps_existing_symbols():
    table = SymbolTable()
    table.enter_module("m")
    table.add_symbol(_function("f", module="m"))
    table.exit_module()
    table.enter_module("m")
    assert set(table.modules["m"]) == {"f"}


def test_function_address_round_trip():
    table = SymbolTable()
    table.add_symbol(_function("main"))
    assert table.get_function_address("main") is None
    table.set_function_address("main", 2)
    assert table.get_function_address("main") == 2


def test_set_function_address_missing_raises():
    table = SymbolTable()
    with pytest.raises(CompileError, match="Function or constructor 'nope' not found"):
        table.set_function_address("nope", 1)


def test_set_function_address_on_variable_raises():
    table = SymbolTable()
    table.add_symbol(Symbol.variable("x", DataType.INT, True, None))
    with pytest.raises(CompileError):
        table.set_function_address("x", 1)


def test_module_view_is_a_separate_copy():
    table = SymbolTable()
    table.enter_module("m")
    table.add_symbol(_function("f", module="m"))
    table.set_function_address("f", 7)
    assert table.get_function_address("f") == 7
    assert table.modules["m"]["f"].symbol_type.start_address() is None


def test_listings_and_stats():
    table = SymbolTable()
    table.add_symbol(_function("main"))
    table.add_symbol(Symbol.class_("P", [], None, None))
    table.add_symbol(Symbol.constructor("P::constructor", "P", [], _body(), None))
    table.add_symbol(Symbol.variable("g", DataType.INT, True, None))
    table.add_symbol(Symbol("mod", SymbolType(ModuleInfo())))

    assert {s.name for s in table.list_functions()} == {"main", "P::constructor"}
    assert [s.name for s in table.list_constructors()] == ["P::constructor"]
    assert [s.name for s in table.list_classes()] == ["P"]
    assert [s.name for s in table.list_variables()] == ["g"]

    stats = table.stats()
    assert stats.total_symbols == len(table.symbols)
    assert (stats.functions, stats.constructors, stats.classes) == (1, 1, 1)
    assert (stats.variables, stats.modules) == (1, 1)
    assert stats.total_symbols == sum(
        (stats.functions, stats.constructors, stats.classes, stats.variables, stats.modules)
    )