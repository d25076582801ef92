"""Console reports of the compiler's symbol table and progress."""

from softlang.symbol_table import (
    ClassInfo,
    ConstructorInfo,
    FunctionInfo,
    ModuleInfo,
    VariableInfo,
)


def _address_suffix(symbol_table, name):
    address = symbol_table.get_function_address(name)
    return f" @ 0x{address:04X}" if address is not None else ""


def _bool_text(value):
    return "true" if value else "false"


def print_symbols(symbol_table):
    """Print every symbol, then the callables."""
    print("=== Symbol Table ===")
    for name, symbol in symbol_table.symbols.items():
        info = symbol.symbol_type.info
        if isinstance(info, FunctionInfo):
            print(
                f"FUNCTION {name}: {len(info.parameters)} -> {info.return_type}"
                f"{_address_suffix(symbol_table, name)}"
            )
        elif isinstance(info, ConstructorInfo):
            print(
                f"CONSTRUCTOR {name} for class {info.class_name}: "
                f"{len(info.parameters)} params{_address_suffix(symbol_table, name)}"
            )
        elif isinstance(info, ClassInfo):
            print(f"CLASS {name}: {len(info.fields)} fields")
        elif isinstance(info, VariableInfo):
            print(f"VARIABLE {name}: {info.data_type} (global: {_bool_text(info.is_global)})")
        elif isinstance(info, ModuleInfo):
            print(f"MODULE {name}")
    print("==================")
    _print_function_addresses(symbol_table)


def _print_function_addresses(symbol_table):
    print("=== Function Addresses ===")
    for func in symbol_table.list_functions():
        info = func.symbol_type.info
        if isinstance(info, FunctionInfo):
            print(f"Function: {func.name}")
        elif isinstance(info, ConstructorInfo):
            print(f"Constructor: {func.name} (for class {info.class_name})")
    print("========================")


def print_stats(symbol_table):
    stats = symbol_table.stats()
    print("=== Symbol Table Statistics ===")
    print(f"Total symbols: {stats.total_symbols}")
    print(f"Functions: {stats.functions}")
    print(f"Constructors: {stats.constructors}")
    print(f"Classes: {stats.classes}")
    print(f"Variables: {stats.variables}")
    print(f"Modules: {stats.modules}")
    print("==============================")


def print_compilation_progress(pass_number, description):
    print(f"Pass {pass_number}: {description}...")


def print_function_compilation(name, is_constructor, address):
    callable_type = "constructor" if is_constructor else "function"
    print(f"Compiling {callable_type} '{name}' at address 0x{address:04X}")