"""Symbols gathered from a program and the table that holds them."""

import copy
from dataclasses import dataclass, field
from typing import Optional, Union

from softlang.datatypes import DataType


class CompileError(Exception):
    """Raised when a program cannot be compiled."""


@dataclass
class FunctionInfo:
    return_type: DataType
    parameters: list
    body: object
    start_address: Optional[int] = None


@dataclass
class ConstructorInfo:
    class_name: str
    parameters: list
    body: object
    start_address: Optional[int] = None


@dataclass
class ClassInfo:
    fields: list = field(default_factory=list)
    constructor: Optional[object] = None
    methods: dict = field(default_factory=dict)


@dataclass
class VariableInfo:
    data_type: DataType
    is_global: bool
    address: Optional[int] = None


@dataclass
class ModuleInfo:
    symbols: dict = field(default_factory=dict)


_CALLABLE = (FunctionInfo, ConstructorInfo)


@dataclass
class SymbolType:
    """What a symbol names, with the details for that kind of symbol."""

    info: Union[FunctionInfo, ConstructorInfo, ClassInfo, VariableInfo, ModuleInfo]

    def is_callable(self):
        return isinstance(self.info, _CALLABLE)

    def has_body(self):
        return isinstance(self.info, _CALLABLE)

    def arity(self):
        """Number of parameters of a callable, else None."""
        return len(self.info.parameters) if self.is_callable() else None

    def start_address(self):
        return self.info.start_address if self.is_callable() else None

    def set_start_address(self, address):
        if not self.is_callable():
            raise CompileError("Cannot set start address for non-callable symbol")
        self.info.start_address = address

    def body(self):
        return self.info.body if self.is_callable() else None

    def parameters(self):
        return self.info.parameters if self.is_callable() else None


@dataclass
class Symbol:
    """A named entity of the program."""

    name: str
    symbol_type: SymbolType
    module_name: Optional[str] = None
    is_public: bool = True

    @classmethod
    def function(cls, name, return_type, parameters, body, module_name):
        info = FunctionInfo(return_type, list(parameters), body)
        return cls(name, SymbolType(info), module_name, True)

    @classmethod
    def constructor(cls, name, class_name, parameters, body, module_name):
        info = ConstructorInfo(class_name, list(parameters), body)
        return cls(name, SymbolType(info), module_name, True)

    @classmethod
    def class_(cls, name, fields, constructor, module_name):
        info = ClassInfo(list(fields), constructor)
        return cls(name, SymbolType(info), module_name, True)

    @classmethod
    def variable(cls, name, data_type, is_global, module_name):
        info = VariableInfo(data_type, is_global)
        return cls(name, SymbolType(info), module_name, True)

    def qualified_name(self):
        if self.module_name is not None:
            return f"{self.module_name}::{self.name}"
        return self.name

    def is_callable(self):
        return self.symbol_type.is_callable()

    def is_function(self):
        return isinstance(self.symbol_type.info, FunctionInfo)

    def is_constructor(self):
        return isinstance(self.symbol_type.info, ConstructorInfo)

    def is_class(self):
        return isinstance(self.symbol_type.info, ClassInfo)

    def is_variable(self):
        return isinstance(self.symbol_type.info, VariableInfo)


@dataclass
class SymbolTableStats:
    total_symbols: int = 0
    functions: int = 0
    constructors: int = 0
    classes: int = 0
    variables: int = 0
    modules: int = 0


_STAT_FIELDS = {
    FunctionInfo: "functions",
    ConstructorInfo: "constructors",
    ClassInfo: "classes",
    VariableInfo: "variables",
    ModuleInfo: "modules",
}


@dataclass
class SymbolTable:
    """All symbols of a program, keyed by qualified name, with per-module views."""

    symbols: dict = field(default_factory=dict)
    modules: dict = field(default_factory=dict)
    current_module: Optional[str] = None

    def enter_module(self, module_name):
        self.current_module = module_name
        self.modules.setdefault(module_name, {})

    def exit_module(self):
        self.current_module = None

    def _qualified(self, name):
        if self.current_module is not None:
            return f"{self.current_module}::{name}"
        return name

    def add_symbol(self, symbol):
        """Add a symbol under the current module; a duplicate raises CompileError."""
        qualified = self._qualified(symbol.name)
        if qualified in self.symbols:
            raise CompileError(f"Symbol '{qualified}' already defined")

        if self.current_module is not None:
            module_symbols = self.modules[self.current_module]
            if symbol.name in module_symbols:
                raise CompileError(
                    f"Symbol '{symbol.name}' already defined in module "
                    f"'{self.current_module}'"
                )
            module_symbols[symbol.name] = copy.deepcopy(symbol)

        self.symbols[qualified] = symbol

    def lookup(self, name):
        """Find a symbol in the current module first, then by its plain name."""
        if self.current_module is not None:
            found = self.symbols.get(f"{self.current_module}::{name}")
            if found is not None:
                return found
        return self.symbols.get(name)

    def lookup_in_module(self, module_name, symbol_name):
        return self.symbols.get(f"{module_name}::{symbol_name}")

    def get_function_address(self, name):
        symbol = self.lookup(name)
        return symbol.symbol_type.start_address() if symbol is not None else None

    def set_function_address(self, name, address):
        symbol = self.symbols.get(self._qualified(name))
        if symbol is None:
            raise CompileError(f"Function or constructor '{name}' not found")
        symbol.symbol_type.set_start_address(address)

    def list_functions(self):
        """Every callable symbol: functions and constructors."""
        return [s for s in self.symbols.values() if s.is_callable()]

    def list_constructors(self):
        return [s for s in self.symbols.values() if s.is_constructor()]

    def list_classes(self):
        return [s for s in self.symbols.values() if s.is_class()]

    def list_variables(self):
        return [s for s in self.symbols.values() if s.is_variable()]

    def stats(self):
        stats = SymbolTableStats()
        for symbol in self.symbols.values():
            name = _STAT_FIELDS[type(symbol.symbol_type.info)]
            setattr(stats, name, getattr(stats, name) + 1)
        stats.total_symbols = len(self.symbols)
        return stats