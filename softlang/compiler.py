"""The compiler driver: collect symbols, then generate code for every callable."""

from dataclasses import dataclass

from softlang import debug_printer
from softlang.code_generator import CodeGenerator
from softlang.instructions import Instruction, Opcode
from softlang.program import BytecodeProgram
from softlang.scope import ScopeManager
from softlang.symbol_collector import SymbolCollector
from softlang.symbol_table import ConstructorInfo, FunctionInfo, SymbolTable

_TERMINATING_OPCODES = frozenset({Opcode.RETURN_VALUE, Opcode.RETURN_MAIN})
_DEFAULT_RETURN_VALUE = 42


@dataclass
class _Callable:
    name: str
    parameters: list
    body: object
    is_constructor: bool


class MultiPassCompiler:
    """Compiles a syntax tree in two passes into a bytecode program."""

    def __init__(self):
        self._symbol_table = SymbolTable()
        self._scope_manager = ScopeManager()

    def compile(self, ast):
        """Return the program and a map of callable names to start addresses.

        Raises CompileError when the program cannot be compiled.
        """
        self._collect_symbols(ast)
        return self._generate_code()

    def _collect_symbols(self, ast):
        debug_printer.print_compilation_progress(1, "Collecting symbols")
        self._symbol_table = SymbolCollector().collect_symbols(ast)
        debug_printer.print_symbols(self._symbol_table)

    def _generate_code(self):
        debug_printer.print_compilation_progress(2, "Generating code")

        program = BytecodeProgram()
        program.add_instruction(Instruction(Opcode.CALL_MAIN))
        program.add_instruction(Instruction(Opcode.HALT))

        for item in self._callables():
            self._compile_callable(item, program)

        return program, self._function_addresses()

    def _callables(self):
        result = []
        for symbol in self._symbol_table.list_functions():
            info = symbol.symbol_type.info
            result.append(
                _Callable(
                    name=symbol.name,
                    parameters=list(info.parameters),
                    body=info.body,
                    is_constructor=isinstance(info, ConstructorInfo),
                )
            )
        return result

    def _compile_callable(self, item, program):
        start_address = program.current_address()
        self._symbol_table.set_function_address(item.name, start_address)

        debug_printer.print_function_compilation(
            item.name, item.is_constructor, start_address
        )

        self._scope_manager.clear()
        if item.is_constructor:
            self._scope_manager.setup_constructor(item.parameters)
        else:
            self._scope_manager.setup_parameters(item.parameters)

        generator = CodeGenerator(self._scope_manager, self._symbol_table)
        generator.set_current_function(item.name)
        generator.compile_node(item.body, program)

        self._add_default_return(program, item)

    @staticmethod
    def _add_default_return(program, item):
        last = program.instructions[-1] if program.instructions else None
        if last is not None and last.opcode in _TERMINATING_OPCODES:
            return

        if item.is_constructor:
            program.add_instruction(Instruction(Opcode.LOAD_LOCAL, (0,)))
            program.add_instruction(Instruction(Opcode.RETURN_VALUE))
            return

        program.add_instruction(Instruction(Opcode.LOAD_INT, (_DEFAULT_RETURN_VALUE,)))
        if item.name == "main":
            program.add_instruction(Instruction(Opcode.RETURN_MAIN))
        else:
            program.add_instruction(Instruction(Opcode.RETURN_VALUE))

    def _function_addresses(self):
        addresses = {}
        for name, symbol in self._symbol_table.symbols.items():
            info = symbol.symbol_type.info
            if not isinstance(info, (FunctionInfo, ConstructorInfo)):
                continue
            if info.start_address is None:
                continue
            if isinstance(info, FunctionInfo):
                addresses[name.split("::")[-1]] = info.start_address
            else:
                addresses[name] = info.start_address
        return addresses