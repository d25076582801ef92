"""Compiled bytecode programs and their metadata."""

import enum
from dataclasses import dataclass, field

from softlang.instructions import Constant, Instruction


@dataclass
class Function:
    """A compiled function and the address range of its code."""

    name: str
    arity: int
    locals_count: int
    start_address: int
    end_address: int

    def instruction_count(self):
        if self.end_address < self.start_address:
            raise ValueError(
                f"function {self.name} ends ({self.end_address}) before it starts "
                f"({self.start_address})"
            )
        return self.end_address - self.start_address

    def is_nullary(self):
        return self.arity == 0

    def is_unary(self):
        return self.arity == 1

    def is_binary(self):
        return self.arity == 2

    def is_variadic(self):
        return False

    def signature(self):
        return f"{self.name}({self.arity})"


@dataclass
class LocalVariable:
    """A local variable bound to a frame slot."""

    name: str
    data_type: object
    slot: int

    def is_primitive(self):
        return self.data_type.is_primitive()

    def is_reference(self):
        return self.data_type.is_reference()

    def type_name(self):
        return str(self.data_type)


@dataclass
class DebugInfo:
    """Where in the source an instruction came from."""

    line: int
    column: int
    source_file: str

    @classmethod
    def from_position(cls, position, source_file):
        line, column = position
        return cls(line, column, source_file)

    def position(self):
        return (self.line, self.column)

    def location_string(self):
        return f"{self.source_file}:{self.line}:{self.column}"

    def same_location(self, other):
        return (
            self.line == other.line
            and self.column == other.column
            and self.source_file == other.source_file
        )


class InstructionCategory(enum.Enum):
    LOAD = "Load"
    STORE = "Store"
    ARITHMETIC = "Arithmetic"
    COMPARISON = "Comparison"
    LOGICAL = "Logical"
    CONTROL_FLOW = "ControlFlow"
    FUNCTION_CALL = "FunctionCall"
    FUNCTION_RETURN = "FunctionReturn"
    STACK_OP = "StackOp"
    MODULE = "Module"
    OBJECT = "Object"
    OTHER = "Other"


_CATEGORY_TESTS = (
    (Instruction.is_load, InstructionCategory.LOAD),
    (Instruction.is_store, InstructionCategory.STORE),
    (Instruction.is_arithmetic, InstructionCategory.ARITHMETIC),
    (Instruction.is_comparison, InstructionCategory.COMPARISON),
    (Instruction.is_logical, InstructionCategory.LOGICAL),
    (Instruction.is_jump, InstructionCategory.CONTROL_FLOW),
    (Instruction.is_call, InstructionCategory.FUNCTION_CALL),
    (Instruction.is_return, InstructionCategory.FUNCTION_RETURN),
    (Instruction.is_stack_op, InstructionCategory.STACK_OP),
    (Instruction.is_module_op, InstructionCategory.MODULE),
    (Instruction.is_object_op, InstructionCategory.OBJECT),
)


def _categorize(instruction):
    return next(
        (category for test, category in _CATEGORY_TESTS if test(instruction)),
        InstructionCategory.OTHER,
    )


@dataclass
class ProgramStats:
    total_instructions: int
    total_constants: int
    total_functions: int
    total_globals: int
    instruction_counts: dict


def _lookup(items, index):
    return items[index] if 0 <= index < len(items) else None


@dataclass
class BytecodeProgram:
    """Instructions, constant pool, function table and global names of one program."""

    instructions: list = field(default_factory=list)
    constants: list = field(default_factory=list)
    functions: list = field(default_factory=list)
    globals: list = field(default_factory=list)

    def add_instruction(self, instruction: Instruction):
        self.instructions.append(instruction)

    def add_constant(self, constant: Constant):
        """Append to the constant pool and return the new entry's index."""
        self.constants.append(constant)
        return len(self.constants) - 1

    def add_function(self, function: Function):
        self.functions.append(function)

    def add_global(self, name):
        self.globals.append(name)

    def current_address(self):
        """Address the next added instruction will get."""
        return len(self.instructions)

    def instruction_count(self):
        return len(self.instructions)

    def constant_count(self):
        return len(self.constants)

    def function_count(self):
        return len(self.functions)

    def global_count(self):
        return len(self.globals)

    def get_instruction(self, address):
        return _lookup(self.instructions, address)

    def get_constant(self, index):
        return _lookup(self.constants, index)

    def get_function(self, name):
        return next((f for f in self.functions if f.name == name), None)

    def get_global(self, index):
        return _lookup(self.globals, index)

    def stats(self):
        counts = {}
        for instruction in self.instructions:
            category = _categorize(instruction)
            counts[category] = counts.get(category, 0) + 1
        return ProgramStats(
            total_instructions=self.instruction_count(),
            total_constants=self.constant_count(),
            total_functions=self.function_count(),
            total_globals=self.global_count(),
            instruction_counts=counts,
        )

    def disassemble(self):
        lines = ["=== Bytecode Disassembly ==="]
        lines.extend(f"{i:04} | {ins}" for i, ins in enumerate(self.instructions))

        if self.constants:
            lines.append("")
            lines.append("=== Constants ===")
            lines.extend(f"{i:04} | {c!r}" for i, c in enumerate(self.constants))

        if self.functions:
            lines.append("")
            lines.append("=== Functions ===")
            lines.extend(
                f"{f.name} ({f.arity} params, {f.locals_count} locals) "
                f"[{f.start_address}-{f.end_address}]"
                for f in self.functions
            )

        if self.globals:
            lines.append("")
            lines.append("=== Globals ===")
            lines.extend(f"{i:04} | {g}" for i, g in enumerate(self.globals))

        return "\n".join(lines) + "\n"

    def analyze(self):
        stats = self.stats()
        lines = [
            "=== Bytecode Analysis ===",
            f"Total Instructions: {stats.total_instructions}",
            f"Total Constants: {stats.total_constants}",
            f"Total Functions: {stats.total_functions}",
            f"Total Globals: {stats.total_globals}",
            "",
            "=== Instruction Distribution ===",
        ]
        for category, count in stats.instruction_counts.items():
            percentage = count / stats.total_instructions * 100.0
            lines.append(f"{category.value}: {count} ({percentage:.1f}%)")
        return "\n".join(lines) + "\n"