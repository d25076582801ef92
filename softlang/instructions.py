"""Bytecode instructions and constant-pool entries."""

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


class Opcode(enum.Enum):
    """Every operation the virtual machine understands."""

    LOAD_INT = "LoadInt"
    LOAD_FLOAT = "LoadFloat"
    LOAD_STRING = "LoadString"
    LOAD_CHAR = "LoadChar"
    LOAD_BOOL = "LoadBool"
    LOAD_NULL = "LoadNull"

    LOAD_LOCAL = "LoadLocal"
    STORE_LOCAL = "StoreLocal"
    LOAD_GLOBAL = "LoadGlobal"
    STORE_GLOBAL = "StoreGlobal"

    NEW_ARRAY = "NewArray"
    ARRAY_LOAD = "ArrayLoad"
    ARRAY_STORE = "ArrayStore"
    ARRAY_LENGTH = "ArrayLength"

    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    MOD = "Mod"
    NEG = "Neg"

    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    LESS = "Less"
    GREATER = "Greater"
    LESS_EQUAL = "LessEqual"
    GREATER_EQUAL = "GreaterEqual"

    LOGICAL_AND = "LogicalAnd"
    LOGICAL_OR = "LogicalOr"
    LOGICAL_NOT = "LogicalNot"

    ADD_ASSIGN = "AddAssign"
    SUB_ASSIGN = "SubAssign"
    MUL_ASSIGN = "MulAssign"
    DIV_ASSIGN = "DivAssign"

    PRE_INCREMENT = "PreIncrement"
    POST_INCREMENT = "PostIncrement"
    PRE_DECREMENT = "PreDecrement"
    POST_DECREMENT = "PostDecrement"

    CAST_TO_INT = "CastToInt"
    CAST_TO_FLOAT = "CastToFloat"
    CAST_TO_DOUBLE = "CastToDouble"
    CAST_TO_STRING = "CastToString"
    CAST_TO_BOOL = "CastToBool"

    JUMP = "Jump"
    JUMP_IF_TRUE = "JumpIfTrue"
    JUMP_IF_FALSE = "JumpIfFalse"

    CALL = "Call"
    RETURN = "Return"
    RETURN_VALUE = "ReturnValue"
    RETURN_MAIN = "ReturnMain"
    CALL_FUNCTION = "CallFunction"
    CALL_MAIN = "CallMain"

    IMPORT_MODULE = "ImportModule"
    IMPORT_SYMBOL = "ImportSymbol"
    IMPORT_WILDCARD = "ImportWildcard"
    EXPORT_SYMBOL = "ExportSymbol"
    LOAD_MODULE_SYMBOL = "LoadModuleSymbol"

    NEW_STRUCT = "NewStruct"
    NEW_OBJECT = "NewObject"
    GET_FIELD = "GetField"
    SET_FIELD = "SetField"
    GET_OBJECT_FIELD = "GetObjectField"
    SET_OBJECT_FIELD = "SetObjectField"
    CALL_CONSTRUCTOR = "CallConstructor"

    LOAD_THIS = "LoadThis"
    PUSH_THIS_CONTEXT = "PushThisContext"
    POP_THIS_CONTEXT = "PopThisContext"

    POP = "Pop"
    DUP = "Dup"
    SWAP = "Swap"

    TERNARY_SELECT = "TernarySelect"
    SWITCH_TABLE = "SwitchTable"

    PRINT = "Print"
    DEBUG = "Debug"
    HALT = "Halt"


# Operand kinds: i = signed int, u = unsigned int, f = float, s = string,
# c = single character, b = bool, t = table of (value, address) pairs.
_OPERANDS = {
    Opcode.LOAD_INT: "i",
    Opcode.LOAD_FLOAT: "f",
    Opcode.LOAD_STRING: "s",
    Opcode.LOAD_CHAR: "c",
    Opcode.LOAD_BOOL: "b",
    Opcode.LOAD_LOCAL: "u",
    Opcode.STORE_LOCAL: "u",
    Opcode.LOAD_GLOBAL: "s",
    Opcode.STORE_GLOBAL: "s",
    Opcode.NEW_ARRAY: "u",
    Opcode.JUMP: "u",
    Opcode.JUMP_IF_TRUE: "u",
    Opcode.JUMP_IF_FALSE: "u",
    Opcode.CALL: "su",
    Opcode.CALL_FUNCTION: "su",
    Opcode.IMPORT_MODULE: "s",
    Opcode.IMPORT_SYMBOL: "ss",
    Opcode.IMPORT_WILDCARD: "s",
    Opcode.EXPORT_SYMBOL: "s",
    Opcode.LOAD_MODULE_SYMBOL: "ss",
    Opcode.NEW_STRUCT: "s",
    Opcode.NEW_OBJECT: "s",
    Opcode.GET_FIELD: "s",
    Opcode.SET_FIELD: "s",
    Opcode.GET_OBJECT_FIELD: "s",
    Opcode.SET_OBJECT_FIELD: "s",
    Opcode.CALL_CONSTRUCTOR: "su",
    Opcode.SWITCH_TABLE: "tu",
    Opcode.DEBUG: "s",
}

_LOADS = frozenset(
    {
        Opcode.LOAD_INT,
        Opcode.LOAD_FLOAT,
        Opcode.LOAD_STRING,
        Opcode.LOAD_CHAR,
        Opcode.LOAD_BOOL,
        Opcode.LOAD_NULL,
        Opcode.LOAD_LOCAL,
        Opcode.LOAD_GLOBAL,
    }
)
_STORES = frozenset({Opcode.STORE_LOCAL, Opcode.STORE_GLOBAL})
_ARITHMETIC = frozenset(
    {Opcode.ADD, Opcode.SUB, Opcode.MUL, Opcode.DIV, Opcode.MOD, Opcode.NEG}
)
_COMPARISONS = frozenset(
    {
        Opcode.EQUAL,
        Opcode.NOT_EQUAL,
        Opcode.LESS,
        Opcode.GREATER,
        Opcode.LESS_EQUAL,
        Opcode.GREATER_EQUAL,
    }
)
_LOGICAL = frozenset({Opcode.LOGICAL_AND, Opcode.LOGICAL_OR, Opcode.LOGICAL_NOT})
_JUMPS = frozenset({Opcode.JUMP, Opcode.JUMP_IF_TRUE, Opcode.JUMP_IF_FALSE})
_CALLS = frozenset(
    {Opcode.CALL, Opcode.CALL_FUNCTION, Opcode.CALL_CONSTRUCTOR, Opcode.CALL_MAIN}
)
_ARITY_CALLS = frozenset({Opcode.CALL, Opcode.CALL_FUNCTION, Opcode.CALL_CONSTRUCTOR})
_RETURNS = frozenset({Opcode.RETURN, Opcode.RETURN_VALUE, Opcode.RETURN_MAIN})
_STACK_OPS = frozenset({Opcode.POP, Opcode.DUP, Opcode.SWAP})
_MODULE_OPS = frozenset(
    {
        Opcode.IMPORT_MODULE,
        Opcode.IMPORT_SYMBOL,
        Opcode.IMPORT_WILDCARD,
        Opcode.EXPORT_SYMBOL,
        Opcode.LOAD_MODULE_SYMBOL,
    }
)
_OBJECT_OPS = frozenset(
    {
        Opcode.NEW_STRUCT,
        Opcode.NEW_OBJECT,
        Opcode.GET_FIELD,
        Opcode.SET_FIELD,
        Opcode.GET_OBJECT_FIELD,
        Opcode.SET_OBJECT_FIELD,
        Opcode.LOAD_THIS,
        Opcode.PUSH_THIS_CONTEXT,
        Opcode.POP_THIS_CONTEXT,
    }
)

_DESCRIPTIONS = {
    Opcode.LOAD_INT: "Load integer constant",
    Opcode.LOAD_FLOAT: "Load float constant",
    Opcode.LOAD_STRING: "Load string constant",
    Opcode.LOAD_CHAR: "Load character constant",
    Opcode.LOAD_BOOL: "Load boolean constant",
    Opcode.LOAD_NULL: "Load null value",
    Opcode.LOAD_LOCAL: "Load local variable",
    Opcode.STORE_LOCAL: "Store to local variable",
    Opcode.LOAD_GLOBAL: "Load global variable",
    Opcode.STORE_GLOBAL: "Store to global variable",
    Opcode.ADD: "Add two values",
    Opcode.SUB: "Subtract two values",
    Opcode.MUL: "Multiply two values",
    Opcode.DIV: "Divide two values",
    Opcode.MOD: "Modulo operation",
    Opcode.NEG: "Negate value",
    Opcode.EQUAL: "Test equality",
    Opcode.NOT_EQUAL: "Test inequality",
    Opcode.LESS: "Test less than",
    Opcode.GREATER: "Test greater than",
    Opcode.LESS_EQUAL: "Test less than or equal",
    Opcode.GREATER_EQUAL: "Test greater than or equal",
    Opcode.LOGICAL_AND: "Logical AND",
    Opcode.LOGICAL_OR: "Logical OR",
    Opcode.LOGICAL_NOT: "Logical NOT",
    Opcode.JUMP: "Unconditional jump",
    Opcode.JUMP_IF_TRUE: "Jump if true",
    Opcode.JUMP_IF_FALSE: "Jump if false",
    Opcode.CALL: "Call function",
    Opcode.CALL_FUNCTION: "Call user-defined function",
    Opcode.CALL_MAIN: "Call main entry point",
    Opcode.RETURN: "Return from function",
    Opcode.RETURN_VALUE: "Return value from function",
    Opcode.RETURN_MAIN: "Return from main entry point",
    Opcode.PRINT: "Print value",
    Opcode.POP: "Pop from stack",
    Opcode.DUP: "Duplicate top of stack",
    Opcode.SWAP: "Swap two top stack values",
    Opcode.HALT: "Halt execution",
}

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}

_BOOL_TEXT = {True: "true", False: "false"}


def _escape(text, quote):
    return "".join(
        _ESCAPES.get(ch, "\\" + ch if ch == quote else ch) for ch in text
    )


def _debug_string(text):
    return f'"{_escape(text, chr(34))}"'


def _debug_char(char):
    return f"'{_escape(char, chr(39))}'"


def _debug_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        return f"{mantissa}e{int(exponent)}"
    return text


def _display_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _check_operand(kind, value, opcode):
    name = opcode.value
    if kind in "iu":
        if not _is_int(value):
            raise TypeError(f"{name} expects an integer operand, got {value!r}")
        if kind == "u" and value < 0:
            raise ValueError(f"{name} expects a non-negative operand, got {value}")
        return value
    if kind == "f":
        if not (_is_int(value) or isinstance(value, float)):
            raise TypeError(f"{name} expects a float operand, got {value!r}")
        return float(value)
    if kind in "sc":
        if not isinstance(value, str):
            raise TypeError(f"{name} expects a string operand, got {value!r}")
        if kind == "c" and len(value) != 1:
            raise ValueError(f"{name} expects a single character, got {value!r}")
        return value
    if kind == "b":
        if not isinstance(value, bool):
            raise TypeError(f"{name} expects a bool operand, got {value!r}")
        return value
    table = tuple(tuple(entry) for entry in value)
    for entry in table:
        if len(entry) != 2 or not all(_is_int(item) for item in entry):
            raise TypeError(f"{name} expects (value, address) pairs, got {entry!r}")
    return table


def _format_operand(kind, value):
    if kind in "iu":
        return str(value)
    if kind == "f":
        return _debug_float(value)
    if kind == "s":
        return _debug_string(value)
    if kind == "c":
        return _debug_char(value)
    if kind == "b":
        return _BOOL_TEXT[value]
    pairs = ", ".join(f"({case}, {target})" for case, target in value)
    return f"[{pairs}]"


@dataclass(frozen=True, repr=False)
class Instruction:
    """One bytecode instruction: an opcode and the operands that opcode takes."""

    opcode: Opcode
    operands: tuple = ()

    def __post_init__(self):
        kinds = _OPERANDS.get(self.opcode, "")
        operands = tuple(self.operands)
        if len(operands) != len(kinds):
            raise ValueError(
                f"{self.opcode.value} takes {len(kinds)} operand(s), got {len(operands)}"
            )
        checked = tuple(
            _check_operand(kind, value, self.opcode)
            for kind, value in zip(kinds, operands)
        )
        object.__setattr__(self, "operands", checked)

    def __str__(self):
        if not self.operands:
            return self.opcode.value
        kinds = _OPERANDS[self.opcode]
        parts = ", ".join(
            _format_operand(kind, value) for kind, value in zip(kinds, self.operands)
        )
        return f"{self.opcode.value}({parts})"

    __repr__ = __str__

    def is_load(self):
        return self.opcode in _LOADS

    def is_store(self):
        return self.opcode in _STORES

    def is_arithmetic(self):
        return self.opcode in _ARITHMETIC

    def is_comparison(self):
        return self.opcode in _COMPARISONS

    def is_logical(self):
        return self.opcode in _LOGICAL

    def is_jump(self):
        return self.opcode in _JUMPS

    def is_call(self):
        return self.opcode in _CALLS

    def is_return(self):
        return self.opcode in _RETURNS

    def is_stack_op(self):
        return self.opcode in _STACK_OPS

    def is_module_op(self):
        return self.opcode in _MODULE_OPS

    def is_object_op(self):
        return self.opcode in _OBJECT_OPS

    def call_arity(self):
        """Argument count of a call that carries one, else None."""
        if self.opcode in _ARITY_CALLS:
            return self.operands[1]
        return None

    def jump_target(self):
        """Destination address of a jump, else None."""
        if self.opcode in _JUMPS:
            return self.operands[0]
        return None

    def description(self):
        return _DESCRIPTIONS.get(self.opcode, "Other instruction")


class ConstantKind(enum.Enum):
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    CHAR = "char"
    BOOL = "bool"


_CONSTANT_DEBUG_NAMES = {
    ConstantKind.INT: "Int",
    ConstantKind.FLOAT: "Float",
    ConstantKind.STRING: "String",
    ConstantKind.CHAR: "Char",
    ConstantKind.BOOL: "Bool",
}


@dataclass(frozen=True, repr=False)
class Constant:
    """An entry of the constant pool."""

    kind: ConstantKind
    value: Union[int, float, str, bool]

    def __post_init__(self):
        value = self.value
        if self.kind is ConstantKind.INT:
            if not _is_int(value):
                raise TypeError(f"an int constant needs an integer, got {value!r}")
        elif self.kind is ConstantKind.FLOAT:
            if not (_is_int(value) or isinstance(value, float)):
                raise TypeError(f"a float constant needs a number, got {value!r}")
            object.__setattr__(self, "value", float(value))
        elif self.kind is ConstantKind.BOOL:
            if not isinstance(value, bool):
                raise TypeError(f"a bool constant needs a bool, got {value!r}")
        else:
            if not isinstance(value, str):
                raise TypeError(f"a {self.kind.value} constant needs a string, got {value!r}")
            if self.kind is ConstantKind.CHAR and len(value) != 1:
                raise ValueError(f"a char constant holds exactly one character, got {value!r}")

    def type_name(self):
        return self.kind.value

    def is_numeric(self):
        return self.kind in (ConstantKind.INT, ConstantKind.FLOAT)

    def is_integer(self):
        return self.kind is ConstantKind.INT

    def is_float(self):
        return self.kind is ConstantKind.FLOAT

    def is_string(self):
        return self.kind is ConstantKind.STRING

    def is_char(self):
        return self.kind is ConstantKind.CHAR

    def is_bool(self):
        return self.kind is ConstantKind.BOOL

    def size_bytes(self):
        """Storage size; strings count their UTF-8 bytes plus an 8-byte header."""
        if self.kind is ConstantKind.STRING:
            return len(self.value.encode("utf-8")) + 8
        return {
            ConstantKind.INT: 8,
            ConstantKind.FLOAT: 8,
            ConstantKind.CHAR: 4,
            ConstantKind.BOOL: 1,
        }[self.kind]

    def __str__(self):
        if self.kind is ConstantKind.INT:
            return str(self.value)
        if self.kind is ConstantKind.FLOAT:
            return _display_float(self.value)
        if self.kind is ConstantKind.STRING:
            return f'"{self.value}"'
        if self.kind is ConstantKind.CHAR:
            return f"'{self.value}'"
        return _BOOL_TEXT[self.value]

    def __repr__(self):
        name = _CONSTANT_DEBUG_NAMES[self.kind]
        if self.kind is ConstantKind.FLOAT:
            inner = _debug_float(self.value)
        elif self.kind is ConstantKind.STRING:
            inner = _debug_string(self.value)
        elif self.kind is ConstantKind.CHAR:
            inner = _debug_char(self.value)
        elif self.kind is ConstantKind.BOOL:
            inner = _BOOL_TEXT[self.value]
        else:
            inner = str(self.value)
        return f"{name}({inner})"