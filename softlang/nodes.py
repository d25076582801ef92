"""Syntax tree of the Soft language."""

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from softlang.datatypes import AssignOpType, BinaryOpType, DataType, UnaryOpType


class NodeType(enum.Enum):
    """The kind of a syntax tree node."""

    PROGRAM = enum.auto()
    BLOCK = enum.auto()
    MODULE_DECL = enum.auto()
    FUNCTION_DEF = enum.auto()
    VAR_DECL = enum.auto()
    STRUCT_DEF = enum.auto()
    CLASS_DEF = enum.auto()
    CONSTRUCTOR = enum.auto()
    BINARY_OP = enum.auto()
    UNARY_OP = enum.auto()
    TERNARY_OP = enum.auto()
    FUNCTION_CALL = enum.auto()
    CAST = enum.auto()
    LITERAL = enum.auto()
    IDENTIFIER = enum.auto()
    ARRAY_LITERAL = enum.auto()
    ARRAY_ACCESS = enum.auto()
    MEMBER_ACCESS = enum.auto()
    ASSIGNMENT = enum.auto()
    IF_STMT = enum.auto()
    WHILE_STMT = enum.auto()
    FOR_STMT = enum.auto()
    DO_WHILE_STMT = enum.auto()
    SWITCH_STMT = enum.auto()
    CASE_STMT = enum.auto()
    BREAK_STMT = enum.auto()
    CONTINUE_STMT = enum.auto()
    RETURN_STMT = enum.auto()
    PRINT_STMT = enum.auto()
    EXPR_STMT = enum.auto()
    STRUCT_LITERAL = enum.auto()
    IMPORT_STMT = enum.auto()
    EXPORT_STMT = enum.auto()


class LiteralKind(enum.Enum):
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    CHAR = "Char"
    BOOL = "Bool"


_LITERAL_TYPES = {
    LiteralKind.INT: DataType.INT,
    LiteralKind.FLOAT: DataType.FLOAT,
    LiteralKind.STRING: DataType.STRING,
    LiteralKind.CHAR: DataType.CHAR,
    LiteralKind.BOOL: DataType.BOOL,
}


@dataclass(frozen=True)
class LiteralValue:
    """A constant value written in source."""

    kind: LiteralKind
    value: Union[int, float, str, bool]

    def __post_init__(self):
        if self.kind is LiteralKind.CHAR and (
            not isinstance(self.value, str) or len(self.value) != 1
        ):
            raise ValueError(f"a char literal holds exactly one character, got {self.value!r}")

    def data_type(self):
        return _LITERAL_TYPES[self.kind]


@dataclass
class Parameter:
    data_type: DataType
    name: str


@dataclass
class FieldValue:
    field_name: str
    value: "Node"


class ImportKind(enum.Enum):
    MODULE = enum.auto()
    WILDCARD = enum.auto()
    SELECTIVE = enum.auto()
    ALIASED = enum.auto()


@dataclass
class ImportType:
    """What an import statement brings in: a module, all of it, some names, or an alias."""

    kind: ImportKind
    module: str
    symbols: list = field(default_factory=list)
    alias: Optional[str] = None


class ExportKind(enum.Enum):
    FUNCTION = enum.auto()
    VARIABLE = enum.auto()
    LIST = enum.auto()
    REEXPORT = enum.auto()


@dataclass
class ExportType:
    """What an export statement publishes."""

    kind: ExportKind
    name: Optional[str] = None
    node: Optional["Node"] = None
    data_type: Optional[DataType] = None
    names: list = field(default_factory=list)


@dataclass
class Program:
    node_type: ClassVar[NodeType] = NodeType.PROGRAM
    statements: list = field(default_factory=list)


@dataclass
class Block:
    node_type: ClassVar[NodeType] = NodeType.BLOCK
    statements: list = field(default_factory=list)


@dataclass
class ModuleDecl:
    node_type: ClassVar[NodeType] = NodeType.MODULE_DECL
    name: str
    body: "Node"


@dataclass
class FunctionDef:
    node_type: ClassVar[NodeType] = NodeType.FUNCTION_DEF
    return_type: DataType
    name: str
    parameters: list
    body: "Node"


@dataclass
class VarDecl:
    node_type: ClassVar[NodeType] = NodeType.VAR_DECL
    data_type: DataType
    name: str
    array_sizes: Optional[list] = None
    init_expr: Optional["Node"] = None


@dataclass
class StructDef:
    node_type: ClassVar[NodeType] = NodeType.STRUCT_DEF
    name: str
    fields: list = field(default_factory=list)


@dataclass
class ClassDef:
    node_type: ClassVar[NodeType] = NodeType.CLASS_DEF
    name: str
    fields: list = field(default_factory=list)
    constructor: Optional["Node"] = None


@dataclass
class Constructor:
    node_type: ClassVar[NodeType] = NodeType.CONSTRUCTOR
    parameters: list
    body: "Node"


@dataclass
class BinaryOp:
    node_type: ClassVar[NodeType] = NodeType.BINARY_OP
    op: BinaryOpType
    left: "Node"
    right: "Node"


@dataclass
class UnaryOp:
    node_type: ClassVar[NodeType] = NodeType.UNARY_OP
    op: UnaryOpType
    operand: "Node"


@dataclass
class TernaryOp:
    node_type: ClassVar[NodeType] = NodeType.TERNARY_OP
    condition: "Node"
    true_expr: "Node"
    false_expr: "Node"


@dataclass
class FunctionCall:
    node_type: ClassVar[NodeType] = NodeType.FUNCTION_CALL
    name: str
    args: list = field(default_factory=list)


@dataclass
class Cast:
    node_type: ClassVar[NodeType] = NodeType.CAST
    target_type: DataType
    expr: "Node"


@dataclass
class Literal:
    node_type: ClassVar[NodeType] = NodeType.LITERAL
    data_type: DataType
    value: LiteralValue


@dataclass
class Identifier:
    node_type: ClassVar[NodeType] = NodeType.IDENTIFIER
    name: str


@dataclass
class ArrayLiteral:
    node_type: ClassVar[NodeType] = NodeType.ARRAY_LITERAL
    elements: list = field(default_factory=list)


@dataclass
class ArrayAccess:
    node_type: ClassVar[NodeType] = NodeType.ARRAY_ACCESS
    array: "Node"
    indices: list = field(default_factory=list)


@dataclass
class MemberAccess:
    node_type: ClassVar[NodeType] = NodeType.MEMBER_ACCESS
    object: "Node"
    member_name: str


@dataclass
class Assignment:
    node_type: ClassVar[NodeType] = NodeType.ASSIGNMENT
    op: AssignOpType
    target: "Node"
    value: "Node"


@dataclass
class IfStmt:
    node_type: ClassVar[NodeType] = NodeType.IF_STMT
    condition: "Node"
    then_stmt: "Node"
    else_stmt: Optional["Node"] = None


@dataclass
class WhileStmt:
    node_type: ClassVar[NodeType] = NodeType.WHILE_STMT
    condition: "Node"
    body: "Node"


@dataclass
class ForStmt:
    node_type: ClassVar[NodeType] = NodeType.FOR_STMT
    init: Optional["Node"]
    condition: Optional["Node"]
    update: Optional["Node"]
    body: "Node"


@dataclass
class DoWhileStmt:
    node_type: ClassVar[NodeType] = NodeType.DO_WHILE_STMT
    body: "Node"
    condition: "Node"


@dataclass
class SwitchStmt:
    node_type: ClassVar[NodeType] = NodeType.SWITCH_STMT
    expr: "Node"
    cases: list = field(default_factory=list)


@dataclass
class CaseStmt:
    """One arm of a switch; a value of None marks the default arm."""

    node_type: ClassVar[NodeType] = NodeType.CASE_STMT
    value: Optional["Node"]
    statements: list = field(default_factory=list)


@dataclass
class BreakStmt:
    node_type: ClassVar[NodeType] = NodeType.BREAK_STMT


@dataclass
class ContinueStmt:
    node_type: ClassVar[NodeType] = NodeType.CONTINUE_STMT


@dataclass
class ReturnStmt:
    node_type: ClassVar[NodeType] = NodeType.RETURN_STMT
    value: Optional["Node"] = None


@dataclass
class PrintStmt:
    node_type: ClassVar[NodeType] = NodeType.PRINT_STMT
    arguments: list = field(default_factory=list)


@dataclass
class ExprStmt:
    node_type: ClassVar[NodeType] = NodeType.EXPR_STMT
    expr: "Node"


@dataclass
class StructLiteral:
    node_type: ClassVar[NodeType] = NodeType.STRUCT_LITERAL
    struct_name: str
    field_values: list = field(default_factory=list)


@dataclass
class ImportStmt:
    node_type: ClassVar[NodeType] = NodeType.IMPORT_STMT
    import_type: ImportType


@dataclass
class ExportStmt:
    node_type: ClassVar[NodeType] = NodeType.EXPORT_STMT
    export_type: ExportType


NodeData = Union[
    Program, Block, ModuleDecl, FunctionDef, VarDecl, StructDef, ClassDef,
    Constructor, BinaryOp, UnaryOp, TernaryOp, FunctionCall, Cast, Literal,
    Identifier, ArrayLiteral, ArrayAccess, MemberAccess, Assignment, IfStmt,
    WhileStmt, ForStmt, DoWhileStmt, SwitchStmt, CaseStmt, BreakStmt,
    ContinueStmt, ReturnStmt, PrintStmt, ExprStmt, StructLiteral, ImportStmt,
    ExportStmt,
]

_STATEMENT_TYPES = frozenset(
    {
        NodeType.VAR_DECL,
        NodeType.ASSIGNMENT,
        NodeType.IF_STMT,
        NodeType.WHILE_STMT,
        NodeType.FOR_STMT,
        NodeType.DO_WHILE_STMT,
        NodeType.SWITCH_STMT,
        NodeType.BREAK_STMT,
        NodeType.CONTINUE_STMT,
        NodeType.RETURN_STMT,
        NodeType.PRINT_STMT,
        NodeType.EXPR_STMT,
        NodeType.BLOCK,
    }
)
_EXPRESSION_TYPES = frozenset(
    {
        NodeType.BINARY_OP,
        NodeType.UNARY_OP,
        NodeType.TERNARY_OP,
        NodeType.FUNCTION_CALL,
        NodeType.CAST,
        NodeType.LITERAL,
        NodeType.IDENTIFIER,
        NodeType.ARRAY_LITERAL,
        NodeType.ARRAY_ACCESS,
        NodeType.MEMBER_ACCESS,
        NodeType.STRUCT_LITERAL,
    }
)
_DECLARATION_TYPES = frozenset(
    {
        NodeType.FUNCTION_DEF,
        NodeType.VAR_DECL,
        NodeType.STRUCT_DEF,
        NodeType.CLASS_DEF,
        NodeType.CONSTRUCTOR,
    }
)


@dataclass
class Node:
    """A syntax tree node: its payload and where it starts in the source."""

    data: NodeData
    line: int = 1
    column: int = 1

    @property
    def node_type(self):
        return self.data.node_type

    def position(self):
        return (self.line, self.column)

    def is_statement(self):
        return self.node_type in _STATEMENT_TYPES

    def is_expression(self):
        return self.node_type in _EXPRESSION_TYPES

    def is_declaration(self):
        return self.node_type in _DECLARATION_TYPES

    @classmethod
    def create_literal(cls, data_type, value, line, column):
        return cls(Literal(data_type, value), line, column)

    @classmethod
    def create_identifier(cls, name, line, column):
        return cls(Identifier(name), line, column)

    @classmethod
    def create_binary_op(cls, op, left, right, line, column):
        return cls(BinaryOp(op, left, right), line, column)

    @classmethod
    def create_unary_op(cls, op, operand, line, column):
        return cls(UnaryOp(op, operand), line, column)

    @classmethod
    def create_program(cls, statements):
        return cls(Program(list(statements)), 1, 1)

    @classmethod
    def create_block(cls, statements, line, column):
        return cls(Block(list(statements)), line, column)

    @classmethod
    def create_function_call(cls, name, args, line, column):
        return cls(FunctionCall(name, list(args)), line, column)

    @classmethod
    def create_int_literal(cls, value, line, column):
        return cls.create_literal(
            DataType.INT, LiteralValue(LiteralKind.INT, value), line, column
        )

    @classmethod
    def create_float_literal(cls, value, line, column):
        return cls.create_literal(
            DataType.FLOAT, LiteralValue(LiteralKind.FLOAT, value), line, column
        )

    @classmethod
    def create_string_literal(cls, value, line, column):
        return cls.create_literal(
            DataType.STRING, LiteralValue(LiteralKind.STRING, value), line, column
        )

    @classmethod
    def create_char_literal(cls, value, line, column):
        return cls.create_literal(
            DataType.CHAR, LiteralValue(LiteralKind.CHAR, value), line, column
        )

    @classmethod
    def create_bool_literal(cls, value, line, column):
        return cls.create_literal(
            DataType.BOOL, LiteralValue(LiteralKind.BOOL, value), line, column
        )