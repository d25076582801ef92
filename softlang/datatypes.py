"""Value types and operator kinds of the Soft language."""

import enum
from dataclasses import dataclass
from typing import ClassVar, Optional


class TypeKind(enum.Enum):
    """The family a data type belongs to."""

    INT = "Int"
    FLOAT = "Float"
    DOUBLE = "Double"
    CHAR = "Char"
    STRING = "String"
    BOOL = "Bool"
    VOID = "Void"
    ARRAY = "Array"
    STRUCT = "Struct"
    CLASS = "Class"


_PRIMITIVE_KINDS = frozenset(
    {
        TypeKind.INT,
        TypeKind.FLOAT,
        TypeKind.DOUBLE,
        TypeKind.CHAR,
        TypeKind.STRING,
        TypeKind.BOOL,
    }
)
_NUMERIC_KINDS = frozenset({TypeKind.INT, TypeKind.FLOAT, TypeKind.DOUBLE})
_REFERENCE_KINDS = frozenset({TypeKind.ARRAY, TypeKind.STRUCT, TypeKind.CLASS})
_SIZES = {
    TypeKind.INT: 8,
    TypeKind.FLOAT: 4,
    TypeKind.DOUBLE: 8,
    TypeKind.CHAR: 1,
    TypeKind.BOOL: 1,
}


@dataclass(frozen=True)
class DataType:
    """A type in the language; arrays carry an element type, structs and classes a name."""

    kind: TypeKind
    element: Optional["DataType"] = None
    dimensions: tuple = ()
    name: Optional[str] = None

    INT: ClassVar["DataType"]
    FLOAT: ClassVar["DataType"]
    DOUBLE: ClassVar["DataType"]
    CHAR: ClassVar["DataType"]
    STRING: ClassVar["DataType"]
    BOOL: ClassVar["DataType"]
    VOID: ClassVar["DataType"]

    def __post_init__(self):
        if self.kind is TypeKind.ARRAY and self.element is None:
            raise ValueError("an array type needs an element type")
        if self.kind in (TypeKind.STRUCT, TypeKind.CLASS) and self.name is None:
            raise ValueError(f"a {self.kind.value.lower()} type needs a name")
        object.__setattr__(self, "dimensions", tuple(self.dimensions))

    @classmethod
    def array(cls, element, dimensions):
        """An array of `element` with the given dimension sizes."""
        return cls(TypeKind.ARRAY, element=element, dimensions=tuple(dimensions))

    @classmethod
    def struct(cls, name):
        return cls(TypeKind.STRUCT, name=name)

    @classmethod
    def class_(cls, name):
        return cls(TypeKind.CLASS, name=name)

    def is_primitive(self):
        return self.kind in _PRIMITIVE_KINDS

    def is_numeric(self):
        return self.kind in _NUMERIC_KINDS

    def is_reference(self):
        return self.kind in _REFERENCE_KINDS

    def size_bytes(self):
        """Fixed storage size in bytes, or None when the size is not fixed."""
        return _SIZES.get(self.kind)

    def __str__(self):
        if self.kind is TypeKind.ARRAY:
            dims = ", ".join(str(d) for d in self.dimensions)
            return f"Array({self.element}, [{dims}])"
        if self.kind in (TypeKind.STRUCT, TypeKind.CLASS):
            return f'{self.kind.value}("{self.name}")'
        return self.kind.value


DataType.INT = DataType(TypeKind.INT)
DataType.FLOAT = DataType(TypeKind.FLOAT)
DataType.DOUBLE = DataType(TypeKind.DOUBLE)
DataType.CHAR = DataType(TypeKind.CHAR)
DataType.STRING = DataType(TypeKind.STRING)
DataType.BOOL = DataType(TypeKind.BOOL)
DataType.VOID = DataType(TypeKind.VOID)


class BinaryOpType(enum.Enum):
    """Binary operators."""

    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    MOD = enum.auto()
    EQUAL = enum.auto()
    NOT_EQUAL = enum.auto()
    LESS = enum.auto()
    GREATER = enum.auto()
    LESS_EQUAL = enum.auto()
    GREATER_EQUAL = enum.auto()
    LOGICAL_AND = enum.auto()
    LOGICAL_OR = enum.auto()

    def is_arithmetic(self):
        return self in _ARITHMETIC_OPS

    def is_comparison(self):
        return self in _COMPARISON_OPS

    def is_logical(self):
        return self in (BinaryOpType.LOGICAL_AND, BinaryOpType.LOGICAL_OR)

    def precedence(self):
        """Binding strength; higher binds tighter."""
        return _BINARY_PRECEDENCE[self]

    def symbol(self):
        return _BINARY_SYMBOLS[self]


_ARITHMETIC_OPS = frozenset(
    {
        BinaryOpType.ADD,
        BinaryOpType.SUB,
        BinaryOpType.MUL,
        BinaryOpType.DIV,
        BinaryOpType.MOD,
    }
)
_COMPARISON_OPS = frozenset(
    {
        BinaryOpType.EQUAL,
        BinaryOpType.NOT_EQUAL,
        BinaryOpType.LESS,
        BinaryOpType.GREATER,
        BinaryOpType.LESS_EQUAL,
        BinaryOpType.GREATER_EQUAL,
    }
)
_BINARY_PRECEDENCE = {
    BinaryOpType.LOGICAL_OR: 1,
    BinaryOpType.LOGICAL_AND: 2,
    BinaryOpType.EQUAL: 3,
    BinaryOpType.NOT_EQUAL: 3,
    BinaryOpType.LESS: 4,
    BinaryOpType.GREATER: 4,
    BinaryOpType.LESS_EQUAL: 4,
    BinaryOpType.GREATER_EQUAL: 4,
    BinaryOpType.ADD: 5,
    BinaryOpType.SUB: 5,
    BinaryOpType.MUL: 6,
    BinaryOpType.DIV: 6,
    BinaryOpType.MOD: 6,
}
_BINARY_SYMBOLS = {
    BinaryOpType.ADD: "+",
    BinaryOpType.SUB: "-",
    BinaryOpType.MUL: "*",
    BinaryOpType.DIV: "/",
    BinaryOpType.MOD: "%",
    BinaryOpType.EQUAL: "==",
    BinaryOpType.NOT_EQUAL: "!=",
    BinaryOpType.LESS: "<",
    BinaryOpType.GREATER: ">",
    BinaryOpType.LESS_EQUAL: "<=",
    BinaryOpType.GREATER_EQUAL: ">=",
    BinaryOpType.LOGICAL_AND: "&&",
    BinaryOpType.LOGICAL_OR: "||",
}


class UnaryOpType(enum.Enum):
    """Unary operators."""

    MINUS = enum.auto()
    PLUS = enum.auto()
    LOGICAL_NOT = enum.auto()
    PRE_INCREMENT = enum.auto()
    POST_INCREMENT = enum.auto()
    PRE_DECREMENT = enum.auto()
    POST_DECREMENT = enum.auto()

    def is_prefix(self):
        return not self.is_postfix()

    def is_postfix(self):
        return self in (UnaryOpType.POST_INCREMENT, UnaryOpType.POST_DECREMENT)

    def symbol(self):
        return _UNARY_SYMBOLS[self]


_UNARY_SYMBOLS = {
    UnaryOpType.MINUS: "-",
    UnaryOpType.PLUS: "+",
    UnaryOpType.LOGICAL_NOT: "!",
    UnaryOpType.PRE_INCREMENT: "++",
    UnaryOpType.POST_INCREMENT: "++",
    UnaryOpType.PRE_DECREMENT: "--",
    UnaryOpType.POST_DECREMENT: "--",
}


class AssignOpType(enum.Enum):
    """Assignment operators, plain and compound."""

    ASSIGN = "="
    ADD_ASSIGN = "+="
    SUB_ASSIGN = "-="
    MUL_ASSIGN = "*="
    DIV_ASSIGN = "/="

    def symbol(self):
        return self.value

    def to_binary_op(self):
        """The binary operator a compound assignment applies, or None for plain '='."""
        return _ASSIGN_TO_BINARY.get(self)


_ASSIGN_TO_BINARY = {
    AssignOpType.ADD_ASSIGN: BinaryOpType.ADD,
    AssignOpType.SUB_ASSIGN: BinaryOpType.SUB,
    AssignOpType.MUL_ASSIGN: BinaryOpType.MUL,
    AssignOpType.DIV_ASSIGN: BinaryOpType.DIV,
}