import pytest

from softlang.datatypes import (
    AssignOpType,
    BinaryOpType,
    DataType,
    TypeKind,
    UnaryOpType,
)


PRIMITIVES = [
    DataType.INT,
    DataType.FLOAT,
    DataType.DOUBLE,
    DataType.CHAR,
    DataType.STRING,
    DataType.BOOL,
]


def test_primitives_are_not_references():
    assert DataType.INT.is_primitive() is True
    assert DataType.INT.is_reference() is False
    assert DataType.STRING.is_primitive() is True
    assert DataType.STRING.is_reference() is False
    for dtype in PRIMITIVES:
        assert dtype.is_primitive() is True
        assert dtype.is_reference() is False


def test_references_are_not_primitive():
    references = [
        DataType.array(DataType.INT, [3]),
        DataType.struct("Point"),
        DataType.class_("Person"),
    ]
    assert DataType.struct("Point").is_reference() is True
    for dtype in references:
        assert dtype.is_reference() is True
        assert dtype.is_primitive() is False
        assert dtype.is_numeric() is False


def test_void_is_neither_primitive_nor_reference():
    assert DataType.VOID.is_primitive() is False
    assert DataType.VOID.is_reference() is False
    assert DataType.VOID.size_bytes() is None


def test_numeric_types():
    assert DataType.INT.is_numeric() is True
    assert DataType.DOUBLE.is_numeric() is True
    assert DataType.CHAR.is_numeric() is False
    assert DataType.BOOL.is_numeric() is False
    numeric = [t for t in PRIMITIVES if t.is_numeric()]
    assert numeric == [DataType.INT, DataType.FLOAT, DataType.DOUBLE]


@pytest.mark.parametrize(
    "dtype, size",
    [
        (DataType.INT, 8),
        (DataType.FLOAT, 4),
        (DataType.DOUBLE, 8),
        (DataType.CHAR, 1),
        (DataType.BOOL, 1),
        (DataType.STRING, None),
        (DataType.struct("Point"), None),
    ],
)
def test_size_bytes(dtype, size):
    assert dtype.size_bytes() == size


def test_array_keeps_element_and_dimensions():
    arr = DataType.array(DataType.FLOAT, [2, 5])
    assert arr.kind is TypeKind.ARRAY
    assert arr.element == DataType.FLOAT
    assert arr.dimensions == (2, 5)
    assert arr == DataType.array(DataType.FLOAT, (2, 5))


def test_struct_and_class_differ_by_kind():
    assert DataType.struct("A") != DataType.class_("A")
    assert DataType.struct("A") == DataType.struct("A")


def test_array_without_element_rejected():
    with pytest.raises(ValueError):
        DataType(TypeKind.ARRAY)


def test_struct_without_name_rejected():
    with pytest.raises(ValueError):
        DataType(TypeKind.STRUCT)


def test_str_of_simple_and_named_types():
    assert str(DataType.INT) == "Int"
    assert str(DataType.struct("Point")) == 'Struct("Point")'


def test_binary_categories_are_disjoint():
    assert BinaryOpType.ADD.is_arithmetic() is True
    assert BinaryOpType.ADD.is_comparison() is False
    assert BinaryOpType.LESS.is_comparison() is True
    assert BinaryOpType.LOGICAL_OR.is_logical() is True
    for op in BinaryOpType:
        flags = [op.is_arithmetic(), op.is_comparison(), op.is_logical()]
        assert flags.count(True) == 1


@pytest.mark.parametrize(
    "op, prec",
    [
        (BinaryOpType.LOGICAL_OR, 1),
        (BinaryOpType.LOGICAL_AND, 2),
        (BinaryOpType.EQUAL, 3),
        (BinaryOpType.LESS_EQUAL, 4),
        (BinaryOpType.SUB, 5),
        (BinaryOpType.MOD, 6),
    ],
)
def test_binary_precedence(op, prec):
    assert op.precedence() == prec


def test_multiplication_binds_tighter_than_addition():
    assert BinaryOpType.MUL.precedence() > BinaryOpType.ADD.precedence()


@pytest.mark.parametrize(
    "op, sym",
    [
        (BinaryOpType.ADD, "+"),
        (BinaryOpType.NOT_EQUAL, "!="),
        (BinaryOpType.GREATER_EQUAL, ">="),
        (BinaryOpType.LOGICAL_AND, "&&"),
        (BinaryOpType.LOGICAL_OR, "||"),
    ],
)
def test_binary_symbols(op, sym):
    assert op.symbol() == sym


def test_unary_prefix_postfix_partition():
    for op in UnaryOpType:
        assert op.is_prefix() != op.is_postfix()
    assert UnaryOpType.POST_INCREMENT.is_postfix() is True
    assert UnaryOpType.PRE_DECREMENT.is_prefix() is True


def test_unary_increment_symbols_shared():
    assert UnaryOpType.PRE_INCREMENT.symbol() == "++"
    assert UnaryOpType.POST_INCREMENT.symbol() == UnaryOpType.PRE_INCREMENT.symbol()
    assert UnaryOpType.LOGICAL_NOT.symbol() == "!"


@pytest.mark.parametrize(
    "op, expected",
    [
        (AssignOpType.ASSIGN, None),
        (AssignOpType.ADD_ASSIGN, BinaryOpType.ADD),
        (AssignOpType.SUB_ASSIGN, BinaryOpType.SUB),
        (AssignOpType.MUL_ASSIGN, BinaryOpType.MUL),
        (AssignOpType.DIV_ASSIGN, BinaryOpType.DIV),
    ],
)
def test_assign_to_binary_op(op, expected):
    assert op.to_binary_op() == expected


def test_compound_assign_symbol_ends_with_binary_symbol():
    for op in AssignOpType:
        binary = op.to_binary_op()
        if binary is not None:
            assert op.symbol() == binary.symbol() + "="
    assert AssignOpType.ASSIGN.symbol() == "="