import pytest

from softlang.instructions import Constant, ConstantKind, Instruction, Opcode


def test_arithmetic_and_comparison_categories():
    add = Instruction(Opcode.ADD)
    less = Instruction(Opcode.LESS)
    assert add.is_arithmetic() and not add.is_comparison()
    assert less.is_comparison() and not less.is_arithmetic()


def test_load_and_store_are_disjoint():
    load = Instruction(Opcode.LOAD_LOCAL, (3,))
    store = Instruction(Opcode.STORE_LOCAL, (3,))
    assert load.is_load() and not load.is_store()
    assert store.is_store() and not store.is_load()


def test_other_categories():
    assert Instruction(Opcode.LOGICAL_NOT).is_logical()
    assert Instruction(Opcode.SWAP).is_stack_op()
    assert Instruction(Opcode.RETURN_MAIN).is_return()
    assert Instruction(Opcode.CALL_MAIN).is_call()
    assert Instruction(Opcode.IMPORT_SYMBOL, ("math", "abs")).is_module_op()
    assert Instruction(Opcode.LOAD_THIS).is_object_op()
    assert not Instruction(Opcode.HALT).is_object_op()


def test_call_arity():
    assert Instruction(Opcode.CALL, ("print", 1)).call_arity() == 1
    assert Instruction(Opcode.CALL_CONSTRUCTOR, ("Point", 2)).call_arity() == 2
    assert Instruction(Opcode.CALL_MAIN).call_arity() is None
    assert Instruction(Opcode.LOAD_INT, (4,)).call_arity() is None


def test_jump_target():
    assert Instruction(Opcode.JUMP, (7,)).jump_target() == 7
    assert Instruction(Opcode.JUMP_IF_FALSE, (12,)).jump_target() == 12
    assert Instruction(Opcode.POP).jump_target() is None


def test_descriptions():
    assert Instruction(Opcode.LOAD_INT, (1,)).description() == "Load integer constant"
    assert Instruction(Opcode.HALT).description() == "Halt execution"
    assert Instruction(Opcode.NEW_ARRAY, (2,)).description() == "Other instruction"


def test_wrong_operand_count_rejected():
    with pytest.raises(ValueError):
        Instruction(Opcode.LOAD_INT)
    with pytest.raises(ValueError):
        Instruction(Opcode.POP, (1,))


def test_wrong_operand_type_rejected():
    with pytest.raises(TypeError):
        Instruction(Opcode.LOAD_INT, ("one",))
    with pytest.raises(TypeError):
        Instruction(Opcode.LOAD_BOOL, (1,))
    with pytest.raises(ValueError):
        Instruction(Opcode.LOAD_LOCAL, (-1,))
    with pytest.raises(ValueError):
        Instruction(Opcode.LOAD_CHAR, ("ab",))


def test_operandless_text_is_opcode_name():
    assert str(Instruction(Opcode.POP)) == Opcode.POP.value


def test_instruction_text():
    assert str(Instruction(Opcode.LOAD_STRING, ("hi",))) == 'LoadString("hi")'
    assert str(Instruction(Opcode.CALL, ("print", 1))) == 'Call("print", 1)'


def test_float_operand_coerced():
    instruction = Instruction(Opcode.LOAD_FLOAT, (2,))
    assert instruction.operands == (2.0,)
    assert isinstance(instruction.operands[0], float)


def test_switch_table_is_hashable_and_equal():
    first = Instruction(Opcode.SWITCH_TABLE, ([(1, 10), (2, 20)], 30))
    second = Instruction(Opcode.SWITCH_TABLE, (((1, 10), (2, 20)), 30))
    assert first == second
    assert hash(first) == hash(second)
    assert str(first).startswith(Opcode.SWITCH_TABLE.value + "([")


def test_constant_type_names():
    assert Constant(ConstantKind.INT, 3).type_name() == "int"
    assert Constant(ConstantKind.STRING, "x").type_name() == "string"
    assert Constant(ConstantKind.BOOL, False).type_name() == "bool"


def test_constant_predicates():
    integer = Constant(ConstantKind.INT, 1)
    real = Constant(ConstantKind.FLOAT, 1.5)
    char = Constant(ConstantKind.CHAR, "z")
    assert integer.is_numeric() and integer.is_integer() and not integer.is_float()
    assert real.is_numeric() and real.is_float()
    assert char.is_char() and not char.is_numeric() and not char.is_string()
    assert Constant(ConstantKind.BOOL, True).is_bool()


def test_constant_sizes():
    text = "héllo"
    header = Constant(ConstantKind.INT, 0).size_bytes()
    assert Constant(ConstantKind.FLOAT, 0.0).size_bytes() == header
    assert Constant(ConstantKind.STRING, text).size_bytes() == len(text.encode("utf-8")) + header
    assert Constant(ConstantKind.BOOL, True).size_bytes() < Constant(ConstantKind.CHAR, "a").size_bytes()


def test_constant_display():
    assert str(Constant(ConstantKind.STRING, "abc")) == '"abc"'
    assert str(Constant(ConstantKind.CHAR, "q")) == "'q'"
    assert str(Constant(ConstantKind.INT, -42)) == str(-42)
    assert str(Constant(ConstantKind.BOOL, True)) == "true"


def test_constant_float_display_has_no_exponent():
    text = str(Constant(ConstantKind.FLOAT, 1e20))
    assert "e" not in text
    assert float(text) == 1e20
    assert str(Constant(ConstantKind.FLOAT, 3.0)) == str(3)


def test_constant_validation():
    with pytest.raises(ValueError):
        Constant(ConstantKind.CHAR, "ab")
    with pytest.raises(TypeError):
        Constant(ConstantKind.INT, True)
    with pytest.raises(TypeError):
        Constant(ConstantKind.STRING, 5)