"""Second compiler pass: turn syntax tree nodes into bytecode."""

from softlang.datatypes import BinaryOpType
from softlang.instructions import Instruction, Opcode
from softlang.nodes import (
    Assignment,
    BinaryOp,
    Block,
    ExprStmt,
    FunctionCall,
    Identifier,
    IfStmt,
    ImportStmt,
    LiteralKind,
    Literal,
    MemberAccess,
    PrintStmt,
    Program,
    ReturnStmt,
    StructLiteral,
    VarDecl,
)
from softlang.symbol_table import CompileError

_BINARY_OPCODES = {
    BinaryOpType.ADD: Opcode.ADD,
    BinaryOpType.SUB: Opcode.SUB,
    BinaryOpType.MUL: Opcode.MUL,
    BinaryOpType.DIV: Opcode.DIV,
    BinaryOpType.MOD: Opcode.MOD,
    BinaryOpType.EQUAL: Opcode.EQUAL,
    BinaryOpType.NOT_EQUAL: Opcode.NOT_EQUAL,
    BinaryOpType.LESS: Opcode.LESS,
    BinaryOpType.GREATER: Opcode.GREATER,
    BinaryOpType.LESS_EQUAL: Opcode.LESS_EQUAL,
    BinaryOpType.GREATER_EQUAL: Opcode.GREATER_EQUAL,
    BinaryOpType.LOGICAL_AND: Opcode.LOGICAL_AND,
    BinaryOpType.LOGICAL_OR: Opcode.LOGICAL_OR,
}

_LITERAL_OPCODES = {
    LiteralKind.INT: Opcode.LOAD_INT,
    LiteralKind.FLOAT: Opcode.LOAD_FLOAT,
    LiteralKind.STRING: Opcode.LOAD_STRING,
    LiteralKind.CHAR: Opcode.LOAD_CHAR,
    LiteralKind.BOOL: Opcode.LOAD_BOOL,
}


def _ins(opcode, *operands):
    return Instruction(opcode, operands)


def _type_label(node_type):
    return "".join(part.capitalize() for part in node_type.name.split("_"))


class CodeGenerator:
    """Emits instructions for one callable body, using the collected symbols."""

    def __init__(self, scope_manager, symbol_table):
        self._scopes = scope_manager
        self._symbols = symbol_table
        self._current_function = None

    def set_current_function(self, function_name):
        self._current_function = function_name

    def compile_node(self, node, program):
        """Append the code for `node` to `program`; unsupported nodes raise CompileError."""
        match node.data:
            case Program(statements=statements):
                self._compile_all(statements, program)
            case VarDecl(name=name, init_expr=init_expr):
                self._compile_var_decl(name, init_expr, program)
            case Assignment(target=target, value=value):
                self._compile_assignment(target, value, program)
            case Identifier(name=name):
                self._compile_identifier(name, program)
            case FunctionCall(name=name, args=args):
                self._compile_call(name, args, program)
            case ReturnStmt(value=value):
                self._compile_return(value, program)
            case Block(statements=statements):
                self._scopes.enter_scope()
                try:
                    self._compile_all(statements, program)
                finally:
                    self._scopes.exit_scope()
            case BinaryOp(op=op, left=left, right=right):
                self.compile_node(left, program)
                self.compile_node(right, program)
                program.add_instruction(_ins(_BINARY_OPCODES[op]))
            case Literal(value=value):
                program.add_instruction(_ins(_LITERAL_OPCODES[value.kind], value.value))
            case ExprStmt(expr=expr):
                self.compile_node(expr, program)
                program.add_instruction(_ins(Opcode.POP))
            case StructLiteral(struct_name=struct_name, field_values=field_values):
                self._compile_struct_literal(struct_name, field_values, program)
            case MemberAccess(object=obj, member_name=member_name):
                self.compile_node(obj, program)
                program.add_instruction(_ins(Opcode.GET_OBJECT_FIELD, member_name))
            case IfStmt(condition=condition, then_stmt=then_stmt, else_stmt=else_stmt):
                self._compile_if(condition, then_stmt, else_stmt, program)
            case PrintStmt(arguments=arguments):
                for arg in arguments:
                    self.compile_node(arg, program)
                    program.add_instruction(_ins(Opcode.CALL, "print", 1))
                    program.add_instruction(_ins(Opcode.POP))
            case ImportStmt():
                pass
            case _:
                raise CompileError(
                    f"Node type {_type_label(node.node_type)} not yet implemented "
                    "in code generator"
                )

    def _compile_all(self, nodes, program):
        for node in nodes:
            self.compile_node(node, program)

    def _compile_var_decl(self, name, init_expr, program):
        if init_expr is not None:
            self.compile_node(init_expr, program)
        else:
            program.add_instruction(_ins(Opcode.LOAD_INT, 0))
        slot = self._scopes.add_local(name)
        program.add_instruction(_ins(Opcode.STORE_LOCAL, slot))

    def _compile_assignment(self, target, value, program):
        match target.data:
            case Identifier(name=name):
                self.compile_node(value, program)
                slot = self._scopes.get_local(name)
                if slot is not None:
                    program.add_instruction(_ins(Opcode.STORE_LOCAL, slot))
                else:
                    program.add_instruction(_ins(Opcode.STORE_GLOBAL, name))
            case MemberAccess(object=obj, member_name=member_name):
                self.compile_node(obj, program)
                self.compile_node(value, program)
                program.add_instruction(_ins(Opcode.SET_OBJECT_FIELD, member_name))
                program.add_instruction(_ins(Opcode.POP))
            case _:
                raise CompileError("Complex assignment targets not yet implemented")

    def _compile_identifier(self, name, program):
        if name == "this":
            program.add_instruction(_ins(Opcode.LOAD_THIS))
            return
        slot = self._scopes.get_local(name)
        if slot is not None:
            program.add_instruction(_ins(Opcode.LOAD_LOCAL, slot))
        else:
            program.add_instruction(_ins(Opcode.LOAD_GLOBAL, name))

    def _compile_call(self, name, args, program):
        self._compile_all(args, program)
        symbol = self._symbols.lookup(name)
        if symbol is not None and symbol.is_function():
            program.add_instruction(_ins(Opcode.CALL_FUNCTION, name, len(args)))
        else:
            program.add_instruction(_ins(Opcode.CALL, name, len(args)))

    def _compile_return(self, value, program):
        if value is None:
            program.add_instruction(_ins(Opcode.RETURN))
            return
        self.compile_node(value, program)
        if self._current_function == "main":
            program.add_instruction(_ins(Opcode.RETURN_MAIN))
        else:
            program.add_instruction(_ins(Opcode.RETURN_VALUE))

    def _compile_struct_literal(self, struct_name, field_values, program):
        program.add_instruction(_ins(Opcode.NEW_OBJECT, struct_name))
        if not field_values:
            return
        program.add_instruction(_ins(Opcode.DUP))
        for field_value in field_values:
            self.compile_node(field_value.value, program)
        program.add_instruction(
            _ins(Opcode.CALL_CONSTRUCTOR, struct_name, len(field_values))
        )
        program.add_instruction(_ins(Opcode.POP))

    def _compile_if(self, condition, then_stmt, else_stmt, program):
        self.compile_node(condition, program)

        else_jump = program.current_address()
        program.add_instruction(_ins(Opcode.JUMP_IF_FALSE, 0))

        self.compile_node(then_stmt, program)

        end_jump = program.current_address()
        program.add_instruction(_ins(Opcode.JUMP, 0))

        program.instructions[else_jump] = _ins(
            Opcode.JUMP_IF_FALSE, program.current_address()
        )

        if else_stmt is not None:
            self.compile_node(else_stmt, program)

        program.instructions[end_jump] = _ins(Opcode.JUMP, program.current_address())