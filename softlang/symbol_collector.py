"""First compiler pass: gather the declarations of a program into a symbol table."""

from softlang.nodes import (
    Assignment,
    BinaryOp,
    Block,
    BreakStmt,
    ClassDef,
    Constructor,
    ContinueStmt,
    ExportStmt,
    ExprStmt,
    ForStmt,
    FunctionCall,
    FunctionDef,
    Identifier,
    IfStmt,
    ImportStmt,
    Literal,
    MemberAccess,
    ModuleDecl,
    PrintStmt,
    Program,
    ReturnStmt,
    StructLiteral,
    UnaryOp,
    VarDecl,
    WhileStmt,
)
from softlang.symbol_table import Symbol, SymbolTable


class SymbolCollector:
    """Walks a syntax tree and records functions, classes, constructors and globals."""

    def __init__(self):
        self._table = SymbolTable()
        self._depth = 0

    def collect_symbols(self, ast):
        """Visit `ast` and hand back the filled table; the collector starts afresh after."""
        try:
            self._visit(ast)
        finally:
            table, self._table = self._table, SymbolTable()
        return table

    def scope_depth(self):
        return self._depth

    def _visit(self, node):
        if node is None:
            return
        match node.data:
            case Program(statements=statements):
                self._visit_all(statements)
            case ModuleDecl(name=name, body=body):
                self._table.enter_module(name)
                self._visit(body)
                self._table.exit_module()
            case FunctionDef(name=name, return_type=return_type, parameters=parameters, body=body):
                self._table.add_symbol(
                    Symbol.function(
                        name, return_type, parameters, body, self._table.current_module
                    )
                )
            case ClassDef(name=name, fields=fields, constructor=constructor):
                self._visit_class(name, fields, constructor)
            case VarDecl(name=name, data_type=data_type, init_expr=init_expr):
                if self._depth == 0:
                    self._table.add_symbol(
                        Symbol.variable(name, data_type, True, self._table.current_module)
                    )
                self._visit(init_expr)
            case Block(statements=statements):
                self._depth += 1
                try:
                    self._visit_all(statements)
                finally:
                    self._depth = max(0, self._depth - 1)
            case IfStmt(condition=condition, then_stmt=then_stmt, else_stmt=else_stmt):
                self._visit_all((condition, then_stmt, else_stmt))
            case WhileStmt(condition=condition, body=body):
                self._visit_all((condition, body))
            case ForStmt(init=init, condition=condition, update=update, body=body):
                self._visit_all((init, condition, update, body))
            case Assignment(target=target, value=value):
                self._visit_all((target, value))
            case BinaryOp(left=left, right=right):
                self._visit_all((left, right))
            case UnaryOp(operand=operand):
                self._visit(operand)
            case FunctionCall(args=args):
                self._visit_all(args)
            case StructLiteral(field_values=field_values):
                self._visit_all(fv.value for fv in field_values)
            case MemberAccess(object=obj):
                self._visit(obj)
            case ExprStmt(expr=expr):
                self._visit(expr)
            case PrintStmt(arguments=arguments):
                self._visit_all(arguments)
            case ReturnStmt(value=value):
                self._visit(value)
            case Literal() | Identifier() | BreakStmt() | ContinueStmt():
                pass
            case ImportStmt() | ExportStmt():
                pass
            case _:
                pass

    def _visit_all(self, nodes):
        for node in nodes:
            self._visit(node)

    def _visit_class(self, name, fields, constructor):
        module = self._table.current_module
        self._table.add_symbol(Symbol.class_(name, fields, constructor, module))
        if constructor is not None and isinstance(constructor.data, Constructor):
            self._table.add_symbol(
                Symbol.constructor(
                    f"{name}::constructor",
                    name,
                    constructor.data.parameters,
                    constructor.data.body,
                    module,
                )
            )