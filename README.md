# softlang

Building blocks of a compiler for the Soft programming language: a typed
syntax tree, a bytecode instruction set with a program container, and a
multi-pass compiler that turns a syntax tree into bytecode.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

- `softlang.datatypes`: `DataType` (with `TypeKind` and the shared
  instances `DataType.INT`, `DataType.FLOAT`, `DataType.STRING` and so on,
  plus `DataType.array`, `DataType.struct` and `DataType.class_`), and the
  operator enums `BinaryOpType`, `UnaryOpType` and `AssignOpType`.
- `softlang.nodes`: the syntax tree. It holds `Node`, `NodeType`,
  `LiteralValue`, `Parameter`, `FieldValue`, `ImportType` and `ExportType`,
  and one data class per kind of node (`Program`, `FunctionDef`, `IfStmt`,
  `BinaryOp`, ...). Builder helpers such as `Node.create_int_literal` and
  `Node.create_block` are included.
- `softlang.instructions`: `Instruction` (an `Opcode` with checked
  operands) and `Constant` for constant-pool entries.
- `softlang.program`: `BytecodeProgram` with `disassemble()`, `stats()` and
  `analyze()`, plus `Function`, `LocalVariable` and `DebugInfo`.
- `softlang.symbol_table`: `SymbolTable`, `Symbol`, `SymbolType` and
  `CompileError`.
- `softlang.scope`: `ScopeManager`, which allocates local variable slots.
- `softlang.symbol_collector`: `SymbolCollector`, the first pass, which
  records functions, classes, constructors and global variables.
- `softlang.code_generator`: `CodeGenerator`, the second pass, which emits
  instructions.
- `softlang.debug_printer`: functions that print the symbol table and
  compilation progress.
- `softlang.compiler`: `MultiPassCompiler`, which runs the passes in order.

## Compiling a syntax tree

```python
from softlang.compiler import MultiPassCompiler
from softlang.datatypes import DataType
from softlang.nodes import FunctionDef, Node, ReturnStmt

body = Node.create_block(
    [Node(ReturnStmt(Node.create_int_literal(7, 2, 12)), 2, 5)], 1, 15
)
main = Node(FunctionDef(DataType.INT, "main", [], body), 1, 1)
ast = Node.create_program([main])

program, addresses = MultiPassCompiler().compile(ast)
print(program.disassemble())
print(addresses)  # {'main': 2}
```

Every compiled program starts with `CallMain` followed by `Halt`. The bodies
of functions and constructors come after those two instructions. The
returned dictionary maps each callable name to the address of its first
instruction. A function whose code does not end in a value return gets a
default return of `42`, using `ReturnMain` for `main`. A constructor returns
slot 0, which holds the object under construction.

While it compiles, `MultiPassCompiler.compile` prints its progress and the
collected symbol table to standard output. Errors found while compiling
raise `softlang.symbol_table.CompileError`. These include duplicate symbols
and syntax nodes that the code generator does not handle yet, such as loops,
unary operators, casts and array operations.

## What this package does not do

- There is no tokenizer or parser. Syntax trees are built in Python with the
  classes in `softlang.nodes`.
- There is no virtual machine. Bytecode can be inspected and disassembled
  but not executed.
- There is no command-line tool and no binary bytecode file format.
  `BytecodeProgram.disassemble()` gives a text listing.