"""
nisp.compiler.lowering - Flatten syntax trees into a stack-order stream

This module handles the last phase: turning a syntax tree into a flat,
comma-separated sequence of opcodes and operands, in the order a stack
machine would execute them (arguments pushed last-to-first, then the
operator).

    (+ 1 2)  ->  10, 2, 10, 1, 2

The encoding is a sketch of a bytecode format, not a finished one:
- integers push with opcode PUSH_LITERAL followed by the value
- built-in operators map to fixed opcodes, other symbols stay as names
- lambdas, quotes, floats and strings are not lowered and emit nothing
"""

from typing import Mapping, Union

from nisp.types import (
    Application,
    DatumList,
    FloatLiteral,
    IntegerLiteral,
    LambdaExpr,
    QuotedExpr,
    StringLiteral,
    SymbolRef,
    SyntaxNode,
)

Field = Union[int, str]

PUSH_LITERAL = 10

BUILTIN_OPCODES: Mapping[str, int] = {
    "+": 2,
    "-": 3,
    "*": 4,
    "/": 5,
    "%": 6,
    ">": 7,
    "<": 8,
    "=": 9,
}

# Applications with more operands than this repeat the operator field
MAX_BINARY_OPERANDS = 2

UNLOWERED = (LambdaExpr, QuotedExpr, DatumList, FloatLiteral, StringLiteral)


def emit(node: SyntaxNode, opcodes: Mapping[str, int] = BUILTIN_OPCODES) -> list[Field]:
    """Lower a syntax tree to a list of instruction fields."""
    if isinstance(node, IntegerLiteral):
        return [PUSH_LITERAL, node.value]

    if isinstance(node, SymbolRef):
        if node.name in opcodes:
            return [opcodes[node.name]]
        # Unresolved reference
        return [node.name]

    if isinstance(node, Application):
        fields: list[Field] = []
        for operand in reversed(node.operands):
            fields.extend(emit(operand, opcodes))
        operator = emit(node.operator, opcodes)
        fields.extend(operator)
        if len(node.operands) > MAX_BINARY_OPERANDS:
            fields.extend(operator)
        return fields

    if isinstance(node, UNLOWERED):
        return []

    raise TypeError(f"cannot lower {type(node).__name__}")


def lower(node: SyntaxNode, opcodes: Mapping[str, int] = BUILTIN_OPCODES) -> str:
    """Lower a syntax tree to its comma-separated text encoding."""
    return ", ".join(str(field) for field in emit(node, opcodes))


__all__ = [
    "PUSH_LITERAL",
    "BUILTIN_OPCODES",
    "MAX_BINARY_OPERANDS",
    "emit",
    "lower",
]
