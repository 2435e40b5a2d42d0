"""
nisp.types - Core type definitions for Nisp

This module contains the fundamental types shared by every compiler phase:
- SyntaxNode: Marker base for the closed set of syntax tree variants
- Application: Generic procedure call (op a b ...)
- LambdaExpr: (lambda (params...) body)
- QuotedExpr: (quote datum...)
- DatumList: A list inside quoted data
- FloatLiteral, IntegerLiteral, StringLiteral: Literal atoms
- SymbolRef: Identifier reference
- NispSyntaxError, LexError, ParseError: Errors raised while reading source

Nodes are frozen dataclasses. A tree is built once by the reader and only
read afterwards, so every child is owned by exactly one parent.
"""

from dataclasses import dataclass

# Range of IntegerLiteral values (signed 64-bit)
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


# =============================================================================
# Errors
# =============================================================================


class NispSyntaxError(SyntaxError):
    """Base class for errors raised while reading Nisp source."""

    def __init__(self, message: str, line: int = 0, col: int = 0):
        if line > 0:
            message = f"{message} at line {line}, col {col}"
        super().__init__(message)
        self.line = line
        self.col = col


class LexError(NispSyntaxError):
    """Raised when no token pattern matches at a source position."""

    def __init__(self, position: int, char: str = "", line: int = 0, col: int = 0):
        message = f"no token matches {char!r}" if char else "no token matches"
        super().__init__(message, line, col)
        self.position = position
        self.char = char


class ParseError(NispSyntaxError):
    """Raised when the token stream does not form a well-formed expression."""

    def __init__(self, reason: str, token=None):
        line = token.line if token is not None else 0
        col = token.col if token is not None else 0
        super().__init__(reason, line, col)
        self.reason = reason
        self.token = token


# =============================================================================
# Syntax Tree
# =============================================================================


class SyntaxNode:
    """Marker base for syntax tree nodes."""

    __slots__ = ()


@dataclass(frozen=True)
class Application(SyntaxNode):
    """
    A generic procedure call: (operator operand ...)

    The operator is any expression, not necessarily a symbol:
    ((lambda (x) x) 1) has a LambdaExpr operator.
    """

    operator: SyntaxNode
    operands: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True)
class LambdaExpr(SyntaxNode):
    """(lambda (parameters...) body) with exactly one body expression."""

    parameters: tuple[str, ...]
    body: SyntaxNode


@dataclass(frozen=True)
class QuotedExpr(SyntaxNode):
    """
    (quote datum ...)

    Attributes:
        raw: The quoted token texts, single-spaced, with no space after
            "(" or before ")". This is what gets printed back.
        datums: The same data as trees of atoms and DatumLists. No special
            forms are recognized inside a quote.
    """

    raw: str
    datums: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True)
class DatumList(SyntaxNode):
    """A parenthesized list of quoted data, possibly empty."""

    items: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True)
class FloatLiteral(SyntaxNode):
    value: float


@dataclass(frozen=True)
class IntegerLiteral(SyntaxNode):
    value: int


@dataclass(frozen=True)
class StringLiteral(SyntaxNode):
    """A string literal. `value` keeps the surrounding double quotes."""

    value: str


@dataclass(frozen=True)
class SymbolRef(SyntaxNode):
    name: str


__all__ = [
    "INT64_MIN",
    "INT64_MAX",
    "NispSyntaxError",
    "LexError",
    "ParseError",
    "SyntaxNode",
    "Application",
    "LambdaExpr",
    "QuotedExpr",
    "DatumList",
    "FloatLiteral",
    "IntegerLiteral",
    "StringLiteral",
    "SymbolRef",
]
