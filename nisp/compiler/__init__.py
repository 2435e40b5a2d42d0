"""
nisp.compiler - The Nisp front end

Phases:
1. Tokenize (patterns.py, reader.py): Text -> Tokens
2. Read (reader.py): Tokens -> Syntax tree
3. Print (printer.py): Syntax tree -> normalized source text
4. Lower (lowering.py): Syntax tree -> stack-order instruction stream
"""

from nisp.compiler.lowering import (
    BUILTIN_OPCODES,
    PUSH_LITERAL,
    emit,
    lower,
)
from nisp.compiler.patterns import (
    DEFAULT_PATTERNS,
    TokenKind,
    TokenPattern,
    make_pattern_table,
)
from nisp.compiler.printer import format_float, normalize_whitespace, render
from nisp.compiler.reader import (
    Reader,
    Token,
    parse,
    parse_str,
    read_str,
    tokenize,
)
from nisp.compiler.stages import debug_stages

__all__ = [
    "BUILTIN_OPCODES",
    "PUSH_LITERAL",
    "emit",
    "lower",
    "DEFAULT_PATTERNS",
    "TokenKind",
    "TokenPattern",
    "make_pattern_table",
    "format_float",
    "normalize_whitespace",
    "render",
    "Reader",
    "Token",
    "parse",
    "parse_str",
    "read_str",
    "tokenize",
    "debug_stages",
]
