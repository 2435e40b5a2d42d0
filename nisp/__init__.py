"""
Nisp - a minimal Lisp front end

    >>> from nisp import parse_str, render, lower
    >>> tree = parse_str("(+ 1 2)")
    >>> render(tree)
    '(+ 1 2)'
    >>> lower(tree)
    '10, 2, 10, 1, 2'
"""

from nisp.compiler import (
    BUILTIN_OPCODES,
    DEFAULT_PATTERNS,
    PUSH_LITERAL,
    Reader,
    Token,
    TokenKind,
    TokenPattern,
    debug_stages,
    emit,
    lower,
    make_pattern_table,
    normalize_whitespace,
    parse,
    parse_str,
    read_str,
    render,
    tokenize,
)
from nisp.types import (
    Application,
    DatumList,
    FloatLiteral,
    IntegerLiteral,
    LambdaExpr,
    LexError,
    NispSyntaxError,
    ParseError,
    QuotedExpr,
    StringLiteral,
    SymbolRef,
    SyntaxNode,
)

__version__ = "0.1.0"
