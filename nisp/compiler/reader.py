"""
nisp.compiler.reader - Tokenizer and Reader for Nisp source code

This module handles Phase 1 of compilation: reading source text and
converting it into syntax trees.

Components:
- Token: A classified lexical unit with its source location
- tokenize(): Converts source text to tokens using an ordered pattern table
- Reader: Recursive-descent parser from tokens to SyntaxNode trees
- parse(): Parse exactly one expression from a token sequence
- parse_str() / read_str(): Convenience functions from source text

Grammar:
    expr := atom
          | "(" "lambda" "(" symbol* ")" expr ")"
          | "(" "quote" datum* ")"
          | "(" expr expr* ")"
    datum := atom | "(" datum* ")"
    atom := integer | float | string | symbol
"""

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from nisp.compiler.patterns import DEFAULT_PATTERNS, TokenKind, TokenPattern
from nisp.types import (
    INT64_MAX,
    INT64_MIN,
    Application,
    DatumList,
    FloatLiteral,
    IntegerLiteral,
    LambdaExpr,
    LexError,
    ParseError,
    QuotedExpr,
    StringLiteral,
    SymbolRef,
    SyntaxNode,
)

WHITESPACE = " \t\r\n"

# Second-token texts that select a special form instead of an application
LAMBDA = "lambda"
QUOTE = "quote"


# =============================================================================
# Tokenizer
# =============================================================================


@dataclass(frozen=True)
class Token:
    """A token with its source location."""

    kind: TokenKind
    text: str
    line: int = 0  # 1-based line number
    col: int = 0  # 0-based column offset
    pos: int = 0  # offset into the source string

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.col})"


def tokenize(
    src: str, table: tuple[TokenPattern, ...] = DEFAULT_PATTERNS
) -> list[Token]:
    """
    Tokenize source code into a list of Tokens with source locations.

    Whitespace runs are skipped. At every other position the table entries
    are tried in order and the first anchored match becomes a
    token. Raises LexError if no entry matches.
    """
    tokens = []
    i = 0
    n = len(src)
    line = 1
    line_start = 0

    while i < n:
        c = src[i]
        if c == "\n":
            i += 1
            line += 1
            line_start = i
            continue
        if c in WHITESPACE:
            i += 1
            continue
        for pattern in table:
            text = pattern.match(src, i)
            if text is not None:
                tokens.append(Token(pattern.kind, text, line, i - line_start, i))
                i += len(text)
                break
        else:
            raise LexError(i, c, line, i - line_start)

    return tokens


# =============================================================================
# Reader
# =============================================================================


class Reader:
    """
    Reader that parses tokens into syntax trees.

    The token buffer is never modified; reading advances a cursor.
    """

    def __init__(self, tokens: Iterable[Token]):
        self.tokens = tuple(tokens)
        self.i = 0

    def eof(self) -> bool:
        return self.i >= len(self.tokens)

    def peek(self, offset: int = 0) -> Optional[Token]:
        j = self.i + offset
        if j >= len(self.tokens):
            return None
        return self.tokens[j]

    def next(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise ParseError("unexpected end of input", self._last_token())
        self.i += 1
        return tok

    def expect(self, kind: TokenKind, what: str) -> Token:
        """Consume the next token, which must be of the given kind."""
        tok = self.peek()
        if tok is None:
            raise ParseError(f"unexpected end of input, expected {what}", self._last_token())
        if tok.kind != kind:
            raise ParseError(f"expected {what}, got {tok.text!r}", tok)
        self.i += 1
        return tok

    def _last_token(self) -> Optional[Token]:
        return self.tokens[-1] if self.tokens else None

    def read(self) -> list[SyntaxNode]:
        """Read all forms from the token stream."""
        forms = []
        while not self.eof():
            forms.append(self.read_form())
        return forms

    def read_form(self) -> SyntaxNode:
        """Read a single form from the token stream."""
        tok = self.peek()
        if tok is None:
            raise ParseError("unexpected end of input", self._last_token())

        if tok.kind != TokenKind.OPAREN:
            return self.read_atom()

        # One token of lookahead past the paren picks the form. The text is
        # compared regardless of kind, so "lambda" and "quote" can never be
        # used as ordinary operators.
        second = self.peek(1)
        if second is not None and second.text == LAMBDA:
            return self.read_lambda()
        if second is not None and second.text == QUOTE:
            return self.read_quote()
        return self.read_application()

    def read_atom(self, check_range: bool = True) -> SyntaxNode:
        """Read an atomic value (number, string or symbol)."""
        tok = self.next()

        if tok.kind == TokenKind.INTEGER:
            value = int(tok.text)
            if check_range and not INT64_MIN <= value <= INT64_MAX:
                raise ParseError(f"integer literal out of range: {tok.text}", tok)
            return IntegerLiteral(value)
        if tok.kind == TokenKind.FLOAT:
            value = float(tok.text)
            if check_range and not math.isfinite(value):
                raise ParseError(f"float literal out of range: {tok.text}", tok)
            return FloatLiteral(value)
        if tok.kind == TokenKind.STRING:
            return StringLiteral(tok.text)
        if tok.kind == TokenKind.SYMBOL:
            return SymbolRef(tok.text)
        raise ParseError(f"unexpected {tok.text!r}", tok)

    def read_lambda(self) -> LambdaExpr:
        """Read (lambda (params...) body)."""
        start = self.expect(TokenKind.OPAREN, "'('")
        self.next()  # lambda
        self.expect(TokenKind.OPAREN, "'(' to open lambda parameters")

        params = []
        while True:
            tok = self.peek()
            if tok is None:
                raise ParseError(
                    f"unterminated lambda parameters opened at col {start.col}",
                    self._last_token(),
                )
            if tok.kind == TokenKind.CPAREN:
                self.next()
                break
            if tok.kind != TokenKind.SYMBOL:
                raise ParseError(f"lambda parameter must be a symbol, got {tok.text!r}", tok)
            if tok.text in params:
                raise ParseError(f"duplicate lambda parameter {tok.text!r}", tok)
            params.append(self.next().text)

        body = self.read_form()
        self.expect(TokenKind.CPAREN, "')' to close lambda")
        return LambdaExpr(tuple(params), body)

    def read_quote(self) -> QuotedExpr:
        """
        Read (quote datum ...).

        Quoted content is data, not code: lists may be empty and lambda or
        quote inside are plain symbols. Reading stops at the ')' that brings
        the nesting depth back to zero.
        """
        start = self.expect(TokenKind.OPAREN, "'('")
        self.next()  # quote
        first = self.i
        datums = self.read_until_close(start, "quote", self.read_datum)
        # Leave out the closing ')'
        raw = join_token_text(self.tokens[first : self.i - 1])
        return QuotedExpr(raw, tuple(datums))

    def read_datum(self) -> SyntaxNode:
        """Read one quoted datum: an atom or a list of data."""
        tok = self.peek()
        if tok is not None and tok.kind == TokenKind.OPAREN:
            start = self.next()
            items = self.read_until_close(start, "quoted list", self.read_datum)
            return DatumList(tuple(items))
        return self.read_atom(check_range=False)

    def read_application(self) -> Application:
        """Read (operator operand ...)."""
        start = self.expect(TokenKind.OPAREN, "'('")
        tok = self.peek()
        if tok is not None and tok.kind == TokenKind.CPAREN:
            raise ParseError("empty application '()'", tok)
        operator = self.read_form()
        operands = self.read_until_close(start, "list")
        return Application(operator, tuple(operands))

    def read_until_close(
        self,
        start: Token,
        what: str,
        read_item: Optional[Callable[[], SyntaxNode]] = None,
    ) -> list[SyntaxNode]:
        """Read items up to and including the closing ')' of `start`."""
        read_item = read_item or self.read_form
        items = []
        while True:
            tok = self.peek()
            if tok is None:
                raise ParseError(
                    f"unterminated {what} opened at col {start.col}, expected ')'",
                    self._last_token(),
                )
            if tok.kind == TokenKind.CPAREN:
                self.next()
                return items
            items.append(read_item())


def join_token_text(tokens: Iterable[Token]) -> str:
    """Join token texts with single spaces, except just inside parens."""
    parts = []
    prev: Optional[Token] = None
    for tok in tokens:
        if (
            prev is not None
            and prev.kind != TokenKind.OPAREN
            and tok.kind != TokenKind.CPAREN
        ):
            parts.append(" ")
        parts.append(tok.text)
        prev = tok
    return "".join(parts)


# =============================================================================
# Convenience Functions
# =============================================================================


def parse(tokens: Iterable[Token]) -> SyntaxNode:
    """
    Parse exactly one expression from a token sequence.

    The sequence must hold a single complete expression; leftover tokens
    are a ParseError. The caller's sequence is not modified.
    """
    rdr = Reader(tokens)
    form = rdr.read_form()
    if not rdr.eof():
        tok = rdr.peek()
        raise ParseError(f"unexpected trailing input {tok.text!r}", tok)
    return form


def parse_str(src: str, table: tuple[TokenPattern, ...] = DEFAULT_PATTERNS) -> SyntaxNode:
    """Tokenize and parse a source string holding one expression."""
    return parse(tokenize(src, table))


def read_str(src: str, table: tuple[TokenPattern, ...] = DEFAULT_PATTERNS) -> list[SyntaxNode]:
    """Tokenize and parse every top-level form in a source string."""
    return Reader(tokenize(src, table)).read()


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "Token",
    "tokenize",
    "Reader",
    "parse",
    "parse_str",
    "read_str",
    "join_token_text",
]
