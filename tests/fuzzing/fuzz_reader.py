#!/usr/bin/env python3
"""Fuzz testing for the reader and printer.

Random syntax trees are rendered to text and read back. The reader must
give back the same tree, tokenizing must be deterministic, and the
lowering pass must accept every tree the reader produces.
"""

import string
from typing import Any

from nisp.compiler.lowering import emit
from nisp.compiler.printer import render
from nisp.compiler.reader import parse, tokenize
from nisp.types import (
    INT64_MAX,
    INT64_MIN,
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

from .fuzz import Fuzzer

SYMBOL_START = string.ascii_letters + "+=!^%*/<>"
SYMBOL_REST = SYMBOL_START + string.digits + "-"
STRING_CHARS = string.ascii_letters + string.digits + " ()+-."
RESERVED = {"lambda", "quote"}


class ReaderFuzzer(Fuzzer):
    """Fuzz tester that round-trips random trees through text."""

    name = "Reader"
    max_depth = 4

    def __init__(self, rng=None):
        super().__init__(rng)
        self.tree: SyntaxNode = IntegerLiteral(0)
        self.text = ""
        self.max_text = 0

    def reset(self):
        """Reset state for a new example."""
        self.tree = IntegerLiteral(0)
        self.text = ""

    def get_stats(self) -> dict[str, Any]:
        """Return additional stats to display."""
        return {"Longest source": self.max_text}

    # -- generators ----------------------------------------------------------

    def random_symbol(self) -> str:
        while True:
            name = self.rng.choice(SYMBOL_START) + "".join(
                self.rng.choices(SYMBOL_REST, k=self.rng.randint(0, 6))
            )
            if name not in RESERVED:
                return name

    def random_atom(self) -> SyntaxNode:
        choice = self.rng.randint(0, 3)
        if choice == 0:
            return IntegerLiteral(self.rng.randint(INT64_MIN, INT64_MAX))
        elif choice == 1:
            return FloatLiteral(self.rng.uniform(-1e6, 1e6) * 10 ** self.rng.randint(-8, 20))
        elif choice == 2:
            body = "".join(self.rng.choices(STRING_CHARS, k=self.rng.randint(0, 10)))
            return StringLiteral(f'"{body}"')
        else:
            return SymbolRef(self.random_symbol())

    def random_tree(self, depth: int = 0) -> SyntaxNode:
        if depth >= self.max_depth or self.rng.random() < 0.3:
            return self.random_atom()
        choice = self.rng.randint(0, 3)
        if choice <= 1:
            operands = [self.random_tree(depth + 1) for _ in range(self.rng.randint(0, 4))]
            return Application(self.random_tree(depth + 1), tuple(operands))
        elif choice == 2:
            params: list[str] = []
            for _ in range(self.rng.randint(0, 3)):
                name = self.random_symbol()
                if name not in params:
                    params.append(name)
            return LambdaExpr(tuple(params), self.random_tree(depth + 1))
        else:
            datums = [self.random_datum(depth + 1) for _ in range(self.rng.randint(0, 3))]
            return QuotedExpr(" ".join(render(d) for d in datums), tuple(datums))

    def random_datum(self, depth: int = 0) -> SyntaxNode:
        """Quoted data: atoms and possibly empty lists, special names allowed."""
        if depth >= self.max_depth or self.rng.random() < 0.4:
            if self.rng.random() < 0.1:
                return SymbolRef(self.rng.choice(sorted(RESERVED)))
            return self.random_atom()
        items = [self.random_datum(depth + 1) for _ in range(self.rng.randint(0, 3))]
        return DatumList(tuple(items))

    # -- operations ----------------------------------------------------------

    def do_random_operation(self):
        """Generate a tree and render it."""
        self.tree = self.random_tree()
        self.text = render(self.tree)
        self.max_text = max(self.max_text, len(self.text))
        self.record_op("render")

    def check_invariants(self):
        """Verify the rendered text reads back as the same tree."""
        tokens = tokenize(self.text)
        assert tokens == tokenize(self.text), "Tokenizer is not deterministic"

        tree = parse(tokens)
        assert tree == self.tree, (
            f"Round trip mismatch:\n  Source: {self.text}\n"
            f"  Expected: {self.tree!r}\n  Got: {tree!r}"
        )
        assert render(tree) == self.text

        # Lowering is total over reader output
        emit(tree)
