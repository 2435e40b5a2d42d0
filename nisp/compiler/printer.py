"""
nisp.compiler.printer - Regenerate source text from syntax trees

render() is the inverse of the reader up to whitespace and numeral
spelling: for source without quotes or non-canonical numbers,

    render(parse_str(src)) == normalize_whitespace(src)
"""

import re
from decimal import Decimal

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

_SPACE_RUN = re.compile(r"\s+")


def format_float(value: float) -> str:
    """
    Format a float so that it reads back as a FLOAT token.

    repr() is the shortest round-tripping spelling, but switches to
    exponent notation for large and small magnitudes, which the tokenizer
    does not accept. Those are expanded to plain decimal.
    """
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


def render(node: SyntaxNode) -> str:
    """Render a syntax tree back to normalized source text."""
    if isinstance(node, Application):
        if not node.operands:
            return f"({render(node.operator)})"
        operands = " ".join(render(operand) for operand in node.operands)
        return f"({render(node.operator)} {operands})"
    if isinstance(node, LambdaExpr):
        return f"(lambda ({' '.join(node.parameters)}) {render(node.body)})"
    if isinstance(node, QuotedExpr):
        return f"(quote {node.raw})"
    if isinstance(node, DatumList):
        return f"({' '.join(render(item) for item in node.items)})"
    if isinstance(node, IntegerLiteral):
        return str(node.value)
    if isinstance(node, FloatLiteral):
        return format_float(node.value)
    if isinstance(node, StringLiteral):
        return node.value
    if isinstance(node, SymbolRef):
        return node.name
    raise TypeError(f"cannot render {type(node).__name__}")


def normalize_whitespace(src: str) -> str:
    """
    Normalize source spacing the way render() lays it out.

    Whitespace runs collapse to one space, and spaces just inside parens
    are dropped. String literals are not protected, so this is only meant
    for comparing sources without embedded whitespace in strings.
    """
    text = _SPACE_RUN.sub(" ", src).strip()
    return text.replace("( ", "(").replace(" )", ")")


__all__ = [
    "render",
    "format_float",
    "normalize_whitespace",
]
