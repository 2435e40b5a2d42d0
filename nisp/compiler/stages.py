"""
nisp.compiler.stages - Print the output of every compiler phase

Useful when working on the reader or the lowering pass:

    debug_stages("(+ 1 2)", out=sys.stdout)
"""

from typing import Optional, TextIO

from nisp.compiler.lowering import lower
from nisp.compiler.patterns import DEFAULT_PATTERNS, TokenPattern
from nisp.compiler.printer import render
from nisp.compiler.reader import parse, tokenize


def _section(title: str, body: str) -> str:
    return f"=== {title} ===\n{body}\n"


def debug_stages(
    src: str,
    out: Optional[TextIO] = None,
    table: tuple[TokenPattern, ...] = DEFAULT_PATTERNS,
) -> str:
    """
    Run the pipeline on src and describe each stage.

    The report is returned, and also written to `out` when given. Lex and
    parse errors propagate; nothing is written for a failed run.
    """
    tokens = tokenize(src, table)
    tree = parse(tokens)

    report = "\n".join(
        [
            _section("Token Stream", "\n".join(repr(tok) for tok in tokens)),
            _section("Syntax Tree", repr(tree)),
            _section("Rendered", render(tree)),
            _section("Lowered", lower(tree)),
        ]
    )
    if out is not None:
        out.write(report)
        out.flush()
    return report


__all__ = ["debug_stages"]
