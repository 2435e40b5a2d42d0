"""
nisp.compiler.patterns - Token kinds and the ordered pattern table

The tokenizer is driven by a table of (kind, regex) entries. The table is
tried in order at every position and the first entry that matches wins, so
ordering encodes precedence: FLOAT must come before INTEGER (or "5.5" would
lex as 5 followed by garbage) and both must come before SYMBOL, since digits
and "-" are valid symbol characters.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union


class TokenKind(Enum):
    """Closed set of token kinds."""

    OPAREN = "oparen"  # (
    CPAREN = "cparen"  # )
    FLOAT = "float"  # 5.5
    INTEGER = "integer"  # 5
    STRING = "string"  # "str"
    SYMBOL = "symbol"  # +


@dataclass(frozen=True)
class TokenPattern:
    """One entry of the pattern table: a token kind and its matcher."""

    kind: TokenKind
    regex: "re.Pattern[str]"

    def match(self, text: str, pos: int = 0) -> Optional[str]:
        """Return the non-empty prefix of text[pos:] matched, or None."""
        m = self.regex.match(text, pos)
        if m is None or m.end() == pos:
            return None
        return m.group(0)


def make_pattern_table(
    entries: Iterable[tuple[TokenKind, Union[str, "re.Pattern[str]"]]],
) -> tuple[TokenPattern, ...]:
    """
    Build an ordered pattern table from (kind, regex) pairs.

    Regexes may be given as strings or precompiled patterns. Order is kept
    as given.
    """
    table = []
    for kind, regex in entries:
        if not isinstance(kind, TokenKind):
            raise ValueError(f"pattern table kind must be a TokenKind, got {kind!r}")
        if isinstance(regex, str):
            regex = re.compile(regex)
        table.append(TokenPattern(kind, regex))
    if not table:
        raise ValueError("pattern table must have at least one entry")
    return tuple(table)


DEFAULT_PATTERNS = make_pattern_table(
    [
        (TokenKind.OPAREN, r"\("),
        (TokenKind.CPAREN, r"\)"),
        (TokenKind.FLOAT, r"-?[0-9]+\.[0-9]+"),
        (TokenKind.INTEGER, r"-?[0-9]+"),
        (TokenKind.STRING, r'"[^"]*"'),
        # Catch-all, must stay last
        (TokenKind.SYMBOL, r"[A-Za-z0-9+=!^%*/<>-]+"),
    ]
)


__all__ = [
    "TokenKind",
    "TokenPattern",
    "make_pattern_table",
    "DEFAULT_PATTERNS",
]
