"""
BASIC Lexer - Tokenizes one source line at a time.

Handles:
- Whitespace-delimited words
- Parentheses as standalone tokens, even when written flush against a word

Tokens carry no type information. Whether a token is a number, a name or an
operator is decided by the parser from context. Operators must be separated
from their operands by whitespace, so ``A+B`` is a single token.
"""

import re
from typing import List


class Lexer:
    """Tokenizes BASIC source lines."""

    PAREN_RE = re.compile(r'([()])')

    def __init__(self, filename: str = "<input>"):
        self.filename = filename

    def tokenize(self, line: str) -> List[str]:
        """Split a line into tokens. Blank lines give an empty list."""
        spaced = self.PAREN_RE.sub(r' \1 ', line)
        return spaced.split()


def tokenize(line: str) -> List[str]:
    """Tokenize a single line with a default lexer."""
    return Lexer().tokenize(line)
