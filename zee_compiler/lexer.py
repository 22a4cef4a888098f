"""
Lexer / Tokenizer for the Zee compiler.

Converts S-expression source text into a flat list of tokens for the
parser. The language has exactly five token kinds: parentheses,
identifiers (ASCII letters), numbers (ASCII digits) and double-quoted
string literals without escapes.

Tokens carry no position information; LexError reports the offset of
the offending character instead.
"""

from __future__ import annotations
import enum
import string
from dataclasses import dataclass
from typing import List

from .errors import CompileError


# ──────────────────────────────────────────────
# Token types
# ──────────────────────────────────────────────

class TokenType(enum.Enum):
    LPAREN = "("
    RPAREN = ")"
    IDENT = "IDENT"
    NUMBER = "NUMBER"
    STRING = "STRING"


# ──────────────────────────────────────────────
# Token data class
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str

    def __repr__(self):
        return f"Token({self.type.name}, {self.text!r})"


DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
QUOTE = '"'


# ──────────────────────────────────────────────
# Lexer
# ──────────────────────────────────────────────

class LexError(CompileError):
    phase = "lex"

    def __init__(self, message: str, pos: int, char: str = ""):
        self.pos = pos
        self.char = char
        super().__init__(message)

    def __str__(self):
        if self.char:
            return f"Lex error at offset {self.pos}: {self.message} ({self.char!r})"
        return f"Lex error at offset {self.pos}: {self.message}"


class Lexer:
    """Tokenizes Zee source into a list of Tokens."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def _peek(self) -> str:
        if self.pos >= len(self.source):
            raise LexError("unexpected end of input", self.pos)
        return self.source[self.pos]

    def _read_run(self, charset: frozenset) -> str:
        # A run must be closed by some other character before the input ends.
        start = self.pos
        while self._peek() in charset:
            self.pos += 1
        return self.source[start:self.pos]

    def _read_string_literal(self) -> str:
        self.pos += 1  # opening "
        start = self.pos
        while self._peek() != QUOTE:
            self.pos += 1
        text = self.source[start:self.pos]
        self.pos += 1  # closing "
        return text

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source and return a list of tokens."""
        tokens: List[Token] = []
        self.pos = 0

        while self.pos < len(self.source):
            ch = self.source[self.pos]

            if ch == "(":
                tokens.append(Token(TokenType.LPAREN, ch))
                self.pos += 1
                continue

            if ch == ")":
                tokens.append(Token(TokenType.RPAREN, ch))
                self.pos += 1
                continue

            if ch.isspace():
                self.pos += 1
                continue

            if ch in DIGITS:
                tokens.append(Token(TokenType.NUMBER, self._read_run(DIGITS)))
                continue

            if ch == QUOTE:
                tokens.append(Token(TokenType.STRING, self._read_string_literal()))
                continue

            if ch in LETTERS:
                tokens.append(Token(TokenType.IDENT, self._read_run(LETTERS)))
                continue

            raise LexError("illegal character", self.pos, ch)

        return tokens


def tokenize(source: str) -> List[Token]:
    """Convenience wrapper: tokenize ``source`` with a fresh Lexer."""
    return Lexer(source).tokenize()
