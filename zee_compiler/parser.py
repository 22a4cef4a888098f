"""
Recursive-descent parser for the Zee compiler.

Parses the token list from the Lexer into the AST defined in ast_nodes.
The grammar is the bare S-expression subset:

    program := form*
    form    := NUMBER | STRING | '(' IDENT form* ')'

A single recursive procedure, ``walk``, reads one form from a
TokenCursor. When it meets ')' it returns None, which tells the
enclosing call that its argument list is complete. A ')' reaching the
top level has no enclosing form and is reported as unmatched.
"""

from __future__ import annotations
from typing import List, Optional, Sequence

from .errors import CompileError
from .lexer import Token, TokenType
from .ast_nodes import ASTNode, Call, NumberLiteral, Program, StringLiteral


DEFAULT_MAX_DEPTH = 256


class ParseError(CompileError):
    phase = "parse"

    def __init__(self, message: str, token: Optional[Token] = None):
        self.token = token
        super().__init__(message)

    def __str__(self):
        if self.token is not None:
            return (f"Parse error: {self.message} "
                    f"(got {self.token.type.name} = {self.token.text!r})")
        return f"Parse error: {self.message}"


class TokenCursor:
    """Explicit read position over a token sequence."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def next(self) -> Token:
        if self.at_end():
            raise ParseError("unexpected end of tokens")
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok


class Parser:
    """Recursive descent parser producing a Program from tokens."""

    def __init__(self, tokens: Sequence[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        self.cursor = TokenCursor(tokens)
        self.max_depth = max_depth

    # ── Top-level parsing ─────────────────────

    def parse(self) -> Program:
        """Parse the full token stream into a Program AST."""
        forms: List[ASTNode] = []
        try:
            while not self.cursor.at_end():
                tok = self.cursor.tokens[self.cursor.pos]
                form = self.walk()
                if form is None:
                    raise ParseError("unmatched close paren", tok)
                forms.append(form)
        except RecursionError:
            raise ParseError("nesting too deep") from None
        return Program(forms=tuple(forms))

    # ── Forms ─────────────────────────────────

    def walk(self, depth: int = 0) -> Optional[ASTNode]:
        """Read one form. Returns None when the next token closes a form."""
        tok = self.cursor.next()

        if tok.type == TokenType.NUMBER:
            return NumberLiteral(text=tok.text)

        if tok.type == TokenType.STRING:
            return StringLiteral(text=tok.text)

        if tok.type == TokenType.LPAREN:
            return self._parse_call(tok, depth + 1)

        if tok.type == TokenType.RPAREN:
            return None

        raise ParseError("unknown token", tok)

    def _parse_call(self, open_tok: Token, depth: int) -> Call:
        if depth > self.max_depth:
            raise ParseError("nesting too deep", open_tok)

        op_tok = self.cursor.next()
        if op_tok.type != TokenType.IDENT:
            raise ParseError("missing operator", op_tok)

        arguments: List[ASTNode] = []
        while True:
            arg = self.walk(depth)
            if arg is None:
                break
            arguments.append(arg)

        return Call(operator=op_tok.text, arguments=tuple(arguments))


def parse(tokens: Sequence[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> Program:
    """Convenience wrapper: parse ``tokens`` with a fresh Parser."""
    return Parser(tokens, max_depth=max_depth).parse()
