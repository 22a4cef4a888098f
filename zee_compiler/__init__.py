"""
Zee Compiler
============
Translates a minimal S-expression language into textual assembly for
the Zee stack-based virtual machine.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌────────────┐
    │  Source  │───>│  Lexer   │───>│  Parser  │───>│  CodeGen   │
    │  (str)   │    │ (tokens) │    │  (AST)   │    │ (Zee text) │
    └──────────┘    └──────────┘    └──────────┘    └────────────┘

    - lexer.py:     Character scanner -> Token list
    - parser.py:    Recursive descent over a TokenCursor -> Program
    - ast_nodes.py: Frozen dataclass tree (Program, Call, literals)
    - codegen.py:   Enter/exit emission table + tree walk -> listing
    - dump.py:      Token / AST debug dumps

Example:
    >>> print(compile_source("(add 2 3)", target="bare"), end="")
    START
    PUSH #2
    PUSH #3
    ADD
    HALT
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

__version__ = "0.1.0"

from .errors import CompileError
from .lexer import Lexer, LexError, Token, TokenType, tokenize
from .ast_nodes import ASTNode, Call, NumberLiteral, Program, StringLiteral
from .parser import DEFAULT_MAX_DEPTH, ParseError, Parser, TokenCursor, parse
from .codegen import CodeGenerator, CodeGenError, DEFAULT_TARGET, EMITTERS, TARGET_PROFILES
from .dump import format_ast, format_tokens

logger = logging.getLogger(__name__)


def compile_source(source: str, *, target: str = DEFAULT_TARGET,
                   preserve_blank_lines: bool = False,
                   max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Compile Zee source to an instruction listing.

    Full pipeline: Lexer -> Parser -> AST -> CodeGenerator.

    Args:
        source: Program text, e.g. "(print (add 2 3))".
        target: Output profile ('zee' or 'bare'); unknown names fall back to 'zee'.
        preserve_blank_lines: Keep a blank line for every empty emission.
        max_depth: Deepest parenthesis nesting accepted.

    Returns:
        The newline-terminated listing.

    Raises:
        LexError, ParseError or CodeGenError (all CompileError).
    """
    tokens = Lexer(source).tokenize()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tokens:\n%s", format_tokens(tokens))

    ast = Parser(tokens, max_depth=max_depth).parse()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("ast:\n%s", format_ast(ast))

    gen = CodeGenerator(target=target, preserve_blank_lines=preserve_blank_lines,
                        max_depth=max_depth)
    return gen.generate(ast)


@dataclass(frozen=True)
class CompileResult:
    """Outcome of compile(): either ``output`` or ``error`` is set."""
    output: Optional[str] = None
    error: Optional[CompileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def phase(self) -> Optional[str]:
        return self.error.phase if self.error is not None else None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.output


def compile(source: str, **options) -> CompileResult:
    """Compile ``source`` and report failure as a value instead of raising.

    Accepts the same keyword options as compile_source(). A failure is
    logged at ERROR level before it is returned.
    """
    try:
        return CompileResult(output=compile_source(source, **options))
    except CompileError as e:
        logger.error("%s", e.describe())
        return CompileResult(error=e)
