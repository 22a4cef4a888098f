"""
AST Node definitions for the Zee compiler.

Defines the Abstract Syntax Tree produced by the parser and consumed by
the code generator. There are exactly four node kinds. All nodes are
frozen dataclasses and child sequences are tuples, so a tree cannot be
modified once the parser has built it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


# ──────────────────────────────────────────────
# Base AST node
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return ()


# ──────────────────────────────────────────────
# Top-level: Program
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Program(ASTNode):
    """Root node: the top-level forms in source order."""
    forms: Tuple[ASTNode, ...] = ()

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return self.forms


# ──────────────────────────────────────────────
# Forms
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Call(ASTNode):
    """Parenthesized form: (operator arg1 arg2 ...)."""
    operator: str
    arguments: Tuple[ASTNode, ...] = ()

    def __post_init__(self):
        if not self.operator:
            raise ValueError("Call requires a non-empty operator")

    @property
    def children(self) -> Tuple[ASTNode, ...]:
        return self.arguments

@dataclass(frozen=True)
class NumberLiteral(ASTNode):
    """Unsigned integer constant, kept as its digit string."""
    text: str = ""

@dataclass(frozen=True)
class StringLiteral(ASTNode):
    """String constant (accepted, but emits no code)."""
    text: str = ""
