"""Debug dumps of the token list and AST, formatted as ';;' comment lines."""

from __future__ import annotations
from typing import List, Sequence

from .lexer import Token
from .ast_nodes import ASTNode, Call, NumberLiteral, StringLiteral


def format_tokens(tokens: Sequence[Token]) -> str:
    lines = [";; BEGIN Token List Dump"]
    for tok in tokens:
        lines.append(f";; {tok.type.name}:{tok.text}")
    lines.append(";; END Token List Dump")
    return "\n".join(lines)


def _node_value(node: ASTNode) -> str:
    if isinstance(node, Call):
        return node.operator
    if isinstance(node, NumberLiteral):
        return node.text
    if isinstance(node, StringLiteral):
        return repr(node.text)
    return ""


def _format_node(node: ASTNode, indent: int, lines: List[str]):
    value = _node_value(node)
    label = f"{type(node).__name__}: {value}" if value else type(node).__name__
    lines.append(";; " + "  " * indent + label)
    for child in node.children:
        _format_node(child, indent + 1, lines)


def format_ast(ast: ASTNode) -> str:
    """Pretty-print an AST tree, one node per line, children indented."""
    lines = [";; BEGIN Ast Dump"]
    _format_node(ast, 0, lines)
    lines.append(";; END Ast Dump")
    return "\n".join(lines)
