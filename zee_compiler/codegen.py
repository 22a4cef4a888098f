"""
Zee VM Code Generator.

Translates the AST into the textual assembly of the Zee stack machine.

Traversal is a pre-order/post-order visitor: every node gets an
``enter`` emission before its children are visited and an ``exit``
emission after. The per-kind rules live in the EMITTERS table:

    Program        enter: START        exit: HALT
    Call           enter: -            exit: OPERATOR (upper-cased)
    NumberLiteral  enter: -            exit: PUSH #<digits>
    StringLiteral  enter: -            exit: -

Because a Call's arguments are emitted before its own mnemonic, the
listing is in post-order: operands are pushed left to right, then the
operator instruction consumes them from the stack.

Output format:
  - comment lines start with ';;' and are never indented
  - mnemonic and PUSH lines are indented per the target profile
    (two tabs for the "zee" profile)
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple, Type

from .errors import CompileError
from .ast_nodes import ASTNode, Call, NumberLiteral, Program, StringLiteral
from .parser import DEFAULT_MAX_DEPTH


# ──────────────────────────────────────────────
# Target profiles
# ──────────────────────────────────────────────

TARGET_PROFILES = {
    "zee": {
        "indent": "\t\t",
        "comments": True,
        "description": "Zee VM textual assembly",
    },
    "bare": {
        "indent": "",
        "comments": False,
        "description": "Unindented mnemonics, no comment lines",
    },
}

DEFAULT_TARGET = "zee"


class CodeGenError(CompileError):
    phase = "codegen"

    def __init__(self, message: str, node: Optional[ASTNode] = None):
        self.node = node
        super().__init__(message)

    def __str__(self):
        if self.node is not None:
            return f"Code generation error: {self.message} ({type(self.node).__name__})"
        return f"Code generation error: {self.message}"


# ──────────────────────────────────────────────
# Emission rules
# ──────────────────────────────────────────────

# (node, parent, profile) -> lines; an empty list is an empty emission.
Emission = Callable[[ASTNode, Optional[ASTNode], dict], List[str]]


def _instr(profile: dict, text: str) -> str:
    return profile["indent"] + text


def _comment(profile: dict, text: str) -> List[str]:
    return [f";; {text}"] if profile["comments"] else []


def _nothing(node, parent, profile) -> List[str]:
    return []


def _enter_program(node, parent, profile) -> List[str]:
    return _comment(profile, "Begin program code") + [_instr(profile, "START")]


def _exit_program(node, parent, profile) -> List[str]:
    return _comment(profile, "exit program") + [_instr(profile, "HALT")]


def _exit_call(node, parent, profile) -> List[str]:
    return [_instr(profile, node.operator.upper())]


def _exit_number(node, parent, profile) -> List[str]:
    return [_instr(profile, f"PUSH #{node.text}")]


EMITTERS: Dict[Type[ASTNode], Tuple[Emission, Emission]] = {
    Program: (_enter_program, _exit_program),
    Call: (_nothing, _exit_call),
    NumberLiteral: (_nothing, _exit_number),
    # not yet supported by the VM
    StringLiteral: (_nothing, _nothing),
}


# ──────────────────────────────────────────────
# Generator
# ──────────────────────────────────────────────

class CodeGenerator:
    """Generates Zee VM assembly from an AST.

    The generator holds only configuration. Each call to generate()
    builds its output in a fresh list, so one instance can be shared
    between callers and threads.
    """

    def __init__(self, target: str = DEFAULT_TARGET,
                 preserve_blank_lines: bool = False,
                 max_depth: int = DEFAULT_MAX_DEPTH):
        self.target = target
        self.profile = TARGET_PROFILES.get(target, TARGET_PROFILES[DEFAULT_TARGET])
        self.preserve_blank_lines = preserve_blank_lines
        self.max_depth = max_depth

    def generate(self, program: ASTNode) -> str:
        """Generate the complete instruction listing for ``program``."""
        out: List[str] = []
        try:
            self._visit(program, None, out, 0)
        except RecursionError:
            raise CodeGenError("nesting too deep", program) from None
        return "\n".join(out) + "\n"

    def _emit(self, out: List[str], lines: List[str]):
        if lines:
            out.extend(lines)
        elif self.preserve_blank_lines:
            out.append("")

    def _visit(self, node: ASTNode, parent: Optional[ASTNode],
               out: List[str], depth: int):
        try:
            enter, exit_ = EMITTERS[type(node)]
        except KeyError:
            raise CodeGenError("unknown node kind", node) from None
        # Every Call counts, matching the parser.
        if isinstance(node, Call) and depth > self.max_depth:
            raise CodeGenError("nesting too deep", node)

        self._emit(out, enter(node, parent, self.profile))
        for child in node.children:
            self._visit(child, node, out, depth + 1)
        self._emit(out, exit_(node, parent, self.profile))
