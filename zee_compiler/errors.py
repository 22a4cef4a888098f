"""
Error types shared by every stage of the Zee compiler.

Each stage raises its own subclass (LexError, ParseError, CodeGenError);
CompileError is the single umbrella the orchestrator reports.
"""

from __future__ import annotations


class CompileError(Exception):
    """Base class for all compilation failures."""

    phase = "compile"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def describe(self) -> str:
        return f"{self.phase} error: {self.message}"
