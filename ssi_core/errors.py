# ssi_core/errors.py
"""
Error taxonomy for the section interpreter.

Script faults are fatal for the whole selection pass. Lines written before
the fault keep their new text; there is no rollback.
"""

from __future__ import annotations


class InterpreterError(Exception):
    """Base class for all interpreter errors."""


class ScriptFault(InterpreterError):
    """A user script could not be compiled or failed while running."""

    kind = "script"

    def __init__(
        self,
        message: str,
        *,
        script_line: int | None = None,
        line_index: int | None = None,
        section: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.script_line = script_line  # line within the user script
        self.line_index = line_index  # document line being processed
        self.section = section

    def __str__(self) -> str:
        where = []
        if self.script_line is not None:
            where.append(f"script line {self.script_line}")
        if self.line_index is not None:
            where.append(f"subtitle line {self.line_index}")
        if self.section is not None:
            where.append(f"section {self.section}")
        if where:
            return f"{self.message} ({', '.join(where)})"
        return self.message


class ScriptCompileFault(ScriptFault):
    """Malformed script source."""

    kind = "compile"


class ScriptRuntimeFault(ScriptFault):
    """Exception raised while a section's script was executing."""

    kind = "runtime"


class TagArityMismatch(InterpreterError, ValueError):
    """Combinator arity differs from the tag's parameter count."""

    def __init__(self, expected: int, got: int, tag: str | None = None):
        self.expected = expected
        self.got = got
        self.tag = tag
        target = f"\\{tag}" if tag else "combinator"
        super().__init__(
            f"{target}: expected {expected} parameter(s), got {got}"
        )


class UnknownLineProperty(InterpreterError, KeyError):
    """modify_line() was asked for a property the line does not have."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown line property '{self.name}'"


class OperationCancelled(InterpreterError):
    """The user cancelled the operation. Not an error status."""
