# ssi_core/interpreter/sandbox.py
"""
Compiling and running user scripts.

A script is compiled once per source text and executed once per section
with that section's bindings as its global namespace. Nothing is shared
between two executions except the compiled code object.
"""

from __future__ import annotations

import builtins
import math
from types import CodeType, TracebackType
from typing import Any

from ..errors import ScriptCompileFault, ScriptFault, ScriptRuntimeFault

SCRIPT_FILENAME = "<script>"

_SAFE_NAMES = (
    "abs", "all", "any", "bool", "dict", "divmod", "enumerate", "filter",
    "float", "format", "int", "isinstance", "len", "list", "map", "max",
    "min", "pow", "range", "repr", "reversed", "round", "set", "sorted",
    "str", "sum", "tuple", "zip",
    "ArithmeticError", "Exception", "IndexError", "KeyError", "TypeError",
    "ValueError", "ZeroDivisionError",
)

SAFE_BUILTINS: dict[str, Any] = {
    name: getattr(builtins, name) for name in _SAFE_NAMES if hasattr(builtins, name)
}


def _script_lineno(tb: TracebackType | None) -> int | None:
    lineno = None
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == SCRIPT_FILENAME:
            lineno = tb.tb_lineno
        tb = tb.tb_next
    return lineno


class ScriptRunner:
    """
    Executes user scripts in a restricted namespace.

    Args:
        builtins_mode: "safe" exposes a small set of pure builtins,
            "full" exposes the interpreter's complete builtins module
    """

    def __init__(self, builtins_mode: str = "safe"):
        if builtins_mode not in ("safe", "full"):
            raise ValueError(f"Unknown builtins mode: {builtins_mode}")
        self.builtins_mode = builtins_mode
        self._compiled: dict[str, CodeType] = {}

    def _builtins(self) -> dict[str, Any]:
        if self.builtins_mode == "full":
            return dict(vars(builtins))
        return dict(SAFE_BUILTINS)

    def compile(self, source: str) -> CodeType:
        code = self._compiled.get(source)
        if code is not None:
            return code
        try:
            code = compile(source, SCRIPT_FILENAME, "exec")
        except SyntaxError as e:
            raise ScriptCompileFault(f"SyntaxError: {e.msg}", script_line=e.lineno) from e
        except ValueError as e:
            raise ScriptCompileFault(f"Invalid script: {e}") from e
        self._compiled[source] = code
        return code

    def run(self, source: str, bindings: dict[str, Any]) -> ScriptFault | None:
        """
        Execute `source` with `bindings` as its globals.

        The bindings dict is updated in place, so names the script assigns
        (tag, text, ...) can be read back by the caller.

        Returns:
            The fault, or None when the script completed
        """
        try:
            code = self.compile(source)
        except ScriptCompileFault as fault:
            return fault

        bindings.setdefault("math", math)
        bindings["__builtins__"] = self._builtins()
        try:
            exec(code, bindings)
        except Exception as e:
            fault = ScriptRuntimeFault(
                f"{type(e).__name__}: {e}",
                script_line=_script_lineno(e.__traceback__),
            )
            fault.__cause__ = e
            return fault
        return None
