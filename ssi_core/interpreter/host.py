# ssi_core/interpreter/host.py
"""
Capabilities the interpreter needs from the document it runs on.

The interpreter never loads, saves or displays anything itself. A host
wraps a subtitle document and supplies style lookup, geometry, line access,
script execution, progress, undo checkpoints, logging and cancellation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..errors import OperationCancelled, ScriptFault
from ..tags.position import Margins, Point, numpad_anchor
from .sandbox import ScriptRunner


class InterpreterHost(ABC):
    """Abstract document host."""

    def __init__(self, script_runner: ScriptRunner | None = None):
        self.script_runner = script_runner or ScriptRunner()

    # --- Styles and geometry -------------------------------------------------

    @abstractmethod
    def style_for_line(self, line: Any) -> Any:
        """Resolved style of a line (pysubs2.SSAStyle compatible)."""

    @abstractmethod
    def style_by_name(self, name: str) -> Any | None:
        """Style with the given name, None when the document has none."""

    @abstractmethod
    def effective_margins(self, line: Any) -> Margins:
        """Line margins, falling back to the style's for zero values."""

    @abstractmethod
    def frame_size(self) -> tuple[float, float]:
        """(width, height) of the coordinate space of the document."""

    def line_position(self, line: Any) -> Point:
        """Anchor of a line without positioning tags, from its style alignment."""
        style = self.style_for_line(line)
        return numpad_anchor(int(style.alignment), self.effective_margins(line), self.frame_size())

    # --- Lines ---------------------------------------------------------------

    @abstractmethod
    def get_line(self, index: int) -> Any:
        ...

    @abstractmethod
    def set_line(self, index: int, line: Any) -> None:
        ...

    @abstractmethod
    def insert_line(self, index: int, line: Any) -> None:
        """Insert a line so that it ends up at `index`."""

    @abstractmethod
    def copy_line(self, line: Any) -> Any:
        ...

    @abstractmethod
    def has_line_property(self, name: str) -> bool:
        ...

    @abstractmethod
    def get_line_property(self, line: Any, name: str) -> Any:
        ...

    @abstractmethod
    def set_line_property(self, line: Any, name: str, value: Any) -> None:
        ...

    # --- Script execution ----------------------------------------------------

    def compile_and_run(self, source: str, bindings: dict[str, Any]) -> ScriptFault | None:
        """Run the user script against one section's bindings."""
        return self.script_runner.run(source, bindings)

    # --- Reporting -----------------------------------------------------------

    def report_progress(self, fraction: float) -> None:
        pass

    def mark_undo_checkpoint(self, label: str) -> None:
        pass

    @abstractmethod
    def log_message(self, text: str) -> None:
        ...

    def cancel_operation(self) -> None:
        """Abort the running operation. Always raises."""
        raise OperationCancelled("Operation cancelled")
