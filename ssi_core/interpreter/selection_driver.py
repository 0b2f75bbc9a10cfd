# ssi_core/interpreter/selection_driver.py
"""
Entry point of the interpreter: iterate a selection, one line at a time.

The working selection can grow while it is iterated (duplicate() inserts
the copy right after the current line), so its length is re-read on every
step. A pass stops once the working selection holds more than
DEFAULT_SELECTION_CAP lines; that is not an error.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .host import InterpreterHost
from .line_driver import LineDriver
from .tasks import SelectionTracker

DEFAULT_SELECTION_CAP = 1000

ACTION_LABEL = "Section Interpreter"
ACTION_DESCRIPTION = "Run Python code on-the-fly"


def run(
    host: InterpreterHost,
    selection: Sequence[int],
    script: str,
    cap: int = DEFAULT_SELECTION_CAP,
) -> list[int]:
    """
    Apply `script` to every section of every selected line.

    Args:
        host: Document host
        selection: Document line indices, in visiting order
        script: User script source
        cap: Maximum size of the working selection

    Returns:
        The lines passed to select(), or the input selection when select()
        was never called. That input selection is not returned verbatim:
        indices past a line inserted by duplicate() are shifted by one per
        insertion, so [1, 3] with a duplicate of line 1 comes back as
        [1, 4] and still names the same lines

    Raises:
        ScriptFault: The script failed; lines already processed keep
            their changes
        OperationCancelled: The host cancelled the operation
    """
    tracker = SelectionTracker(list(selection))
    driver = LineDriver(host, script, tracker)

    i = 1
    while i <= len(tracker) and len(tracker) <= cap:
        driver.process(i, tracker.line_at(i))
        host.report_progress(i / len(tracker))
        i += 1

    if len(tracker) > cap:
        host.log_message(
            f"[Interpreter] Selection grew past {cap} lines; stopped after {i - 1} line(s)."
        )

    host.mark_undo_checkpoint(ACTION_LABEL)
    return tracker.result()


@dataclass(frozen=True)
class MacroAction:
    """A named, runnable action as presented to a host application."""

    label: str
    description: str

    def __call__(
        self,
        host: InterpreterHost,
        selection: Sequence[int],
        script: str,
        cap: int = DEFAULT_SELECTION_CAP,
    ) -> list[int]:
        return run(host, selection, script, cap)


ACTION = MacroAction(label=ACTION_LABEL, description=ACTION_DESCRIPTION)
