# ssi_core/interpreter/line_driver.py
"""
Runs the user script over every section of a single line.

Segmenting -> resolving defaults -> script per section -> deferred tasks ->
reassembling -> writing back. A script fault aborts the whole pass: it is
logged and raised, and lines already written stay written.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ..errors import OperationCancelled, ScriptFault, ScriptRuntimeFault, UnknownLineProperty
from ..tags.combinators import add, append, multiply, replace
from ..tags.position import resolve_org, resolve_pos
from ..tags.segmenter import reassemble, segment
from ..tags.state import default_state, resolve_states
from .host import InterpreterHost
from .section_api import SectionContext
from .tasks import (
    DeferredTaskQueue,
    DuplicateTask,
    LineTaskContext,
    ModifyLinePropertyTask,
    SelectionTracker,
    SelectTask,
)


class LinePhase(Enum):
    SEGMENTING = "segmenting"
    RESOLVING_DEFAULTS = "resolving_defaults"
    PER_SECTION_SCRIPT = "per_section_script"
    RUNNING_DEFERRED_TASKS = "running_deferred_tasks"
    REASSEMBLING = "reassembling"
    WRITING_BACK = "writing_back"
    DONE = "done"


class LineDriver:
    """
    Processes one line at a time for a selection pass.

    Args:
        host: Document host
        script: User script source
        tracker: Selection state shared with the selection driver
    """

    def __init__(self, host: InterpreterHost, script: str, tracker: SelectionTracker):
        self.host = host
        self.script = script
        self.tracker = tracker
        self.phase = LinePhase.DONE

    def _log(self, *values: Any, sep: str = " ", end: str | None = None) -> None:
        # Every call is one log line; `end` is accepted for print() compatibility.
        self.host.log_message(sep.join(str(value) for value in values))

    def _line_functions(self, queue: DeferredTaskQueue, section_index: int) -> dict[str, Any]:
        """select/duplicate/modify_line, live only while section 1 runs."""
        first = section_index == 1

        def select() -> None:
            if first:
                queue.push(SelectTask())

        def duplicate() -> None:
            if first:
                queue.push(DuplicateTask())

        def modify_line(name: str, combinator: Any) -> None:
            if not first:
                return
            if not self.host.has_line_property(name):
                raise UnknownLineProperty(name)
            queue.push(ModifyLinePropertyTask(name, combinator))

        return {"select": select, "duplicate": duplicate, "modify_line": modify_line}

    def process(self, i: int, li: int) -> None:
        """
        Run the script on document line `li`, visited at selection position `i`.

        Raises:
            ScriptFault: The script failed to compile or raised
        """
        host = self.host
        line = host.get_line(li)
        original = host.copy_line(line)

        self.phase = LinePhase.SEGMENTING
        sections = segment(line.text)

        self.phase = LinePhase.RESOLVING_DEFAULTS
        style = host.style_for_line(line)
        margins = host.effective_margins(line)
        frame = host.frame_size()
        anchor = host.line_position(line)
        pos = resolve_pos(line.text, margins, frame, anchor)
        org = resolve_org(line.text, margins, frame, anchor)

        def reset_defaults(style_name: str) -> dict[str, Any]:
            target = host.style_by_name(style_name) if style_name else None
            return default_state(target or style, pos, org)

        states = resolve_states(default_state(style, pos, org), sections, reset_defaults)

        self.phase = LinePhase.PER_SECTION_SCRIPT
        queue = DeferredTaskQueue()
        common = {
            "i": i,
            "li": li,
            "pos": pos,
            "org": org,
            "add": add,
            "multiply": multiply,
            "replace": replace,
            "append": append,
            "log": self._log,
            "print": self._log,
        }
        for j, (section, state) in enumerate(zip(sections, states), start=1):
            ctx = SectionContext(section, state, j)
            bindings = dict(common)
            bindings["j"] = j
            bindings.update(ctx.bindings)
            bindings.update(ctx.functions())
            bindings.update(self._line_functions(queue, j))
            ctx.bindings = bindings

            fault = host.compile_and_run(self.script, bindings)
            if fault is not None:
                self._fail(fault, li, j)
            ctx.commit()

        self.phase = LinePhase.RUNNING_DEFERRED_TASKS
        try:
            queue.run_all(LineTaskContext(
                host=host,
                tracker=self.tracker,
                cursor=i,
                line_index=li,
                line=line,
                original=original,
            ))
        except (ScriptFault, OperationCancelled):
            raise
        except Exception as e:
            # Deferred tasks are queued by section 1.
            fault = ScriptRuntimeFault(f"{type(e).__name__}: {e}")
            fault.__cause__ = e
            self._fail(fault, li, 1)

        self.phase = LinePhase.REASSEMBLING
        line.text = reassemble(sections)

        self.phase = LinePhase.WRITING_BACK
        # A duplicate inserted after li leaves li itself in place.
        host.set_line(li, line)
        self.phase = LinePhase.DONE

    def _fail(self, fault: ScriptFault, li: int, j: int) -> None:
        fault.line_index = li
        fault.section = j
        self.host.log_message(f"[Interpreter] ERROR: {fault}")
        raise fault
