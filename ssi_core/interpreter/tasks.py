# ssi_core/interpreter/tasks.py
"""
Once-per-line effects and the selection they act on.

select(), duplicate() and modify_line() do not act while the script runs.
They queue a task that runs after every section of the line has been
processed and before the line is reassembled. Duplicates run before any
other task so that index renumbering is done before selections are
recorded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .host import InterpreterHost


class SelectionTracker:
    """
    The selection being iterated plus the selection being collected.

    Inserting a document line shifts every stored index at or after the
    insertion point, in the working selection, in the collected output and
    in the copy of the input selection, in the same step as the insertion.
    """

    def __init__(self, selection: list[int]):
        self.working: list[int] = list(selection)
        self.input: list[int] = list(selection)
        self.output: list[int] = []

    def __len__(self) -> int:
        return len(self.working)

    def line_at(self, cursor: int) -> int:
        """Document line index of 1-based selection position `cursor`."""
        return self.working[cursor - 1]

    def record_insertion(self, cursor: int, line_index: int) -> None:
        """
        A document line was inserted at `line_index`.

        The new line joins the working selection right after position
        `cursor` so it is visited next.
        """
        for indices in (self.working, self.output, self.input):
            for position, value in enumerate(indices):
                if value >= line_index:
                    indices[position] = value + 1
        self.working.insert(cursor, line_index)

    def select(self, line_index: int) -> None:
        self.output.append(line_index)

    def result(self) -> list[int]:
        """Collected selection, or the input selection if nothing was selected."""
        if self.output:
            return list(self.output)
        return list(self.input)


class TaskPriority(Enum):
    RUNS_FIRST = "runs_first"
    RUNS_NORMAL = "runs_normal"


@dataclass
class LineTaskContext:
    """What a deferred task may touch."""

    host: InterpreterHost
    tracker: SelectionTracker
    cursor: int  # 1-based position in the working selection
    line_index: int
    line: Any  # the line being modified
    original: Any  # copy of the line taken before any modification


class DeferredTask(ABC):
    kind: ClassVar[str] = ""
    priority: ClassVar[TaskPriority] = TaskPriority.RUNS_NORMAL

    @abstractmethod
    def run(self, ctx: LineTaskContext) -> None:
        ...


@dataclass
class SelectTask(DeferredTask):
    kind: ClassVar[str] = "select"

    def run(self, ctx: LineTaskContext) -> None:
        ctx.tracker.select(ctx.line_index)


@dataclass
class DuplicateTask(DeferredTask):
    kind: ClassVar[str] = "duplicate"
    priority: ClassVar[TaskPriority] = TaskPriority.RUNS_FIRST

    def run(self, ctx: LineTaskContext) -> None:
        new_index = ctx.line_index + 1
        ctx.host.insert_line(new_index, ctx.host.copy_line(ctx.original))
        ctx.tracker.record_insertion(ctx.cursor, new_index)


@dataclass
class ModifyLinePropertyTask(DeferredTask):
    name: str
    combinator: Callable[..., Any]

    kind: ClassVar[str] = "modify_line"

    def run(self, ctx: LineTaskContext) -> None:
        current = ctx.host.get_line_property(ctx.line, self.name)
        ctx.host.set_line_property(ctx.line, self.name, self.combinator(current))


class DeferredTaskQueue:
    """Two ordered lists: tasks that run first, then everything else."""

    def __init__(self):
        self._first: list[DeferredTask] = []
        self._normal: list[DeferredTask] = []

    def push(self, task: DeferredTask) -> None:
        if task.priority is TaskPriority.RUNS_FIRST:
            self._first.append(task)
        else:
            self._normal.append(task)

    def __iter__(self) -> Iterator[DeferredTask]:
        yield from self._first
        yield from self._normal

    def __len__(self) -> int:
        return len(self._first) + len(self._normal)

    def run_all(self, ctx: LineTaskContext) -> int:
        """Run every task once, in order, and empty the queue."""
        tasks = list(self)
        self._first.clear()
        self._normal.clear()
        for task in tasks:
            task.run(ctx)
        return len(tasks)
