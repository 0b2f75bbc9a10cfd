# ssi_core/interpreter/__init__.py
"""Script execution over the sections of selected lines."""

from .host import InterpreterHost
from .line_driver import LineDriver, LinePhase
from .sandbox import ScriptRunner
from .section_api import SectionContext
from .selection_driver import ACTION, DEFAULT_SELECTION_CAP, MacroAction, run
from .tasks import DeferredTaskQueue, SelectionTracker

__all__ = [
    'ACTION',
    'DEFAULT_SELECTION_CAP',
    'DeferredTaskQueue',
    'InterpreterHost',
    'LineDriver',
    'LinePhase',
    'MacroAction',
    'ScriptRunner',
    'SectionContext',
    'SelectionTracker',
    'run',
]
