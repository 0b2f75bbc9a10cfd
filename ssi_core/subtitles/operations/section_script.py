# ssi_core/subtitles/operations/section_script.py
"""
Section script operation for SubtitleDocument.

Runs a user script over every section of the selected lines and reports the
outcome as an OperationResult, the same way the other document operations
report theirs.
"""
from __future__ import annotations

import traceback
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from ...errors import OperationCancelled, ScriptFault
from ...interpreter.selection_driver import DEFAULT_SELECTION_CAP, run
from ..data import OperationRecord, OperationResult

if TYPE_CHECKING:
    from ..document import SubtitleDocument

OPERATION = 'section_script'


def apply_section_script(
    document: 'SubtitleDocument',
    selection: Sequence[int],
    script: str,
    cap: int | None = None,
) -> OperationResult:
    """
    Run `script` on the selected lines of a document.

    Args:
        document: Document to modify in place
        selection: Event indices to visit, in order
        script: Python source run once per section
        cap: Selection size limit; defaults to the document's
            'selection_cap' setting

    Returns:
        OperationResult. On a script fault, lines processed before the
        fault stay modified and success is False.
    """
    log = document.log_message

    if not script.strip():
        return OperationResult(
            success=True,
            operation=OPERATION,
            selection=list(selection),
            summary='No script provided'
        )

    if cap is None:
        cap = int(document.config.get('selection_cap', DEFAULT_SELECTION_CAP))

    events_before = len(document.subs.events)
    log(f"[Interpreter] Running on {len(selection)} line(s)")

    try:
        new_selection = run(document, selection, script, cap)
    except OperationCancelled:
        log("[Interpreter] Cancelled")
        return OperationResult(
            success=False,
            operation=OPERATION,
            events_added=len(document.subs.events) - events_before,
            summary='Cancelled'
        )
    except ScriptFault as e:
        if e.__cause__ is not None:
            log(''.join(traceback.format_exception(e.__cause__)).rstrip())
        return OperationResult(
            success=False,
            operation=OPERATION,
            events_added=len(document.subs.events) - events_before,
            summary='Script failed',
            details={'kind': e.kind, 'script_line': e.script_line,
                     'line_index': e.line_index, 'section': e.section},
            error=str(e)
        )

    events_added = len(document.subs.events) - events_before
    summary = f"Processed {len(selection)} line(s)"
    if events_added:
        summary += f", added {events_added}"

    record = OperationRecord(
        operation=OPERATION,
        timestamp=datetime.now(),
        parameters={'script': script, 'selection_size': len(selection), 'cap': cap},
        events_affected=len(selection) + events_added,
        events_added=events_added,
        summary=summary
    )
    document.operations.append(record)

    log(f"[Interpreter] {summary}")

    return OperationResult(
        success=True,
        operation=OPERATION,
        events_affected=record.events_affected,
        events_added=events_added,
        selection=new_selection,
        summary=summary
    )
