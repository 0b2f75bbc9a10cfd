# ssi_core/subtitles/data.py
"""
Result and history records for operations applied to a subtitle document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class OperationRecord:
    """Record of an operation applied to a document."""

    operation: str  # 'section_script'
    timestamp: datetime = field(default_factory=datetime.now)
    parameters: dict[str, Any] = field(default_factory=dict)
    events_affected: int = 0
    events_added: int = 0
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "timestamp": self.timestamp.isoformat(),
            "parameters": self.parameters,
            "events_affected": self.events_affected,
            "events_added": self.events_added,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OperationRecord:
        timestamp_raw = data.get("timestamp")
        timestamp = datetime.now()
        if timestamp_raw:
            try:
                timestamp = datetime.fromisoformat(timestamp_raw)
            except ValueError:
                timestamp = datetime.now()
        return cls(
            operation=data.get("operation", ""),
            timestamp=timestamp,
            parameters=data.get("parameters", {}) or {},
            events_affected=int(data.get("events_affected", 0)),
            events_added=int(data.get("events_added", 0)),
            summary=data.get("summary", ""),
        )


@dataclass
class OperationResult:
    """Result of applying an operation."""

    success: bool
    operation: str
    events_affected: int = 0
    events_added: int = 0
    selection: list[int] = field(default_factory=list)
    summary: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
