# ssi_core/subtitles/document.py
"""
pysubs2-backed document host for the section interpreter.

Line indices are positions in SSAFile.events (0-based). Line properties are
addressed by the names scripts use with modify_line() (layer, start_time,
actor, margin_l, comment, ...) and mapped onto SSAEvent attributes.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pysubs2

from ..interpreter.host import InterpreterHost
from ..interpreter.sandbox import ScriptRunner
from ..tags.position import Margins
from .data import OperationRecord

# Script-facing name -> SSAEvent attribute. "comment" is handled on its own.
LINE_PROPERTIES: dict[str, str] = {
    "layer": "layer",
    "start_time": "start",
    "start": "start",
    "end_time": "end",
    "end": "end",
    "style": "style",
    "actor": "name",
    "name": "name",
    "margin_l": "marginl",
    "margin_r": "marginr",
    "margin_t": "marginv",
    "margin_b": "marginv",
    "margin_v": "marginv",
    "effect": "effect",
    "comment": "type",
}

_INT_ATTRIBUTES = {"layer", "start", "end", "marginl", "marginr", "marginv"}

# ASS defaults when the script header does not say.
DEFAULT_PLAY_RES = (384, 288)


def frame_size_from_info(info: dict[str, str]) -> tuple[float, float]:
    """
    Coordinate space from PlayResX/PlayResY.

    A missing axis is derived from the other at 4:3, except that a 1280
    wide script is 1024 tall (and the reverse). Neither present means
    384x288.
    """
    def _read(key: str) -> float | None:
        try:
            value = float(info.get(key, "") or 0)
        except ValueError:
            return None
        return value if value > 0 else None

    width = _read("PlayResX")
    height = _read("PlayResY")

    if width is None and height is None:
        return DEFAULT_PLAY_RES
    if width is None:
        width = 1280 if height == 1024 else height * 4 / 3
    elif height is None:
        height = 1024 if width == 1280 else width * 3 / 4
    return width, height


class SubtitleDocument(InterpreterHost):
    """
    An SSAFile plus the callbacks of the run that works on it.

    Args:
        subs: The loaded document
        config: Settings dict (AppConfig.settings or a plain dict)
        log_callback: Receives timestamped log lines
        progress_callback: Receives the completed fraction of a pass
        script_runner: Overrides the runner built from config
    """

    def __init__(
        self,
        subs: pysubs2.SSAFile,
        config: dict | None = None,
        log_callback: Callable[[str], None] | None = None,
        progress_callback: Callable[[float], None] | None = None,
        script_runner: ScriptRunner | None = None,
    ):
        self.config = config or {}
        super().__init__(script_runner or ScriptRunner(self.config.get("script_builtins", "safe")))
        self.subs = subs
        self.path: Path | None = None
        self.log = log_callback
        self.progress_callback = progress_callback
        self.undo_points: list[str] = []
        self.operations: list[OperationRecord] = []
        self._last_progress = -1

    # --- Loading / saving ----------------------------------------------------

    @classmethod
    def load(cls, path: str | Path, config: dict | None = None, **kwargs) -> SubtitleDocument:
        config = config or {}
        encoding = config.get("input_encoding", "utf-8") or "utf-8"
        try:
            subs = pysubs2.load(str(path), encoding=encoding)
        except Exception:
            subs = pysubs2.load(str(path))
        document = cls(subs, config, **kwargs)
        document.path = Path(path)
        return document

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("No output path given and document was not loaded from a file")
        encoding = self.config.get("output_encoding", "utf-8") or "utf-8"
        self.subs.save(str(target), encoding=encoding, format_=target.suffix[1:] or "ass")
        return target

    # --- Logging -------------------------------------------------------------

    def _log_message(self, message: str) -> None:
        """Formats and sends a message to the log callback."""
        if not self.log:
            return
        ts = datetime.now().strftime('%H:%M:%S')
        self.log(f'[{ts}] {message}')

    def log_message(self, text: str) -> None:
        self._log_message(text)

    def report_progress(self, fraction: float) -> None:
        if self.progress_callback:
            self.progress_callback(fraction)

        step = max(1, int(self.config.get('log_progress_step', 20)))
        pct = int(fraction * 100)
        if self._last_progress < 0 or pct >= self._last_progress + step or pct == 100:
            if pct != self._last_progress:
                self._log_message(f'Progress: {pct}%')
            self._last_progress = pct

    def mark_undo_checkpoint(self, label: str) -> None:
        self.undo_points.append(label)
        self._last_progress = -1

    # --- Styles and geometry -------------------------------------------------

    def style_by_name(self, name: str) -> pysubs2.SSAStyle | None:
        return self.subs.styles.get(name)

    def style_for_line(self, line: pysubs2.SSAEvent) -> pysubs2.SSAStyle:
        style = self.style_by_name(line.style)
        if style is None:
            style = self.style_by_name("Default")
        return style if style is not None else pysubs2.SSAStyle()

    def effective_margins(self, line: pysubs2.SSAEvent) -> Margins:
        style = self.style_for_line(line)
        vertical = line.marginv or style.marginv
        return Margins(
            left=line.marginl or style.marginl,
            right=line.marginr or style.marginr,
            top=vertical,
            bottom=vertical,
        )

    def frame_size(self) -> tuple[float, float]:
        width = float(self.config.get("frame_width", 0) or 0)
        height = float(self.config.get("frame_height", 0) or 0)
        if width > 0 and height > 0:
            return width, height
        return frame_size_from_info(self.subs.info)

    # --- Lines ---------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.subs.events)

    def get_line(self, index: int) -> pysubs2.SSAEvent:
        return self.subs.events[index]

    def set_line(self, index: int, line: pysubs2.SSAEvent) -> None:
        self.subs.events[index] = line

    def insert_line(self, index: int, line: pysubs2.SSAEvent) -> None:
        self.subs.events.insert(index, line)

    def copy_line(self, line: pysubs2.SSAEvent) -> pysubs2.SSAEvent:
        return line.copy()

    def has_line_property(self, name: str) -> bool:
        return name in LINE_PROPERTIES

    def get_line_property(self, line: pysubs2.SSAEvent, name: str) -> Any:
        attribute = LINE_PROPERTIES[name]
        if name == "comment":
            return line.type == "Comment"
        return getattr(line, attribute)

    def set_line_property(self, line: pysubs2.SSAEvent, name: str, value: Any) -> None:
        attribute = LINE_PROPERTIES[name]
        if name == "comment":
            line.type = "Comment" if value else "Dialogue"
        elif attribute in _INT_ATTRIBUTES:
            setattr(line, attribute, int(round(float(value))))
        else:
            setattr(line, attribute, str(value))

    # --- Selection helpers ---------------------------------------------------

    def lines_with_style(self, style_name: str) -> list[int]:
        return [index for index, event in enumerate(self.subs.events) if event.style == style_name]

    def all_lines(self) -> list[int]:
        return list(range(len(self.subs.events)))
