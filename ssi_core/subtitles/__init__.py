# ssi_core/subtitles/__init__.py
"""pysubs2 document host and the operations run against it."""

from .data import OperationRecord, OperationResult
from .document import SubtitleDocument, frame_size_from_info
from .operations import apply_section_script

__all__ = [
    'OperationRecord',
    'OperationResult',
    'SubtitleDocument',
    'apply_section_script',
    'frame_size_from_info',
]
