# ssi_core/__init__.py
"""
Section Script Interpreter core.

Runs a user script once per styled section of the selected lines of an
ASS/SSA subtitle document:
- tags: override-tag grammar, segmentation, state resolution, exclusion
- interpreter: sandbox, mutation API, deferred tasks, line/selection drivers
- subtitles: pysubs2-backed document host and the document operation
"""

__version__ = "0.3.0"
