# ssi_core/subtitles/operations/__init__.py
from .section_script import apply_section_script

__all__ = ['apply_section_script']
