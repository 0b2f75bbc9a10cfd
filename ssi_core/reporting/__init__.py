# ssi_core/reporting/__init__.py
from .log_manager import LogManager

__all__ = ['LogManager']
