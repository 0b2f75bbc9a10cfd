"""
ssi: command line front end for the section interpreter.
"""
from .cli import main

__all__ = ["main"]
