"""
Command-line interface for setup-taskfile.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
