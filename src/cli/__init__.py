"""
Page object generator CLI.

Wraps the generation pipeline in a single command that writes the field
registry and page accessor modules for one page.
"""

from .app import main

__all__ = [
    "main",
]
