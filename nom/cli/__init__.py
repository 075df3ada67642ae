"""
nom CLI module.

This module provides the command-line interface for nom.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
